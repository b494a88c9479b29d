"""
Studio Admin Hub — Content Pydantic Models
============================================

Text metrics for the post editor and the SEO check for post metadata.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


# ─── Text Metrics ───────────────────────────────────────────

class TextMetrics(BaseModel):
    """Derived counts for a block of (possibly HTML) text."""
    word_count: int = 0
    character_count: int = 0
    paragraph_count: int = 0
    reading_time: int = Field(1, ge=1, description="Minutes, never below 1")


class ReadingTimePhrases(BaseModel):
    """Phrases for the three reading-time cases of one locale."""
    less_than_minute: str
    one_minute: str
    many_minutes: str = Field(description="Template with a {minutes} placeholder")


class TextMetricsRequest(BaseModel):
    text: Optional[str] = None
    locale: str = "en"


class TextMetricsResponse(TextMetrics):
    reading_time_label: str


# ─── SEO ────────────────────────────────────────────────────

class SEOCheckRequest(BaseModel):
    title: str = ""
    description: str = ""
    slug: str = ""
    keywords: str = Field("", description="Comma separated keywords")


class SEOReport(BaseModel):
    title_ok: bool
    description_ok: bool
    slug_ok: bool
    keywords_ok: bool
    keywords: List[str] = Field(default_factory=list)
    score: int = Field(0, ge=0, le=100)
    grade: str = "poor"
