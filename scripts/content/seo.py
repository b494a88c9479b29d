"""
Studio Admin Hub — SEO Check
==============================

Scores blog post metadata against four basic search-listing checks:

  title        1-60 characters (longer titles get cut off in results)
  description  1-160 characters
  slug         non-empty
  keywords     at least one comma-separated keyword

Score is the percentage of checks passed; grade is "good" from 75,
"fair" from 50, otherwise "poor".
"""
from __future__ import annotations

from typing import List

from models.content_models import SEOReport

TITLE_MAX_LENGTH = 60
DESCRIPTION_MAX_LENGTH = 160


def parse_keywords(keywords: str | None) -> List[str]:
    """Split a comma separated keyword string, dropping blanks."""
    if not keywords:
        return []
    return [k.strip() for k in keywords.split(",") if k.strip()]


def grade_for(score: int) -> str:
    if score >= 75:
        return "good"
    if score >= 50:
        return "fair"
    return "poor"


def evaluate_seo(
    title: str | None = "",
    description: str | None = "",
    slug: str | None = "",
    keywords: str | None = "",
) -> SEOReport:
    title = title or ""
    description = description or ""
    slug = slug or ""
    keyword_list = parse_keywords(keywords)

    checks = {
        "title_ok": 0 < len(title) <= TITLE_MAX_LENGTH,
        "description_ok": 0 < len(description) <= DESCRIPTION_MAX_LENGTH,
        "slug_ok": len(slug) > 0,
        "keywords_ok": bool(keyword_list),
    }
    score = round(sum(checks.values()) / len(checks) * 100)

    return SEOReport(
        **checks,
        keywords=keyword_list,
        score=score,
        grade=grade_for(score),
    )
