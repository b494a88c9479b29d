"""
Studio Admin Hub — Content Router
===================================
Editor helpers for blog posts. Pure computation, no backend access.

Endpoints:
  POST /api/content/text-metrics  - Word/character/paragraph counts + reading time
  POST /api/content/seo-check     - SEO score for post metadata
"""
from __future__ import annotations

from fastapi import APIRouter

from models.content_models import (
    SEOCheckRequest,
    SEOReport,
    TextMetricsRequest,
    TextMetricsResponse,
)
from scripts.content.seo import evaluate_seo
from scripts.content.text_metrics import analyze_text, format_reading_time

router = APIRouter(prefix="/api/content", tags=["content"])


@router.post("/text-metrics", response_model=TextMetricsResponse)
async def text_metrics(req: TextMetricsRequest):
    """Metrics for an editor buffer, with the reading time as a phrase."""
    metrics = analyze_text(req.text)
    return TextMetricsResponse(
        **metrics.model_dump(),
        reading_time_label=format_reading_time(metrics.reading_time, req.locale),
    )


@router.post("/seo-check", response_model=SEOReport)
async def seo_check(req: SEOCheckRequest):
    return evaluate_seo(req.title, req.description, req.slug, req.keywords)
