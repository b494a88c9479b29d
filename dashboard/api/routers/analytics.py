"""
Studio Admin Hub — Analytics Router
=====================================
Dashboard metrics aggregated from raw visit, message and project rows.
Every request re-reads the tables and re-aggregates; nothing is cached.

Endpoints:
  GET /api/analytics/summary  - Totals, rates and chart series for a window
  GET /api/analytics/export   - Same report as a JSON or CSV download
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from dashboard.api.dependencies import get_repository
from models.analytics_models import DashboardReport
from scripts.analytics.aggregator import build_dashboard_report
from scripts.analytics.export import export_filename, render_report
from scripts.analytics.repository import AnalyticsRepository
from scripts.lib import settings
from scripts.lib.errors import DataFetchError, ExportError
from scripts.lib.logger import setup_logger

logger = setup_logger("analytics_router")

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


def load_report(repo: AnalyticsRepository, days: Optional[int]) -> DashboardReport:
    """Fetch a fresh snapshot of all tables and aggregate it."""
    days = days or settings.DEFAULT_WINDOW_DAYS
    report = build_dashboard_report(
        visits=repo.fetch_visits(),
        messages=repo.fetch_messages(),
        projects=repo.fetch_projects(),
        blog_post_count=repo.count_blog_posts(),
        days=days,
    )
    logger.info(
        "Dashboard report built: %d visits, %d messages over %d days",
        report.totals.total_visits, report.totals.total_messages, days,
    )
    return report


@router.get("/summary", response_model=DashboardReport)
async def analytics_summary(
    days: Optional[int] = Query(
        None, ge=1, le=settings.MAX_WINDOW_DAYS, description="Trailing window in days"
    ),
    repo: AnalyticsRepository = Depends(get_repository),
):
    """Aggregated dashboard metrics for the trailing window."""
    try:
        return load_report(repo, days)
    except DataFetchError as e:
        logger.error("Analytics summary failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch analytics")


@router.get("/export")
async def analytics_export(
    days: Optional[int] = Query(None, ge=1, le=settings.MAX_WINDOW_DAYS),
    format: str = Query("json", description="json or csv"),
    repo: AnalyticsRepository = Depends(get_repository),
):
    """Download the dashboard report."""
    try:
        report = load_report(repo, days)
        content, media_type = render_report(report, format)
    except ExportError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except DataFetchError as e:
        logger.error("Analytics export failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch analytics")

    filename = export_filename("analytics", format.lower())
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
