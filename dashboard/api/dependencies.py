"""
Studio Admin Hub — API Dependencies
=====================================
Per-request providers injected into routers with FastAPI's Depends.
Tests swap these out through app.dependency_overrides.
"""
from __future__ import annotations

from fastapi import HTTPException

from scripts.analytics.repository import AnalyticsRepository
from scripts.lib.errors import ConfigError
from scripts.lib.logger import setup_logger
from scripts.lib.supabase_client import get_client

logger = setup_logger("api_dependencies")


def get_repository() -> AnalyticsRepository:
    """Repository bound to the shared Supabase client."""
    try:
        return AnalyticsRepository(get_client())
    except ConfigError as e:
        logger.error("Backend not configured: %s", e)
        raise HTTPException(status_code=503, detail="Backend not configured")
