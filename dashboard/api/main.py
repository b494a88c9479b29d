"""
Studio Admin Hub — API Server
===============================

Admin dashboard API over the Supabase backend: site analytics, the
contact message inbox, and editor helpers for blog posts.

Route groups:
  /api/health        - Health check
  /api/analytics/*   - Dashboard metrics and exports
  /api/messages/*    - Contact message inbox
  /api/auto-replies/* - Auto-reply templates
  /api/content/*     - Text metrics and SEO check
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dashboard.api.routers.analytics import router as analytics_router
from dashboard.api.routers.auto_replies import router as auto_replies_router
from dashboard.api.routers.content import router as content_router
from dashboard.api.routers.messages import router as messages_router
from scripts.lib import settings
from scripts.lib.logger import setup_logger
from scripts.lib.supabase_client import is_available

logger = setup_logger("admin_hub_api")

VERSION = "1.0.0"


# ─── Lifespan ─────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app):
    """Application startup and shutdown."""
    logger.info("Starting Studio Admin Hub...")

    if is_available():
        logger.info("Supabase connected")
    else:
        logger.warning("Supabase not configured; data endpoints will return 503")

    logger.info("Studio Admin Hub ready")
    yield
    logger.info("Shutting down Studio Admin Hub...")


# ─── App Setup ────────────────────────────────────────────────

app = FastAPI(
    title="Studio Admin Hub",
    version=VERSION,
    description="Content management dashboard: analytics, inbox and editor tools",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analytics_router)
app.include_router(messages_router)
app.include_router(auto_replies_router)
app.include_router(content_router)


# ─── Health ───────────────────────────────────────────────────

@app.get("/api/health", tags=["system"])
async def health():
    """Health check with backend status."""
    return {
        "status": "healthy",
        "service": "Studio Admin Hub",
        "version": VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "integrations": {
            "supabase": is_available(),
        },
    }
