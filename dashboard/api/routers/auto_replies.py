"""
Studio Admin Hub — Auto-Replies Router
========================================
Reply templates sent to contact form senders, one or more per service type.

Endpoints:
  GET    /api/auto-replies              - List templates with active/inactive counts
  POST   /api/auto-replies              - Create a template
  PUT    /api/auto-replies/{id}         - Update template fields
  DELETE /api/auto-replies/{id}         - Delete a template
  POST   /api/auto-replies/{id}/toggle  - Flip is_active
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from dashboard.api.dependencies import get_repository
from models.analytics_models import AutoReplyCreate, AutoReplyUpdate
from scripts.analytics.repository import AnalyticsRepository
from scripts.lib.errors import DataFetchError, DataWriteError
from scripts.lib.logger import setup_logger

logger = setup_logger("auto_replies_router")

router = APIRouter(prefix="/api/auto-replies", tags=["auto-replies"])


@router.get("")
async def list_auto_replies(repo: AnalyticsRepository = Depends(get_repository)):
    """All templates, newest first."""
    try:
        replies = repo.fetch_auto_replies()
    except DataFetchError as e:
        logger.error("List auto-replies failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch auto-replies")

    active = sum(1 for r in replies if r.is_active)
    return {
        "results": [r.model_dump() for r in replies],
        "count": len(replies),
        "active": active,
        "inactive": len(replies) - active,
    }


@router.post("", status_code=201)
async def create_auto_reply(
    body: AutoReplyCreate,
    repo: AnalyticsRepository = Depends(get_repository),
):
    try:
        return repo.create_auto_reply(body.model_dump())
    except DataWriteError as e:
        logger.error("Create auto-reply failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to create auto-reply")


@router.put("/{reply_id}")
async def update_auto_reply(
    reply_id: str,
    body: AutoReplyUpdate,
    repo: AnalyticsRepository = Depends(get_repository),
):
    updates = body.model_dump(exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    try:
        row = repo.update_auto_reply(reply_id, updates)
    except DataWriteError as e:
        logger.error("Update auto-reply failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to update auto-reply")
    if not row:
        raise HTTPException(status_code=404, detail="Auto-reply not found")
    return row


@router.delete("/{reply_id}")
async def delete_auto_reply(
    reply_id: str,
    repo: AnalyticsRepository = Depends(get_repository),
):
    try:
        deleted = repo.delete_auto_reply(reply_id)
    except DataWriteError as e:
        logger.error("Delete auto-reply failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to delete auto-reply")
    if not deleted:
        raise HTTPException(status_code=404, detail="Auto-reply not found")
    return {"status": "deleted", "id": reply_id}


@router.post("/{reply_id}/toggle")
async def toggle_auto_reply(
    reply_id: str,
    repo: AnalyticsRepository = Depends(get_repository),
):
    try:
        row = repo.toggle_auto_reply(reply_id)
    except (DataFetchError, DataWriteError) as e:
        logger.error("Toggle auto-reply failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to toggle auto-reply")
    if not row:
        raise HTTPException(status_code=404, detail="Auto-reply not found")
    return row
