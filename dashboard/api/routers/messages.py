"""
Studio Admin Hub — Messages Router
====================================
Contact form inbox: listing, counters, CSV export, status changes and deletion.

Endpoints:
  GET   /api/messages                 - List messages (status + search filters)
  GET   /api/messages/stats           - Counters by status
  GET   /api/messages/export          - CSV download of the filtered inbox
  PATCH /api/messages/{id}/status     - Change a message's status
  POST  /api/messages/{id}/reply      - Mark a message as replied
  DELETE /api/messages/{id}           - Delete a message
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from dashboard.api.dependencies import get_repository
from models.analytics_models import (
    MessageReplyRequest,
    MessageStats,
    MessageStatusUpdate,
)
from scripts.analytics.aggregator import filter_messages, message_status_counts
from scripts.analytics.export import MEDIA_TYPES, export_filename, messages_to_csv
from scripts.analytics.repository import AnalyticsRepository
from scripts.lib.errors import DataFetchError, DataWriteError
from scripts.lib.logger import setup_logger

logger = setup_logger("messages_router")

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.get("")
async def list_messages(
    status: Optional[str] = Query(None, description="new, read, replied, archived or all"),
    search: Optional[str] = Query(None, description="Match name, email or message text"),
    repo: AnalyticsRepository = Depends(get_repository),
):
    """List inbox messages, newest first."""
    try:
        messages = filter_messages(repo.fetch_messages(status), status, search)
    except DataFetchError as e:
        logger.error("List messages failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch messages")
    return {
        "results": [m.model_dump() for m in messages],
        "count": len(messages),
    }


@router.get("/stats", response_model=MessageStats)
async def message_stats(repo: AnalyticsRepository = Depends(get_repository)):
    """Counters over the whole inbox, regardless of filters."""
    try:
        return message_status_counts(repo.fetch_messages())
    except DataFetchError as e:
        logger.error("Message stats failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch message stats")


@router.get("/export")
async def export_messages(
    status: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    repo: AnalyticsRepository = Depends(get_repository),
):
    try:
        messages = filter_messages(repo.fetch_messages(status), status, search)
    except DataFetchError as e:
        logger.error("Message export failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch messages")

    filename = export_filename("messages", "csv")
    return Response(
        content=messages_to_csv(messages),
        media_type=MEDIA_TYPES["csv"],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.patch("/{message_id}/status")
async def update_status(
    message_id: str,
    body: MessageStatusUpdate,
    repo: AnalyticsRepository = Depends(get_repository),
):
    try:
        row = repo.update_message_status(message_id, body.status)
    except DataWriteError as e:
        logger.error("Status update failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to update message")
    if not row:
        raise HTTPException(status_code=404, detail="Message not found")
    return row


@router.post("/{message_id}/reply")
async def reply_to_message(
    message_id: str,
    body: MessageReplyRequest,
    repo: AnalyticsRepository = Depends(get_repository),
):
    """
    Mark a message as replied and store staff notes.

    Sending the reply email itself is handled outside this service; only
    the inbox state is updated here.
    """
    try:
        row = repo.mark_replied(message_id, notes=body.notes)
    except DataWriteError as e:
        logger.error("Reply update failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to record reply")
    if not row:
        raise HTTPException(status_code=404, detail="Message not found")
    logger.info("Reply recorded for message %s (%d chars)", message_id, len(body.reply))
    return {"status": "replied", "id": message_id, "replied_at": row.get("replied_at")}


@router.delete("/{message_id}")
async def delete_message(
    message_id: str,
    repo: AnalyticsRepository = Depends(get_repository),
):
    try:
        deleted = repo.delete_message(message_id)
    except DataWriteError as e:
        logger.error("Message delete failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to delete message")
    if not deleted:
        raise HTTPException(status_code=404, detail="Message not found")
    return {"status": "deleted", "id": message_id}
