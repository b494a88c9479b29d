"""
Studio Admin Hub — Analytics Repository
=========================================

Reads and updates the backend tables behind the dashboard. The Supabase
client is passed in, so the API, the CLI and tests can each supply their
own (tests use an in-memory fake).

Tables:
  site_analytics    - one row per page visit (created_at, page)
  contact_messages  - contact form inbox (created_at, service, status, ...)
  projects          - portfolio projects (status)
  blog_posts        - only counted
  auto_replies      - reply templates per service type

Usage:
    from scripts.lib.supabase_client import get_client
    from scripts.analytics.repository import AnalyticsRepository

    repo = AnalyticsRepository(get_client())
    visits = repo.fetch_visits()
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from models.analytics_models import (
    AutoReply,
    MessageRecord,
    ProjectRecord,
    VisitRecord,
)
from scripts.lib.errors import DataFetchError, DataWriteError
from scripts.lib.logger import setup_logger

logger = setup_logger("analytics_repository")

VISITS_TABLE = "site_analytics"
MESSAGES_TABLE = "contact_messages"
PROJECTS_TABLE = "projects"
BLOG_POSTS_TABLE = "blog_posts"
AUTO_REPLIES_TABLE = "auto_replies"

# PostgREST caps a single response, so larger tables are read in pages
PAGE_SIZE = 1000

# Unique column every paged read ends its ORDER BY with
ROW_KEY = "id"


class AnalyticsRepository:
    """Backend access for analytics, the message inbox and auto-replies."""

    def __init__(self, client, page_size: int = PAGE_SIZE):
        self.client = client
        self.page_size = page_size

    # ─── Reads ──────────────────────────────────────────────

    def _fetch_all(
        self,
        table: str,
        select: str = "*",
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        desc: bool = False,
    ) -> List[Dict]:
        """
        Fetch every row of a table, page by page.

        Each page request carries the same total order (order_by, then the
        row key) so consecutive ranges neither overlap nor skip rows.
        """
        rows: List[Dict] = []
        offset = 0
        try:
            while True:
                query = self.client.table(table).select(select)
                for col, val in (filters or {}).items():
                    query = query.eq(col, val)
                if order_by and order_by != ROW_KEY:
                    query = query.order(order_by, desc=desc)
                query = query.order(ROW_KEY, desc=desc and order_by == ROW_KEY)
                result = query.range(offset, offset + self.page_size - 1).execute()
                page = result.data or []
                rows.extend(page)
                if len(page) < self.page_size:
                    break
                offset += self.page_size
        except Exception as e:
            logger.error("Supabase query failed on %s: %s", table, e)
            raise DataFetchError(f"Failed to read {table}: {e}", source=table) from e

        logger.debug("Fetched %d rows from %s", len(rows), table)
        return rows

    def _fetch_row(self, table: str, row_id: str) -> Dict:
        try:
            result = (
                self.client.table(table)
                .select("*")
                .eq(ROW_KEY, row_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("Supabase lookup failed on %s/%s: %s", table, row_id, e)
            raise DataFetchError(f"Failed to read {table} row {row_id}: {e}", source=table) from e
        return result.data[0] if result.data else {}

    def fetch_visits(self) -> List[VisitRecord]:
        rows = self._fetch_all(VISITS_TABLE, select="created_at, page")
        return [VisitRecord.from_row(r) for r in rows]

    def fetch_messages(self, status: Optional[str] = None) -> List[MessageRecord]:
        """Inbox rows, newest first. A status other than None/"all" filters server-side."""
        filters = {"status": status} if status and status != "all" else None
        rows = self._fetch_all(
            MESSAGES_TABLE, filters=filters, order_by="created_at", desc=True,
        )
        return [MessageRecord.from_row(r) for r in rows]

    def fetch_projects(self) -> List[ProjectRecord]:
        rows = self._fetch_all(PROJECTS_TABLE, select="status")
        return [ProjectRecord.from_row(r) for r in rows]

    def count_blog_posts(self) -> int:
        try:
            result = (
                self.client.table(BLOG_POSTS_TABLE)
                .select("id", count="exact")
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("Blog post count failed: %s", e)
            raise DataFetchError(
                f"Failed to count {BLOG_POSTS_TABLE}: {e}", source=BLOG_POSTS_TABLE
            ) from e

        if result.count is not None:
            return result.count
        return len(result.data or [])

    def fetch_auto_replies(self) -> List[AutoReply]:
        """Reply templates, newest first."""
        rows = self._fetch_all(AUTO_REPLIES_TABLE, order_by="created_at", desc=True)
        return [AutoReply.from_row(r) for r in rows]

    # ─── Writes ─────────────────────────────────────────────

    def _write_failed(self, action: str, table: str, row_id: Optional[str], e: Exception):
        logger.error("%s failed on %s/%s: %s", action, table, row_id, e)
        return DataWriteError(
            f"Failed to {action.lower()} {table} row {row_id}: {e}",
            source=table, row_id=row_id,
        )

    def _insert_row(self, table: str, values: Dict[str, Any]) -> Dict:
        try:
            result = self.client.table(table).insert(values).execute()
        except Exception as e:
            raise self._write_failed("Insert", table, None, e) from e
        if not result.data:
            raise DataWriteError(f"Insert into {table} returned no row", source=table)
        row = result.data[0]
        logger.info("Created %s row %s", table, row.get(ROW_KEY))
        return row

    def _update_row(self, table: str, row_id: str, values: Dict[str, Any]) -> Dict:
        """Update one row by key. Returns the updated row, or {} if no row matched."""
        try:
            result = self.client.table(table).update(values).eq(ROW_KEY, row_id).execute()
        except Exception as e:
            raise self._write_failed("Update", table, row_id, e) from e

        if not result.data:
            return {}
        logger.info("Updated %s row %s: %s", table, row_id, ", ".join(values))
        return result.data[0]

    def _delete_row(self, table: str, row_id: str) -> bool:
        try:
            result = self.client.table(table).delete().eq(ROW_KEY, row_id).execute()
        except Exception as e:
            raise self._write_failed("Delete", table, row_id, e) from e

        deleted = bool(result.data)
        if deleted:
            logger.info("Deleted %s row %s", table, row_id)
        return deleted

    def update_message_status(self, message_id: str, status: str) -> Dict:
        """Set a message's status. Returns the updated row, or {} if no row matched."""
        return self._update_row(MESSAGES_TABLE, message_id, {"status": status})

    def mark_replied(
        self,
        message_id: str,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Dict:
        """Record a reply: status "replied", reply time, and optional staff notes."""
        replied_at = (now or datetime.now(timezone.utc)).isoformat()
        return self._update_row(MESSAGES_TABLE, message_id, {
            "status": "replied",
            "replied_at": replied_at,
            "notes": notes or None,
        })

    def delete_message(self, message_id: str) -> bool:
        """Remove a message from the inbox. False if no row matched."""
        return self._delete_row(MESSAGES_TABLE, message_id)

    def create_auto_reply(self, values: Dict[str, Any]) -> Dict:
        return self._insert_row(AUTO_REPLIES_TABLE, values)

    def update_auto_reply(self, reply_id: str, values: Dict[str, Any]) -> Dict:
        return self._update_row(AUTO_REPLIES_TABLE, reply_id, values)

    def delete_auto_reply(self, reply_id: str) -> bool:
        return self._delete_row(AUTO_REPLIES_TABLE, reply_id)

    def toggle_auto_reply(self, reply_id: str) -> Dict:
        """Flip a template's is_active flag. Returns {} if the template does not exist."""
        current = self._fetch_row(AUTO_REPLIES_TABLE, reply_id)
        if not current:
            return {}
        return self._update_row(
            AUTO_REPLIES_TABLE, reply_id, {"is_active": not current.get("is_active")},
        )
