"""
Studio Admin Hub — Analytics Pydantic Models
==============================================

Record types for rows fetched from the backend (site visits, contact
messages, projects, auto-reply templates) and the response shapes of the
analytics dashboard.

Backend rows are loosely shaped. Every record field is optional and
malformed values are replaced with None instead of failing validation,
so aggregation never has to guard against missing keys.
"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, Field


def _text_or_none(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _timestamp_or_none(value: Any) -> Optional[str]:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, str):
        return value
    return None


def _flag_or_none(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _int_or_none(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


OptionalText = Annotated[Optional[str], BeforeValidator(_text_or_none)]
OptionalTimestamp = Annotated[Optional[str], BeforeValidator(_timestamp_or_none)]
OptionalFlag = Annotated[Optional[bool], BeforeValidator(_flag_or_none)]
OptionalInt = Annotated[Optional[int], BeforeValidator(_int_or_none)]


# ─── Backend Records ────────────────────────────────────────

class BackendRecord(BaseModel):
    """Base for backend rows: unknown columns are ignored."""

    @classmethod
    def from_row(cls, row: Any):
        """Build a record from a raw row dict; anything else gives an empty record."""
        if not isinstance(row, dict):
            return cls()
        return cls.model_validate(row)


class VisitRecord(BackendRecord):
    """A page view from the site_analytics table."""
    created_at: OptionalTimestamp = None
    page: OptionalText = None


class MessageRecord(BackendRecord):
    """An inbound contact form message from contact_messages."""
    id: OptionalText = None
    created_at: OptionalTimestamp = None
    service: OptionalText = None
    status: OptionalText = None
    name: OptionalText = None
    email: OptionalText = None
    phone: OptionalText = None
    message: OptionalText = None
    replied_at: OptionalTimestamp = None
    notes: OptionalText = None


class ProjectRecord(BackendRecord):
    """A portfolio project row; only the status matters for analytics."""
    status: OptionalText = None


class AutoReply(BackendRecord):
    """A reply template from auto_replies, sent for one service type."""
    id: OptionalText = None
    service_type: OptionalText = None
    subject: OptionalText = None
    message_template: OptionalText = None
    is_active: OptionalFlag = None
    delay_minutes: OptionalInt = None
    created_at: OptionalTimestamp = None


# ─── Dashboard Output ───────────────────────────────────────

class DayBucket(BaseModel):
    """Visit count for one calendar day."""
    day: str = Field(description="ISO date used for matching (YYYY-MM-DD)")
    label: str = Field(description="Short display label, e.g. 'Oct 19'")
    count: int = 0


class CategoryCount(BaseModel):
    """One row of a top-N ranking."""
    label: str
    count: int = 0
    share: float = Field(0.0, description="Percent of all ranked records")


class DashboardTotals(BaseModel):
    total_visits: int = 0
    today_visits: int = 0
    total_messages: int = 0
    messages_this_month: int = 0
    total_projects: int = 0
    projects_completed: int = 0
    total_blog_posts: int = 0


class DashboardRates(BaseModel):
    conversion_rate: float = 0.0
    completion_rate: int = 0
    daily_message_average: float = 0.0


class DashboardReport(BaseModel):
    """Everything the analytics dashboard renders for one window."""
    window_days: int
    generated_at: datetime
    totals: DashboardTotals = Field(default_factory=DashboardTotals)
    rates: DashboardRates = Field(default_factory=DashboardRates)
    visits_by_day: List[DayBucket] = Field(default_factory=list)
    messages_by_service: List[CategoryCount] = Field(default_factory=list)
    popular_pages: List[CategoryCount] = Field(default_factory=list)


# ─── Messages ───────────────────────────────────────────────

class MessageStats(BaseModel):
    """Inbox counters by message status."""
    total: int = 0
    new: int = 0
    read: int = 0
    replied: int = 0
    archived: int = 0


class MessageStatusUpdate(BaseModel):
    status: str = Field(..., pattern="^(new|read|replied|archived)$")


class MessageReplyRequest(BaseModel):
    reply: str = Field(..., min_length=1)
    notes: Optional[str] = None


# ─── Auto Replies ───────────────────────────────────────────

class AutoReplyCreate(BaseModel):
    service_type: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    message_template: str = Field(..., min_length=1)
    is_active: bool = True
    delay_minutes: int = Field(0, ge=0)


class AutoReplyUpdate(BaseModel):
    service_type: Optional[str] = Field(None, min_length=1)
    subject: Optional[str] = Field(None, min_length=1)
    message_template: Optional[str] = Field(None, min_length=1)
    is_active: Optional[bool] = None
    delay_minutes: Optional[int] = Field(None, ge=0)
