"""
Studio Admin Hub — Analytics Aggregator
=========================================

Turns flat visit, message and project rows into the series, rankings and
ratios shown on the analytics dashboard. Pure functions only: rows are
fetched elsewhere (see scripts/analytics/repository.py) and passed in.

Functions:
  visits_by_day()          - Zero-filled daily counts for a trailing window
  rank_categories()        - Top-N (label, count) ranking, stable on ties
  messages_by_service()    - Ranking of messages by requested service
  popular_pages()          - Ranking of visits by page
  conversion_rate()        - Messages per 100 visits
  completion_rate()        - Completed projects as a whole percentage
  daily_average()          - Per-day average over the window
  count_today()            - Records since local midnight
  count_this_month()       - Records since the first of the month
  message_status_counts()  - Inbox counters by status
  filter_messages()        - Status + free-text inbox filter
  build_dashboard_report() - All of the above for one window

Anything missing or malformed in the rows is replaced with a default
(fallback label, no timestamp) and never raises. "now" can be injected for
deterministic output; its timezone defines what "today" means and naive
values are taken as UTC.
"""
from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Iterable, List, Optional, Sequence

from models.analytics_models import (
    BackendRecord,
    CategoryCount,
    DashboardRates,
    DashboardReport,
    DashboardTotals,
    DayBucket,
    MessageRecord,
    MessageStats,
    ProjectRecord,
    VisitRecord,
)
from scripts.lib import settings

DEFAULT_SERVICE_LABEL = "general"
DEFAULT_PAGE_LABEL = "home"
COMPLETED_STATUS = "completed"
MESSAGE_STATUSES = ("new", "read", "replied", "archived")


# ─── Helpers ────────────────────────────────────────────────

def _as_records(rows: Optional[Iterable[Any]], record_cls) -> List[Any]:
    """Accept record instances or raw row dicts; None means no rows."""
    if not rows:
        return []
    return [r if isinstance(r, BackendRecord) else record_cls.from_row(r) for r in rows]


def _aware(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _resolve_now(now: Optional[datetime]) -> datetime:
    return _aware(now) if now is not None else datetime.now(timezone.utc)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO timestamp from the backend; None if missing or malformed."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return _aware(parsed)


def round_half_up(value: float, places: int = 0) -> float:
    """Round like a spreadsheet does (2.5 -> 3), not banker's rounding."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def default_day_label(day: date) -> str:
    return f"{day.strftime('%b')} {day.day}"


# ─── Time Series ────────────────────────────────────────────

def visits_by_day(
    visits: Optional[Sequence[Any]],
    days: int,
    now: Optional[datetime] = None,
    label_format: Optional[Callable[[date], str]] = None,
) -> List[DayBucket]:
    """
    Count visits per calendar day for the trailing `days` days.

    Always returns exactly `days` buckets, oldest first, with zero counts
    for days without visits. A visit belongs to a day when its stored
    timestamp starts with that day's ISO date.
    """
    if days <= 0:
        return []

    now = _resolve_now(now)
    label_format = label_format or default_day_label

    per_day = Counter(
        v.created_at[:10]
        for v in _as_records(visits, VisitRecord)
        if v.created_at
    )

    buckets = []
    for i in range(days - 1, -1, -1):
        day = (now - timedelta(days=i)).date()
        key = day.isoformat()
        buckets.append(
            DayBucket(day=key, label=label_format(day), count=per_day.get(key, 0))
        )
    return buckets


# ─── Rankings ───────────────────────────────────────────────

def rank_categories(
    labels: Iterable[Optional[str]],
    limit: Optional[int],
    fallback: str,
) -> List[CategoryCount]:
    """
    Count labels and return the top `limit` by count, highest first.

    Empty or missing labels are counted under `fallback`. Ties keep the
    order in which labels were first seen.
    """
    counts: dict = {}
    for label in labels:
        key = label or fallback
        counts[key] = counts.get(key, 0) + 1

    total = sum(counts.values())
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    if limit is not None:
        ranked = ranked[:max(limit, 0)]

    return [
        CategoryCount(
            label=label,
            count=count,
            share=round_half_up(count / total * 100, 1) if total else 0.0,
        )
        for label, count in ranked
    ]


def messages_by_service(
    messages: Optional[Sequence[Any]],
    limit: Optional[int] = None,
    fallback: str = DEFAULT_SERVICE_LABEL,
) -> List[CategoryCount]:
    if limit is None:
        limit = settings.TOP_SERVICES_LIMIT
    return rank_categories(
        (m.service for m in _as_records(messages, MessageRecord)), limit, fallback
    )


def popular_pages(
    visits: Optional[Sequence[Any]],
    limit: Optional[int] = None,
    fallback: str = DEFAULT_PAGE_LABEL,
) -> List[CategoryCount]:
    if limit is None:
        limit = settings.TOP_PAGES_LIMIT
    return rank_categories(
        (v.page for v in _as_records(visits, VisitRecord)), limit, fallback
    )


# ─── Ratios ─────────────────────────────────────────────────

def conversion_rate(messages: int, visits: int) -> float:
    """Messages as a percentage of visits, 2 decimals; 0 without visits."""
    if not visits:
        return 0.0
    return round_half_up(messages / visits * 100, 2)


def completion_rate(completed: int, total: int) -> int:
    """Completed projects as a whole percentage; 0 without projects."""
    if not total:
        return 0
    return int(round_half_up(completed / total * 100))


def daily_average(total: int, days: int) -> float:
    """Average per day over the window, 1 decimal; 0 for an empty window."""
    if not days:
        return 0.0
    return round_half_up(total / days, 1)


# ─── Period Filters ─────────────────────────────────────────

def count_between(
    records: Optional[Sequence[Any]], start: datetime, end: datetime
) -> int:
    """Records whose timestamp falls in [start, end). Unparseable ones are skipped."""
    start, end = _aware(start), _aware(end)
    count = 0
    for record in _as_records(records, VisitRecord):
        moment = parse_timestamp(record.created_at)
        if moment is not None and start <= moment < end:
            count += 1
    return count


def start_of_day(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_month(now: datetime) -> datetime:
    return start_of_day(now).replace(day=1)


def count_today(records, now: Optional[datetime] = None) -> int:
    now = _resolve_now(now)
    return count_between(records, start_of_day(now), now)


def count_this_month(records, now: Optional[datetime] = None) -> int:
    now = _resolve_now(now)
    return count_between(records, start_of_month(now), now)


# ─── Messages ───────────────────────────────────────────────

def message_status_counts(messages: Optional[Sequence[Any]]) -> MessageStats:
    """Inbox counters. Unknown statuses only add to the total."""
    records = _as_records(messages, MessageRecord)
    by_status = Counter(m.status for m in records)
    return MessageStats(
        total=len(records),
        **{status: by_status.get(status, 0) for status in MESSAGE_STATUSES},
    )


def filter_messages(
    messages: Optional[Sequence[Any]],
    status: Optional[str] = None,
    search: Optional[str] = None,
) -> List[MessageRecord]:
    """
    Filter the inbox by status and a case-insensitive search term.

    The term is matched against sender name, email and message body.
    A status of None or "all" keeps every message.
    """
    records = _as_records(messages, MessageRecord)
    if status and status != "all":
        records = [m for m in records if m.status == status]

    if search:
        term = search.lower()
        records = [
            m for m in records
            if any(term in (field or "").lower() for field in (m.name, m.email, m.message))
        ]
    return records


# ─── Dashboard ──────────────────────────────────────────────

def build_dashboard_report(
    visits: Optional[Sequence[Any]],
    messages: Optional[Sequence[Any]],
    projects: Optional[Sequence[Any]],
    blog_post_count: int = 0,
    days: Optional[int] = None,
    now: Optional[datetime] = None,
    service_limit: Optional[int] = None,
    page_limit: Optional[int] = None,
    label_format: Optional[Callable[[date], str]] = None,
) -> DashboardReport:
    """
    Aggregate one snapshot of backend rows into the dashboard report.

    Args:
        visits: site_analytics rows (records or dicts).
        messages: contact_messages rows.
        projects: projects rows.
        blog_post_count: Number of blog posts, shown as a total only.
        days: Trailing window length (default DEFAULT_WINDOW_DAYS).
        now: Reference time; defaults to the current UTC time.
        service_limit: Top-N for messages by service.
        page_limit: Top-N for popular pages.
        label_format: Day label formatter for the daily series.

    Returns:
        DashboardReport with totals, rates and chart series.
    """
    if days is None:
        days = settings.DEFAULT_WINDOW_DAYS
    days = max(days, 0)
    now = _resolve_now(now)

    visit_records = _as_records(visits, VisitRecord)
    message_records = _as_records(messages, MessageRecord)
    project_records = _as_records(projects, ProjectRecord)

    completed = sum(1 for p in project_records if p.status == COMPLETED_STATUS)

    totals = DashboardTotals(
        total_visits=len(visit_records),
        today_visits=count_today(visit_records, now),
        total_messages=len(message_records),
        messages_this_month=count_this_month(message_records, now),
        total_projects=len(project_records),
        projects_completed=completed,
        total_blog_posts=max(blog_post_count or 0, 0),
    )

    rates = DashboardRates(
        conversion_rate=conversion_rate(totals.total_messages, totals.total_visits),
        completion_rate=completion_rate(completed, totals.total_projects),
        daily_message_average=daily_average(totals.total_messages, days),
    )

    return DashboardReport(
        window_days=days,
        generated_at=now,
        totals=totals,
        rates=rates,
        visits_by_day=visits_by_day(visit_records, days, now, label_format),
        messages_by_service=messages_by_service(message_records, service_limit),
        popular_pages=popular_pages(visit_records, page_limit),
    )
