"""
Studio Admin Hub — Exports
============================

Downloadable JSON/CSV renderings of the dashboard report and the message
inbox. Used by the API export endpoints and the report CLI.

Functions:
  report_to_dict()   - Export payload for a DashboardReport
  report_to_json()   - Pretty-printed JSON
  report_to_csv()    - Daily visit series as CSV
  messages_to_csv()  - Inbox as CSV
  render_report()    - (content, media type) for a format name
  export_filename()  - "analytics-2024-05-01.json" style names
"""
from __future__ import annotations

import csv
import io
import json
from datetime import date
from typing import Any, Dict, Optional, Sequence, Tuple

from models.analytics_models import DashboardReport, MessageRecord
from scripts.analytics.aggregator import parse_timestamp
from scripts.lib.errors import ExportError

MEDIA_TYPES = {
    "json": "application/json",
    "csv": "text/csv; charset=utf-8",
}

MESSAGE_CSV_HEADERS = ["Name", "Email", "Phone", "Service", "Message", "Status", "Date"]

# Spreadsheet tools need the BOM to detect UTF-8 (Arabic names, etc.)
CSV_BOM = "\ufeff"


def report_to_dict(report: DashboardReport) -> Dict[str, Any]:
    data = report.model_dump(mode="json")
    return {
        "generated_at": data["generated_at"],
        "window_days": data["window_days"],
        "summary": {
            "total_visits": data["totals"]["total_visits"],
            "total_messages": data["totals"]["total_messages"],
            "total_projects": data["totals"]["total_projects"],
            "total_blog_posts": data["totals"]["total_blog_posts"],
        },
        "rates": data["rates"],
        "visits_by_day": data["visits_by_day"],
        "messages_by_service": data["messages_by_service"],
        "popular_pages": data["popular_pages"],
    }


def report_to_json(report: DashboardReport) -> str:
    return json.dumps(report_to_dict(report), ensure_ascii=False, indent=2)


def report_to_csv(report: DashboardReport) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["day", "label", "visits"])
    for bucket in report.visits_by_day:
        writer.writerow([bucket.day, bucket.label, bucket.count])
    return buf.getvalue()


def messages_to_csv(messages: Sequence[MessageRecord], bom: bool = True) -> str:
    """Inbox as CSV. Values are quoted as needed, so commas in messages are safe."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(MESSAGE_CSV_HEADERS)
    for m in messages:
        sent = parse_timestamp(m.created_at)
        writer.writerow([
            m.name or "",
            m.email or "",
            m.phone or "",
            m.service or "",
            m.message or "",
            m.status or "",
            sent.date().isoformat() if sent else "",
        ])
    content = buf.getvalue()
    return CSV_BOM + content if bom else content


def render_report(report: DashboardReport, fmt: str) -> Tuple[str, str]:
    """Render a report as (content, media_type) for "json" or "csv"."""
    fmt = (fmt or "").lower()
    if fmt == "json":
        return report_to_json(report), MEDIA_TYPES["json"]
    if fmt == "csv":
        return report_to_csv(report), MEDIA_TYPES["csv"]
    raise ExportError(f"Unsupported export format: {fmt!r}", export_format=fmt)


def export_filename(kind: str, fmt: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"{kind}-{today.isoformat()}.{fmt}"
