"""
Analytics Report Export
=======================
Fetches site analytics, messages and projects from Supabase, aggregates
them into the dashboard report, and writes it to disk.

Usage:
    python scripts/generate_analytics_report.py                  # 7-day JSON
    python scripts/generate_analytics_report.py --days 30 --format csv
    python scripts/generate_analytics_report.py --messages       # also export inbox CSV
    python scripts/generate_analytics_report.py --output data/exports
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Allow running as a plain script from the project root
BASE_DIR = Path(__file__).resolve().parent.parent
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from scripts.analytics.aggregator import build_dashboard_report  # noqa: E402
from scripts.analytics.export import (  # noqa: E402
    export_filename,
    messages_to_csv,
    render_report,
)
from scripts.analytics.repository import AnalyticsRepository  # noqa: E402
from scripts.lib import settings  # noqa: E402
from scripts.lib.errors import HubError  # noqa: E402
from scripts.lib.logger import setup_logger  # noqa: E402
from scripts.lib.utils import atomic_write_text, ensure_directory  # noqa: E402

logger = setup_logger("generate_analytics_report")


def generate(
    repo: AnalyticsRepository,
    output_dir: Path,
    days: int,
    fmt: str = "json",
    include_messages: bool = False,
) -> List[Path]:
    """
    Build the report and write it (and optionally the inbox) to output_dir.

    Returns:
        Paths of the files written.
    """
    messages = repo.fetch_messages()
    report = build_dashboard_report(
        visits=repo.fetch_visits(),
        messages=messages,
        projects=repo.fetch_projects(),
        blog_post_count=repo.count_blog_posts(),
        days=days,
    )
    content, _ = render_report(report, fmt)

    ensure_directory(output_dir)
    written = []

    report_path = output_dir / export_filename("analytics", fmt)
    if atomic_write_text(content, report_path):
        logger.info("Wrote %s", report_path)
        written.append(report_path)

    if include_messages:
        messages_path = output_dir / export_filename("messages", "csv")
        if atomic_write_text(messages_to_csv(messages), messages_path):
            logger.info("Wrote %s (%d messages)", messages_path, len(messages))
            written.append(messages_path)

    return written


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Export the analytics dashboard report")
    parser.add_argument("--days", type=int, default=settings.DEFAULT_WINDOW_DAYS,
                        help="Trailing window in days (default: %(default)s)")
    parser.add_argument("--format", choices=["json", "csv"], default="json",
                        help="Report format")
    parser.add_argument("--output", type=Path, default=settings.EXPORT_DIR,
                        help="Output directory")
    parser.add_argument("--messages", action="store_true",
                        help="Also export the message inbox as CSV")
    args = parser.parse_args(argv)

    if args.days < 1:
        parser.error("--days must be at least 1")

    logger.info("=== Analytics Report Export ===")
    logger.info("Window: %d days | Format: %s | Output: %s",
                args.days, args.format, args.output)

    try:
        from scripts.lib.supabase_client import get_client
        repo = AnalyticsRepository(get_client())
        written = generate(repo, args.output, args.days, args.format, args.messages)
    except HubError as e:
        logger.error("Export failed: %s", e)
        return 1

    logger.info("=== Export complete: %d file(s) ===", len(written))
    return 0 if written else 1


if __name__ == "__main__":
    sys.exit(main())
