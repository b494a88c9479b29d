"""Tests for dashboard aggregation."""

from datetime import datetime, timedelta, timezone

from models.analytics_models import MessageRecord, VisitRecord
from scripts.analytics.aggregator import (
    build_dashboard_report,
    completion_rate,
    conversion_rate,
    count_this_month,
    count_today,
    daily_average,
    filter_messages,
    message_status_counts,
    messages_by_service,
    parse_timestamp,
    popular_pages,
    rank_categories,
    round_half_up,
    visits_by_day,
)

NOW = datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc)


class TestRecords:
    def test_malformed_fields_become_none(self):
        visit = VisitRecord.from_row({"created_at": 12345, "page": ["x"], "extra": 1})
        assert visit.created_at is None
        assert visit.page is None

    def test_datetime_timestamp_is_normalised(self):
        visit = VisitRecord.from_row({"created_at": NOW})
        assert visit.created_at.startswith("2026-10-19T15:30")

    def test_non_dict_row(self):
        assert MessageRecord.from_row(None) == MessageRecord()


class TestVisitsByDay:
    def test_buckets_oldest_first_with_zero_fill(self):
        visits = [
            {"created_at": "2026-10-19T10:00:00+00:00"},
            {"created_at": "2026-10-19T23:00:00+00:00"},
            {"created_at": "2026-10-13T23:59:59+00:00"},
            {"created_at": "2026-10-12T08:00:00+00:00"},
            {"created_at": "not a date"},
            {"created_at": None},
        ]
        buckets = visits_by_day(visits, 7, now=NOW)

        assert len(buckets) == 7
        assert [b.day for b in buckets][0] == "2026-10-13"
        assert buckets[-1].day == "2026-10-19"
        assert buckets[0].count == 1
        assert buckets[-1].count == 2
        assert [b.count for b in buckets[1:-1]] == [0] * 5
        assert buckets[-1].label == "Oct 19"

    def test_empty_input_still_has_every_day(self):
        buckets = visits_by_day([], 7, now=NOW)
        assert len(buckets) == 7
        assert all(b.count == 0 for b in buckets)

    def test_none_input(self):
        assert len(visits_by_day(None, 30, now=NOW)) == 30

    def test_zero_days(self):
        assert visits_by_day([{"created_at": "2026-10-19"}], 0, now=NOW) == []

    def test_custom_label_format(self):
        buckets = visits_by_day([], 2, now=NOW, label_format=lambda d: d.strftime("%d/%m"))
        assert [b.label for b in buckets] == ["18/10", "19/10"]

    def test_crosses_month_boundary(self):
        now = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)
        days = [b.day for b in visits_by_day([], 3, now=now)]
        assert days == ["2026-02-28", "2026-03-01", "2026-03-02"]


class TestRankings:
    def test_top_two_by_count(self):
        ranked = messages_by_service(
            [{"service": "web"}, {"service": "web"}, {"service": "design"}], limit=2
        )
        assert [(r.label, r.count) for r in ranked] == [("web", 2), ("design", 1)]

    def test_ties_keep_encounter_order(self):
        ranked = messages_by_service([{"service": "a"}, {"service": "b"}], limit=5)
        assert [(r.label, r.count) for r in ranked] == [("a", 1), ("b", 1)]

    def test_ties_after_higher_count(self):
        ranked = rank_categories(["x", "y", "z", "z", "y"], limit=None, fallback="-")
        assert [r.label for r in ranked] == ["y", "z", "x"]

    def test_missing_labels_use_fallback(self):
        ranked = messages_by_service([{"service": None}, {"service": ""}, {}])
        assert [(r.label, r.count) for r in ranked] == [("general", 3)]

    def test_popular_pages_fallback_and_limit(self):
        visits = [{"page": f"/p{i}"} for i in range(10)] + [{"page": None}] * 3
        ranked = popular_pages(visits, limit=5)
        assert len(ranked) == 5
        assert ranked[0].label == "home"
        assert ranked[0].count == 3

    def test_share_percentages(self):
        ranked = rank_categories(["web", "web", "design"], limit=None, fallback="-")
        assert ranked[0].share == 66.7
        assert ranked[1].share == 33.3

    def test_empty(self):
        assert rank_categories([], limit=5, fallback="-") == []

    def test_zero_limit(self):
        assert rank_categories(["a"], limit=0, fallback="-") == []


class TestRatios:
    def test_conversion_rate_without_visits(self):
        assert conversion_rate(messages=5, visits=0) == 0

    def test_conversion_rate_two_decimals(self):
        assert conversion_rate(1, 3) == 33.33

    def test_completion_rate_without_projects(self):
        assert completion_rate(completed=0, total=0) == 0

    def test_completion_rate_rounds_half_up(self):
        assert completion_rate(1, 8) == 13
        assert completion_rate(2, 3) == 67

    def test_daily_average(self):
        assert daily_average(10, 7) == 1.4
        assert daily_average(3, 2) == 1.5
        assert daily_average(3, 0) == 0

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.125, 2) == 0.13


class TestPeriodFilters:
    def test_today_is_midnight_to_now(self):
        records = [
            {"created_at": "2026-10-19T00:00:00+00:00"},
            {"created_at": "2026-10-19T08:00:00"},
            {"created_at": "2026-10-18T23:59:59+00:00"},
            {"created_at": "2026-10-19T16:00:00+00:00"},
            {"created_at": "garbage"},
        ]
        assert count_today(records, now=NOW) == 2

    def test_today_follows_callers_timezone(self):
        riyadh = timezone(timedelta(hours=3))
        now = datetime(2026, 10, 19, 1, 0, tzinfo=riyadh)
        records = [
            {"created_at": "2026-10-18T21:30:00Z"},
            {"created_at": "2026-10-18T20:59:00Z"},
        ]
        assert count_today(records, now=now) == 1

    def test_this_month(self):
        records = [
            MessageRecord(created_at="2026-10-01T00:00:00+00:00"),
            MessageRecord(created_at="2026-09-30T23:59:00+00:00"),
            MessageRecord(created_at="2026-10-15T12:00:00+00:00"),
        ]
        assert count_this_month(records, now=NOW) == 2

    def test_parse_timestamp(self):
        assert parse_timestamp("2026-10-19T08:00:00Z") == datetime(
            2026, 10, 19, 8, tzinfo=timezone.utc
        )
        assert parse_timestamp("") is None
        assert parse_timestamp("yesterday") is None


class TestMessages:
    MESSAGES = [
        {"status": "new", "name": "Sara", "email": "SARA@example.com", "message": "hi"},
        {"status": "new", "name": "Omar", "email": "omar@example.com", "message": "quote"},
        {"status": "read", "name": "Lina", "email": "lina@studio.io", "message": "Logo"},
        {"status": "replied"},
        {"status": "archived"},
        {"status": "spam"},
        {},
    ]

    def test_status_counts(self):
        stats = message_status_counts(self.MESSAGES)
        assert stats.total == 7
        assert stats.new == 2
        assert stats.read == 1
        assert stats.replied == 1
        assert stats.archived == 1

    def test_status_counts_empty(self):
        assert message_status_counts([]).total == 0

    def test_filter_all(self):
        assert len(filter_messages(self.MESSAGES, status="all")) == 7

    def test_filter_status(self):
        assert len(filter_messages(self.MESSAGES, status="new")) == 2

    def test_search_is_case_insensitive(self):
        found = filter_messages(self.MESSAGES, search="sara@")
        assert [m.name for m in found] == ["Sara"]

    def test_search_message_body(self):
        found = filter_messages(self.MESSAGES, search="LOGO")
        assert [m.name for m in found] == ["Lina"]


class TestDashboardReport:
    def test_empty_inputs(self):
        report = build_dashboard_report([], [], [], days=7, now=NOW)
        assert report.totals.total_visits == 0
        assert report.rates.conversion_rate == 0
        assert report.rates.completion_rate == 0
        assert report.rates.daily_message_average == 0
        assert len(report.visits_by_day) == 7
        assert all(b.count == 0 for b in report.visits_by_day)
        assert report.messages_by_service == []
        assert report.popular_pages == []

    def test_none_inputs(self):
        report = build_dashboard_report(None, None, None, days=14, now=NOW)
        assert len(report.visits_by_day) == 14

    def test_full_report(self, sample_tables):
        report = build_dashboard_report(
            sample_tables["site_analytics"],
            sample_tables["contact_messages"],
            sample_tables["projects"],
            blog_post_count=2,
            days=7,
            now=NOW,
        )
        totals = report.totals
        assert totals.total_visits == 4
        assert totals.today_visits == 2
        assert totals.total_messages == 3
        assert totals.messages_this_month == 2
        assert totals.total_projects == 3
        assert totals.projects_completed == 2
        assert totals.total_blog_posts == 2

        assert report.rates.conversion_rate == 75.0
        assert report.rates.completion_rate == 67
        assert report.rates.daily_message_average == 0.4

        assert [(c.label, c.count) for c in report.messages_by_service] == [
            ("web", 2), ("design", 1),
        ]
        assert report.popular_pages[0].label == "/services"
        assert report.visits_by_day[-1].count == 2
        assert report.visits_by_day[-2].count == 1
        assert report.generated_at == NOW

    def test_idempotent(self, sample_tables):
        args = (
            sample_tables["site_analytics"],
            sample_tables["contact_messages"],
            sample_tables["projects"],
        )
        first = build_dashboard_report(*args, blog_post_count=2, days=30, now=NOW)
        second = build_dashboard_report(*args, blog_post_count=2, days=30, now=NOW)
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()
