"""Shared fixtures: an in-memory stand-in for the Supabase table client."""

import os
import random
from datetime import datetime, timezone

os.environ.setdefault("LOG_TO_FILE", "false")

import pytest  # noqa: E402


class FakeResult:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    """
    Chainable query mimicking the subset of postgrest used by the repository.

    Like PostgREST, a read without .order() has no defined row order: each
    such request returns the matching rows in a different shuffled order.
    """

    def __init__(self, client, table):
        self.client = client
        self.table_name = table
        self._filters = []
        self._orders = []
        self._range = None
        self._limit = None
        self._update = None
        self._insert = None
        self._delete = False
        self._count = None

    def select(self, columns="*", count=None):
        self._count = count
        return self

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self._orders.append((column, desc))
        return self

    def range(self, start, end):
        self._range = (start, end)
        return self

    def limit(self, n):
        self._limit = n
        return self

    def update(self, values):
        self._update = values
        return self

    def insert(self, values):
        self._insert = values
        return self

    def delete(self):
        self._delete = True
        return self

    def execute(self):
        self.client.calls.append(self.table_name)
        if self.table_name in self.client.fail_tables:
            raise RuntimeError("connection refused")

        table = self.client.tables.setdefault(self.table_name, [])

        if self._insert is not None:
            row = dict(self._insert)
            row.setdefault("id", f"{self.table_name}-{len(table) + 1}")
            table.append(row)
            return FakeResult([dict(row)])

        rows = [
            r for r in table
            if all(r.get(col) == val for col, val in self._filters)
        ]

        if self._delete:
            self.client.tables[self.table_name] = [r for r in table if r not in rows]
            return FakeResult([dict(r) for r in rows])

        if self._update is not None:
            for r in rows:
                r.update(self._update)
            return FakeResult([dict(r) for r in rows])

        total = len(rows)
        if self._orders:
            # Sort by the last key first so earlier keys take precedence
            for column, desc in reversed(self._orders):
                rows = sorted(rows, key=lambda r: _sort_key(r.get(column)), reverse=desc)
        else:
            random.Random(len(self.client.calls)).shuffle(rows)
        if self._range:
            start, end = self._range
            rows = rows[start:end + 1]
        if self._limit is not None:
            rows = rows[:self._limit]
        count = total if self._count == "exact" else None
        return FakeResult([dict(r) for r in rows], count)


def _sort_key(value):
    return (value is None, "" if value is None else value)


class FakeSupabase:
    def __init__(self, tables=None, fail_tables=()):
        self.tables = tables or {}
        self.fail_tables = set(fail_tables)
        self.calls = []

    def table(self, name):
        return FakeQuery(self, name)


NOW = datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def sample_tables():
    return {
        "site_analytics": [
            {"id": 1, "created_at": "2026-10-19T09:00:00+00:00", "page": "/services"},
            {"id": 2, "created_at": "2026-10-19T10:00:00+00:00", "page": "/services"},
            {"id": 3, "created_at": "2026-10-18T12:00:00+00:00", "page": "/blog"},
            {"id": 4, "created_at": "2026-10-01T08:00:00+00:00", "page": None},
        ],
        "contact_messages": [
            {
                "id": "m1", "created_at": "2026-10-19T11:00:00+00:00",
                "name": "Sara Ali", "email": "sara@example.com", "phone": "0500000000",
                "service": "web", "message": "Need a new website", "status": "new",
            },
            {
                "id": "m2", "created_at": "2026-10-10T11:00:00+00:00",
                "name": "Omar", "email": "omar@example.com",
                "service": "design", "message": "Logo, colours and brand kit",
                "status": "read",
            },
            {
                "id": "m3", "created_at": "2026-09-28T11:00:00+00:00",
                "name": "Lina", "email": "lina@studio.io",
                "service": "web", "message": "Follow-up on quote", "status": "replied",
            },
        ],
        "projects": [
            {"id": 1, "status": "completed"},
            {"id": 2, "status": "in_progress"},
            {"id": 3, "status": "completed"},
        ],
        "blog_posts": [{"id": 1}, {"id": 2}],
        "auto_replies": [
            {
                "id": "a1", "service_type": "web", "subject": "Thanks for reaching out",
                "message_template": "Hi {name}, we got your request.",
                "is_active": True, "delay_minutes": 0,
                "created_at": "2026-10-01T08:00:00+00:00",
            },
            {
                "id": "a2", "service_type": "design", "subject": "Design enquiry",
                "message_template": "Hi {name}, a designer will follow up.",
                "is_active": False, "delay_minutes": 30,
                "created_at": "2026-10-05T08:00:00+00:00",
            },
        ],
    }


@pytest.fixture
def fake_client(sample_tables):
    return FakeSupabase(sample_tables)


@pytest.fixture
def make_client():
    """Factory for fake clients with custom tables or failing tables."""
    return FakeSupabase
