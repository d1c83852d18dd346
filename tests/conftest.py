"""
Pytest configuration and shared helpers.

All engine tests run against a fixed reference time so results are
reproducible; nothing here reads the clock.
"""
from datetime import datetime, timedelta, timezone

from threadkeeper.models.threads import ThreadClass, ThreadRecord


NOW = datetime(2026, 2, 10, 12, 0, tzinfo=timezone.utc)


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


def hours_ago(hours: float) -> datetime:
    return NOW - timedelta(hours=hours)


def make_record(**overrides) -> ThreadRecord:
    """Thread record created 10 days ago and touched now, with overrides."""
    fields = {
        "id": "t-0000aaaa",
        "text": "Investigate flaky session close",
        "created_at": days_ago(10),
        "last_touched_at": NOW,
        "touch_count": 1,
        "thread_class": ThreadClass.BACKLOG,
        "status": "active",
    }
    fields.update(overrides)
    return ThreadRecord(**fields)
