"""
Tests for the thread lifecycle state machine.

State machine:
    EMERGING (< 24h) → ACTIVE → COOLING → DORMANT → ARCHIVED (30+ days dormant)
    Any state → RESOLVED (handled externally)
"""
import pytest
from datetime import datetime
from typing import Optional

from threadkeeper.algos.thread_scoring import (
    LifecycleInput,
    compute_lifecycle_status,
    compute_vitality,
    next_dormant_since,
)
from threadkeeper.algos.thread_scoring.lifecycle import coerce_status
from threadkeeper.models.threads import LifecycleStatus, ThreadClass
from tests.conftest import NOW, days_ago, hours_ago


def make_lifecycle_input(
    last_touched_at: datetime = NOW,
    touch_count: int = 1,
    created_at: datetime = NOW,
    thread_class=ThreadClass.BACKLOG,
    current_status: str = "active",
    dormant_since: Optional[datetime] = None,
) -> LifecycleInput:
    return LifecycleInput(
        last_touched_at=last_touched_at,
        touch_count=touch_count,
        created_at=created_at,
        thread_class=thread_class,
        current_status=current_status,
        dormant_since=dormant_since,
    )


def stale_dormant_input(dormant_since: Optional[datetime]) -> LifecycleInput:
    """Old operational thread whose vitality alone says dormant."""
    return make_lifecycle_input(
        last_touched_at=days_ago(60),
        created_at=days_ago(90),
        thread_class=ThreadClass.OPERATIONAL,
        current_status="dormant",
        dormant_since=dormant_since,
    )


# ============================================================================
# Emerging window
# ============================================================================

class TestEmergingWindow:

    @pytest.mark.parametrize("touch_count", [0, 1, 50])
    @pytest.mark.parametrize("thread_class", [ThreadClass.OPERATIONAL, ThreadClass.BACKLOG])
    def test_one_hour_old_is_emerging(self, touch_count, thread_class):
        """A thread created an hour ago is emerging whatever its vitality."""
        status, _ = compute_lifecycle_status(
            make_lifecycle_input(
                created_at=hours_ago(1),
                last_touched_at=hours_ago(1),
                touch_count=touch_count,
                thread_class=thread_class,
            ),
            NOW,
        )

        assert status == LifecycleStatus.EMERGING

    def test_23_hours_is_still_emerging(self):
        status, _ = compute_lifecycle_status(
            make_lifecycle_input(created_at=hours_ago(23), last_touched_at=hours_ago(23)),
            NOW,
        )
        assert status == LifecycleStatus.EMERGING

    def test_exactly_24_hours_is_no_longer_emerging(self):
        """The emerging window excludes its upper bound."""
        status, vitality = compute_lifecycle_status(
            make_lifecycle_input(created_at=hours_ago(24), last_touched_at=hours_ago(24)),
            NOW,
        )

        assert status != LifecycleStatus.EMERGING
        assert status.value == vitality.status.value

    def test_25_hours_uses_vitality(self):
        """Past the window the vitality-derived status applies."""
        lifecycle_input = make_lifecycle_input(
            created_at=hours_ago(25), last_touched_at=hours_ago(25)
        )
        status, vitality = compute_lifecycle_status(lifecycle_input, NOW)

        assert status != LifecycleStatus.EMERGING
        assert status.value == vitality.status.value

    def test_emerging_overrides_dormant_status(self):
        """Even a stored dormant status is emerging while the thread is young."""
        status, _ = compute_lifecycle_status(
            make_lifecycle_input(
                created_at=hours_ago(2),
                current_status="dormant",
                dormant_since=days_ago(40),
            ),
            NOW,
        )
        assert status == LifecycleStatus.EMERGING


# ============================================================================
# Terminal states
# ============================================================================

class TestTerminalStates:

    def test_archived_is_returned_unchanged(self):
        """Archived stays archived even when vitality would say active."""
        lifecycle_input = make_lifecycle_input(
            created_at=days_ago(5), touch_count=20, current_status="archived"
        )
        status, vitality = compute_lifecycle_status(lifecycle_input, NOW)

        assert status == LifecycleStatus.ARCHIVED
        assert vitality.status.value == "active"

    def test_resolved_passes_through(self):
        status, _ = compute_lifecycle_status(
            make_lifecycle_input(created_at=days_ago(5), current_status="resolved"),
            NOW,
        )
        assert status == "resolved"

    def test_terminal_beats_emerging(self):
        status, _ = compute_lifecycle_status(
            make_lifecycle_input(created_at=hours_ago(1), current_status="resolved"),
            NOW,
        )
        assert status == "resolved"

    def test_vitality_still_computed(self):
        """Terminal statuses still report the vitality they ignore."""
        lifecycle_input = make_lifecycle_input(
            created_at=days_ago(5), last_touched_at=days_ago(2), current_status="archived"
        )
        _, vitality = compute_lifecycle_status(lifecycle_input, NOW)

        assert vitality == compute_vitality(lifecycle_input, NOW)


# ============================================================================
# Archival
# ============================================================================

class TestArchival:

    def test_dormant_30_days_is_archived(self):
        status, _ = compute_lifecycle_status(stale_dormant_input(days_ago(30)), NOW)
        assert status == LifecycleStatus.ARCHIVED

    def test_dormant_29_days_stays_dormant(self):
        status, _ = compute_lifecycle_status(stale_dormant_input(days_ago(29)), NOW)
        assert status == LifecycleStatus.DORMANT

    def test_dormant_without_watermark_skips_archival(self):
        status, _ = compute_lifecycle_status(stale_dormant_input(None), NOW)
        assert status == LifecycleStatus.DORMANT

    def test_archival_requires_dormant_current_status(self):
        """A watermark on a non-dormant status does not archive."""
        lifecycle_input = make_lifecycle_input(
            last_touched_at=days_ago(60),
            created_at=days_ago(90),
            thread_class=ThreadClass.OPERATIONAL,
            current_status="cooling",
            dormant_since=days_ago(45),
        )
        status, _ = compute_lifecycle_status(lifecycle_input, NOW)

        assert status == LifecycleStatus.DORMANT

    def test_archival_ignores_vitality(self):
        """A long-dormant watermark archives even if the thread looks lively again."""
        lifecycle_input = make_lifecycle_input(
            created_at=days_ago(60),
            touch_count=40,
            current_status="dormant",
            dormant_since=days_ago(31),
        )
        status, _ = compute_lifecycle_status(lifecycle_input, NOW)

        assert status == LifecycleStatus.ARCHIVED


# ============================================================================
# Default path and status coercion
# ============================================================================

class TestDefaultStatus:

    def test_unknown_current_status_uses_vitality(self):
        """Statuses the engine doesn't know (e.g. legacy "open") are not terminal."""
        status, vitality = compute_lifecycle_status(
            make_lifecycle_input(created_at=days_ago(3), current_status="open"),
            NOW,
        )
        assert status.value == vitality.status.value

    def test_enum_current_status_accepted(self):
        status, _ = compute_lifecycle_status(
            make_lifecycle_input(created_at=days_ago(5), current_status=LifecycleStatus.ARCHIVED),
            NOW,
        )
        assert status == LifecycleStatus.ARCHIVED

    def test_coerce_status(self):
        assert coerce_status("cooling") is LifecycleStatus.COOLING
        assert coerce_status("resolved") == "resolved"


# ============================================================================
# Dormancy watermark
# ============================================================================

class TestNextDormantSince:

    def test_entering_dormant_starts_watermark(self):
        assert next_dormant_since("cooling", LifecycleStatus.DORMANT, None, NOW) == NOW

    def test_staying_dormant_keeps_watermark(self):
        since = days_ago(12)
        assert next_dormant_since("dormant", LifecycleStatus.DORMANT, since, NOW) == since

    def test_leaving_dormant_clears_watermark(self):
        assert next_dormant_since("dormant", LifecycleStatus.ACTIVE, days_ago(12), NOW) is None

    def test_never_dormant_has_no_watermark(self):
        assert next_dormant_since("active", "cooling", None, NOW) is None
