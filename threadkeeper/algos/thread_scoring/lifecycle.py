"""
Thread lifecycle state machine.

Wraps vitality scoring with age and dormancy rules:

    EMERGING (< 24h) → ACTIVE ⇄ COOLING → DORMANT → ARCHIVED (30+ days dormant)
    Any state → RESOLVED (caller-driven, never derived here)

Rules are evaluated in order; the first that applies wins:
1. Terminal: archived/resolved statuses are returned unchanged
2. Emerging: threads younger than 24 hours
3. Archival: dormant threads whose dormant_since watermark is 30+ days old
4. Default: the vitality-derived status
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import NamedTuple, Optional

from threadkeeper.algos.config import ARCHIVAL_DORMANT_DAYS, EMERGING_WINDOW_HOURS
from threadkeeper.algos.thread_scoring.vitality import (
    VitalityInput,
    VitalityResult,
    compute_vitality,
    elapsed_days,
)
from threadkeeper.models.threads import LifecycleStatus, RESOLVED_STATUS

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = frozenset({LifecycleStatus.ARCHIVED.value, RESOLVED_STATUS})


@dataclass(frozen=True)
class LifecycleInput(VitalityInput):
    """
    Vitality attributes plus the caller's last-known status.

    current_status is an open string: stored rows may carry statuses this
    engine does not derive (e.g. "resolved"), and those pass through.
    """

    current_status: str = LifecycleStatus.ACTIVE.value
    dormant_since: Optional[datetime] = None


class LifecycleResult(NamedTuple):
    """Lifecycle status with the vitality it was derived from."""

    lifecycle_status: LifecycleStatus | str
    vitality: VitalityResult


def compute_lifecycle_status(input: LifecycleInput, now: datetime) -> LifecycleResult:
    """
    Compute lifecycle status at reference time `now`.

    Vitality is always computed and returned, even when a terminal status
    or the emerging window overrides it.

    Args:
        input: Thread attributes plus current status and dormancy watermark
        now: Reference time; never read from the clock here

    Returns:
        LifecycleResult(lifecycle_status, vitality)
    """
    vitality = compute_vitality(input, now)
    current = _status_value(input.current_status)

    if current in TERMINAL_STATUSES:
        return LifecycleResult(coerce_status(current), vitality)

    if elapsed_days(input.created_at, now) * 24 < EMERGING_WINDOW_HOURS:
        return LifecycleResult(LifecycleStatus.EMERGING, vitality)

    if current == LifecycleStatus.DORMANT.value and input.dormant_since is not None:
        days_dormant = elapsed_days(input.dormant_since, now)
        if days_dormant >= ARCHIVAL_DORMANT_DAYS:
            logger.debug(
                f"Thread transitioning DORMANT → ARCHIVED "
                f"(dormant {days_dormant:.1f} days)"
            )
            return LifecycleResult(LifecycleStatus.ARCHIVED, vitality)

    return LifecycleResult(LifecycleStatus(vitality.status.value), vitality)


def next_dormant_since(
    previous_status: str,
    new_status: LifecycleStatus | str,
    dormant_since: Optional[datetime],
    now: datetime,
) -> Optional[datetime]:
    """
    Advance the dormant_since watermark that callers persist alongside a thread.

    - Entering dormant: watermark starts at `now`
    - Leaving dormant: watermark is cleared
    - Staying dormant: watermark is kept
    """
    if _status_value(new_status) != LifecycleStatus.DORMANT.value:
        return None
    if _status_value(previous_status) != LifecycleStatus.DORMANT.value:
        return now
    return dormant_since


def coerce_status(status: str) -> LifecycleStatus | str:
    """Return the LifecycleStatus member for `status`, or the raw string if unknown."""
    try:
        return LifecycleStatus(status)
    except ValueError:
        return status


def _status_value(status: LifecycleStatus | str) -> str:
    return status.value if isinstance(status, LifecycleStatus) else status
