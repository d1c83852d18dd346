"""
Thread vitality algorithm.

Computes how "alive" a thread is from two factors:
- recency: exponential decay since the thread was last touched
- frequency: log-scaled touch count normalized against thread age

Formula: vitality = 0.55 × recency + 0.45 × frequency

The weights are renormalized from a four-factor model whose importance and
relevance factors are not computed here.

Score ranges from 0.0 (forgotten) to 1.0 (fresh and frequently touched).
"""

from dataclasses import dataclass
from datetime import datetime, timezone
import math

from threadkeeper.algos.config import (
    ACTIVE_THRESHOLD,
    BACKLOG_HALF_LIFE_DAYS,
    COOLING_THRESHOLD,
    FREQUENCY_WEIGHT,
    MIN_DAYS_ALIVE,
    OPERATIONAL_HALF_LIFE_DAYS,
    OPERATIONAL_KEYWORDS,
    RECENCY_WEIGHT,
)
from threadkeeper.algos.rounding import round_score
from threadkeeper.models.threads import ThreadClass, VitalityStatus

SECONDS_PER_DAY = 86400

HALF_LIVES: dict[str, float] = {
    ThreadClass.OPERATIONAL.value: OPERATIONAL_HALF_LIFE_DAYS,
    ThreadClass.BACKLOG.value: BACKLOG_HALF_LIFE_DAYS,
}


@dataclass(frozen=True)
class VitalityInput:
    """Attributes of a thread needed to score it."""

    last_touched_at: datetime
    touch_count: int
    created_at: datetime
    thread_class: ThreadClass | str = ThreadClass.BACKLOG


@dataclass(frozen=True)
class VitalityResult:
    """Vitality score, its status bucket and the two components (all 4 dp)."""

    vitality_score: float
    status: VitalityStatus
    recency_component: float
    frequency_component: float


def compute_vitality(input: VitalityInput, now: datetime) -> VitalityResult:
    """
    Compute vitality for a thread at reference time `now`.

    Args:
        input: Thread attributes (last touch, touch count, creation, class)
        now: Reference time; never read from the clock here

    Returns:
        VitalityResult with every number rounded to 4 decimals

    Examples:
        - touched now, created now, 1 touch → ~1.0 (active)
        - backlog thread untouched for 21 days → recency 0.5
    """
    recency = compute_recency(input.last_touched_at, input.thread_class, now)
    frequency = compute_frequency(input.touch_count, input.created_at, now)

    score = RECENCY_WEIGHT * recency + FREQUENCY_WEIGHT * frequency
    score = max(0.0, min(1.0, score))

    return VitalityResult(
        vitality_score=round_score(score),
        status=vitality_to_status(score),
        recency_component=round_score(recency),
        frequency_component=round_score(frequency),
    )


def compute_recency(
    last_touched_at: datetime,
    thread_class: ThreadClass | str,
    now: datetime,
) -> float:
    """
    Exponential decay since last touch: e^(-ln2 × days / half_life).

    Unknown thread classes use the backlog half-life. Touches in the future
    count as "just now" (1.0).
    """
    days_since_touch = max(elapsed_days(last_touched_at, now), 0.0)
    half_life = half_life_for(thread_class)

    return math.exp(-math.log(2) * days_since_touch / half_life)


def compute_frequency(touch_count: int, created_at: datetime, now: datetime) -> float:
    """
    Touches relative to age: log(touch_count + 1) / log(days_alive + 1), capped at 1.0.

    days_alive is floored at 0.01 so threads created "now" stay finite.
    Negative touch counts count as zero.
    """
    days_alive = max(elapsed_days(created_at, now), MIN_DAYS_ALIVE)
    touches = max(touch_count, 0)

    return min(math.log(touches + 1) / math.log(days_alive + 1), 1.0)


def vitality_to_status(score: float) -> VitalityStatus:
    """Map a vitality score to active (> 0.5), cooling (0.2-0.5) or dormant (< 0.2)."""
    if score > ACTIVE_THRESHOLD:
        return VitalityStatus.ACTIVE
    if score >= COOLING_THRESHOLD:
        return VitalityStatus.COOLING
    return VitalityStatus.DORMANT


def half_life_for(thread_class: ThreadClass | str) -> float:
    key = thread_class.value if isinstance(thread_class, ThreadClass) else thread_class
    return HALF_LIVES.get(key, BACKLOG_HALF_LIFE_DAYS)


def detect_thread_class(text: str) -> ThreadClass:
    """Classify thread text as operational if it mentions urgent-work keywords."""
    lower = text.lower()
    for keyword in OPERATIONAL_KEYWORDS:
        if keyword in lower:
            return ThreadClass.OPERATIONAL
    return ThreadClass.BACKLOG


def elapsed_days(start: datetime, end: datetime) -> float:
    """Signed days from `start` to `end`. Naive datetimes are treated as UTC."""
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    if end.tzinfo is None:
        end = end.replace(tzinfo=timezone.utc)

    return (end - start).total_seconds() / SECONDS_PER_DAY
