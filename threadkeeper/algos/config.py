"""
Thread Engine Constants

Fixed parameters for vitality scoring, lifecycle transitions and duplicate
detection. These values are part of the engine contract (stored scores and
statuses must stay reproducible), so they are not read from the environment.
"""


# ============================================================================
# Vitality Scoring
# ============================================================================

RECENCY_WEIGHT = 0.55
"""Weight of the recency component (0.30 renormalized over 0.55)."""

FREQUENCY_WEIGHT = 0.45
"""Weight of the frequency component (0.25 renormalized over 0.55)."""

OPERATIONAL_HALF_LIFE_DAYS = 3.0
"""Half-life for short-lived operational threads."""

BACKLOG_HALF_LIFE_DAYS = 21.0
"""Half-life for long-running backlog threads (also the fallback)."""

MIN_DAYS_ALIVE = 0.01
"""Floor on thread age so brand-new threads don't divide by log(1) = 0."""

ACTIVE_THRESHOLD = 0.5
"""Vitality strictly above this is "active"."""

COOLING_THRESHOLD = 0.2
"""Vitality at or above this (and not active) is "cooling"; below is "dormant"."""

SCORE_DECIMALS = 4
"""Every returned real-valued score is rounded to this many decimals."""

OPERATIONAL_KEYWORDS = (
    "deploy", "fix", "debug", "hotfix", "urgent", "broken",
    "failing", "revert", "rollback", "incident", "outage",
    "blocker", "unblock", "investigate",
)
"""Substrings that mark a thread as operational when classifying text."""


# ============================================================================
# Lifecycle
# ============================================================================

EMERGING_WINDOW_HOURS = 24
"""New threads are "emerging" until they are this old."""

ARCHIVAL_DORMANT_DAYS = 30
"""Days of continuous dormancy before a thread is archived."""


# ============================================================================
# Deduplication
# ============================================================================

DEDUP_SIMILARITY_THRESHOLD = 0.85
"""Cosine similarity above which two embedded threads are duplicates."""

TOKEN_OVERLAP_THRESHOLD = 0.6
"""Overlap coefficient above which two threads are duplicates."""

TOKEN_OVERLAP_ISSUE_PREFIX_THRESHOLD = 0.4
"""Relaxed overlap threshold when both threads share an issue prefix (e.g. OD-692)."""

STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "is", "it", "be", "as", "was", "are",
    "been", "being", "have", "has", "had", "do", "does", "did", "will",
    "that", "this", "not", "no", "so", "if", "its", "also", "into",
    "than", "then", "can", "just", "about", "up", "out", "still",
})
"""Words ignored when tokenizing thread text for overlap comparison."""
