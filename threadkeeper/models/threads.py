"""Thread value types shared by the scoring engine and domain operations."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class ThreadClass(str, Enum):
    """Decay profile of a thread."""
    OPERATIONAL = "operational"   # Short-lived, urgent work
    BACKLOG = "backlog"           # Long-running concerns


class VitalityStatus(str, Enum):
    """Status derived from vitality score alone."""
    ACTIVE = "active"
    COOLING = "cooling"
    DORMANT = "dormant"


class LifecycleStatus(str, Enum):
    """Lifecycle states derived from vitality plus age and dormancy rules."""
    EMERGING = "emerging"     # Younger than the emerging window
    ACTIVE = "active"
    COOLING = "cooling"
    DORMANT = "dormant"
    ARCHIVED = "archived"     # Terminal: dormant for too long


RESOLVED_STATUS = "resolved"
"""Terminal status owned by callers; never derived by the engine."""


@dataclass(frozen=True)
class ThreadRecord:
    """
    Snapshot of a stored thread.

    The engine never persists these; callers load them, pass them through
    domain operations and write back whatever comes out.
    """

    id: str
    text: str
    created_at: datetime
    last_touched_at: datetime
    touch_count: int = 1
    thread_class: ThreadClass = ThreadClass.BACKLOG
    status: str = LifecycleStatus.ACTIVE.value
    vitality_score: float = 0.0
    dormant_since: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    resolution_note: Optional[str] = None
    source_session: Optional[str] = None
    resolved_by_session: Optional[str] = None
