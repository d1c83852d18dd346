"""
Thread Operations - Domain Logic Layer

Business logic over thread snapshots: touching, triage, resolution, merging
and status mapping. Built on the pure scoring and dedup algorithms.
Follows static method pattern: no instance state, `now` passed as parameter.
No persistence - callers load records, call these and store the results.
Inputs are never mutated; changed records come back as new copies.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Sequence

from threadkeeper.algos.dedup.text import normalize_text
from threadkeeper.algos.thread_scoring.lifecycle import (
    TERMINAL_STATUSES,
    LifecycleInput,
    compute_lifecycle_status,
    next_dormant_since,
)
from threadkeeper.algos.thread_scoring.vitality import elapsed_days
from threadkeeper.domain.exceptions import DomainValidationError
from threadkeeper.models.threads import (
    LifecycleStatus,
    RESOLVED_STATUS,
    ThreadRecord,
)

logger = logging.getLogger(__name__)

TRIAGE_BUCKETS = (
    LifecycleStatus.EMERGING.value,
    LifecycleStatus.ACTIVE.value,
    LifecycleStatus.COOLING.value,
    LifecycleStatus.DORMANT.value,
)


@dataclass(frozen=True)
class ThreadSummary:
    """One thread's health as shown in a triage report."""

    thread_id: str
    text: str
    lifecycle_status: str
    vitality_score: float
    thread_class: str
    days_since_touch: int
    dormant_days: Optional[int] = None


@dataclass
class TriageReport:
    """Open threads grouped by lifecycle status."""

    groups: dict[str, list[ThreadSummary]] = field(
        default_factory=lambda: {bucket: [] for bucket in TRIAGE_BUCKETS}
    )
    """Summaries per bucket (emerging/active/cooling/dormant)."""

    archived_ids: list[str] = field(default_factory=list)
    """Threads found eligible for archival (only filled with auto_archive)."""

    @property
    def summary(self) -> dict[str, int]:
        counts = {bucket: len(items) for bucket, items in self.groups.items()}
        counts["total_open"] = sum(counts.values())
        return counts

    @property
    def archived_count(self) -> int:
        return len(self.archived_ids)


class ThreadOperations:
    """
    Domain operations for thread records.

    Pattern: Static methods, sync operations, no persistence.
    """

    # ═══════════════════════════════════════════════════════════════════
    # Lifecycle
    # ═══════════════════════════════════════════════════════════════════

    @staticmethod
    def lifecycle_input(record: ThreadRecord) -> LifecycleInput:
        """Build the lifecycle input for a stored record."""
        return LifecycleInput(
            last_touched_at=record.last_touched_at,
            touch_count=record.touch_count,
            created_at=record.created_at,
            thread_class=record.thread_class,
            current_status=record.status,
            dormant_since=record.dormant_since,
        )

    @staticmethod
    def touch(record: ThreadRecord, now: datetime) -> ThreadRecord:
        """
        Register a reference to a thread at `now`.

        Increments touch_count, resets last_touched_at, recomputes status and
        vitality and advances the dormant_since watermark. Resolved and
        archived threads are returned unchanged.
        """
        if record.status in TERMINAL_STATUSES:
            return record

        touched = replace(
            record,
            touch_count=record.touch_count + 1,
            last_touched_at=now,
        )
        status, vitality = compute_lifecycle_status(
            ThreadOperations.lifecycle_input(touched), now
        )

        return replace(
            touched,
            status=status.value if isinstance(status, LifecycleStatus) else status,
            vitality_score=vitality.vitality_score,
            dormant_since=next_dormant_since(record.status, status, record.dormant_since, now),
        )

    @staticmethod
    def triage(
        records: Sequence[ThreadRecord],
        now: datetime,
        auto_archive: bool = False,
    ) -> TriageReport:
        """
        Group open threads by lifecycle status for a cleanup review.

        Resolved and already-archived records are ignored. Threads whose
        dormancy makes them archivable go to archived_ids when auto_archive
        is set, otherwise they stay in the dormant bucket.
        """
        report = TriageReport()

        for record in records:
            if record.status in TERMINAL_STATUSES:
                continue

            status, vitality = compute_lifecycle_status(
                ThreadOperations.lifecycle_input(record), now
            )

            if status == LifecycleStatus.ARCHIVED and auto_archive:
                report.archived_ids.append(record.id)
                continue

            dormant_days = None
            if status == LifecycleStatus.DORMANT and record.dormant_since:
                dormant_days = round(elapsed_days(record.dormant_since, now))

            bucket = LifecycleStatus.DORMANT if status == LifecycleStatus.ARCHIVED else status
            report.groups[bucket.value].append(
                ThreadSummary(
                    thread_id=record.id,
                    text=record.text,
                    lifecycle_status=status.value,
                    vitality_score=vitality.vitality_score,
                    thread_class=getattr(record.thread_class, "value", record.thread_class),
                    days_since_touch=round(max(elapsed_days(record.last_touched_at, now), 0.0)),
                    dormant_days=dormant_days,
                )
            )

        if report.archived_ids:
            logger.info(
                f"Triage marked {report.archived_count} dormant threads for archival: "
                f"{', '.join(report.archived_ids)}"
            )
        logger.info(f"Triage complete: {report.summary}")
        return report

    # ═══════════════════════════════════════════════════════════════════
    # Lookup & Resolution
    # ═══════════════════════════════════════════════════════════════════

    @staticmethod
    def find_by_id(threads: Sequence[ThreadRecord], thread_id: str) -> Optional[ThreadRecord]:
        """Find a thread by exact ID."""
        return next((t for t in threads if t.id == thread_id), None)

    @staticmethod
    def find_by_text(threads: Sequence[ThreadRecord], query: str) -> Optional[ThreadRecord]:
        """First thread whose text contains `query` (case-insensitive)."""
        needle = query.lower().strip()
        return next((t for t in threads if needle in t.text.lower()), None)

    @staticmethod
    def resolve(
        threads: Sequence[ThreadRecord],
        now: datetime,
        thread_id: Optional[str] = None,
        text_match: Optional[str] = None,
        session_id: Optional[str] = None,
        resolution_note: Optional[str] = None,
    ) -> tuple[list[ThreadRecord], Optional[ThreadRecord]]:
        """
        Resolve a thread selected by ID (preferred) or text match.

        Returns (updated thread list, resolved thread). The resolved thread is
        None if nothing matched. Already-resolved threads are returned as-is.
        Raises DomainValidationError if neither selector is given.
        """
        if not thread_id and not text_match:
            raise DomainValidationError("Either thread_id or text_match is required")

        if thread_id:
            target = ThreadOperations.find_by_id(threads, thread_id)
        else:
            target = ThreadOperations.find_by_text(threads, text_match)

        if target is None:
            return list(threads), None
        if target.status == RESOLVED_STATUS:
            return list(threads), target

        resolved = replace(
            target,
            status=RESOLVED_STATUS,
            resolved_at=now,
            resolved_by_session=session_id or target.resolved_by_session,
            resolution_note=resolution_note or target.resolution_note,
        )
        updated = [resolved if t is target else t for t in threads]
        return updated, resolved

    @staticmethod
    def merge_states(
        incoming: Sequence[ThreadRecord],
        current: Sequence[ThreadRecord],
    ) -> list[ThreadRecord]:
        """
        Merge an incoming thread list into the current one, preferring resolved state.

        - Same ID: the incoming copy wins only if it resolves an open thread
        - Different ID, same normalized text: treated as a duplicate; a
          resolution on the incoming copy is carried onto the existing thread
        - Otherwise: appended as a new thread
        """
        by_id: dict[str, ThreadRecord] = {}
        text_to_id: dict[str, str] = {}

        for thread in current:
            by_id[thread.id] = thread
            key = normalize_text(thread.text)
            if key and key not in text_to_id:
                text_to_id[key] = thread.id

        for thread in incoming:
            existing = by_id.get(thread.id)
            if existing is not None:
                if thread.status == RESOLVED_STATUS and existing.status != RESOLVED_STATUS:
                    by_id[thread.id] = thread
                continue

            key = normalize_text(thread.text)
            existing_id = text_to_id.get(key) if key else None
            if existing_id is not None:
                original = by_id[existing_id]
                if thread.status == RESOLVED_STATUS and original.status != RESOLVED_STATUS:
                    by_id[existing_id] = replace(
                        original,
                        status=RESOLVED_STATUS,
                        resolved_at=thread.resolved_at,
                        resolved_by_session=thread.resolved_by_session,
                        resolution_note=thread.resolution_note,
                    )
                continue

            by_id[thread.id] = thread
            if key:
                text_to_id[key] = thread.id

        return list(by_id.values())

    # ═══════════════════════════════════════════════════════════════════
    # Status Mapping
    # ═══════════════════════════════════════════════════════════════════

    @staticmethod
    def to_public_status(status: str) -> str:
        """Collapse lifecycle statuses into the public open/resolved view."""
        return RESOLVED_STATUS if status == RESOLVED_STATUS else "open"

    @staticmethod
    def from_public_status(status: str) -> str:
        """Map the public open/resolved view onto stored statuses; others pass through."""
        if status == "open":
            return LifecycleStatus.ACTIVE.value
        return status
