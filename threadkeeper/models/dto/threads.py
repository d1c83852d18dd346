"""
Thread DTOs for the scoring and dedup endpoints.

Request models validate caller input (the engine itself is permissive);
read models mirror the engine's result types.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from threadkeeper.algos.dedup import DedupMethod, DedupResult, ThreadWithEmbedding
from threadkeeper.algos.thread_scoring import LifecycleInput, VitalityInput, VitalityResult
from threadkeeper.core.config import settings
from threadkeeper.domain.thread_operations import ThreadSummary, TriageReport
from threadkeeper.models.threads import ThreadClass, ThreadRecord, VitalityStatus

MAX_THREADS = settings.MAX_THREADS_PER_REQUEST


# ─────────────────────────────────────────────────────────────────
# Vitality & Lifecycle
# ─────────────────────────────────────────────────────────────────


class VitalityRequest(BaseModel):
    """Thread attributes to score."""

    last_touched_at: datetime = Field(description="Most recent time the thread was referenced")
    touch_count: int = Field(ge=0, description="Cumulative reference count")
    created_at: datetime = Field(description="Thread creation time")
    thread_class: ThreadClass = Field(
        default=ThreadClass.BACKLOG, description="Decay profile (operational/backlog)"
    )
    now: Optional[datetime] = Field(
        default=None, description="Reference time (default: server time in UTC)"
    )

    def to_input(self) -> VitalityInput:
        return VitalityInput(
            last_touched_at=self.last_touched_at,
            touch_count=self.touch_count,
            created_at=self.created_at,
            thread_class=self.thread_class,
        )


class VitalityRead(BaseModel):
    """Vitality score with its components (4 decimals)."""

    vitality_score: float
    status: VitalityStatus
    recency_component: float
    frequency_component: float

    @classmethod
    def from_result(cls, result: VitalityResult) -> "VitalityRead":
        return cls(
            vitality_score=result.vitality_score,
            status=result.status,
            recency_component=result.recency_component,
            frequency_component=result.frequency_component,
        )


class LifecycleRequest(VitalityRequest):
    """Thread attributes plus the caller's last-known status."""

    current_status: str = Field(
        default="active", description="Last stored status (unknown values pass through)"
    )
    dormant_since: Optional[datetime] = Field(
        default=None, description="When the thread first became dormant (if dormant)"
    )

    def to_input(self) -> LifecycleInput:
        return LifecycleInput(
            last_touched_at=self.last_touched_at,
            touch_count=self.touch_count,
            created_at=self.created_at,
            thread_class=self.thread_class,
            current_status=self.current_status,
            dormant_since=self.dormant_since,
        )


class LifecycleRead(BaseModel):
    """Lifecycle status and the vitality it was derived from."""

    lifecycle_status: str
    vitality: VitalityRead


class ClassifyRequest(BaseModel):
    text: str = Field(min_length=1, description="Thread text to classify")


class ClassifyRead(BaseModel):
    thread_class: ThreadClass


# ─────────────────────────────────────────────────────────────────
# Deduplication
# ─────────────────────────────────────────────────────────────────


class CandidateThread(BaseModel):
    """Existing thread offered as a duplicate candidate."""

    id: str = Field(description="Opaque thread handle")
    text: str = Field(description="Thread description")
    embedding: Optional[List[float]] = Field(
        default=None, description="L2-normalized embedding, or null when unavailable"
    )

    def to_candidate(self) -> ThreadWithEmbedding:
        return ThreadWithEmbedding(id=self.id, text=self.text, embedding=self.embedding)


class DedupCheckRequest(BaseModel):
    """Proposed thread checked against open threads."""

    text: str = Field(min_length=1, description="Proposed thread text")
    embedding: Optional[List[float]] = Field(
        default=None, description="L2-normalized embedding of text, or null"
    )
    existing: List[CandidateThread] = Field(default_factory=list, max_length=MAX_THREADS)


class DedupResultRead(BaseModel):
    """Duplicate verdict and the tier that decided it."""

    is_duplicate: bool
    method: DedupMethod
    matched_id: Optional[str] = None
    matched_text: Optional[str] = None
    similarity: Optional[float] = None

    @classmethod
    def from_result(cls, result: DedupResult) -> "DedupResultRead":
        return cls(
            is_duplicate=result.is_duplicate,
            method=result.method,
            matched_id=result.matched_id,
            matched_text=result.matched_text,
            similarity=result.similarity,
        )


class DedupListRequest(BaseModel):
    threads: List[CandidateThread] = Field(max_length=MAX_THREADS)


class DedupListRead(BaseModel):
    threads: List[CandidateThread]
    removed_count: int


# ─────────────────────────────────────────────────────────────────
# Thread Records
# ─────────────────────────────────────────────────────────────────


class ThreadPayload(BaseModel):
    """Stored thread snapshot as exchanged with callers."""

    model_config = {"from_attributes": True}

    id: str
    text: str
    created_at: datetime
    last_touched_at: datetime
    touch_count: int = Field(default=1, ge=0)
    thread_class: ThreadClass = ThreadClass.BACKLOG
    status: str = Field(default="active", description="Stored lifecycle status")
    vitality_score: float = Field(default=0.0, ge=0.0, le=1.0)
    dormant_since: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    resolution_note: Optional[str] = None
    source_session: Optional[str] = None
    resolved_by_session: Optional[str] = None

    def to_record(self) -> ThreadRecord:
        return ThreadRecord(**self.model_dump())


class TouchRequest(BaseModel):
    thread: ThreadPayload
    now: Optional[datetime] = None


class TriageRequest(BaseModel):
    threads: List[ThreadPayload] = Field(max_length=MAX_THREADS)
    auto_archive: bool = Field(
        default=False, description="Report threads dormant 30+ days as archived"
    )
    now: Optional[datetime] = None


class ThreadSummaryRead(BaseModel):
    model_config = {"from_attributes": True}

    thread_id: str
    text: str
    lifecycle_status: str
    vitality_score: float
    thread_class: str
    days_since_touch: int
    dormant_days: Optional[int] = None


class TriageReportRead(BaseModel):
    """Open threads grouped by lifecycle status."""

    summary: Dict[str, int]
    groups: Dict[str, List[ThreadSummaryRead]]
    archived_count: int
    archived_ids: List[str]

    @classmethod
    def from_report(cls, report: TriageReport) -> "TriageReportRead":
        return cls(
            summary=report.summary,
            groups={
                bucket: [_summary_read(item) for item in items]
                for bucket, items in report.groups.items()
            },
            archived_count=report.archived_count,
            archived_ids=report.archived_ids,
        )


class ResolveRequest(BaseModel):
    threads: List[ThreadPayload] = Field(max_length=MAX_THREADS)
    thread_id: Optional[str] = None
    text_match: Optional[str] = None
    session_id: Optional[str] = None
    resolution_note: Optional[str] = None
    now: Optional[datetime] = None


class ResolveRead(BaseModel):
    thread: ThreadPayload
    threads: List[ThreadPayload]


def _summary_read(summary: ThreadSummary) -> ThreadSummaryRead:
    return ThreadSummaryRead.model_validate(summary)
