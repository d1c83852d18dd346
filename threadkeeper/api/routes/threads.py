"""
Thread scoring and deduplication API routes.

Stateless endpoints over the engine: callers send thread snapshots and get
scores, statuses and duplicate verdicts back. Nothing is stored.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter

from threadkeeper.algos.dedup import check_duplicate, deduplicate_list
from threadkeeper.algos.thread_scoring import (
    compute_lifecycle_status,
    compute_vitality,
    detect_thread_class,
)
from threadkeeper.domain.exceptions import EntityNotFoundError
from threadkeeper.domain.thread_operations import ThreadOperations
from threadkeeper.models.dto.threads import (
    ClassifyRead,
    ClassifyRequest,
    DedupCheckRequest,
    DedupListRead,
    DedupListRequest,
    DedupResultRead,
    LifecycleRead,
    LifecycleRequest,
    ResolveRead,
    ResolveRequest,
    ThreadPayload,
    TouchRequest,
    TriageReportRead,
    TriageRequest,
    VitalityRead,
    VitalityRequest,
)

router = APIRouter(prefix="/threads", tags=["threads"])


def _reference_time(now: Optional[datetime]) -> datetime:
    """Caller-supplied reference time, or the current UTC time."""
    return now or datetime.now(timezone.utc)


# ─────────────────────────────────────────────────────────────────
# Scoring
# ─────────────────────────────────────────────────────────────────


@router.post("/vitality", response_model=VitalityRead)
async def score_vitality(request: VitalityRequest) -> VitalityRead:
    """Compute vitality (recency + frequency) for one thread."""
    result = compute_vitality(request.to_input(), _reference_time(request.now))
    return VitalityRead.from_result(result)


@router.post("/lifecycle", response_model=LifecycleRead)
async def score_lifecycle(request: LifecycleRequest) -> LifecycleRead:
    """
    Compute lifecycle status for one thread.

    Archived and resolved statuses are returned unchanged. Threads younger
    than 24 hours are emerging. Dormant threads with a dormant_since 30+
    days old are archived.
    """
    status, vitality = compute_lifecycle_status(
        request.to_input(), _reference_time(request.now)
    )
    return LifecycleRead(
        lifecycle_status=str(getattr(status, "value", status)),
        vitality=VitalityRead.from_result(vitality),
    )


@router.post("/classify", response_model=ClassifyRead)
async def classify_thread(request: ClassifyRequest) -> ClassifyRead:
    """Classify thread text as operational or backlog."""
    return ClassifyRead(thread_class=detect_thread_class(request.text))


# ─────────────────────────────────────────────────────────────────
# Deduplication
# ─────────────────────────────────────────────────────────────────


@router.post("/dedup/check", response_model=DedupResultRead)
async def check_thread_duplicate(request: DedupCheckRequest) -> DedupResultRead:
    """Check whether a proposed thread duplicates an existing one."""
    result = check_duplicate(
        request.text,
        request.embedding,
        [candidate.to_candidate() for candidate in request.existing],
    )
    return DedupResultRead.from_result(result)


@router.post("/dedup/list", response_model=DedupListRead)
async def deduplicate_threads(request: DedupListRequest) -> DedupListRead:
    """Remove duplicates from a thread list (first-seen wins, order kept)."""
    kept = deduplicate_list(request.threads)
    return DedupListRead(threads=kept, removed_count=len(request.threads) - len(kept))


# ─────────────────────────────────────────────────────────────────
# Thread Records
# ─────────────────────────────────────────────────────────────────


@router.post("/touch", response_model=ThreadPayload)
async def touch_thread(request: TouchRequest) -> ThreadPayload:
    """Register a reference to a thread and return its updated snapshot."""
    touched = ThreadOperations.touch(request.thread.to_record(), _reference_time(request.now))
    return ThreadPayload.model_validate(touched)


@router.post("/triage", response_model=TriageReportRead)
async def triage_threads(request: TriageRequest) -> TriageReportRead:
    """Group open threads by lifecycle status for cleanup review."""
    report = ThreadOperations.triage(
        [thread.to_record() for thread in request.threads],
        _reference_time(request.now),
        auto_archive=request.auto_archive,
    )
    return TriageReportRead.from_report(report)


@router.post("/resolve", response_model=ResolveRead)
async def resolve_thread(request: ResolveRequest) -> ResolveRead:
    """
    Resolve a thread selected by ID or text match.

    Returns 400 if neither selector is given, 404 if nothing matches.
    """
    threads, resolved = ThreadOperations.resolve(
        [thread.to_record() for thread in request.threads],
        _reference_time(request.now),
        thread_id=request.thread_id,
        text_match=request.text_match,
        session_id=request.session_id,
        resolution_note=request.resolution_note,
    )
    if resolved is None:
        raise EntityNotFoundError("Thread", request.thread_id or request.text_match)

    return ResolveRead(
        thread=ThreadPayload.model_validate(resolved),
        threads=[ThreadPayload.model_validate(thread) for thread in threads],
    )
