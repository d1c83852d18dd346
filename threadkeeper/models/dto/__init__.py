# Data Transfer Objects (DTOs)
# Request/response models for API endpoints

from threadkeeper.models.dto.threads import (
    VitalityRequest,
    VitalityRead,
    LifecycleRequest,
    LifecycleRead,
    ClassifyRequest,
    ClassifyRead,
    CandidateThread,
    DedupCheckRequest,
    DedupResultRead,
    DedupListRequest,
    DedupListRead,
    ThreadPayload,
    TouchRequest,
    TriageRequest,
    TriageReportRead,
    ResolveRequest,
    ResolveRead,
)

__all__ = [
    "VitalityRequest",
    "VitalityRead",
    "LifecycleRequest",
    "LifecycleRead",
    "ClassifyRequest",
    "ClassifyRead",
    "CandidateThread",
    "DedupCheckRequest",
    "DedupResultRead",
    "DedupListRequest",
    "DedupListRead",
    "ThreadPayload",
    "TouchRequest",
    "TriageRequest",
    "TriageReportRead",
    "ResolveRequest",
    "ResolveRead",
]
