# Thread scoring algorithms
# Pure functions for vitality and lifecycle status

from threadkeeper.algos.thread_scoring.vitality import (
    VitalityInput,
    VitalityResult,
    compute_vitality,
    vitality_to_status,
    detect_thread_class,
)
from threadkeeper.algos.thread_scoring.lifecycle import (
    LifecycleInput,
    LifecycleResult,
    compute_lifecycle_status,
    next_dormant_since,
)

__all__ = [
    "VitalityInput",
    "VitalityResult",
    "compute_vitality",
    "vitality_to_status",
    "detect_thread_class",
    "LifecycleInput",
    "LifecycleResult",
    "compute_lifecycle_status",
    "next_dormant_since",
]
