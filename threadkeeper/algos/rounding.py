"""Score rounding shared by the scoring and dedup algorithms."""

import math

from threadkeeper.algos.config import SCORE_DECIMALS


def round_score(value: float, decimals: int = SCORE_DECIMALS) -> float:
    """
    Round half up to `decimals` places.

    Builtin round() rounds exact halves to even (0.03125 → 0.0312); stored
    scores are compared against values rounded half up (0.03125 → 0.0313).
    """
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor
