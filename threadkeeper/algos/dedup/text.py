"""
Text helpers for duplicate detection.

Tokenizing, normalizing and comparing thread text, plus the vector
similarity used when embeddings are available.
"""

import re
from typing import Optional, Sequence

from threadkeeper.algos.config import (
    STOP_WORDS,
    TOKEN_OVERLAP_ISSUE_PREFIX_THRESHOLD,
    TOKEN_OVERLAP_THRESHOLD,
)

_WHITESPACE_RE = re.compile(r"\s+")
_TRAILING_PUNCT_RE = re.compile(r"[.!?;:]+$")
_TOKEN_SPLIT_RE = re.compile(r"[^a-z0-9-]+")
_ISSUE_PREFIX_RE = re.compile(r"^([A-Za-z]+-\d+)")


def normalize_text(text: str) -> str:
    """Lowercase, collapse whitespace, trim and strip trailing punctuation."""
    collapsed = _WHITESPACE_RE.sub(" ", text.lower()).strip()
    return _TRAILING_PUNCT_RE.sub("", collapsed)


def tokenize(text: str) -> set[str]:
    """Content words of `text`: lowercased, stop words and 1-char tokens dropped."""
    return {
        word
        for word in _TOKEN_SPLIT_RE.split(text.lower())
        if len(word) > 1 and word not in STOP_WORDS
    }


def token_overlap(a: set[str], b: set[str]) -> float:
    """
    Overlap coefficient: |A ∩ B| / min(|A|, |B|).

    Unlike Jaccard, a short thread fully contained in a longer one scores 1.0.
    Returns 0.0 if either set is empty.
    """
    if not a or not b:
        return 0.0
    return len(a & b) / min(len(a), len(b))


def extract_issue_prefix(text: str) -> Optional[str]:
    """Leading issue key like "OD-692" (upper-cased), or None."""
    match = _ISSUE_PREFIX_RE.match(text)
    return match.group(1).upper() if match else None


def overlap_threshold(prefix_a: Optional[str], prefix_b: Optional[str]) -> float:
    """Relaxed threshold when both texts start with the same issue key."""
    if prefix_a and prefix_b and prefix_a == prefix_b:
        return TOKEN_OVERLAP_ISSUE_PREFIX_THRESHOLD
    return TOKEN_OVERLAP_THRESHOLD


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two L2-normalized vectors (plain dot product).

    Vectors of different length score 0.0.
    """
    if len(a) != len(b):
        return 0.0
    return sum(x * y for x, y in zip(a, b))
