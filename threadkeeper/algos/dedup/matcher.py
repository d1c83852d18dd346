"""
Duplicate thread detection.

Decides whether a proposed thread duplicates an existing open thread using
the first applicable tier:

1. Embedding: cosine similarity > 0.85 (only when the new thread has an embedding)
2. Token overlap: overlap coefficient > 0.6, or > 0.4 with a shared issue prefix
3. Text normalization: exact match after normalizing case, spacing and punctuation

No I/O: embeddings are produced by the caller, who passes None when none is available.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from threadkeeper.algos.config import DEDUP_SIMILARITY_THRESHOLD
from threadkeeper.algos.rounding import round_score
from threadkeeper.algos.dedup.text import (
    cosine_similarity,
    extract_issue_prefix,
    normalize_text,
    overlap_threshold,
    token_overlap,
    tokenize,
)

logger = logging.getLogger(__name__)


class DedupMethod(str, Enum):
    """Tier that produced a duplicate verdict."""
    EMBEDDING = "embedding"
    TOKEN_OVERLAP = "token_overlap"
    TEXT_NORMALIZATION = "text_normalization"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class ThreadWithEmbedding:
    """An existing thread offered as a duplicate candidate."""

    id: str
    text: str
    embedding: Optional[Sequence[float]] = None


@dataclass(frozen=True)
class DedupResult:
    """Duplicate verdict. `similarity` is cosine or overlap depending on `method`."""

    is_duplicate: bool
    method: DedupMethod
    matched_id: Optional[str] = None
    matched_text: Optional[str] = None
    similarity: Optional[float] = None


def check_duplicate(
    new_text: str,
    new_embedding: Optional[Sequence[float]],
    existing: Sequence[ThreadWithEmbedding],
) -> DedupResult:
    """
    Check whether `new_text` duplicates any of the `existing` threads.

    Once the embedding tier is entered its verdict is final, including a
    negative one: a near miss on embeddings is not retried with token
    overlap.

    Args:
        new_text: Proposed thread text
        new_embedding: L2-normalized embedding of new_text, or None
        existing: Open threads, each with an optional embedding

    Returns:
        DedupResult describing the best match (if any) and the deciding tier
    """
    if not existing:
        return DedupResult(is_duplicate=False, method=DedupMethod.SKIPPED)

    if new_embedding is not None:
        return _match_by_embedding(new_embedding, existing)

    result = _match_by_token_overlap(new_text, existing)
    if result is not None:
        return result

    return _match_by_normalized_text(new_text, existing)


def _match_by_embedding(
    new_embedding: Sequence[float],
    existing: Sequence[ThreadWithEmbedding],
) -> DedupResult:
    best_similarity: Optional[float] = None
    best_thread: Optional[ThreadWithEmbedding] = None

    for thread in existing:
        if thread.embedding is None:
            continue

        similarity = cosine_similarity(new_embedding, thread.embedding)
        if best_similarity is None or similarity > best_similarity:
            best_similarity = similarity
            best_thread = thread

    if best_thread is None:
        return DedupResult(is_duplicate=False, method=DedupMethod.EMBEDDING)

    rounded = round_score(best_similarity)

    if best_similarity > DEDUP_SIMILARITY_THRESHOLD:
        logger.debug(f"Duplicate of {best_thread.id} by embedding (similarity={rounded})")
        return DedupResult(
            is_duplicate=True,
            method=DedupMethod.EMBEDDING,
            matched_id=best_thread.id,
            matched_text=best_thread.text,
            similarity=rounded,
        )

    # TODO: fall through to token overlap on a negative embedding verdict once
    # stored threads written under the lock-in behavior have been re-checked.
    return DedupResult(
        is_duplicate=False,
        method=DedupMethod.EMBEDDING,
        similarity=rounded if best_similarity >= 0 else None,
    )


def _match_by_token_overlap(
    new_text: str,
    existing: Sequence[ThreadWithEmbedding],
) -> Optional[DedupResult]:
    new_tokens = tokenize(new_text)
    if not new_tokens:
        return None

    new_prefix = extract_issue_prefix(new_text)
    best_overlap = 0.0
    best_thread: Optional[ThreadWithEmbedding] = None

    for thread in existing:
        tokens = tokenize(thread.text)
        if not tokens:
            continue

        overlap = token_overlap(new_tokens, tokens)
        threshold = overlap_threshold(new_prefix, extract_issue_prefix(thread.text))

        if overlap > threshold and overlap > best_overlap:
            best_overlap = overlap
            best_thread = thread

    if best_thread is None:
        return None

    rounded = round_score(best_overlap)
    logger.debug(f"Duplicate of {best_thread.id} by token overlap (overlap={rounded})")
    return DedupResult(
        is_duplicate=True,
        method=DedupMethod.TOKEN_OVERLAP,
        matched_id=best_thread.id,
        matched_text=best_thread.text,
        similarity=rounded,
    )


def _match_by_normalized_text(
    new_text: str,
    existing: Sequence[ThreadWithEmbedding],
) -> DedupResult:
    normalized = normalize_text(new_text)

    for thread in existing:
        if normalize_text(thread.text) == normalized:
            logger.debug(f"Duplicate of {thread.id} by normalized text")
            return DedupResult(
                is_duplicate=True,
                method=DedupMethod.TEXT_NORMALIZATION,
                matched_id=thread.id,
                matched_text=thread.text,
            )

    return DedupResult(is_duplicate=False, method=DedupMethod.TEXT_NORMALIZATION)
