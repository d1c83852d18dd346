"""
Batch thread list deduplication.

Cleans a whole thread list in one pass using the text tiers of the single
check (exact normalized text, adaptive token overlap). Embeddings are not
used here; callers holding embeddings run check_duplicate instead.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, TypeVar

from threadkeeper.algos.dedup.text import (
    extract_issue_prefix,
    normalize_text,
    overlap_threshold,
    token_overlap,
    tokenize,
)


class ThreadLike(Protocol):
    id: str
    text: Optional[str]


T = TypeVar("T", bound=ThreadLike)


@dataclass(frozen=True)
class _Accepted:
    key: str
    tokens: frozenset[str]
    prefix: Optional[str]


def deduplicate_list(threads: Sequence[T]) -> list[T]:
    """
    Drop duplicate threads by id, normalized text and token overlap.

    First-seen wins and order is preserved. Threads with empty text are
    dropped. The input is not mutated; running the result through again
    returns it unchanged.

    Worst case is O(n²) overlap comparisons, fine for the tens to low
    hundreds of open threads a project carries.
    """
    seen_ids: set[str] = set()
    accepted: list[_Accepted] = []
    result: list[T] = []

    for thread in threads:
        text = thread.text or ""
        key = normalize_text(text)

        if not key:
            continue
        if thread.id in seen_ids:
            continue

        tokens = frozenset(tokenize(text))
        prefix = extract_issue_prefix(text)

        if any(_is_duplicate(key, tokens, prefix, prev) for prev in accepted):
            continue

        seen_ids.add(thread.id)
        accepted.append(_Accepted(key=key, tokens=tokens, prefix=prefix))
        result.append(thread)

    return result


def _is_duplicate(
    key: str,
    tokens: frozenset[str],
    prefix: Optional[str],
    prev: _Accepted,
) -> bool:
    if prev.key == key:
        return True
    if tokens and prev.tokens:
        return token_overlap(tokens, prev.tokens) > overlap_threshold(prefix, prev.prefix)
    return False
