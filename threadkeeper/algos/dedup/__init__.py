# Duplicate detection algorithms
# Pure functions for single-candidate checks and batch list cleansing

from threadkeeper.algos.dedup.matcher import (
    DedupMethod,
    DedupResult,
    ThreadWithEmbedding,
    check_duplicate,
)
from threadkeeper.algos.dedup.batch import deduplicate_list
from threadkeeper.algos.dedup.text import (
    cosine_similarity,
    extract_issue_prefix,
    normalize_text,
    token_overlap,
    tokenize,
)

__all__ = [
    "DedupMethod",
    "DedupResult",
    "ThreadWithEmbedding",
    "check_duplicate",
    "deduplicate_list",
    "cosine_similarity",
    "extract_issue_prefix",
    "normalize_text",
    "token_overlap",
    "tokenize",
]
