"""
Tests for batch thread list deduplication.

deduplicate_list() drops repeats by id, normalized text and token overlap,
keeping the first-seen thread and the input order.
"""
import copy

from threadkeeper.algos.dedup import ThreadWithEmbedding, deduplicate_list
from tests.conftest import make_record


def thread(thread_id: str, text: str) -> ThreadWithEmbedding:
    return ThreadWithEmbedding(id=thread_id, text=text)


class TestDeduplicateList:

    def test_keeps_distinct_threads_in_order(self):
        threads = [
            thread("t-1", "Upgrade postgres to 16"),
            thread("t-2", "Write onboarding docs"),
            thread("t-3", "Rotate API keys"),
        ]
        assert deduplicate_list(threads) == threads

    def test_drops_normalized_text_duplicates(self):
        threads = [
            thread("t-1", "Rotate API keys."),
            thread("t-2", "  rotate   api KEYS"),
        ]
        assert [t.id for t in deduplicate_list(threads)] == ["t-1"]

    def test_drops_token_overlap_duplicates(self):
        threads = [
            thread("t-1", "Fix auth timeout"),
            thread("t-2", "Write onboarding docs"),
            thread("t-3", "Fix authentication timeout"),
        ]
        assert [t.id for t in deduplicate_list(threads)] == ["t-1", "t-2"]

    def test_shared_issue_prefix_relaxes_threshold(self):
        threads = [
            thread("t-1", "OD-692: refactor billing webhook handler"),
            thread("t-2", "OD-692 refactor billing export pipeline"),
        ]
        assert [t.id for t in deduplicate_list(threads)] == ["t-1"]

    def test_overlap_at_threshold_is_kept(self):
        """Exactly 0.6 overlap (3 of 5 tokens) does not count as a repeat."""
        threads = [
            thread("t-1", "Refactor billing webhook retry handler"),
            thread("t-2", "Refactor billing webhook export pipeline"),
        ]
        assert [t.id for t in deduplicate_list(threads)] == ["t-1", "t-2"]

    def test_overlap_at_issue_prefix_threshold_is_kept(self):
        """Exactly 0.4 overlap with a shared prefix does not count as a repeat."""
        threads = [
            thread("t-1", "OD-692 billing webhook retry handler"),
            thread("t-2", "OD-692 billing migrate payments pipeline"),
        ]
        assert [t.id for t in deduplicate_list(threads)] == ["t-1", "t-2"]

    def test_drops_repeated_ids(self):
        threads = [
            thread("t-1", "Upgrade postgres"),
            thread("t-1", "Write onboarding docs"),
        ]
        assert [t.text for t in deduplicate_list(threads)] == ["Upgrade postgres"]

    def test_drops_empty_text(self):
        threads = [
            thread("t-1", "   "),
            thread("t-2", "..."),
            thread("t-3", "Upgrade postgres"),
        ]
        assert [t.id for t in deduplicate_list(threads)] == ["t-3"]

    def test_none_text_is_empty(self):
        record = make_record(id="t-1", text=None)
        assert deduplicate_list([record]) == []

    def test_dropped_thread_does_not_claim_its_id(self):
        """Only accepted threads reserve their id."""
        threads = [
            thread("t-1", "Rotate API keys"),
            thread("t-2", "rotate api keys"),
            thread("t-2", "Upgrade postgres"),
        ]
        assert [t.text for t in deduplicate_list(threads)] == [
            "Rotate API keys",
            "Upgrade postgres",
        ]

    def test_does_not_mutate_input(self):
        threads = [
            thread("t-1", "Fix auth timeout"),
            thread("t-2", "Fix authentication timeout"),
        ]
        snapshot = copy.deepcopy(threads)

        result = deduplicate_list(threads)

        assert threads == snapshot
        assert result is not threads

    def test_idempotent(self):
        threads = [
            thread("t-1", "Fix auth timeout"),
            thread("t-2", "Write onboarding docs"),
            thread("t-3", "fix AUTH timeout!"),
            thread("t-4", "OD-12 ship exporter"),
            thread("t-5", "OD-12 exporter tests"),
            thread("t-2", "Something else"),
        ]
        once = deduplicate_list(threads)

        assert deduplicate_list(once) == once

    def test_works_with_thread_records(self):
        records = [
            make_record(id="t-1", text="Upgrade postgres"),
            make_record(id="t-2", text="upgrade postgres"),
        ]
        assert deduplicate_list(records) == records[:1]

    def test_empty_input(self):
        assert deduplicate_list([]) == []
