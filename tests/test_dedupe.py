"""Tests for the output-line deduplicator."""
from urlpat.dedupe import Deduplicator


class TestDeduplicator:

    def test_first_time_only(self):
        seen = Deduplicator()
        assert seen.should_emit("example.com")
        assert not seen.should_emit("example.com")
        assert seen.should_emit("example.org")
        assert not seen.should_emit("example.org")

    def test_exact_comparison(self):
        seen = Deduplicator()
        assert seen.should_emit("Example.com")
        assert seen.should_emit("example.com")
        assert seen.should_emit("example.com ")

    def test_len_and_contains(self):
        seen = Deduplicator()
        for line in ["a", "b", "a", "c"]:
            seen.should_emit(line)
        assert len(seen) == 3
        assert "b" in seen
        assert "d" not in seen

    def test_first_seen_order(self):
        seen = Deduplicator()
        kept = [line for line in ["b", "a", "b", "c", "a"] if seen.should_emit(line)]
        assert kept == ["b", "a", "c"]
