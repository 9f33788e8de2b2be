# urlpat/dedupe.py
from __future__ import annotations


class Deduplicator:
    """Exact-match deduper over rendered output lines. Keeps every key for the run."""
    def __init__(self):
        self._seen = set()

    def should_emit(self, line: str) -> bool:
        """Return True the first time `line` is seen; record it."""
        if line in self._seen:
            return False
        self._seen.add(line)
        return True

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, line: str) -> bool:
        return line in self._seen
