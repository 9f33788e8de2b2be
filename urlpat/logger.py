# urlpat/logger.py
from __future__ import annotations
from datetime import datetime
import sys

COUNTERS = ("LINES_IN", "LINES_EMPTY", "LINES_BLANK", "LINES_DEDUPED", "LINES_OUT")


class RunLogger:
    """key=value event log for one run. Writes to `path` and/or stderr; stdout is never touched."""
    def __init__(self, path: str | None = None, mirror_stderr: bool = False, stream=None):
        self.path = path
        self._fh = open(path, "w", encoding="utf-8", errors="replace") if path else None
        self._mirror = mirror_stderr
        self._stream = stream if stream is not None else sys.stderr
        self._counters = {k: 0 for k in COUNTERS}

    @property
    def enabled(self) -> bool:
        return self._fh is not None or self._mirror

    def log(self, level: str, phase: str, **kv):
        if not self.enabled:
            return
        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        parts = [f"[{ts}] {level} {phase}"]
        for k, v in kv.items():
            parts.append(f"{k}={v}")
        self._write(" ".join(parts) + "\n")

    def count(self, key: str, inc: int = 1):
        if key in self._counters:
            self._counters[key] += inc

    def counter(self, key: str) -> int:
        return self._counters.get(key, 0)

    def summary(self):
        s = " ".join(f"{k}={v}" for k, v in self._counters.items())
        self._write(f"[SUMMARY] {s}\n")

    def _write(self, line: str):
        if self._fh:
            self._fh.write(line)
        if self._mirror:
            self._stream.write(line)

    def close(self):
        try:
            self.summary()
        finally:
            if self._fh:
                self._fh.close()
                self._fh = None
