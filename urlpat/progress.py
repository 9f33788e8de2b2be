# urlpat/progress.py
from __future__ import annotations
import sys
from dataclasses import dataclass

@dataclass
class Counters:
    lines_in: int = 0
    lines_out: int = 0
    empty: int = 0
    deduped: int = 0

class Progress:
    """
    Minimal single-line progress on stderr. Call .render() after you bump counters.
    Prints: [lines 1200] out: 1100 | empty: 40 | deduped: 60
    """
    def __init__(self, enabled: bool = True, stream = sys.stderr, every: int = 500):
        self.enabled = enabled
        self.stream = stream
        self.every = max(1, every)
        self.c = Counters()

    def inc_in(self, n: int = 1): self.c.lines_in += n
    def inc_out(self, n: int = 1): self.c.lines_out += n
    def inc_empty(self, n: int = 1): self.c.empty += n
    def inc_deduped(self, n: int = 1): self.c.deduped += n

    def render(self, force: bool = False):
        if not self.enabled:
            return
        if not force and self.c.lines_in % self.every:
            return
        msg = (
            f"[lines {self.c.lines_in}] "
            f"out: {self.c.lines_out} "
            f"| empty: {self.c.empty} "
            f"| deduped: {self.c.deduped}"
        )
        self.stream.write("\r" + msg + " " * 8)
        self.stream.flush()

    def done(self):
        if not self.enabled:
            return
        self.render(force=True)
        self.stream.write("\n")
        self.stream.flush()
