# urlpat/pipeline.py
from __future__ import annotations
from typing import Iterable, Iterator, List

from .dedupe import Deduplicator
from .domains import NO_MATCH, classify
from .logger import RunLogger
from .pattern import compile_pattern, render, uses_domain
from .progress import Progress
from .suffixes import SuffixTable
from .urltools import parse, with_default_port


class Pipeline:
    """
    read line -> parse -> classify -> render -> dedup -> emit.
    The suffix table is shared read-only; the deduplicator belongs to this pipeline.
    """

    def __init__(self, pattern: str, table: SuffixTable, dedup: bool = False,
                 keep_empty: bool = False, default_ports: bool = False,
                 runlog: RunLogger | None = None, progress: Progress | None = None):
        self.tokens = compile_pattern(pattern)
        self.table = table
        self.dedup = Deduplicator() if dedup else None
        self.keep_empty = keep_empty
        self.default_ports = default_ports
        self.runlog = runlog or RunLogger()
        self.progress = progress or Progress(enabled=False)
        self._classify = uses_domain(self.tokens)

    def render_line(self, raw: str) -> str | None:
        """Rendered text for one input, None when the input is not URL-like at all."""
        rec = parse(raw)
        if self.default_ports:
            rec = with_default_port(rec)
        if rec.is_empty:
            return None
        parts = classify(rec.host, self.table) if self._classify else NO_MATCH
        return render(self.tokens, rec, parts)

    def run(self, lines: Iterable[str]) -> Iterator[str]:
        for raw in lines:
            raw = raw.strip()
            if not raw:
                continue
            self.runlog.count("LINES_IN")
            self.progress.inc_in()
            text = self.render_line(raw)
            if text is None:
                self.runlog.count("LINES_EMPTY")
                self.runlog.log("WARN", "EMPTY_RECORD", line=raw)
                self.progress.inc_empty()
                if self.keep_empty:
                    yield ""
            else:
                yield from self._emit(text)
            self.progress.render()

    def _emit(self, text: str) -> Iterator[str]:
        # %k / %v render one value per line
        for line in text.split("\n"):
            if not line:
                self.runlog.count("LINES_BLANK")
                if self.keep_empty:
                    yield ""
                continue
            if self.dedup is not None and not self.dedup.should_emit(line):
                self.runlog.count("LINES_DEDUPED")
                self.progress.inc_deduped()
                continue
            self.runlog.count("LINES_OUT")
            self.progress.inc_out()
            yield line


def run_pattern(pattern: str, inputs: Iterable[str], table: SuffixTable, dedup: bool = False) -> List[str]:
    """Render every input through `pattern`; handy for scripting."""
    return list(Pipeline(pattern, table, dedup=dedup).run(inputs))
