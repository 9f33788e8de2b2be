# urlpat/__init__.py
"""Pull components out of messy URL-like text and print them with a pattern."""
from .dedupe import Deduplicator
from .domains import DomainParts, classify
from .pattern import PatternError, compile_pattern, render
from .pipeline import Pipeline, run_pattern
from .suffixes import SuffixListError, SuffixTable, load_suffix_table
from .urltools import URLRecord, parse

__version__ = "0.1.0"

__all__ = [
    "Deduplicator", "DomainParts", "classify", "PatternError", "compile_pattern",
    "render", "Pipeline", "run_pattern", "SuffixListError", "SuffixTable",
    "load_suffix_table", "URLRecord", "parse",
]
