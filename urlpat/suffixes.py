# urlpat/suffixes.py
"""
Public suffix rules as a trie over reversed labels.

"co.uk" is stored as root -> "uk" -> "co". Wildcard rules ("*.ck") are a
"*" child, exception rules ("!www.ck") are a child flagged as exception.
Rule text comes from the Public Suffix List format; by default the
snapshot bundled with tldextract is used.
"""
from __future__ import annotations
import pkgutil
from dataclasses import dataclass, field
from typing import Dict, Iterable, Sequence

from tldextract.suffix_list import extract_tlds_from_suffix_list

SNAPSHOT_SOURCE = "tldextract:.tld_set_snapshot"


class SuffixListError(RuntimeError):
    pass


@dataclass
class _Node:
    children: Dict[str, "_Node"] = field(default_factory=dict)
    terminal: bool = False
    exception: bool = False


def normalize_label(label: str) -> str:
    """Lowercase; decode punycode labels so they meet the Unicode rules."""
    label = label.lower()
    if label.startswith("xn--"):
        try:
            return label.encode("ascii").decode("idna")
        except UnicodeError:
            return label
    return label


class SuffixTable:
    """Immutable once built; safe to share between pipelines."""

    def __init__(self, rules: Iterable[str] = ()):
        self._root = _Node()
        self._count = 0
        for rule in rules:
            self._add(rule)

    @classmethod
    def from_text(cls, text: str, include_private: bool = False) -> "SuffixTable":
        public, private = extract_tlds_from_suffix_list(text)
        rules = public + private if include_private else public
        return cls(rules)

    def __len__(self) -> int:
        return self._count

    def _add(self, rule: str):
        rule = rule.strip()
        if not rule:
            return
        exception = rule.startswith("!")
        if exception:
            rule = rule[1:]
        node = self._root
        for label in reversed(rule.split(".")):
            label = label if label == "*" else normalize_label(label)
            node = node.children.setdefault(label, _Node())
        if exception:
            node.exception = True
        else:
            node.terminal = True
        self._count += 1

    def suffix_size(self, labels: Sequence[str]) -> int:
        """
        Number of rightmost labels that form the public suffix; 0 = no rule matched.
        Longest match wins; an exception rule cuts one label off the wildcard above it.
        """
        node = self._root
        size = 0
        for depth, label in enumerate(reversed(labels), 1):
            child = node.children.get(normalize_label(label))
            if child is not None and child.exception:
                return depth - 1
            if "*" in node.children:
                size = depth
            if child is None:
                break
            if child.terminal:
                size = depth
            node = child
        return size


def load_snapshot(include_private: bool = False) -> SuffixTable:
    try:
        data = pkgutil.get_data("tldextract", ".tld_set_snapshot")
    except OSError as e:
        raise SuffixListError(f"bundled suffix snapshot unavailable: {e}") from e
    if not data:
        raise SuffixListError("bundled suffix snapshot unavailable")
    return _checked(SuffixTable.from_text(data.decode("utf-8"), include_private), SNAPSHOT_SOURCE)


def load_file(path: str, include_private: bool = False) -> SuffixTable:
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as fh:
            text = fh.read()
    except OSError as e:
        raise SuffixListError(f"cannot read suffix list {path}: {e}") from e
    return _checked(SuffixTable.from_text(text, include_private), path)


def load_suffix_table(path: str | None = None, include_private: bool = False) -> SuffixTable:
    """Rules from `path` when given, else the bundled snapshot."""
    if path:
        return load_file(path, include_private)
    return load_snapshot(include_private)


def _checked(table: SuffixTable, source: str) -> SuffixTable:
    if not len(table):
        raise SuffixListError(f"no suffix rules found in {source}")
    return table
