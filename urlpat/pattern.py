# urlpat/pattern.py
"""
Pattern mini-language.

    %s scheme      %c normalized url   %a authority   %u username
    %x password    %d domain           %S subdomain   %r apex (example.com)
    %n name        %t suffix           %P port        %p path
    %q query       %f fragment         %k query keys  %v query values
    %/ "://" if scheme   %@ "@" if userinfo   %: ":" if port
    %? "?" if query      %# "#" if fragment   %% literal "%"

Any other character after '%' is a PatternError. A pattern that is just a
keyword ("domain", "apex", "tld", ...) renders that single field.

Patterns compile once into a tuple of tokens and render many times.
"""
from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Dict, Tuple, Union

from .domains import DomainParts
from .urltools import URLRecord, authority, full_url, query_pairs


class PatternError(ValueError):
    pass


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Field:
    code: str


@dataclass(frozen=True)
class Conditional:
    char: str


Token = Union[Literal, Field, Conditional]

_FIELDS: Dict[str, Callable[[URLRecord, DomainParts], str]] = {
    "s": lambda r, d: r.scheme or "",
    "c": lambda r, d: full_url(r),
    "a": lambda r, d: authority(r),
    "u": lambda r, d: r.username or "",
    "x": lambda r, d: r.password or "",
    "d": lambda r, d: r.host if d.matched else "",
    "S": lambda r, d: d.subdomain or "",
    "r": lambda r, d: d.registrable,
    "n": lambda r, d: d.apex or "",
    "t": lambda r, d: d.suffix or "",
    "P": lambda r, d: "" if r.port is None else str(r.port),
    "p": lambda r, d: r.path,
    "q": lambda r, d: r.query or "",
    "f": lambda r, d: r.fragment or "",
    "k": lambda r, d: "\n".join(k for k, _ in query_pairs(r)),
    "v": lambda r, d: "\n".join(v for _, v in query_pairs(r)),
}

_CONDITIONALS: Dict[str, Tuple[str, Callable[[URLRecord], bool]]] = {
    "/": ("://", lambda r: bool(r.scheme)),
    "@": ("@", lambda r: r.has_userinfo),
    ":": (":", lambda r: r.port is not None),
    "?": ("?", lambda r: bool(r.query)),
    "#": ("#", lambda r: bool(r.fragment)),
}

KEYWORDS: Dict[str, str] = {
    "scheme": "s", "schemes": "s",
    "url": "c",
    "auth": "a", "authority": "a",
    "user": "u", "users": "u", "username": "u", "usernames": "u",
    "pass": "x", "password": "x", "passwords": "x",
    "domain": "d", "domains": "d",
    "sub": "S", "subdomain": "S", "subdomains": "S",
    "root": "r", "roots": "r", "apex": "r", "apexes": "r",
    "name": "n", "names": "n",
    "tld": "t", "suffix": "t",
    "port": "P", "ports": "P",
    "path": "p", "paths": "p",
    "query": "q", "queries": "q",
    "key": "k", "keys": "k",
    "val": "v", "value": "v", "values": "v",
    "fragment": "f", "fragments": "f",
}
KEYWORDS.update({code: code for code in _FIELDS})


@lru_cache(maxsize=64)
def compile_pattern(pattern: str) -> Tuple[Token, ...]:
    if pattern in KEYWORDS:
        return (Field(KEYWORDS[pattern]),)

    tokens = []
    buf = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch != "%":
            buf.append(ch)
            i += 1
            continue
        if i + 1 >= len(pattern):
            raise PatternError(f"dangling '%' at end of pattern {pattern!r}")
        code = pattern[i + 1]
        if code == "%":
            buf.append("%")
        elif code in _FIELDS or code in _CONDITIONALS:
            if buf:
                tokens.append(Literal("".join(buf)))
                buf = []
            tokens.append(Field(code) if code in _FIELDS else Conditional(code))
        else:
            raise PatternError(f"unknown escape '%{code}' at position {i} in pattern {pattern!r}")
        i += 2
    if buf:
        tokens.append(Literal("".join(buf)))
    return tuple(tokens)


def render(tokens: Tuple[Token, ...], record: URLRecord, parts: DomainParts) -> str:
    """Concatenate literals and field values; an empty record renders no fields."""
    out = []
    empty = record.is_empty
    for tok in tokens:
        if isinstance(tok, Literal):
            out.append(tok.text)
        elif empty:
            continue
        elif isinstance(tok, Field):
            out.append(_FIELDS[tok.code](record, parts))
        else:
            text, present = _CONDITIONALS[tok.char]
            if present(record):
                out.append(text)
    return "".join(out)


def uses_domain(tokens: Tuple[Token, ...]) -> bool:
    """True when rendering needs the host classified."""
    return any(isinstance(t, Field) and t.code in "dSrnt" for t in tokens)
