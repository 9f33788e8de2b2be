# urlpat/domains.py
from __future__ import annotations
import ipaddress
from typing import NamedTuple

from .suffixes import SuffixTable


class DomainParts(NamedTuple):
    subdomain: str | None = None
    apex: str | None = None
    suffix: str | None = None

    @property
    def matched(self) -> bool:
        return bool(self.suffix)

    @property
    def registrable(self) -> str:
        """apex + suffix, e.g. example.co.uk; empty when there is no apex."""
        if not (self.apex and self.suffix):
            return ""
        return f"{self.apex}.{self.suffix}"


NO_MATCH = DomainParts()


def is_ip_literal(host: str) -> bool:
    candidate = host[1:-1] if host.startswith("[") and host.endswith("]") else host
    try:
        ipaddress.ip_address(candidate)
    except ValueError:
        return False
    return True


def classify(host: str, table: SuffixTable) -> DomainParts:
    """
    Split host into subdomain / apex / suffix using public suffix rules.
    - IP literals, empty labels and unknown suffixes give NO_MATCH
      (no guessing from the last two labels)
    - parts keep the host's original spelling, so they join back to it
    """
    if not host or is_ip_literal(host):
        return NO_MATCH
    labels = host.split(".")
    if not all(labels):
        return NO_MATCH
    size = table.suffix_size(labels)
    if size == 0:
        return NO_MATCH

    suffix = ".".join(labels[-size:])
    rest = labels[:-size]
    if not rest:
        return DomainParts(None, None, suffix)
    apex = rest[-1]
    subdomain = ".".join(rest[:-1]) or None
    return DomainParts(subdomain, apex, suffix)
