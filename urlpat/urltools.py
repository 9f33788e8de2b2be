# urlpat/urltools.py
from __future__ import annotations
import ipaddress
import re
from dataclasses import dataclass, replace
from typing import List, Tuple
from urllib.parse import parse_qsl

# Tolerant URL splitter:
# - Never raises; worst case every field is empty.
# - Accepts schemeless input (example.com/x, user:pass@host, host:8080).
# - Bare relative strings (foo/bar) are paths, not host + path.

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")
_PORT_RE = re.compile(r"^[0-9]+$")
_PORT_ONLY_RE = re.compile(r"^(?:[0-9]+(?:[/?#]|$)|$)")

# Schemes whose body is never an authority, accepted after a bare ':'
OPAQUE_SCHEMES = {
    "about", "blob", "data", "geo", "javascript", "magnet", "mailto",
    "news", "sms", "tel", "urn", "xmpp",
}
# Schemes that always carry an authority, even when written "http:host"
SPECIAL_SCHEMES = {"http", "https", "ws", "wss", "ftp"}

DEFAULT_SCHEME = "https"
DEFAULT_PORTS = {"http": 80, "https": 443, "ftp": 21, "ws": 80, "wss": 443}


@dataclass(frozen=True)
class URLRecord:
    scheme: str | None = None
    username: str | None = None
    password: str | None = None
    host: str = ""
    port: int | None = None
    path: str = ""
    query: str | None = None
    fragment: str | None = None
    # input spelled the authority with '//' (file:///x, //cdn.host)
    slashes: bool = False

    @property
    def is_empty(self) -> bool:
        """A record with no scheme, host or path renders as nothing."""
        return not (self.scheme or self.host or self.path)

    @property
    def has_userinfo(self) -> bool:
        return bool(self.username or self.password)


def _split_tail(rest: str) -> Tuple[str, str | None, str | None]:
    """Split '/path?query#fragment' into its three parts."""
    fragment = None
    if "#" in rest:
        rest, fragment = rest.split("#", 1)
    query = None
    if "?" in rest:
        rest, query = rest.split("?", 1)
    return rest, query, fragment


def _authority_end(rest: str) -> int:
    for i, ch in enumerate(rest):
        if ch in "/?#":
            return i
    return len(rest)


def _split_port(hostport: str) -> Tuple[str, int | None]:
    """Rightmost ':' outside an IPv6 bracket group separates the port."""
    if hostport.startswith("["):
        close = hostport.find("]")
        if close == -1:
            return hostport, None
        host, after = hostport[:close + 1], hostport[close + 1:]
        if after.startswith(":"):
            port = _valid_port(after[1:])
            if port is not None:
                return host, port
            if after == ":":
                return host, None
        return hostport, None
    if ":" not in hostport:
        return hostport, None
    host, _, tail = hostport.rpartition(":")
    if tail == "":
        return host, None
    port = _valid_port(tail)
    if port is None:
        # not a port: keep it as part of the host text
        return hostport, None
    return host, port


def _valid_port(text: str) -> int | None:
    if not _PORT_RE.match(text):
        return None
    port = int(text)
    if port > 65535:
        return None
    return port


def _parse_authority(authority: str) -> Tuple[str | None, str | None, str, int | None]:
    username = password = None
    hostport = authority
    if "@" in authority:
        userinfo, _, hostport = authority.rpartition("@")
        user, sep, pw = userinfo.partition(":")
        username = user or None
        if username and sep:
            password = pw or None
    host, port = _split_port(hostport)
    return username, password, host, port


def _looks_like_authority(head: str) -> bool:
    """Decide whether a schemeless prefix (text before the first / ? #) is a host."""
    if not head:
        return False
    if "@" in head or head.startswith("["):
        return True
    host, port = _split_port(head)
    if port is not None and host:
        return True
    labels = host.split(".")
    return len(labels) > 1 and all(labels)


def _accept_bare_scheme(candidate: str, rest: str) -> bool:
    """Is 'candidate:rest' (no '//') really a scheme, not host:port or user:pass@host?"""
    lowered = candidate.lower()
    if lowered in OPAQUE_SCHEMES or lowered in SPECIAL_SCHEMES:
        return True
    if "." in candidate:
        return False
    if _PORT_ONLY_RE.match(rest):
        return False
    if "@" in rest[:_authority_end(rest)]:
        return False
    return True


def _is_bare_ipv6(head: str) -> bool:
    """'::1', '2001:db8::1': colons that belong to the address, not to a port."""
    if ":" not in head:
        return False
    try:
        ipaddress.IPv6Address(head)
    except ValueError:
        return False
    return True


def _with_authority(scheme: str | None, rest: str, slashes: bool = False) -> URLRecord:
    end = _authority_end(rest)
    head = rest[:end]
    if _is_bare_ipv6(head):
        username = password = port = None
        host = head
    else:
        username, password, host, port = _parse_authority(head)
    path, query, fragment = _split_tail(rest[end:])
    return URLRecord(scheme, username, password, host, port, path, query, fragment, slashes)


def parse(raw: str) -> URLRecord:
    """Split one line of URL-like text into a URLRecord. Never raises."""
    s = raw.strip()
    if not s:
        return URLRecord()

    if _is_bare_ipv6(s[:_authority_end(s)]):
        return _with_authority(None, s)

    m = _SCHEME_RE.match(s)
    if m:
        candidate, rest = m.group(1), s[m.end():]
        if rest.startswith("//"):
            return _with_authority(candidate.lower(), rest[2:], slashes=True)
        if _accept_bare_scheme(candidate, rest):
            scheme = candidate.lower()
            if scheme in SPECIAL_SCHEMES:
                return _with_authority(scheme, rest.lstrip("/"))
            path, query, fragment = _split_tail(rest)
            return URLRecord(scheme=scheme, path=path, query=query, fragment=fragment)

    # schemeless
    if s.startswith("//"):
        return _with_authority(None, s[2:], slashes=True)
    if _looks_like_authority(s[:_authority_end(s)]):
        return _with_authority(None, s)

    path, query, fragment = _split_tail(s)
    if path and not path.startswith("/"):
        path = "/" + path
    return URLRecord(path=path, query=query, fragment=fragment)


def authority(rec: URLRecord) -> str:
    """[user[:pass]@]host[:port] exactly as parsed."""
    out = ""
    if rec.has_userinfo:
        out += rec.username or ""
        if rec.password:
            out += ":" + rec.password
        out += "@"
    out += rec.host
    if rec.port is not None:
        out += f":{rec.port}"
    return out


def full_url(rec: URLRecord) -> str:
    """
    Normalized URL:
    - scheme and host lowercased, https assumed when there is no scheme
    - default port for the scheme dropped, empty path becomes '/'
    - hostless inputs keep their shape: mailto:x, foo:/bar, file:///x, /rel
    """
    if rec.is_empty:
        return ""
    tail = ""
    if rec.query:
        tail += "?" + rec.query
    if rec.fragment:
        tail += "#" + rec.fragment

    if not rec.host:
        if not rec.scheme:
            return rec.path + tail
        if rec.slashes:
            return f"{rec.scheme}://{rec.path}{tail}"
        return f"{rec.scheme}:{rec.path}{tail}"

    scheme = rec.scheme or DEFAULT_SCHEME
    host = rec.host.lower()
    if _is_bare_ipv6(host):
        host = f"[{host}]"
    norm = URLRecord(
        scheme=scheme,
        username=rec.username,
        password=rec.password,
        host=host,
        port=None if rec.port == DEFAULT_PORTS.get(scheme) else rec.port,
    )
    return f"{scheme}://{authority(norm)}{rec.path or '/'}{tail}"


def with_default_port(rec: URLRecord) -> URLRecord:
    """Fill a missing port from the scheme's well-known port (https -> 443)."""
    if rec.port is not None or not rec.host:
        return rec
    port = DEFAULT_PORTS.get(rec.scheme or DEFAULT_SCHEME)
    if port is None:
        return rec
    return replace(rec, port=port)


def query_pairs(rec: URLRecord) -> List[Tuple[str, str]]:
    if not rec.query:
        return []
    return parse_qsl(rec.query, keep_blank_values=True)
