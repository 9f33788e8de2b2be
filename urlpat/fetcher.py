# urlpat/fetcher.py
from __future__ import annotations
import os
import time
import requests
from dataclasses import dataclass

from .suffixes import SuffixListError

PSL_URL = "https://publicsuffix.org/list/public_suffix_list.dat"

@dataclass
class FetchResult:
    ok: bool
    status: int
    data: bytes | None
    url: str
    error: str | None = None
    bytes_read: int = 0

class Fetcher:
    def __init__(self, timeout: int = 15, max_bytes: int = 2_000_000, retries: int = 3,
                 user_agent: str | None = None, session: requests.Session | None = None,
                 backoff: float = 1.5):
        self.timeout = timeout
        self.max_bytes = max_bytes
        self.retries = max(1, retries)
        self.backoff = backoff
        self.sess = session if session is not None else requests.Session()
        if user_agent:
            self.sess.headers.update({"User-Agent": user_agent})

    def get(self, url: str) -> FetchResult:
        """Stream a URL with caps + retries."""
        error = None
        for attempt in range(self.retries):
            try:
                with self.sess.get(url, stream=True, timeout=self.timeout) as r:
                    status = r.status_code
                    if status != 200:
                        return FetchResult(False, status, None, url, error=f"http_{status}")
                    chunks = []
                    total = 0
                    for chunk in r.iter_content(chunk_size=8192):
                        if not chunk:
                            continue
                        total += len(chunk)
                        if total > self.max_bytes:
                            return FetchResult(False, status, None, url, error="too_large", bytes_read=total)
                        chunks.append(chunk)
                    return FetchResult(True, status, b"".join(chunks), url, None, total)
            except requests.RequestException as e:
                error = str(e)
                if attempt + 1 < self.retries:
                    time.sleep(self.backoff * (attempt + 1))
        return FetchResult(False, 0, None, url, error=error or "fetch_failed")

def save_suffix_list(result: FetchResult, path: str):
    """Write a downloaded list next to its final name, then swap it in."""
    tmp = path + ".part"
    try:
        with open(tmp, "wb") as fh:
            fh.write(result.data or b"")
        os.replace(tmp, path)
    except OSError as e:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise SuffixListError(f"cannot write suffix list {path}: {e}") from e
