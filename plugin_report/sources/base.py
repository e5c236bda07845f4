"""HTTP session, cache and fetcher shared by the report sources."""

import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from plugin_report.errors import FetchError

DEFAULT_TIMEOUT = 30


def get_session(retries: int = 0) -> requests.Session:
    """Create a requests session.

    Report feeds are fetched once per run and a failure aborts the report,
    so retries are off unless asked for.
    """
    session = requests.Session()
    retry = Retry(
        total=retries,
        backoff_factor=0.5,
        status_forcelist=[429, 500, 502, 503, 504] if retries else [],
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


@dataclass
class CacheEntry:
    """A fetched payload and the clock reading when it was fetched."""

    data: Any
    timestamp: float


class HttpCache:
    """In-memory, time-boxed cache of fetched payloads.

    Entries are keyed by URL and decoding, so the same URL read as JSON and
    as text is cached twice.
    """

    TTL_SECONDS = 60 * 60

    def __init__(
        self,
        ttl: float = TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl = ttl
        self.clock = clock
        self._entries: dict[tuple[str, str], CacheEntry] = {}
        self._locks: dict[tuple[str, str], threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def lock_for(self, url: str, decode_as: str = "json") -> threading.Lock:
        """Return the lock serializing fetches of ``url``."""
        key = (url, decode_as)
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def get(self, url: str, decode_as: str = "json") -> Optional[CacheEntry]:
        """Return the entry for ``url`` if it is younger than the TTL."""
        entry = self._entries.get((url, decode_as))
        if entry is None:
            return None
        if self.clock() - entry.timestamp < self.ttl:
            return entry
        return None

    def put(self, url: str, data: Any, decode_as: str = "json") -> CacheEntry:
        entry = CacheEntry(data=data, timestamp=self.clock())
        self._entries[(url, decode_as)] = entry
        return entry

    def __len__(self) -> int:
        return len(self._entries)


class BaseFetcher(ABC):
    """Retrieves a resource by URL."""

    DECODERS = ("json", "text")

    @abstractmethod
    def fetch(self, url: str, decode_as: str = "json") -> Any:
        """Fetch ``url``.

        Args:
            url: Resource to retrieve.
            decode_as: 'json' for a parsed JSON document, 'text' for the raw body.

        Returns:
            The decoded payload.
        """
        pass


class CachedFetcher(BaseFetcher):
    """Fetcher serving payloads from an HttpCache while they are fresh."""

    def __init__(
        self,
        cache: Optional[HttpCache] = None,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.cache = cache if cache is not None else HttpCache()
        self.session = session if session is not None else get_session()
        self.timeout = timeout

    def fetch(self, url: str, decode_as: str = "json") -> Any:
        if decode_as not in self.DECODERS:
            raise ValueError(f"Unsupported decoding {decode_as!r}")

        with self.cache.lock_for(url, decode_as):
            entry = self.cache.get(url, decode_as)
            if entry is not None:
                return entry.data

            print(f"Fetching {url}...")
            try:
                response = self.session.get(url, timeout=self.timeout)
                response.raise_for_status()
                data = response.json() if decode_as == "json" else response.text
            except (requests.RequestException, ValueError) as e:
                raise FetchError(url, e) from e

            self.cache.put(url, data, decode_as)
            return data
