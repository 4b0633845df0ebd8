"""
Time-limited cache of formatted conversion output.

The cache is an explicit object owned by a converter; pass the same instance
to several converters to share results between them.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 5 * 60


@dataclass(frozen=True)
class CacheEntry:
    result: str
    timestamp: float


class ConversionCache:
    """Maps cache keys to formatted JSON text, expiring entries after a TTL.

    Expired entries are not returned and are removed lazily, either on
    lookup or by purge_expired().
    """

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries = {}
        self._lock = threading.Lock()

    @staticmethod
    def make_key(xml_text: str, options_key: str) -> str:
        return f"{xml_text}_{options_key}"

    def _expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.timestamp >= self.ttl_seconds

    def get(self, key: str) -> Optional[str]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._expired(entry, now):
                del self._entries[key]
                return None
            return entry.result

    def set(self, key: str, result: str) -> None:
        entry = CacheEntry(result=result, timestamp=self._clock())
        with self._lock:
            self._entries[key] = entry

    def purge_expired(self) -> int:
        """Drop expired entries and return how many were removed."""
        now = self._clock()
        with self._lock:
            stale = [k for k, e in self._entries.items() if self._expired(e, now)]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.debug(f"Evicted {len(stale)} expired cache entries")
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def __contains__(self, key):
        return self.get(key) is not None
