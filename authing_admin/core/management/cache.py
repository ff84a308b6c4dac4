"""In-memory key/value cache with per-entry expiry.

Holds management access tokens keyed by ``token:<userPoolId>``. Entries are
evicted lazily: an expired entry is dropped the next time it is read.
"""
from __future__ import annotations
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, Tuple

TOKEN_CACHE_KEY_PREFIX = "token:"


def token_cache_key(user_pool_id: str) -> str:
    """Return the cache key under which a user pool's token is stored."""
    return f"{TOKEN_CACHE_KEY_PREFIX}{user_pool_id}"


@dataclass
class CacheEntry:
    """Cached value with its absolute expiry."""
    value: str
    expires_at: datetime


class TokenCache:
    """Thread-safe TTL cache.

    Usage:
        cache = TokenCache()
        cache.set("token:pool-1", "abc", timedelta(hours=24))
        value, found = cache.get("token:pool-1")
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        """Initialize an empty cache.

        Args:
            clock: Callable returning the current time (injectable for tests)
        """
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def now(self) -> datetime:
        return self._clock()

    def get(self, key: str) -> Tuple[Optional[str], bool]:
        """Return ``(value, True)`` for a live entry, ``(None, False)`` otherwise."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None, False
            if self._clock() >= entry.expires_at:
                del self._entries[key]
                return None, False
            return entry.value, True

    def set(self, key: str, value: str, ttl: timedelta) -> None:
        """Store ``value`` under ``key`` until ``now + ttl``, replacing any previous entry."""
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + ttl)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
