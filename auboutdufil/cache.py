"""Time-based result cache.

ResultCache keeps the last computed value per key for a fixed time after
insertion. Reads do not extend an entry's life. It is shared by every
request handler thread, so each get/set runs under one lock.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Generic, TypeVar

from cachetools import TTLCache

V = TypeVar("V")


class ResultCache(Generic[V]):
    """Thread-safe TTL cache.

    Example::

        cache: ResultCache[list[Track]] = ResultCache(ttl=3600)
        tracks, found = cache.get(filters.cache_key())
        if not found:
            tracks = pipeline.run(url)
            cache.set(filters.cache_key(), tracks)
    """

    def __init__(
        self,
        ttl: float,
        maxsize: int = 4096,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl: Seconds an entry stays valid after it is set.
            maxsize: Maximum number of entries kept at once.
            timer: Clock used for expiry; tests pass a fake one.
        """
        self.ttl = ttl
        self._entries: TTLCache[str, V] = TTLCache(
            maxsize=maxsize, ttl=ttl, timer=timer
        )
        self._lock = threading.Lock()

    def get(self, key: str) -> tuple[V | None, bool]:
        """Return ``(value, True)`` for a live entry, ``(None, False)`` otherwise."""
        with self._lock:
            try:
                return self._entries[key], True
            except KeyError:
                return None, False

    def set(self, key: str, value: V) -> None:
        with self._lock:
            self._entries[key] = value

    def __len__(self) -> int:
        with self._lock:
            self._entries.expire()
            return len(self._entries)
