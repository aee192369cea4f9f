"""Caching implementation."""

import copy
import time
from typing import Any

from ratesview.core.interfaces import ICache


class MemoryCache(ICache):
    """In-memory cache with TTL support.

    A TTL of 0 keeps the entry until it is overwritten, deleted or cleared.
    """

    def __init__(self, default_ttl: int = 0) -> None:
        self.default_ttl = default_ttl
        self._cache: dict[str, tuple[Any, float]] = {}

    def get(self, key: str) -> Any | None:
        """Get value from cache."""
        if key not in self._cache:
            return None

        value, expiry = self._cache[key]
        if expiry and time.time() > expiry:
            del self._cache[key]
            return None

        return value

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Set value in cache with TTL."""
        ttl = self.default_ttl if ttl is None else ttl
        expiry = time.time() + ttl if ttl > 0 else 0
        self._cache[key] = (value, expiry)

    def delete(self, key: str) -> None:
        """Delete value from cache."""
        self._cache.pop(key, None)

    def exists(self, key: str) -> bool:
        """Check if key exists in cache."""
        return self.get(key) is not None

    def clear(self) -> None:
        """Clear all cached values."""
        self._cache.clear()

    def cleanup_expired(self) -> int:
        """Remove expired entries and return count removed."""
        current_time = time.time()
        expired_keys = [
            key for key, (_, expiry) in self._cache.items()
            if expiry and current_time > expiry
        ]

        for key in expired_keys:
            del self._cache[key]

        return len(expired_keys)

    def __len__(self) -> int:
        return len(self._cache)


class QueryCache(MemoryCache):
    """Query results keyed by query signature.

    Payloads are copied on the way in and out, so callers can change what
    they receive without touching the cached response.
    """

    def read(self, signature: str) -> dict[str, Any] | None:
        data = self.get(signature)
        return copy.deepcopy(data) if data is not None else None

    def write(self, signature: str, data: dict[str, Any]) -> None:
        self.cleanup_expired()
        self.set(signature, copy.deepcopy(data))
