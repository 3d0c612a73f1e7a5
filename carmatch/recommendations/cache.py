from __future__ import annotations

import hashlib
import json
import time
from typing import Any, Callable

from .config import DEFAULT_RECOMMENDATION_CONFIG


def request_key(request_dict: dict) -> str:
    """Stable short key for a JSON-able request payload."""
    normalized = json.dumps(request_dict, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


class ResponseCache:
    """In-process TTL cache for recommendation responses, with hit stats."""

    def __init__(self, ttl: float, clock: Callable[[], float] = time.time) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, request_dict: dict) -> Any | None:
        key = request_key(request_dict)
        entry = self._entries.get(key)
        if entry is not None:
            created_at, value = entry
            if self._clock() - created_at < self.ttl:
                self.hits += 1
                return value
            del self._entries[key]
        self.misses += 1
        return None

    def set(self, request_dict: dict, value: Any) -> None:
        now = self._clock()
        self._evict_expired(now)
        self._entries[request_key(request_dict)] = (now, value)

    def _evict_expired(self, now: float) -> None:
        expired = [key for key, (created_at, _) in self._entries.items() if now - created_at >= self.ttl]
        for key in expired:
            del self._entries[key]

    def stats(self) -> dict[str, Any]:
        lookups = self.hits + self.misses
        return {
            "size": len(self._entries),
            "ttl_seconds": self.ttl,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(self.hits / lookups * 100, 1) if lookups else 0.0,
        }

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0


_cache = ResponseCache(ttl=DEFAULT_RECOMMENDATION_CONFIG.cache_ttl)


def cache_get(request_dict: dict) -> Any | None:
    return _cache.get(request_dict)


def cache_set(request_dict: dict, value: Any) -> None:
    _cache.set(request_dict, value)


def get_cache_stats() -> dict[str, Any]:
    return _cache.stats()


def clear_cache() -> None:
    _cache.clear()
