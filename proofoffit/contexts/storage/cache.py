"""
Bounded in-memory cache with TTL expiry and a selectable eviction policy.

Expired entries are dropped lazily on access and in bulk by cleanup(). When
the cache is full and a new key arrives, exactly one entry is evicted:

- LRU: least recently accessed
- FIFO: oldest insertion
- TTL: closest to expiry

A CacheManager is not shared across threads; give each fetcher its own.
"""

import functools
import json
import re
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Hashable, Optional


class EvictionPolicy(Enum):
    LRU = "lru"
    FIFO = "fifo"
    TTL = "ttl"


@dataclass
class CacheEntry:
    key: Hashable
    value: Any
    created_at: float
    ttl_seconds: float
    last_accessed: float
    access_count: int = 1

    @property
    def expires_at(self) -> float:
        return self.created_at + self.ttl_seconds

    def is_expired(self, now: float) -> bool:
        return now - self.created_at > self.ttl_seconds


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    size: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0

    def to_dict(self) -> dict:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "size": self.size,
            "hit_rate": round(self.hit_rate, 4),
        }


class CacheManager:
    """
    Key-value cache bounded by entry count and entry age.

    Attributes:
        ttl_seconds: Default time to live for new entries
        max_size: Maximum number of entries held
        policy: Eviction policy applied when full
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        max_size: int = 100,
        policy: EvictionPolicy = EvictionPolicy.LRU,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            ttl_seconds: Default time to live for entries
            max_size: Maximum number of entries (must be at least 1)
            policy: EvictionPolicy or its string value
            clock: Monotonic time source in seconds (injectable for tests)

        Raises:
            ValueError: If max_size < 1, ttl_seconds <= 0, or policy is unknown
        """
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")

        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self.policy = policy if isinstance(policy, EvictionPolicy) else EvictionPolicy(policy)
        self._clock = clock
        self._entries: dict[Hashable, CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    @classmethod
    def from_config(cls, cache_config, clock: Callable[[], float] = time.monotonic) -> "CacheManager":
        """Build from a cache preset (ttl_seconds, max_size, policy)."""
        return cls(
            ttl_seconds=float(cache_config.ttl_seconds),
            max_size=int(cache_config.max_size),
            policy=EvictionPolicy(str(cache_config.policy).lower()),
            clock=clock,
        )

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the cached value, or default on a miss or an expired entry."""
        entry = self._entries.get(key)
        now = self._clock()

        if entry is None or entry.is_expired(now):
            if entry is not None:
                del self._entries[key]
            self._misses += 1
            return default

        entry.access_count += 1
        entry.last_accessed = now
        self._hits += 1
        return entry.value

    def set(self, key: Hashable, value: Any, ttl_seconds: Optional[float] = None) -> None:
        """Store a value, evicting one entry first if the cache is full and key is new."""
        now = self._clock()

        if key not in self._entries and len(self._entries) >= self.max_size:
            self._evict()

        self._entries[key] = CacheEntry(
            key=key,
            value=value,
            created_at=now,
            ttl_seconds=self.ttl_seconds if ttl_seconds is None else ttl_seconds,
            last_accessed=now,
        )

    def delete(self, key: Hashable) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def has(self, key: Hashable) -> bool:
        """True if key is present and unexpired. Does not count as a hit or miss."""
        entry = self._entries.get(key)
        return entry is not None and not entry.is_expired(self._clock())

    def keys(self) -> list:
        return list(self._entries.keys())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return self.has(key)

    def stats(self) -> CacheStats:
        return CacheStats(hits=self._hits, misses=self._misses, size=len(self._entries))

    def cleanup(self) -> int:
        """Remove every expired entry. Returns the number removed."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def invalidate_by_pattern(self, pattern) -> int:
        """Delete entries whose string key matches a regex (re.search). Returns the count."""
        regex = re.compile(pattern)
        matching = [key for key in self._entries if regex.search(str(key))]
        for key in matching:
            del self._entries[key]
        return len(matching)

    def _evict(self) -> None:
        if self.policy is EvictionPolicy.LRU:
            victim = min(self._entries.values(), key=lambda e: e.last_accessed)
        elif self.policy is EvictionPolicy.FIFO:
            victim = min(self._entries.values(), key=lambda e: e.created_at)
        else:
            victim = min(self._entries.values(), key=lambda e: e.expires_at)
        del self._entries[victim.key]


def _default_key(*args, **kwargs) -> str:
    return json.dumps([args, kwargs], sort_keys=True, default=str)


def memoize(cache: CacheManager, key_func: Callable[..., Hashable] = None):
    """
    Decorator caching a function's results in a CacheManager.

    None results are not cached, so a missing record is looked up again on
    the next call.

    Example:
        job_cache = CacheManager(ttl_seconds=120, max_size=200)
        get_job = memoize(job_cache)(database.get_job_by_id)
    """
    key_func = key_func or _default_key

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            key = key_func(*args, **kwargs)
            cached = cache.get(key)
            if cached is not None:
                return cached

            result = func(*args, **kwargs)
            if result is not None:
                cache.set(key, result)
            return result

        wrapper.cache = cache
        return wrapper

    return decorator
