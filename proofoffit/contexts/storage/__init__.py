"""
Storage Context

Responsibilities:
- Persists jobs, candidate profiles with bullets, and tailored documents (SQLite)
- Serves the reads and the write the tailoring engine consumes
- Provides bounded TTL caches with LRU, FIFO, or TTL eviction for hot reads

Owns: Schema, queries, caching
Never: Applies scoring or rendering rules
"""

from proofoffit.contexts.storage.cache import CacheManager, CacheStats, EvictionPolicy, memoize
from proofoffit.contexts.storage.database import TailoringDatabase

__all__ = ["CacheManager", "CacheStats", "EvictionPolicy", "memoize", "TailoringDatabase"]
