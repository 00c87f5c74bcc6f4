"""Content-addressed cache for analysis results.

The engine keeps no state between calls; this cache belongs to callers that
want to memoize detection or segmentation keyed by the full buffer content.
"""

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from threading import RLock
from typing import Any, Dict, Optional

import xxhash

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A single cache entry with metadata."""

    value: Any
    content_hash: str
    timestamp: float

    def is_valid(self, max_age_seconds: int) -> bool:
        """Check if cache entry is still valid based on age."""
        age = time.time() - self.timestamp
        return age < max_age_seconds


@dataclass
class CacheStatistics:
    """Statistics for cache performance monitoring."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    puts: int = 0

    @property
    def total_requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.total_requests
        if total == 0:
            return 0.0
        return self.hits / total

    def record_hit(self) -> None:
        self.hits += 1

    def record_miss(self) -> None:
        self.misses += 1

    def record_eviction(self) -> None:
        self.evictions += 1

    def record_put(self) -> None:
        self.puts += 1


class AnalysisCache:
    """
    Thread-safe LRU cache for analysis results.

    Keys combine the operation name, an xxhash64 digest of the content and
    the optional extension hint, so a changed buffer never hits a stale entry.
    """

    def __init__(self, max_size: int = 256, max_age_seconds: int = 600):
        """
        Initialize the cache.

        Args:
            max_size: Maximum number of entries to cache
            max_age_seconds: Maximum age of cache entries in seconds
        """
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.max_size = max_size
        self.max_age_seconds = max_age_seconds
        self._cache: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = RLock()
        self.statistics = CacheStatistics()

        logger.info(
            f"Initialized AnalysisCache with max_size={max_size}, "
            f"max_age_seconds={max_age_seconds}"
        )

    @staticmethod
    def content_hash(content: str) -> str:
        """Hex digest identifying a buffer snapshot."""
        return xxhash.xxh64(content.encode("utf-8", errors="surrogatepass")).hexdigest()

    def _get_cache_key(self, operation: str, content: str, hint: Optional[str] = None) -> str:
        return f"{operation}:{hint or ''}:{self.content_hash(content)}"

    def get(self, operation: str, content: str, hint: Optional[str] = None) -> Optional[Any]:
        """
        Retrieve a cached result.

        Args:
            operation: Name of the analysis operation
            content: The buffer the result was computed from
            hint: Optional extension hint used for the computation

        Returns:
            Cached value or None if not found/expired
        """
        key = self._get_cache_key(operation, content, hint)

        with self._lock:
            entry = self._cache.get(key)
            if entry is not None:
                if entry.is_valid(self.max_age_seconds):
                    self._cache.move_to_end(key)
                    self.statistics.record_hit()
                    logger.debug(f"Cache hit for {operation} key={entry.content_hash[:8]}...")
                    return entry.value
                del self._cache[key]
                logger.debug(f"Removed expired entry for {operation}")

            self.statistics.record_miss()
            return None

    def put(self, operation: str, content: str, value: Any, hint: Optional[str] = None) -> None:
        """
        Store a result in the cache.

        Args:
            operation: Name of the analysis operation
            content: The buffer the result was computed from
            value: The result to cache
            hint: Optional extension hint used for the computation
        """
        key = self._get_cache_key(operation, content, hint)

        with self._lock:
            if key in self._cache:
                del self._cache[key]
            elif len(self._cache) >= self.max_size:
                oldest_key = next(iter(self._cache))
                del self._cache[oldest_key]
                self.statistics.record_eviction()
                logger.debug(f"Evicted oldest entry: key={oldest_key[:24]}...")

            self._cache[key] = CacheEntry(
                value=value,
                content_hash=self.content_hash(content),
                timestamp=time.time(),
            )
            self.statistics.record_put()

    def clear(self) -> None:
        """Clear all entries from the cache."""
        with self._lock:
            self._cache.clear()
            logger.info("Analysis cache cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def get_info(self) -> Dict[str, Any]:
        """Get cache information and statistics."""
        with self._lock:
            return {
                "size": len(self._cache),
                "max_size": self.max_size,
                "max_age_seconds": self.max_age_seconds,
                "hit_rate": self.statistics.hit_rate,
                "statistics": {
                    "hits": self.statistics.hits,
                    "misses": self.statistics.misses,
                    "evictions": self.statistics.evictions,
                    "puts": self.statistics.puts,
                    "total_requests": self.statistics.total_requests,
                },
            }

    def cleanup_expired(self) -> int:
        """Remove expired entries and return how many were dropped."""
        with self._lock:
            expired_keys = [
                key
                for key, entry in self._cache.items()
                if not entry.is_valid(self.max_age_seconds)
            ]
            for key in expired_keys:
                del self._cache[key]

            if expired_keys:
                logger.info(f"Cleaned up {len(expired_keys)} expired cache entries")
            return len(expired_keys)
