"""In-memory component record cache with approximate-LRU eviction."""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional

from ..config import ConfigManager
from ..logging import get_logger
from ..models import ComponentRecord

EVICTION_FRACTION = 0.1


@dataclass
class CacheEntry:
    record: ComponentRecord
    access_count: int
    last_accessed: float
    sequence: int


class ComponentCache:
    """Caches ComponentRecords keyed by file path.

    Every operation is a no-op while caching is disabled in the configuration.
    The cache is not thread safe.
    """

    def __init__(
        self,
        config_manager: ConfigManager,
        *,
        max_size: Optional[int] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.config_manager = config_manager
        self._max_size = max_size
        self._clock = clock or time.monotonic
        self._entries: Dict[str, CacheEntry] = {}
        self._ticks = itertools.count()
        self._hits = 0
        self._misses = 0
        self.logger = get_logger("cache")

    @property
    def enabled(self) -> bool:
        return self.config_manager.config.cache_enabled

    @property
    def max_size(self) -> int:
        if self._max_size is not None:
            return self._max_size
        return self.config_manager.config.cache_max_size

    def put(self, record: ComponentRecord) -> None:
        if not self.enabled:
            return
        self._entries[record.file_path] = CacheEntry(
            record=record,
            access_count=1,
            last_accessed=self._clock(),
            sequence=next(self._ticks),
        )
        self._evict_if_needed()

    def get(self, file_path: str) -> Optional[ComponentRecord]:
        if not self.enabled:
            return None
        entry = self._entries.get(file_path)
        if entry is None:
            self._misses += 1
            return None
        self._hits += 1
        entry.access_count += 1
        entry.last_accessed = self._clock()
        entry.sequence = next(self._ticks)
        return entry.record

    def get_all(self) -> List[ComponentRecord]:
        if not self.enabled:
            return []
        return [entry.record for entry in self._entries.values()]

    def paths(self) -> List[str]:
        if not self.enabled:
            return []
        return list(self._entries)

    def invalidate(self, file_path: str) -> None:
        if not self.enabled:
            return
        self._entries.pop(file_path, None)

    def invalidate_all(self) -> None:
        if not self.enabled:
            return
        self._entries.clear()

    def is_fresh(self, file_path: str, candidate_modified: datetime) -> bool:
        """Return True when the cached record is at least as new as ``candidate_modified``."""
        if not self.enabled:
            return False
        entry = self._entries.get(file_path)
        if entry is None:
            return False
        return entry.record.last_modified >= candidate_modified

    def stats(self) -> Dict[str, float]:
        """Report cache occupancy and access counters.

        ``mean_access_count`` is the average number of accesses per entry, an
        access-density figure. ``hit_rate`` is hits over lookups.
        """
        size = len(self._entries) if self.enabled else 0
        total_accesses = sum(entry.access_count for entry in self._entries.values()) if self.enabled else 0
        lookups = self._hits + self._misses
        return {
            "size": size,
            "max_size": self.max_size,
            "total_accesses": total_accesses,
            "mean_access_count": total_accesses / size if size else 0.0,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self._hits / lookups if lookups else 0.0,
        }

    def __len__(self) -> int:
        return len(self._entries) if self.enabled else 0

    def _evict_if_needed(self) -> None:
        if len(self._entries) <= self.max_size:
            return
        count = max(1, int(len(self._entries) * EVICTION_FRACTION))
        oldest = sorted(
            self._entries.items(),
            key=lambda item: (item[1].last_accessed, item[1].sequence),
        )[:count]
        for file_path, _ in oldest:
            del self._entries[file_path]
        self.logger.debug("Evicted %d cache entries", len(oldest))


__all__ = ["CacheEntry", "ComponentCache", "EVICTION_FRACTION"]
