"""Small expiring key/value cache for derived results."""

from __future__ import annotations

import re
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

V = TypeVar("V")


@dataclass
class _Slot(Generic[V]):
    value: V
    expires_at: float


class TTLCache(Generic[V]):
    """Per-entry expiry with oldest-first eviction at capacity."""

    def __init__(
        self,
        max_size: int = 100,
        default_ttl: float = 300.0,
        *,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.max_size = max_size
        self.default_ttl = default_ttl
        self._clock = clock or time.monotonic
        self._slots: "OrderedDict[str, _Slot[V]]" = OrderedDict()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[V]:
        slot = self._slots.get(key)
        if slot is None:
            self._misses += 1
            return None
        if self._clock() >= slot.expires_at:
            del self._slots[key]
            self._misses += 1
            return None
        self._slots.move_to_end(key)
        self._hits += 1
        return slot.value

    def set(self, key: str, value: V, ttl: Optional[float] = None) -> None:
        if key in self._slots:
            del self._slots[key]
        elif len(self._slots) >= self.max_size:
            self._slots.popitem(last=False)
        lifetime = self.default_ttl if ttl is None else ttl
        self._slots[key] = _Slot(value=value, expires_at=self._clock() + lifetime)

    def has(self, key: str) -> bool:
        slot = self._slots.get(key)
        if slot is None:
            return False
        if self._clock() >= slot.expires_at:
            del self._slots[key]
            return False
        return True

    def delete(self, key: str) -> bool:
        return self._slots.pop(key, None) is not None

    def clear(self) -> None:
        self._slots.clear()
        self._hits = 0
        self._misses = 0

    def invalidate_by_pattern(self, pattern: str) -> int:
        """Delete every key matching the regular expression ``pattern``."""
        compiled = re.compile(pattern)
        doomed = [key for key in self._slots if compiled.search(key)]
        for key in doomed:
            del self._slots[key]
        return len(doomed)

    def cleanup(self) -> int:
        """Drop expired entries and return how many were removed."""
        now = self._clock()
        expired = [key for key, slot in self._slots.items() if now >= slot.expires_at]
        for key in expired:
            del self._slots[key]
        return len(expired)

    def stats(self) -> Dict[str, Any]:
        lookups = self._hits + self._misses
        return {
            "size": len(self._slots),
            "max_size": self.max_size,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self._hits / lookups if lookups else 0.0,
        }

    def __len__(self) -> int:
        return len(self._slots)


__all__ = ["TTLCache"]
