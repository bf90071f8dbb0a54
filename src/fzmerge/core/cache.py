"""In-memory cache with change detection.

Backs the provider registry (normalized provider list keyed by the raw
configuration) and the compiled fuzzy patterns.
"""

from typing import TypeVar

from fzmerge.domain.protocols import Cache

K = TypeVar("K")
V = TypeVar("V")


class MemoryCache(Cache[K, V]):
    """Dictionary-backed cache with no expiration.

    Example:
        >>> cache = MemoryCache[str, tuple]()
        >>> cache.set("providers", ("words", "paths"))
        >>> cache.has_changed("providers", ("words", "paths"))
        False
        >>> cache.has_changed("providers", ("words",))
        True
    """

    def __init__(self, max_entries: int | None = None) -> None:
        """
        Args:
            max_entries: When set, the oldest entry is evicted once the cache
                grows past this size.
        """
        self._data: dict[K, V] = {}
        self._max_entries = max_entries

    def get(self, key: K) -> V | None:
        return self._data.get(key)

    def set(self, key: K, value: V) -> None:
        self._data[key] = value
        if self._max_entries is not None and len(self._data) > self._max_entries:
            oldest = next(iter(self._data))
            del self._data[oldest]

    def clear(self, key: K | None = None) -> None:
        """Clear cache entries.

        Args:
            key: If provided, clear only this key. If None, clear all entries.
        """
        if key is None:
            self._data.clear()
        else:
            self._data.pop(key, None)

    def has_changed(self, key: K, value: V) -> bool:
        cached = self.get(key)
        return cached is None or cached != value

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: K) -> bool:
        return key in self._data
