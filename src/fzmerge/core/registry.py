"""Provider registry.

Flattens the configured provider list (identifiers and provider groups)
into one ordered, duplicate-free tuple of provider identifiers.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Any

from fzmerge.core.cache import MemoryCache
from fzmerge.domain.types import ProviderGroup
from fzmerge.logger import get_logger
from fzmerge.utils import dedupe

logger = get_logger("core.registry")

# Group members must look like a provider name; group keywords such as
# ":with" or ":separate" and non-string members are dropped.
PROVIDER_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_.-]*$")

AGGREGATE_PROVIDER = "fzmerge"


def is_provider_name(value: Any) -> bool:
    """Return True when ``value`` follows the provider naming convention."""
    return isinstance(value, str) and PROVIDER_NAME_PATTERN.match(value) is not None


def _is_group(entry: Any) -> bool:
    return isinstance(entry, (ProviderGroup, list, tuple))


def _freeze(entry: Any) -> Any:
    """Hashable snapshot of a configuration entry, used as the cache key."""
    if _is_group(entry):
        return tuple(_freeze(member) for member in entry)
    return entry


def normalize(config: Iterable[Any]) -> tuple[str, ...]:
    """
    Flatten and deduplicate a provider configuration.

    Args:
        config: Provider identifiers and/or provider groups

    Returns:
        Ordered tuple of provider identifiers, first occurrence wins
    """
    flattened: list[str] = []
    for entry in config:
        if _is_group(entry):
            for member in entry:
                if is_provider_name(member):
                    flattened.append(member)
                else:
                    logger.debug(f"Dropping group member {member!r}")
        else:
            flattened.append(entry)

    return tuple(
        provider for provider in dedupe(flattened) if provider != AGGREGATE_PROVIDER
    )


class BackendRegistry:
    """Caches the normalized provider list until the configuration changes.

    Example:
        >>> registry = BackendRegistry()
        >>> registry.providers(["words", ProviderGroup("paths", ":with", "words")])
        ('words', 'paths')
    """

    _CACHE_KEY = "config"

    def __init__(self) -> None:
        self._config_cache: MemoryCache[str, tuple] = MemoryCache()
        self._normalized: tuple[str, ...] = ()

    def providers(self, config: Sequence[Any]) -> tuple[str, ...]:
        """Return the normalized providers for ``config``, recomputing only on change."""
        snapshot = _freeze(list(config))
        if self._config_cache.has_changed(self._CACHE_KEY, snapshot):
            self._normalized = normalize(config)
            self._config_cache.set(self._CACHE_KEY, snapshot)
            logger.debug(f"Provider registry rebuilt: {list(self._normalized)}")
        return self._normalized

    def invalidate(self) -> None:
        self._config_cache.clear()
        self._normalized = ()
