"""Cycle- and session-scoped state.

``CycleContext`` holds everything one input event produces and is replaced
as a whole by the next cycle. ``HistoryStore`` lives for the whole session.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from fzmerge.domain.types import InputState
from fzmerge.utils import dedupe

if TYPE_CHECKING:
    from fzmerge.core.attribution import AttributionIndex
    from fzmerge.core.prefix import PrefixResolver


@dataclass
class CycleContext:
    """Results of one completion cycle.

    Attributes:
        state: Input snapshot the cycle was computed for
        match_string: Most generic prefix typed by the user
        no_prefix: True when only a trigger symbol was typed
        provider_ids: Registry order used for the cycle
        candidates_by_provider: Provider id to its deduplicated candidates
        attribution: Reverse candidate to provider index
        resolver: Prefix views used by scoring and insertion
    """

    state: InputState
    match_string: str
    no_prefix: bool
    provider_ids: tuple[str, ...]
    candidates_by_provider: dict[str, list[str]]
    attribution: AttributionIndex
    resolver: PrefixResolver

    @property
    def merged(self) -> list[str]:
        """All candidates in registry order, without cross-provider duplicates."""
        return dedupe(
            candidate
            for provider_id in self.provider_ids
            for candidate in self.candidates_by_provider.get(provider_id, [])
        )


@dataclass
class HistoryStore:
    """Candidates remembered across cycles for history-tracked providers."""

    _entries: dict[str, list[str]] = field(default_factory=dict)

    def get(self, provider_id: str) -> list[str]:
        return list(self._entries.get(provider_id, []))

    def blend(self, provider_id: str, fresh: Iterable[str]) -> list[str]:
        """Prepend the stored entry to ``fresh``, dedupe, and store the result."""
        merged = dedupe([*self._entries.get(provider_id, []), *fresh])
        self._entries[provider_id] = merged
        return list(merged)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
