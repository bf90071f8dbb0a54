"""Reverse lookup from candidate text to the provider that produced it."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Optional


class AttributionIndex:
    """Candidate to owning provider map for one cycle.

    When two providers return the same text, the one earlier in registry
    order owns it.
    """

    def __init__(self, owners: Optional[dict[str, str]] = None) -> None:
        self._owners: dict[str, str] = owners or {}

    @classmethod
    def build(
        cls,
        provider_ids: Sequence[str],
        candidates_by_provider: Mapping[str, Sequence[str]],
    ) -> AttributionIndex:
        owners: dict[str, str] = {}
        for provider_id in provider_ids:
            for candidate in candidates_by_provider.get(provider_id, ()):
                owners.setdefault(candidate, provider_id)
        return cls(owners)

    def lookup(self, candidate: str) -> Optional[str]:
        """Return the owning provider of ``candidate``, or None."""
        return self._owners.get(candidate)

    def __contains__(self, candidate: object) -> bool:
        return candidate in self._owners

    def __len__(self) -> int:
        return len(self._owners)
