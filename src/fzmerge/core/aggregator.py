"""Candidate aggregation.

Queries every registered provider for one cycle, pre-filters the raw
candidates with the fuzzy matcher, blends in history for history-tracked
providers and builds the attribution index.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Optional

from fzmerge.core.attribution import AttributionIndex
from fzmerge.core.config import FuzzyConfig
from fzmerge.core.context import CycleContext, HistoryStore
from fzmerge.core.matcher import match
from fzmerge.core.prefix import PrefixResolver
from fzmerge.domain.protocols import Provider
from fzmerge.domain.types import InputState, ProviderCommand
from fzmerge.logger import get_logger
from fzmerge.utils import dedupe, is_string_list

logger = get_logger("core.aggregator")


def is_no_prefix(state: InputState, match_string: str, trigger_symbols: Sequence[str]) -> bool:
    """True when only a trigger symbol has been typed (e.g. ``obj.``)."""
    if match_string:
        return False
    before = state.before_cursor
    return any(symbol and before.endswith(symbol) for symbol in trigger_symbols)


class CandidateAggregator:
    """Builds the provider to candidates map for each cycle."""

    def __init__(self, config: FuzzyConfig, history: HistoryStore) -> None:
        self._config = config
        self._history = history

    def refresh(
        self,
        provider_ids: Sequence[str],
        providers: Mapping[str, Provider],
        state: InputState,
        resolver: Optional[PrefixResolver] = None,
    ) -> CycleContext:
        """
        Run the fetch/filter/blend pass for every provider.

        Args:
            provider_ids: Normalized registry order
            providers: Provider id to provider callable
            state: Current input snapshot
            resolver: Prefix resolver already built for this exact state and
                registry, reused so provider prefixes are asked only once

        Returns:
            A fully built CycleContext; nothing is published before it is complete
        """
        if resolver is None:
            resolver = PrefixResolver(provider_ids, providers, state)
        match_string = resolver.match_string
        no_prefix = is_no_prefix(state, match_string, self._config.trigger_symbols)

        candidates_by_provider: dict[str, list[str]] = {}
        for provider_id in resolver.provider_ids:
            candidates_by_provider[provider_id] = self._collect(
                provider_id, providers.get(provider_id), resolver, no_prefix
            )

        attribution = AttributionIndex.build(resolver.provider_ids, candidates_by_provider)
        counts = {pid: len(found) for pid, found in candidates_by_provider.items()}
        logger.debug(f"Cycle match_string={match_string!r} no_prefix={no_prefix} counts={counts}")
        return CycleContext(
            state=state,
            match_string=match_string,
            no_prefix=no_prefix,
            provider_ids=resolver.provider_ids,
            candidates_by_provider=candidates_by_provider,
            attribution=attribution,
            resolver=resolver,
        )

    def _fetch(self, provider_id: str, provider: Provider, prefix: str) -> Any:
        try:
            return provider(ProviderCommand.CANDIDATES.value, prefix)
        except Exception:
            logger.exception(f"Provider {provider_id!r} failed to return candidates")
            return None

    def _collect(
        self,
        provider_id: str,
        provider: Provider | None,
        resolver: PrefixResolver,
        no_prefix: bool,
    ) -> list[str]:
        if provider is None:
            logger.warning(f"Provider {provider_id!r} is not registered, skipping")
            return []

        fetch_prefix = resolver.fetch_prefix(provider_id)
        if fetch_prefix is None:
            logger.debug(f"Provider {provider_id!r} has no prefix at the cursor, skipping")
            return []

        raw = self._fetch(provider_id, provider, fetch_prefix)
        if raw is None:
            raw = []
        if not is_string_list(raw):
            logger.warning(
                f"Provider {provider_id!r} returned malformed candidates ({type(raw).__name__}), discarding"
            )
            return []

        candidates = list(raw)
        if candidates and not no_prefix and provider_id not in self._config.passthrough_providers:
            candidates = match(candidates, resolver.insert_prefix(provider_id), self._config.ignore_case)

        if provider_id in self._config.history_providers:
            candidates = self._history.blend(provider_id, candidates)

        return dedupe(candidates)
