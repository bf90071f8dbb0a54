"""The aggregate completion provider.

``FuzzySession`` is registered with the host as a single provider. Behind it,
every cycle runs registry, prefix resolution, aggregation, attribution and
sorting over the real providers.

Lifecycle:
    ``start()`` creates the session history, ``close()`` clears it. The
    session is also a context manager.

Host extension points:
    ``sort(candidates)`` is the transform the host applies before display,
    ``pre_insert(candidate)`` returns the prefix the host should replace when
    the candidate is committed, and ``match_positions(candidate)`` tells a
    renderer which characters matched.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from fzmerge.core.aggregator import CandidateAggregator, is_no_prefix
from fzmerge.core.config import FuzzyConfig
from fzmerge.core.context import CycleContext, HistoryStore
from fzmerge.core.matcher import match_positions
from fzmerge.core.prefix import PrefixResolver
from fzmerge.core.registry import AGGREGATE_PROVIDER, BackendRegistry
from fzmerge.core.sorting import SortEngine
from fzmerge.domain.protocols import Provider, ScoreTieHook, ScoringFunction, SortHook
from fzmerge.domain.types import InputState, ProviderCommand
from fzmerge.logger import get_logger

logger = get_logger("core.session")


class FuzzySession:
    """Session-scoped state and the provider commands the host calls.

    Args:
        providers: Provider id to provider callable
        config: Pipeline configuration; ``config.providers`` selects and orders
            the registry, otherwise every provider in ``providers`` is used
        scorer: Scoring function override for the score backend
        sort_hook: Global sort hook applied to the final ranking
        score_tie_hook: Reorders candidates sharing a score

    Example:
        >>> from fzmerge.providers import WordListProvider
        >>> with FuzzySession({"words": WordListProvider(["foobar", "foo"])}) as session:
        ...     session.complete(InputState.at_end("fo"))
        ['foo', 'foobar']
    """

    name = AGGREGATE_PROVIDER

    def __init__(
        self,
        providers: Mapping[str, Provider],
        config: Optional[FuzzyConfig] = None,
        *,
        scorer: Optional[ScoringFunction] = None,
        sort_hook: Optional[SortHook] = None,
        score_tie_hook: Optional[ScoreTieHook] = None,
    ) -> None:
        self._providers: dict[str, Provider] = dict(providers)
        self.config = config or FuzzyConfig()
        self._registry = BackendRegistry()
        self._sort_engine = SortEngine(
            self.config,
            scorer=scorer,
            sort_hook=sort_hook,
            score_tie_hook=score_tie_hook,
        )
        self._history: Optional[HistoryStore] = None
        self._aggregator: Optional[CandidateAggregator] = None
        self._cycle: Optional[CycleContext] = None
        self._resolver: Optional[PrefixResolver] = None
        self._state = InputState("", 0)

    # Lifecycle

    @property
    def active(self) -> bool:
        return self._history is not None

    def start(self) -> CandidateAggregator:
        if self._aggregator is not None:
            return self._aggregator
        self._history = HistoryStore()
        self._aggregator = CandidateAggregator(self.config, self._history)
        logger.info(f"Completion session started with providers {list(self.provider_ids)}")
        return self._aggregator

    def close(self) -> None:
        if self._history is not None:
            self._history.clear()
        self._history = None
        self._aggregator = None
        self._cycle = None
        self._resolver = None
        logger.info("Completion session closed")

    def __enter__(self) -> FuzzySession:
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # Registry

    def register_provider(self, provider_id: str, provider: Provider) -> None:
        self._providers[provider_id] = provider
        self._resolver = None

    @property
    def providers(self) -> Mapping[str, Provider]:
        return self._providers

    @property
    def provider_ids(self) -> tuple[str, ...]:
        configured = self.config.providers or list(self._providers)
        return self._registry.providers(configured)

    @property
    def history(self) -> Optional[HistoryStore]:
        return self._history

    @property
    def cycle(self) -> Optional[CycleContext]:
        """Results of the last completed cycle."""
        return self._cycle

    # Cycle

    def update(self, state: InputState) -> None:
        """Record the host's latest input snapshot."""
        self._state = state

    def _resolver_for(self, state: InputState) -> PrefixResolver:
        """Resolver for ``state``, shared by the prefix command and the cycle for the same input."""
        provider_ids = self.provider_ids
        resolver = self._resolver
        if resolver is None or resolver.state != state or resolver.provider_ids != provider_ids:
            resolver = PrefixResolver(provider_ids, self._providers, state)
            self._resolver = resolver
        return resolver

    def prefix(self, state: Optional[InputState] = None) -> Optional[str]:
        """
        Answer the ``prefix`` command.

        Returns:
            The match string, ``""`` when only a trigger symbol was typed,
            or None when there is nothing to complete
        """
        state = state or self._state
        match_string = self._resolver_for(state).match_string
        if match_string:
            return match_string
        if is_no_prefix(state, match_string, self.config.trigger_symbols):
            return ""
        return None

    def refresh(self, state: Optional[InputState] = None) -> CycleContext:
        """Run one cycle and publish its context once fully built."""
        if state is not None:
            self._state = state
        aggregator = self._aggregator or self.start()
        cycle = aggregator.refresh(
            self.provider_ids,
            self._providers,
            self._state,
            resolver=self._resolver_for(self._state),
        )
        self._cycle = cycle
        return cycle

    def candidates(self, state: Optional[InputState] = None) -> list[str]:
        """Answer the ``candidates`` command: merged candidates in accumulation order."""
        return self.refresh(state).merged

    def sort(self, candidates: list[str]) -> list[str]:
        """The host's sort/transform hook."""
        return self._sort_engine.sort(candidates, self._cycle)

    def complete(self, state: Optional[InputState] = None) -> list[str]:
        """Run a cycle and return the ranked candidates."""
        return self.sort(self.candidates(state))

    # Per-candidate lookups

    def owner(self, candidate: str) -> Optional[str]:
        if self._cycle is None:
            return None
        return self._cycle.attribution.lookup(candidate)

    def _ask_owner(self, command: ProviderCommand, candidate: str) -> Any:
        owner = self.owner(candidate)
        provider = self._providers.get(owner) if owner is not None else None
        if provider is None:
            return None
        try:
            return provider(command.value, candidate)
        except Exception:
            logger.exception(f"Provider {owner!r} failed to answer {command.value} for {candidate!r}")
            return None

    def annotation(self, candidate: str) -> Optional[str]:
        """Owning provider's annotation, suffixed with the provider name when enabled."""
        owner = self.owner(candidate)
        if owner is None:
            return None
        text = self._ask_owner(ProviderCommand.ANNOTATION, candidate)
        text = text if isinstance(text, str) else ""
        if self.config.show_annotation:
            provider = self._providers.get(owner)
            display = getattr(provider, "display_name", None) or owner
            text += self.config.format_annotation(display)
        return text

    def doc(self, candidate: str) -> Any:
        return self._ask_owner(ProviderCommand.DOC, candidate)

    def pre_insert(self, candidate: str) -> Optional[str]:
        """Prefix the host must treat as typed before committing ``candidate``."""
        owner = self.owner(candidate)
        if owner is None or self._cycle is None:
            return None
        return self._cycle.resolver.insert_prefix(owner)

    def match_positions(self, candidate: str) -> list[int]:
        """Indexes of ``candidate`` matched by its owner's match prefix."""
        owner = self.owner(candidate)
        if owner is None or self._cycle is None:
            return []
        prefix = self._cycle.resolver.match_prefix(owner)
        return match_positions(candidate, prefix, self.config.ignore_case)

    def __call__(self, command: str, arg: Any = None) -> Any:
        """Provider protocol entry point, so the session can be registered like any provider."""
        state = arg if isinstance(arg, InputState) else None
        if command == ProviderCommand.PREFIX.value:
            return self.prefix(state)
        if command == ProviderCommand.CANDIDATES.value:
            return self.candidates(state)
        if command == ProviderCommand.ANNOTATION.value:
            return self.annotation(arg)
        if command == ProviderCommand.DOC.value:
            return self.doc(arg)
        return None
