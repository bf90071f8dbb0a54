"""Per-provider prefix views.

Every provider sees the typed text through four prefixes:

- ``complete_prefix``: what the provider considers typed; the longest one
  across providers defines the cycle's match string
- ``fetch_prefix``: sent with the ``candidates`` command; None when the
  provider has no completion at the cursor, so it is not queried
- ``match_prefix``: used to fuzzily filter and score its candidates
- ``insert_prefix``: what the host must replace when a candidate is committed

Provider kinds override some of them through ``CAPABILITIES``; anything not
overridden falls back to the generic behavior in ``PrefixResolver``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable, Optional

from fzmerge.domain.protocols import Provider
from fzmerge.domain.types import InputState, ProviderCommand, ProviderKind
from fzmerge.logger import get_logger

logger = get_logger("core.prefix")

_SYMBOL_AT_CURSOR = re.compile(r"[\w$]*$")
_PATH_SEPARATOR = re.compile(r"[\\/]")

PrefixFn = Callable[["PrefixResolver", str], Optional[str]]


@dataclass(frozen=True)
class PrefixOverrides:
    """Kind-specific replacements for the generic prefix operations."""

    complete_prefix: Optional[PrefixFn] = None
    fetch_prefix: Optional[PrefixFn] = None
    match_prefix: Optional[PrefixFn] = None
    insert_prefix: Optional[PrefixFn] = None


def symbol_at_cursor(state: InputState) -> str:
    """Identifier characters immediately before the cursor."""
    found = _SYMBOL_AT_CURSOR.search(state.before_cursor)
    return found.group(0) if found else ""


def last_path_segment(path: str) -> str:
    return _PATH_SEPARATOR.split(path)[-1]


def normalize_prefix(value: Any) -> Optional[str]:
    """
    Reduce a provider's ``prefix`` answer to a string.

    Providers may answer with a string, a ``(text, flag)`` pair, or
    anything else meaning "not applicable here".
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (tuple, list)) and value and isinstance(value[0], str):
        return value[0]
    return None


CAPABILITIES: dict[ProviderKind, PrefixOverrides] = {
    ProviderKind.CODE: PrefixOverrides(
        complete_prefix=lambda resolver, _provider: symbol_at_cursor(resolver.state),
        match_prefix=lambda resolver, _provider: symbol_at_cursor(resolver.state),
    ),
    ProviderKind.PATH: PrefixOverrides(
        fetch_prefix=lambda resolver, provider: resolver.native_prefix(provider),
        match_prefix=lambda resolver, provider: last_path_segment(resolver.native_prefix(provider) or ""),
        insert_prefix=lambda resolver, provider: resolver.native_prefix(provider),
    ),
    ProviderKind.HISTORY: PrefixOverrides(
        fetch_prefix=lambda _resolver, _provider: "",
    ),
}


def provider_kind(provider: Any) -> ProviderKind:
    kind = getattr(provider, "kind", ProviderKind.GENERIC)
    if isinstance(kind, ProviderKind):
        return kind
    try:
        return ProviderKind(str(kind))
    except ValueError:
        return ProviderKind.GENERIC


class PrefixResolver:
    """Computes the prefix views of every provider for one cycle.

    A resolver is built per cycle; provider ``prefix`` answers are memoized
    for the lifetime of the resolver only.
    """

    def __init__(
        self,
        provider_ids: Sequence[str],
        providers: Mapping[str, Provider],
        state: InputState,
        capabilities: Mapping[ProviderKind, PrefixOverrides] = CAPABILITIES,
    ) -> None:
        self.provider_ids = tuple(provider_ids)
        self.providers = providers
        self.state = state
        self.capabilities = capabilities
        self._native: dict[str, Optional[str]] = {}
        self._match_string: Optional[str] = None

    def _override(self, provider_id: str, operation: str) -> Optional[PrefixFn]:
        provider = self.providers.get(provider_id)
        overrides = self.capabilities.get(provider_kind(provider))
        if overrides is None:
            return None
        return getattr(overrides, operation)

    def native_prefix(self, provider_id: str) -> Optional[str]:
        """The provider's own answer to the ``prefix`` command."""
        if provider_id in self._native:
            return self._native[provider_id]

        provider = self.providers.get(provider_id)
        prefix: Optional[str] = None
        if provider is not None:
            try:
                prefix = normalize_prefix(provider(ProviderCommand.PREFIX.value, self.state))
            except Exception:
                logger.exception(f"Provider {provider_id!r} failed to answer prefix")
        self._native[provider_id] = prefix
        return prefix

    def complete_prefix(self, provider_id: str) -> Optional[str]:
        override = self._override(provider_id, "complete_prefix")
        if override is not None:
            return override(self, provider_id)
        return self.native_prefix(provider_id)

    @property
    def match_string(self) -> str:
        """Text before the cursor covered by the longest provider prefix."""
        if self._match_string is None:
            length = 0
            for provider_id in self.provider_ids:
                prefix = self.complete_prefix(provider_id)
                if isinstance(prefix, str):
                    length = max(length, len(prefix))
            before = self.state.before_cursor
            self._match_string = before[len(before) - length :] if length else ""
        return self._match_string

    def fetch_prefix(self, provider_id: str) -> Optional[str]:
        """Prefix sent with ``candidates``, or None when the provider does not apply here."""
        if self.complete_prefix(provider_id) is None:
            return None
        override = self._override(provider_id, "fetch_prefix")
        if override is not None:
            return override(self, provider_id) or ""
        # One character widens the fetch; the fuzzy filter narrows it later
        return self.match_string[:1]

    def match_prefix(self, provider_id: str) -> str:
        override = self._override(provider_id, "match_prefix")
        if override is not None:
            return override(self, provider_id) or ""
        return self.match_string

    def insert_prefix(self, provider_id: str) -> str:
        override = self._override(provider_id, "insert_prefix")
        if override is not None:
            return override(self, provider_id) or ""
        return self.match_prefix(provider_id)
