"""Domain layer: types, protocols and errors shared by every component."""

from fzmerge.domain.errors import ConfigError, FzmergeError, ProviderError, ScoringError
from fzmerge.domain.protocols import Cache, Provider, ScoreTieHook, ScoringFunction, SortHook
from fzmerge.domain.types import (
    InputState,
    ProviderCommand,
    ProviderGroup,
    ProviderKind,
    SortingBackend,
)

__all__ = [
    "Cache",
    "ConfigError",
    "FzmergeError",
    "InputState",
    "Provider",
    "ProviderCommand",
    "ProviderError",
    "ProviderGroup",
    "ProviderKind",
    "ScoreTieHook",
    "ScoringError",
    "ScoringFunction",
    "SortHook",
    "SortingBackend",
]
