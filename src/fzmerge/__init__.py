"""fzmerge: fuzzy, ranked completion over several completion providers."""

from fzmerge.core.config import FuzzyConfig, load_config
from fzmerge.core.session import FuzzySession
from fzmerge.domain.types import InputState, ProviderGroup, ProviderKind, SortingBackend

__all__ = [
    "FuzzyConfig",
    "FuzzySession",
    "InputState",
    "ProviderGroup",
    "ProviderKind",
    "SortingBackend",
    "load_config",
]

__version__ = "0.1.0"
