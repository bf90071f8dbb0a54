"""
textual-autocomplete adapter for the fuzzy completion session.

``FuzzyCompletionStrategy`` turns a ``FuzzySession`` cycle into dropdown
items; ``CompletionApplier`` commits a chosen value.
"""

from .fuzzy_completion import CompletionRequest, FuzzyCompletionStrategy
from .applier import ApplyResult, CompletionApplier

__all__ = [
    "ApplyResult",
    "CompletionApplier",
    "CompletionRequest",
    "FuzzyCompletionStrategy",
]
