"""Domain protocols - interfaces the pipeline depends on.

Providers, scoring functions and host hooks are all structural types so
plain functions, lambdas and test doubles satisfy them without subclassing.
"""

from typing import Any, Callable, Optional, Protocol, TypeVar

__all__ = [
    "Provider",
    "ScoringFunction",
    "SortHook",
    "ScoreTieHook",
    "Cache",
    "K",
    "V",
]

K = TypeVar("K", contravariant=False)
V = TypeVar("V", contravariant=False)

# score(candidate, prefix) -> score, or None when the candidate does not match
ScoringFunction = Callable[[str, str], Optional[float]]

# Receives the fully ranked list; its return value is used verbatim
SortHook = Callable[[list[str]], list[str]]

# Reorders the candidates that share one score bucket
ScoreTieHook = Callable[[list[str]], list[str]]


class Provider(Protocol):
    """Protocol for completion providers.

    A provider answers command-style calls:

    - ``"prefix"``: the text it considers typed (a string, a ``(text, flag)``
      pair, or ``None`` when it does not apply here)
    - ``"candidates"``: a sequence of candidate strings for ``arg``
    - ``"annotation"``: a short string describing candidate ``arg``
    - ``"doc"``: a documentation handle for candidate ``arg``

    Any error or malformed answer is treated as "no result".
    """

    def __call__(self, command: str, arg: Any = None) -> Any:
        ...


class Cache(Protocol[K, V]):
    """Protocol for caching implementations.

    Type Parameters:
        K: The key type
        V: The value type
    """

    def get(self, key: K) -> V | None:
        """Return the cached value for ``key``, or None."""
        ...

    def set(self, key: K, value: V) -> None:
        """Store ``value`` under ``key``."""
        ...

    def clear(self, key: K | None = None) -> None:
        """Clear one key, or every entry when ``key`` is None."""
        ...

    def has_changed(self, key: K, value: V) -> bool:
        """Return True when ``value`` differs from the cached one (or none is cached)."""
        ...
