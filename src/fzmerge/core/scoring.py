"""Scoring functions for the ``score`` sorting backend.

A scoring function takes ``(candidate, prefix)`` and returns a number
(higher is better) or None when the candidate should not be listed.
"""

from __future__ import annotations

from functools import partial
from typing import Callable, Optional

from rapidfuzz import fuzz

from fzmerge.domain.errors import ScoringError
from fzmerge.domain.protocols import ScoringFunction

_WORD_SEPARATORS = frozenset("_-./ :")

CONSECUTIVE_BONUS = 5.0
BOUNDARY_BONUS = 4.0
MATCH_POINT = 1.0
LEADING_GAP_PENALTY = 1.0
MAX_LEADING_PENALTY = 3.0


def _is_boundary(candidate: str, index: int) -> bool:
    if index == 0:
        return True
    previous = candidate[index - 1]
    current = candidate[index]
    return previous in _WORD_SEPARATORS or (current.isupper() and previous.islower())


def flex_score(candidate: str, prefix: str) -> Optional[float]:
    """
    Score ``candidate`` by how well ``prefix`` matches it as a subsequence.

    Matched characters earn a point, runs of consecutive matches and hits on
    word boundaries (start, after a separator, camelCase humps) earn bonuses,
    and a late first match is penalized.

    Returns:
        The score, or None when ``prefix`` is not a subsequence of ``candidate``
    """
    if not prefix:
        return 0.0

    fold = prefix == prefix.lower()
    haystack = candidate.lower() if fold else candidate

    score = 0.0
    position = 0
    previous = -2
    first = None
    for char in prefix:
        index = haystack.find(char, position)
        if index < 0:
            return None
        if first is None:
            first = index
        score += MATCH_POINT
        if index == previous + 1:
            score += CONSECUTIVE_BONUS
        if _is_boundary(candidate, index):
            score += BOUNDARY_BONUS
        previous = index
        position = index + 1

    score -= min(first * LEADING_GAP_PENALTY, MAX_LEADING_PENALTY)
    return score


def rapidfuzz_score(candidate: str, prefix: str, score_cutoff: float = 50.0) -> Optional[float]:
    """Weighted rapidfuzz ratio of ``prefix`` against ``candidate``; None below the cutoff."""
    if not prefix:
        return 0.0
    score = fuzz.WRatio(prefix, candidate, score_cutoff=score_cutoff)
    return score if score > 0 else None


_SCORERS: dict[str, Callable[..., Optional[float]]] = {
    "flex": flex_score,
    "rapidfuzz": rapidfuzz_score,
}


def register_scorer(name: str, scorer: ScoringFunction) -> None:
    _SCORERS[name.strip().lower()] = scorer


def available_scorers() -> list[str]:
    return sorted(_SCORERS)


def get_scorer(name: str, score_cutoff: float = 50.0) -> ScoringFunction:
    """
    Look up a scoring function by name.

    Raises:
        ScoringError: If no scorer is registered under ``name``
    """
    key = name.strip().lower()
    scorer = _SCORERS.get(key)
    if scorer is None:
        raise ScoringError(f"Unknown scoring function {name!r}, expected one of {available_scorers()}")
    if scorer is rapidfuzz_score:
        return partial(rapidfuzz_score, score_cutoff=score_cutoff)
    return scorer
