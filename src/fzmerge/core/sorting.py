"""Ranking of the merged candidate pool.

``SortEngine.sort`` applies the configured strategy (none, alphabetic or
score), then prefix promotion, then the optional global sort hook.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Optional

from fzmerge.core.config import FuzzyConfig
from fzmerge.core.context import CycleContext
from fzmerge.core.scoring import get_scorer
from fzmerge.domain.errors import ScoringError
from fzmerge.domain.protocols import ScoreTieHook, ScoringFunction, SortHook
from fzmerge.domain.types import SortingBackend
from fzmerge.logger import get_logger
from fzmerge.utils import dedupe

logger = get_logger("core.sorting")


def promote_prefix(candidates: Sequence[str], match_string: str) -> list[str]:
    """
    Move the candidates sharing the longest prefix with ``match_string`` to the front.

    The match string is shortened one character at a time until some
    candidate starts with it; strings shorter than two characters are never
    tried. Promoted candidates are sorted alphabetically, the rest keep
    their order.

    Example:
        >>> promote_prefix(["foobar", "zzz", "foo"], "foo")
        ['foo', 'foobar', 'zzz']
    """
    check = match_string
    promoted: list[str] = []
    while len(check) > 1 and not promoted:
        promoted = [candidate for candidate in candidates if candidate.startswith(check)]
        if not promoted:
            check = check[:-1]

    if not promoted:
        return list(candidates)

    promoted_set = set(promoted)
    rest = [candidate for candidate in candidates if candidate not in promoted_set]
    return sorted(promoted) + rest


class SortEngine:
    """Ranks candidates under the configured strategy.

    Args:
        config: Pipeline configuration
        scorer: Scoring function override; defaults to the one named by
            ``config.scoring_function``
        sort_hook: Receives the final list, its result is used verbatim
        score_tie_hook: Reorders candidates within one score bucket
    """

    def __init__(
        self,
        config: FuzzyConfig,
        scorer: Optional[ScoringFunction] = None,
        sort_hook: Optional[SortHook] = None,
        score_tie_hook: Optional[ScoreTieHook] = None,
    ) -> None:
        self._config = config
        self._scorer = scorer
        self._sort_hook = sort_hook
        self._score_tie_hook = score_tie_hook

    def _resolve_scorer(self) -> Optional[ScoringFunction]:
        if self._scorer is None:
            try:
                self._scorer = get_scorer(self._config.scoring_function, self._config.score_cutoff)
            except ScoringError as e:
                logger.warning(str(e))
        return self._scorer

    def sort(self, merged: Sequence[str], context: Optional[CycleContext]) -> list[str]:
        """
        Rank ``merged`` for the cycle described by ``context``.

        Args:
            merged: Candidates in accumulation (registry) order
            context: The cycle the candidates belong to; without one nothing
                is ranked and only the sort hook applies

        Returns:
            Ranked candidates without duplicates
        """
        candidates = dedupe(merged)

        if context is None or context.no_prefix:
            ranked = candidates
        else:
            ranked = self._rank(candidates, context)
            if self._config.prefix_on_top:
                ranked = promote_prefix(ranked, context.match_string)

        if self._sort_hook is not None:
            ranked = list(self._sort_hook(ranked))
        return ranked

    def _rank(self, candidates: list[str], context: CycleContext) -> list[str]:
        sorting = self._config.sorting
        if sorting is None:
            logger.warning(
                f"Unknown sorting backend {self._config.sorting_backend!r}, keeping accumulation order"
            )
            return candidates
        if sorting is SortingBackend.NONE:
            return candidates
        if sorting is SortingBackend.ALPHABETIC:
            return sorted(candidates)
        return self._sort_by_score(candidates, context)

    def _sort_by_score(self, candidates: list[str], context: CycleContext) -> list[str]:
        scorer = self._resolve_scorer()
        if scorer is None:
            return candidates

        prefixes: dict[Optional[str], str] = {}
        buckets: dict[int, list[str]] = {}
        for candidate in candidates:
            owner = context.attribution.lookup(candidate)
            if owner not in prefixes:
                prefixes[owner] = (
                    context.resolver.match_prefix(owner) if owner is not None else context.match_string
                )
            try:
                score = scorer(candidate, prefixes[owner])
                if score is None or not math.isfinite(float(score)):
                    continue
                bucket_key = int(score)
            except Exception:
                logger.debug(f"Scoring failed for {candidate!r}, dropping it")
                continue
            buckets.setdefault(bucket_key, []).append(candidate)

        ranked: list[str] = []
        for score in sorted(buckets, reverse=True):
            bucket = sorted(buckets[score], key=lambda candidate: (len(candidate), candidate))
            if self._score_tie_hook is not None:
                bucket = list(self._score_tie_hook(bucket))
            ranked.extend(bucket)
        return ranked
