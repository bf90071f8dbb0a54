"""
Autocomplete overlay that serves a ``FuzzySession`` to a textual ``Input``.
"""

from __future__ import annotations

from textual.widgets import Input
from textual_autocomplete import AutoComplete, DropdownItem, TargetState

from fzmerge.core.session import FuzzySession
from fzmerge.logger import get_logger
from fzmerge.presentation.completion import (
    CompletionApplier,
    CompletionRequest,
    FuzzyCompletionStrategy,
)

logger = get_logger("autocomplete.widget")


class FuzzyAutoComplete(AutoComplete):
    """Dropdown of merged, ranked candidates from every registered provider.

    The session filters and ranks; the widget only displays that order and
    applies the chosen value through the session's pre-insert hook.
    """

    def __init__(self, target: Input, session: FuzzySession, **kwargs) -> None:
        self.session = session
        self._strategy = FuzzyCompletionStrategy(session)
        self._applier = CompletionApplier(session)
        super().__init__(
            target=target,
            candidates=self._collect_candidates,
            prevent_default_enter=True,
            **kwargs,
        )

    def on_mount(self) -> None:
        logger.info(f"FuzzyAutoComplete mounted (providers={list(self.session.provider_ids)})")

    def _collect_candidates(self, state: TargetState) -> list[DropdownItem]:
        request = CompletionRequest(state)
        if not self._strategy.can_handle(request):
            return []
        candidates = self._strategy.get_candidates(request)
        logger.debug(f"Collected {len(candidates)} completion candidates")
        return candidates

    def get_search_string(self, target_state: TargetState) -> str:
        search = self._strategy.search_string(CompletionRequest(target_state))
        logger.debug(f"Derived search string={search!r}")
        return search

    def get_matches(
        self,
        target_state: TargetState,
        candidates: list[DropdownItem],
        search_string: str,
    ) -> list[DropdownItem]:
        """Keep the session's order; its candidates are already filtered."""
        return candidates

    def should_show_dropdown(self, search_string: str) -> bool:
        if self.option_list.option_count == 0:
            return False
        state = TargetState(text=self.target.value, cursor_position=self.target.cursor_position)
        return self._strategy.can_handle(CompletionRequest(state))

    def apply_completion(self, value: str, state: TargetState) -> None:
        result = self._applier.apply(value, state)
        self.target.value = result.text
        self.target.cursor_position = result.cursor
        logger.info(f"Applied completion; new cursor={result.cursor}")
