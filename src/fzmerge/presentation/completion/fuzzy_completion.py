"""
Fuzzy multi-provider completion strategy.
"""

from __future__ import annotations

from dataclasses import dataclass

from textual_autocomplete import DropdownItem, TargetState

from fzmerge.core.session import FuzzySession
from fzmerge.domain.types import InputState
from fzmerge.logger import get_logger

logger = get_logger("autocomplete.fuzzy")


@dataclass(slots=True)
class CompletionRequest:
    """Snapshot of the target input state used by the completion strategy."""

    state: TargetState

    @property
    def text(self) -> str:
        return self.state.text

    @property
    def cursor_position(self) -> int:
        return self.state.cursor_position

    @property
    def input_state(self) -> InputState:
        """The same snapshot as the pipeline's ``InputState``."""
        return InputState(text=self.state.text, cursor_position=self.state.cursor_position)


class FuzzyCompletionStrategy:
    """Serves the ranked candidates of a ``FuzzySession`` as dropdown items.

    The owning provider's ``icon`` (when it has one) becomes the item prefix.
    """

    def __init__(self, session: FuzzySession) -> None:
        self._session = session

    def can_handle(self, request: CompletionRequest) -> bool:
        return self._session.prefix(request.input_state) is not None

    def search_string(self, request: CompletionRequest) -> str:
        """The text the widget should treat as the typed query."""
        state = request.input_state
        cycle = self._session.cycle
        if cycle is not None and cycle.state == state:
            return cycle.match_string
        return self._session.prefix(state) or ""

    def get_candidates(self, request: CompletionRequest) -> list[DropdownItem]:
        state = request.input_state
        self._session.update(state)
        ranked = self._session.complete(state)
        logger.debug(f"FuzzyCompletionStrategy returning {len(ranked)} candidates")

        items: list[DropdownItem] = []
        for candidate in ranked:
            owner = self._session.owner(candidate)
            provider = self._session.providers.get(owner) if owner is not None else None
            items.append(DropdownItem(main=candidate, prefix=getattr(provider, "icon", None)))
        return items
