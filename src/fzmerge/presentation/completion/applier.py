"""
Utilities for applying selected autocomplete values to the input field.
"""

from __future__ import annotations

from dataclasses import dataclass

from textual_autocomplete import TargetState

from fzmerge.core.prefix import symbol_at_cursor
from fzmerge.core.session import FuzzySession
from fzmerge.domain.types import InputState
from fzmerge.logger import get_logger

logger = get_logger("autocomplete.applier")


@dataclass(slots=True)
class ApplyResult:
    """Result of applying a completion value."""

    text: str
    cursor: int


class CompletionApplier:
    """Replaces the typed prefix before the cursor with the chosen candidate.

    The prefix to replace comes from the session's pre-insert hook, so a path
    candidate replaces the whole typed path while a word candidate replaces
    only the typed word.
    """

    def __init__(self, session: FuzzySession) -> None:
        self._session = session

    def apply(self, value: str, state: TargetState) -> ApplyResult:
        text = state.text
        cursor_pos = state.cursor_position
        text_before_cursor = text[:cursor_pos]
        text_after_cursor = text[cursor_pos:]

        typed = self._session.pre_insert(value)
        if typed is None or not text_before_cursor.endswith(typed):
            fallback = symbol_at_cursor(InputState(text=text, cursor_position=cursor_pos))
            logger.debug(f"No usable insert prefix for {value!r} (got {typed!r}), replacing {fallback!r}")
            typed = fallback

        start = cursor_pos - len(typed)
        new_text = f"{text[:start]}{value}{text_after_cursor}"
        new_cursor = start + len(value)
        logger.info(f"apply: value={value!r} replaced={typed!r} at index {start}")
        return ApplyResult(text=new_text, cursor=new_cursor)
