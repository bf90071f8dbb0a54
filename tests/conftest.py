"""Shared fixtures and stub providers for fzmerge tests."""

from typing import Any, Optional

import pytest

from fzmerge.domain.types import InputState, ProviderKind


class StubProvider:
    """Provider answering from canned values and recording its calls."""

    def __init__(
        self,
        candidates: Any = None,
        prefix: Any = "USE_SYMBOL",
        kind: ProviderKind = ProviderKind.GENERIC,
        annotations: Optional[dict[str, str]] = None,
        docs: Optional[dict[str, str]] = None,
        fail_on: tuple[str, ...] = (),
    ):
        self._candidates = candidates if candidates is not None else []
        self._prefix = prefix
        self.kind = kind
        self._annotations = annotations or {}
        self._docs = docs or {}
        self._fail_on = fail_on
        self.calls: list[tuple[str, Any]] = []

    def __call__(self, command: str, arg: Any = None) -> Any:
        self.calls.append((command, arg))
        if command in self._fail_on:
            raise RuntimeError(f"{command} failed")
        if command == "prefix":
            if self._prefix == "USE_SYMBOL":
                before = arg.before_cursor
                index = len(before)
                while index > 0 and (before[index - 1].isalnum() or before[index - 1] == "_"):
                    index -= 1
                return before[index:]
            return self._prefix
        if command == "candidates":
            return self._candidates
        if command == "annotation":
            return self._annotations.get(arg)
        if command == "doc":
            return self._docs.get(arg)
        return None

    def fetch_args(self) -> list[Any]:
        return [arg for command, arg in self.calls if command == "candidates"]


def make_state(text: str, cursor: int | None = None) -> InputState:
    if cursor is None:
        cursor = len(text)
    return InputState(text=text, cursor_position=cursor)


@pytest.fixture
def stub_provider():
    return StubProvider
