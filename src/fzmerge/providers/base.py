"""Base class for built-in providers."""

from __future__ import annotations

from typing import Any, Optional

from fzmerge.core.prefix import symbol_at_cursor
from fzmerge.domain.errors import ProviderError
from fzmerge.domain.types import InputState, ProviderCommand, ProviderKind


class BaseProvider:
    """Dispatches provider commands to methods.

    Subclasses override ``candidates`` and optionally ``prefix``,
    ``annotation`` and ``doc``.
    """

    kind: ProviderKind = ProviderKind.GENERIC
    display_name: Optional[str] = None
    icon: Optional[str] = None

    def prefix(self, state: InputState) -> Optional[str]:
        return symbol_at_cursor(state)

    def candidates(self, prefix: str) -> list[str]:
        raise NotImplementedError

    def annotation(self, candidate: str) -> Optional[str]:
        return None

    def doc(self, candidate: str) -> Any:
        return None

    def __call__(self, command: str, arg: Any = None) -> Any:
        if command == ProviderCommand.PREFIX.value:
            return self.prefix(arg if isinstance(arg, InputState) else InputState("", 0))
        if command == ProviderCommand.CANDIDATES.value:
            return self.candidates(arg or "")
        if command == ProviderCommand.ANNOTATION.value:
            return self.annotation(arg)
        if command == ProviderCommand.DOC.value:
            return self.doc(arg)
        raise ProviderError(f"{type(self).__name__} does not answer {command!r}")
