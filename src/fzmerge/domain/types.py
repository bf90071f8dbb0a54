"""Domain types for the completion pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

__all__ = [
    "SortingBackend",
    "ProviderCommand",
    "ProviderKind",
    "ProviderGroup",
    "InputState",
]


class SortingBackend(str, Enum):
    """Strategy used to rank the merged candidate pool."""

    NONE = "none"
    ALPHABETIC = "alphabetic"
    SCORE = "score"

    @classmethod
    def parse(cls, value: object) -> SortingBackend | None:
        """Return the matching member, or ``None`` for unrecognized values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class ProviderCommand(str, Enum):
    """Commands a provider answers."""

    PREFIX = "prefix"
    CANDIDATES = "candidates"
    ANNOTATION = "annotation"
    DOC = "doc"


class ProviderKind(Enum):
    """Provider kinds with their own prefix semantics.

    The kind selects an entry in the prefix capability table; providers that
    do not declare one are ``GENERIC``.
    """

    GENERIC = "generic"
    CODE = "code"
    PATH = "path"
    HISTORY = "history"


@dataclass(frozen=True)
class ProviderGroup:
    """Several providers presented to the host as one logical entry.

    Members may include group keywords (``":with"``, ``":separate"``) which
    the registry drops while flattening.
    """

    members: tuple[object, ...] = field(default_factory=tuple)

    def __init__(self, *members: object) -> None:
        object.__setattr__(self, "members", tuple(members))

    def __iter__(self):
        return iter(self.members)


@dataclass(frozen=True, slots=True)
class InputState:
    """Snapshot of the text being edited and the cursor offset."""

    text: str
    cursor_position: int

    @classmethod
    def at_end(cls, text: str) -> InputState:
        return cls(text=text, cursor_position=len(text))

    @property
    def before_cursor(self) -> str:
        return self.text[: self.cursor_position]

    @property
    def after_cursor(self) -> str:
        return self.text[self.cursor_position :]
