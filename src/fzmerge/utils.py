"""
Utility functions shared across fzmerge.
"""

import os
from collections.abc import Hashable, Iterable, Sequence
from typing import Any, TypeVar

T = TypeVar("T", bound=Hashable)


def get_project_root() -> str:
    """
    Get the project root directory (parent of src/fzmerge).

    Returns:
        Absolute path to the project root directory
    """
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def dedupe(items: Iterable[T]) -> list[T]:
    """
    Remove duplicates while keeping the first occurrence of each item.

    Args:
        items: Any iterable of hashable values

    Returns:
        New list in original order without repeated values
    """
    seen: set[T] = set()
    result: list[T] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def is_string_list(value: Any) -> bool:
    """
    Check whether ``value`` is a proper sequence of strings.

    Strings and bytes are not accepted as sequences here, a provider that
    answers with a bare string has produced a malformed payload.
    """
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        return False
    return all(isinstance(item, str) for item in value)
