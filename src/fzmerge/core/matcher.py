"""Ordered-subsequence fuzzy matching.

``compile_pattern("abc")`` builds ``a[^\\n]*?b[^\\n]*?c``: every character of
the input must appear in the candidate, in order, with any run of
non-newline characters between them.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Literal, Union

from fzmerge.core.cache import MemoryCache

IgnoreCase = Union[bool, Literal["smart"]]

_GAP = r"[^\n]*?"
_ALTERNATION = "|"
_START_ANCHOR = "^"
_END_ANCHOR = "$"

_pattern_cache: MemoryCache[tuple[str, bool], re.Pattern[str]] = MemoryCache(max_entries=256)


def _case_insensitive(text: str, ignore_case: IgnoreCase) -> bool:
    if ignore_case == "smart":
        return text == text.lower()
    return bool(ignore_case)


def compile_pattern(text: str, ignore_case: IgnoreCase = "smart") -> re.Pattern[str]:
    """
    Compile ``text`` into a fuzzy subsequence pattern.

    Args:
        text: The string the user typed
        ignore_case: True, False, or "smart" (insensitive unless ``text``
            contains an upper-case character)

    Returns:
        Compiled regular expression, searched (not matched) against candidates
    """
    # A dangling "|" would add an empty alternative that matches everything
    body = text.rstrip(_ALTERNATION)
    insensitive = _case_insensitive(body, ignore_case)

    key = (body, insensitive)
    cached = _pattern_cache.get(key)
    if cached is not None:
        return cached

    anchored_start = body.startswith(_START_ANCHOR)
    anchored_end = body.endswith(_END_ANCHOR) and len(body) > int(anchored_start)
    core = body[int(anchored_start) : len(body) - int(anchored_end)]

    source = _GAP.join(re.escape(char) for char in core)
    if anchored_start:
        source = _START_ANCHOR + source
    if anchored_end:
        source = source + _END_ANCHOR

    pattern = re.compile(source, re.IGNORECASE if insensitive else 0)
    _pattern_cache.set(key, pattern)
    return pattern


def fuzzy_match(candidate: str, text: str, ignore_case: IgnoreCase = "smart") -> bool:
    """Return True when ``text`` occurs in ``candidate`` as an ordered subsequence."""
    return compile_pattern(text, ignore_case).search(candidate) is not None


def match(
    candidates: Iterable[str],
    text: str,
    ignore_case: IgnoreCase = "smart",
) -> list[str]:
    """
    Keep the candidates that fuzzily match ``text``, in input order.

    Args:
        candidates: Raw candidates from one provider
        text: Match string (empty keeps everything)
        ignore_case: Case handling, see ``compile_pattern``

    Returns:
        Filtered list; no scoring or reordering is done here
    """
    if not text:
        return list(candidates)
    pattern = compile_pattern(text, ignore_case)
    return [candidate for candidate in candidates if pattern.search(candidate)]


def match_positions(candidate: str, text: str, ignore_case: IgnoreCase = "smart") -> list[int]:
    """
    Indexes of the characters of ``candidate`` matched by ``text``.

    Leftmost greedy alignment, the same one the compiled pattern finds. Used
    by renderers to highlight matches; empty when ``text`` does not match.
    """
    body = text.rstrip(_ALTERNATION).lstrip(_START_ANCHOR)
    if body.endswith(_END_ANCHOR):
        body = body[:-1]
    if _case_insensitive(body, ignore_case):
        candidate, body = candidate.lower(), body.lower()

    positions: list[int] = []
    start = 0
    for char in body:
        index = candidate.find(char, start)
        if index < 0:
            return []
        positions.append(index)
        start = index + 1
    return positions
