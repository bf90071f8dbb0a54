"""Word based providers: fixed word lists and words collected from a buffer."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Callable, Optional

from fzmerge.domain.types import ProviderKind
from fzmerge.providers.base import BaseProvider
from fzmerge.utils import dedupe


class WordListProvider(BaseProvider):
    """Completes from a fixed vocabulary (keywords, symbols, commands).

    Args:
        words: Vocabulary in the order it should accumulate
        kind: ``ProviderKind.CODE`` makes the provider match on the symbol at
            the cursor instead of the cycle's match string
        annotations: Optional candidate to annotation text
        docs: Optional candidate to documentation text
    """

    def __init__(
        self,
        words: Iterable[str],
        *,
        kind: ProviderKind = ProviderKind.GENERIC,
        display_name: Optional[str] = None,
        annotations: Optional[Mapping[str, str]] = None,
        docs: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.words = dedupe(words)
        self.kind = kind
        self.display_name = display_name
        self._annotations = dict(annotations or {})
        self._docs = dict(docs or {})

    def candidates(self, prefix: str) -> list[str]:
        if not prefix:
            return list(self.words)
        folded = prefix.casefold()
        return [word for word in self.words if word.casefold().startswith(folded)]

    def annotation(self, candidate: str) -> Optional[str]:
        return self._annotations.get(candidate)

    def doc(self, candidate: str) -> Optional[str]:
        return self._docs.get(candidate)


class BufferWordsProvider(BaseProvider):
    """Completes from the words found in a text buffer.

    Args:
        source: Returns the current buffer text; read on every fetch
        min_length: Shorter words are ignored
    """

    _WORD = re.compile(r"\w+")

    def __init__(self, source: Callable[[], str], min_length: int = 3) -> None:
        self._source = source
        self._min_length = min_length

    def candidates(self, prefix: str) -> list[str]:
        folded = prefix.casefold()
        words = (
            word
            for word in self._WORD.findall(self._source())
            if len(word) >= self._min_length and word.casefold().startswith(folded)
        )
        return dedupe(words)

    def annotation(self, candidate: str) -> Optional[str]:
        return "buffer"
