"""Snippet provider.

Snippets are fetched as a full dump (empty fetch prefix) and are usually
history-tracked, so snippets offered once keep being offered for the rest
of the session.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional

from fzmerge.domain.types import ProviderKind
from fzmerge.providers.base import BaseProvider


class SnippetProvider(BaseProvider):
    """Completes snippet keys; ``doc`` returns the snippet body."""

    kind = ProviderKind.HISTORY
    icon = "✂"

    def __init__(self, snippets: Mapping[str, str]) -> None:
        self.snippets = dict(snippets)

    def candidates(self, prefix: str) -> list[str]:
        return [key for key in self.snippets if key.startswith(prefix)]

    def annotation(self, candidate: str) -> Optional[str]:
        return "snippet" if candidate in self.snippets else None

    def doc(self, candidate: str) -> Optional[str]:
        return self.snippets.get(candidate)
