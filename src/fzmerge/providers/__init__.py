"""Built-in completion providers."""

from fzmerge.providers.base import BaseProvider
from fzmerge.providers.factory import ProviderSpec, build_provider, load_providers
from fzmerge.providers.paths import PathProvider
from fzmerge.providers.snippets import SnippetProvider
from fzmerge.providers.words import BufferWordsProvider, WordListProvider

__all__ = [
    "BaseProvider",
    "BufferWordsProvider",
    "PathProvider",
    "ProviderSpec",
    "SnippetProvider",
    "WordListProvider",
    "build_provider",
    "load_providers",
]
