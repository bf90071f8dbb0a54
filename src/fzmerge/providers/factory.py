"""Build providers from a JSON description.

Example file::

    {
      "providers": [
        {"name": "keywords", "type": "words", "words": ["return", "raise"]},
        {"name": "symbols", "type": "code", "words": ["read_file", "render"]},
        {"name": "snippets", "type": "snippets", "snippets": {"main": "if __name__ == ..."}},
        {"name": "files", "type": "paths", "root": "."},
        {"name": "buffer", "type": "buffer", "file": "notes.txt"}
      ],
      "registry": ["keywords", ["symbols", ":with", "files"], "snippets"]
    }
"""

import json
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from fzmerge.domain.errors import ConfigError
from fzmerge.domain.protocols import Provider
from fzmerge.domain.types import ProviderKind
from fzmerge.logger import get_logger
from fzmerge.providers.paths import PathProvider
from fzmerge.providers.snippets import SnippetProvider
from fzmerge.providers.words import BufferWordsProvider, WordListProvider

logger = get_logger("providers.factory")


class ProviderSpec(BaseModel):
    """Description of one built-in provider."""

    name: str
    type: Literal["words", "code", "paths", "snippets", "buffer"]
    words: list[str] = Field(default_factory=list)
    annotations: dict[str, str] = Field(default_factory=dict)
    docs: dict[str, str] = Field(default_factory=dict)
    snippets: dict[str, str] = Field(default_factory=dict)
    root: str = "."
    file: Optional[str] = None
    display_name: Optional[str] = None


class ProvidersFile(BaseModel):
    """Top-level structure of a providers file."""

    providers: list[ProviderSpec] = Field(default_factory=list)
    registry: Optional[list[Union[str, list[str]]]] = None


def build_provider(spec: ProviderSpec, base_dir: Path = Path(".")) -> Provider:
    if spec.type in ("words", "code"):
        return WordListProvider(
            spec.words,
            kind=ProviderKind.CODE if spec.type == "code" else ProviderKind.GENERIC,
            display_name=spec.display_name,
            annotations=spec.annotations,
            docs=spec.docs,
        )
    if spec.type == "snippets":
        return SnippetProvider(spec.snippets)
    if spec.type == "paths":
        root = Path(spec.root)
        return PathProvider(root if root.is_absolute() else base_dir / root)
    if spec.file is None:
        raise ConfigError(f"Buffer provider {spec.name!r} needs a 'file'")
    buffer_path = Path(spec.file)
    if not buffer_path.is_absolute():
        buffer_path = base_dir / buffer_path
    return BufferWordsProvider(lambda: buffer_path.read_text(encoding="utf-8"))


def load_providers(path: Union[str, Path]) -> tuple[dict[str, Provider], Optional[list]]:
    """
    Load providers from a JSON file.

    Args:
        path: Providers file

    Returns:
        Tuple of (provider id to provider, registry entries or None)

    Raises:
        ConfigError: If the file is missing or invalid
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Providers file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            parsed = ProvidersFile(**json.load(f))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    except (TypeError, ValidationError) as e:
        raise ConfigError(f"Invalid providers file {path}: {e}") from e

    providers: dict[str, Provider] = {}
    for spec in parsed.providers:
        providers[spec.name] = build_provider(spec, path.parent)
    logger.info(f"Loaded {len(providers)} providers from {path}")
    return providers, parsed.registry
