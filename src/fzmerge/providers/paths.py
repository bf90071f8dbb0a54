"""Filesystem path completion."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Union

from fzmerge.core.prefix import last_path_segment
from fzmerge.domain.types import InputState, ProviderKind
from fzmerge.providers.base import BaseProvider

_PATH_TOKEN = re.compile(r"[^\s\"'()<>\[\]{},;]*$")


class PathProvider(BaseProvider):
    """Completes paths typed relative to ``root`` (or absolute, or ``~``).

    Candidates keep the typed directory part, so ``src/fz`` offers
    ``src/fzmerge/``; directories end with a slash.
    """

    kind = ProviderKind.PATH
    icon = "📁"

    def __init__(self, root: Union[str, Path] = ".", show_hidden: bool = False) -> None:
        self.root = Path(root)
        self.show_hidden = show_hidden

    def prefix(self, state: InputState) -> Optional[str]:
        found = _PATH_TOKEN.search(state.before_cursor)
        token = found.group(0) if found else ""
        return token if "/" in token else None

    def _directory(self, directory_part: str) -> Path:
        directory = Path(directory_part).expanduser() if directory_part else Path(".")
        if not directory.is_absolute():
            directory = self.root / directory
        return directory

    def candidates(self, prefix: str) -> list[str]:
        directory_part = prefix[: len(prefix) - len(last_path_segment(prefix))]
        directory = self._directory(directory_part)
        if not directory.is_dir():
            return []

        typed_name = last_path_segment(prefix)
        results: list[str] = []
        for entry in sorted(directory.iterdir(), key=lambda path: path.name):
            if entry.name.startswith(".") and not (self.show_hidden or typed_name.startswith(".")):
                continue
            suffix = "/" if entry.is_dir() else ""
            results.append(f"{directory_part}{entry.name}{suffix}")
        return results

    def annotation(self, candidate: str) -> Optional[str]:
        return "dir" if candidate.endswith("/") else "file"
