"""Tests for the built-in providers and the providers file loader."""

import json

import pytest
from conftest import make_state

from fzmerge.domain.errors import ConfigError, ProviderError
from fzmerge.domain.types import ProviderKind
from fzmerge.providers import (
    BaseProvider,
    BufferWordsProvider,
    PathProvider,
    SnippetProvider,
    WordListProvider,
    load_providers,
)


class TestWordListProvider:
    """Tests for WordListProvider."""

    def test_candidates_case_insensitive_prefix(self):
        provider = WordListProvider(["Return", "raise", "print", "raise"])
        assert provider("candidates", "r") == ["Return", "raise"]
        assert provider("candidates", "") == ["Return", "raise", "print"]

    def test_prefix_is_symbol_at_cursor(self):
        assert WordListProvider([])("prefix", make_state("obj.rea")) == "rea"

    def test_annotation_and_doc(self):
        provider = WordListProvider(["len"], annotations={"len": "builtin"}, docs={"len": "len(obj)"})
        assert provider("annotation", "len") == "builtin"
        assert provider("doc", "len") == "len(obj)"
        assert provider("annotation", "other") is None

    def test_kind(self):
        assert WordListProvider([], kind=ProviderKind.CODE).kind is ProviderKind.CODE


class TestBufferWordsProvider:
    """Tests for BufferWordsProvider."""

    def test_reads_source_on_every_fetch(self):
        buffer = ["alpha beta al alphabet"]
        provider = BufferWordsProvider(lambda: buffer[0])
        assert provider("candidates", "al") == ["alpha", "alphabet"]

        buffer[0] = "alter"
        assert provider("candidates", "al") == ["alter"]
        assert provider("annotation", "alter") == "buffer"


class TestPathProvider:
    """Tests for PathProvider."""

    @pytest.fixture
    def tree(self, tmp_path):
        (tmp_path / "src" / "pkg").mkdir(parents=True)
        (tmp_path / "src" / "main.py").write_text("")
        (tmp_path / "src" / ".hidden").write_text("")
        return tmp_path

    def test_prefix_only_for_paths(self):
        provider = PathProvider()
        assert provider("prefix", make_state("open src/ma")) == "src/ma"
        assert provider("prefix", make_state("open main")) is None

    def test_candidates_keep_directory_part(self, tree):
        provider = PathProvider(tree)
        assert provider("candidates", "src/") == ["src/main.py", "src/pkg/"]

    def test_hidden_entries(self, tree):
        assert "src/.hidden" in PathProvider(tree)("candidates", "src/.")
        assert "src/.hidden" in PathProvider(tree, show_hidden=True)("candidates", "src/")

    def test_missing_directory(self, tree):
        assert PathProvider(tree)("candidates", "nope/") == []

    def test_annotation(self):
        provider = PathProvider()
        assert provider("annotation", "src/") == "dir"
        assert provider("annotation", "src/main.py") == "file"


class TestSnippetProvider:
    """Tests for SnippetProvider."""

    def test_commands(self):
        provider = SnippetProvider({"for": "for x in xs:", "while": "while True:"})
        assert provider.kind is ProviderKind.HISTORY
        assert provider("candidates", "") == ["for", "while"]
        assert provider("candidates", "wh") == ["while"]
        assert provider("annotation", "for") == "snippet"
        assert provider("doc", "while") == "while True:"


def test_base_provider_rejects_unknown_command():
    with pytest.raises(ProviderError):
        BaseProvider()("meta")


class TestLoadProviders:
    """Tests for load_providers()."""

    def test_builds_every_type(self, tmp_path):
        (tmp_path / "notes.txt").write_text("render renderer")
        path = tmp_path / "providers.json"
        path.write_text(
            json.dumps(
                {
                    "providers": [
                        {"name": "keywords", "type": "words", "words": ["return"]},
                        {"name": "symbols", "type": "code", "words": ["read_file"]},
                        {"name": "snippets", "type": "snippets", "snippets": {"main": "..."}},
                        {"name": "files", "type": "paths"},
                        {"name": "buffer", "type": "buffer", "file": "notes.txt"},
                    ],
                    "registry": ["keywords", ["symbols", ":with", "files"]],
                }
            )
        )

        providers, registry = load_providers(path)

        assert list(providers) == ["keywords", "symbols", "snippets", "files", "buffer"]
        assert providers["symbols"].kind is ProviderKind.CODE
        assert providers["files"].root == tmp_path / "."
        assert providers["buffer"]("candidates", "ren") == ["render", "renderer"]
        assert registry == ["keywords", ["symbols", ":with", "files"]]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_providers(tmp_path / "providers.json")

    def test_invalid_type(self, tmp_path):
        path = tmp_path / "providers.json"
        path.write_text(json.dumps({"providers": [{"name": "x", "type": "unknown"}]}))
        with pytest.raises(ConfigError):
            load_providers(path)

    def test_buffer_without_file(self, tmp_path):
        path = tmp_path / "providers.json"
        path.write_text(json.dumps({"providers": [{"name": "buffer", "type": "buffer"}]}))
        with pytest.raises(ConfigError):
            load_providers(path)
