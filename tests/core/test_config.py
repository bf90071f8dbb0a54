"""Tests for configuration loading."""

import json

import pytest
from pydantic import ValidationError

from fzmerge.core.config import FuzzyConfig, env_overrides, load_config
from fzmerge.domain.errors import ConfigError
from fzmerge.domain.types import SortingBackend


class TestFuzzyConfig:
    """Defaults and derived values."""

    def test_defaults(self):
        config = FuzzyConfig()
        assert config.sorting is SortingBackend.ALPHABETIC
        assert config.scoring_function == "flex"
        assert config.prefix_on_top is True
        assert config.history_providers == ["snippets"]
        assert "." in config.trigger_symbols
        assert config.ignore_case == "smart"

    def test_backend_names_normalized(self):
        assert FuzzyConfig(sorting_backend=" Score ").sorting is SortingBackend.SCORE

    def test_unknown_backend_parses_to_none(self):
        assert FuzzyConfig(sorting_backend="bogus").sorting is None

    def test_format_annotation(self):
        assert FuzzyConfig().format_annotation("kw") == " <kw>"


    @pytest.mark.parametrize("annotation_format", [" [{kind}]", " {0}", " {provider", " {provider.name}"])
    def test_invalid_annotation_format_rejected(self, annotation_format):
        with pytest.raises(ValidationError):
            FuzzyConfig(annotation_format=annotation_format)


class TestEnvOverrides:
    """FZMERGE_* environment variables."""

    def test_parses_values(self):
        overrides = env_overrides(
            {
                "FZMERGE_SORTING_BACKEND": "score",
                "FZMERGE_PREFIX_ON_TOP": "no",
                "FZMERGE_SCORE_CUTOFF": "70",
                "FZMERGE_HISTORY_PROVIDERS": "snippets, buffer",
                "FZMERGE_IGNORE_CASE": "smart",
            }
        )
        assert overrides == {
            "sorting_backend": "score",
            "prefix_on_top": False,
            "score_cutoff": 70.0,
            "history_providers": ["snippets", "buffer"],
            "ignore_case": "smart",
        }

    def test_invalid_number(self):
        with pytest.raises(ConfigError):
            env_overrides({"FZMERGE_SCORE_CUTOFF": "high"})


class TestLoadConfig:
    """Tests for load_config()."""

    def test_without_file_uses_defaults(self):
        assert load_config(env={}) == FuzzyConfig()

    def test_reads_root_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"sorting_backend": "none", "providers": ["a", ["b", "c"]]}))
        config = load_config(path, env={})
        assert config.sorting is SortingBackend.NONE
        assert config.providers == ["a", ["b", "c"]]

    def test_reads_nested_key_and_ignores_unknown_fields(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"fzmerge": {"prefix_on_top": False, "theme": "dark"}, "other": 1}))
        assert load_config(path, env={}).prefix_on_top is False

    def test_env_overrides_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"sorting_backend": "none"}))
        config = load_config(path, env={"FZMERGE_SORTING_BACKEND": "score"})
        assert config.sorting is SortingBackend.SCORE

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.json", env={})

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            load_config(path, env={})

    def test_non_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[]")
        with pytest.raises(ConfigError):
            load_config(path, env={})

    def test_invalid_field(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"prefix_on_top": "sometimes"}))
        with pytest.raises(ConfigError):
            load_config(path, env={})

    def test_invalid_annotation_format(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"annotation_format": " [{kind}]"}))
        with pytest.raises(ConfigError):
            load_config(path, env={})
        with pytest.raises(ConfigError):
            load_config(env={"FZMERGE_ANNOTATION_FORMAT": "{provider!z}"})
