"""Completion pipeline configuration.

Settings come from a JSON file (either the root object or its ``"fzmerge"``
key) with ``FZMERGE_*`` environment variables layered on top.
"""

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fzmerge.domain.errors import ConfigError
from fzmerge.domain.types import SortingBackend
from fzmerge.logger import get_logger

logger = get_logger("core.config")

DEFAULT_TRIGGER_SYMBOLS = [".", "->", "<", '"', "'", "@"]

ENV_PREFIX = "FZMERGE_"


class FuzzyConfig(BaseModel):
    """Configuration surface of the completion pipeline."""

    model_config = ConfigDict(frozen=True)

    sorting_backend: str = Field(
        default=SortingBackend.ALPHABETIC.value,
        description="Ranking strategy: none, alphabetic or score",
    )
    scoring_function: str = Field(default="flex", description="Scorer used by the score strategy")
    score_cutoff: float = Field(default=50.0, description="Minimum rapidfuzz score kept")
    prefix_on_top: bool = Field(default=True, description="Promote prefix matches to the top")
    show_annotation: bool = Field(default=True, description="Append the owning provider to annotations")
    annotation_format: str = Field(default=" <{provider}>", description="Format of the provider suffix")
    history_providers: list[str] = Field(default_factory=lambda: ["snippets"])
    passthrough_providers: list[str] = Field(default_factory=list)
    trigger_symbols: list[str] = Field(default_factory=lambda: list(DEFAULT_TRIGGER_SYMBOLS))
    ignore_case: Union[bool, Literal["smart"]] = "smart"
    providers: list[Union[str, list[str]]] = Field(default_factory=list)

    @field_validator("sorting_backend", "scoring_function", mode="before")
    @classmethod
    def _normalize_name(cls, value: Any) -> str:
        return str(value).strip().lower()

    @field_validator("annotation_format")
    @classmethod
    def _check_annotation_format(cls, value: str) -> str:
        try:
            value.format(provider="provider")
        except (AttributeError, IndexError, KeyError, ValueError) as e:
            raise ValueError(f"annotation_format may only use the {{provider}} field: {e!r}") from e
        return value

    @property
    def sorting(self) -> SortingBackend | None:
        """Parsed sorting backend, None when the configured value is unknown."""
        return SortingBackend.parse(self.sorting_backend)

    def format_annotation(self, provider: str) -> str:
        return self.annotation_format.format(provider=provider)


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _parse_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


_ENV_PARSERS = {
    "sorting_backend": str,
    "scoring_function": str,
    "score_cutoff": float,
    "prefix_on_top": _parse_bool,
    "show_annotation": _parse_bool,
    "annotation_format": str,
    "history_providers": _parse_list,
    "passthrough_providers": _parse_list,
    "trigger_symbols": _parse_list,
}


def env_overrides(env: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
    """
    Collect ``FZMERGE_*`` overrides from the environment.

    Args:
        env: Mapping to read from, defaults to ``os.environ``

    Returns:
        Field name to parsed value for every variable that is set
    """
    env = os.environ if env is None else env
    overrides: dict[str, Any] = {}
    for field_name, parser in _ENV_PARSERS.items():
        raw = env.get(f"{ENV_PREFIX}{field_name.upper()}")
        if raw is None:
            continue
        try:
            overrides[field_name] = parser(raw)
        except ValueError as e:
            raise ConfigError(f"Invalid value for {ENV_PREFIX}{field_name.upper()}: {raw!r}") from e

    raw_ignore_case = env.get(f"{ENV_PREFIX}IGNORE_CASE")
    if raw_ignore_case is not None:
        overrides["ignore_case"] = "smart" if raw_ignore_case.strip().lower() == "smart" else _parse_bool(raw_ignore_case)
    return overrides


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> FuzzyConfig:
    """
    Load the pipeline configuration.

    Args:
        config_path: JSON file to read. When None only defaults and
            environment overrides are used.
        env: Environment mapping used for overrides (``os.environ`` by default)

    Returns:
        FuzzyConfig: Validated configuration

    Raises:
        ConfigError: If the file is missing, is not valid JSON, or does not
            validate
    """
    data: dict[str, Any] = {}
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"Expected a JSON object in {path}")
        data = dict(raw.get("fzmerge", raw))
        logger.debug(f"Loaded configuration from {path}")

    data.update(env_overrides(env))

    try:
        config = FuzzyConfig(**{key: value for key, value in data.items() if key in FuzzyConfig.model_fields})
    except ValidationError as e:
        raise ConfigError(f"Invalid fzmerge configuration: {e}") from e

    if config.sorting is None:
        logger.warning(
            f"Unknown sorting backend {config.sorting_backend!r}, candidates keep accumulation order"
        )
    return config
