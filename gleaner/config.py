"""Configuration model and loaders for Gleaner.

Responsibilities:
- Define runtime configuration as a typed dataclass.
- Provide loader entry points for file- and environment-based configuration.

Key types:
- `GleanerConfig`: normalized runtime settings for one extraction run.
- `ConfigLoader`: static construction helpers for `GleanerConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .models.datatypes import DEFAULT_CATEGORY, Attribution
from .parsing import normalize_optional_string, parse_permissive_boolean

DEFAULT_STORE_PATH = Path("highlights.json")


@dataclass(slots=True)
class GleanerConfig:
    """Runtime configuration for one extraction run.

    Attributes:
        input_path: Path to the source document (PDF or plain text).
        store_path: JSON file receiving confirmed highlights.
        author: Author attributed to confirmed highlights.
        source: Source title attributed to confirmed highlights.
        category: Category attributed to confirmed highlights.
        save: Whether confirmed candidates are persisted after review.
    """

    input_path: Path
    store_path: Path = DEFAULT_STORE_PATH
    author: str | None = None
    source: str | None = None
    category: str = DEFAULT_CATEGORY
    save: bool = False

    def validate(self) -> None:
        """Validate configuration values before pipeline execution."""

        if normalize_optional_string(self.category) is None:
            raise ValueError("`category` must be a non-empty string.")
        if self.save:
            self.attribution()

    def attribution(self) -> Attribution:
        """Return the batch attribution, requiring author and source."""

        author = normalize_optional_string(self.author)
        if author is None:
            raise ValueError("`author` is required to save highlights.")
        source = normalize_optional_string(self.source)
        if source is None:
            raise ValueError("`source` is required to save highlights.")
        return Attribution(author=author, source=source, category=self.category.strip())


class ConfigLoader:
    """Factory helpers for constructing `GleanerConfig` objects."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {"input_path", "store_path", "author", "source", "category", "save"}
    )
    _REQUIRED_YAML_KEYS = frozenset({"input_path"})

    @staticmethod
    def from_yaml(path: Path) -> GleanerConfig:
        """Create a validated config from a YAML file."""

        raw_text = path.read_text(encoding="utf-8")
        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` could not be parsed: {exc}") from exc
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a mapping at the top level.")
        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> GleanerConfig:
        """Create a validated config from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        input_value = normalize_optional_string(env_map.get("GLEANER_INPUT_PATH"))
        if input_value is None:
            raise ValueError("Environment variable `GLEANER_INPUT_PATH` is required.")
        store_value = normalize_optional_string(env_map.get("GLEANER_STORE_PATH"))
        save = False
        if "GLEANER_SAVE" in env_map:
            parsed = parse_permissive_boolean(env_map.get("GLEANER_SAVE"))
            if parsed is None:
                raise ValueError(
                    "Environment variable `GLEANER_SAVE` must be a boolean value "
                    "(`true`/`false`, `1`/`0`, `yes`/`no`)."
                )
            save = parsed

        config = GleanerConfig(
            input_path=Path(input_value),
            store_path=Path(store_value) if store_value else DEFAULT_STORE_PATH,
            author=normalize_optional_string(env_map.get("GLEANER_AUTHOR")),
            source=normalize_optional_string(env_map.get("GLEANER_SOURCE")),
            category=normalize_optional_string(env_map.get("GLEANER_CATEGORY"))
            or DEFAULT_CATEGORY,
            save=save,
        )
        config.validate()
        return config

    @staticmethod
    def _build_config_from_mapping(payload: Mapping[str, Any], source_label: str) -> GleanerConfig:
        """Validate a mapping payload and build a config from it."""

        ConfigLoader._validate_yaml_keys(payload, source_label)

        input_path = normalize_optional_string(payload.get("input_path"))
        if input_path is None:
            raise ValueError(f"{source_label} requires non-empty `input_path`.")
        store_path = normalize_optional_string(payload.get("store_path"))

        config = GleanerConfig(
            input_path=Path(input_path),
            store_path=Path(store_path) if store_path else DEFAULT_STORE_PATH,
            author=normalize_optional_string(payload.get("author")),
            source=normalize_optional_string(payload.get("source")),
            category=normalize_optional_string(payload.get("category")) or DEFAULT_CATEGORY,
            save=ConfigLoader._optional_boolean(payload, "save", source_label, default=False),
        )
        config.validate()
        return config

    @staticmethod
    def _validate_yaml_keys(payload: Mapping[str, Any], source_label: str) -> None:
        """Validate supported and required YAML keys."""

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        missing = sorted(
            key for key in ConfigLoader._REQUIRED_YAML_KEYS if key not in payload
        )
        if missing:
            key_list = ", ".join(missing)
            raise ValueError(f"{source_label} is missing required key(s): {key_list}.")

    @staticmethod
    def _optional_boolean(
        payload: Mapping[str, Any], key: str, source_label: str, default: bool
    ) -> bool:
        """Read and validate a boolean field from a payload."""

        if key not in payload:
            return default

        parsed = parse_permissive_boolean(payload[key])
        if parsed is None:
            raise ValueError(
                f"{source_label} field `{key}` must be a boolean value "
                "(`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed
