"""YAML config loading, validation and saving."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from beautiful_md.config.schema import Config
from beautiful_md.errors.exceptions import ConfigError


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML mapping safely. An empty file is an empty mapping."""
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}", path=path)

    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}", path=path) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}", path=path) from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Expected YAML mapping, got {type(raw).__name__} in {path}", path=path)

    return raw


def config_from_mapping(raw: dict[str, Any], source: str | Path | None = None) -> Config:
    """Validate a raw mapping into a Config. Unknown keys are ignored."""
    try:
        return Config.model_validate(raw)
    except ValidationError as e:
        where = f" in {source}" if source else ""
        raise ConfigError(f"Invalid configuration{where}: {e}", path=source) from e


def load_config(path: str | Path) -> Config:
    """Load a config YAML file and return a validated Config."""
    return config_from_mapping(load_yaml(path), source=path)


def save_config(config: Config, path: str | Path) -> Path:
    """Write a Config as YAML, grouped by section."""
    path = Path(path)
    try:
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(config.model_dump(mode="json"), f, sort_keys=False)
    except OSError as e:
        raise ConfigError(f"Cannot write config {path}: {e}", path=path) from e
    return path
