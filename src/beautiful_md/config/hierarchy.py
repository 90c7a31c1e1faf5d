"""Configuration discovery — picks the config file and applies runtime overrides.

Lookup order (first usable file wins):
  1. Explicit path (``--config``)
  2. ``$BEAUTIFUL_MD_CONFIG``
  3. Project config (./.beautiful-md.yaml)
  4. Global config  (~/.beautiful-md.yaml)
  5. Package defaults

Runtime overrides (dotted keys such as ``tables.padding``) are applied on top.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from beautiful_md.config.defaults import CONFIG_ENV_VAR, CONFIG_FILE_NAME, get_defaults
from beautiful_md.config.loader import config_from_mapping, load_yaml
from beautiful_md.config.schema import Config
from beautiful_md.errors.exceptions import ConfigError

logger = logging.getLogger(__name__)

_LITERAL_VALUES = {"-", "*", "+", "```", "~~~"}


def load_config_hierarchy(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Config:
    """Resolve the effective configuration for one run."""
    source: str | Path | None = path
    if path is not None:
        raw = load_yaml(path)
    else:
        raw = None
        for candidate in config_candidates():
            raw = _load_yaml_config(candidate)
            if raw is not None:
                source = candidate
                break
        else:
            raw = get_defaults()

    if overrides:
        raw = _apply_overrides(raw, overrides)

    logger.debug("Using configuration from %s", source or "package defaults")
    return config_from_mapping(raw, source=source)


def config_candidates() -> list[Path]:
    """Existing config files in the default locations, in lookup order."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    candidates: list[Path] = []
    if env_path:
        candidates.append(Path(env_path).expanduser())
    candidates.append(Path.cwd() / CONFIG_FILE_NAME)
    candidates.append(Path.home() / CONFIG_FILE_NAME)
    return [c for c in candidates if c.is_file()]


def find_config_file() -> Path | None:
    """Return the first config file that exists in the default locations."""
    found = config_candidates()
    return found[0] if found else None


def parse_override(item: str) -> tuple[str, Any]:
    """Parse ``section.key=value``; the value is read as a YAML scalar."""
    key, sep, value = item.partition("=")
    key = key.strip()
    if not sep or "." not in key:
        raise ConfigError(f"Invalid override '{item}': expected section.key=value")
    # Markers and fences are not valid YAML scalars on their own
    if value.strip() in _LITERAL_VALUES:
        return key, value.strip()
    try:
        return key, yaml.safe_load(value)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid override value in '{item}': {e}") from e


def _apply_overrides(raw: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = {k: dict(v) if isinstance(v, dict) else v for k, v in raw.items()}
    for dotted, value in overrides.items():
        if value is None:
            continue
        section, _, key = dotted.partition(".")
        if not key:
            raise ConfigError(f"Invalid override key '{dotted}': expected section.key")
        group = merged.get(section)
        if not isinstance(group, dict):
            group = {}
        group[key] = value
        merged[section] = group
    return merged


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Load a discovered config file, skipping it with a warning if unusable."""
    try:
        return load_yaml(path)
    except ConfigError as e:
        logger.warning("Ignoring config %s: %s", path, e.message)
    return None
