"""Style formatter registry: runs the structural formatters in a fixed order."""

from __future__ import annotations

import logging
from typing import Callable

from pydantic import BaseModel

from beautiful_md.config.schema import Config

logger = logging.getLogger(__name__)

# Each formatter receives only its own config section, named like the
# config group it reads.
FORMATTER_ORDER = ("tables", "headings", "lists")

_FORMATTER_REGISTRY: dict[str, Callable[[str, BaseModel], str]] = {}


def register_formatter(name: str) -> Callable:
    """Decorator to register a structural formatter under its config section."""
    def decorator(fn: Callable[[str, BaseModel], str]) -> Callable[[str, BaseModel], str]:
        _FORMATTER_REGISTRY[name] = fn
        return fn
    return decorator


def get_formatter(name: str) -> Callable[[str, BaseModel], str] | None:
    """Look up a formatter by name."""
    return _FORMATTER_REGISTRY.get(name)


def run_formatters(markdown: str, config: Config) -> str:
    """Apply table, heading and list formatting, in that order."""
    current = markdown
    for name in FORMATTER_ORDER:
        fn = _FORMATTER_REGISTRY.get(name)
        if fn is None:
            raise LookupError(f"Formatter '{name}' is not registered")
        current = fn(current, getattr(config, name))
        logger.debug("Applied %s formatter", name)

    return current
