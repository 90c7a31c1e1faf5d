"""Error handling — one exception hierarchy for I/O, config, parse and formatting."""

from beautiful_md.errors.exceptions import (
    BeautifulMdError,
    ConfigError,
    FormattingError,
    InvalidPathError,
    MarkdownIOError,
    ParseError,
    PatternError,
)

__all__ = [
    "BeautifulMdError",
    "MarkdownIOError",
    "InvalidPathError",
    "PatternError",
    "ConfigError",
    "FormattingError",
    "ParseError",
]
