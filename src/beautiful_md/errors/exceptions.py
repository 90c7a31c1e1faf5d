"""Custom exception hierarchy for beautiful-md."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class BeautifulMdError(Exception):
    """Base exception for all beautiful-md errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class MarkdownIOError(BeautifulMdError):
    """Reading or writing a markdown file failed."""

    def __init__(
        self,
        message: str = "",
        path: str | Path | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None
        self.original = original


class InvalidPathError(BeautifulMdError):
    """An input path does not exist or is not a regular file."""

    def __init__(self, message: str = "", path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class PatternError(BeautifulMdError):
    """A glob pattern matched no files."""

    def __init__(self, message: str = "", pattern: str = "") -> None:
        super().__init__(message)
        self.pattern = pattern


class ConfigError(BeautifulMdError):
    """Configuration could not be read, parsed or validated."""

    def __init__(self, message: str = "", path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class FormattingError(BeautifulMdError):
    """The markdown parser/serializer could not round-trip the document.

    This is the only hard failure of the formatting pipeline; the run is
    aborted and nothing is written.
    """

    def __init__(self, message: str = "", stage: str = "serialize") -> None:
        super().__init__(message)
        self.stage = stage


class ParseError(FormattingError):
    """The markdown parser rejected the (already repaired) text."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message, stage="parse")
