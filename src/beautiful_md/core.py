"""Top-level entry points: format_markdown(), format_file(), check_file(), format_files()."""

from __future__ import annotations

import asyncio
import glob
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from beautiful_md.config.defaults import DEFAULT_MAX_WORKERS
from beautiful_md.config.schema import Config
from beautiful_md.diagnostics import Diagnostics
from beautiful_md.errors.exceptions import InvalidPathError, MarkdownIOError, PatternError
from beautiful_md.pipeline.engine import FormattingPipeline

if TYPE_CHECKING:
    from beautiful_md.concurrency.pool import FileOutcome

logger = logging.getLogger(__name__)


def format_markdown(content: str, config: Config | None = None) -> tuple[str, Diagnostics]:
    """Format markdown text.

    Returns the formatted text and the diagnostics collected while repairing
    it. Raises FormattingError if the document cannot be round-tripped.
    """
    return FormattingPipeline(config).run(content)


def read_markdown(path: str | Path) -> str:
    """Read a markdown file as UTF-8, mapping failures to the package errors."""
    path = Path(path)
    if not path.exists():
        raise InvalidPathError(f"File not found: {path}", path=path)
    if not path.is_file():
        raise InvalidPathError(f"Not a file: {path}", path=path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MarkdownIOError(f"Failed to read {path}: {e}", path=path, original=e) from e


def write_markdown(path: str | Path, content: str) -> None:
    path = Path(path)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise MarkdownIOError(f"Failed to write {path}: {e}", path=path, original=e) from e


def format_file(path: str | Path, config: Config | None = None) -> Diagnostics:
    """Format a markdown file in place.

    The file is only rewritten when formatting changes it.
    """
    original = read_markdown(path)
    formatted, diagnostics = format_markdown(original, config)
    if formatted != original:
        write_markdown(path, formatted)
        logger.info("Formatted %s", path)
    else:
        logger.debug("%s already formatted", path)
    return diagnostics


def check_file(path: str | Path, config: Config | None = None) -> bool:
    """Return True if formatting would change the file."""
    original = read_markdown(path)
    formatted, _ = format_markdown(original, config)
    return formatted != original


def expand_globs(patterns: list[str]) -> list[Path]:
    """Expand glob patterns (``**`` recursive) into sorted, de-duplicated paths."""
    found: set[Path] = set()
    for pattern in patterns:
        matches = glob.glob(pattern, recursive=True)
        if not matches:
            raise PatternError(f"No files match pattern: {pattern}", pattern=pattern)
        found.update(Path(m) for m in matches if Path(m).is_file())
    return sorted(found)


def format_files(
    paths: list[str | Path],
    config: Config | None = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
    write: bool = True,
) -> list[FileOutcome]:
    """Format many files concurrently (sync wrapper).

    Returns one FileOutcome per path, in input order; a failing file does not
    stop the others.
    """
    from beautiful_md.concurrency.pool import FormatPool

    pool = FormatPool(config=config, max_workers=max_workers)
    return asyncio.run(pool.process_batch(paths, write=write))
