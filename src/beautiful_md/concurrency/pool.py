"""Bounded async pool for formatting many files at once."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from beautiful_md.config.defaults import DEFAULT_MAX_WORKERS
from beautiful_md.config.schema import Config
from beautiful_md.diagnostics import Diagnostics
from beautiful_md.errors.exceptions import BeautifulMdError
from beautiful_md.pipeline.engine import FormattingPipeline

logger = logging.getLogger(__name__)


class FileOutcome(BaseModel):
    """Result of formatting one file in a batch."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    path: Path
    diagnostics: Diagnostics = Field(default_factory=Diagnostics)
    changed: bool = False
    formatted: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class FormatPool:
    """Format files on worker threads, at most ``max_workers`` at a time.

    All workers share one read-only Config; each document gets its own
    pipeline state.
    """

    def __init__(
        self,
        config: Config | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self._pipeline = FormattingPipeline(config)
        self._max_workers = max(1, max_workers)

    async def process_batch(
        self,
        file_paths: list[str | Path],
        write: bool = True,
    ) -> list[FileOutcome]:
        """Format a batch of files concurrently.

        With ``write=False`` nothing is written; the formatted text is returned
        in each outcome instead.

        Returns one FileOutcome per path, in input order.
        """
        semaphore = asyncio.Semaphore(self._max_workers)

        async def worker(path: Path) -> FileOutcome:
            async with semaphore:
                return await asyncio.to_thread(self._format_one, path, write)

        paths = [Path(p) for p in file_paths]
        results = await asyncio.gather(*(worker(p) for p in paths), return_exceptions=True)

        final: list[FileOutcome] = []
        for path, result in zip(paths, results):
            if isinstance(result, BaseException):
                logger.error("File %s failed: %s", path, result)
                final.append(FileOutcome(path=path, error=str(result)))
            else:
                final.append(result)

        return final

    def _format_one(self, path: Path, write: bool) -> FileOutcome:
        from beautiful_md.core import read_markdown, write_markdown

        original = read_markdown(path)
        try:
            formatted, diagnostics = self._pipeline.run(original)
        except BeautifulMdError as e:
            return FileOutcome(path=path, error=e.message)

        changed = formatted != original
        if write and changed:
            write_markdown(path, formatted)
        return FileOutcome(
            path=path,
            diagnostics=diagnostics,
            changed=changed,
            formatted=None if write else formatted,
        )
