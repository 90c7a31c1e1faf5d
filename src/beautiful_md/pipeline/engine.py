"""Formatting pipeline — runs every pass over one document in a fixed order.

    raw text
      → code-fence guard (extract)
      → structural repair           (+ diagnostics)
      → parse → serialize           (canonical text)
      → code-fence guard (extract code the serializer fenced)
      → tables → headings → lists
      → code-fence guard (restore, configured fence style)
"""

from __future__ import annotations

import logging

# Auto-register built-in formatters on import
import beautiful_md.transforms  # noqa: F401
from beautiful_md.config.schema import Config
from beautiful_md.diagnostics import Diagnostics
from beautiful_md.pipeline.canonical import canonicalize
from beautiful_md.pipeline.guard import extract_code_blocks, restore_code_blocks, source_line
from beautiful_md.pipeline.postprocessor import run_formatters
from beautiful_md.pipeline.preprocessor import preprocess
from beautiful_md.types import CodeBlock, DiagnosticKind

logger = logging.getLogger(__name__)


class FormattingPipeline:
    """Format markdown documents with one read-only configuration.

    A pipeline holds no per-document state, so one instance can format many
    documents, including from several threads at once.
    """

    def __init__(self, config: Config | None = None) -> None:
        self._config = config or Config()

    @property
    def config(self) -> Config:
        return self._config

    def run(self, content: str) -> tuple[str, Diagnostics]:
        """Format one document; returns the new text and what was found.

        Raises FormattingError if the parser/serializer round trip fails.
        """
        text = content.replace("\r\n", "\n")
        diagnostics = Diagnostics()

        guarded, blocks = extract_code_blocks(text)
        for block in blocks:
            if not block.closed:
                diagnostics.warn(
                    DiagnosticKind.UNCLOSED_CODE_BLOCK,
                    block.start_line,
                    "Code block is missing its closing fence; closed at end of document",
                    snippet=text.split("\n")[block.start_line - 1].strip(),
                )

        repaired, repair_diagnostics = preprocess(guarded)
        diagnostics.extend(
            d.model_copy(update={"line": source_line(d.line, blocks)})
            for d in repair_diagnostics
        )

        baseline = canonicalize(repaired)
        baseline, serializer_blocks = extract_code_blocks(
            baseline, start=len(blocks), literal_tokens=False
        )

        formatted = run_formatters(baseline, self._config)
        formatted = restore_code_blocks(
            formatted, blocks + serializer_blocks, self._config.code.fence_style
        )

        if self._config.code.ensure_language_tag:
            self._check_language_tags(blocks, diagnostics)

        logger.debug(
            "Formatted document: %d code block(s), %d diagnostic(s)",
            len(blocks) + len(serializer_blocks),
            len(diagnostics),
        )
        return _finalize(formatted), diagnostics

    @staticmethod
    def _check_language_tags(blocks: list[CodeBlock], diagnostics: Diagnostics) -> None:
        for block in blocks:
            if not block.raw and not block.language:
                diagnostics.info(
                    DiagnosticKind.OTHER,
                    block.start_line,
                    "Code block has no language tag",
                )


def _finalize(text: str) -> str:
    """Exactly one trailing newline; an empty document stays empty."""
    text = text.rstrip("\n")
    return text + "\n" if text.strip() else ""
