"""Shared Pydantic models for beautiful-md."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ── Enums ──


class Severity(StrEnum):
    WARNING = "warning"
    INFO = "info"


class DiagnosticKind(StrEnum):
    MALFORMED_TABLE = "malformed_table"
    UNCLOSED_CODE_BLOCK = "unclosed_code_block"
    OTHER = "other"


_SEVERITY_ICONS = {
    Severity.WARNING: "⚠️",
    Severity.INFO: "ℹ️",
}


# ── Runtime models ──


class Diagnostic(BaseModel):
    """An issue found (and possibly repaired) while formatting one document."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    kind: DiagnosticKind
    line: int = Field(ge=1)
    message: str
    snippet: str | None = None

    @property
    def icon(self) -> str:
        return _SEVERITY_ICONS[self.severity]

    def with_snippet(self, snippet: str) -> Diagnostic:
        """Return a copy carrying a one-line snippet of the offending text."""
        return self.model_copy(update={"snippet": snippet})

    def __str__(self) -> str:
        text = f"{self.icon} Line {self.line}: {self.message}"
        if self.snippet is not None:
            text += f"\n  │ {self.snippet}"
        return text


class CodeBlock(BaseModel):
    """A fenced code block lifted out of the document before any other pass.

    ``body`` is the fenced content exactly as written, lines joined by ``\\n``.
    ``start_line`` is the 1-based line of the opening fence and ``line_count``
    the number of lines the block spanned (fences included). A ``raw`` record
    holds a document line that already looked like a placeholder; it is put
    back as written, without fences.
    """

    model_config = ConfigDict(frozen=True)

    language: str = ""
    body: str = ""
    indent: str = ""
    start_line: int = 1
    line_count: int = 1
    closed: bool = True
    raw: bool = False
