"""Diagnostics ledger: ordered record of issues found during one run."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from beautiful_md.types import Diagnostic, DiagnosticKind, Severity


class Diagnostics:
    """Append-only collection of diagnostics, kept in discovery order."""

    def __init__(self, messages: Iterable[Diagnostic] = ()) -> None:
        self._messages: list[Diagnostic] = list(messages)

    def add(self, diagnostic: Diagnostic) -> None:
        self._messages.append(diagnostic)

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        self._messages.extend(diagnostics)

    def warn(
        self,
        kind: DiagnosticKind,
        line: int,
        message: str,
        snippet: str | None = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(
            severity=Severity.WARNING, kind=kind, line=line, message=message, snippet=snippet
        )
        self.add(diagnostic)
        return diagnostic

    def info(
        self,
        kind: DiagnosticKind,
        line: int,
        message: str,
        snippet: str | None = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(
            severity=Severity.INFO, kind=kind, line=line, message=message, snippet=snippet
        )
        self.add(diagnostic)
        return diagnostic

    @property
    def messages(self) -> tuple[Diagnostic, ...]:
        return tuple(self._messages)

    def by_severity(self, severity: Severity) -> list[Diagnostic]:
        return [d for d in self._messages if d.severity == severity]

    def by_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self._messages if d.kind == kind]

    def render(self) -> str:
        """Render as plain text: a count header followed by one entry per issue."""
        if not self._messages:
            return ""
        lines = [f"{len(self._messages)} issues found:"]
        lines.extend(str(d) for d in self._messages)
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._messages)

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __repr__(self) -> str:
        return f"Diagnostics({self._messages!r})"
