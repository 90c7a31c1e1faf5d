"""Structural repair: fixes common malformations before the text is parsed.

Malformed markdown is repaired here so the parser sees real headings, list
items and table rows instead of escaping them as plain text. Every repair is
a single top-to-bottom line scan; the table scan also reports what it fixed
or could not reconcile.
"""

from __future__ import annotations

import logging
import re
from enum import StrEnum

from beautiful_md.diagnostics import Diagnostics
from beautiful_md.pipeline.guard import FenceState, is_fence
from beautiful_md.types import DiagnosticKind

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^(#{1,6})(?!#)(.*)$")
_BULLET_RE = re.compile(r"^(\s*)([-*+])([^\s\-*+].*)$")
_ORDERED_RE = re.compile(r"^(\s*)(\d+)\.([^\s\d].*)$")
_PIPE_SPLIT_RE = re.compile(r"(?<!\\)\|")
_SEPARATOR_CELL_RE = re.compile(r"^[-:]+$")


class TableState(StrEnum):
    OUTSIDE = "outside"
    IN_TABLE = "in_table"


def preprocess(markdown: str) -> tuple[str, Diagnostics]:
    """Run all repairs in order and collect diagnostics."""
    diagnostics = Diagnostics()

    result = fix_headings(markdown)
    result = fix_list_markers(result)
    result = fix_table_pipes(result, diagnostics)

    if diagnostics:
        logger.debug("Structural repair reported %d issue(s)", len(diagnostics))
    return result, diagnostics


def fix_headings(markdown: str) -> str:
    """Normalize ATX heading syntax.

    - ``#NoSpace`` → ``# NoSpace``
    - ``####Trailing####`` → ``#### Trailing``
    - ``###  TooManySpaces`` → ``### TooManySpaces``

    Seven or more hashes, or hashes with no text, are not headings and are
    left alone.
    """
    result: list[str] = []
    for line in markdown.split("\n"):
        m = _HEADING_RE.match(line.strip())
        if m:
            text = m.group(2).strip().rstrip("#").rstrip()
            if text:
                result.append(f"{m.group(1)} {text}")
                continue
        result.append(line)

    return "\n".join(result)


def fix_list_markers(markdown: str) -> str:
    """Insert the missing space after list markers, keeping indentation.

    ``-Item`` → ``- Item`` and ``1.Item`` → ``1. Item``. Rules (``---``),
    doubled markers (``**bold**``, ``--flag``), single-line emphasis
    (``*word*``), decimals (``3.14``) and table separator rows (``-|-``) are
    not list items.
    """
    result: list[str] = []
    for line in markdown.split("\n"):
        if "|" in line and is_separator_row(split_cells(line)):
            result.append(line)
            continue

        m = _BULLET_RE.match(line)
        if m:
            indent, marker, rest = m.groups()
            if not (marker == "*" and "*" in rest):
                result.append(f"{indent}{marker} {rest}")
                continue

        m = _ORDERED_RE.match(line)
        if m:
            indent, number, rest = m.groups()
            result.append(f"{indent}{number}. {rest}")
            continue

        result.append(line)

    return "\n".join(result)


def split_cells(row: str) -> list[str]:
    """Split a piped row into its cells; escaped pipes stay inside cells."""
    inner = row.strip()
    if inner.startswith("|"):
        inner = inner[1:]
    if inner.endswith("|") and not inner.endswith("\\|"):
        inner = inner[:-1]
    return [cell.strip() for cell in _PIPE_SPLIT_RE.split(inner)]


def is_separator_row(cells: list[str]) -> bool:
    filled = [c for c in cells if c]
    return bool(filled) and all(_SEPARATOR_CELL_RE.match(c) for c in filled)


def fix_table_pipes(markdown: str, diagnostics: Diagnostics) -> str:
    """Add missing outer pipes to table rows and check column counts.

    - ``Name|Age`` → ``|Name|Age|``

    The first data row of each table sets the expected column count; the
    separator row is never counted. Only filled cells count as columns, so
    ``| a | | c |`` has two.
    """
    result: list[str] = []
    fence = FenceState.OUTSIDE
    table = TableState.OUTSIDE
    expected: int | None = None

    for number, line in enumerate(markdown.split("\n"), 1):
        if is_fence(line):
            fence = FenceState.INSIDE if fence is FenceState.OUTSIDE else FenceState.OUTSIDE
            result.append(line)
            continue

        if fence is FenceState.INSIDE:
            result.append(line)
            continue

        stripped = line.strip()
        if "|" not in stripped or stripped.startswith(">"):
            table = TableState.OUTSIDE
            expected = None
            result.append(line)
            continue

        if table is TableState.OUTSIDE:
            table = TableState.IN_TABLE
            expected = None

        fixed = stripped
        if not fixed.startswith("|"):
            fixed = "|" + fixed
        if not fixed.endswith("|") or fixed.endswith("\\|"):
            fixed += "|"

        cells = split_cells(fixed)
        if not is_separator_row(cells):
            columns = sum(1 for c in cells if c)
            if expected is None:
                expected = columns
            elif columns != expected:
                diagnostics.warn(
                    DiagnosticKind.MALFORMED_TABLE,
                    number,
                    f"Table has inconsistent columns: expected {expected}, found {columns}",
                    snippet=stripped,
                )

        if fixed != stripped:
            diagnostics.info(
                DiagnosticKind.MALFORMED_TABLE,
                number,
                "Fixed missing table pipes",
                snippet=f"{stripped} → {fixed}",
            )

        result.append(fixed)

    return "\n".join(result)
