"""Formatter: align and pad markdown tables."""

from __future__ import annotations

from itertools import groupby

from beautiful_md.config.schema import TableConfig
from beautiful_md.pipeline.postprocessor import register_formatter
from beautiful_md.pipeline.preprocessor import is_separator_row, split_cells


@register_formatter("tables")
def format_tables(markdown: str, config: TableConfig) -> str:
    """Pad every column of every table to a common width.

    Consecutive lines containing ``|`` form one table; a block without a
    separator row is not a table and is left as is. The first row's
    indentation is kept for every row.
    """
    if not config.align:
        return markdown

    result: list[str] = []
    for in_table, group in groupby(markdown.split("\n"), key=_is_table_line):
        block = list(group)
        if in_table and any(is_separator_row(split_cells(line)) for line in block):
            result.extend(_align_table(block, config))
        else:
            result.extend(block)

    return "\n".join(result)


def _is_table_line(line: str) -> bool:
    stripped = line.strip()
    return "|" in stripped and not stripped.startswith(">")


def _align_table(table_lines: list[str], config: TableConfig) -> list[str]:
    """Align a group of table lines to consistent column widths."""
    rows = [split_cells(line) for line in table_lines]
    separators = [is_separator_row(row) for row in rows]

    num_cols = max(len(row) for row in rows)
    col_widths = [config.min_column_width] * num_cols
    for row, is_separator in zip(rows, separators):
        for j, cell in enumerate(row):
            needed = _separator_min_width(cell) if is_separator else len(cell)
            col_widths[j] = max(col_widths[j], needed)

    first = table_lines[0]
    indent = first[: len(first) - len(first.lstrip())]
    pad = " " * config.padding
    aligned: list[str] = []
    for row, is_separator in zip(rows, separators):
        cells: list[str] = []
        for j, width in enumerate(col_widths):
            cell = row[j] if j < len(row) else ""
            if is_separator:
                cells.append(_separator_cell(cell, width))
            else:
                cells.append(cell.ljust(width))
        aligned.append(indent + "|" + "|".join(f"{pad}{c}{pad}" for c in cells) + "|")

    return aligned


def _separator_min_width(cell: str) -> int:
    """Narrowest separator that still shows the column's alignment colons."""
    return 1 + cell.startswith(":") + (cell.endswith(":") and len(cell) > 1)


def _separator_cell(cell: str, width: int) -> str:
    left = cell.startswith(":")
    right = cell.endswith(":") and len(cell) > 1
    dashes = "-" * (width - left - right)
    return (":" if left else "") + dashes + (":" if right else "")
