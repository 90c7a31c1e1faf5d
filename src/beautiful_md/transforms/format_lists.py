"""Formatter: list markers, nesting indentation and ordered numbering."""

from __future__ import annotations

import re
from enum import StrEnum
from typing import NamedTuple

from beautiful_md.config.schema import ListConfig
from beautiful_md.pipeline.postprocessor import register_formatter

_BULLET_RE = re.compile(r"^( *)([-*+])(?: +(.*))?$")
_ORDERED_RE = re.compile(r"^( *)(\d+)([.)])(?: +(.*))?$")
_RULE_RE = re.compile(r"^([-*_])( *\1){2,} *$")

# Past this many spaces beyond the parent's text a line is indented code
_MAX_CHILD_OFFSET = 3


class ListKind(StrEnum):
    BULLET = "bullet"
    ORDERED = "ordered"


class ListItem(NamedTuple):
    indent: int
    kind: ListKind
    number: str
    delimiter: str
    content: str
    marker: str  # bullet character, or the ordered delimiter


class _Level(NamedTuple):
    """One open list level while scanning."""

    kind: ListKind
    content_col: int  # where item text starts in the input
    out_content_col: int  # where it starts in the output
    number: int  # last number emitted; 0 once the run is broken
    marker: str  # source marker of the list at this level
    out_marker: str  # marker its items are written with


def parse_list_item(line: str) -> ListItem | None:
    """Recognize a bullet or ordered list item line, including empty items."""
    if _RULE_RE.match(line.strip()):
        return None

    m = _BULLET_RE.match(line)
    if m:
        indent, bullet, content = m.groups()
        return ListItem(len(indent), ListKind.BULLET, "", "", content or "", bullet)

    m = _ORDERED_RE.match(line)
    if m:
        indent, number, delimiter, content = m.groups()
        return ListItem(len(indent), ListKind.ORDERED, number, delimiter, content or "", delimiter)

    return None


def _content_col(line: str, item: ListItem) -> int:
    return len(line) - len(item.content) if item.content else len(line.rstrip()) + 1


def _bullet_marker(item: ListItem, sibling: _Level | None, config: ListConfig) -> str:
    """Pick the bullet for an item, keeping adjacent lists apart.

    A different source bullet at the same level starts a new list; it is
    written with a bullet other than the previous list's so the two are
    still separate lists when read back.
    """
    if sibling is None or sibling.kind is not ListKind.BULLET:
        return config.marker
    if sibling.marker == item.marker:
        return sibling.out_marker
    return "*" if sibling.out_marker == "-" else "-"


@register_formatter("lists")
def format_lists(markdown: str, config: ListConfig) -> str:
    """Re-emit list items with the configured marker, indent and numbering.

    Nesting follows the content column of the enclosing item, which for
    two-space bullet nesting is ``leading_spaces // 2``. Items are indented
    ``indent_size`` spaces per level, never left of their parent's text and
    never more than three spaces past it. Ordered runs restart at 1 after a
    blank line or any line outside the list.
    """
    result: list[str] = []
    levels: list[_Level] = []

    for line in markdown.split("\n"):
        stripped = line.strip()

        if not stripped:
            levels = [lvl._replace(number=0) for lvl in levels]
            result.append(line)
            continue

        indent = len(line) - len(line.lstrip(" "))
        item = parse_list_item(line)

        depth = len(levels)
        while depth and indent < levels[depth - 1].content_col:
            depth -= 1
        sibling = levels[depth] if depth < len(levels) else None

        # An empty item cannot interrupt a paragraph
        if item and not item.content and sibling is None and result and result[-1].strip():
            item = None

        if item is None:
            del levels[depth:]
            if levels:
                # Continuation of an item: follow its new position
                shift = levels[-1].out_content_col - levels[-1].content_col
                line = " " * max(indent + shift, 0) + line.lstrip(" ")
            result.append(line)
            continue

        new_list = (
            sibling is None or sibling.kind is not item.kind or sibling.marker != item.marker
        )
        del levels[depth:]

        out_indent = config.indent_size * depth
        if levels:
            parent_col = levels[-1].out_content_col
            out_indent = min(max(out_indent, parent_col), parent_col + _MAX_CHILD_OFFSET)
        prefix = " " * out_indent

        if item.kind is ListKind.BULLET:
            number = 0
            marker = _bullet_marker(item, sibling, config)
        elif config.normalize_numbers:
            previous = 0 if new_list else sibling.number
            number = previous + 1
            marker = f"{number}{item.delimiter}"
        else:
            number = int(item.number)
            marker = f"{item.number}{item.delimiter}"

        out_line = f"{prefix}{marker}"
        if item.content:
            out_line += f" {item.content}"
        result.append(out_line)
        levels.append(
            _Level(
                kind=item.kind,
                content_col=_content_col(line, item),
                out_content_col=out_indent + len(marker) + 1,
                number=number,
                marker=item.marker,
                out_marker=marker,
            )
        )

    return "\n".join(result)
