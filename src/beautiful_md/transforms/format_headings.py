"""Formatter: blank lines around headings and space after the hashes."""

from __future__ import annotations

import re

from beautiful_md.config.schema import HeadingConfig
from beautiful_md.pipeline.postprocessor import register_formatter

_HEADING_RE = re.compile(r"^(#{1,6})(?!#)\s*(.*)$")


def is_heading(line: str) -> bool:
    return _HEADING_RE.match(line.strip()) is not None


def normalize_heading(line: str) -> str:
    """``##Title`` → ``## Title``; a bare hash run is returned as is."""
    m = _HEADING_RE.match(line.strip())
    if not m:
        return line
    hashes, text = m.groups()
    return f"{hashes} {text}" if text else hashes


@register_formatter("headings")
def format_headings(markdown: str, config: HeadingConfig) -> str:
    """Give every heading exactly the configured blank lines before and after.

    Blank lines before the first line of the document are never added.
    """
    lines = markdown.split("\n")
    result: list[str] = []
    i = 0

    while i < len(lines):
        line = lines[i]
        stripped = line.strip()

        if not is_heading(stripped):
            result.append(line)
            i += 1
            continue

        if result:
            blank_count = 0
            for previous in reversed(result):
                if previous.strip():
                    break
                blank_count += 1
            if blank_count > config.blank_lines_before:
                del result[len(result) - (blank_count - config.blank_lines_before):]
            else:
                result.extend([""] * (config.blank_lines_before - blank_count))

        indent = line[: len(line) - len(line.lstrip())]
        heading = normalize_heading(stripped) if config.space_after_hash else stripped
        result.append(indent + heading)
        result.extend([""] * config.blank_lines_after)

        # The blank lines that followed the heading are replaced, not kept
        i += 1
        while i < len(lines) and not lines[i].strip():
            i += 1

    return "\n".join(result)
