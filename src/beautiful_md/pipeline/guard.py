"""Code-fence guard: lifts fenced code out of the text and puts it back verbatim.

Every markdown-aware pass runs on the guarded text, where each fenced block
has been collapsed to a single placeholder line such as
``<!--BEAUTIFUL_MD_CODE_BLOCK_0-->``. The HTML-comment shape survives the
parser/serializer round trip untouched.
"""

from __future__ import annotations

import logging
import re
from enum import StrEnum

from beautiful_md.types import CodeBlock

logger = logging.getLogger(__name__)

FENCE_MARKERS = ("```", "~~~")
PLACEHOLDER_PREFIX = "BEAUTIFUL_MD_CODE_BLOCK_"
_PLACEHOLDER_RE = re.compile(rf"<!--{PLACEHOLDER_PREFIX}(\d+)-->")


class FenceState(StrEnum):
    OUTSIDE = "outside"
    INSIDE = "inside"


def is_fence(line: str) -> bool:
    return line.strip().startswith(FENCE_MARKERS)


def placeholder(index: int) -> str:
    return f"<!--{PLACEHOLDER_PREFIX}{index}-->"


def placeholder_index(line: str) -> int | None:
    """Return the block index if the line is exactly one placeholder token."""
    m = _PLACEHOLDER_RE.fullmatch(line.strip())
    return int(m.group(1)) if m else None


def extract_code_blocks(
    text: str, start: int = 0, literal_tokens: bool = True
) -> tuple[str, list[CodeBlock]]:
    """Replace every fenced block with a placeholder line.

    Blocks are numbered from ``start`` so a second extraction can append to an
    existing sequence. An unterminated fence swallows the rest of the input
    and is still recorded, with ``closed=False``.

    With ``literal_tokens``, a line outside any fence that already reads as a
    placeholder is lifted out too, as a ``raw`` record, so only placeholders
    made here remain in the guarded text. Pass ``False`` when re-guarding
    text that holds placeholders from an earlier extraction.
    """
    ends_with_newline = text.endswith("\n")
    lines = text.split("\n")
    if ends_with_newline:
        lines.pop()

    output: list[str] = []
    blocks: list[CodeBlock] = []
    state = FenceState.OUTSIDE
    language = indent = ""
    body: list[str] = []
    open_line = 0

    for number, line in enumerate(lines, 1):
        if state is FenceState.OUTSIDE:
            if is_fence(line):
                stripped = line.strip()
                language = stripped.lstrip(stripped[0]).strip()
                indent = line[: len(line) - len(line.lstrip())]
                body = []
                open_line = number
                state = FenceState.INSIDE
            elif literal_tokens and placeholder_index(line) is not None:
                blocks.append(CodeBlock(body=line.strip(), start_line=number, raw=True))
                lead = line[: len(line) - len(line.lstrip())]
                output.append(lead + placeholder(start + len(blocks) - 1))
            else:
                output.append(line)
            continue

        if is_fence(line):
            blocks.append(
                CodeBlock(
                    language=language,
                    body="\n".join(body),
                    indent=indent,
                    start_line=open_line,
                    line_count=number - open_line + 1,
                )
            )
            output.append(indent + placeholder(start + len(blocks) - 1))
            state = FenceState.OUTSIDE
        else:
            body.append(line)

    if state is FenceState.INSIDE:
        blocks.append(
            CodeBlock(
                language=language,
                body="\n".join(body),
                indent=indent,
                start_line=open_line,
                line_count=len(lines) - open_line + 1,
                closed=False,
            )
        )
        output.append(indent + placeholder(start + len(blocks) - 1))

    if blocks:
        logger.debug("Extracted %d code block(s)", len(blocks))

    guarded = "\n".join(output)
    if ends_with_newline:
        guarded += "\n"
    return guarded, blocks


def restore_code_blocks(text: str, blocks: list[CodeBlock], fence_style: str) -> str:
    """Put extracted blocks back, re-fenced with ``fence_style``.

    The placeholder line's indentation is reused for both fences; the body is
    emitted exactly as captured.
    """
    output: list[str] = []
    for line in text.split("\n"):
        index = placeholder_index(line)
        if index is None or index >= len(blocks):
            output.append(line)
            continue

        block = blocks[index]
        indent = line[: len(line) - len(line.lstrip())]
        if block.raw:
            output.append(indent + block.body)
            continue
        output.append(f"{indent}{fence_style}{block.language}")
        if block.body:
            output.append(block.body)
        output.append(f"{indent}{fence_style}")

    return "\n".join(output)


def source_line(line: int, blocks: list[CodeBlock]) -> int:
    """Map a line number in guarded text back to the original text.

    Only valid for blocks from a single extraction of the original text.
    """
    offset = 0
    for block in blocks:
        if block.start_line - offset >= line:
            break
        offset += block.line_count - 1
    return line + offset
