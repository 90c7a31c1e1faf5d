"""Parser/serializer boundary: markdown-it-py tokens in, mdformat text out.

The round trip turns repaired markdown into canonical text (ATX headings,
one blank line between blocks, ``-`` bullets nested by two spaces,
consecutive ordered numbers). The style formatters then work on that text.
"""

from __future__ import annotations

import logging
from typing import Any

import mdformat.plugins
from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdformat.renderer import MDRenderer

from beautiful_md.errors.exceptions import FormattingError, ParseError

logger = logging.getLogger(__name__)

# mdformat parser extensions: GFM brings tables, strikethrough, task lists
# and autolinks; footnotes come from their own plugin.
MARKDOWN_EXTENSIONS = ("gfm", "tables", "footnote")

_RENDER_OPTIONS: dict[str, Any] = {
    "wrap": "keep",
    "number": True,
    "end_of_line": "lf",
}


def build_parser(extensions: tuple[str, ...] = MARKDOWN_EXTENSIONS) -> MarkdownIt:
    """Create a CommonMark parser wired to mdformat's markdown renderer."""
    mdit = MarkdownIt(renderer_cls=MDRenderer)
    mdit.options["mdformat"] = dict(_RENDER_OPTIONS)
    mdit.options["store_labels"] = True
    mdit.options["codeformatters"] = {}
    mdit.options["parser_extension"] = []

    for name in extensions:
        plugin = mdformat.plugins.PARSER_EXTENSIONS.get(name)
        if plugin is None:
            raise FormattingError(f"Markdown extension '{name}' is not installed", stage="setup")
        if plugin not in mdit.options["parser_extension"]:
            mdit.options["parser_extension"].append(plugin)
            plugin.update_mdit(mdit)

    return mdit


def parse_markdown(markdown: str, mdit: MarkdownIt | None = None) -> tuple[list[Token], dict]:
    """Parse markdown into the token stream plus the parser environment."""
    mdit = mdit or build_parser()
    env: dict[str, Any] = {}
    try:
        tokens = mdit.parse(markdown, env)
    except Exception as e:
        raise ParseError(f"Failed to parse markdown: {e}") from e
    return tokens, env


def serialize(tokens: list[Token], env: dict, mdit: MarkdownIt | None = None) -> str:
    """Serialize a token stream back to markdown text."""
    mdit = mdit or build_parser()
    try:
        return mdit.renderer.render(tokens, mdit.options, env)
    except Exception as e:
        raise FormattingError(f"Failed to format markdown: {e}") from e


def canonicalize(markdown: str) -> str:
    """Round-trip markdown through the parser and serializer."""
    mdit = build_parser()
    tokens, env = parse_markdown(markdown, mdit)
    logger.debug("Parsed %d block token(s)", len(tokens))
    return serialize(tokens, env, mdit)
