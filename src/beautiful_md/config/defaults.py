"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Tables
DEFAULT_TABLE_ALIGN = True
DEFAULT_MIN_COLUMN_WIDTH = 3
DEFAULT_TABLE_PADDING = 1

# Headings
DEFAULT_BLANK_LINES_BEFORE = 2
DEFAULT_BLANK_LINES_AFTER = 1
DEFAULT_SPACE_AFTER_HASH = True

# Lists
DEFAULT_INDENT_SIZE = 2
DEFAULT_LIST_MARKER = "-"
DEFAULT_NORMALIZE_NUMBERS = True

# Code blocks
DEFAULT_ENSURE_LANGUAGE_TAG = False
DEFAULT_FENCE_STYLE = "```"

# Config file discovery
CONFIG_FILE_NAME = ".beautiful-md.yaml"
CONFIG_ENV_VAR = "BEAUTIFUL_MD_CONFIG"

# Batch formatting
DEFAULT_MAX_WORKERS = 5


def get_defaults() -> dict[str, Any]:
    """Return all style defaults as a nested dictionary, grouped like the config file."""
    return {
        "tables": {
            "align": DEFAULT_TABLE_ALIGN,
            "min_column_width": DEFAULT_MIN_COLUMN_WIDTH,
            "padding": DEFAULT_TABLE_PADDING,
        },
        "headings": {
            "blank_lines_before": DEFAULT_BLANK_LINES_BEFORE,
            "blank_lines_after": DEFAULT_BLANK_LINES_AFTER,
            "space_after_hash": DEFAULT_SPACE_AFTER_HASH,
        },
        "lists": {
            "indent_size": DEFAULT_INDENT_SIZE,
            "marker": DEFAULT_LIST_MARKER,
            "normalize_numbers": DEFAULT_NORMALIZE_NUMBERS,
        },
        "code": {
            "ensure_language_tag": DEFAULT_ENSURE_LANGUAGE_TAG,
            "fence_style": DEFAULT_FENCE_STYLE,
        },
    }
