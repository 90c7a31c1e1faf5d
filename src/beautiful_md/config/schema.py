"""Pydantic models for style configuration.

All models are frozen: a config is read-only for the whole formatting run and
can be shared between workers formatting different documents.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from beautiful_md.config import defaults

ListMarker = Literal["-", "*", "+"]
FenceStyle = Literal["```", "~~~"]


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class TableConfig(_Section):
    align: bool = defaults.DEFAULT_TABLE_ALIGN
    min_column_width: int = Field(default=defaults.DEFAULT_MIN_COLUMN_WIDTH, ge=0)
    padding: int = Field(default=defaults.DEFAULT_TABLE_PADDING, ge=0)


class HeadingConfig(_Section):
    blank_lines_before: int = Field(default=defaults.DEFAULT_BLANK_LINES_BEFORE, ge=0)
    blank_lines_after: int = Field(default=defaults.DEFAULT_BLANK_LINES_AFTER, ge=0)
    space_after_hash: bool = defaults.DEFAULT_SPACE_AFTER_HASH


class ListConfig(_Section):
    indent_size: int = Field(default=defaults.DEFAULT_INDENT_SIZE, gt=0)
    marker: ListMarker = defaults.DEFAULT_LIST_MARKER
    normalize_numbers: bool = defaults.DEFAULT_NORMALIZE_NUMBERS


class CodeConfig(_Section):
    # Advisory only: reported as a diagnostic, never enforced on the text.
    ensure_language_tag: bool = defaults.DEFAULT_ENSURE_LANGUAGE_TAG
    fence_style: FenceStyle = defaults.DEFAULT_FENCE_STYLE


class Config(_Section):
    tables: TableConfig = Field(default_factory=TableConfig)
    headings: HeadingConfig = Field(default_factory=HeadingConfig)
    lists: ListConfig = Field(default_factory=ListConfig)
    code: CodeConfig = Field(default_factory=CodeConfig)
