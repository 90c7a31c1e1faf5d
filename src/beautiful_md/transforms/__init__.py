"""Built-in structural formatters: auto-registered on import."""

from beautiful_md.transforms.format_headings import format_headings
from beautiful_md.transforms.format_lists import format_lists
from beautiful_md.transforms.format_tables import format_tables

__all__ = [
    "format_tables",
    "format_headings",
    "format_lists",
]
