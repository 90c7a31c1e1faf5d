"""Concurrency — bounded async pool for batch formatting."""

from beautiful_md.concurrency.pool import FileOutcome, FormatPool

__all__ = ["FileOutcome", "FormatPool"]
