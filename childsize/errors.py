"""
childsize.errors

Exception taxonomy for the aggregation engine.

Only pattern compilation is fatal. Per-entry traversal problems are reported
as `walker.Skipped` results and never cross the walk as exceptions.
"""

from __future__ import annotations


class ChildSizeError(Exception):
    """Base class for childsize errors."""


class InvalidPattern(ChildSizeError, ValueError):
    """A glob pattern string could not be compiled."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid glob pattern {pattern!r}: {reason}")


class TraversalEntryError(ChildSizeError):
    """A single filesystem entry could not be read during a walk."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
