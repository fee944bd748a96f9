#!/usr/bin/env python3
"""
childsize.accumulator

Running size statistics for one group of files (or for the whole run) and the
sort modes used to order them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional


@dataclass
class SizeAccumulator:
    """
    Count/total/max/min of the file sizes folded in so far.

    `min` stays None until the first fold. `average` is only written by
    finalize(); it is never maintained incrementally.
    """
    count: int = 0
    total: int = 0
    max: int = 0
    min: Optional[int] = None
    average: int = 0

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def fold(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"File size cannot be negative: {size}")
        self.count += 1
        self.total += size
        if size > self.max:
            self.max = size
        if self.min is None or size < self.min:
            self.min = size

    def merge(self, other: "SizeAccumulator") -> None:
        """Fold another accumulator's statistics into this one."""
        if other.is_empty:
            return
        self.count += other.count
        self.total += other.total
        if other.max > self.max:
            self.max = other.max
        if self.min is None or (other.min is not None and other.min < self.min):
            self.min = other.min

    def finalize(self) -> int:
        # Empty accumulators average to zero instead of dividing by zero.
        self.average = int(self.total / self.count) if self.count else 0
        return self.average

    def compare(self, by: "SortMode", other: "SizeAccumulator") -> int:
        mine, theirs = by.key(self), by.key(other)
        return (mine > theirs) - (mine < theirs)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "total": self.total,
            "average": self.average,
            "max": self.max,
            "min": self.min,
        }


class SortMode(Enum):
    """Accumulator field that drives report ordering."""
    COUNT = "count"
    TOTAL = "total"
    AVERAGE = "average"
    MAX = "max"
    MIN = "min"

    @classmethod
    def parse(cls, text: str) -> "SortMode":
        try:
            return cls(str(text).strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown sort mode '{text}'; expected one of: {choices}") from None

    def key(self, acc: SizeAccumulator) -> int:
        return _SORT_KEYS[self](acc)


_SORT_KEYS: Dict[SortMode, Callable[[SizeAccumulator], int]] = {
    SortMode.COUNT: lambda a: a.count,
    SortMode.TOTAL: lambda a: a.total,
    SortMode.AVERAGE: lambda a: a.average,
    SortMode.MAX: lambda a: a.max,
    SortMode.MIN: lambda a: a.min if a.min is not None else 0,
}
