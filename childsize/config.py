# childsize/config.py

"""Default configuration values and the per-run configuration object."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import List

from .accumulator import SortMode

DEFAULT_ROOTS = ["."]
DEFAULT_SORT = "total"
DEFAULT_FORMAT = "table"     # "table", "plain", or "json"
DEFAULT_JOBS = 1
DEFAULT_TOP = 0              # 0 = show every group
SUMMARY_LABEL = "SUMMARY"
PROGRESS_MIN_INTERVAL = 0.05

OUTPUT_FORMATS = ("table", "plain", "json")


@dataclass
class RunConfig:
    roots: List[str] = field(default_factory=lambda: list(DEFAULT_ROOTS))
    patterns: List[str] = field(default_factory=list)
    sort: SortMode = SortMode.TOTAL
    reverse: bool = False
    show_summary: bool = False
    output_format: str = DEFAULT_FORMAT
    human: bool = False
    top: int = DEFAULT_TOP
    jobs: int = DEFAULT_JOBS
    same_file_system: bool = True
    progress: bool = False

    def __post_init__(self) -> None:
        if not self.roots:
            raise ValueError("At least one root path is required")
        if self.jobs < 1:
            raise ValueError(f"--jobs must be at least 1 (got {self.jobs})")
        if self.top < 0:
            raise ValueError(f"--top cannot be negative (got {self.top})")
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format '{self.output_format}'")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "RunConfig":
        return cls(
            roots=list(args.paths) or list(DEFAULT_ROOTS),
            patterns=list(args.glob or []),
            sort=SortMode.parse(args.sort),
            reverse=args.reverse,
            show_summary=args.summary,
            output_format=args.format,
            human=args.human,
            top=args.top,
            jobs=args.jobs,
            same_file_system=not args.cross_devices,
            progress=args.progress,
        )
