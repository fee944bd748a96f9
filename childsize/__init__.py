"""childsize: per-directory file size statistics."""

__version__ = "0.1.0"

from .accumulator import SizeAccumulator, SortMode
from .aggregator import Aggregator, collect
from .errors import ChildSizeError, InvalidPattern, TraversalEntryError
from .globfilter import GlobFilter
from .keys import resolve_key
from .reporter import Reporter, ReportRow
from .walker import FileHit, Skipped, TreeWalker

__all__ = [
    "SizeAccumulator",
    "SortMode",
    "Aggregator",
    "collect",
    "ChildSizeError",
    "InvalidPattern",
    "TraversalEntryError",
    "GlobFilter",
    "resolve_key",
    "Reporter",
    "ReportRow",
    "FileHit",
    "Skipped",
    "TreeWalker",
]
