#!/usr/bin/env python3
"""
childsize.aggregator

Owns the per-directory accumulators and the run summary.

collect() is the entry point used by the CLI: it walks every root, feeds the
hits into an Aggregator and finalizes it. With jobs > 1 each root is walked
by a worker thread into its own private Aggregator; the private aggregators
are merged in root order once all workers finish, so no state is shared
between threads.
"""

from __future__ import annotations

import concurrent.futures
import logging
from typing import Callable, Dict, Iterable, List, Optional

from .accumulator import SizeAccumulator
from .globfilter import GlobFilter
from .keys import OUTSIDE_ROOT_KEY, resolve_key
from .walker import FileHit, TreeWalker

logger = logging.getLogger(__name__)

FileCallback = Callable[[FileHit], None]


class Aggregator:
    def __init__(self) -> None:
        self.entries: Dict[str, SizeAccumulator] = {}
        self.summary = SizeAccumulator()
        self.skipped = 0
        self._finalized = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _check_open(self) -> None:
        if self._finalized:
            raise RuntimeError("Aggregator has already been finalized")

    def record(self, key: str, size: int) -> None:
        self._check_open()
        acc = self.entries.get(key)
        if acc is None:
            acc = self.entries[key] = SizeAccumulator()
        acc.fold(size)
        self.summary.fold(size)

    def add_root(self, walker: TreeWalker, root: str, on_file: Optional[FileCallback] = None) -> int:
        """Walk `root` and record every qualifying file. Returns the number recorded."""
        self._check_open()
        before = walker.skipped
        recorded = 0
        for hit in walker.files(root):
            key = resolve_key(hit.path, root)
            if key is None:
                logger.debug("%s is outside root %s", hit.path, root)
                key = OUTSIDE_ROOT_KEY
            self.record(key, hit.size)
            recorded += 1
            if on_file is not None:
                on_file(hit)
        self.skipped += walker.skipped - before
        logger.debug("root %s: %d files, %d skipped", root, recorded, walker.skipped - before)
        return recorded

    def merge(self, other: "Aggregator") -> None:
        self._check_open()
        if other.finalized:
            raise RuntimeError("Cannot merge a finalized Aggregator")
        for key, acc in other.entries.items():
            self.entries.setdefault(key, SizeAccumulator()).merge(acc)
        self.summary.merge(other.summary)
        self.skipped += other.skipped

    def finalize_all(self) -> None:
        """Compute every average, the summary's included. Call exactly once."""
        self._check_open()
        for acc in self.entries.values():
            acc.finalize()
        self.summary.finalize()
        self._finalized = True


def _walk_one(root: str, glob_filter: GlobFilter, same_file_system: bool,
              on_file: Optional[FileCallback]) -> Aggregator:
    agg = Aggregator()
    agg.add_root(TreeWalker(glob_filter, same_file_system=same_file_system), root, on_file)
    return agg


def collect(
    roots: Iterable[str],
    glob_filter: Optional[GlobFilter] = None,
    *,
    jobs: int = 1,
    same_file_system: bool = True,
    on_file: Optional[FileCallback] = None,
) -> Aggregator:
    """
    Walk every root and return a finalized Aggregator.

    `on_file` is invoked for each recorded file; with jobs > 1 it is called
    from worker threads.
    """
    roots = list(roots)
    glob_filter = glob_filter if glob_filter is not None else GlobFilter()
    if jobs < 1:
        raise ValueError(f"jobs must be >= 1, got {jobs}")

    result = Aggregator()
    if jobs == 1 or len(roots) < 2:
        walker = TreeWalker(glob_filter, same_file_system=same_file_system)
        for root in roots:
            result.add_root(walker, root, on_file)
    else:
        partials: List[Aggregator]
        with concurrent.futures.ThreadPoolExecutor(max_workers=min(jobs, len(roots))) as ex:
            partials = list(ex.map(
                lambda r: _walk_one(r, glob_filter, same_file_system, on_file), roots
            ))
        for part in partials:
            result.merge(part)

    result.finalize_all()
    logger.debug(
        "aggregated %d files into %d groups (%d entries skipped)",
        result.summary.count, len(result.entries), result.skipped,
    )
    return result
