#!/usr/bin/env python3
"""
childsize.walker

Recursive, same-filesystem traversal of one root.

walk() yields one result per interesting entry: a FileHit for every regular
file whose base name passes the glob filter, or a Skipped for anything that
could not be read (permission denied, vanished mid-walk) or that lies across
a filesystem boundary. files() is the central place where skips are dropped,
so callers only ever see hits.

Entries are visited depth-first in lexical name order. Symlinks are neither
followed nor aggregated.
"""

from __future__ import annotations

import logging
import os
import stat as statmod
from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

from .errors import TraversalEntryError
from .globfilter import GlobFilter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileHit:
    path: str
    size: int


@dataclass(frozen=True)
class Skipped:
    path: str
    reason: str

    def as_error(self) -> TraversalEntryError:
        return TraversalEntryError(self.path, self.reason)


WalkResult = Union[FileHit, Skipped]


def _root_stat(root: str) -> os.stat_result:
    """Stat the root itself; a symlinked root is followed."""
    return os.stat(root)


def _entry_stat(entry: os.DirEntry) -> os.stat_result:
    """Separate from the walk loop so tests can monkeypatch it."""
    return entry.stat(follow_symlinks=False)


def _list_dir(path: str) -> List[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda e: e.name)


def _reason(exc: OSError) -> str:
    return exc.strerror or exc.__class__.__name__


class TreeWalker:
    """Walks roots and yields qualifying files."""

    def __init__(self, glob_filter: Optional[GlobFilter] = None, *, same_file_system: bool = True):
        self.glob_filter = glob_filter if glob_filter is not None else GlobFilter()
        self.same_file_system = same_file_system
        self.skipped = 0

    def walk(self, root: str) -> Iterator[WalkResult]:
        try:
            root_st = _root_stat(root)
        except OSError as exc:
            yield Skipped(root, _reason(exc))
            return

        if statmod.S_ISREG(root_st.st_mode):
            if self.glob_filter.matches(os.path.basename(os.path.normpath(root))):
                yield FileHit(root, int(root_st.st_size))
            return
        if not statmod.S_ISDIR(root_st.st_mode):
            return

        root_dev = root_st.st_dev
        stack: List[str] = [root]
        while stack:
            current = stack.pop()
            try:
                entries = _list_dir(current)
            except OSError as exc:
                yield Skipped(current, _reason(exc))
                continue

            subdirs: List[str] = []
            for entry in entries:
                try:
                    st = _entry_stat(entry)
                except OSError as exc:
                    yield Skipped(entry.path, _reason(exc))
                    continue

                mode = st.st_mode
                if statmod.S_ISDIR(mode):
                    if self.same_file_system and st.st_dev != root_dev:
                        yield Skipped(entry.path, "different filesystem")
                        continue
                    subdirs.append(entry.path)
                elif statmod.S_ISREG(mode) and self.glob_filter.matches(entry.name):
                    yield FileHit(entry.path, int(st.st_size))

            # Reversed so the lexically first subdirectory is walked next.
            stack.extend(reversed(subdirs))

    def files(self, root: str) -> Iterator[FileHit]:
        for result in self.walk(root):
            if isinstance(result, Skipped):
                self.skipped += 1
                if result.path == root:
                    logger.warning("Cannot walk root %s: %s", root, result.reason)
                else:
                    logger.debug("skipped %s", result.as_error())
                continue
            yield result
