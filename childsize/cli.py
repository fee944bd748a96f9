#!/usr/bin/env python
"""
Main CLI entry point for childsize.

Walks one or more roots and prints per-directory file size statistics.
"""
from __future__ import annotations

import argparse
import logging
import sys
import threading
import time
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from . import __version__
from .accumulator import SortMode
from .aggregator import collect
from .config import (
    DEFAULT_FORMAT,
    DEFAULT_JOBS,
    DEFAULT_SORT,
    DEFAULT_TOP,
    OUTPUT_FORMATS,
    PROGRESS_MIN_INTERVAL,
    RunConfig,
)
from .errors import InvalidPattern
from .globfilter import GlobFilter
from .reporter import Reporter
from .walker import FileHit

LOG = logging.getLogger("childsize")


def _make_console(stderr: bool = False) -> Console:
    stream = sys.stderr if stderr else sys.stdout
    if stream.isatty():
        return Console(stderr=stderr)
    # Captured or redirected output: widen and disable styling to avoid ANSI
    return Console(stderr=stderr, width=200, force_terminal=False, no_color=True, highlight=False, soft_wrap=False)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="childsize",
        description="Report file count, total, average, max and min size per directory.",
    )
    p.add_argument("paths", metavar="PATH", nargs="*",
                   help="Root paths to walk (default: current directory).")
    p.add_argument("-s", "--sort", choices=[m.value for m in SortMode], default=DEFAULT_SORT,
                   help=f"Field to sort groups by (default: {DEFAULT_SORT}).")
    p.add_argument("-r", "--reverse", action="store_true",
                   help="Reverse sort order (largest first).")
    p.add_argument("-S", "--summary", action="store_true",
                   help="Append a summary row covering every matched file.")
    p.add_argument("-g", "--glob", metavar="PATTERN", action="append", default=[],
                   help="Only aggregate files whose name matches PATTERN (repeatable).")
    p.add_argument("-f", "--format", choices=OUTPUT_FORMATS, default=DEFAULT_FORMAT,
                   help=f"Output format (default: {DEFAULT_FORMAT}).")
    p.add_argument("-H", "--human", action="store_true",
                   help="Show sizes in binary units (KiB, MiB, ...).")
    p.add_argument("-n", "--top", type=int, default=DEFAULT_TOP,
                   help="Only show the first N groups after sorting (0 = all).")
    p.add_argument("-j", "--jobs", type=int, default=DEFAULT_JOBS,
                   help="Walk up to N roots in parallel.")
    p.add_argument("-x", "--cross-devices", action="store_true",
                   help="Descend into directories on other filesystems.")
    p.add_argument("-p", "--progress", action="store_true",
                   help="Show a progress spinner while scanning.")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Verbose logging.")
    p.add_argument("-V", "--version", action="version", version=f"childsize {__version__}")
    return p


def _run_collect(cfg: RunConfig, glob_filter: GlobFilter, console: Console):
    if not (cfg.progress and console.is_terminal):
        return collect(cfg.roots, glob_filter, jobs=cfg.jobs, same_file_system=cfg.same_file_system)

    prog = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TextColumn("{task.completed:.0f} files"),
        TimeElapsedColumn(),
        transient=True,
        console=console,
    )
    task = prog.add_task("Scanning…", total=None)
    pending = [0]
    last_update = [0.0]
    lock = threading.Lock()

    def on_file(_hit: FileHit) -> None:
        # Called from worker threads when --jobs > 1
        with lock:
            pending[0] += 1
            now = time.time()
            if now - last_update[0] >= PROGRESS_MIN_INTERVAL:
                prog.advance(task, pending[0])
                pending[0] = 0
                last_update[0] = now

    prog.start()
    try:
        return collect(cfg.roots, glob_filter, jobs=cfg.jobs,
                       same_file_system=cfg.same_file_system, on_file=on_file)
    finally:
        prog.stop()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s: %(message)s",
    )

    try:
        cfg = RunConfig.from_args(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        glob_filter = GlobFilter(cfg.patterns)
    except InvalidPattern as e:
        _make_console(stderr=True).print(f"[red]Error[/] {escape(str(e))}", highlight=False)
        return 2

    console = _make_console()
    LOG.debug("roots=%s patterns=%s sort=%s jobs=%d", cfg.roots, cfg.patterns, cfg.sort.value, cfg.jobs)
    aggregator = _run_collect(cfg, glob_filter, console)

    reporter = Reporter(cfg.sort, reverse=cfg.reverse, show_summary=cfg.show_summary, top=cfg.top)
    if cfg.output_format == "json":
        console.print(reporter.render_json(aggregator), markup=False, emoji=False, highlight=False, soft_wrap=True)
    elif cfg.output_format == "plain":
        for line in reporter.render_plain(aggregator, human=cfg.human):
            console.print(line, markup=False, emoji=False, highlight=False, soft_wrap=True)
    else:
        console.print(reporter.render_table(aggregator, human=cfg.human))
    return 0


if __name__ == "__main__":
    sys.exit(main())
