#!/usr/bin/env python3
"""
childsize.reporter

Orders finalized accumulators and renders them as plain lines, a rich table,
or JSON. Nothing here mutates the aggregation model.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from rich import box
from rich.table import Table
from rich.text import Text

from .accumulator import SizeAccumulator, SortMode
from .aggregator import Aggregator
from .config import SUMMARY_LABEL
from .sizes import format_size


@dataclass(frozen=True)
class ReportRow:
    label: str
    count: int
    total: int
    average: int
    max: int
    min: Optional[int]
    is_summary: bool = False

    @classmethod
    def from_accumulator(cls, label: str, acc: SizeAccumulator, is_summary: bool = False) -> "ReportRow":
        return cls(label, acc.count, acc.total, acc.average, acc.max, acc.min, is_summary)

    def size_cells(self, human: bool) -> List[str]:
        return [
            str(self.count),
            format_size(self.total, human),
            format_size(self.average, human),
            format_size(self.max if self.count else None, human),
            format_size(self.min, human),
        ]


class Reporter:
    def __init__(self, sort: SortMode = SortMode.TOTAL, reverse: bool = False,
                 show_summary: bool = False, top: int = 0):
        self.sort = sort
        self.reverse = reverse
        self.show_summary = show_summary
        self.top = top

    def order(self, entries: Mapping[str, SizeAccumulator]) -> List[Tuple[str, SizeAccumulator]]:
        """Ascending by the sort field, ties by key; reversed and truncated on request."""
        key_fn = self.sort.key
        items = sorted(entries.items(), key=lambda kv: (key_fn(kv[1]), kv[0]))
        if self.reverse:
            items.reverse()
        if self.top > 0:
            items = items[:self.top]
        return items

    def rows(self, aggregator: Aggregator) -> List[ReportRow]:
        if not aggregator.finalized:
            raise RuntimeError("Aggregator must be finalized before reporting")
        out = [ReportRow.from_accumulator(key, acc) for key, acc in self.order(aggregator.entries)]
        if self.show_summary:
            out.append(ReportRow.from_accumulator(SUMMARY_LABEL, aggregator.summary, is_summary=True))
        return out

    # ------------------------------------------------------------------ render

    def render_plain(self, aggregator: Aggregator, human: bool = False) -> List[str]:
        lines: List[str] = []
        for row in self.rows(aggregator):
            if row.is_summary:
                lines.append("-" * 40)
            lines.append(" ".join(row.size_cells(human) + [row.label]))
        return lines

    def render_table(self, aggregator: Aggregator, human: bool = False) -> Table:
        table = Table(box=box.SIMPLE, show_header=True, header_style="bold cyan")
        table.add_column("Count", justify="right", no_wrap=True)
        table.add_column("Total", justify="right", no_wrap=True)
        table.add_column("Average", justify="right", no_wrap=True)
        table.add_column("Max", justify="right", no_wrap=True)
        table.add_column("Min", justify="right", no_wrap=True)
        table.add_column("Directory", style="white", overflow="fold")

        for row in self.rows(aggregator):
            if row.is_summary:
                table.add_section()
                table.add_row(*row.size_cells(human), Text(row.label, style="bold"))
            else:
                table.add_row(*row.size_cells(human), Text(row.label))
        return table

    def render_json(self, aggregator: Aggregator) -> str:
        rows = self.rows(aggregator)
        doc: Dict[str, Any] = {
            "sort": self.sort.value,
            "reverse": self.reverse,
            "entries": [_row_dict(r) for r in rows if not r.is_summary],
        }
        summary = [r for r in rows if r.is_summary]
        if summary:
            doc["summary"] = _row_dict(summary[0])
        return json.dumps(doc, indent=2)


def _row_dict(row: ReportRow) -> Dict[str, Any]:
    key = "label" if row.is_summary else "key"
    return {
        key: row.label,
        "count": row.count,
        "total": row.total,
        "average": row.average,
        "max": row.max if row.count else None,
        "min": row.min,
    }
