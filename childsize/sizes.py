"""
Byte count formatting for report output.

format_bytes_binary: format bytes using binary units (KiB, MiB, GiB, TiB, PiB).
"""

from __future__ import annotations

from typing import Optional


_UNITS = ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]


def format_bytes_binary(num_bytes: int) -> str:
    """
    Format a byte count using binary units with two decimals.

    Examples:
        0 -> "0 B"
        1024 -> "1.00 KiB"
        1048576 -> "1.00 MiB"
    """
    value = float(num_bytes)
    idx = 0
    while value >= 1024.0 and idx < len(_UNITS) - 1:
        value /= 1024.0
        idx += 1
    if _UNITS[idx] == "B":
        return f"{int(value)} {_UNITS[idx]}"
    return f"{value:.2f} {_UNITS[idx]}"


def format_size(num_bytes: Optional[int], human: bool = False) -> str:
    """Render a size column; `None` (no data yet) renders as '-'."""
    if num_bytes is None:
        return "-"
    return format_bytes_binary(num_bytes) if human else str(num_bytes)
