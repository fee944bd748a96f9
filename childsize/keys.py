"""
childsize.keys

Map a discovered file to the directory key it is aggregated under.

Files are grouped by their immediate parent directory, expressed as the root
string joined with the parent path relative to that root. Resolution is purely
lexical and never touches the filesystem. Keys are always valid text: bytes in
a path that do not decode as UTF-8 become U+FFFD.
"""

from __future__ import annotations

import os
from pathlib import PurePath
from typing import Optional

OUTSIDE_ROOT_KEY = ""

_HERE = PurePath(".")


def _lossy(p: PurePath) -> str:
    # Undecodable names arrive as lone surrogates, which no console can print.
    return os.fsencode(str(p)).decode("utf-8", "replace")


def resolve_key(path: str, root: str) -> Optional[str]:
    """
    Return the grouping key for `path` found under `root`.

    Returns None when `path` is not prefixed by `root`.
    """
    root_p = PurePath(root)
    try:
        rel = PurePath(path).relative_to(root_p)
    except ValueError:
        return None

    if rel == _HERE:
        # root is the file itself
        return _lossy(root_p.parent)
    parent = rel.parent
    if parent == _HERE:
        return _lossy(root_p)
    return _lossy(root_p / parent)
