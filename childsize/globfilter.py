#!/usr/bin/env python3
"""
childsize.globfilter

Base-name glob filtering for the tree walk.

Patterns are shell-style and matched case-sensitively against a file's base
name, never its full path. On top of fnmatch syntax (`*`, `?`, `[seq]`,
`[!seq]`) patterns may use `{a,b}` alternation and backslash escapes.
Patterns are validated up front; anything fnmatch would silently treat as a
literal (an unclosed `[`, a stray `}`) is rejected with InvalidPattern.
"""

from __future__ import annotations

import fnmatch
import re
from typing import Iterable, List, Optional, Tuple

from .errors import InvalidPattern


def _class_end(pat: str, start: int, original: str) -> int:
    """Index of the ']' closing the character class opened at `start`."""
    j = start + 1
    if j < len(pat) and pat[j] in "!^":
        j += 1
    body_start = j
    # A leading ']' is a literal member of the class.
    if j < len(pat) and pat[j] == "]":
        j += 1
    close = pat.find("]", j)
    if close < 0:
        raise InvalidPattern(original, "unclosed character class")

    body = pat[body_start:close]
    for k in range(len(body) - 2):
        if body[k + 1] == "-" and body[k] > body[k + 2]:
            raise InvalidPattern(original, f"invalid range '{body[k:k + 3]}'")
    return close


def _split_alternatives(pat: str, start: int, original: str) -> Tuple[int, List[str]]:
    """Split the `{...}` group opened at `start`; returns (closing index, parts)."""
    depth = 0
    parts: List[str] = []
    seg_start = start + 1
    i = start + 1
    while i < len(pat):
        c = pat[i]
        if c == "\\":
            i += 2
            continue
        if c == "[":
            i = _class_end(pat, i, original) + 1
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            if depth == 0:
                parts.append(pat[seg_start:i])
                return i, parts
            depth -= 1
        elif c == "," and depth == 0:
            parts.append(pat[seg_start:i])
            seg_start = i + 1
        i += 1
    raise InvalidPattern(original, "unclosed alternation '{'")


def _expand(pat: str, original: str) -> List[str]:
    i = 0
    while i < len(pat):
        c = pat[i]
        if c == "\\":
            if i + 1 >= len(pat):
                raise InvalidPattern(original, "dangling escape '\\'")
            i += 2
            continue
        if c == "[":
            i = _class_end(pat, i, original) + 1
            continue
        if c == "}":
            raise InvalidPattern(original, "unmatched '}'")
        if c == "{":
            close, parts = _split_alternatives(pat, i, original)
            prefix, suffix = pat[:i], pat[close + 1:]
            out: List[str] = []
            for part in parts:
                out.extend(_expand(prefix + part + suffix, original))
            return out
        i += 1
    return [pat]


def _escapes_to_fnmatch(pat: str) -> str:
    # fnmatch has no escape character; a one-member class matches a literal.
    out: List[str] = []
    i = 0
    while i < len(pat):
        c = pat[i]
        if c == "\\":
            lit = pat[i + 1]
            out.append(f"[{lit}]" if lit in "*?[" else lit)
            i += 2
        elif c == "[":
            close = _class_end(pat, i, pat)
            out.append(pat[i:close + 1])
            i = close + 1
        else:
            out.append(c)
            i += 1
    return "".join(out)


def compile_glob(pattern: str) -> List[str]:
    """
    Validate `pattern` and return the equivalent list of fnmatch patterns
    (one per brace alternative).

    Raises:
        InvalidPattern: if the pattern is empty or malformed.
    """
    if not pattern:
        raise InvalidPattern(pattern, "empty pattern")
    return [_escapes_to_fnmatch(p) for p in _expand(pattern, pattern)]


class GlobFilter:
    """A set of base-name globs; an empty set matches every file."""

    def __init__(self, patterns: Iterable[str] = ()):
        self.patterns: Tuple[str, ...] = tuple(patterns or ())
        translated: List[str] = []
        for pat in self.patterns:
            translated.extend(fnmatch.translate(p) for p in compile_glob(pat))
        self._regex: Optional[re.Pattern] = (
            re.compile("|".join(f"(?:{t})" for t in translated)) if translated else None
        )

    def matches(self, file_name: str) -> bool:
        if self._regex is None:
            return True
        return self._regex.match(file_name) is not None

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def __repr__(self) -> str:
        return f"GlobFilter({list(self.patterns)!r})"
