"""Ignore-glob matching for skill file paths.

Supported syntax: ``**/`` (zero or more leading directories), ``**`` (any
characters, across segments), ``*`` (any characters within a segment).
Everything else is literal, so compiling a pattern cannot fail. Patterns must
match the whole path.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    out = []
    i = 0
    n = len(pattern)
    while i < n:
        if pattern.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            out.append(".*")
            i += 2
        elif pattern[i] == "*":
            out.append("[^/]*")
            i += 1
        else:
            out.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(out) + r"\Z", re.DOTALL)


def glob_match(pattern: str, path: str) -> bool:
    return compile_glob(pattern).match(path) is not None


def matches_any(path: str, patterns: Iterable[str]) -> bool:
    # Non-string entries match nothing.
    return any(isinstance(p, str) and glob_match(p, path) for p in patterns)
