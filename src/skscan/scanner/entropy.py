"""Shannon entropy calculator and quoted-literal candidate extraction."""

from __future__ import annotations

import math
import re
from collections import Counter
from typing import List, Tuple

ENTROPY_THRESHOLD = 4.5
MIN_LITERAL_LENGTH = 20

# Quoted literals: "...", '...' or `...`
_QUOTED_RE = re.compile(r"""["'`]([^"'`]{%d,})["'`]""" % MIN_LITERAL_LENGTH)

# Candidates that look like URLs, absolute paths, or prose.
_EXCLUDE_RES = (
    re.compile(r"^https?://"),
    re.compile(r"^/[a-z]"),
    re.compile(r"\s{3,}"),
)


def shannon_entropy(s: str) -> float:
    """Compute Shannon entropy (bits per character) of string *s*.

    H = -Σ p(c) · log₂(p(c))  over unique characters c.
    """
    if not s:
        return 0.0
    counts = Counter(s)
    total = len(s)
    return -sum((c / total) * math.log2(c / total) for c in counts.values())


def is_excluded(candidate: str) -> bool:
    return any(p.search(candidate) for p in _EXCLUDE_RES)


def extract_candidates(line: str, min_length: int = MIN_LITERAL_LENGTH) -> List[str]:
    """Quoted string literals on *line* at least *min_length* long."""
    return [
        m.group(1)
        for m in _QUOTED_RE.finditer(line)
        if len(m.group(1)) >= min_length and not is_excluded(m.group(1))
    ]


def find_high_entropy(
    line: str,
    threshold: float = ENTROPY_THRESHOLD,
    min_length: int = MIN_LITERAL_LENGTH,
) -> List[Tuple[str, float]]:
    """Return (candidate, entropy) pairs from *line* strictly above *threshold*."""
    results: List[Tuple[str, float]] = []
    for candidate in extract_candidates(line, min_length):
        h = shannon_entropy(candidate)
        if h > threshold:
            results.append((candidate, h))
    return results
