"""Small text predicates used by the rule sets.

Each helper is pure and independently testable: fenced code block ranges,
base64 false-positive spans, whitespace normalization with an offset map back
to the original text, and snippet truncation.
"""

from __future__ import annotations

import re
from typing import List, Sequence, Tuple

SNIPPET_MAX = 200

_WHITESPACE = re.compile(r"\s+")
_FENCE = re.compile(r"^```")

# Spans inside which a base64-looking run is expected, not suspicious.
_IMAGE_SPAN = re.compile(r"!\[[^\]]*\]\([^)]*\)")
_DATA_URI_SPAN = re.compile(r"data:[\w.+-]+/[\w.+-]+;base64,[A-Za-z0-9+/=]*", re.IGNORECASE)
_URL_SPAN = re.compile(r"https?://\S+", re.IGNORECASE)


def truncate_snippet(text: str, max_len: int = SNIPPET_MAX) -> str:
    """Trim *text* and cap it at *max_len* characters plus ``...``."""
    trimmed = text.strip()
    if len(trimmed) > max_len:
        return trimmed[:max_len] + "..."
    return trimmed


# ---- fenced code blocks ----


def code_block_ranges(lines: Sequence[str]) -> List[Tuple[int, int]]:
    """Return 1-based inclusive ``(open, close)`` line pairs of ``` fences.

    An unclosed trailing fence opens no range.
    """
    ranges: List[Tuple[int, int]] = []
    start = -1
    for i, line in enumerate(lines, start=1):
        if _FENCE.match(line.strip()):
            if start == -1:
                start = i
            else:
                ranges.append((start, i))
                start = -1
    return ranges


def in_code_block(line_no: int, ranges: Sequence[Tuple[int, int]]) -> bool:
    return any(start <= line_no <= end for start, end in ranges)


# ---- base64 false positives ----


def base64_excluded_spans(line: str) -> List[Tuple[int, int]]:
    """Character spans of image syntax, data URIs and URLs on *line*."""
    spans: List[Tuple[int, int]] = []
    for pattern in (_IMAGE_SPAN, _DATA_URI_SPAN, _URL_SPAN):
        spans.extend(m.span() for m in pattern.finditer(line))
    return spans


def is_base64_false_positive(line: str, span: Tuple[int, int]) -> bool:
    """True if the match at *span* sits inside an image, data URI or URL."""
    start, end = span
    return any(s <= start and end <= e for s, e in base64_excluded_spans(line))


# ---- whitespace normalization ----


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run (newlines included) to one space."""
    return _WHITESPACE.sub(" ", text)


def normalize_with_offsets(text: str) -> Tuple[str, List[int]]:
    """Normalize *text* and map each output index to its original index."""
    parts: List[str] = []
    offsets: List[int] = []
    pos = 0
    for m in _WHITESPACE.finditer(text):
        parts.append(text[pos:m.start()])
        offsets.extend(range(pos, m.start()))
        parts.append(" ")
        offsets.append(m.start())
        pos = m.end()
    parts.append(text[pos:])
    offsets.extend(range(pos, len(text)))
    return "".join(parts), offsets


def offset_to_line(text: str, offset: int) -> int:
    """1-based line number of character *offset* in *text*."""
    return text.count("\n", 0, offset) + 1
