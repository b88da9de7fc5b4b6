"""Shields-style SVG status badge."""

from __future__ import annotations

from typing import Optional

LABEL = "skscan"

STATUS_COLORS = {
    "pass": "#4c1",
    "warn": "#dfb317",
    "fail": "#e05d44",
}
UNKNOWN_COLOR = "#9f9f9f"

ICON_WIDTH = 16
CHAR_WIDTH = 6.5
TEXT_PADDING = 10


def _text_width(text: str) -> float:
    return len(text) * CHAR_WIDTH + TEXT_PADDING


def _num(value: float) -> str:
    # 49.0 -> "49", 40.5 -> "40.5"
    return f"{value:g}"


def render_badge(status: Optional[str]) -> str:
    """Render the badge for *status* (``None`` or unrecognised -> "unknown")."""
    if status in STATUS_COLORS:
        value = status
        color = STATUS_COLORS[status]
    else:
        value = "unknown"
        color = UNKNOWN_COLOR

    label_width = _text_width(LABEL)
    value_width = _text_width(value)
    total_width = ICON_WIDTH + label_width + value_width
    label_center = ICON_WIDTH + label_width / 2
    value_center = ICON_WIDTH + label_width + value_width / 2

    total = _num(total_width)
    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="{total}" height="20" role="img" aria-label="{LABEL}: {value}">
  <title>{LABEL}: {value}</title>
  <linearGradient id="s" x2="0" y2="100%">
    <stop offset="0" stop-color="#bbb" stop-opacity=".1"/>
    <stop offset="1" stop-opacity=".1"/>
  </linearGradient>
  <clipPath id="r">
    <rect width="{total}" height="20" rx="3" fill="#fff"/>
  </clipPath>
  <g clip-path="url(#r)">
    <rect width="{_num(ICON_WIDTH + label_width)}" height="20" fill="#1a1a1a"/>
    <rect x="{_num(ICON_WIDTH + label_width)}" width="{_num(value_width)}" height="20" fill="{color}"/>
    <rect width="{total}" height="20" fill="url(#s)"/>
  </g>
  <g transform="translate(4, 2)">
    <text font-family="'Courier New',monospace" font-size="12" font-weight="700" fill="#4ade80" y="12">$</text>
    <path d="M11.5 4 L7.5 8 L11.5 12" fill="none" stroke="#4ade80" stroke-width="1.5" stroke-linecap="round" stroke-linejoin="round"/>
  </g>
  <g fill="#fff" text-anchor="middle" font-family="Verdana,Geneva,DejaVu Sans,sans-serif" text-rendering="geometricPrecision" font-size="11">
    <text aria-hidden="true" x="{_num(label_center)}" y="15" fill="#010101" fill-opacity=".3">{LABEL}</text>
    <text x="{_num(label_center)}" y="14">{LABEL}</text>
    <text aria-hidden="true" x="{_num(value_center)}" y="15" fill="#010101" fill-opacity=".3">{value}</text>
    <text x="{_num(value_center)}" y="14">{value}</text>
  </g>
</svg>"""
