"""JSON reporter: the ScanResult wire format."""

from __future__ import annotations

import json
from typing import Any, Dict

from skscan.findings.models import ScanResult


def to_dict(result: ScanResult) -> Dict[str, Any]:
    """Convert ScanResult to a JSON-serialisable dict."""
    return result.to_dict()


def render(result: ScanResult) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result), indent=2, ensure_ascii=False)
