"""Defensive parsing of the secondary AI review response.

The language model is asked to answer with ``{"findings": [...]}`` but may
wrap it in code fences, add prose, or return garbage. Anything that cannot be
parsed yields no findings; the pattern scan result always stands on its own.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List

from skscan.config.schema import CATEGORIES, SEVERITIES
from skscan.findings.models import Finding
from skscan.scanner.heuristics import truncate_snippet

logger = logging.getLogger(__name__)

AI_RULE_ID = "ai/prompt-injection"

_FENCE_OPEN = re.compile(r"```json\s*")
_FENCE_ANY = re.compile(r"```\s*")


def _response_text(response: Any) -> str | None:
    if isinstance(response, dict) and "response" in response:
        return str(response["response"])
    if isinstance(response, str):
        return response
    return None


def _outermost_object(text: str) -> str:
    # Prose around the payload is cut away; text without braces is returned as is.
    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end < start:
        return text
    return text[start:end + 1]


def _to_line(value: Any) -> int:
    try:
        line = int(value)
    except (TypeError, ValueError):
        return 1
    return line if line >= 1 else 1


def parse_ai_response(response: Any) -> List[Finding]:
    """Turn a raw model response into findings, dropping malformed entries."""
    text = _response_text(response)
    if text is None:
        logger.warning("AI response has unexpected type %s; ignoring", type(response).__name__)
        return []

    text = _FENCE_ANY.sub("", _FENCE_OPEN.sub("", text)).strip()
    try:
        parsed = json.loads(_outermost_object(text))
    except json.JSONDecodeError as exc:
        logger.warning("AI response is not valid JSON (%s); ignoring", exc)
        return []

    if not isinstance(parsed, dict) or not isinstance(parsed.get("findings"), list):
        logger.warning("AI response has no findings list; ignoring")
        return []

    findings: List[Finding] = []
    for entry in parsed["findings"]:
        if not isinstance(entry, dict):
            continue
        severity = entry.get("severity")
        detail = entry.get("detail")
        if severity not in SEVERITIES or not isinstance(detail, str):
            continue
        category = entry.get("category")
        if category not in CATEGORIES:
            category = "permissions"
        findings.append(
            Finding(
                rule_id=AI_RULE_ID,
                severity=severity,
                category=category,
                file=str(entry.get("file") or "unknown"),
                line=_to_line(entry.get("line")),
                message=detail,
                snippet=truncate_snippet(detail),
            )
        )
    return findings
