"""Tests for defensive parsing of the AI review response."""

import json

from skscan.findings.ai import AI_RULE_ID, parse_ai_response


def _payload(*findings) -> str:
    return json.dumps({"findings": list(findings)})


class TestParseAiResponse:
    def test_plain_json(self):
        findings = parse_ai_response(_payload({
            "severity": "high",
            "category": "permissions",
            "file": "SKILL.md",
            "line": 7,
            "detail": "Instruction hidden in a footnote",
        }))
        assert len(findings) == 1
        f = findings[0]
        assert f.rule_id == AI_RULE_ID
        assert f.severity == "high"
        assert f.file == "SKILL.md"
        assert f.line == 7
        assert f.message == "Instruction hidden in a footnote"

    def test_fenced_json(self):
        text = "```json\n" + _payload({"severity": "critical", "detail": "x"}) + "\n```"
        assert len(parse_ai_response(text)) == 1

    def test_prose_around_json(self):
        text = (
            "Here is my analysis:\n"
            + _payload({"severity": "high", "detail": "Hidden {directive}"})
            + "\nLet me know if you need more."
        )
        findings = parse_ai_response(text)
        assert [f.message for f in findings] == ["Hidden {directive}"]

    def test_response_envelope(self):
        envelope = {"response": _payload({"severity": "low", "detail": "minor"})}
        assert [f.severity for f in parse_ai_response(envelope)] == ["low"]

    def test_defaults(self):
        f = parse_ai_response(_payload({"severity": "medium", "detail": "d", "category": "bogus"}))[0]
        assert f.category == "permissions"
        assert f.file == "unknown"
        assert f.line == 1

    def test_bad_line(self):
        f = parse_ai_response(_payload({"severity": "medium", "detail": "d", "line": "n/a"}))[0]
        assert f.line == 1

    def test_invalid_entries_dropped(self):
        findings = parse_ai_response(_payload(
            {"severity": "urgent", "detail": "bad severity"},
            {"severity": "high"},
            "not an object",
            {"severity": "high", "detail": "kept"},
        ))
        assert [f.message for f in findings] == ["kept"]

    def test_garbage(self, caplog):
        assert parse_ai_response("I could not find anything suspicious.") == []
        assert "not valid JSON" in caplog.text

    def test_wrong_shapes(self):
        assert parse_ai_response(json.dumps([1, 2])) == []
        assert parse_ai_response(json.dumps({"findings": "none"})) == []
        assert parse_ai_response(None) == []
        assert parse_ai_response({"other": 1}) == []
