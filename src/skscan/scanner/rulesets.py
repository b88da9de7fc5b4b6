"""Rule sets: stateless ``scan(files) -> findings`` values over the rule catalog.

Every rule set evaluates only the rules whose extension gate admits a file, so
code rules never touch markdown and markdown rules never touch code.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

from skscan.findings.models import Finding
from skscan.rules.builtin import exfiltration as exfil
from skscan.rules.builtin import hidden, homoglyphs
from skscan.rules.builtin.secrets import HIGH_ENTROPY
from skscan.rules.models import Rule
from skscan.scanner.entropy import find_high_entropy
from skscan.scanner.files import SkillFile
from skscan.scanner.heuristics import (
    code_block_ranges,
    in_code_block,
    is_base64_false_positive,
    normalize_whitespace,
    normalize_with_offsets,
    offset_to_line,
    truncate_snippet,
)


class RuleSet(Protocol):
    """Protocol for a group of rules scanned together."""

    name: str

    def scan(self, files: Sequence[SkillFile]) -> List[Finding]:
        """Return every finding the rule set produces for *files*."""
        ...


def make_finding(
    rule: Rule,
    path: str,
    line_no: int,
    text: str,
    *,
    message: Optional[str] = None,
    column: Optional[int] = None,
) -> Finding:
    return Finding(
        rule_id=rule.id,
        severity=rule.severity,
        category=rule.category,
        file=path,
        line=line_no,
        message=message if message is not None else rule.description,
        snippet=truncate_snippet(text),
        column=column,
    )


def first_match(rule: Rule, text: str) -> Optional[re.Match[str]]:
    """First match of *rule* on *text* that its guard accepts."""
    pattern = rule.compiled_pattern
    if pattern is None:
        return None
    if rule.guard is None:
        return pattern.search(text)
    for m in pattern.finditer(text):
        if rule.guard(m):
            return m
    return None


class FileRuleSet:
    """Base for rule sets that work one file at a time."""

    name = "base"
    rules: Tuple[Rule, ...] = ()

    def scan(self, files: Sequence[SkillFile]) -> List[Finding]:
        findings: List[Finding] = []
        for file in files:
            if any(rule.applies_to(file.path) for rule in self.rules):
                findings.extend(self.scan_file(file))
        return findings

    def scan_file(self, file: SkillFile) -> List[Finding]:
        raise NotImplementedError

    def rules_for(self, path: str) -> List[Rule]:
        return [r for r in self.rules if r.applies_to(path)]


class PatternRuleSet(FileRuleSet):
    """Line-by-line regex rules; each rule fires at most once per line."""

    def __init__(self, name: str, rules: Iterable[Rule]) -> None:
        self.name = name
        self.rules = tuple(r for r in rules if r.pattern is not None)

    def scan_file(self, file: SkillFile) -> List[Finding]:
        rules = self.rules_for(file.path)
        findings: List[Finding] = []
        for line_no, line in enumerate(file.content.split("\n"), start=1):
            for rule in rules:
                m = first_match(rule, line)
                if m is not None:
                    findings.append(
                        make_finding(rule, file.path, line_no, line, column=m.start() + 1)
                    )
        return findings


class EntropyRuleSet(FileRuleSet):
    """Shannon-entropy scoring of quoted literals; one finding per line at most."""

    def __init__(self, rule: Rule = HIGH_ENTROPY) -> None:
        self.name = "entropy"
        self.rule = rule
        self.rules = (rule,)

    def scan_file(self, file: SkillFile) -> List[Finding]:
        rule = self.rule
        assert rule.min_entropy is not None and rule.min_length is not None
        findings: List[Finding] = []
        for line_no, line in enumerate(file.content.split("\n"), start=1):
            hits = find_high_entropy(line, rule.min_entropy, rule.min_length)
            if not hits:
                continue
            candidate, value = hits[0]
            findings.append(
                make_finding(
                    rule, file.path, line_no, line,
                    message=f"{rule.description} (entropy: {value:.2f})",
                    column=line.find(candidate) + 1,
                )
            )
        return findings


class PromptOverrideRuleSet(FileRuleSet):
    """Whitespace-normalized phrase matching, per line and across line wraps.

    Whole-file matches are mapped back to the line where they start; a match
    whose start line already carries a finding for the same rule is dropped.
    """

    def __init__(self, rules: Iterable[Rule]) -> None:
        self.name = "prompt-override"
        self.rules = tuple(rules)

    def scan_file(self, file: SkillFile) -> List[Finding]:
        rules = self.rules_for(file.path)
        findings: List[Finding] = []
        seen: set[Tuple[str, int]] = set()

        for line_no, line in enumerate(file.content.split("\n"), start=1):
            normalized = normalize_whitespace(line)
            for rule in rules:
                if first_match(rule, normalized) is not None:
                    seen.add((rule.id, line_no))
                    findings.append(make_finding(rule, file.path, line_no, line))

        normalized, offsets = normalize_with_offsets(file.content)
        for rule in rules:
            assert rule.compiled_pattern is not None
            for m in rule.compiled_pattern.finditer(normalized):
                line_no = offset_to_line(file.content, offsets[m.start()])
                if (rule.id, line_no) in seen:
                    continue
                seen.add((rule.id, line_no))
                findings.append(make_finding(rule, file.path, line_no, m.group(0)))
        return findings


class ExfiltrationRuleSet(FileRuleSet):
    """A sensitive reference plus a transmission or encode verb on one line."""

    def __init__(
        self,
        rules: Iterable[Rule] = tuple(exfil.ALL_EXFILTRATION_RULES),
        transmission: re.Pattern[str] = exfil.TRANSMISSION_VERBS,
        encode: re.Pattern[str] = exfil.ENCODE_VERBS,
    ) -> None:
        self.name = "exfiltration"
        self.rules = tuple(rules)
        self.transmission = transmission
        self.encode = encode

    def verb_kind(self, line: str) -> Optional[str]:
        if self.transmission.search(line):
            return "transmission"
        if self.encode.search(line):
            return "encode"
        return None

    def scan_file(self, file: SkillFile) -> List[Finding]:
        rules = self.rules_for(file.path)
        findings: List[Finding] = []
        for line_no, line in enumerate(file.content.split("\n"), start=1):
            kind = self.verb_kind(line)
            if kind is None:
                continue
            for rule in rules:
                m = first_match(rule, line)
                if m is not None:
                    findings.append(
                        make_finding(
                            rule, file.path, line_no, line,
                            message=f"{rule.description} with {kind} verb",
                            column=m.start() + 1,
                        )
                    )
        return findings


class HiddenInstructionsRuleSet(FileRuleSet):
    """Invisible unicode, instruction-bearing HTML comments and base64 payloads."""

    def __init__(
        self,
        zero_width: Rule = hidden.ZERO_WIDTH_CHARS,
        invisible: Rule = hidden.INVISIBLE_UNICODE,
        html_comment: Rule = hidden.HTML_COMMENT_INJECTION,
        base64: Rule = hidden.BASE64_PAYLOAD,
    ) -> None:
        self.name = "hidden-instructions"
        self.zero_width = zero_width
        self.invisible = invisible
        self.html_comment = html_comment
        self.base64 = base64
        self.rules = (zero_width, invisible, html_comment, base64)

    def scan_file(self, file: SkillFile) -> List[Finding]:
        path = file.path
        lines = file.content.split("\n")
        ranges = code_block_ranges(lines)
        findings: List[Finding] = []

        for line_no, line in enumerate(lines, start=1):
            for rule in (self.zero_width, self.invisible):
                if not rule.applies_to(path):
                    continue
                m = first_match(rule, line)
                if m is not None:
                    findings.append(make_finding(rule, path, line_no, line, column=m.start() + 1))

            if self.base64.applies_to(path) and not in_code_block(line_no, ranges):
                m = self.base64_match(line)
                if m is not None:
                    findings.append(
                        make_finding(self.base64, path, line_no, line, column=m.start() + 1)
                    )

        if self.html_comment.applies_to(path):
            findings.extend(self.html_comment_findings(file))
        return findings

    def base64_match(self, line: str) -> Optional[re.Match[str]]:
        pattern = self.base64.compiled_pattern
        assert pattern is not None
        for m in pattern.finditer(line):
            if not is_base64_false_positive(line, m.span()):
                return m
        return None

    def html_comment_findings(self, file: SkillFile) -> List[Finding]:
        pattern = self.html_comment.compiled_pattern
        assert pattern is not None
        findings: List[Finding] = []
        reported: set[int] = set()
        for m in pattern.finditer(file.content):
            body = m.group(1)
            if not hidden.COMMENT_KEYWORDS.search(body):
                continue
            line_no = offset_to_line(file.content, m.start())
            if line_no in reported:
                continue
            reported.add(line_no)
            findings.append(make_finding(self.html_comment, file.path, line_no, body))
        return findings


class ObfuscationRuleSet(FileRuleSet):
    """Hex escape runs or density, and single-character concatenation chains."""

    def __init__(
        self,
        hex_escape: Rule = hidden.HEX_ESCAPE,
        char_concat: Rule = hidden.CHAR_CONCAT,
    ) -> None:
        self.name = "obfuscation"
        self.hex_escape = hex_escape
        self.char_concat = char_concat
        self.rules = (hex_escape, char_concat)

    @staticmethod
    def escape_density(line: str) -> float:
        if not line:
            return 0.0
        escaped = sum(len(m.group(0)) for m in hidden.HEX_ESCAPE_TOKEN.finditer(line))
        return escaped / len(line)

    def scan_file(self, file: SkillFile) -> List[Finding]:
        path = file.path
        findings: List[Finding] = []
        check_hex = self.hex_escape.applies_to(path)
        check_concat = self.char_concat.applies_to(path)
        for line_no, line in enumerate(file.content.split("\n"), start=1):
            if check_hex:
                m = first_match(self.hex_escape, line)
                if m is not None:
                    findings.append(
                        make_finding(self.hex_escape, path, line_no, line, column=m.start() + 1)
                    )
                elif (
                    len(line) >= hidden.HEX_DENSITY_MIN_LINE
                    and self.escape_density(line) > hidden.HEX_DENSITY_THRESHOLD
                ):
                    findings.append(
                        make_finding(
                            self.hex_escape, path, line_no, line,
                            message=hidden.HEX_DENSITY_MESSAGE,
                        )
                    )
            if check_concat:
                m = first_match(self.char_concat, line)
                if m is not None:
                    findings.append(
                        make_finding(self.char_concat, path, line_no, line, column=m.start() + 1)
                    )
        return findings


class HomoglyphRuleSet(FileRuleSet):
    """Latin text mixed with Cyrillic/Greek lookalikes, and lookalikes inside URLs."""

    def __init__(
        self,
        cyrillic: Rule = homoglyphs.CYRILLIC_MIX,
        greek: Rule = homoglyphs.GREEK_MIX,
        idn_url: Rule = homoglyphs.IDN_URL,
    ) -> None:
        self.name = "homoglyphs"
        self.cyrillic = cyrillic
        self.greek = greek
        self.idn_url = idn_url
        self.rules = (cyrillic, greek, idn_url)

    @staticmethod
    def _first_index(line: str, charset: frozenset) -> int:
        for i, ch in enumerate(line):
            if ch in charset:
                return i
        return -1

    def scan_file(self, file: SkillFile) -> List[Finding]:
        path = file.path
        lookalikes = homoglyphs.CYRILLIC_LOOKALIKES | homoglyphs.GREEK_LOOKALIKES
        findings: List[Finding] = []
        for line_no, line in enumerate(file.content.split("\n"), start=1):
            if self.idn_url.applies_to(path):
                for url in homoglyphs.URL.finditer(line):
                    if any(ch in lookalikes for ch in url.group(0)):
                        findings.append(
                            make_finding(self.idn_url, path, line_no, line, column=url.start() + 1)
                        )

            if not homoglyphs.LATIN_LETTER.search(line):
                continue
            for rule, charset in (
                (self.cyrillic, homoglyphs.CYRILLIC_LOOKALIKES),
                (self.greek, homoglyphs.GREEK_LOOKALIKES),
            ):
                if not rule.applies_to(path):
                    continue
                index = self._first_index(line, charset)
                if index != -1:
                    findings.append(make_finding(rule, path, line_no, line, column=index + 1))
        return findings
