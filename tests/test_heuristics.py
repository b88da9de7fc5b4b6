"""Tests for text helpers and ignore-glob matching."""

import pytest

from skscan.scanner.globs import compile_glob, glob_match, matches_any
from skscan.scanner.heuristics import (
    SNIPPET_MAX,
    base64_excluded_spans,
    code_block_ranges,
    in_code_block,
    is_base64_false_positive,
    normalize_whitespace,
    normalize_with_offsets,
    offset_to_line,
    truncate_snippet,
)


class TestSnippets:
    def test_strips(self):
        assert truncate_snippet("   code here  ") == "code here"

    def test_truncates_long(self):
        snippet = truncate_snippet("x" * 500)
        assert snippet == "x" * SNIPPET_MAX + "..."

    def test_exact_length_kept(self):
        assert truncate_snippet("y" * SNIPPET_MAX) == "y" * SNIPPET_MAX


class TestCodeBlocks:
    def test_ranges(self):
        lines = ["text", "```python", "x = 1", "```", "more", "```", "y", "```"]
        assert code_block_ranges(lines) == [(2, 4), (6, 8)]

    def test_unclosed(self):
        assert code_block_ranges(["```", "x"]) == []

    def test_indented_fence(self):
        assert code_block_ranges(["  ```", "x", "  ```"]) == [(1, 3)]

    def test_in_code_block(self):
        ranges = [(2, 4)]
        assert in_code_block(2, ranges)
        assert in_code_block(3, ranges)
        assert in_code_block(4, ranges)
        assert not in_code_block(5, ranges)


class TestBase64Spans:
    def test_image_span(self):
        line = "see ![alt](img/logo.png) here"
        assert base64_excluded_spans(line) == [(4, 24)]

    def test_url_inside_span(self):
        line = "go https://example.com/abc now"
        start = line.index("example")
        assert is_base64_false_positive(line, (start, start + 7))

    def test_outside_span(self):
        line = "payload QUJDQUJD https://example.com"
        assert not is_base64_false_positive(line, (8, 16))


class TestWhitespace:
    def test_normalize(self):
        assert normalize_whitespace("a  b\n\n\tc") == "a b c"

    def test_offsets_map_back(self):
        text = "ab  \n cd"
        normalized, offsets = normalize_with_offsets(text)
        assert normalized == "ab cd"
        assert len(offsets) == len(normalized)
        assert text[offsets[3]] == "c"
        assert offsets[2] == 2

    def test_offset_to_line(self):
        text = "one\ntwo\nthree"
        assert offset_to_line(text, 0) == 1
        assert offset_to_line(text, 4) == 2
        assert offset_to_line(text, text.index("three")) == 3


class TestGlobs:
    @pytest.mark.parametrize("pattern, path", [
        ("*.md", "SKILL.md"),
        ("test/**", "test/a/b/c.sh"),
        ("**/fixtures/*.sh", "fixtures/x.sh"),
        ("**/fixtures/*.sh", "a/b/fixtures/x.sh"),
        ("scripts/run.sh", "scripts/run.sh"),
        ("**", "anything/at/all.py"),
    ])
    def test_matches(self, pattern, path):
        assert glob_match(pattern, path)

    @pytest.mark.parametrize("pattern, path", [
        ("*.md", "docs/README.md"),
        ("test/**", "src/test/a.sh"),
        ("scripts/run.sh", "scripts/run.shx"),
        ("*.sh", "run.py"),
    ])
    def test_no_match(self, pattern, path):
        assert not glob_match(pattern, path)

    def test_special_characters_literal(self):
        assert glob_match("a+b(1).md", "a+b(1).md")
        assert not glob_match("a.md", "abmd")

    def test_unbalanced_bracket_compiles(self):
        assert compile_glob("[broken") is not None
        assert glob_match("[broken", "[broken")

    def test_matches_any(self):
        assert matches_any("a/b.sh", ["*.md", "a/*.sh"])
        assert not matches_any("a/b.sh", [])

    def test_non_string_patterns_match_nothing(self):
        assert not matches_any("a/b.sh", [None, 42])
        assert matches_any("a/b.sh", [None, "a/*.sh"])
