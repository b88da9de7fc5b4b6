"""Tests for the entropy scanner."""

import string

from skscan.scanner.entropy import (
    ENTROPY_THRESHOLD,
    extract_candidates,
    find_high_entropy,
    is_excluded,
    shannon_entropy,
)

# 32 distinct characters: entropy is exactly log2(32) = 5.0
RANDOM_LITERAL = "A1b2C3d4E5f6G7h8J9k0LmNoPqRsTuVw"


class TestShannonEntropy:
    def test_empty_string(self):
        assert shannon_entropy("") == 0.0

    def test_single_char_repeated(self):
        # "aaaa" → entropy 0 (only one symbol)
        assert shannon_entropy("aaaa") == 0.0

    def test_two_equal_chars(self):
        assert abs(shannon_entropy("ab") - 1.0) < 0.01

    def test_uniform_distribution(self):
        s = string.ascii_lowercase[:16]
        assert abs(shannon_entropy(s) - 4.0) < 0.01

    def test_known_entropy(self):
        # "abcd" has 4 symbols, each p=0.25, H = 2.0
        assert abs(shannon_entropy("abcd") - 2.0) < 0.01

    def test_random_literal(self):
        assert abs(shannon_entropy(RANDOM_LITERAL) - 5.0) < 0.01

    def test_english_word(self):
        assert shannon_entropy("password") < 3.5


class TestCandidateExtraction:
    def test_double_quoted(self):
        assert extract_candidates('key = "longValueHereForTestingX"') == ["longValueHereForTestingX"]

    def test_single_quoted_and_backtick(self):
        line = "a = 'abcdefghijklmnopqrstu'; b = `ABCDEFGHIJKLMNOPQRSTU`"
        assert extract_candidates(line) == ["abcdefghijklmnopqrstu", "ABCDEFGHIJKLMNOPQRSTU"]

    def test_min_length_filter(self):
        assert extract_candidates('key = "short"') == []

    def test_unquoted_ignored(self):
        assert extract_candidates("TOKEN=abc123def456ghi789jkl") == []

    def test_url_excluded(self):
        assert is_excluded("https://example.com/a/very/long/path")

    def test_absolute_path_excluded(self):
        assert is_excluded("/usr/local/share/something")

    def test_prose_excluded(self):
        assert is_excluded("words   with   wide   gaps")

    def test_plain_token_not_excluded(self):
        assert not is_excluded(RANDOM_LITERAL)


class TestFindHighEntropy:
    def test_detects_random_literal(self):
        hits = find_high_entropy(f'value = "{RANDOM_LITERAL}"')
        assert len(hits) == 1
        assert hits[0][0] == RANDOM_LITERAL
        assert hits[0][1] > ENTROPY_THRESHOLD

    def test_ignores_low_entropy(self):
        assert find_high_entropy('name = "aaaaaaaaaaaaaaaaaaaaaa"') == []

    def test_threshold_is_strict(self):
        # 16 distinct chars repeated: entropy exactly 4.0
        literal = string.ascii_lowercase[:16] * 2
        assert find_high_entropy(f'x = "{literal}"', threshold=4.0) == []
        assert len(find_high_entropy(f'x = "{literal}"', threshold=3.9)) == 1

    def test_respects_min_length(self):
        assert find_high_entropy('key = "short"', threshold=1.0, min_length=16) == []

    def test_url_literal_not_flagged(self):
        line = '"https://aB3dE5gH7jK9mN1pQ3sT5vW7yZ.example.com/x"'
        assert find_high_entropy(line) == []
