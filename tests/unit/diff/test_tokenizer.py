"""Unit tests for text normalization and unit splitting."""

import pytest

from doccompare.diff.tokenizer import normalize_text, normalize_whitespace, split_units, tokenize
from doccompare.exceptions import InvalidOptionsError


def _values(units):
    return [unit.value for unit in units]


@pytest.mark.unit
class TestNormalizeWhitespace:
    """Tests for normalize_whitespace function."""

    def test_collapses_runs_and_trims(self):
        """Test that whitespace runs become one space and ends are trimmed."""
        assert normalize_whitespace("  Hello   \t\n  world  ") == "Hello world"

    def test_preserve_lines_keeps_line_breaks(self):
        """Test that line breaks survive when preserving lines."""
        assert normalize_whitespace("a   b\n  c  \n", preserve_lines=True) == "a b\nc"

    def test_preserve_lines_keeps_blank_line_separators(self):
        """Test that paragraph separators survive when preserving lines."""
        assert normalize_whitespace("p1  \n \t \np2", preserve_lines=True) == "p1\n\np2"


@pytest.mark.unit
class TestNormalizeText:
    """Tests for normalize_text function."""

    def test_no_options_returns_text_unchanged(self):
        """Test that text passes through without options."""
        assert normalize_text("  Mixed Case  ") == "  Mixed Case  "

    def test_ignore_case_lowercases(self):
        """Test lower-casing."""
        assert normalize_text("Mixed CASE", ignore_case=True) == "mixed case"

    def test_ignore_whitespace_and_case(self):
        """Test both normalizations together."""
        assert normalize_text(" A  B ", ignore_case=True, ignore_whitespace=True) == "a b"


@pytest.mark.unit
class TestSplitUnits:
    """Tests for split_units function."""

    def test_character_split(self):
        """Test one unit per code point."""
        assert split_units("héé", "character") == ["h", "é", "é"]

    def test_word_split_discards_empty_tokens(self):
        """Test that whitespace runs separate words without empty tokens."""
        assert split_units("  hello   world \n x", "word") == ["hello", "world", "x"]

    def test_line_split_keeps_empty_lines(self):
        """Test that empty lines, including a trailing one, are units."""
        assert split_units("a\n\nb\n", "line") == ["a", "", "b", ""]

    def test_line_split_handles_crlf(self):
        """Test CRLF line endings."""
        assert split_units("a\r\nb", "line") == ["a", "b"]

    def test_paragraph_split_on_blank_lines(self):
        """Test that blank-line separators, even with spaces, split paragraphs."""
        text = "p1 line\nmore\n\n\np2\n  \n\np3"
        assert split_units(text, "paragraph") == ["p1 line\nmore", "p2", "p3"]

    def test_paragraph_split_drops_blank_paragraphs(self):
        """Test that leading and trailing blank paragraphs are discarded."""
        assert split_units("\n\n\n\na\n\n\n\n", "paragraph") == ["a"]

    @pytest.mark.parametrize("granularity", ["character", "word", "line", "paragraph"])
    def test_empty_text_yields_no_units(self, granularity):
        """Test that empty text produces zero units at every granularity."""
        assert split_units("", granularity) == []

    def test_unknown_granularity_raises(self):
        """Test that an unsupported granularity is rejected."""
        with pytest.raises(InvalidOptionsError) as exc_info:
            split_units("text", "sentence")
        assert exc_info.value.parameter_name == "granularity"


@pytest.mark.unit
class TestTokenize:
    """Tests for tokenize function."""

    def test_positions_are_sequential(self):
        """Test that unit positions follow sequence order from zero."""
        units = tokenize("one two three", "word")
        assert [unit.position for unit in units] == [0, 1, 2]
        assert _values(units) == ["one", "two", "three"]

    def test_ignore_case(self):
        """Test case-insensitive tokenization."""
        assert _values(tokenize("Hello World", "word", ignore_case=True)) == ["hello", "world"]

    def test_ignore_whitespace_keeps_lines(self):
        """Test that whitespace normalization does not merge lines."""
        units = tokenize("a   b\n  c  \n", "line", ignore_whitespace=True)
        assert _values(units) == ["a b", "c"]

    def test_ignore_whitespace_character_granularity(self):
        """Test that character granularity sees collapsed whitespace."""
        assert _values(tokenize(" a  b ", "character", ignore_whitespace=True)) == ["a", " ", "b"]

    @pytest.mark.parametrize("granularity", ["character", "word", "line", "paragraph"])
    def test_whitespace_only_text_with_ignore_whitespace(self, granularity):
        """Test that whitespace-only text normalizes to no units."""
        assert tokenize(" \n\t \n", granularity, ignore_whitespace=True) == []
