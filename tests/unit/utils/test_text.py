"""Unit tests for utils.text module."""

from __future__ import annotations

import pytest

from utils.text import collapse_whitespace, decode_entities, normalize_spaces


@pytest.mark.unit
class TestNormalizeSpaces:
    """Tests for normalize_spaces function."""

    def test_entities_and_unicode_spaces(self) -> None:
        """Test &nbsp; variants and NBSP-like code points become plain spaces."""
        text = "a&nbsp;b&#160;c&#xA0;d\u00a0e\u2007f\u202fg"
        assert normalize_spaces(text) == "a b c d e f g"

    def test_entities_case_insensitive(self) -> None:
        """Test entity matching ignores case."""
        assert normalize_spaces("a&NBSP;b&#Xa0;c") == "a b c"

    def test_escaped_breaks(self) -> None:
        """Test backslash followed by space/tab/newline/CR becomes one space."""
        assert normalize_spaces("a\\ b\\\tb\\\nc\\\rd") == "a b b c d"

    def test_other_backslashes_untouched(self) -> None:
        """Test backslashes not followed by whitespace are kept."""
        assert normalize_spaces("C:\\path\\x") == "C:\\path\\x"

    def test_escaped_backslash_before_space_kept(self) -> None:
        """Test an escaped backslash pair before a space is not a hard break."""
        assert normalize_spaces("a\\\\ b") == "a\\\\ b"
        assert normalize_spaces("a\\\\\\ b") == "a\\\\ b"

    def test_empty_and_none(self) -> None:
        """Test falsy input returns empty string."""
        assert normalize_spaces("") == ""
        assert normalize_spaces(None) == ""

    @pytest.mark.parametrize(
        "text",
        [
            "plain",
            "a&nbsp;&nbsp;b",
            "x\\\\ y",
            "&amp;nbsp;",
            "tab\\\there\u00a0&#160;",
        ],
    )
    def test_idempotent(self, text: str) -> None:
        """Test normalizing twice equals normalizing once."""
        once = normalize_spaces(text)
        assert normalize_spaces(once) == once


@pytest.mark.unit
class TestDecodeEntities:
    """Tests for decode_entities function."""

    def test_basic_entities(self) -> None:
        """Test the five basic entities are decoded."""
        assert decode_entities("&lt;b&gt; &quot;x&quot; &#39;y&#39; a&amp;b") == "<b> \"x\" 'y' a&b"

    def test_amp_decoded_last(self) -> None:
        """Test &amp;lt; decodes to the literal &lt; and not to <."""
        assert decode_entities("&amp;lt;") == "&lt;"

    def test_empty(self) -> None:
        """Test empty input returns empty string."""
        assert decode_entities("") == ""
        assert decode_entities(None) == ""


@pytest.mark.unit
class TestCollapseWhitespace:
    """Tests for collapse_whitespace function."""

    def test_collapses_runs(self) -> None:
        """Test mixed whitespace runs collapse to single spaces."""
        assert collapse_whitespace("a   b\n\n\tc") == "a b c"

    def test_strips_ends(self) -> None:
        """Test leading/trailing whitespace is removed."""
        assert collapse_whitespace("  hello  ") == "hello"

    def test_whitespace_only(self) -> None:
        """Test whitespace-only input becomes empty."""
        assert collapse_whitespace(" \n\t ") == ""
