"""Unit tests for markup.attrs module."""

from __future__ import annotations

import pytest

from markup.attrs import (
    parse_dimension,
    parse_float_prefix,
    parse_int_prefix,
    read_attr,
    read_first_attr,
    round_half_up,
    strip_px,
)


@pytest.mark.unit
@pytest.mark.markup
class TestReadAttr:
    """Tests for read_attr and read_first_attr."""

    @pytest.mark.parametrize(
        "token",
        [
            '<gif src="a.gif" />',
            "<gif src='a.gif' />",
            "<gif src=a.gif />",
            '<gif SRC = "a.gif" />',
        ],
    )
    def test_quoting_and_spacing(self, token: str) -> None:
        """Test double, single and no quotes, any key case, spaces around '='."""
        assert read_attr(token, "src") == "a.gif"

    def test_absent(self) -> None:
        """Test a missing attribute yields None."""
        assert read_attr("<gif alt='x' />", "src") is None

    def test_empty_quoted_value(self) -> None:
        """Test an empty quoted value is present but empty."""
        assert read_attr('<gif src="" />', "src") == ""

    def test_key_must_start_attribute_name(self) -> None:
        """Test a short key does not match inside a longer attribute name."""
        assert read_attr('<gif width="10" />', "h") is None
        assert read_attr("<gif data-src='x' />", "src") is None

    def test_unquoted_stops_at_whitespace_or_gt(self) -> None:
        """Test unquoted values end at whitespace or '>'."""
        assert read_attr("<gif width=320 height=240>", "width") == "320"
        assert read_attr("<gif width=320 height=240>", "height") == "240"

    def test_first_alias_wins(self) -> None:
        """Test read_first_attr respects alias priority, not position."""
        token = '<gif href="h.gif" url="u.gif" />'
        assert read_first_attr(token, "src", "url", "href") == "u.gif"
        assert read_first_attr(token, "src") is None


@pytest.mark.unit
@pytest.mark.markup
class TestNumericCoercion:
    """Tests for prefix parsing and rounding helpers."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("12", 12),
            ("12px", 12),
            ("1.9", 1),
            (" 7", 7),
            ("-3", -3),
            ("abc", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse_int_prefix(self, value: str | None, expected: int | None) -> None:
        """Test integer prefix parsing."""
        assert parse_int_prefix(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("1.5s", 1.5),
            (".5", 0.5),
            ("1e3", 1000.0),
            ("42", 42.0),
            ("abc", None),
            ("1e999", None),
            (None, None),
        ],
    )
    def test_parse_float_prefix(self, value: str | None, expected: float | None) -> None:
        """Test float prefix parsing; non-finite values are rejected."""
        assert parse_float_prefix(value) == expected

    def test_strip_px(self) -> None:
        """Test only a trailing px suffix is removed, case-insensitively."""
        assert strip_px("120px") == "120"
        assert strip_px("120PX") == "120"
        assert strip_px("px120") == "px120"

    def test_parse_dimension(self) -> None:
        """Test pixel dimensions with and without suffix."""
        assert parse_dimension("120px") == 120
        assert parse_dimension("64") == 64
        assert parse_dimension("px") is None
        assert parse_dimension(None) is None

    @pytest.mark.parametrize("x, expected", [(2.5, 3), (0.5, 1), (-0.5, 0), (1.4, 1), (112.5, 113)])
    def test_round_half_up(self, x: float, expected: int) -> None:
        """Test halves round up rather than to even."""
        assert round_half_up(x) == expected
