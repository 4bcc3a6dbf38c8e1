"""Unit tests for etdep.core.version_range module.

Test Coverage:
- Interval membership at inclusive and exclusive bounds
- Permissive handling of malformed ranges and non-numeric versions
- Strict bound splitting
- Closed-interval core check used by the change-version flow
"""

from __future__ import annotations

import pytest

from etdep.core.version_range import (
    VersionRange,
    build_range,
    is_compatible,
    is_core_version_compatible,
    parse_range,
    split_range,
)
from etdep.exceptions import MalformedRangeError


@pytest.mark.unit
class TestIsCompatible:
    """Tests for is_compatible."""

    @pytest.mark.parametrize(
        "version,expected",
        [
            ("1.0.0", True),
            ("1.5.0", True),
            ("1.9.99", True),
            ("2.0.0", False),
            ("0.9.9", False),
        ],
    )
    def test_half_open_range_boundaries(self, version: str, expected: bool) -> None:
        """Test [1.0.0, 2.0.0) includes the lower and excludes the upper bound."""
        assert is_compatible("[1.0.0, 2.0.0)", version) is expected

    def test_closed_upper_bound(self) -> None:
        assert is_compatible("[1.0.0, 2.0.0]", "2.0.0") is True

    def test_open_lower_bound(self) -> None:
        assert is_compatible("(1.0.0, 2.0.0]", "1.0.0") is False
        assert is_compatible("(1.0.0, 2.0.0]", "1.0.1") is True

    def test_bounds_are_trimmed(self) -> None:
        assert is_compatible("[ 24.0.0 ,  25.0.0 )", "24.1.0") is True

    def test_short_versions_padded(self) -> None:
        """Test "2" behaves like "2.0.0" on an exclusive upper bound."""
        assert is_compatible("[1, 2)", "2.0.0") is False
        assert is_compatible("[1, 2)", "1.5") is True

    @pytest.mark.parametrize(
        "range_expr",
        ["1.0.0-2.0.0", "[1.0.0]", "[,2.0.0)", "[1.0.0,)", "", "[]", "1.0.0, 2.0.0"],
    )
    def test_malformed_range_is_not_compatible(self, range_expr: str) -> None:
        """Test malformed ranges answer False instead of raising."""
        assert is_compatible(range_expr, "1.5.0") is False

    @pytest.mark.parametrize("version", ["", None, "1.5.0-SNAPSHOT", "abc"])
    def test_invalid_version_is_not_compatible(self, version) -> None:
        assert is_compatible("[1.0.0, 2.0.0)", version) is False

    def test_non_numeric_bound_is_not_compatible(self) -> None:
        assert is_compatible("[1.0.0, latest)", "1.5.0") is False

    def test_none_range_is_not_compatible(self) -> None:
        assert is_compatible(None, "1.0.0") is False


@pytest.mark.unit
class TestParseRange:
    """Tests for parse_range and VersionRange."""

    def test_parse_half_open(self) -> None:
        result = parse_range("[24.0.0, 25.0.0)")

        assert result == VersionRange("24.0.0", "25.0.0", True, False)

    def test_parse_open_closed(self) -> None:
        result = parse_range("(1.0, 2.0]")

        assert result is not None
        assert result.lower_inclusive is False
        assert result.upper_inclusive is True

    def test_parse_malformed_returns_none(self) -> None:
        assert parse_range("1.0.0-2.0.0") is None
        assert parse_range(None) is None

    def test_str_renders_interval(self) -> None:
        assert str(VersionRange("1.0", "2.0", False, True)) == "(1.0, 2.0]"

    def test_contains(self) -> None:
        version_range = VersionRange("1.0.0", "2.0.0")

        assert version_range.contains("1.0.0") is True
        assert version_range.contains("2.0.0") is False
        assert version_range.contains("") is False


@pytest.mark.unit
class TestSplitRange:
    """Tests for split_range."""

    def test_split_returns_trimmed_bounds(self) -> None:
        assert split_range("[1.0.0, 2.0.0)") == ("1.0.0", "2.0.0")

    def test_split_strips_every_bracket(self) -> None:
        assert split_range("((1.0.0,2.0.0]]") == ("1.0.0", "2.0.0")

    @pytest.mark.parametrize("range_expr", ["1.0.0-2.0.0", "[1.0.0]", "[1,2,3]"])
    def test_wrong_part_count_raises(self, range_expr: str) -> None:
        with pytest.raises(MalformedRangeError) as exc_info:
            split_range(range_expr)

        assert exc_info.value.range_expr == range_expr
        assert range_expr in str(exc_info.value)

    def test_none_raises(self) -> None:
        with pytest.raises(MalformedRangeError):
            split_range(None)

    def test_build_range_is_half_open(self) -> None:
        assert build_range("24.0.0", "25.0.0") == "[24.0.0, 25.0.0)"


@pytest.mark.unit
class TestIsCoreVersionCompatible:
    """Tests for is_core_version_compatible."""

    @pytest.mark.parametrize(
        "current,start,end,expected",
        [
            ("24.1.0", "24.0.0", "25.0.0", True),
            ("24.0.0", "24.0.0", "25.0.0", True),
            ("25.0.0", "24.0.0", "25.0.0", True),
            ("23.9.0", "24.0.0", "25.0.0", False),
            ("25.1.0", "24.0.0", "25.0.0", False),
            ("30.0.0", "24.0.0", "", True),
            ("30.0.0", "24.0.0", None, True),
            ("30.0.0", "24.0.0", "  ", True),
        ],
    )
    def test_closed_interval(self, current: str, start: str, end, expected: bool) -> None:
        assert is_core_version_compatible(current, start, end) is expected

    @pytest.mark.parametrize(
        "current,start,end",
        [
            ("invalid", "24.0.0", "25.0.0"),
            ("24.1.0", "invalid", "25.0.0"),
            ("24.1.0", "24.0.0", "invalid"),
            ("24.1.0", "", "25.0.0"),
        ],
    )
    def test_invalid_versions_are_not_compatible(self, current: str, start: str, end: str) -> None:
        assert is_core_version_compatible(current, start, end) is False
