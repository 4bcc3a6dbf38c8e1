"""Interval-notation version ranges for etdep.

Core compatibility is declared with Maven-style intervals::

    [24.0.0, 25.0.0)    24.0.0 <= v <  25.0.0
    (1.0, 2.0]          1.0    <  v <= 2.0

Two parsers with different strictness live here and both are needed:

* :func:`is_compatible` is permissive. Malformed ranges and non-numeric
  versions simply answer ``False``.
* :func:`split_range` is strict and raises :class:`MalformedRangeError`
  for callers that cannot proceed without a valid pair of bounds.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from packaging.version import InvalidVersion

from etdep.constants import DEFAULT_MESSAGES, MSG_INVALID_VERSION_RANGE_FORMAT
from etdep.exceptions import MalformedRangeError
from etdep.utils.logger import get_logger
from etdep.utils.version_utils import compare_versions

logger = get_logger("version_range")

__all__ = [
    "VersionRange",
    "parse_range",
    "is_compatible",
    "split_range",
    "build_range",
    "is_core_version_compatible",
]

_BRACKETS_PATTERN = re.compile(r"[\[\]()]")

_LOWER_INCLUSIVE = "["
_LOWER_EXCLUSIVE = "("
_UPPER_INCLUSIVE = "]"
_UPPER_EXCLUSIVE = ")"


@dataclass(frozen=True)
class VersionRange:
    """Parsed form of an interval expression.

    Attributes:
        lower: Lower bound, trimmed.
        upper: Upper bound, trimmed.
        lower_inclusive: ``True`` for ``[``, ``False`` for ``(``.
        upper_inclusive: ``True`` for ``]``, ``False`` for ``)``.
    """

    lower: str
    upper: str
    lower_inclusive: bool = True
    upper_inclusive: bool = False

    def contains(self, version: str) -> bool:
        """Return ``True`` if *version* lies inside the interval.

        Non-numeric versions or bounds are never contained.
        """
        if not version:
            return False
        try:
            lower_cmp = compare_versions(version, self.lower)
            upper_cmp = compare_versions(version, self.upper)
        except InvalidVersion:
            logger.debug("Cannot compare %r against range %s", version, self)
            return False

        above_lower = lower_cmp >= 0 if self.lower_inclusive else lower_cmp > 0
        below_upper = upper_cmp <= 0 if self.upper_inclusive else upper_cmp < 0
        return above_lower and below_upper

    def __str__(self) -> str:
        opening = _LOWER_INCLUSIVE if self.lower_inclusive else _LOWER_EXCLUSIVE
        closing = _UPPER_INCLUSIVE if self.upper_inclusive else _UPPER_EXCLUSIVE
        return f"{opening}{self.lower}, {self.upper}{closing}"


def parse_range(range_expr: Optional[str]) -> Optional[VersionRange]:
    """Parse an interval expression, returning ``None`` when malformed.

    The expression must open with ``[`` or ``(`` and close with ``]`` or
    ``)``. The inner text is split on the first comma and both bounds
    must be non-empty after trimming.

    Examples:
        >>> parse_range("[1.0.0, 2.0.0)")
        VersionRange(lower='1.0.0', upper='2.0.0', lower_inclusive=True, upper_inclusive=False)
        >>> parse_range("1.0.0-2.0.0") is None
        True
    """
    if not range_expr:
        return None

    expr = range_expr.strip()
    if len(expr) < 2:
        return None
    if expr[0] not in (_LOWER_INCLUSIVE, _LOWER_EXCLUSIVE):
        return None
    if expr[-1] not in (_UPPER_INCLUSIVE, _UPPER_EXCLUSIVE):
        return None

    lower, sep, upper = expr[1:-1].partition(",")
    lower = lower.strip()
    upper = upper.strip()
    if not sep or not lower or not upper:
        return None

    return VersionRange(
        lower=lower,
        upper=upper,
        lower_inclusive=expr[0] == _LOWER_INCLUSIVE,
        upper_inclusive=expr[-1] == _UPPER_INCLUSIVE,
    )


def is_compatible(range_expr: Optional[str], version: Optional[str]) -> bool:
    """Return ``True`` if *version* lies inside *range_expr*.

    Never raises: empty inputs, malformed ranges and non-numeric versions
    all answer ``False``.

    Examples:
        >>> is_compatible("[1.0.0, 2.0.0)", "1.0.0")
        True
        >>> is_compatible("[1.0.0, 2.0.0)", "2.0.0")
        False
        >>> is_compatible("1.0.0-2.0.0", "1.5.0")
        False
    """
    if not range_expr or not version:
        return False

    parsed = parse_range(range_expr)
    if parsed is None:
        logger.debug("Malformed version range %r treated as incompatible", range_expr)
        return False

    return parsed.contains(version)


def split_range(range_expr: Optional[str]) -> Tuple[str, str]:
    """Strip bracket characters and split a range into its two bounds.

    Args:
        range_expr: Range such as ``"[1.0.0, 2.0.0)"``.

    Returns:
        ``(lower, upper)`` with surrounding whitespace removed.

    Raises:
        MalformedRangeError: The expression does not contain exactly two
            comma-separated parts.
    """
    if range_expr is None:
        raise MalformedRangeError(
            DEFAULT_MESSAGES[MSG_INVALID_VERSION_RANGE_FORMAT] % range_expr,
            range_expr=range_expr,
        )

    parts = _BRACKETS_PATTERN.sub("", range_expr).split(",")
    if len(parts) != 2:
        raise MalformedRangeError(
            DEFAULT_MESSAGES[MSG_INVALID_VERSION_RANGE_FORMAT] % range_expr,
            range_expr=range_expr,
        )

    return parts[0].strip(), parts[1].strip()


def build_range(from_core: str, latest_core: str) -> str:
    """Render legacy core bounds as the half-open range ``[from, latest)``."""
    return f"{_LOWER_INCLUSIVE}{from_core}, {latest_core}{_UPPER_EXCLUSIVE}"


def is_core_version_compatible(
    current_version: str,
    required_start: str,
    required_end: Optional[str],
) -> bool:
    """Check a core version against a closed ``[start, end]`` interval.

    This is the check used when picking a target version in the
    change-version flow: both bounds are inclusive and a blank *end*
    leaves the interval open above.

    Returns:
        ``False`` when any involved version is not numeric.

    Examples:
        >>> is_core_version_compatible("25.0.0", "24.0.0", "25.0.0")
        True
        >>> is_core_version_compatible("26.0.0", "24.0.0", "")
        True
    """
    try:
        if compare_versions(current_version, required_start) < 0:
            return False
        if not required_end or not required_end.strip():
            return True
        return compare_versions(current_version, required_end) <= 0
    except InvalidVersion:
        logger.debug(
            "Invalid version while checking %r against [%r, %r]",
            current_version,
            required_start,
            required_end,
        )
        return False
