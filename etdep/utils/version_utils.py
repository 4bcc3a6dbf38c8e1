"""
Version comparison utilities for etdep.

Module versions are plain dot-separated integers (``"24.1.0"``, ``"3.2"``,
``"7"``). This module orders them numerically, gates non-standard strings
such as ``"1.0.0-SNAPSHOT"`` and classifies version changes.

Parsing goes through :mod:`packaging` so that ``"1.2"`` and ``"1.2.0"``
compare equal, but anything other than dot-separated integers (a ``v`` prefix,
``-SNAPSHOT``, pre-release or local segments) is rejected with
:class:`~packaging.version.InvalidVersion`.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from packaging.version import InvalidVersion, Version

#: One to three dot-separated integer groups and nothing else.
SEMANTIC_VERSION_PATTERN = re.compile(r"\d+(\.\d+)?(\.\d+)?")

#: Any number of dot-separated integer groups, accepted by the comparator.
_NUMERIC_VERSION_PATTERN = re.compile(r"\d+(\.\d+)*")

#: Tracked version status: the tracked version is the latest one.
VERSION_STATUS_UPDATED = "U"

#: Tracked version status: a newer version exists (or latest is unknown).
VERSION_STATUS_UPDATE_AVAILABLE = "UA"

#: Tracked version status: the dependency is not in the catalog.
VERSION_STATUS_UNTRACKED = "UT"


def is_semantic_version(version: Optional[str]) -> bool:
    """Return ``True`` if *version* is ``MAJOR[.MINOR[.PATCH]]``.

    Examples:
        >>> is_semantic_version("1.0.0")
        True
        >>> is_semantic_version("1.0.0-SNAPSHOT")
        False
        >>> is_semantic_version("")
        False
    """
    if not version:
        return False
    return SEMANTIC_VERSION_PATTERN.fullmatch(version) is not None


def compare_versions(version1: str, version2: str) -> int:
    """Compare two numeric version strings component by component.

    Missing trailing components count as zero, so ``"1.0.0"`` equals
    ``"1"``.

    Args:
        version1: First version.
        version2: Second version.

    Returns:
        A negative number if *version1* is lower, ``0`` if equal, and a
        positive number if higher.

    Raises:
        InvalidVersion: Either string is not a plain numeric version.

    Examples:
        >>> compare_versions("2.0.0", "1.9.9")
        1
        >>> compare_versions("1.0.0", "1.0")
        0
    """
    release1 = _parse_release(version1)
    release2 = _parse_release(version2)

    length = max(len(release1), len(release2))
    padded1 = release1 + (0,) * (length - len(release1))
    padded2 = release2 + (0,) * (length - len(release2))

    return (padded1 > padded2) - (padded1 < padded2)


def version_sort_key(version: Optional[str]) -> Tuple[int, Tuple[int, ...]]:
    """Sort key ordering numeric versions, with unparseable ones lowest.

    Trailing zero components are dropped so that equal versions produce
    equal keys.
    """
    if not version:
        return (0, ())
    try:
        release = _parse_release(version)
    except InvalidVersion:
        return (0, ())

    trimmed = list(release)
    while len(trimmed) > 1 and trimmed[-1] == 0:
        trimmed.pop()
    return (1, tuple(trimmed))


def determine_version_status(version: str, latest_version: Optional[str]) -> str:
    """Classify a tracked version against the newest catalog version.

    Returns:
        ``"U"`` when *version* is the latest, otherwise ``"UA"`` (also
        when the latest version is unknown).
    """
    if latest_version is not None and version == latest_version:
        return VERSION_STATUS_UPDATED
    return VERSION_STATUS_UPDATE_AVAILABLE


def get_update_type(
    current_version: Optional[str],
    target_version: Optional[str],
) -> str:
    """Determine the kind of change between two versions.

    Args:
        current_version: Currently tracked version, or ``None``/``""`` if
            the dependency is new.
        target_version: Version the dependency moves to.

    Returns:
        One of ``"new"``, ``"same"``, ``"downgrade"``, ``"major"``,
        ``"minor"``, ``"patch"`` or ``"unknown"`` (missing target or
        non-numeric versions).

    Examples:
        >>> get_update_type("1.0.0", "2.0.0")
        'major'
        >>> get_update_type(None, "1.0.0")
        'new'
    """
    if not current_version and not target_version:
        return "unknown"

    if not current_version:
        return "new"

    if not target_version:
        return "unknown"

    try:
        comparison = compare_versions(target_version, current_version)
        if comparison == 0:
            return "same"
        if comparison < 0:
            return "downgrade"
        return _classify_upgrade(
            _parse_release(current_version), _parse_release(target_version)
        )
    except InvalidVersion:
        return "unknown"


def _parse_release(value: str) -> Tuple[int, ...]:
    """Parse *value* into its release tuple, rejecting non-numeric parts."""
    if not isinstance(value, str):
        raise InvalidVersion(repr(value))
    if _NUMERIC_VERSION_PATTERN.fullmatch(value.strip()) is None:
        raise InvalidVersion(value)
    return tuple(Version(value.strip()).release)


def _classify_upgrade(current: Tuple[int, ...], target: Tuple[int, ...]) -> str:
    """Classify an upgrade between two release tuples."""
    current_major, current_minor, current_patch = _normalize_release(current)
    target_major, target_minor, target_patch = _normalize_release(target)

    if current_major != target_major:
        return "major"

    if current_minor != target_minor:
        return "minor"

    return "patch"


def _normalize_release(release: Tuple[int, ...]) -> Tuple[int, int, int]:
    """Normalize a release tuple to (major, minor, patch)."""
    major = release[0] if len(release) > 0 else 0
    minor = release[1] if len(release) > 1 else 0
    patch = release[2] if len(release) > 2 else 0
    return major, minor, patch
