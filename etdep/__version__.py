"""
etdep version information.

Single source of truth for the package version. ``VERSION_INFO`` exposes
the release segment as a ``(major, minor, patch)`` tuple for callers that
want to compare against it.
"""

from __future__ import annotations

from typing import Tuple

from packaging.version import Version

__version__ = "0.1.0.dev0"


def _release_tuple(version: str) -> Tuple[int, int, int]:
    """Return the release segment of *version* padded to three parts."""
    release = Version(version).release
    padded = tuple(release) + (0,) * (3 - len(release))
    return padded[0], padded[1], padded[2]


VERSION_INFO = _release_tuple(__version__)

#: Human-readable version (for CLI)
VERSION_STRING = f"etdep {__version__}"
