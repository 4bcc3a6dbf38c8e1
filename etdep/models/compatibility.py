"""
Core compatibility result model for etdep.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from etdep.constants import (
    CORE_VERSION_RANGE,
    CURRENT_CORE_VERSION,
    ERROR,
    IS_COMPATIBLE,
)


@dataclass(frozen=True)
class CompatibilityResult:
    """Outcome of checking one package version against the installed core.

    A result is always produced, even when the check fails: failures
    carry ``is_compatible=False`` and a populated ``error``.

    Args:
        is_compatible: Whether the installed core satisfies the range.
        current_core_version: Installed core version, if it was read.
        core_version_range: Range the version was checked against.
        error: Failure description when the check could not complete.
    """

    is_compatible: bool
    current_core_version: Optional[str] = None
    core_version_range: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failure(
        cls,
        exc: BaseException,
        current_core_version: Optional[str] = None,
        core_version_range: Optional[str] = None,
    ) -> "CompatibilityResult":
        """Build the result reported when the check raised *exc*."""
        return cls(
            is_compatible=False,
            current_core_version=current_core_version,
            core_version_range=core_version_range,
            error=f"An error occurred: {exc}",
        )

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_json(self) -> Dict[str, Any]:
        """Return the JSON shape consumed by the UI layer.

        Keys that were never determined are omitted.
        """
        result: Dict[str, Any] = {IS_COMPATIBLE: self.is_compatible}
        if self.current_core_version is not None:
            result[CURRENT_CORE_VERSION] = self.current_core_version
        if self.core_version_range is not None:
            result[CORE_VERSION_RANGE] = self.core_version_range
        if self.error is not None:
            result[ERROR] = self.error
        return result
