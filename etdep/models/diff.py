"""
Dependency diff data models for etdep.

A :class:`DiffEntry` describes how one dependency changes between two
versions of the same package. The absence of a status is the
"unchanged" signal; callers filter on :attr:`DiffEntry.has_changes`.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from etdep.constants import (
    ARTIFACT,
    COMPATIBILITY,
    DEPENDENCIES,
    GROUP,
    STATUS,
    VERSION_CURRENT,
    VERSION_TARGET,
)
from etdep.models.compatibility import CompatibilityResult


class DiffStatus(str, Enum):
    """Classification of a changed dependency."""

    NEW = "New Dependency"
    UPDATED = "Updated"

    def display(self) -> str:
        """Bracketed label used by grid views, e.g. ``"[Updated]"``."""
        return f"[{self.value}]"


@dataclass(frozen=True)
class DiffEntry:
    """One dependency in a version-change preview.

    Args:
        group: Dependency group.
        artifact: Dependency artifact.
        version_current: Version before the change (``""`` if new).
        version_target: Version after the change (``""`` if dropped).
        status: Change classification, ``None`` when unchanged.
    """

    group: str
    artifact: str
    version_current: str = ""
    version_target: str = ""
    status: Optional[DiffStatus] = None

    @property
    def has_changes(self) -> bool:
        return self.status is not None

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation.

        ``status`` is omitted entirely for unchanged entries.
        """
        result: Dict[str, Any] = {
            GROUP: self.group,
            ARTIFACT: self.artifact,
            VERSION_CURRENT: self.version_current,
            VERSION_TARGET: self.version_target,
        }
        if self.status is not None:
            result[STATUS] = self.status.value
        return result


@dataclass(frozen=True)
class VersionChangePreview:
    """What moving a package to a target version would do.

    Args:
        target_version: Version the package would move to.
        compatibility: Core compatibility of the target version.
        dependencies: Dependency diff between the two versions.
    """

    target_version: str
    compatibility: CompatibilityResult
    dependencies: List[DiffEntry] = field(default_factory=list)

    def to_json(self) -> Dict[str, Any]:
        return {
            COMPATIBILITY: self.compatibility.to_json(),
            DEPENDENCIES: [entry.to_json() for entry in self.dependencies],
        }
