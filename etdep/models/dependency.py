"""
Tracked dependency model for etdep.

A :class:`Dependency` records what is actually installed (or pending
installation) for a ``group:artifact`` pair. It is distinct from catalog
metadata: it is created the first time a package is resolved into the
tracked set and mutated in place afterwards.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict

from etdep.models.package import make_key
from etdep.utils.version_utils import (
    VERSION_STATUS_UNTRACKED,
    VERSION_STATUS_UPDATE_AVAILABLE,
    VERSION_STATUS_UPDATED,
)


class Format(str, Enum):
    """How a dependency is installed."""

    LOCAL = "L"
    SOURCE = "S"
    JAR = "J"


class InstallationStatus(str, Enum):
    """Installation state of a tracked dependency."""

    INSTALLED = "INSTALLED"
    PENDING = "PENDING"


class VersionStatus(str, Enum):
    """Tracked version compared to the newest catalog version."""

    UPDATED = VERSION_STATUS_UPDATED
    UPDATE_AVAILABLE = VERSION_STATUS_UPDATE_AVAILABLE
    UNTRACKED = VERSION_STATUS_UNTRACKED


@dataclass
class Dependency:
    """A tracked (installed or pending) dependency.

    Attributes:
        group: Dependency group.
        artifact: Dependency artifact.
        version: Tracked version.
        format: Installation format.
        installation_status: Whether the version is installed or pending.
        version_status: Tracked version relative to the latest one.
        is_external: ``True`` when the dependency is not in the catalog.
    """

    group: str
    artifact: str
    version: str
    format: Format = Format.SOURCE
    installation_status: InstallationStatus = InstallationStatus.PENDING
    version_status: VersionStatus = VersionStatus.UPDATE_AVAILABLE
    is_external: bool = False

    @property
    def key(self) -> str:
        return make_key(self.group, self.artifact)

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "group": self.group,
            "artifact": self.artifact,
            "version": self.version,
            "format": self.format.value,
            "installationStatus": self.installation_status.value,
            "versionStatus": self.version_status.value,
            "external": self.is_external,
        }
