"""
Unified data model exports for etdep.

Example:
    >>> from etdep.models import PackageVersion, Dependency, DiffEntry
"""

from __future__ import annotations

from etdep.models.package import (
    Package,
    PackageDependencyRef,
    PackageId,
    PackageVersion,
    make_key,
)
from etdep.models.dependency import (
    Dependency,
    Format,
    InstallationStatus,
    VersionStatus,
)
from etdep.models.compatibility import CompatibilityResult
from etdep.models.diff import DiffEntry, DiffStatus, VersionChangePreview
from etdep.models.tree import DependencyTree

__all__ = [
    "PackageId",
    "Package",
    "PackageVersion",
    "PackageDependencyRef",
    "make_key",
    "Dependency",
    "Format",
    "InstallationStatus",
    "VersionStatus",
    "CompatibilityResult",
    "DiffEntry",
    "DiffStatus",
    "VersionChangePreview",
    "DependencyTree",
]
