"""Dependency diffing between two versions of a package.

Used to preview what a version change would do to the tracked
dependency set before applying it.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from etdep.constants import ETENDO_CORE
from etdep.core.catalog import PackageCatalogReader
from etdep.exceptions import MissingVersionError
from etdep.models.diff import DiffEntry, DiffStatus
from etdep.models.package import KEY_SEPARATOR, Package, PackageDependencyRef
from etdep.utils.logger import get_logger

logger = get_logger("differ")

__all__ = ["DependencyDiffer"]

DependencyMap = Dict[str, PackageDependencyRef]


class DependencyDiffer:
    """Classifies dependency changes between two package versions.

    Args:
        catalog: Catalog used by :meth:`get_dependencies_map`.
    """

    def __init__(self, catalog: PackageCatalogReader) -> None:
        self.catalog = catalog

    def get_dependencies_map(self, package: Package, version: str) -> DependencyMap:
        """Return the direct dependencies of *package* at *version*, keyed.

        Raises:
            MissingVersionError: *version* is not in the catalog.
        """
        package_version = self.catalog.find_version(package, version)
        if package_version is None:
            raise MissingVersionError(
                f"Version {version} not found for package {package.key}",
                group=package.group,
                artifact=package.artifact,
                version=version,
            )
        return {dep.key: dep for dep in package_version.dependencies}

    def diff_versions(
        self,
        package: Package,
        current_version: str,
        target_version: str,
    ) -> List[DiffEntry]:
        """Diff the direct dependencies of two versions of *package*."""
        return self.compare_dependency_sets(
            self.get_dependencies_map(package, current_version),
            self.get_dependencies_map(package, target_version),
        )

    def compare_dependency_sets(
        self,
        current_map: DependencyMap,
        target_map: DependencyMap,
    ) -> List[DiffEntry]:
        """Return one entry per key of either map, sorted by key.

        Keys naming the core pseudo-dependency are skipped.
        """
        entries: List[DiffEntry] = []
        for key in sorted(set(current_map) | set(target_map)):
            if key.partition(KEY_SEPARATOR)[2] == ETENDO_CORE:
                continue
            entry = self.build_dependency_info(current_map, target_map, key)
            if entry is not None:
                entries.append(entry)

        logger.debug(
            "Compared %d current and %d target dependencies: %d changed",
            len(current_map),
            len(target_map),
            sum(1 for entry in entries if entry.has_changes),
        )
        return entries

    @staticmethod
    def build_dependency_info(
        current_map: DependencyMap,
        target_map: DependencyMap,
        key: str,
    ) -> Optional[DiffEntry]:
        """Classify a single ``group:artifact`` key.

        Returns:
            ``None`` when *key* is in neither map. Otherwise a
            :class:`DiffEntry` with status ``NEW`` (only in target),
            ``UPDATED`` (versions differ) or no status (unchanged, or
            only in current).
        """
        current = current_map.get(key)
        target = target_map.get(key)
        if current is None and target is None:
            return None

        group, _, artifact = key.partition(KEY_SEPARATOR)
        version_current = current.version_constraint if current is not None else ""
        version_target = target.version_constraint if target is not None else ""

        status: Optional[DiffStatus] = None
        if current is None:
            status = DiffStatus.NEW
        elif target is not None and version_current != version_target:
            status = DiffStatus.UPDATED

        return DiffEntry(
            group=group,
            artifact=artifact,
            version_current=version_current,
            version_target=version_target,
            status=status,
        )
