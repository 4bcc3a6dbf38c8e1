"""High-level entry point for etdep.

:class:`DependencyManager` wires the resolver, tree builder, differ and
tracker to one catalog and exposes the operations the CLI (or any other
application layer) needs. All results are plain models with a
``to_json`` method or JSON-ready dictionaries.

Typical usage::

    from etdep.core import DependencyManager, InMemoryCatalog

    manager = DependencyManager(InMemoryCatalog.from_file(path))
    pid = PackageId("com.etendoerp", "financial.extensions")

    manager.resolve_compatibility(pid, "1.0.0").to_json()
    manager.pick_best_version(pid)
    manager.build_dependency_tree(pid, "1.0.0").to_json()
    manager.preview_version_change(pid, "1.0.0", "1.1.0").to_json()
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from etdep.constants import (
    ARTIFACT,
    GROUP,
    MSG_DEPENDENCY_UPDATE_INFO,
    MSG_LATEST_VERSION_INCOMPATIBLE,
    MSG_UPDATING_TO_LATEST,
    MSG_WARNING_INCOMPATIBLE_DEP,
    VERSION,
)
from etdep.core.catalog import (
    CoreVersionReader,
    DefaultLocalizer,
    InMemoryCatalog,
    Localizer,
    PackageCatalogReader,
)
from etdep.core.compatibility import CoreCompatibilityResolver
from etdep.core.data_store import DependencyStore, InMemoryDependencyStore
from etdep.core.differ import DependencyDiffer
from etdep.core.tracker import DependencyTracker
from etdep.core.tree_builder import DependencyTreeBuilder
from etdep.exceptions import MissingVersionError, PackageNotFoundError
from etdep.models.compatibility import CompatibilityResult
from etdep.models.diff import DiffEntry, VersionChangePreview
from etdep.models.package import Package, PackageId, PackageVersion
from etdep.models.tree import DependencyTree
from etdep.utils.logger import get_logger

logger = get_logger("manager")

__all__ = ["DependencyManager"]


class DependencyManager:
    """Facade over the etdep core services.

    Args:
        catalog: Catalog of packages and versions.
        core_reader: Source of the installed core version. Defaults to
            *catalog* when it also implements :class:`CoreVersionReader`.
        store: Tracked-dependency storage. Defaults to an empty
            :class:`InMemoryDependencyStore`.
        localizer: Message templates for user-facing text.
        core_version: Overrides the installed core version reported by
            *core_reader*.
    """

    def __init__(
        self,
        catalog: PackageCatalogReader,
        core_reader: Optional[CoreVersionReader] = None,
        store: Optional[DependencyStore] = None,
        localizer: Optional[Localizer] = None,
        core_version: Optional[str] = None,
    ) -> None:
        if core_reader is None:
            if not isinstance(catalog, CoreVersionReader):
                raise TypeError(
                    "core_reader is required when the catalog cannot report "
                    "the core version"
                )
            core_reader = catalog
        if core_version is not None:
            core_reader = _FixedCoreVersion(core_version)

        self.catalog = catalog
        self.store = store if store is not None else InMemoryDependencyStore()
        self.localizer = localizer or DefaultLocalizer()

        self.resolver = CoreCompatibilityResolver(catalog, core_reader)
        self.tree_builder = DependencyTreeBuilder(catalog)
        self.differ = DependencyDiffer(catalog)
        self.tracker = DependencyTracker(catalog, self.store, differ=self.differ)

    @classmethod
    def from_catalog_file(
        cls,
        path: Path,
        core_version: Optional[str] = None,
    ) -> "DependencyManager":
        """Build a manager over a JSON or TOML catalog file."""
        return cls(InMemoryCatalog.from_file(path), core_version=core_version)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def find_package(self, package_id: PackageId) -> Package:
        """Return the catalog package for *package_id*.

        Raises:
            PackageNotFoundError: The package is not in the catalog.
        """
        package = self.catalog.find_package(package_id.group, package_id.artifact)
        if package is None:
            raise PackageNotFoundError(
                f"Package not found: {package_id}",
                group=package_id.group,
                artifact=package_id.artifact,
            )
        return package

    def find_version(self, package_id: PackageId, version: str) -> PackageVersion:
        """Return the catalog version *version* of *package_id*.

        Raises:
            PackageNotFoundError: The package is not in the catalog.
            MissingVersionError: The version is not in the catalog.
        """
        package = self.find_package(package_id)
        package_version = self.catalog.find_version(package, version)
        if package_version is None:
            raise MissingVersionError(
                f"Version {version} not found for package {package_id}",
                group=package_id.group,
                artifact=package_id.artifact,
                version=version,
            )
        return package_version

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def resolve_compatibility(self, package_id: PackageId, version: str) -> CompatibilityResult:
        """Check *version* of *package_id* against the installed core."""
        return self.resolver.check_core_compatibility(self.find_package(package_id), version)

    def pick_best_version(self, package_id: PackageId) -> str:
        """Return the newest core-compatible version, else the newest one."""
        return self.resolver.get_core_compatible_or_latest_version(self.find_package(package_id))

    def build_dependency_tree(self, package_id: PackageId, version: str) -> DependencyTree:
        """Return the flattened dependency tree of *version* of *package_id*."""
        root = self.find_version(package_id, version)
        dependencies, parents = self.tree_builder.build_tree_with_parents(root.dependencies)
        logger.debug("Built tree for %s with %d dependencies", root, len(dependencies))
        return DependencyTree(dependencies=list(dependencies.values()), parents=parents)

    def diff_dependencies(
        self,
        package_id: PackageId,
        current_version: str,
        target_version: str,
        *,
        include_unchanged: bool = True,
    ) -> List[DiffEntry]:
        """Diff the direct dependencies of two versions of *package_id*.

        Args:
            include_unchanged: When ``False``, entries without a status
                are dropped.
        """
        entries = self.differ.diff_versions(
            self.find_package(package_id), current_version, target_version
        )
        if include_unchanged:
            return entries
        return [entry for entry in entries if entry.has_changes]

    def preview_version_change(
        self,
        package_id: PackageId,
        current_version: str,
        target_version: str,
        *,
        include_unchanged: bool = True,
    ) -> VersionChangePreview:
        """Preview moving *package_id* from *current_version* to *target_version*.

        The target is checked against the installed core with the
        closed-interval rule of :meth:`CoreCompatibilityResolver.check_target_version`;
        a malformed core range shows up as the result's ``error``.

        Raises:
            PackageNotFoundError: The package is not in the catalog.
            MissingVersionError: Either version is not in the catalog.
        """
        dependencies = self.diff_dependencies(
            package_id,
            current_version,
            target_version,
            include_unchanged=include_unchanged,
        )
        compatibility = self.resolver.check_target_version(
            self.find_package(package_id), target_version
        )
        logger.debug(
            "Preview %s %s -> %s: compatible=%s, %d dependencies",
            package_id,
            current_version,
            target_version,
            compatibility.is_compatible,
            len(dependencies),
        )
        return VersionChangePreview(
            target_version=target_version,
            compatibility=compatibility,
            dependencies=dependencies,
        )

    def select_latest_compatible_versions(
        self,
        records: List[Mapping[str, Any]],
    ) -> Dict[str, Any]:
        """Preview moving each selected dependency to its best version.

        Each record carries ``group``, ``artifact`` and the currently
        tracked ``version``.

        Returns:
            ``{"warning": bool, "message": str, "dependencies": [...]}``
            where ``dependencies`` lists every selected ``group.artifact``,
            or ``{}`` when no selected dependency would change.

        Raises:
            KeyError: A record lacks a required field.
            PackageNotFoundError: A record names an unknown package.
        """
        header = self.localizer.message(MSG_DEPENDENCY_UPDATE_INFO)
        lines: List[str] = []
        names: List[str] = []
        warning = False

        for record in records:
            package_id = PackageId(record[GROUP], record[ARTIFACT])
            current_version = record[VERSION]
            names.append(str(package_id))

            package = self.find_package(package_id)
            new_version = self.resolver.get_core_compatible_or_latest_version(package)
            if current_version == new_version:
                continue

            result = self.resolver.check_core_compatibility(package, new_version)
            if result.is_compatible:
                detail = f"{self.localizer.message(MSG_UPDATING_TO_LATEST)}: {new_version}"
            else:
                warning = True
                detail = self.localizer.message(MSG_LATEST_VERSION_INCOMPATIBLE) % (
                    result.current_core_version,
                    new_version,
                    result.core_version_range,
                )
            lines.append(f"{package_id} - {detail}")

        if not lines:
            return {}

        if warning:
            lines.append(self.localizer.message(MSG_WARNING_INCOMPATIBLE_DEP))

        return {
            "warning": warning,
            "message": "\n".join([header, *lines]),
            "dependencies": names,
        }


class _FixedCoreVersion:
    """Core reader returning a pinned version."""

    def __init__(self, version: str) -> None:
        self.version = version

    def current_core_version(self) -> Optional[str]:
        return self.version
