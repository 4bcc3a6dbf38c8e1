"""Tracked-dependency mutations for etdep.

:class:`DependencyTracker` owns every write to the tracked dependency
set: creating or refreshing a record after resolution, switching a
dependency to another catalog version, and pinning an external JAR to a
new version.
"""

from __future__ import annotations

from typing import List, Optional

from etdep.constants import NULL_STRING
from etdep.core.catalog import PackageCatalogReader
from etdep.core.compatibility import get_last_package_version
from etdep.core.data_store import DependencyStore, upsert
from etdep.core.differ import DependencyDiffer
from etdep.exceptions import ExternalVersionError, MissingVersionError, PackageNotFoundError
from etdep.models.dependency import Dependency, Format, InstallationStatus, VersionStatus
from etdep.models.diff import DiffEntry
from etdep.models.package import Package
from etdep.utils.logger import get_logger
from etdep.utils.version_utils import determine_version_status

logger = get_logger("tracker")

__all__ = ["DependencyTracker"]


class DependencyTracker:
    """Applies version changes to tracked dependencies.

    Args:
        catalog: Catalog of known packages.
        store: Tracked-dependency storage.
        differ: Used to preview dependency changes. Built from *catalog*
            when omitted.
    """

    def __init__(
        self,
        catalog: PackageCatalogReader,
        store: DependencyStore,
        differ: Optional[DependencyDiffer] = None,
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.differ = differ or DependencyDiffer(catalog)

    def update_or_create_dependency(self, group: str, artifact: str, version: str) -> Dependency:
        """Point the tracked record for ``group:artifact`` at *version*.

        Creates the record when it does not exist. Packages unknown to the
        catalog are tracked as external JARs with status ``UT``; known
        ones are marked internal and get ``U`` or ``UA`` depending on
        whether *version* is the newest catalog version.
        """

        def apply(existing: Optional[Dependency]) -> Dependency:
            package = self.catalog.find_package(group, artifact)
            status = VersionStatus(determine_version_status(version, self._latest_version(package)))

            dependency = existing or Dependency(group=group, artifact=artifact, version=version)
            dependency.version = version
            dependency.version_status = status

            if package is None:
                dependency.format = Format.JAR
                dependency.is_external = True
                dependency.version_status = VersionStatus.UNTRACKED
            else:
                dependency.is_external = False

            logger.debug(
                "%s tracked dependency %s:%s@%s (%s)",
                "Updated" if existing is not None else "Created",
                group,
                artifact,
                version,
                dependency.version_status.value,
            )
            return dependency

        return upsert(self.store, group, artifact, apply)

    def change_version(self, dependency: Dependency, new_version: str) -> List[DiffEntry]:
        """Move *dependency* to *new_version* of its catalog package.

        The record becomes ``PENDING``. Every dependency that the new
        version adds or updates is upserted into the tracked set.

        Returns:
            The dependency diff between the old and the new version.

        Raises:
            PackageNotFoundError: The package is not in the catalog.
            MissingVersionError: *new_version* is not in the catalog.
        """
        package = self.catalog.find_package(dependency.group, dependency.artifact)
        if package is None:
            raise PackageNotFoundError(
                f"Package not found: {dependency.group}.{dependency.artifact}",
                group=dependency.group,
                artifact=dependency.artifact,
            )
        if self.catalog.find_version(package, new_version) is None:
            raise MissingVersionError(
                f"Version {new_version} not found for package {package.key}",
                group=dependency.group,
                artifact=dependency.artifact,
                version=new_version,
            )

        current_version = dependency.version
        logger.info("Changing %s from %s to %s", dependency.key, current_version, new_version)

        dependency.version = new_version
        dependency.installation_status = InstallationStatus.PENDING
        dependency.version_status = VersionStatus(
            determine_version_status(new_version, self._latest_version(package))
        )

        current_map = (
            self.differ.get_dependencies_map(package, current_version)
            if self.catalog.find_version(package, current_version) is not None
            else {}
        )
        diff = self.differ.compare_dependency_sets(
            current_map,
            self.differ.get_dependencies_map(package, new_version),
        )

        for entry in diff:
            if entry.has_changes:
                self.update_or_create_dependency(entry.group, entry.artifact, entry.version_target)

        self.store.save(dependency)
        self.store.flush()
        return diff

    def change_external_version(self, dependency: Dependency, version: Optional[str]) -> Dependency:
        """Pin an external dependency to *version* as a pending JAR.

        Raises:
            ExternalVersionError: *dependency* is not external, or
                *version* is empty or ``"null"``.
        """
        if not dependency.is_external:
            raise ExternalVersionError(f"{dependency.key} is not an external dependency")
        if not version or version == NULL_STRING:
            raise ExternalVersionError(f"External version for {dependency.key} must not be empty")

        dependency.format = Format.JAR
        dependency.installation_status = InstallationStatus.PENDING
        dependency.version = version

        self.store.save(dependency)
        self.store.flush()
        return dependency

    def _latest_version(self, package: Optional[Package]) -> Optional[str]:
        if package is None:
            return None
        latest = get_last_package_version(self.catalog, package)
        return latest.version if latest is not None else None

