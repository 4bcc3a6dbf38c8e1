"""Core compatibility resolution for etdep.

Answers three questions about a catalog package against the currently
installed core platform:

* Is a given version compatible? (:meth:`CoreCompatibilityResolver.check_core_compatibility`)
* Which version should be installed? (:meth:`CoreCompatibilityResolver.get_core_compatible_or_latest_version`)
* Can a change-version target be installed? (:meth:`CoreCompatibilityResolver.check_target_version`)

A version states its core requirement either through an explicit
``etendo-core`` dependency carrying a range, or through the legacy
``from_core`` / ``latest_core`` bounds. The explicit dependency always
wins when its range is non-empty.

Example::

    >>> resolver = CoreCompatibilityResolver(catalog, catalog)
    >>> resolver.check_core_compatibility(pkg, "1.0.0").to_json()
    {'isCompatible': True, 'currentCoreVersion': '24.1.0', 'coreVersionRange': '[24.0.0, 25.0.0)'}
"""

from __future__ import annotations

from typing import List, Optional

from etdep.constants import DEFAULT_MESSAGES, MSG_INVALID_VERSION_FORMAT, NO_VERSION_RANGE
from etdep.core.catalog import CoreVersionReader, PackageCatalogReader
from etdep.core.version_range import (
    build_range,
    is_compatible,
    is_core_version_compatible,
    split_range,
)
from etdep.exceptions import MalformedRangeError, MissingVersionError
from etdep.models.compatibility import CompatibilityResult
from etdep.models.package import Package, PackageVersion
from etdep.utils.logger import get_logger
from etdep.utils.version_utils import is_semantic_version, version_sort_key

logger = get_logger("compatibility")

__all__ = ["CoreCompatibilityResolver", "sorted_versions", "get_last_package_version"]


def sorted_versions(catalog: PackageCatalogReader, package: Package) -> List[PackageVersion]:
    """Return the versions of *package*, newest first.

    Non-numeric versions sink to the end.
    """
    return sorted(
        catalog.list_versions(package),
        key=lambda pv: version_sort_key(pv.version),
        reverse=True,
    )


def get_last_package_version(
    catalog: PackageCatalogReader,
    package: Package,
) -> Optional[PackageVersion]:
    """Return the newest version of *package*, or ``None`` if it has none."""
    versions = sorted_versions(catalog, package)
    return versions[0] if versions else None


class CoreCompatibilityResolver:
    """Checks package versions against the installed core version.

    Args:
        catalog: Catalog used to resolve package versions.
        core_reader: Source of the installed core version.
    """

    def __init__(
        self,
        catalog: PackageCatalogReader,
        core_reader: CoreVersionReader,
    ) -> None:
        self.catalog = catalog
        self.core_reader = core_reader

    def check_core_compatibility(self, package: Package, version: str) -> CompatibilityResult:
        """Check whether *version* of *package* supports the installed core.

        Never raises. Any failure, including an unknown version, yields a
        result with ``is_compatible=False`` and a populated ``error``.

        Args:
            package: Catalog package.
            version: Version of *package* to check.

        Returns:
            The :class:`CompatibilityResult` for this version.
        """
        current_core: Optional[str] = None
        try:
            package_version = self._require_version(package, version)
            core_dep = package_version.get_core_dependency()
            current_core = self.core_reader.current_core_version()

            if core_dep is None or not core_dep.version_constraint:
                return self._check_legacy_bounds(package_version, current_core)

            core_range = core_dep.version_constraint
            compatible = is_compatible(core_range, current_core)
            logger.debug(
                "%s@%s declares core %s, installed %s: compatible=%s",
                package.key,
                version,
                core_range,
                current_core,
                compatible,
            )
            return CompatibilityResult(
                is_compatible=compatible,
                current_core_version=current_core,
                core_version_range=core_range,
            )
        except Exception as exc:
            logger.warning("Compatibility check failed for %s@%s: %s", package.key, version, exc)
            return CompatibilityResult.failure(exc, current_core_version=current_core)

    def check_target_version(self, package: Package, version: str) -> CompatibilityResult:
        """Check a change-version target against the installed core.

        Unlike :meth:`check_core_compatibility`, the declared range is
        split into its two bounds and treated as the closed interval
        ``[lower, upper]``. Targets that are not plain numeric versions
        are rejected before any range is read.

        Never raises. A malformed range or any other failure is reported
        through ``error``.
        """
        current_core: Optional[str] = None
        core_range: Optional[str] = None
        try:
            package_version = self._require_version(package, version)
            current_core = self.core_reader.current_core_version()

            if not is_semantic_version(version):
                logger.debug("Skipping non-standard target version %r", version)
                return CompatibilityResult(
                    is_compatible=False,
                    current_core_version=current_core,
                    error=DEFAULT_MESSAGES[MSG_INVALID_VERSION_FORMAT] % version,
                )

            core_dep = package_version.get_core_dependency()
            if core_dep is not None and core_dep.version_constraint:
                core_range = core_dep.version_constraint
            else:
                from_core = (package_version.from_core or "").strip()
                latest_core = (package_version.latest_core or "").strip()
                if not from_core and not latest_core:
                    return CompatibilityResult(
                        is_compatible=True,
                        current_core_version=current_core,
                        core_version_range=NO_VERSION_RANGE,
                    )
                core_range = build_range(from_core, latest_core)

            lower, upper = split_range(core_range)
            compatible = current_core is not None and is_core_version_compatible(
                current_core, lower, upper
            )
            return CompatibilityResult(
                is_compatible=compatible,
                current_core_version=current_core,
                core_version_range=core_range,
            )
        except MalformedRangeError as exc:
            logger.warning("Malformed core range for %s@%s: %s", package.key, version, exc)
            return CompatibilityResult.failure(
                exc, current_core_version=current_core, core_version_range=core_range
            )
        except Exception as exc:
            logger.warning("Target check failed for %s@%s: %s", package.key, version, exc)
            return CompatibilityResult.failure(exc, current_core_version=current_core)

    def get_core_compatible_or_latest_version(self, package: Package) -> str:
        """Return the newest core-compatible version, else the newest one.

        Raises:
            MissingVersionError: *package* has no versions at all.
        """
        versions = sorted_versions(self.catalog, package)
        if not versions:
            raise MissingVersionError(
                f"Package {package.key} has no versions",
                group=package.group,
                artifact=package.artifact,
            )

        for package_version in versions:
            result = self.check_core_compatibility(package, package_version.version)
            if result.is_compatible:
                logger.debug("Best version for %s: %s", package.key, package_version.version)
                return package_version.version

        latest = versions[0].version
        logger.warning(
            "No version of %s is compatible with the installed core; using latest %s",
            package.key,
            latest,
        )
        return latest

    def get_last_package_version(self, package: Package) -> Optional[PackageVersion]:
        """Return the newest version of *package*, or ``None`` if it has none."""
        return get_last_package_version(self.catalog, package)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_version(self, package: Package, version: str) -> PackageVersion:
        package_version = self.catalog.find_version(package, version)
        if package_version is None:
            raise MissingVersionError(
                f"Version {version} not found for package {package.key}",
                group=package.group,
                artifact=package.artifact,
                version=version,
            )
        return package_version

    def _check_legacy_bounds(
        self,
        package_version: PackageVersion,
        current_core: Optional[str],
    ) -> CompatibilityResult:
        from_core = (package_version.from_core or "").strip()
        latest_core = (package_version.latest_core or "").strip()

        if not from_core and not latest_core:
            return CompatibilityResult(
                is_compatible=True,
                current_core_version=current_core,
                core_version_range=NO_VERSION_RANGE,
            )

        core_range = build_range(from_core, latest_core)
        return CompatibilityResult(
            is_compatible=is_compatible(core_range, current_core),
            current_core_version=current_core,
            core_version_range=core_range,
        )
