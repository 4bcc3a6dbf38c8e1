"""Package catalog access for etdep.

The resolver, tree builder and differ never talk to storage directly.
They consume the small reader protocols declared here, so any backend
(database, REST mirror, fixture) can be plugged in.

:class:`InMemoryCatalog` is the bundled implementation. It is populated
programmatically or loaded from a JSON or TOML catalog file::

    core_version = "24.1.0"

    [[packages]]
    group = "com.etendoerp"
    artifact = "financial.extensions"

    [[packages.versions]]
    version = "1.0.0"

    [[packages.versions.dependencies]]
    group = "com.etendoerp.platform"
    artifact = "etendo-core"
    version = "[24.0.0, 25.0.0)"
"""

from __future__ import annotations

import json
import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, runtime_checkable

from etdep.constants import DEFAULT_MESSAGES
from etdep.exceptions import CatalogError
from etdep.models.package import (
    Package,
    PackageDependencyRef,
    PackageId,
    PackageVersion,
)
from etdep.utils.logger import get_logger

logger = get_logger("catalog")

__all__ = [
    "PackageCatalogReader",
    "CoreVersionReader",
    "Localizer",
    "DefaultLocalizer",
    "InMemoryCatalog",
]


# ---------------------------------------------------------------------------
# Consumed interfaces
# ---------------------------------------------------------------------------


@runtime_checkable
class PackageCatalogReader(Protocol):
    """Read-only access to catalog packages and their versions."""

    def find_package(self, group: str, artifact: str) -> Optional[Package]:
        ...

    def list_versions(self, package: Package) -> List[PackageVersion]:
        ...

    def find_version(self, package: Package, version: str) -> Optional[PackageVersion]:
        ...


@runtime_checkable
class CoreVersionReader(Protocol):
    """Source of the currently installed core platform version."""

    def current_core_version(self) -> Optional[str]:
        ...


@runtime_checkable
class Localizer(Protocol):
    """Resolves a message code to a user-facing template."""

    def message(self, code: str) -> str:
        ...


class DefaultLocalizer:
    """English templates keyed by message code.

    Unknown codes resolve to the code itself so a missing translation
    never hides the message entirely.
    """

    def __init__(self, overrides: Optional[Mapping[str, str]] = None) -> None:
        self._messages: Dict[str, str] = dict(DEFAULT_MESSAGES)
        if overrides:
            self._messages.update(overrides)

    def message(self, code: str) -> str:
        return self._messages.get(code, code)


# ---------------------------------------------------------------------------
# In-memory catalog
# ---------------------------------------------------------------------------


class InMemoryCatalog:
    """Dictionary-backed catalog implementing both reader protocols.

    Args:
        core_version: Installed core version reported by
            :meth:`current_core_version`.

    Example::

        >>> catalog = InMemoryCatalog(core_version="24.1.0")
        >>> pkg = catalog.add_package("com.x", "p")
        >>> catalog.add_version(PackageVersion(pkg, "1.0.0"))
        >>> catalog.find_version(pkg, "1.0.0").version
        '1.0.0'
    """

    def __init__(self, core_version: Optional[str] = None) -> None:
        self.core_version = core_version
        self._packages: Dict[str, Package] = {}

        # package key -> version string -> PackageVersion
        self._versions: Dict[str, Dict[str, PackageVersion]] = {}

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def add_package(self, group: str, artifact: str, is_bundle: bool = False) -> Package:
        """Register a package, returning the existing one if already known."""
        package_id = PackageId(group, artifact)
        existing = self._packages.get(package_id.key)
        if existing is not None:
            return existing

        package = Package(package_id, is_bundle=is_bundle)
        self._packages[package.key] = package
        self._versions[package.key] = {}
        return package

    def add_version(self, package_version: PackageVersion) -> None:
        """Register a package version.

        Raises:
            CatalogError: The package is unknown or the version is
                already registered.
        """
        key = package_version.package.key
        if key not in self._packages:
            raise CatalogError(f"Unknown package {key} for version {package_version.version}")

        versions = self._versions[key]
        if package_version.version in versions:
            raise CatalogError(f"Duplicate version {package_version.version} for package {key}")
        versions[package_version.version] = package_version

    # ------------------------------------------------------------------
    # PackageCatalogReader / CoreVersionReader
    # ------------------------------------------------------------------

    def find_package(self, group: str, artifact: str) -> Optional[Package]:
        return self._packages.get(PackageId(group, artifact).key)

    def list_versions(self, package: Package) -> List[PackageVersion]:
        return list(self._versions.get(package.key, {}).values())

    def find_version(self, package: Package, version: str) -> Optional[PackageVersion]:
        return self._versions.get(package.key, {}).get(version)

    def current_core_version(self) -> Optional[str]:
        return self.core_version

    @property
    def packages(self) -> List[Package]:
        return list(self._packages.values())

    def __len__(self) -> int:
        return len(self._packages)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        *,
        source: Optional[str] = None,
    ) -> "InMemoryCatalog":
        """Build a catalog from its parsed JSON/TOML representation.

        Args:
            data: Mapping with an optional ``core_version`` and a
                ``packages`` list.
            source: File the data came from, used in error details.

        Raises:
            CatalogError: A required field is missing or has the wrong type.
        """
        if not isinstance(data, Mapping):
            raise CatalogError("Catalog root must be a table", catalog_path=source)

        core_version = data.get("core_version")
        if core_version is not None and not isinstance(core_version, str):
            raise CatalogError("core_version must be a string", catalog_path=source)

        catalog = cls(core_version=core_version)
        packages = data.get("packages", [])
        if not isinstance(packages, list):
            raise CatalogError("packages must be a list", catalog_path=source)

        for raw_package in packages:
            catalog._load_package(raw_package, source)

        logger.debug("Loaded catalog with %d packages", len(catalog))
        return catalog

    @classmethod
    def from_file(cls, path: Path) -> "InMemoryCatalog":
        """Load a catalog from a ``.json`` or ``.toml`` file.

        Raises:
            CatalogError: The file cannot be read or parsed.
        """
        source = str(path)
        try:
            if path.suffix.lower() == ".json":
                with open(path, "r", encoding="utf-8") as fh:
                    data = json.load(fh)
            else:
                with open(path, "rb") as fh:
                    data = tomllib.load(fh)
        except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
            raise CatalogError(
                f"Invalid catalog file {path.name}",
                catalog_path=source,
                original_error=exc,
            ) from exc
        except OSError as exc:
            raise CatalogError(
                f"Cannot read catalog file {path}",
                catalog_path=source,
                original_error=exc,
            ) from exc

        logger.info("Loading catalog from %s", path)
        return cls.from_dict(data, source=source)

    def _load_package(self, raw: Any, source: Optional[str]) -> None:
        if not isinstance(raw, Mapping):
            raise CatalogError("Each package entry must be a table", catalog_path=source)

        group = _require_str(raw, "group", source)
        artifact = _require_str(raw, "artifact", source)
        is_bundle = raw.get("bundle", False)
        if not isinstance(is_bundle, bool):
            raise CatalogError(
                f"bundle must be a boolean for {group}:{artifact}",
                catalog_path=source,
            )

        package = self.add_package(group, artifact, is_bundle=is_bundle)
        for raw_version in raw.get("versions", []):
            if not isinstance(raw_version, Mapping):
                raise CatalogError(
                    f"Each version of {package.key} must be a table",
                    catalog_path=source,
                )
            dependencies = [
                _parse_dependency(raw_dep, source)
                for raw_dep in raw_version.get("dependencies", [])
            ]
            self.add_version(
                PackageVersion(
                    package=package,
                    version=_require_str(raw_version, "version", source),
                    dependencies=dependencies,
                    from_core=_optional_str(raw_version, "from_core", source),
                    latest_core=_optional_str(raw_version, "latest_core", source),
                )
            )


def _require_str(raw: Mapping[str, Any], key: str, source: Optional[str]) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value:
        raise CatalogError(f"Missing or invalid '{key}' in catalog entry", catalog_path=source)
    return value


def _optional_str(raw: Mapping[str, Any], key: str, source: Optional[str]) -> Optional[str]:
    value = raw.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise CatalogError(f"'{key}' must be a string in catalog entry", catalog_path=source)
    return value


def _parse_dependency(raw: Any, source: Optional[str]) -> PackageDependencyRef:
    if not isinstance(raw, Mapping):
        raise CatalogError("Each dependency entry must be a table", catalog_path=source)
    return PackageDependencyRef(
        group=_require_str(raw, "group", source),
        artifact=_require_str(raw, "artifact", source),
        version_constraint=str(raw.get("version", "")),
        is_external=bool(raw.get("external", False)),
    )
