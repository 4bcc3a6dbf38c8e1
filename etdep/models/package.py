"""
Catalog data models for etdep.

The catalog is read-only metadata: which packages exist, which versions
each one has, and what each version depends on. These models carry no
persistence behavior; lookups go through
:class:`~etdep.core.catalog.PackageCatalogReader` implementations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from etdep.constants import ETENDO_CORE

KEY_SEPARATOR = ":"


def make_key(group: str, artifact: str) -> str:
    """Return the ``"group:artifact"`` identity key."""
    return f"{group}{KEY_SEPARATOR}{artifact}"


@dataclass(frozen=True)
class PackageId:
    """Identity of a logical package, independent of version.

    Args:
        group: Package group, e.g. ``"com.etendoerp"``.
        artifact: Package artifact, e.g. ``"financial.extensions"``.
    """

    group: str
    artifact: str

    @property
    def key(self) -> str:
        return make_key(self.group, self.artifact)

    @classmethod
    def from_key(cls, key: str) -> "PackageId":
        """Build a :class:`PackageId` from a ``"group:artifact"`` key.

        Raises:
            ValueError: *key* has no separator.
        """
        group, sep, artifact = key.partition(KEY_SEPARATOR)
        if not sep:
            raise ValueError(f"Invalid package key: {key!r}")
        return cls(group, artifact)

    def __str__(self) -> str:
        return f"{self.group}.{self.artifact}"


@dataclass(frozen=True)
class Package:
    """A catalog package.

    Args:
        package_id: Package identity.
        is_bundle: ``True`` when the package only aggregates other
            dependencies and is expanded inline instead of installed.
    """

    package_id: PackageId
    is_bundle: bool = False

    @property
    def group(self) -> str:
        return self.package_id.group

    @property
    def artifact(self) -> str:
        return self.package_id.artifact

    @property
    def key(self) -> str:
        return self.package_id.key


@dataclass(frozen=True)
class PackageDependencyRef:
    """One edge in a package version's dependency list.

    ``version_constraint`` is an exact version for internal dependencies
    and a range such as ``"[24.0.0, 25.0.0)"`` for the core
    pseudo-dependency.

    Args:
        group: Group of the dependency.
        artifact: Artifact of the dependency.
        version_constraint: Exact version or version range.
        is_external: ``True`` for coordinates resolved outside the catalog
            (plain JARs); these never have sub-dependencies.
    """

    group: str
    artifact: str
    version_constraint: str = ""
    is_external: bool = False

    @property
    def key(self) -> str:
        return make_key(self.group, self.artifact)

    @property
    def package_id(self) -> PackageId:
        return PackageId(self.group, self.artifact)

    @property
    def is_core(self) -> bool:
        """``True`` for the core pseudo-dependency."""
        return self.artifact == ETENDO_CORE

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "group": self.group,
            "artifact": self.artifact,
            "version": self.version_constraint,
            "external": self.is_external,
        }

    def __str__(self) -> str:
        return f"{self.group}.{self.artifact}@{self.version_constraint}"


@dataclass
class PackageVersion:
    """One concrete release of a package.

    Args:
        package: The package this version belongs to.
        version: Version string.
        dependencies: Declared dependencies of this release.
        from_core: Legacy lower core bound (inclusive), used only when no
            explicit core dependency is declared.
        latest_core: Legacy upper core bound (exclusive).
    """

    package: Package
    version: str
    dependencies: List[PackageDependencyRef] = field(default_factory=list)
    from_core: Optional[str] = None
    latest_core: Optional[str] = None

    @property
    def package_id(self) -> PackageId:
        return self.package.package_id

    def get_core_dependency(self) -> Optional[PackageDependencyRef]:
        """Return the declared core pseudo-dependency, if any."""
        for dep in self.dependencies:
            if dep.is_core:
                return dep
        return None

    def __str__(self) -> str:
        return f"{self.package.package_id}@{self.version}"
