"""Unit tests for etdep.models.package module.

Test Coverage:
- PackageId keys, parsing and display
- Package accessors
- PackageDependencyRef core detection and serialization
- PackageVersion core dependency lookup
"""

from __future__ import annotations

import pytest

from etdep.constants import ETENDO_CORE, ETENDO_CORE_GROUP
from etdep.models import Package, PackageDependencyRef, PackageId, PackageVersion, make_key


@pytest.mark.unit
class TestPackageId:
    """Tests for PackageId."""

    def test_key_and_str(self) -> None:
        package_id = PackageId("com.etendoerp", "financial.extensions")

        assert package_id.key == "com.etendoerp:financial.extensions"
        assert str(package_id) == "com.etendoerp.financial.extensions"

    def test_from_key(self) -> None:
        assert PackageId.from_key("com.x:a") == PackageId("com.x", "a")

    def test_from_key_without_separator_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid package key"):
            PackageId.from_key("com.x.a")

    def test_is_hashable(self) -> None:
        assert len({PackageId("g", "a"), PackageId("g", "a")}) == 1

    def test_make_key(self) -> None:
        assert make_key("g", "a") == "g:a"


@pytest.mark.unit
class TestPackage:
    """Tests for Package."""

    def test_accessors(self) -> None:
        package = Package(PackageId("g", "a"))

        assert package.group == "g"
        assert package.artifact == "a"
        assert package.key == "g:a"
        assert package.is_bundle is False


@pytest.mark.unit
class TestPackageDependencyRef:
    """Tests for PackageDependencyRef."""

    def test_is_core(self) -> None:
        assert PackageDependencyRef(ETENDO_CORE_GROUP, ETENDO_CORE, "[1, 2)").is_core is True
        assert PackageDependencyRef("g", "a", "1.0.0").is_core is False

    def test_to_json(self) -> None:
        dep = PackageDependencyRef("g", "a", "1.0.0", is_external=True)

        assert dep.to_json() == {
            "group": "g",
            "artifact": "a",
            "version": "1.0.0",
            "external": True,
        }

    def test_str_and_identity(self) -> None:
        dep = PackageDependencyRef("g", "a", "1.0.0")

        assert str(dep) == "g.a@1.0.0"
        assert dep.key == "g:a"
        assert dep.package_id == PackageId("g", "a")


@pytest.mark.unit
class TestPackageVersion:
    """Tests for PackageVersion."""

    def test_get_core_dependency(self) -> None:
        core = PackageDependencyRef(ETENDO_CORE_GROUP, ETENDO_CORE, "[24.0.0, 25.0.0)")
        version = PackageVersion(
            Package(PackageId("g", "p")),
            "1.0.0",
            dependencies=[PackageDependencyRef("g", "a", "1.0.0"), core],
        )

        assert version.get_core_dependency() is core
        assert str(version) == "g.p@1.0.0"

    def test_no_core_dependency(self) -> None:
        version = PackageVersion(Package(PackageId("g", "p")), "1.0.0")

        assert version.get_core_dependency() is None
        assert version.dependencies == []
        assert version.from_core is None
