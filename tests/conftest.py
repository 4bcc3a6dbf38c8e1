"""Shared fixtures for the etdep test-suite."""

from __future__ import annotations

import pytest

from etdep.constants import ETENDO_CORE, ETENDO_CORE_GROUP
from etdep.core.catalog import InMemoryCatalog
from etdep.models import PackageDependencyRef, PackageVersion

GROUP = "com.test"


def core_ref(range_expr: str) -> PackageDependencyRef:
    """Return a core pseudo-dependency carrying *range_expr*."""
    return PackageDependencyRef(ETENDO_CORE_GROUP, ETENDO_CORE, range_expr)


def ref(artifact: str, version: str, *, external: bool = False) -> PackageDependencyRef:
    """Return a dependency on ``com.test:<artifact>``."""
    return PackageDependencyRef(GROUP, artifact, version, is_external=external)


@pytest.fixture
def catalog() -> InMemoryCatalog:
    """Catalog for the basic scenario: P@1.0.0 depends on A@1.0.0.

    P@1.0.0 requires core ``[24.0.0, 25.0.0)`` and the installed core is
    ``24.1.0``.
    """
    cat = InMemoryCatalog(core_version="24.1.0")
    pkg_p = cat.add_package(GROUP, "p")
    pkg_a = cat.add_package(GROUP, "a")

    cat.add_version(
        PackageVersion(
            pkg_p,
            "1.0.0",
            dependencies=[ref("a", "1.0.0"), core_ref("[24.0.0, 25.0.0)")],
        )
    )
    cat.add_version(PackageVersion(pkg_a, "1.0.0"))
    return cat
