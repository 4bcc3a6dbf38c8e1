"""
Core functionality exports for etdep.

This module provides convenient access to the core subsystems of etdep.
Importing from here keeps user-facing imports clean and stable:

    from etdep.core import DependencyManager, InMemoryCatalog
"""

from __future__ import annotations

from etdep.core.catalog import (
    CoreVersionReader,
    DefaultLocalizer,
    InMemoryCatalog,
    Localizer,
    PackageCatalogReader,
)
from etdep.core.compatibility import CoreCompatibilityResolver, get_last_package_version
from etdep.core.data_store import DependencyStore, InMemoryDependencyStore, upsert
from etdep.core.differ import DependencyDiffer
from etdep.core.manager import DependencyManager
from etdep.core.tracker import DependencyTracker
from etdep.core.tree_builder import DependencyTreeBuilder, dependency_key, remove_dependency_core
from etdep.core.version_range import (
    VersionRange,
    is_compatible,
    is_core_version_compatible,
    parse_range,
    split_range,
)

__all__ = [
    "DependencyManager",
    "CoreCompatibilityResolver",
    "DependencyTreeBuilder",
    "DependencyDiffer",
    "DependencyTracker",
    "PackageCatalogReader",
    "CoreVersionReader",
    "Localizer",
    "DefaultLocalizer",
    "InMemoryCatalog",
    "DependencyStore",
    "InMemoryDependencyStore",
    "upsert",
    "VersionRange",
    "parse_range",
    "is_compatible",
    "split_range",
    "is_core_version_compatible",
    "get_last_package_version",
    "dependency_key",
    "remove_dependency_core",
]
