"""Dependency tree construction for etdep.

Walks a package version's dependency list recursively and flattens the
result into a keyed dependency map plus a child -> parent map.

Walk rules:

* External dependencies are leaves; they are never resolved.
* The core pseudo-dependency is a leaf as well and is stripped from
  every externally visible result.
* Internal dependencies are resolved to their exact catalog version and
  expanded. A reference that cannot be resolved raises
  :class:`~etdep.exceptions.MissingVersionError`.
* Each ``group:artifact`` is expanded at most once per walk, which also
  stops cycles.
* Bundles only aggregate other dependencies. They are expanded inline
  and their children are re-parented to the bundle's own parent.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple, Union

from etdep.core.catalog import PackageCatalogReader
from etdep.exceptions import MissingVersionError, NullInputError, PackageNotFoundError
from etdep.models.package import PackageDependencyRef, PackageVersion, make_key
from etdep.utils.logger import get_logger

logger = get_logger("tree_builder")

__all__ = ["DependencyTreeBuilder", "dependency_key", "remove_dependency_core"]

DependencyMap = Dict[str, PackageDependencyRef]
ParentMap = Dict[str, str]


def dependency_key(ref: PackageDependencyRef) -> str:
    """Return the ``"group:artifact"`` identity of *ref*."""
    return make_key(ref.group, ref.artifact)


def remove_dependency_core(refs: List[PackageDependencyRef]) -> List[PackageDependencyRef]:
    """Return *refs* without the core pseudo-dependency."""
    return [ref for ref in refs if not ref.is_core]


class DependencyTreeBuilder:
    """Builds flattened dependency trees from catalog data.

    Args:
        catalog: Catalog used to resolve internal references and to look
            up bundle flags.
    """

    def __init__(self, catalog: PackageCatalogReader) -> None:
        self.catalog = catalog

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create_dependency_tree(self, root: PackageVersion) -> List[PackageDependencyRef]:
        """Return every direct and transitive dependency of *root*.

        The list is de-duplicated by ``group:artifact`` and keeps
        discovery order. Bundles and the core pseudo-dependency are not
        listed.
        """
        dependency_map, _ = self.build_tree_with_parents(root.dependencies)
        return list(dependency_map.values())

    build_tree = create_dependency_tree

    def build_tree_with_parents(
        self,
        roots: Optional[List[PackageDependencyRef]],
    ) -> Tuple[DependencyMap, ParentMap]:
        """Walk *roots* and return ``(dependency_map, parent_map)``.

        ``dependency_map`` holds the roots and everything below them.
        ``parent_map`` maps each transitive dependency to the key of the
        dependency that pulled it in; roots have no entry.

        Raises:
            NullInputError: *roots* is ``None``.
            MissingVersionError: An internal reference does not resolve.
        """
        if roots is None:
            raise NullInputError("Dependency list must not be None", argument="roots")

        dependency_map: DependencyMap = {}
        for ref in roots:
            dependency_map[dependency_key(ref)] = ref

        parent_map: ParentMap = {}
        self.add_dependencies_with_parents(roots, dependency_map, parent_map)
        return self._prune(dependency_map, parent_map)

    def add_dependencies_with_parents(
        self,
        dependencies: Optional[List[PackageDependencyRef]],
        dependency_map: DependencyMap,
        parent_map: ParentMap,
    ) -> None:
        """Merge the sub-dependencies of every entry into the given maps.

        Only discovered sub-dependencies are added to *dependency_map*;
        the top-level entries themselves are the caller's to record.
        Entries are keyed, so a later discovery replaces an earlier one.

        Raises:
            NullInputError: *dependencies* is ``None``.
        """
        if dependencies is None:
            raise NullInputError("Dependency list must not be None", argument="dependencies")

        visited: Set[str] = {dependency_key(ref) for ref in dependencies}
        for ref in dependencies:
            for sub in self.search_sub_dependency(ref, parent_map, visited):
                dependency_map[dependency_key(sub)] = sub

    def search_sub_dependency(
        self,
        ref: PackageDependencyRef,
        parent_map: ParentMap,
        visited: Optional[Set[str]] = None,
    ) -> List[PackageDependencyRef]:
        """Return every transitive dependency below *ref*.

        Each discovered child is recorded in *parent_map* under its own
        key with the key of the dependency that declared it.

        Args:
            ref: Dependency to expand.
            parent_map: Child -> parent map, updated in place.
            visited: Keys already expanded in this walk. A fresh set is
                used when omitted.

        Returns:
            Discovered dependencies in depth-first order; ``[]`` for
            external and core references.

        Raises:
            MissingVersionError: *ref* is internal but its exact version
                is not in the catalog.
        """
        if ref.is_external or ref.is_core:
            return []

        if visited is None:
            visited = set()

        current_key = dependency_key(ref)
        visited.add(current_key)

        target = self.resolve_version(ref)
        found: List[PackageDependencyRef] = []

        for child in target.dependencies:
            child_key = dependency_key(child)
            if child_key in visited:
                logger.debug("Skipping already visited dependency %s", child_key)
                continue

            visited.add(child_key)
            parent_map[child_key] = current_key
            found.append(child)
            found.extend(self.search_sub_dependency(child, parent_map, visited))

        return found

    def is_bundle(self, ref: PackageDependencyRef) -> bool:
        """Return ``True`` if *ref* points at a bundle package."""
        if ref.is_external:
            return False
        package = self.catalog.find_package(ref.group, ref.artifact)
        return package is not None and package.is_bundle

    def resolve_version(self, ref: PackageDependencyRef) -> PackageVersion:
        """Resolve *ref* to the catalog version it names exactly.

        Raises:
            MissingVersionError: The package or version is not in the catalog.
        """
        package = self.catalog.find_package(ref.group, ref.artifact)
        package_version = (
            self.catalog.find_version(package, ref.version_constraint)
            if package is not None
            else None
        )
        if package_version is None:
            raise MissingVersionError(
                f"Dependency {ref.group}:{ref.artifact} references unknown "
                f"version {ref.version_constraint!r}",
                group=ref.group,
                artifact=ref.artifact,
                version=ref.version_constraint,
            )
        return package_version

    def add_dependencies_from_params(
        self,
        raw: Union[str, List[Any], None],
    ) -> List[PackageDependencyRef]:
        """Resolve user-selected dependencies, expanding bundles.

        *raw* is a JSON array (string or already decoded) whose items are
        either ``{"group", "artifact", "version"}`` objects or
        ``{"id": "group:artifact@version"}`` objects.

        Raises:
            NullInputError: *raw* is ``None``.
            json.JSONDecodeError: *raw* is a string that is not valid JSON.
            KeyError: An item lacks a required field.
            TypeError: *raw* or an item has the wrong structure.
            ValueError: An ``id`` is not in ``group:artifact@version`` form.
            PackageNotFoundError: An item names a package not in the catalog.
        """
        if raw is None:
            raise NullInputError("Dependency parameters must not be None", argument="raw")

        items = json.loads(raw) if isinstance(raw, str) else raw
        if not isinstance(items, list):
            raise TypeError(f"Expected a list of dependencies, got {type(items).__name__}")

        selected: DependencyMap = {}
        for item in items:
            ref = self._ref_from_param(item)
            if self.is_bundle(ref):
                logger.debug("Expanding bundle %s", dependency_key(ref))
                for sub in self.search_sub_dependency(ref, {}):
                    if not sub.is_core and not self.is_bundle(sub):
                        selected[dependency_key(sub)] = sub
            else:
                selected[dependency_key(ref)] = ref

        return list(selected.values())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ref_from_param(self, item: Any) -> PackageDependencyRef:
        if not isinstance(item, Mapping):
            raise TypeError(f"Expected a dependency object, got {type(item).__name__}")

        if "id" in item:
            coordinates, sep, version = str(item["id"]).rpartition("@")
            group, colon, artifact = coordinates.partition(":")
            if not sep or not colon:
                raise ValueError(f"Invalid dependency id: {item['id']!r}")
        else:
            group = item["group"]
            artifact = item["artifact"]
            version = item["version"]

        if self.catalog.find_package(group, artifact) is None:
            raise PackageNotFoundError(
                f"Package {group}:{artifact} not found",
                group=group,
                artifact=artifact,
            )
        return PackageDependencyRef(group, artifact, version)

    def _prune(
        self,
        dependency_map: DependencyMap,
        parent_map: ParentMap,
    ) -> Tuple[DependencyMap, ParentMap]:
        hidden = {
            key
            for key, ref in dependency_map.items()
            if ref.is_core or self.is_bundle(ref)
        }

        visible_deps: DependencyMap = {}
        visible_parents: ParentMap = {}
        for key, ref in dependency_map.items():
            if key in hidden:
                continue
            visible_deps[key] = ref

            parent = parent_map.get(key)
            while parent is not None and parent in hidden:
                parent = parent_map.get(parent)
            if parent is not None:
                visible_parents[key] = parent

        return visible_deps, visible_parents
