"""
Dependency tree result model for etdep.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from etdep.models.package import PackageDependencyRef


@dataclass
class DependencyTree:
    """Flattened dependency tree of a root package version.

    Attributes:
        dependencies: Every discovered dependency, in discovery order,
            without duplicates and without the core pseudo-dependency.
        parents: Maps a dependency key to the key of the dependency that
            pulled it in. Direct dependencies of the root have no entry.
    """

    dependencies: List[PackageDependencyRef] = field(default_factory=list)
    parents: Dict[str, str] = field(default_factory=dict)

    def get_parent(self, key: str) -> Optional[str]:
        return self.parents.get(key)

    def __len__(self) -> int:
        return len(self.dependencies)

    def to_json(self) -> Dict[str, Any]:
        """Return ``{"dependencies": [...], "parents": {...}}``."""
        return {
            "dependencies": [dep.to_json() for dep in self.dependencies],
            "parents": dict(self.parents),
        }
