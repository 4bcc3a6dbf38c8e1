"""Tracked-dependency storage for etdep.

Tracked :class:`~etdep.models.dependency.Dependency` records are the only
mutable state this library touches. Storage is abstracted behind the
:class:`DependencyStore` protocol; :class:`InMemoryDependencyStore` backs
the CLI and the test-suite.

Every update-or-create goes through :func:`upsert`, which serialises the
check-then-act sequence on a single process-wide lock::

    store = InMemoryDependencyStore()
    dep = upsert(store, "com.x", "a", lambda existing: existing or Dependency("com.x", "a", "1.0.0"))
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, List, Optional, Protocol, runtime_checkable

from etdep.models.dependency import Dependency
from etdep.models.package import make_key
from etdep.utils.logger import get_logger

logger = get_logger("data_store")

# Public API
__all__ = ["DependencyStore", "InMemoryDependencyStore", "upsert"]

_UPSERT_LOCK = threading.Lock()


@runtime_checkable
class DependencyStore(Protocol):
    """Persistence for tracked dependencies."""

    def find_tracked(
        self,
        group: str,
        artifact: str,
        external: Optional[bool] = None,
    ) -> Optional[Dependency]:
        ...

    def save(self, dependency: Dependency) -> None:
        ...

    def flush(self) -> None:
        ...


class InMemoryDependencyStore:
    """Dictionary-backed :class:`DependencyStore`.

    Saved records become visible to :meth:`find_tracked` immediately;
    :meth:`flush` only marks the pending batch as written.

    Args:
        dependencies: Records to seed the store with.
    """

    def __init__(self, dependencies: Optional[List[Dependency]] = None) -> None:
        self._records: Dict[str, Dependency] = {}
        self._pending: List[str] = []
        self.flush_count = 0

        for dep in dependencies or []:
            self._records[dep.key] = dep

    def find_tracked(
        self,
        group: str,
        artifact: str,
        external: Optional[bool] = None,
    ) -> Optional[Dependency]:
        """Return the tracked record for ``group:artifact``.

        When *external* is given, a record whose ``is_external`` flag
        differs is treated as absent.
        """
        dep = self._records.get(make_key(group, artifact))
        if dep is None:
            return None
        if external is not None and dep.is_external != external:
            return None
        return dep

    def save(self, dependency: Dependency) -> None:
        self._records[dependency.key] = dependency
        if dependency.key not in self._pending:
            self._pending.append(dependency.key)

    def flush(self) -> None:
        logger.debug("Flushing %d tracked dependencies", len(self._pending))
        self._pending.clear()
        self.flush_count += 1

    @property
    def pending(self) -> List[str]:
        """Keys saved since the last :meth:`flush`."""
        return list(self._pending)

    def all(self) -> List[Dependency]:
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)


def upsert(
    store: DependencyStore,
    group: str,
    artifact: str,
    apply: Callable[[Optional[Dependency]], Dependency],
) -> Dependency:
    """Update or create the tracked record for ``group:artifact``.

    *apply* receives the existing record (or ``None``) and returns the
    record to save. Lookup, mutation and save happen under one lock, so
    concurrent callers for the same coordinates never create duplicates.
    """
    with _UPSERT_LOCK:
        existing = store.find_tracked(group, artifact)
        dependency = apply(existing)
        store.save(dependency)
        return dependency
