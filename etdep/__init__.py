"""
etdep: dependency management for ERP platform modules

etdep tracks installable packages (modules) and their version
dependencies, decides which versions are compatible with the running
platform core, and builds dependency trees for display and installation.

Features include:
    • Numeric version ordering and interval-notation range matching
    • Core compatibility checks with legacy fromCore/latestCore fallback
    • Best-version selection against the installed core
    • Dependency tree construction with bundle expansion
    • Dependency diffs to preview a version change
"""

from __future__ import annotations

from etdep.__version__ import __version__

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "etdep Contributors"
__license__ = "Apache-2.0"
__description__ = "Core compatibility and dependency-tree resolution for ERP modules."

__all__ = [
    "__version__",
]
