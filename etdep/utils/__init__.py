"""
Utility helpers for etdep.

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Numeric version comparison helpers

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

from etdep.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    setup_logging,
)
from etdep.utils.console import (
    colorize_update_type,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)
from etdep.utils.version_utils import (
    compare_versions,
    determine_version_status,
    get_update_type,
    is_semantic_version,
    version_sort_key,
)

__all__ = [
    # Console
    "print_error",
    "print_table",
    "print_success",
    "print_warning",
    "get_raw_console",
    "reconfigure_console",
    "colorize_update_type",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "is_logging_configured",
    # Versions
    "compare_versions",
    "is_semantic_version",
    "version_sort_key",
    "determine_version_status",
    "get_update_type",
]
