"""
Centralized constants for etdep.

This module defines immutable values used across etdep: the reserved core
artifact, tracked-dependency status codes, result field names, default
message templates and logging formats. All values are read-only.
"""

from typing import Final, Mapping

# ---------------------------------------------------------------------------
# Core platform
# ---------------------------------------------------------------------------

#: Artifact name of the platform core pseudo-dependency.
ETENDO_CORE: Final[str] = "etendo-core"

#: Group of the platform core pseudo-dependency.
ETENDO_CORE_GROUP: Final[str] = "com.etendoerp.platform"

#: Range text reported when a version declares no core bounds at all.
NO_VERSION_RANGE: Final[str] = "No version range available"

#: Strings treated as "no value" in raw parameters coming from the UI.
NULL_STRING: Final[str] = "null"

# ---------------------------------------------------------------------------
# Compatibility result fields
# ---------------------------------------------------------------------------

IS_COMPATIBLE: Final[str] = "isCompatible"
CURRENT_CORE_VERSION: Final[str] = "currentCoreVersion"
CORE_VERSION_RANGE: Final[str] = "coreVersionRange"
ERROR: Final[str] = "error"

# ---------------------------------------------------------------------------
# Diff result fields
# ---------------------------------------------------------------------------

GROUP: Final[str] = "group"
ARTIFACT: Final[str] = "artifact"
VERSION: Final[str] = "version"
VERSION_CURRENT: Final[str] = "versionCurrent"
VERSION_TARGET: Final[str] = "versionTarget"
STATUS: Final[str] = "status"
COMPATIBILITY: Final[str] = "compatibility"
DEPENDENCIES: Final[str] = "dependencies"

# ---------------------------------------------------------------------------
# Localized message codes and their default (English) templates
# ---------------------------------------------------------------------------

MSG_LATEST_VERSION_INCOMPATIBLE: Final[str] = "ETDEP_Latest_Version_Incompatible"
MSG_UPDATING_TO_LATEST: Final[str] = "ETDEP_Updating_to_Latest"
MSG_DEPENDENCY_UPDATE_INFO: Final[str] = "ETDEP_Dependency_Update_Info"
MSG_WARNING_INCOMPATIBLE_DEP: Final[str] = "ETDEP_Warning_Incompatible_Dep"
MSG_INVALID_VERSION_RANGE_FORMAT: Final[str] = "ETDEP_Invalid_Version_Range_Format"
MSG_INVALID_VERSION_FORMAT: Final[str] = "ETDEP_Invalid_Version_Format"

DEFAULT_MESSAGES: Final[Mapping[str, str]] = {
    MSG_LATEST_VERSION_INCOMPATIBLE: (
        "The current core version %s is not compatible with version %s "
        "(required core range: %s)"
    ),
    MSG_UPDATING_TO_LATEST: "Updating to latest version",
    MSG_DEPENDENCY_UPDATE_INFO: "The following dependencies will be updated:",
    MSG_WARNING_INCOMPATIBLE_DEP: (
        "Some of the selected versions are not compatible with the installed core."
    ),
    MSG_INVALID_VERSION_RANGE_FORMAT: "Invalid version range format: %s",
    MSG_INVALID_VERSION_FORMAT: "Invalid version format: %s",
}

# ---------------------------------------------------------------------------
# Configuration defaults
# ---------------------------------------------------------------------------

#: Whether diff output lists dependencies that did not change.
DEFAULT_SHOW_UNCHANGED: Final[bool] = False

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
