"""
Custom exception hierarchy for etdep.

All exceptions inherit from :class:`EtdepError` and carry optional
structured metadata via the ``details`` attribute for logging and CLI
reporting.

Pure computations (version ordering, range membership) answer "not
compatible" instead of raising. Structural and data-integrity problems
(a dangling dependency reference, a ``None`` where a list is required)
always raise one of the types below.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class EtdepError(Exception):
    """Base exception for all etdep errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


class MalformedRangeError(EtdepError):
    """Raised when a version range cannot be split into exactly two bounds.

    Only the strict splitter raises this; the permissive compatibility
    check answers ``False`` for the same input.

    Args:
        message: Error description.
        range_expr: The offending range expression.
    """

    __slots__ = ("range_expr",)

    def __init__(self, message: str, *, range_expr: Optional[str] = None) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "range", range_expr)
        super().__init__(message, details)
        self.range_expr = range_expr


class MissingVersionError(EtdepError):
    """Raised when a referenced package version does not exist in the catalog.

    A dangling internal dependency reference means the catalog is
    inconsistent, so it is never skipped silently.

    Args:
        message: Error description.
        group: Group of the package.
        artifact: Artifact of the package.
        version: Version that could not be resolved.
    """

    __slots__ = ("group", "artifact", "version")

    def __init__(
        self,
        message: str,
        *,
        group: Optional[str] = None,
        artifact: Optional[str] = None,
        version: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "group", group)
        _add_if(details, "artifact", artifact)
        _add_if(details, "version", version)
        super().__init__(message, details)
        self.group = group
        self.artifact = artifact
        self.version = version


class NullInputError(EtdepError):
    """Raised when ``None`` is passed where a collection is required.

    Args:
        message: Error description.
        argument: Name of the offending argument.
    """

    __slots__ = ("argument",)

    def __init__(self, message: str, *, argument: Optional[str] = None) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "argument", argument)
        super().__init__(message, details)
        self.argument = argument


class PackageNotFoundError(EtdepError):
    """Raised when a package identity is unknown to the catalog.

    Args:
        message: Error description.
        group: Group of the package.
        artifact: Artifact of the package.
    """

    __slots__ = ("group", "artifact")

    def __init__(
        self,
        message: str,
        *,
        group: Optional[str] = None,
        artifact: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "group", group)
        _add_if(details, "artifact", artifact)
        super().__init__(message, details)
        self.group = group
        self.artifact = artifact


class ExternalVersionError(EtdepError):
    """Raised when an external dependency change carries no version."""


class CatalogError(EtdepError):
    """Raised when a catalog file cannot be read or has an invalid shape.

    Args:
        message: Error description.
        catalog_path: Path to the catalog file.
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("catalog_path", "original_error")

    def __init__(
        self,
        message: str,
        *,
        catalog_path: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", catalog_path)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )
        super().__init__(message, details)
        self.catalog_path = catalog_path
        self.original_error = original_error


class ConfigError(EtdepError):
    """Raised when configuration cannot be loaded or is invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file.
        option: Offending configuration option, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)
        super().__init__(message, details)
        self.config_path = config_path
        self.option = option
