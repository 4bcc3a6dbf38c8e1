"""Configuration file loader for etdep.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``etdep.toml``: settings under ``[etdep]`` table
- ``pyproject.toml``: settings under ``[tool.etdep]`` table

Discovery order:

1. Explicit path from ``--config`` or ``ETDEP_CONFIG``
2. ``etdep.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.etdep]`` section

Configuration precedence: defaults < config file < environment < CLI args.

Example (``etdep.toml``)::

    [etdep]
    catalog = "catalog.toml"
    core_version = "24.1.0"
    show_unchanged = true
"""

from __future__ import annotations

import os
import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from etdep.exceptions import ConfigError
from etdep.utils.logger import get_logger
from etdep.constants import DEFAULT_SHOW_UNCHANGED

logger = get_logger("config")

#: Environment variable overriding the installed core version.
CORE_VERSION_ENV = "ETDEP_CORE_VERSION"


@dataclass
class EtdepConfig:
    """Parsed and validated etdep configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        catalog_path: Catalog file used when ``--catalog`` is not given.
            Relative paths are resolved against the config file.
        core_version: Installed core version, overriding the catalog's.
        show_unchanged: List unchanged dependencies in diff output.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    catalog_path: Optional[Path] = None
    core_version: Optional[str] = None
    show_unchanged: bool = DEFAULT_SHOW_UNCHANGED

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging.

        Excludes ``source_path`` metadata.
        """
        return {
            "catalog": str(self.catalog_path) if self.catalog_path else None,
            "core_version": self.core_version,
            "show_unchanged": self.show_unchanged,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    etdep_toml = cwd / "etdep.toml"
    if etdep_toml.is_file():
        logger.debug("Found etdep.toml: %s", etdep_toml)
        return etdep_toml

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_etdep_section(pyproject_toml):
        logger.debug("Found [tool.etdep] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_etdep_section(path: Path) -> bool:
    """Check if pyproject.toml contains a ``[tool.etdep]`` section.

    Parse errors count as "no section" so a broken unrelated
    pyproject.toml does not block discovery.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    return "etdep" in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> EtdepConfig:
    """Load and validate etdep configuration.

    Discovers the config file (or uses the provided path), parses and
    validates it, then applies environment overrides.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`EtdepConfig`.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        config = EtdepConfig()
    else:
        logger.info("Loading configuration from %s", resolved)
        raw = _read_toml(resolved)

        if resolved.name == "pyproject.toml":
            section = raw.get("tool", {}).get("etdep", {})
        else:
            section = raw.get("etdep", {})

        config = _parse_section(section, config_path=str(resolved))
        config.source_path = resolved

        if config.catalog_path is not None and not config.catalog_path.is_absolute():
            config.catalog_path = resolved.parent / config.catalog_path

    env_core = os.environ.get(CORE_VERSION_ENV)
    if env_core:
        logger.debug("Core version overridden by %s=%s", CORE_VERSION_ENV, env_core)
        config.core_version = env_core

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> EtdepConfig:
    """Parse and validate the ``[etdep]`` or ``[tool.etdep]`` table.

    Raises:
        ConfigError: Unknown keys or incorrect types.
    """
    config = EtdepConfig()

    known_top = {"catalog", "core_version", "show_unchanged"}

    unknown_top = set(section.keys()) - known_top
    if unknown_top:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown_top))}",
            config_path=config_path,
        )

    if "catalog" in section:
        config.catalog_path = Path(_require_type(section, "catalog", str, config_path))

    if "core_version" in section:
        config.core_version = _require_type(section, "core_version", str, config_path)

    if "show_unchanged" in section:
        config.show_unchanged = _require_type(section, "show_unchanged", bool, config_path)

    return config


def _require_type(section: Dict[str, Any], option: str, expected: type, config_path: str) -> Any:
    val = section[option]
    if not isinstance(val, expected):
        raise ConfigError(
            f"{option} must be of type {expected.__name__}, got {type(val).__name__}",
            config_path=config_path,
            option=option,
        )
    return val
