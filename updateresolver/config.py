"""Configuration file loader for updateresolver.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``updateresolver.toml``: settings under ``[updateresolver]`` table
- ``pyproject.toml``: settings under ``[tool.updateresolver]`` table

Discovery order:

1. Explicit path from ``--config`` or ``UPDATERESOLVER_CONFIG``
2. ``updateresolver.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.updateresolver]`` section

Configuration precedence: defaults < config file < CLI args.

Example (``updateresolver.toml``)::

    [updateresolver]
    comparator = "pep440"
    stable_only = true
    python_compatible_only = false
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from updateresolver.exceptions import ConfigError
from updateresolver.utils.logger import get_logger
from updateresolver.constants import (
    COMPARATOR_NAMES,
    CONFIG_FILE_NAME,
    CONFIG_SECTION,
    DEFAULT_COMPARATOR,
    DEFAULT_PYTHON_COMPATIBLE_ONLY,
    DEFAULT_STABLE_ONLY,
)

logger = get_logger("config")


@dataclass
class UpdateResolverConfig:
    """Parsed and validated updateresolver configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        comparator: Name of the version comparator (``semver``, ``pep440``
            or ``lexicographic``).
        stable_only: Drop pre-release candidates before comparing.
        python_compatible_only: Drop candidates whose ``requires_python``
            excludes the running interpreter.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    comparator: str = DEFAULT_COMPARATOR
    stable_only: bool = DEFAULT_STABLE_ONLY
    python_compatible_only: bool = DEFAULT_PYTHON_COMPATIBLE_ONLY

    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return the user-facing options (no ``source_path``) for debug logging."""
        return {
            "comparator": self.comparator,
            "stable_only": self.stable_only,
            "python_compatible_only": self.python_compatible_only,
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

    dedicated = cwd / CONFIG_FILE_NAME
    if dedicated.is_file():
        logger.debug("Found %s: %s", CONFIG_FILE_NAME, dedicated)
        return dedicated

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_section(pyproject_toml):
        logger.debug("Found [tool.%s] in pyproject.toml: %s", CONFIG_SECTION, pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_section(path: Path) -> bool:
    """Return True if *path* has a ``[tool.updateresolver]`` table.

    Parse errors count as "no section" so a broken pyproject.toml that is
    not ours does not stop discovery.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    return CONFIG_SECTION in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> UpdateResolverConfig:
    """Load and validate updateresolver configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`UpdateResolverConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        return UpdateResolverConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get(CONFIG_SECTION, {})
    else:
        section = raw.get(CONFIG_SECTION, {})

    if not section:
        logger.debug("Config file found but no %s section; using defaults", CONFIG_SECTION)
        return UpdateResolverConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

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


def _validate_comparator(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() in COMPARATOR_NAMES


#: option -> (expected type name, validator)
_OPTIONS: Dict[str, Tuple[str, Callable[[Any], bool]]] = {
    "comparator": (
        f"one of {', '.join(COMPARATOR_NAMES)}",
        _validate_comparator,
    ),
    "stable_only": ("a boolean", lambda v: isinstance(v, bool)),
    "python_compatible_only": ("a boolean", lambda v: isinstance(v, bool)),
}


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> UpdateResolverConfig:
    """Parse and validate the ``[updateresolver]`` table.

    Raises:
        ConfigError: Unknown keys or invalid values.
    """
    unknown = set(section) - set(_OPTIONS)
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    config = UpdateResolverConfig()
    for option, (expected, is_valid) in _OPTIONS.items():
        if option not in section:
            continue
        value = section[option]
        if not is_valid(value):
            raise ConfigError(
                f"{option} must be {expected}, got {value!r}",
                config_path=config_path,
                option=option,
            )
        if option == "comparator":
            value = value.strip().lower()
        setattr(config, option, value)

    return config
