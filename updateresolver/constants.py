"""
Centralized constants for updateresolver.

This module defines immutable configuration values used across
updateresolver, including configuration discovery, comparator names,
manifest layout, CLI exit codes, and logging formats. All values are
intended to be treated as read-only.
"""

from typing import Final, Sequence

# ---------------------------------------------------------------------------
# Configuration discovery
# ---------------------------------------------------------------------------

#: Dedicated configuration file name (settings under ``[updateresolver]``).
CONFIG_FILE_NAME: Final[str] = "updateresolver.toml"

#: Table name used in both config file formats.
CONFIG_SECTION: Final[str] = "updateresolver"

#: Environment variable naming an explicit configuration file.
CONFIG_ENV_VAR: Final[str] = "UPDATERESOLVER_CONFIG"

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

#: Comparator used when none is configured.
DEFAULT_COMPARATOR: Final[str] = "semver"

#: Whether pre-releases are dropped by default.
DEFAULT_STABLE_ONLY: Final[bool] = False

#: Whether Python-incompatible releases are dropped by default.
DEFAULT_PYTHON_COMPATIBLE_ONLY: Final[bool] = False

#: Names accepted by :func:`updateresolver.core.comparators.get_comparator`.
COMPARATOR_NAMES: Final[Sequence[str]] = ("semver", "pep440", "lexicographic")

# ---------------------------------------------------------------------------
# Release manifests
# ---------------------------------------------------------------------------

#: Top-level key holding the release list in object-shaped manifests.
MANIFEST_RELEASES_KEY: Final[str] = "releases"

#: Maximum manifest size (in bytes) accepted by the manifest checker.
MAX_MANIFEST_SIZE: Final[int] = 5 * 1024 * 1024  # 5 MB

# ---------------------------------------------------------------------------
# CLI exit codes
# ---------------------------------------------------------------------------

EXIT_NO_UPDATE: Final[int] = 0
EXIT_ERROR: Final[int] = 1
EXIT_USAGE: Final[int] = 2
EXIT_UPDATE_AVAILABLE: Final[int] = 3
EXIT_INTERRUPTED: Final[int] = 130

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
