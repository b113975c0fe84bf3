"""
Utility helpers for updateresolver.

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Signal (observer list) primitive
- Version change classification

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

from updateresolver.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    setup_logging,
)
from updateresolver.utils.console import (
    colorize_update_type,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)
from updateresolver.utils.signals import Signal
from updateresolver.utils.version_utils import get_update_type

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
    # Signals
    "Signal",
    # Version utilities
    "get_update_type",
]
