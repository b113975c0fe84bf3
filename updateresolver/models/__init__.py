"""
Unified data model exports for updateresolver.

Example:
    >>> from updateresolver.models import Update, ResolveError
"""

from __future__ import annotations

from updateresolver.models.update import Update
from updateresolver.models.outcome import CheckErrorCode, ResolveError, ResolverState

__all__ = [
    "Update",
    "ResolveError",
    "CheckErrorCode",
    "ResolverState",
]
