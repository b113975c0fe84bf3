"""
Core functionality exports for updateresolver.

Importing from here keeps user-facing imports clean and stable:

    from updateresolver.core import UpdateResolver, StaticUpdateChecker
"""

from __future__ import annotations

from updateresolver.core.checker import (
    AsyncUpdateChecker,
    ManifestUpdateChecker,
    StaticUpdateChecker,
    UpdateChecker,
)
from updateresolver.core.comparators import (
    LexicographicVersionComparator,
    Pep440VersionComparator,
    SemVerVersionComparator,
    VersionComparator,
    get_comparator,
)
from updateresolver.core.filters import (
    FunctionFilter,
    PythonCompatibilityFilter,
    StableReleaseFilter,
    UpdateFilter,
)
from updateresolver.core.resolver import UpdateResolver, distribution_version_provider

__all__ = [
    "UpdateResolver",
    "distribution_version_provider",
    # Checkers
    "UpdateChecker",
    "AsyncUpdateChecker",
    "StaticUpdateChecker",
    "ManifestUpdateChecker",
    # Filters
    "UpdateFilter",
    "FunctionFilter",
    "StableReleaseFilter",
    "PythonCompatibilityFilter",
    # Comparators
    "VersionComparator",
    "SemVerVersionComparator",
    "Pep440VersionComparator",
    "LexicographicVersionComparator",
    "get_comparator",
]
