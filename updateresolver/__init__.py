"""
updateresolver: decide whether a newer release of an application exists.

An :class:`UpdateResolver` asks a pluggable checker for candidate releases,
narrows them through an ordered chain of filters, and compares the
preferred candidate against the running version with a pluggable
comparator (Semantic Versioning by default).

Example:
    >>> from updateresolver import UpdateResolver, StaticUpdateChecker
    >>> resolver = UpdateResolver(StaticUpdateChecker(["2.0.0", "1.5.0"]))
    >>> update = await resolver.resolve_async("1.0.0")
    >>> update.version
    '2.0.0'
"""

from __future__ import annotations

from updateresolver.__version__ import __version__
from updateresolver.core import (
    AsyncUpdateChecker,
    FunctionFilter,
    LexicographicVersionComparator,
    ManifestUpdateChecker,
    Pep440VersionComparator,
    PythonCompatibilityFilter,
    SemVerVersionComparator,
    StableReleaseFilter,
    StaticUpdateChecker,
    UpdateChecker,
    UpdateFilter,
    UpdateResolver,
    VersionComparator,
    distribution_version_provider,
    get_comparator,
)
from updateresolver.models import CheckErrorCode, ResolveError, ResolverState, Update

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__license__ = "Apache-2.0"
__description__ = "Pluggable update resolution: check, filter, compare."

__all__ = [
    "__version__",
    "UpdateResolver",
    "distribution_version_provider",
    "Update",
    "ResolveError",
    "CheckErrorCode",
    "ResolverState",
    "UpdateChecker",
    "AsyncUpdateChecker",
    "StaticUpdateChecker",
    "ManifestUpdateChecker",
    "UpdateFilter",
    "FunctionFilter",
    "StableReleaseFilter",
    "PythonCompatibilityFilter",
    "VersionComparator",
    "SemVerVersionComparator",
    "Pep440VersionComparator",
    "LexicographicVersionComparator",
    "get_comparator",
]
