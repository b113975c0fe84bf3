"""
Outcome and state enumerations for update resolution.

These are the values that cross the resolver's event boundary:
:class:`ResolveError` is what the resolver's ``error`` signal carries,
:class:`CheckErrorCode` is what a checker's ``error`` signal carries, and
:class:`ResolverState` tracks where a resolution cycle is.
"""

from __future__ import annotations

from enum import Enum, IntEnum


class ResolveError(IntEnum):
    """Error kinds emitted by :class:`~updateresolver.core.UpdateResolver`."""

    #: ``resolve`` was called with no checker attached.
    INVALID_CHECKER_ERROR = 1

    #: The attached checker reported a failure; see ``error_string()``.
    UNKNOWN_CHECK_ERROR = 2

    #: The comparator could not order the selected candidate.
    INVALID_VERSION_ERROR = 3


class CheckErrorCode(IntEnum):
    """Codes carried by a checker's ``error(code)`` signal."""

    UNKNOWN = 1
    NOT_FOUND = 2
    INVALID_RESPONSE = 3
    CANCELLED = 4


class ResolverState(Enum):
    """Resolver position within a resolution cycle."""

    IDLE = "idle"
    CHECKING = "checking"
