"""
Custom exception hierarchy for updateresolver.

This module defines structured exception types used across updateresolver.
All exceptions inherit from :class:`UpdateResolverError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.

Note that resolution outcomes (no checker attached, failed check) are not
raised on the event path; they are reported through the resolver's
``error`` signal. Exceptions here cover configuration, checker
implementations, and version parsing.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class UpdateResolverError(Exception):
    """Base exception for all updateresolver errors.

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


class ConfigError(UpdateResolverError):
    """Raised when configuration cannot be loaded or is invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file involved.
        option: Name of the offending option, if any.
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


class CheckerError(UpdateResolverError):
    """Raised when an update checker is used incorrectly.

    For example, calling ``check()`` on an asynchronous checker outside of
    a running event loop.
    """


class CheckError(UpdateResolverError):
    """Raised inside a checker's fetch to report a failed check.

    Asynchronous checkers translate this into their ``error(code)`` signal;
    the message becomes the checker's ``error_string()``.

    Args:
        message: Error description.
        code: Numeric error code (see
            :class:`~updateresolver.models.outcome.CheckErrorCode`).
            Defaults to ``1`` (unknown).
        source: Where the check was directed (path, URL, label).
    """

    __slots__ = ("code", "source")

    def __init__(
        self,
        message: str,
        *,
        code: int = 1,
        source: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {"code": int(code)}
        _add_if(details, "source", source)

        super().__init__(message, details)

        self.code = int(code)
        self.source = source


class ManifestError(CheckError):
    """Raised when a release manifest is missing or malformed.

    Args:
        message: Error description.
        path: Path to the manifest file.
        code: Numeric error code forwarded to :class:`CheckError`.
    """

    __slots__ = ("path",)

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        code: int = 3,
    ) -> None:
        super().__init__(message, code=code, source=path)
        self.path = path


class InvalidVersionError(UpdateResolverError, ValueError):
    """Raised when a comparator cannot interpret a version identifier.

    Args:
        message: Error description.
        version: The offending version string.
        comparator: Name of the comparator that rejected it.
    """

    __slots__ = ("version", "comparator")

    def __init__(
        self,
        message: str,
        *,
        version: Optional[str] = None,
        comparator: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "version", version)
        _add_if(details, "comparator", comparator)

        super().__init__(message, details)

        self.version = version
        self.comparator = comparator


class ResolveFailedError(UpdateResolverError):
    """Raised by :meth:`UpdateResolver.resolve_async` when a cycle fails.

    Args:
        message: Error description.
        kind: The :class:`~updateresolver.models.outcome.ResolveError` kind
            the resolver emitted.
        error_string: The resolver's error detail at the time of failure.
    """

    __slots__ = ("kind", "error_string")

    def __init__(
        self,
        message: str,
        *,
        kind: Any,
        error_string: str = "",
    ) -> None:
        details: MutableMapping[str, Any] = {"kind": getattr(kind, "name", kind)}
        if error_string:
            details["detail"] = error_string

        super().__init__(message, details)

        self.kind = kind
        self.error_string = error_string
