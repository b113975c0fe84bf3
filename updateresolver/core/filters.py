"""Update filters: narrowing a checker's candidate list on the client side.

The checker's source may already have filtered candidates (for example by
inspecting the request). Filters refine the list further with information
only the running system has: whether pre-releases are acceptable, which
interpreter is running, and so on.

A filter is a pure function from a list of :class:`Update` to a new list.
It must not mutate its input, and the stock filters here keep the
relative order of the candidates they retain.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

import semantic_version
from packaging.version import InvalidVersion, Version
from packaging.specifiers import InvalidSpecifier, SpecifierSet

from updateresolver.models import Update
from updateresolver.utils.logger import get_logger

logger = get_logger("core.filters")


class UpdateFilter(ABC):
    """A step in the resolver's filter chain."""

    @abstractmethod
    def filter(self, updates: Sequence[Update]) -> List[Update]:
        """Return the candidates that remain eligible, in priority order."""

    def __call__(self, updates: Sequence[Update]) -> List[Update]:
        return self.filter(updates)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class FunctionFilter(UpdateFilter):
    """Adapts a plain callable into an :class:`UpdateFilter`.

    Example::

        >>> signed_only = FunctionFilter(
        ...     lambda updates: [u for u in updates if u.metadata.get("signed")]
        ... )
    """

    def __init__(
        self,
        func: Callable[[List[Update]], Sequence[Update]],
        name: Optional[str] = None,
    ) -> None:
        self.func = func
        self.name = name or getattr(func, "__name__", "filter")

    def filter(self, updates: Sequence[Update]) -> List[Update]:
        return list(self.func(list(updates)))

    def __repr__(self) -> str:
        return f"FunctionFilter(name={self.name!r})"


class StableReleaseFilter(UpdateFilter):
    """Drops pre-release candidates.

    A version is a pre-release if PEP 440 says so (``2.0rc1``, ``2.0.dev3``)
    or, for versions PEP 440 cannot parse, if it carries a SemVer
    pre-release tag (``2.0.0-beta.1+exp``). Versions neither grammar
    understands are kept; the comparator has the last word on them.
    """

    def filter(self, updates: Sequence[Update]) -> List[Update]:
        kept = [u for u in updates if not is_prerelease(u.version)]
        if len(kept) != len(updates):
            logger.debug(
                "StableReleaseFilter dropped %d pre-release(s)",
                len(updates) - len(kept),
            )
        return kept


class PythonCompatibilityFilter(UpdateFilter):
    """Drops candidates whose ``requires_python`` excludes the interpreter.

    Candidates without a ``requires_python`` specifier, or with one that
    cannot be parsed, are kept; this mirrors pip's permissive behaviour.

    Args:
        python_version: Dot-separated version to test against. Defaults to
            the running interpreter.
    """

    def __init__(self, python_version: Optional[str] = None) -> None:
        self.python_version = python_version or current_python_version()

    def filter(self, updates: Sequence[Update]) -> List[Update]:
        return [u for u in updates if self.is_compatible(u)]

    def is_compatible(self, update: Update) -> bool:
        if not update.requires_python:
            return True
        try:
            compatible = self.python_version in SpecifierSet(update.requires_python)
        except InvalidSpecifier:
            logger.debug(
                "Ignoring malformed requires_python %r on %s",
                update.requires_python,
                update.version,
            )
            return True
        if not compatible:
            logger.debug(
                "%s requires Python %s; running %s",
                update.version,
                update.requires_python,
                self.python_version,
            )
        return compatible

    def __repr__(self) -> str:
        return f"PythonCompatibilityFilter(python_version={self.python_version!r})"


def is_prerelease(version: str) -> bool:
    """Return True if *version* is a PEP 440 or SemVer pre-release."""
    try:
        return Version(version).is_prerelease
    except InvalidVersion:
        pass

    text = version[1:] if version[:1] in ("v", "V") else version
    try:
        return bool(semantic_version.Version(text).prerelease)
    except ValueError:
        return False


def current_python_version() -> str:
    """Return the running interpreter's version as ``"major.minor.micro"``."""
    return (
        f"{sys.version_info.major}."
        f"{sys.version_info.minor}."
        f"{sys.version_info.micro}"
    )
