"""Version comparators: three-way ordering of version identifiers.

The resolver treats version strings as opaque; a comparator decides which
of two identifiers is newer. ``compare(a, b)`` returns ``1`` when *a* is
newer, ``0`` when they are equivalent and ``-1`` when *a* is older.

Three strategies are provided:

* :class:`SemVerVersionComparator` (the default): Semantic Versioning 2.0
  precedence via ``semantic_version``. Partial versions such as ``"1.2"``
  are coerced to ``1.2.0`` and a leading ``v`` is accepted.
* :class:`Pep440VersionComparator`: Python packaging rules via
  ``packaging`` (``1.0rc1 < 1.0 < 1.0.post1``).
* :class:`LexicographicVersionComparator`: plain string ordering, for
  date stamps or zero-padded build numbers.

Example::

    >>> SemVerVersionComparator().compare("1.3.0", "1.2.9")
    1
    >>> get_comparator("pep440").compare("1.0rc1", "1.0")
    -1
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Type

import semantic_version
from packaging.version import InvalidVersion, Version

from updateresolver.constants import COMPARATOR_NAMES
from updateresolver.exceptions import ConfigError, InvalidVersionError


def _sign(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


class VersionComparator(ABC):
    """Three-way comparison of two version identifiers."""

    #: Short name used in configuration files and on the command line.
    name: str = ""

    @abstractmethod
    def compare(self, a: str, b: str) -> int:
        """Return ``1`` if *a* is newer than *b*, ``0`` if equal, else ``-1``.

        Raises:
            InvalidVersionError: Either identifier cannot be interpreted.
        """

    def is_newer(self, a: str, b: str) -> bool:
        """Return True if *a* is strictly newer than *b*."""
        return self.compare(a, b) > 0

    def dispose(self) -> None:
        """Release resources held by the comparator. No-op by default."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class SemVerVersionComparator(VersionComparator):
    """Semantic Versioning precedence.

    Build metadata (``+build.5``) never affects ordering; pre-releases sort
    before their release (``1.0.0-rc.1 < 1.0.0``).
    """

    name = "semver"

    def compare(self, a: str, b: str) -> int:
        return _sign(self.parse(a), self.parse(b))

    def parse(self, value: str) -> semantic_version.Version:
        """Parse *value* leniently and strip build metadata.

        Raises:
            InvalidVersionError: *value* is not a semantic version.
        """
        text = (value or "").strip()
        if text[:1] in ("v", "V"):
            text = text[1:]

        try:
            parsed = semantic_version.Version(text)
        except ValueError:
            try:
                parsed = semantic_version.Version.coerce(text)
            except ValueError as exc:
                raise InvalidVersionError(
                    f"Not a semantic version: {value!r}",
                    version=value,
                    comparator=self.name,
                ) from exc

        return semantic_version.Version(
            major=parsed.major,
            minor=parsed.minor,
            patch=parsed.patch,
            prerelease=parsed.prerelease,
        )


class Pep440VersionComparator(VersionComparator):
    """PEP 440 ordering, as used by pip and PyPI."""

    name = "pep440"

    def compare(self, a: str, b: str) -> int:
        return _sign(self.parse(a), self.parse(b))

    def parse(self, value: str) -> Version:
        try:
            return Version(value)
        except (InvalidVersion, TypeError) as exc:
            raise InvalidVersionError(
                f"Not a PEP 440 version: {value!r}",
                version=value,
                comparator=self.name,
            ) from exc


class LexicographicVersionComparator(VersionComparator):
    """Plain string ordering."""

    name = "lexicographic"

    def compare(self, a: str, b: str) -> int:
        return _sign(a, b)


_COMPARATORS: Dict[str, Type[VersionComparator]] = {
    cls.name: cls
    for cls in (
        SemVerVersionComparator,
        Pep440VersionComparator,
        LexicographicVersionComparator,
    )
}


def get_comparator(name: str) -> VersionComparator:
    """Return a new comparator for *name* (case-insensitive).

    Raises:
        ConfigError: *name* is not one of ``semver``, ``pep440`` or
            ``lexicographic``.
    """
    try:
        cls = _COMPARATORS[name.strip().lower()]
    except (KeyError, AttributeError):
        raise ConfigError(
            f"Unknown comparator {name!r}; expected one of "
            f"{', '.join(COMPARATOR_NAMES)}",
            option="comparator",
        ) from None
    return cls()
