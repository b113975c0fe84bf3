"""
Release candidate data model for updateresolver.

An :class:`Update` describes one release discovered by a checker. Only
``version`` means anything to the resolver; everything else is carried
through untouched for the host application.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from updateresolver.exceptions import InvalidVersionError

_KNOWN_KEYS = ("version", "download_url", "release_notes", "requires_python")

# Alternate spellings seen in release feeds
_KEY_ALIASES = {
    "url": "download_url",
    "notes": "release_notes",
    "python_requires": "requires_python",
}


@dataclass(frozen=True)
class Update:
    """
    A candidate release.

    Instances are immutable: filters narrow or reorder lists of updates but
    never modify the updates themselves.

    Attributes:
        version: Version identifier, opaque to everything but the comparator.
        download_url: Where the release can be fetched from.
        release_notes: Human-readable notes or a link to them.
        requires_python: PEP 440 specifier for supported interpreters.
        metadata: Any other fields the checker chose to keep.
    """

    version: str
    download_url: Optional[str] = None
    release_notes: Optional[str] = None
    requires_python: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        """Reject empty or non-string version identifiers."""
        if not isinstance(self.version, str) or not self.version.strip():
            raise InvalidVersionError(
                "Update version must be a non-empty string",
                version=repr(self.version),
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Update":
        """
        Build an update from a mapping such as a manifest entry.

        Recognised keys (and the aliases ``url``, ``notes`` and
        ``python_requires``) become attributes; all other keys are kept in
        :attr:`metadata`.

        Args:
            data: Mapping with at least a ``version`` key.

        Returns:
            A new :class:`Update`.

        Raises:
            InvalidVersionError: If ``version`` is missing or empty.
            TypeError: If *data* is not a mapping.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Expected a mapping, got {type(data).__name__}")

        known: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in data.items():
            key = _KEY_ALIASES.get(key, key)
            if key in _KNOWN_KEYS:
                known[key] = value
            else:
                extra[key] = value

        version = known.pop("version", None)
        if version is not None and not isinstance(version, str):
            version = str(version)

        return cls(version=version or "", metadata=extra, **known)

    def to_dict(self) -> Dict[str, Any]:
        """
        Return a JSON-friendly representation.

        ``None`` attributes are omitted; metadata is merged at the top level.
        """
        result: Dict[str, Any] = dict(self.metadata)
        result["version"] = self.version
        for key in _KNOWN_KEYS[1:]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result

    def __str__(self) -> str:
        return self.version
