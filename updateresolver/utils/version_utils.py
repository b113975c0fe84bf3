"""
Version change classification for updateresolver.

Used for reporting only: the resolver itself decides "newer or not" with
its comparator. Here we label an update as a ``major``, ``minor`` or
``patch`` change so hosts and the CLI can present it.
"""

from __future__ import annotations

from typing import Optional, Tuple

import semantic_version
from packaging.version import InvalidVersion, Version

Release = Tuple[int, int, int]


def get_update_type(
    current_version: Optional[str],
    target_version: Optional[str],
) -> str:
    """Classify the change from *current_version* to *target_version*.

    Versions are read as Semantic Versions first and as PEP 440 versions
    when that fails.

    Returns:
        One of ``"new"`` (no current version), ``"same"``, ``"downgrade"``,
        ``"major"``, ``"minor"``, ``"patch"``, ``"update"`` (pre-release to
        release and similar) or ``"unknown"`` (missing or unparseable).

    Examples:
        >>> get_update_type("1.4.2", "2.0.0")
        'major'
        >>> get_update_type("1.0.0-rc.1", "1.0.0")
        'update'
    """
    if target_version is None:
        return "unknown"
    if current_version is None:
        return "new"

    parsed = _parse_pair(current_version, target_version)
    if parsed is None:
        return "unknown"
    current, target, current_release, target_release = parsed

    if target == current:
        return "same"
    if target < current:
        return "downgrade"

    for label, index in (("major", 0), ("minor", 1), ("patch", 2)):
        if current_release[index] != target_release[index]:
            return label
    return "update"


def _parse_pair(current: str, target: str):
    """Parse both versions with the same grammar, or return ``None``."""
    try:
        a = semantic_version.Version.coerce(_strip_v(current))
        b = semantic_version.Version.coerce(_strip_v(target))
        a, b = a.truncate("prerelease"), b.truncate("prerelease")
        return a, b, (a.major, a.minor, a.patch), (b.major, b.minor, b.patch)
    except ValueError:
        pass

    try:
        a, b = Version(current), Version(target)
    except InvalidVersion:
        return None
    return a, b, _release(a), _release(b)


def _release(version: Version) -> Release:
    padded = tuple(version.release) + (0, 0, 0)
    return padded[0], padded[1], padded[2]


def _strip_v(value: str) -> str:
    value = value.strip()
    return value[1:] if value[:1] in ("v", "V") else value
