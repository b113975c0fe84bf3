from __future__ import annotations

import pytest

from updateresolver.core.comparators import (
    LexicographicVersionComparator,
    Pep440VersionComparator,
    SemVerVersionComparator,
    get_comparator,
)
from updateresolver.exceptions import ConfigError, InvalidVersionError


@pytest.mark.unit
class TestSemVerVersionComparator:
    """Tests for the default Semantic Versioning comparator."""

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ("1.3.0", "1.2.0", 1),
            ("1.2.0", "1.3.0", -1),
            ("1.2.0", "1.2.0", 0),
            ("1.10.0", "1.9.0", 1),
            ("1.0.0", "1.0.0-rc.1", 1),
            ("1.0.0-rc.2", "1.0.0-rc.10", -1),
            ("1.0.0-beta", "1.0.0-alpha", 1),
        ],
    )
    def test_ordering(self, a: str, b: str, expected: int) -> None:
        assert SemVerVersionComparator().compare(a, b) == expected

    def test_build_metadata_is_ignored(self) -> None:
        assert SemVerVersionComparator().compare("1.0.0+build.2", "1.0.0+build.1") == 0

    def test_partial_versions_are_coerced(self) -> None:
        comparator = SemVerVersionComparator()

        assert comparator.compare("1.2", "1.2.0") == 0
        assert comparator.compare("2", "1.9.9") == 1

    def test_leading_v_is_accepted(self) -> None:
        assert SemVerVersionComparator().compare("v2.0.0", "1.0.0") == 1

    @pytest.mark.parametrize("value", ["", "latest", "..."])
    def test_invalid_version(self, value: str) -> None:
        with pytest.raises(InvalidVersionError) as exc_info:
            SemVerVersionComparator().compare(value, "1.0.0")

        assert exc_info.value.comparator == "semver"

    def test_is_newer(self) -> None:
        comparator = SemVerVersionComparator()

        assert comparator.is_newer("1.3.0", "1.2.0")
        assert not comparator.is_newer("1.2.0", "1.2.0")


@pytest.mark.unit
class TestPep440VersionComparator:
    """Tests for the PEP 440 comparator."""

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ("1.0", "1.0rc1", 1),
            ("1.0.post1", "1.0", 1),
            ("1.0.dev1", "1.0a1", -1),
            ("1.0", "1.0.0", 0),
        ],
    )
    def test_ordering(self, a: str, b: str, expected: int) -> None:
        assert Pep440VersionComparator().compare(a, b) == expected

    def test_invalid_version(self) -> None:
        with pytest.raises(InvalidVersionError):
            Pep440VersionComparator().compare("1.0", "not-a-version")


@pytest.mark.unit
class TestLexicographicVersionComparator:
    """Tests for plain string ordering."""

    def test_ordering(self) -> None:
        comparator = LexicographicVersionComparator()

        assert comparator.compare("20240601", "20240530") == 1
        assert comparator.compare("build-10", "build-9") == -1
        assert comparator.compare("x", "x") == 0


@pytest.mark.unit
class TestGetComparator:
    """Tests for comparator lookup by name."""

    @pytest.mark.parametrize(
        "name, cls",
        [
            ("semver", SemVerVersionComparator),
            ("PEP440", Pep440VersionComparator),
            (" lexicographic ", LexicographicVersionComparator),
        ],
    )
    def test_known_names(self, name: str, cls: type) -> None:
        assert isinstance(get_comparator(name), cls)

    def test_returns_new_instances(self) -> None:
        assert get_comparator("semver") is not get_comparator("semver")

    def test_unknown_name(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            get_comparator("calver")

        assert exc_info.value.option == "comparator"
