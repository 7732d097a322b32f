"""Tests for rt.model.version module."""

from __future__ import annotations

import pytest

from rt.model.version import ArtifactVersion, Version


class TestVersion:
    def test_parse(self) -> None:
        assert Version.parse("1.7") == Version(1, 7)
        assert Version.parse(" 2.0.3 ") == Version(2, 0, 3)
        assert Version.parse("1.2.3.4") == Version(1, 2, 3, 4)

    @pytest.mark.parametrize("source", ["", "1.x", "1.2.3.4.5", "-1.0", "1..2"])
    def test_parse_invalid(self, source: str) -> None:
        with pytest.raises(ValueError):
            Version.parse(source)

    def test_str_omits_zero_bugfix(self) -> None:
        assert str(Version(1, 7)) == "1.7"
        assert str(Version(1, 7, 2)) == "1.7.2"
        assert str(Version(1, 7, 0, 3)) == "1.7.0.3"

    def test_equal_with_implicit_zeros(self) -> None:
        assert Version(1, 7) == Version(1, 7, 0, 0)

    def test_ordering(self) -> None:
        assert Version(1, 7) < Version(1, 7, 1) < Version(1, 8) < Version(2, 0)

    def test_next(self) -> None:
        v = Version(1, 7, 3)
        assert v.next_major() == Version(2)
        assert v.next_minor() == Version(1, 8)
        assert v.next_bugfix() == Version(1, 7, 4)

    def test_to_major_minor_bugfix(self) -> None:
        assert Version(1, 7).to_major_minor_bugfix() == "1.7.0"


class TestArtifactVersion:
    def test_parse_and_str(self) -> None:
        version = ArtifactVersion.parse("1.4.5.RELEASE")
        assert version == ArtifactVersion(Version(1, 4, 5), "RELEASE")
        assert str(version) == "1.4.5.RELEASE"

    def test_parse_snapshot(self) -> None:
        version = ArtifactVersion.parse("1.8.0.BUILD-SNAPSHOT")
        assert version.is_snapshot
        assert version.version == Version(1, 8)

    @pytest.mark.parametrize("source", ["1.0", "RELEASE", "1.0.0.FINAL", "1.0.0.M"])
    def test_parse_invalid(self, source: str) -> None:
        with pytest.raises(ValueError):
            ArtifactVersion.parse(source)

    def test_str_always_has_three_digits(self) -> None:
        assert str(ArtifactVersion(Version(1, 7), "M1")) == "1.7.0.M1"

    def test_flags(self) -> None:
        assert ArtifactVersion(Version(1, 7), "M1").is_milestone
        assert ArtifactVersion(Version(1, 7), "RC2").is_milestone
        assert ArtifactVersion(Version(1, 7)).is_release

    def test_ordering(self) -> None:
        versions = [
            ArtifactVersion.parse("1.7.0.RELEASE"),
            ArtifactVersion.parse("1.7.0.RC1"),
            ArtifactVersion.parse("1.6.2.RELEASE"),
            ArtifactVersion.parse("1.7.0.M2"),
            ArtifactVersion.parse("1.7.0.BUILD-SNAPSHOT"),
            ArtifactVersion.parse("1.7.0.M1"),
        ]
        assert [str(v) for v in sorted(versions)] == [
            "1.6.2.RELEASE",
            "1.7.0.BUILD-SNAPSHOT",
            "1.7.0.M1",
            "1.7.0.M2",
            "1.7.0.RC1",
            "1.7.0.RELEASE",
        ]

    def test_next_development_version(self) -> None:
        assert str(ArtifactVersion.parse("1.7.0.RELEASE").next_development_version()) == "1.8.0.BUILD-SNAPSHOT"
        assert str(ArtifactVersion.parse("1.7.1.RELEASE").next_development_version()) == "1.7.2.BUILD-SNAPSHOT"
        assert str(ArtifactVersion.parse("1.7.0.M1").next_development_version()) == "1.7.0.BUILD-SNAPSHOT"

        snapshot = ArtifactVersion.parse("1.7.0.BUILD-SNAPSHOT")
        assert snapshot.next_development_version() is snapshot

    def test_next_bugfix_version(self) -> None:
        assert str(ArtifactVersion.parse("1.7.0.RELEASE").next_bugfix_version()) == "1.7.1.BUILD-SNAPSHOT"

    def test_to_short_string(self) -> None:
        assert ArtifactVersion.parse("1.7.0.M1").to_short_string() == "1.7"
        assert ArtifactVersion.parse("1.7.2.RELEASE").to_short_string() == "1.7.2"
