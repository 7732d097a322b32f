"""Tests for rt.git.tags and rt.git.branch."""

from __future__ import annotations

import pytest

from rt.git.branch import Branch
from rt.git.tags import Tag, VersionTags
from rt.model.iteration import GA, M1
from rt.model.project import COMMONS
from rt.model.train import TrainIteration
from rt.model.trains import CODD
from rt.model.version import ArtifactVersion


class TestTag:
    def test_version_tags(self) -> None:
        assert Tag("1.7.0.RELEASE").is_version_tag
        assert Tag("v1.7.0.M1").is_version_tag
        assert not Tag("release-candidate").is_version_tag
        assert not Tag("1.7").is_version_tag

    def test_to_artifact_version_strips_prefix(self) -> None:
        assert Tag("v1.7.0.M1").to_artifact_version() == ArtifactVersion.parse("1.7.0.M1")

    def test_to_artifact_version_rejects_other_tags(self) -> None:
        with pytest.raises(ValueError):
            Tag("latest").to_artifact_version()

    def test_create_new_keeps_format(self) -> None:
        version = ArtifactVersion.parse("1.8.0.RC1")
        assert Tag("1.7.0.RELEASE").create_new(version) == Tag("1.8.0.RC1")
        assert Tag("v1.7.0.RELEASE").create_new(version) == Tag("v1.8.0.RC1")


class TestVersionTags:
    def test_filters_and_sorts(self) -> None:
        tags = VersionTags.from_names(["1.7.0.RC1", "junk", "1.6.0.RELEASE", "", "1.7.0.M1"])
        assert [t.name for t in tags] == ["1.6.0.RELEASE", "1.7.0.M1", "1.7.0.RC1"]
        assert len(tags) == 3
        assert Tag("1.7.0.M1") in tags
        assert Tag("junk") not in tags

    def test_latest(self) -> None:
        tags = VersionTags.from_names(["1.7.0.M1", "1.6.0.RELEASE"])
        assert tags.latest() == Tag("1.7.0.M1")

    def test_latest_without_tags(self) -> None:
        with pytest.raises(ValueError, match="no version tags"):
            VersionTags.from_names(["junk"]).latest()

    def test_create_tag_for_module(self) -> None:
        tags = VersionTags.from_names(["v1.6.0.RELEASE"])
        assert tags.create_tag(TrainIteration(CODD, GA).module(COMMONS)) == Tag("v1.7.0.RELEASE")
        assert tags.create_tag(TrainIteration(CODD, M1).module(COMMONS)) == Tag("v1.7.0.M1")


class TestBranch:
    def test_from_name_keeps_last_segment(self) -> None:
        assert Branch.from_name("origin/issue/DATACMNS-123") == Branch("DATACMNS-123")
        assert Branch.from_name(" issue/DATACMNS-1 ") == Branch("DATACMNS-1")
        assert Branch.from_name("main") == Branch("main")

    def test_str(self) -> None:
        assert str(Branch("DATACMNS-1")) == "DATACMNS-1"
