"""Tests for rt.services.rewriters module."""

from __future__ import annotations

from pathlib import Path

import pytest

from rt.core.result import Ok
from rt.core.workspace import LineRewriter, Workspace
from rt.model.phase import Phase
from rt.model.project import COMMONS
from rt.services.rewriters import (
    changelog_insertion,
    docs_include,
    gradle_property,
    notice_header,
    repository_url,
)

RELEASE_URL = "https://repo.spring.io/libs-release"
SNAPSHOT_URL = "https://repo.spring.io/libs-snapshot"

UNRELATED_LINES = [
    "",
    "apply plugin: 'java'",
    "    <title>Reference</title>",
    "regular text",
]


def _rules() -> list[LineRewriter]:
    return [
        gradle_property("springDataCommonsVersion", "1.1.0.RELEASE"),
        repository_url(Phase.PREPARE, RELEASE_URL, SNAPSHOT_URL),
        repository_url(Phase.CLEANUP, RELEASE_URL, SNAPSHOT_URL),
        docs_include("spring-data-commons", "1.7.0.M1", "1.7.0.RC1"),
        changelog_insertion("* DATACMNS-1 - Fix."),
    ]


class TestIdentity:
    @pytest.mark.parametrize("line", UNRELATED_LINES)
    def test_unmatched_lines_pass_through(self, line: str) -> None:
        for rule in _rules():
            assert rule(line, 3) == line

    def test_notice_header_keeps_later_lines(self) -> None:
        rule = notice_header("Spring Data Commons 1.7 M1")
        for index, line in enumerate(UNRELATED_LINES, start=1):
            assert rule(line, index) == line


class TestGradleProperty:
    def test_prepare(self) -> None:
        rule = gradle_property("springDataCommonsVersion", "1.1.0.RELEASE")
        assert rule("springDataCommonsVersion=1.0.0.BUILD-SNAPSHOT", 0) == "springDataCommonsVersion=1.1.0.RELEASE"

    def test_replaces_whole_line(self) -> None:
        rule = gradle_property("springDataCommonsVersion", "1.1.0.RELEASE")
        assert rule("  springDataCommonsVersion = 1.0  # pinned", 4) == "springDataCommonsVersion=1.1.0.RELEASE"

    def test_idempotent(self) -> None:
        rule = gradle_property("springDataCommonsVersion", "1.1.0.RELEASE")
        once = rule("springDataCommonsVersion=1.0.0.BUILD-SNAPSHOT", 0)
        assert rule(once, 0) == once


class TestRepositoryUrl:
    def test_prepare_switches_to_release(self) -> None:
        rule = repository_url(Phase.PREPARE, RELEASE_URL, SNAPSHOT_URL)
        assert rule(f"    maven {{ url '{SNAPSHOT_URL}' }}", 0) == f"    maven {{ url '{RELEASE_URL}' }}"

    def test_cleanup_switches_to_snapshot(self) -> None:
        rule = repository_url(Phase.CLEANUP, RELEASE_URL, SNAPSHOT_URL)
        assert rule(f"url '{RELEASE_URL}'", 0) == f"url '{SNAPSHOT_URL}'"

    def test_target_state_is_left_alone(self) -> None:
        prepare = repository_url(Phase.PREPARE, RELEASE_URL, SNAPSHOT_URL)
        cleanup = repository_url(Phase.CLEANUP, RELEASE_URL, SNAPSHOT_URL)
        assert prepare(f"url '{RELEASE_URL}'", 0) == f"url '{RELEASE_URL}'"
        assert cleanup(f"url '{SNAPSHOT_URL}'", 0) == f"url '{SNAPSHOT_URL}'"

    def test_milestone_repository(self) -> None:
        milestone = "https://repo.spring.io/libs-milestone"
        rule = repository_url(Phase.CLEANUP, milestone, SNAPSHOT_URL)
        assert rule(f"url '{milestone}'", 0) == f"url '{SNAPSHOT_URL}'"


class TestDocsInclude:
    LINE = (
        '<xi:include href="https://raw.github.com/spring-projects/spring-data-commons/'
        '1.7.0.M1/src/docbkx/repositories.xml"/>'
    )

    def test_moves_tag(self) -> None:
        rule = docs_include("spring-data-commons", "1.7.0.M1", "1.7.0.RC1")
        assert rule(self.LINE, 10) == self.LINE.replace("1.7.0.M1", "1.7.0.RC1")

    def test_requires_include_and_repository(self) -> None:
        rule = docs_include("spring-data-commons", "1.7.0.M1", "1.7.0.RC1")
        other_repo = self.LINE.replace("spring-data-commons", "spring-data-jpa")
        not_include = "<!-- spring-data-commons 1.7.0.M1 -->"
        assert rule(other_repo, 0) == other_repo
        assert rule(not_include, 0) == not_include

    def test_idempotent(self) -> None:
        rule = docs_include("spring-data-commons", "1.7.0.M1", "1.7.0.RC1")
        once = rule(self.LINE, 0)
        assert rule(once, 0) == once


class TestChangelogInsertion:
    def test_inserts_after_anchor(self) -> None:
        rule = changelog_insertion("- fixed bug")
        assert rule("===section===", 0) == "===section===\n\n- fixed bug"
        assert rule("regular text", 1) == "regular text"


class TestNoticeHeader:
    def test_replaces_first_line_only(self) -> None:
        rule = notice_header("Spring Data Commons 1.7 M1")
        assert rule("Spring Data Commons 1.6 GA", 0) == "Spring Data Commons 1.7 M1"
        assert rule("Spring Data Commons 1.6 GA", 1) == "Spring Data Commons 1.6 GA"

    @pytest.mark.parametrize("length", [1, 100])
    def test_touches_exactly_one_line(self, tmp_path: Path, length: int) -> None:
        ws = Workspace(tmp_path)
        path = ws.file("notice.txt", COMMONS)
        path.parent.mkdir(parents=True)
        original = [f"line {i}" for i in range(length)]
        path.write_text("\n".join(original) + "\n", encoding="utf-8")

        result = ws.process_file("notice.txt", COMMONS, notice_header("Spring Data Commons 1.7 M1"))

        assert result == Ok(True)
        updated = path.read_text(encoding="utf-8").splitlines()
        assert len(updated) == length
        assert [i for i, (a, b) in enumerate(zip(original, updated, strict=True)) if a != b] == [0]

    def test_idempotent(self) -> None:
        rule = notice_header("Spring Data Commons 1.7 M1")
        once = rule("old", 0)
        assert rule(once, 0) == once
