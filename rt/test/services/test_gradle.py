"""Tests for rt.services.gradle module."""

from __future__ import annotations

from pathlib import Path

import pytest

from rt.core.result import Err, Ok
from rt.core.workspace import Workspace
from rt.model.iteration import GA, M1
from rt.model.phase import Phase
from rt.model.project import BUILD, JPA, MONGO_DB, SOLR, Project
from rt.model.train import TrainIteration
from rt.model.trains import CODD
from rt.output.console import MockConsole
from rt.output.logger import ReleaseLogger
from rt.services.gradle import GradleOperations, release_repository_url, snapshot_repository_url
from rt.services.updates import ModuleUpdates

BASE_URL = "https://repo.spring.io/libs-"
SNAPSHOT = "https://repo.spring.io/libs-snapshot"
RELEASE = "https://repo.spring.io/libs-release"
MILESTONE = "https://repo.spring.io/libs-milestone"

BUILD_FILE = """\
repositories {
    maven { url '%s' }
}

dependencies {
    compile "org.springframework.data:spring-data-commons:$springDataCommonsVersion"
}
"""


def _write(ws: Workspace, project: Project, location: str, content: str) -> Path:
    path = ws.file(location, project)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _read(ws: Workspace, project: Project, location: str) -> str:
    return ws.file(location, project).read_text(encoding="utf-8")


@pytest.fixture
def ws(tmp_path: Path) -> Workspace:
    ws = Workspace(tmp_path)
    _write(ws, JPA, "build.gradle", BUILD_FILE % SNAPSHOT)
    _write(ws, JPA, "gradle.properties", "springDataCommonsVersion=1.7.0.BUILD-SNAPSHOT\nfoo=bar\n")
    # Gradle project without properties file
    _write(ws, SOLR, "build.gradle", BUILD_FILE % SNAPSHOT)
    # Aggregator is never touched
    _write(ws, BUILD, "build.gradle", BUILD_FILE % SNAPSHOT)
    return ws


class TestRepositoryUrls:
    def test_release_repository(self) -> None:
        assert release_repository_url(BASE_URL, GA) == RELEASE
        assert release_repository_url(BASE_URL, M1) == MILESTONE

    def test_snapshot_repository(self) -> None:
        assert snapshot_repository_url(BASE_URL) == SNAPSHOT


class TestUpdateProject:
    def test_prepare_ga(self, ws: Workspace) -> None:
        console = MockConsole()
        operations = GradleOperations(ws, ReleaseLogger(console), BASE_URL)

        result = operations.update_project(TrainIteration(CODD, GA), Phase.PREPARE)

        assert isinstance(result, Ok)
        assert [(u.module.project.name, u.location) for u in result.value] == [
            ("JPA", "gradle.properties"),
            ("JPA", "build.gradle"),
            ("Solr", "build.gradle"),
        ]
        assert _read(ws, JPA, "gradle.properties") == "springDataCommonsVersion=1.7.0.RELEASE\nfoo=bar\n"
        assert _read(ws, JPA, "build.gradle") == BUILD_FILE % RELEASE
        assert _read(ws, BUILD, "build.gradle") == BUILD_FILE % SNAPSHOT
        assert not ws.exists("build.gradle", MONGO_DB)
        assert console.messages == [
            "JPA > Setting Spring Data Commons version in gradle.properties to 1.7.0.RELEASE.",
            f"JPA > Switching to Spring repository {RELEASE}.",
            f"Solr > Switching to Spring repository {RELEASE}.",
        ]

    def test_prepare_milestone_uses_milestone_repository(self, ws: Workspace) -> None:
        operations = GradleOperations(ws, ReleaseLogger(MockConsole()), BASE_URL)

        operations.update_project(TrainIteration(CODD, M1), Phase.PREPARE)

        assert _read(ws, JPA, "build.gradle") == BUILD_FILE % MILESTONE
        assert _read(ws, JPA, "gradle.properties").startswith("springDataCommonsVersion=1.7.0.M1\n")

    def test_second_run_changes_nothing(self, ws: Workspace) -> None:
        console = MockConsole()
        operations = GradleOperations(ws, ReleaseLogger(console), BASE_URL)
        iteration = TrainIteration(CODD, GA)

        operations.update_project(iteration, Phase.PREPARE)
        console.clear()
        result = operations.update_project(iteration, Phase.PREPARE)

        assert isinstance(result, Ok)
        assert not result.value.changed
        assert console.messages == []

    def test_cleanup_after_ga(self, ws: Workspace) -> None:
        operations = GradleOperations(ws, ReleaseLogger(MockConsole()), BASE_URL)
        iteration = TrainIteration(CODD, GA)

        operations.update_project(iteration, Phase.PREPARE)
        result = operations.update_project(iteration, Phase.CLEANUP)

        assert isinstance(result, Ok)
        assert _read(ws, JPA, "gradle.properties") == "springDataCommonsVersion=1.8.0.BUILD-SNAPSHOT\nfoo=bar\n"
        assert _read(ws, JPA, "build.gradle") == BUILD_FILE % SNAPSHOT

    def test_parallel_matches_sequential(self, ws: Workspace) -> None:
        operations = GradleOperations(ws, ReleaseLogger(MockConsole()), BASE_URL, ModuleUpdates(max_workers=4))

        result = operations.update_project(TrainIteration(CODD, GA), Phase.PREPARE)

        assert isinstance(result, Ok)
        assert [u.module.project.name for u in result.value] == ["JPA", "JPA", "Solr"]

    def test_unreadable_file_fails_with_project(self, ws: Workspace) -> None:
        ws.file("gradle.properties", JPA).write_bytes(b"\xff\xfe")
        operations = GradleOperations(ws, ReleaseLogger(MockConsole()), BASE_URL)

        result = operations.update_project(TrainIteration(CODD, GA), Phase.PREPARE)

        assert isinstance(result, Err)
        assert result.error.kind == "file_failed"
        assert result.error.project == "JPA"
        assert result.error.location == "gradle.properties"
