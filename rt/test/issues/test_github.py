"""Tests for rt.issues.github module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from rt.core.result import Err, Ok, Result
from rt.issues import github as github_mod
from rt.issues.github import GitHubIssueTracker, gh_api_json, run_gh_read
from rt.model.iteration import M1, SR1
from rt.model.project import BUILD, COMMONS
from rt.model.train import TrainIteration
from rt.model.trains import CODD
from rt.output.console import MockConsole
from rt.output.logger import ReleaseLogger
from rt.platform.process import ProcessError

SERVER = "https://github.com/spring-projects/"
SLUG = "spring-projects/spring-data-build"


class FakeGh:
    """Answers ``gh api <endpoint>`` from a dict; unknown endpoints are 404."""

    def __init__(self, responses: dict[str, object]) -> None:
        self.responses = responses
        self.endpoints: list[str] = []

    def __call__(
        self, cmd: list[str], cwd: Path, env: object = None, *, timeout: float | None = None
    ) -> Result[str, ProcessError]:
        endpoint = cmd[2]
        self.endpoints.append(endpoint)
        if endpoint not in self.responses:
            return Err(ProcessError(tuple(cmd), 1, "", "gh: Not Found (HTTP 404)"))
        return Ok(json.dumps(self.responses[endpoint]))


def _tracker(
    monkeypatch: pytest.MonkeyPatch, responses: dict[str, object]
) -> tuple[GitHubIssueTracker, FakeGh, MockConsole]:
    fake = FakeGh(responses)
    monkeypatch.setattr(github_mod, "run_process", fake)
    console = MockConsole()
    return GitHubIssueTracker(Path("."), SERVER, ReleaseLogger(console)), fake, console


class TestRunGhRead:
    def test_retries_transient_errors(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        calls: list[list[str]] = []
        sleeps: list[float] = []

        def flaky(cmd: list[str], cwd: Path, env: object = None, *, timeout: float | None = None):
            calls.append(cmd)
            if len(calls) < 3:
                return Err(ProcessError(tuple(cmd), 1, "", "HTTP 502 Bad Gateway"))
            return Ok("[]")

        monkeypatch.setattr(github_mod, "run_process", flaky)
        monkeypatch.setattr(github_mod, "sleep", sleeps.append)

        result = run_gh_read(cwd=tmp_path, cmd=["gh", "api", "x"], message="failed")

        assert result == Ok("[]")
        assert len(calls) == 3
        assert sleeps == [1.0, 2.0]

    def test_does_not_retry_permanent_errors(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        calls: list[list[str]] = []

        def denied(cmd: list[str], cwd: Path, env: object = None, *, timeout: float | None = None):
            calls.append(cmd)
            return Err(ProcessError(tuple(cmd), 1, "", "HTTP 401: Bad credentials"))

        monkeypatch.setattr(github_mod, "run_process", denied)
        monkeypatch.setattr(github_mod, "sleep", lambda _: None)

        result = run_gh_read(cwd=tmp_path, cmd=["gh", "api", "x"], message="failed")

        assert isinstance(result, Err)
        assert result.error.kind == "request_failed"
        assert result.error.hint == "HTTP 401: Bad credentials"
        assert len(calls) == 1

    def test_not_found(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(github_mod, "run_process", FakeGh({}))

        result = gh_api_json(cwd=tmp_path, endpoint="repos/a/b/issues/1")

        assert isinstance(result, Err)
        assert result.error.kind == "not_found"

    def test_invalid_json(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(
            github_mod,
            "run_process",
            lambda cmd, cwd, env=None, *, timeout=None: Ok("not json"),
        )

        result = gh_api_json(cwd=tmp_path, endpoint="x")

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_response"


class TestFindTickets:
    def test_fetches_github_ids_only(self, monkeypatch: pytest.MonkeyPatch) -> None:
        tracker, fake, _ = _tracker(
            monkeypatch,
            {
                f"repos/{SLUG}/issues/1": {"number": 1, "title": "Closed one", "state": "closed"},
                f"repos/{SLUG}/issues/2": {"number": 2, "title": "Open one", "state": "open"},
            },
        )

        result = tracker.find_tickets(BUILD, ["#1", "gh-2", "DATABUILD-3", "#404"])

        assert isinstance(result, Ok)
        assert [(t.id, t.summary, t.resolved) for t in result.value] == [
            ("#1", "Closed one", True),
            ("#2", "Open one", False),
        ]
        assert fake.endpoints == [
            f"repos/{SLUG}/issues/1",
            f"repos/{SLUG}/issues/2",
            f"repos/{SLUG}/issues/404",
        ]

    def test_supports(self, monkeypatch: pytest.MonkeyPatch) -> None:
        tracker, _, _ = _tracker(monkeypatch, {})
        assert tracker.supports(BUILD)
        assert not tracker.supports(COMMONS)


class TestChangelog:
    def test_uses_matching_milestone(self, monkeypatch: pytest.MonkeyPatch) -> None:
        module = TrainIteration(CODD, M1).module(BUILD)
        tracker, fake, console = _tracker(
            monkeypatch,
            {
                f"repos/{SLUG}/milestones?state=all&per_page=100": [
                    {"number": 3, "title": "1.2 GA"},
                    {"number": 7, "title": "1.3 M1 (Codd)"},
                ],
                f"repos/{SLUG}/issues?milestone=7&state=all&per_page=100": [
                    {"number": 11, "title": "Upgrade plugin", "state": "closed"},
                    {"number": 12, "title": "A pull request", "state": "closed", "pull_request": {}},
                ],
            },
        )

        result = tracker.get_changelog_for(module)

        assert isinstance(result, Ok)
        assert [t.id for t in result.value.tickets] == ["#11"]
        assert console.messages[-1] == "Build > Created changelog with 1 entries."
        assert len(fake.endpoints) == 2

    def test_service_release_milestone(self, monkeypatch: pytest.MonkeyPatch) -> None:
        module = TrainIteration(CODD, SR1).module(BUILD)
        tracker, _, _ = _tracker(
            monkeypatch,
            {
                f"repos/{SLUG}/milestones?state=all&per_page=100": [{"number": 9, "title": "1.3.1 (Codd SR1)"}],
                f"repos/{SLUG}/issues?milestone=9&state=all&per_page=100": [],
            },
        )

        result = tracker.get_changelog_for(module)

        assert isinstance(result, Ok)
        assert len(result.value.tickets) == 0

    def test_missing_milestone(self, monkeypatch: pytest.MonkeyPatch) -> None:
        module = TrainIteration(CODD, M1).module(BUILD)
        tracker, _, _ = _tracker(
            monkeypatch,
            {f"repos/{SLUG}/milestones?state=all&per_page=100": [{"number": 3, "title": "1.2 GA"}]},
        )

        result = tracker.get_changelog_for(module)

        assert isinstance(result, Err)
        assert result.error.kind == "not_found"
        assert "1.3 M1" in result.error.message
