"""GitHub issue tracker backed by the ``gh`` CLI.

Requests go through ``gh api`` so authentication is whatever ``gh auth``
has set up. Reads are idempotent and retried on transient failures.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from time import sleep

from rt.core.result import Err, Ok, Result
from rt.core.structured import as_obj_list, as_str_dict, get_int, get_str
from rt.git.project import GitProject
from rt.issues.model import Changelog, Ticket, Tickets, normalize_ticket_id
from rt.issues.tracker import TrackerError
from rt.model.project import Project, Tracker
from rt.model.train import ModuleIteration
from rt.output.logger import ReleaseLogger
from rt.platform.process import ProcessError
from rt.platform.process import run as run_process

__all__ = ["GitHubIssueTracker", "gh_api_json", "run_gh_read"]

GH_TIMEOUT_SECONDS = 60.0
GH_READ_RETRY_ATTEMPTS = 3
GH_READ_RETRY_DELAY_SECONDS = 1.0


def _is_transient_gh_error(error: ProcessError) -> bool:
    text = f"{error.stderr}\n{error.stdout}".lower()
    markers = (
        "timed out",
        "timeout",
        "connection reset",
        "connection refused",
        "temporarily unavailable",
        "service unavailable",
        "bad gateway",
        "gateway timeout",
        "network is unreachable",
        "http 429",
        "http 500",
        "http 502",
        "http 503",
        "http 504",
    )
    return any(marker in text for marker in markers)


def run_gh_read(
    *,
    cwd: Path,
    cmd: list[str],
    message: str,
    timeout: float = GH_TIMEOUT_SECONDS,
    retry_attempts: int = GH_READ_RETRY_ATTEMPTS,
) -> Result[str, TrackerError]:
    attempts = max(1, retry_attempts)
    for attempt in range(attempts):
        result = run_process(cmd, cwd=cwd, timeout=timeout)
        if isinstance(result, Ok):
            return result

        error = result.error
        if attempt < attempts - 1 and _is_transient_gh_error(error):
            sleep(GH_READ_RETRY_DELAY_SECONDS * (attempt + 1))
            continue

        stderr = error.stderr.strip()
        return Err(
            TrackerError(
                kind="not_found" if "http 404" in stderr.lower() else "request_failed",
                message=message,
                hint=stderr or "Check: gh auth status",
            )
        )

    return Err(TrackerError(kind="request_failed", message=message))


def gh_api_json(*, cwd: Path, endpoint: str) -> Result[object, TrackerError]:
    result = run_gh_read(cwd=cwd, cmd=["gh", "api", endpoint], message=f"gh api failed: {endpoint}")
    if isinstance(result, Err):
        return result

    try:
        obj: object = json.loads(result.value)
    except json.JSONDecodeError as e:
        return Err(
            TrackerError(
                kind="invalid_response",
                message=f"gh api returned invalid JSON: {e}",
                hint=endpoint,
            )
        )
    return Ok(obj)


def _ticket_from_issue(obj: object) -> Ticket | None:
    issue = as_str_dict(obj)
    if issue is None:
        return None
    number = get_int(issue, "number")
    title = get_str(issue, "title")
    if number is None or title is None:
        return None
    return Ticket(id=f"#{number}", summary=title, resolved=get_str(issue, "state") == "closed")


class GitHubIssueTracker:
    """Tickets of projects that use GitHub issues.

    Changelogs are built from the issues of the milestone whose title
    contains the module's short version (``1.7 M1``, ``1.7.1``).
    """

    def __init__(self, cwd: Path, server: str, logger: ReleaseLogger) -> None:
        self._cwd = cwd
        self._server = server
        self._logger = logger

    def supports(self, project: Project) -> bool:
        return project.uses(Tracker.GITHUB)

    def find_tickets(self, project: Project, ids: Iterable[str]) -> Result[Tickets, TrackerError]:
        slug = GitProject(project, self._server).slug
        tickets: list[Ticket] = []
        for ticket_id in ids:
            normalized = normalize_ticket_id(ticket_id)
            if not (normalized.startswith("#") and normalized[1:].isdigit()):
                continue

            result = gh_api_json(cwd=self._cwd, endpoint=f"repos/{slug}/issues/{normalized[1:]}")
            if isinstance(result, Err):
                if result.error.kind == "not_found":
                    continue
                return result

            ticket = _ticket_from_issue(result.value)
            if ticket is not None:
                tickets.append(ticket)

        return Ok(Tickets.of(tickets))

    def get_changelog_for(self, module: ModuleIteration) -> Result[Changelog, TrackerError]:
        slug = GitProject(module.project, self._server).slug

        milestone = self._find_milestone(module, slug)
        if isinstance(milestone, Err):
            return milestone

        endpoint = f"repos/{slug}/issues?milestone={milestone.value}&state=all&per_page=100"
        result = gh_api_json(cwd=self._cwd, endpoint=endpoint)
        if isinstance(result, Err):
            return result

        items = as_obj_list(result.value)
        if items is None:
            return Err(TrackerError(kind="invalid_response", message="expected a list of issues", hint=endpoint))

        tickets: list[Ticket] = []
        for item in items:
            issue = as_str_dict(item)
            # The issues endpoint also lists pull requests.
            if issue is None or "pull_request" in issue:
                continue
            ticket = _ticket_from_issue(issue)
            if ticket is not None:
                tickets.append(ticket)

        self._logger.log(module, "Created changelog with %s entries.", len(tickets))
        return Ok(Changelog(module, Tickets.of(tickets)))

    def _find_milestone(self, module: ModuleIteration, slug: str) -> Result[int, TrackerError]:
        endpoint = f"repos/{slug}/milestones?state=all&per_page=100"
        self._logger.log(module, "Looking up milestone from %s…", endpoint)

        result = gh_api_json(cwd=self._cwd, endpoint=endpoint)
        if isinstance(result, Err):
            return result

        items = as_obj_list(result.value)
        if items is None:
            return Err(TrackerError(kind="invalid_response", message="expected a list of milestones", hint=endpoint))

        wanted = module.short_version_string
        for item in items:
            milestone = as_str_dict(item)
            if milestone is None:
                continue
            title = get_str(milestone, "title") or ""
            number = get_int(milestone, "number")
            if wanted in title and number is not None:
                self._logger.log(module, "Found milestone %s.", title)
                return Ok(number)

        return Err(
            TrackerError(
                kind="not_found",
                message=f"no milestone found containing {wanted}",
                hint=f"Create the milestone in {slug}",
            )
        )
