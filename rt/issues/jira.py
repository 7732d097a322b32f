"""Jira issue tracker over the REST search API.

Tickets for a module are the issues whose ``fixVersion`` is the module's
Jira version, e.g. ``1.7 M1 (Codd)`` or ``1.7.1 (Codd SR1)``.
"""

from __future__ import annotations

import base64
from collections.abc import Iterable
from dataclasses import dataclass
from urllib.parse import urlencode

from rt.core.config import JiraConfig
from rt.core.result import Err, Ok, Result
from rt.core.structured import as_str_dict, get_int, get_list, get_str, get_table
from rt.issues.http import HttpClient
from rt.issues.model import Changelog, Ticket, Tickets, normalize_ticket_id
from rt.issues.tracker import TrackerError
from rt.model.project import Project, Tracker
from rt.model.train import ModuleIteration
from rt.output.logger import ReleaseLogger

__all__ = ["JiraIssueTracker", "JqlQuery", "jira_version"]

SEARCH_PATH = "/rest/api/2/search"
SEARCH_FIELDS = "summary,status,resolution"
PAGE_SIZE = 100

_RESOLVED_STATUSES = frozenset({"resolved", "closed", "done"})


def jira_version(module: ModuleIteration) -> str:
    """Name of the module's version in Jira."""
    iteration = module.iteration
    train = module.train.name
    if iteration.is_service_iteration:
        return f"{module.module.version}.{iteration.bugfix_value} ({train} {iteration.name})"
    return f"{module.module.version} {iteration.name} ({train})"


@dataclass(frozen=True, slots=True)
class JqlQuery:
    query: str

    @classmethod
    def for_module(cls, module: ModuleIteration) -> JqlQuery:
        return cls(f'project = {module.project.key} AND fixVersion = "{jira_version(module)}"')

    @classmethod
    def for_keys(cls, keys: Iterable[str]) -> JqlQuery:
        return cls(f"key in ({', '.join(keys)})")

    def order_by(self, clause: str) -> JqlQuery:
        return JqlQuery(f"{self.query} ORDER BY {clause}")

    def __str__(self) -> str:
        return self.query


def _ticket_from_issue(obj: object) -> Ticket | None:
    issue = as_str_dict(obj)
    if issue is None:
        return None
    key = get_str(issue, "key")
    fields = get_table(issue, "fields") or {}
    summary = get_str(fields, "summary")
    if key is None or summary is None:
        return None

    status = get_table(fields, "status") or {}
    status_name = (get_str(status, "name") or "").lower()
    resolved = get_table(fields, "resolution") is not None or status_name in _RESOLVED_STATUSES
    return Ticket(id=key, summary=summary, resolved=resolved)


class JiraIssueTracker:
    """Tickets of projects that use Jira."""

    def __init__(self, client: HttpClient, config: JiraConfig, logger: ReleaseLogger) -> None:
        self._client = client
        self._config = config
        self._logger = logger

    def supports(self, project: Project) -> bool:
        return project.uses(Tracker.JIRA)

    def search_url(self, query: JqlQuery, start_at: int = 0) -> str:
        params = urlencode(
            {
                "jql": str(query),
                "fields": SEARCH_FIELDS,
                "startAt": start_at,
                "maxResults": PAGE_SIZE,
            }
        )
        return f"{self._config.url}{SEARCH_PATH}?{params}"

    def find_tickets(self, project: Project, ids: Iterable[str]) -> Result[Tickets, TrackerError]:
        prefix = f"{project.key}-"
        keys = [k for k in (normalize_ticket_id(i) for i in ids) if k.startswith(prefix)]
        if not keys:
            return Ok(Tickets())
        return self._search(JqlQuery.for_keys(keys))

    def get_changelog_for(self, module: ModuleIteration) -> Result[Changelog, TrackerError]:
        tickets = self._search(JqlQuery.for_module(module).order_by("key ASC"))
        if isinstance(tickets, Err):
            return tickets

        self._logger.log(module, "Created changelog with %s entries.", len(tickets.value))
        return Ok(Changelog(module, tickets.value))

    def _headers(self) -> dict[str, str]:
        username = self._config.username
        password = self._config.password()
        if not username or not password:
            return {}
        token = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
        return {"Authorization": f"Basic {token}"}

    def _search(self, query: JqlQuery) -> Result[Tickets, TrackerError]:
        headers = self._headers()
        tickets: list[Ticket] = []
        start_at = 0
        total = 0

        while True:
            url = self.search_url(query, start_at)
            result = self._client.get_json(url, headers)
            if isinstance(result, Err):
                return Err(
                    TrackerError(
                        kind="request_failed",
                        message=f"Jira search failed: {result.error}",
                        hint=f"JQL: {query}",
                    )
                )

            page = result.value
            issues = get_list(page, "issues")
            if issues is None:
                return Err(TrackerError(kind="invalid_response", message="Jira response has no issues", hint=url))

            for issue in issues:
                ticket = _ticket_from_issue(issue)
                if ticket is not None:
                    tickets.append(ticket)

            total = get_int(page, "total") or 0
            start_at += len(issues)
            if not issues or start_at >= total:
                break

        return Ok(Tickets(tuple(tickets), max(total, len(tickets))))
