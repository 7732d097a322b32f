"""Issue trackers and the ticket model.

- Ticket, Tickets, TicketReference, TicketBranches, Changelog
- IssueTracker protocol and the IssueTrackers registry
- GitHubIssueTracker (``gh`` CLI) and JiraIssueTracker (REST over HTTP)
"""

from rt.issues.github import GitHubIssueTracker
from rt.issues.http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from rt.issues.jira import JiraIssueTracker
from rt.issues.model import (
    Changelog,
    ReferenceStyle,
    Ticket,
    TicketBranches,
    TicketReference,
    Tickets,
)
from rt.issues.tracker import IssueTracker, IssueTrackers, TrackerError

__all__ = [
    "Changelog",
    "GitHubIssueTracker",
    "HttpClient",
    "HttpError",
    "IssueTracker",
    "IssueTrackers",
    "JiraIssueTracker",
    "MockHttpClient",
    "RealHttpClient",
    "ReferenceStyle",
    "Ticket",
    "TicketBranches",
    "TicketReference",
    "Tickets",
    "TrackerError",
]
