"""Extract ticket references from commit messages.

Recognised forms:

    DATACMNS-123 - Summary.            Jira key at the start
    [DATACMNS-123] Summary.            Jira key in brackets
    #42 - Summary.                     GitHub number at the start
    Summary. Closes #42                GitHub close keyword anywhere
    Original pull request: #43         pull request reference in the body
    Related tickets: #44, DATAJPA-5    further references in the body
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from rt.issues.model import ReferenceStyle, TicketReference

__all__ = ["ParsedCommitMessage", "parse_commit_message"]

_JIRA = r"\[?([A-Z]+ ?- ?\d+)\]?"
_GITHUB = r"((?:#|gh-)\d+)"

_JIRA_RE = re.compile(_JIRA)
_JIRA_ONLY_RE = re.compile(r"^\[?[A-Z]+ ?- ?\d+\]?$")
_GITHUB_ONLY_RE = re.compile(r"^(?:#|gh-)\d+$")
_GITHUB_PREFIX_RE = re.compile(r"^(#\d+)")
_GITHUB_CLOSE_RE = re.compile(
    r"(?:closes|closed|close|fixes|fixed|fix|resolves|resolved|resolve|see)[\s:]*" + _GITHUB,
    re.IGNORECASE | re.MULTILINE,
)
_ANY_TICKET = r"(?:\[?[A-Z]+ ?- ?\d+\]?|(?:#|gh-)\d+)"
_PULL_REQUEST_RE = re.compile(
    r"Original (?:pull request|PR|pullrequest):\s*(" + _ANY_TICKET + ")",
    re.IGNORECASE,
)
_RELATED_RE = re.compile(
    r"Related (?:tickets|ticket):\s*((?:" + _ANY_TICKET + r"[\s,]*)+)",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class ParsedCommitMessage:
    summary: str
    body: str | None
    ticket: TicketReference | None
    pull_request: TicketReference | None
    related: tuple[TicketReference, ...]

    def references(self) -> list[TicketReference]:
        """Primary ticket first, then related tickets."""
        refs = [self.ticket] if self.ticket is not None else []
        refs.extend(self.related)
        return refs


def _summary_start(summary: str, start_at: int) -> int:
    dash = summary.find("- ", start_at)
    if dash > -1:
        return dash + 2
    space = summary.find(" ", start_at)
    return space + 1 if space > -1 else -1


def _extract(ticket_id: str) -> TicketReference | None:
    text = ticket_id.strip()
    if _JIRA_ONLY_RE.match(text):
        return TicketReference(text.strip("[]"), None, ReferenceStyle.JIRA)
    if _GITHUB_ONLY_RE.match(text):
        return TicketReference(text, None, ReferenceStyle.GITHUB)
    return None


def parse_commit_message(message: str) -> ParsedCommitMessage:
    summary, _, rest = message.partition("\n")
    summary = summary.strip()
    body = rest.strip() or None

    ticket: TicketReference | None = None

    jira = _JIRA_RE.search(summary)
    # Only keys at the very start (optionally bracketed) name the commit's ticket.
    if jira is not None and jira.start(1) < 2:
        start = _summary_start(summary, jira.end(1))
        ticket = TicketReference(
            jira.group(1),
            summary[start:] if start > -1 else summary,
            ReferenceStyle.JIRA,
        )

    close_matches = list(_GITHUB_CLOSE_RE.finditer(message))
    prefix = _GITHUB_PREFIX_RE.match(summary)
    if prefix is not None:
        start = _summary_start(summary, prefix.end(1))
        ticket = TicketReference(
            prefix.group(1),
            summary[start:] if start > -1 else summary,
            ReferenceStyle.GITHUB,
        )
    elif close_matches:
        ticket = TicketReference(close_matches[0].group(1), summary, ReferenceStyle.GITHUB)
        close_matches = close_matches[1:]

    related: list[TicketReference] = []
    pull_request: TicketReference | None = None
    if body is not None:
        related_match = _RELATED_RE.search(body)
        if related_match is not None:
            for part in related_match.group(1).split(","):
                ref = _extract(part)
                if ref is not None:
                    related.append(ref)

        for match in close_matches:
            ref = _extract(match.group(1))
            if ref is not None:
                related.append(ref)

        pr_match = _PULL_REQUEST_RE.search(body)
        if pr_match is not None:
            pull_request = _extract(pr_match.group(1))
            if ticket is None and pull_request is not None:
                ticket, pull_request = pull_request, None

    return ParsedCommitMessage(
        summary=summary,
        body=body,
        ticket=ticket,
        pull_request=pull_request,
        related=tuple(related),
    )
