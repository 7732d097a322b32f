"""Tickets, ticket references, ticket branches and rendered changelogs."""

from __future__ import annotations

import datetime
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rt.git.branch import Branch
    from rt.model.train import ModuleIteration

__all__ = [
    "Changelog",
    "ReferenceStyle",
    "Ticket",
    "TicketBranches",
    "TicketReference",
    "Tickets",
    "normalize_ticket_id",
]


def normalize_ticket_id(ticket_id: str) -> str:
    """``gh-12`` becomes ``#12``; Jira keys are upper-cased without spaces."""
    text = ticket_id.strip()
    if text.lower().startswith("gh-"):
        return "#" + text[3:]
    return text.upper().replace(" ", "")


@dataclass(frozen=True, slots=True)
class Ticket:
    """An issue as reported by a tracker.

    Attributes:
        id: Normalized id, e.g. ``DATACMNS-123`` or ``#42``.
        summary: Ticket title.
        resolved: True once the tracker considers the ticket done.
    """

    id: str
    summary: str
    resolved: bool = False

    @property
    def status(self) -> str:
        return "resolved" if self.resolved else "open"

    def __str__(self) -> str:
        return f"{self.id:>14} - {self.summary}"


@dataclass(frozen=True, slots=True)
class Tickets:
    """Tickets returned by one tracker query.

    ``overall_total`` is the number the tracker reported, which may exceed
    ``len(tickets)`` when entries were filtered out.
    """

    tickets: tuple[Ticket, ...] = ()
    overall_total: int = -1

    def __post_init__(self) -> None:
        if self.overall_total < 0:
            object.__setattr__(self, "overall_total", len(self.tickets))

    @classmethod
    def of(cls, tickets: Iterable[Ticket]) -> Tickets:
        return cls(tuple(tickets))

    def __iter__(self) -> Iterator[Ticket]:
        return iter(self.tickets)

    def __len__(self) -> int:
        return len(self.tickets)

    def by_id(self, ticket_id: str) -> Ticket | None:
        wanted = normalize_ticket_id(ticket_id)
        for ticket in self.tickets:
            if ticket.id == wanted:
                return ticket
        return None

    def __str__(self) -> str:
        lines = [f"Train only tickets: {len(self.tickets)} of {self.overall_total}"]
        lines.extend(str(t) for t in self.tickets)
        return "\n".join(lines)


class ReferenceStyle(Enum):
    GITHUB = "github"
    JIRA = "jira"


@dataclass(frozen=True, slots=True)
class TicketReference:
    """A ticket mentioned in a commit message."""

    id: str
    message: str | None
    style: ReferenceStyle

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", normalize_ticket_id(self.id))

    def sort_key(self) -> tuple[int, int, str]:
        """GitHub numbers sort numerically, Jira keys case-insensitively."""
        if self.id.startswith("#") and self.id[1:].isdigit():
            return (0, int(self.id[1:]), "")
        return (1, 0, self.id.lower())


@dataclass(frozen=True, slots=True)
class TicketBranches:
    """Ticket branches of one project mapped to the ticket they work on.

    A branch maps to None when the tracker does not know its ticket.
    """

    project_name: str
    branches: Mapping[Branch, Ticket | None] = field(default_factory=dict)

    def __iter__(self) -> Iterator[Branch]:
        return iter(self.branches)

    def __len__(self) -> int:
        return len(self.branches)

    def ticket(self, branch: Branch) -> Ticket | None:
        return self.branches.get(branch)

    def resolved_only(self) -> TicketBranches:
        """Only branches whose ticket is resolved (candidates for cleanup)."""
        return TicketBranches(
            self.project_name,
            {b: t for b, t in self.branches.items() if t is not None and t.resolved},
        )


@dataclass(frozen=True, slots=True)
class Changelog:
    """Changelog section for one module iteration.

    Renders as::

        Changes in version 1.7.0.M1 (2014-02-25)
        ----------------------------------------
        * DATACMNS-1 - Fixed bug.
    """

    module: ModuleIteration
    tickets: Tickets
    date: datetime.date = field(default_factory=datetime.date.today)

    @property
    def headline_prefix(self) -> str:
        """Headline without the date, used to detect an already inserted section."""
        return f"Changes in version {self.module.version} ("

    @property
    def headline(self) -> str:
        return f"{self.headline_prefix}{self.date.isoformat()})"

    def render(self) -> str:
        headline = self.headline
        lines = [headline, "-" * len(headline)]
        for ticket in self.tickets:
            summary = ticket.summary
            if not summary.endswith("."):
                summary += "."
            lines.append(f"* {ticket.id} - {summary}")
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()
