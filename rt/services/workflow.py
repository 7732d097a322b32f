"""Ticket-branch overview across projects."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from rt.core.result import Result
from rt.git.repository import GitError
from rt.issues.model import TicketBranches
from rt.issues.tracker import TrackerError
from rt.model.project import Project, project_order
from rt.model.train import Train
from rt.services.execution import ExecutionError, run_all

__all__ = ["CodeWorkflowOperations", "WorkflowError"]

type WorkflowError = GitError | TrackerError | ExecutionError


class TicketBranchSource(Protocol):
    def list_ticket_branches(self, project: Project) -> Result[TicketBranches, GitError | TrackerError]: ...


class CodeWorkflowOperations:
    """Collects ticket branches of several projects in parallel.

    The result has exactly one entry per project, in catalog order,
    whatever order the per-project lookups finish in.
    """

    def __init__(self, git: TicketBranchSource, max_workers: int, timeout: float) -> None:
        self._git = git
        self._max_workers = max_workers
        self._timeout = timeout

    def ticket_branches_for_project(self, project: Project) -> Result[list[TicketBranches], WorkflowError]:
        return self._ticket_branches([project])

    def ticket_branches_for_train(self, train: Train) -> Result[list[TicketBranches], WorkflowError]:
        return self._ticket_branches(m.project for m in train)

    def _ticket_branches(self, projects: Iterable[Project]) -> Result[list[TicketBranches], WorkflowError]:
        ordered = sorted(set(projects), key=lambda p: (project_order(p), p.name))
        return run_all(
            ordered,
            self._git.list_ticket_branches,
            max_workers=self._max_workers,
            timeout=self._timeout,
            name=lambda p: p.name,
        )