"""Issue tracker protocol and the registry that picks one per project."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Protocol

from rt.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from rt.issues.model import Changelog, Tickets
    from rt.model.project import Project
    from rt.model.train import ModuleIteration

__all__ = [
    "IssueTracker",
    "IssueTrackers",
    "TrackerError",
]


@dataclass(frozen=True, slots=True)
class TrackerError:
    """Error from talking to an issue tracker.

    Attributes:
        kind: ``unsupported`` (no tracker for the project), ``request_failed``
            (transport or auth problem), ``invalid_response`` (unexpected
            payload) or ``not_found`` (e.g. no matching milestone).
        message: Human-readable description.
        hint: Optional next step for the operator.
    """

    kind: Literal["unsupported", "request_failed", "invalid_response", "not_found"]
    message: str
    hint: str | None = None


class IssueTracker(Protocol):
    def supports(self, project: Project) -> bool: ...

    def find_tickets(self, project: Project, ids: Iterable[str]) -> Result[Tickets, TrackerError]:
        """Look up tickets by id; unknown ids are left out of the result."""
        ...

    def get_changelog_for(self, module: ModuleIteration) -> Result[Changelog, TrackerError]:
        """Tickets scheduled for the module's version, as a changelog."""
        ...


class IssueTrackers:
    """Dispatches to the first tracker that supports a project."""

    def __init__(self, trackers: Iterable[IssueTracker]) -> None:
        self._trackers = tuple(trackers)

    def tracker_for(self, project: Project) -> Result[IssueTracker, TrackerError]:
        for tracker in self._trackers:
            if tracker.supports(project):
                return Ok(tracker)
        return Err(
            TrackerError(
                kind="unsupported",
                message=f"no issue tracker configured for {project.name} ({project.tracker})",
            )
        )

    def find_tickets(self, project: Project, ids: Iterable[str]) -> Result[Tickets, TrackerError]:
        tracker = self.tracker_for(project)
        if isinstance(tracker, Err):
            return tracker
        return tracker.value.find_tickets(project, ids)

    def get_changelog_for(self, module: ModuleIteration) -> Result[Changelog, TrackerError]:
        tracker = self.tracker_for(module.project)
        if isinstance(tracker, Err):
            return tracker
        return tracker.value.get_changelog_for(module)
