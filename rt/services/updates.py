"""Shared plumbing for the per-module update operations.

An update operation turns a TrainIteration into file edits, one module at a
time. Each module either succeeds with the files it changed or fails with an
UpdateError naming the project and file; the first failure ends the run.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Literal

from rt.core.result import Err, Ok, Result
from rt.core.workspace import LineRewriter, Workspace
from rt.model.train import ModuleIteration
from rt.services.execution import run_all

__all__ = [
    "FileUpdate",
    "ModuleUpdates",
    "UpdateError",
    "UpdateReport",
    "process",
]

type ModuleUpdate = Callable[[ModuleIteration], Result[list[FileUpdate], UpdateError]]

DEFAULT_TASK_TIMEOUT_SECONDS = 300.0


@dataclass(frozen=True, slots=True)
class UpdateError:
    """Error that aborted an update run.

    Attributes:
        kind: ``file_failed`` (missing/unreadable file or rejected line),
            ``tracker_failed``, ``git_failed`` or ``timeout``.
        message: Human-readable description.
        project: Name of the project being updated.
        location: File being updated, if any.
        hint: Optional next step for the operator.
    """

    kind: Literal["file_failed", "tracker_failed", "git_failed", "timeout"]
    message: str
    project: str
    location: str | None = None
    hint: str | None = None

    def __str__(self) -> str:
        where = f"{self.project} ({self.location})" if self.location else self.project
        return f"{where}: {self.message}"


@dataclass(frozen=True, slots=True)
class FileUpdate:
    """One file an update operation actually rewrote."""

    module: ModuleIteration
    location: str


@dataclass(frozen=True, slots=True)
class UpdateReport:
    """Files changed by one update run, in train order."""

    updates: tuple[FileUpdate, ...] = ()

    def __iter__(self) -> Iterator[FileUpdate]:
        return iter(self.updates)

    def __len__(self) -> int:
        return len(self.updates)

    @property
    def changed(self) -> bool:
        return bool(self.updates)

    def locations(self, project_name: str) -> list[str]:
        return [u.location for u in self.updates if u.module.project.name == project_name]


def process(
    workspace: Workspace,
    module: ModuleIteration,
    location: str,
    rewriter: LineRewriter,
) -> Result[bool, UpdateError]:
    """``Workspace.process_file`` with the error tied to the module's project."""
    result = workspace.process_file(location, module.project, rewriter)
    if isinstance(result, Err):
        return Err(
            UpdateError(
                kind="file_failed",
                message=result.error.message,
                project=module.project.name,
                location=location,
            )
        )
    return result


class ModuleUpdates:
    """Runs a per-module update over modules, sequentially or on a bounded pool.

    Modules touch disjoint checkouts, so with ``max_workers > 1`` they are
    updated concurrently. The report keeps train order either way.
    """

    def __init__(self, max_workers: int = 1, timeout: float = DEFAULT_TASK_TIMEOUT_SECONDS) -> None:
        self.max_workers = max_workers
        self.timeout = timeout

    def run(self, modules: Sequence[ModuleIteration], update: ModuleUpdate) -> Result[UpdateReport, UpdateError]:
        if self.max_workers <= 1:
            updates: list[FileUpdate] = []
            for module in modules:
                result = update(module)
                if isinstance(result, Err):
                    return result
                updates.extend(result.value)
            return Ok(UpdateReport(tuple(updates)))

        results = run_all(
            modules,
            update,
            max_workers=self.max_workers,
            timeout=self.timeout,
            name=lambda m: m.project.name,
        )
        match results:
            case Ok(per_module):
                return Ok(UpdateReport(tuple(u for batch in per_module for u in batch)))
            case Err(UpdateError() as error):
                return Err(error)
            case Err(error):
                return Err(UpdateError(kind="timeout", message=error.message, project=error.item))
