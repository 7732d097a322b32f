"""Release resources: changelog sections and notice banners."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from rt.core.result import Err, Ok, Result
from rt.core.workspace import Workspace
from rt.git.repository import GitError
from rt.issues.model import Changelog
from rt.issues.tracker import TrackerError
from rt.model.train import ModuleIteration, TrainIteration
from rt.output.logger import ReleaseLogger
from rt.services.rewriters import changelog_insertion, notice_header
from rt.services.updates import FileUpdate, ModuleUpdates, UpdateError, UpdateReport, process

__all__ = [
    "CHANGELOG_LOCATIONS",
    "CHANGELOG_COMMIT_MESSAGE",
    "NOTICE_LOCATION",
    "ReleaseOperations",
]

CHANGELOG_LOCATIONS = (
    "src/main/resources/changelog.txt",
    "docs/src/info/changelog.txt",
)
CHANGELOG_COMMIT_MESSAGE = "Updated changelog."
NOTICE_LOCATION = "src/main/resources/notice.txt"


class ChangelogSource(Protocol):
    def get_changelog_for(self, module: ModuleIteration) -> Result[Changelog, TrackerError]: ...


class Committer(Protocol):
    def commit(self, module: ModuleIteration, summary: str, *files: Path) -> Result[None, GitError]: ...


class ReleaseOperations:
    def __init__(
        self,
        workspace: Workspace,
        trackers: ChangelogSource,
        git: Committer,
        logger: ReleaseLogger,
        updates: ModuleUpdates | None = None,
    ) -> None:
        self._workspace = workspace
        self._trackers = trackers
        self._git = git
        self._logger = logger
        self._updates = updates or ModuleUpdates()

    def prepare_changelogs(self, iteration: TrainIteration) -> Result[UpdateReport, UpdateError]:
        """Insert each module's changelog below the file's ``=`` header and commit it.

        A changelog file that already holds the section for the module's
        version is left alone, so re-running after a failure is safe.
        """
        return self._updates.run(list(iteration), self._prepare_changelog)

    def _prepare_changelog(self, module: ModuleIteration) -> Result[list[FileUpdate], UpdateError]:
        project = module.project
        locations = [loc for loc in CHANGELOG_LOCATIONS if self._workspace.exists(loc, project)]
        if not locations:
            return Ok([])

        changelog = self._trackers.get_changelog_for(module)
        if isinstance(changelog, Err):
            return Err(
                UpdateError(
                    kind="tracker_failed",
                    message=changelog.error.message,
                    project=project.name,
                    hint=changelog.error.hint,
                )
            )

        rewriter = changelog_insertion(changelog.value.render())
        changed: list[FileUpdate] = []

        for location in locations:
            if self._has_section(module, location, changelog.value):
                continue

            result = process(self._workspace, module, location, rewriter)
            if isinstance(result, Err):
                return result
            if not result.value:
                continue

            committed = self._git.commit(module, CHANGELOG_COMMIT_MESSAGE, self._workspace.file(location, project))
            if isinstance(committed, Err):
                return Err(
                    UpdateError(
                        kind="git_failed",
                        message=committed.error.message,
                        project=project.name,
                        location=location,
                    )
                )

            self._logger.log(module, "Updated changelog %s.", location)
            changed.append(FileUpdate(module, location))

        return Ok(changed)

    def _has_section(self, module: ModuleIteration, location: str, changelog: Changelog) -> bool:
        path = self._workspace.file(location, module.project)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            # Let process() report the failure with context.
            return False
        return changelog.headline_prefix in content

    def update_resources(self, iteration: TrainIteration) -> Result[UpdateReport, UpdateError]:
        """Set the first line of each module's notice file to its display name."""

        def update(module: ModuleIteration) -> Result[list[FileUpdate], UpdateError]:
            project = module.project
            if not self._workspace.exists(NOTICE_LOCATION, project):
                return Ok([])

            result = process(self._workspace, module, NOTICE_LOCATION, notice_header(str(module)))
            if isinstance(result, Err):
                return result
            if not result.value:
                return Ok([])

            self._logger.log(module, "Updated %s.", NOTICE_LOCATION)
            return Ok([FileUpdate(module, NOTICE_LOCATION)])

        return self._updates.run(list(iteration), update)
