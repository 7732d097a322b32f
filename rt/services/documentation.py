"""Docbook include updates for projects building on Commons."""

from __future__ import annotations

from typing import Protocol

from rt.core.result import Err, Ok, Result
from rt.core.workspace import Workspace
from rt.git.repository import GitError
from rt.git.tags import VersionTags
from rt.model.project import COMMONS, Project
from rt.model.train import ModuleIteration, TrainIteration
from rt.output.logger import ReleaseLogger
from rt.services.rewriters import docs_include
from rt.services.updates import FileUpdate, ModuleUpdates, UpdateError, UpdateReport, process

__all__ = ["DocumentationOperations", "INDEX_LOCATION"]

INDEX_LOCATION = "src/docbkx/index.xml"


class TagSource(Protocol):
    def tags(self, project: Project) -> Result[VersionTags, GitError]: ...


class DocumentationOperations:
    def __init__(
        self,
        workspace: Workspace,
        git: TagSource,
        logger: ReleaseLogger,
        updates: ModuleUpdates | None = None,
    ) -> None:
        self._workspace = workspace
        self._git = git
        self._logger = logger
        self._updates = updates or ModuleUpdates()

    def update_docbook_includes(self, iteration: TrainIteration) -> Result[UpdateReport, UpdateError]:
        """Move Commons includes from the previous iteration's tag to the current one."""
        tags = self._git.tags(COMMONS)
        if isinstance(tags, Err):
            return Err(
                UpdateError(
                    kind="git_failed",
                    message=tags.error.message,
                    project=COMMONS.name,
                    hint="Is the Commons repository checked out?",
                )
            )

        try:
            commons = iteration.module(COMMONS)
            previous_tag = tags.value.create_tag(iteration.previous_iteration(commons))
            new_tag = tags.value.create_tag(commons)
        except ValueError as e:
            return Err(UpdateError(kind="git_failed", message=str(e), project=COMMONS.name))

        rewriter = docs_include(COMMONS.repository_name, previous_tag.name, new_tag.name)

        def update(module: ModuleIteration) -> Result[list[FileUpdate], UpdateError]:
            project = module.project
            if not project.depends_on(COMMONS) or not self._workspace.exists(INDEX_LOCATION, project):
                return Ok([])

            result = process(self._workspace, module, INDEX_LOCATION, rewriter)
            if isinstance(result, Err):
                return result
            if not result.value:
                return Ok([])

            self._logger.log(project, "Updated Commons includes in %s to %s.", INDEX_LOCATION, new_tag)
            return Ok([FileUpdate(module, INDEX_LOCATION)])

        return self._updates.run(list(iteration), update)
