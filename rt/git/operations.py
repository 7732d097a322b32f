"""Git operations on project checkouts of the workspace."""

from __future__ import annotations

from pathlib import Path

from rt.core.config import GitConfig
from rt.core.result import Err, Ok, Result
from rt.core.workspace import Workspace
from rt.git.branch import TICKET_BRANCH_PREFIX, Branch
from rt.git.commits import parse_commit_message
from rt.git.project import GitProject
from rt.git.repository import GitError, Repository
from rt.git.tags import VersionTags
from rt.issues.model import TicketBranches, TicketReference, normalize_ticket_id
from rt.issues.tracker import IssueTrackers, TrackerError
from rt.model.project import Project
from rt.model.train import ModuleIteration, TrainIteration
from rt.output.logger import ReleaseLogger

__all__ = ["GitOperations"]

_REMOTE = "origin"


class GitOperations:
    """Tags, commits, ticket branches and ticket references per project.

    Safe to call from several threads as long as each call targets a
    different project.
    """

    def __init__(
        self,
        workspace: Workspace,
        config: GitConfig,
        logger: ReleaseLogger,
        trackers: IssueTrackers,
    ) -> None:
        self._workspace = workspace
        self._config = config
        self._logger = logger
        self._trackers = trackers

    def repository(self, project: Project) -> Repository:
        return Repository(self._workspace.project_directory(project))

    def git_project(self, project: Project) -> GitProject:
        return GitProject(project, self._config.server)

    def tags(self, project: Project) -> Result[VersionTags, GitError]:
        result = self.repository(project).tags()
        if isinstance(result, Err):
            return result
        return Ok(VersionTags.from_names(result.value))

    def commit(self, module: ModuleIteration, summary: str, *files: Path) -> Result[None, GitError]:
        """Stage and commit exactly ``files`` of the module's checkout."""
        repo = self.repository(module.project)

        added = repo.add(*files)
        if isinstance(added, Err):
            return added

        committed = repo.commit(summary, *files, author=self._config.author)
        if isinstance(committed, Err):
            return committed

        self._logger.log(module, "Committed: %s", summary)
        return Ok(None)

    def list_ticket_branches(self, project: Project) -> Result[TicketBranches, GitError | TrackerError]:
        """Remote ``issue/<ticket>`` branches mapped to their tickets."""
        names = self.repository(project).remote_branches(f"{_REMOTE}/{TICKET_BRANCH_PREFIX}*")
        if isinstance(names, Err):
            return names

        branches = [Branch.from_name(name) for name in names.value]
        if not branches:
            return Ok(TicketBranches(project.name))

        tickets = self._trackers.find_tickets(project, [b.name for b in branches])
        if isinstance(tickets, Err):
            return tickets

        mapping = {b: tickets.value.by_id(normalize_ticket_id(b.name)) for b in branches}
        self._logger.log(project, "Found %s ticket branches.", len(mapping))
        return Ok(TicketBranches(project.name, mapping))

    def ticket_references_between(
        self,
        project: Project,
        from_iteration: TrainIteration,
        to_iteration: TrainIteration,
    ) -> Result[list[TicketReference], GitError]:
        """Tickets mentioned in commits after ``from_iteration``'s tag.

        Commits are read up to ``to_iteration``'s tag, or up to ``HEAD`` if
        that iteration has not been tagged yet.
        """
        tags = self.tags(project)
        if isinstance(tags, Err):
            return tags

        try:
            from_tag = tags.value.create_tag(from_iteration.module(project))
            to_tag = tags.value.create_tag(to_iteration.module(project))
        except ValueError as e:
            return Err(GitError(command="tag -l", message=f"{project.name}: {e}"))

        if from_tag not in tags.value:
            return Err(GitError(command="log", message=f"{project.name}: tag {from_tag} does not exist"))
        to_ref = to_tag.name if to_tag in tags.value else "HEAD"

        messages = self.repository(project).log_messages(from_tag.name, to_ref)
        if isinstance(messages, Err):
            return messages

        seen: dict[str, TicketReference] = {}
        for message in messages.value:
            for ref in parse_commit_message(message).references():
                seen.setdefault(ref.id, ref)

        return Ok(sorted(seen.values(), key=TicketReference.sort_key))
