from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from rt.core.config import ReleaseConfig, load_config, resolve_config_path
from rt.core.errors import ErrorCode
from rt.core.result import Err
from rt.core.workspace import Workspace
from rt.git.operations import GitOperations
from rt.issues.github import GitHubIssueTracker
from rt.issues.http import RealHttpClient
from rt.issues.jira import JiraIssueTracker
from rt.issues.tracker import IssueTrackers
from rt.output.console import ConsoleProtocol, RichConsole
from rt.output.logger import ReleaseLogger
from rt.services.updates import ModuleUpdates


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: ReleaseConfig
    workspace: Workspace
    console: ConsoleProtocol
    logger: ReleaseLogger


def build_context() -> CLIContext:
    console = RichConsole()

    config = ReleaseConfig()
    config_path = resolve_config_path()
    if config_path is not None:
        config_result = load_config(config_path)
        if isinstance(config_result, Err):
            console.error(config_result.error.message)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
        config = config_result.value

    return CLIContext(
        config=config,
        workspace=Workspace(root=config.io.work_dir_path()),
        console=console,
        logger=ReleaseLogger(console),
    )


def issue_trackers(ctx: CLIContext) -> IssueTrackers:
    return IssueTrackers(
        [
            JiraIssueTracker(RealHttpClient(), ctx.config.jira, ctx.logger),
            GitHubIssueTracker(Path.cwd(), ctx.config.git.server, ctx.logger),
        ]
    )


def git_operations(ctx: CLIContext, trackers: IssueTrackers) -> GitOperations:
    return GitOperations(ctx.workspace, ctx.config.git, ctx.logger, trackers)


def module_updates(ctx: CLIContext) -> ModuleUpdates:
    execution = ctx.config.execution
    return ModuleUpdates(max_workers=execution.max_workers, timeout=execution.task_timeout)
