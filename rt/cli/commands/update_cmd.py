"""File updates for a train iteration: build files, docs, changelogs, notices."""

from __future__ import annotations

import typer

from rt.cli.commands._helpers import exit_with_code, resolve_iteration
from rt.cli.context import CLIContext, build_context, git_operations, issue_trackers, module_updates
from rt.core.errors import ErrorCode
from rt.core.result import Err, Result
from rt.model.phase import Phase
from rt.output.console import Style
from rt.services.documentation import DocumentationOperations
from rt.services.gradle import GradleOperations
from rt.services.release import ReleaseOperations
from rt.services.updates import UpdateError, UpdateReport

update_app = typer.Typer(no_args_is_help=True)

_TRAIN_HELP = "Release train name, e.g. Hopper."
_ITERATION_HELP = "Iteration, e.g. M1, RC1, GA, SR2."


def _finish(ctx: CLIContext, result: Result[UpdateReport, UpdateError]) -> None:
    if isinstance(result, Err):
        error = result.error
        ctx.console.error(str(error))
        if error.hint:
            ctx.console.print(f"hint: {error.hint}", Style.DIM)
        exit_with_code(int(ErrorCode.UPDATE_ERROR))

    report = result.value
    if not report.changed:
        ctx.console.info("Nothing to update")
        return

    ctx.console.table(
        ("Project", "File"),
        [(u.module.project.name, u.location) for u in report],
    )
    ctx.console.success(f"Updated {len(report)} file(s)")


def _parse_phase(ctx: CLIContext, value: str) -> Phase:
    try:
        return Phase.parse(value)
    except ValueError as e:
        ctx.console.error(str(e))
        exit_with_code(int(ErrorCode.USER_ERROR))


@update_app.command("gradle")
def gradle(
    train: str = typer.Argument(..., help=_TRAIN_HELP),
    iteration: str = typer.Argument(..., help=_ITERATION_HELP),
    phase: str = typer.Option("prepare", "--phase", help="prepare (release) or cleanup (snapshot)."),
) -> None:
    """Set the Commons version and repository URLs of Gradle modules."""
    ctx = build_context()
    selected = resolve_iteration(ctx, train, iteration)
    operations = GradleOperations(
        ctx.workspace,
        ctx.logger,
        ctx.config.repository.base_url,
        module_updates(ctx),
    )
    _finish(ctx, operations.update_project(selected, _parse_phase(ctx, phase)))


@update_app.command("docs")
def docs(
    train: str = typer.Argument(..., help=_TRAIN_HELP),
    iteration: str = typer.Argument(..., help=_ITERATION_HELP),
) -> None:
    """Move Docbook includes of Commons to the iteration's tag."""
    ctx = build_context()
    selected = resolve_iteration(ctx, train, iteration)
    git = git_operations(ctx, issue_trackers(ctx))
    operations = DocumentationOperations(ctx.workspace, git, ctx.logger, module_updates(ctx))
    _finish(ctx, operations.update_docbook_includes(selected))


@update_app.command("changelog")
def changelog(
    train: str = typer.Argument(..., help=_TRAIN_HELP),
    iteration: str = typer.Argument(..., help=_ITERATION_HELP),
) -> None:
    """Insert tracker changelogs into every module and commit them."""
    ctx = build_context()
    selected = resolve_iteration(ctx, train, iteration)
    trackers = issue_trackers(ctx)
    operations = ReleaseOperations(
        ctx.workspace,
        trackers,
        git_operations(ctx, trackers),
        ctx.logger,
        module_updates(ctx),
    )
    _finish(ctx, operations.prepare_changelogs(selected))


@update_app.command("notice")
def notice(
    train: str = typer.Argument(..., help=_TRAIN_HELP),
    iteration: str = typer.Argument(..., help=_ITERATION_HELP),
) -> None:
    """Put each module's name and version on the first line of its notice file."""
    ctx = build_context()
    selected = resolve_iteration(ctx, train, iteration)
    trackers = issue_trackers(ctx)
    operations = ReleaseOperations(
        ctx.workspace,
        trackers,
        git_operations(ctx, trackers),
        ctx.logger,
        module_updates(ctx),
    )
    _finish(ctx, operations.update_resources(selected))
