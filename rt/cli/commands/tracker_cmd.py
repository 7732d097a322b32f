"""Issue tracker commands."""

from __future__ import annotations

import typer

from rt.cli.commands._helpers import exit_on_error, resolve_iteration, resolve_project
from rt.cli.context import build_context, issue_trackers
from rt.core.errors import ErrorCode

tracker_app = typer.Typer(no_args_is_help=True)


@tracker_app.command("changelog")
def changelog(
    train: str = typer.Argument(..., help="Release train name, e.g. Hopper."),
    iteration: str = typer.Argument(..., help="Iteration, e.g. M1, RC1, GA, SR2."),
    project: str = typer.Argument(..., help="Project name, e.g. Commons."),
) -> None:
    """Print the changelog the tracker reports for one module."""
    ctx = build_context()
    selected = resolve_iteration(ctx, train, iteration)
    wanted = resolve_project(ctx, project)

    try:
        module = selected.module(wanted)
    except ValueError as e:
        ctx.console.error(str(e))
        raise typer.Exit(code=int(ErrorCode.USER_ERROR)) from e

    result = issue_trackers(ctx).get_changelog_for(module)
    exit_on_error(result, ctx, ErrorCode.TRACKER_ERROR)
    ctx.console.print(result.unwrap().render())
