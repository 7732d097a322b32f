"""Git overview commands."""

from __future__ import annotations

import typer

from rt.cli.commands._helpers import exit_on_error, exit_with_code
from rt.cli.context import build_context, git_operations, issue_trackers
from rt.core.errors import ErrorCode
from rt.model.project import project_by_name
from rt.model.trains import train_by_name
from rt.services.workflow import CodeWorkflowOperations

git_app = typer.Typer(no_args_is_help=True)


@git_app.command("ticketbranches")
def ticketbranches(
    argument: str = typer.Argument(..., help="Project name (e.g. Commons) or release train name."),
    resolved: bool = typer.Option(False, "--resolved", help="Only branches whose ticket is resolved."),
) -> None:
    """List ticket branches with the status of their tickets."""
    ctx = build_context()
    execution = ctx.config.execution
    operations = CodeWorkflowOperations(
        git_operations(ctx, issue_trackers(ctx)),
        max_workers=execution.max_workers,
        timeout=execution.task_timeout,
    )

    project = project_by_name(argument)
    train = train_by_name(argument) if project is None else None
    if project is not None:
        result = operations.ticket_branches_for_project(project)
    elif train is not None:
        result = operations.ticket_branches_for_train(train)
    else:
        ctx.console.error(f"release train or project {argument} unknown")
        exit_with_code(int(ErrorCode.USER_ERROR))

    exit_on_error(result, ctx, ErrorCode.ENV_ERROR)

    rows: list[tuple[str, str, str, str]] = []
    for branches in result.unwrap():
        selected = branches.resolved_only() if resolved else branches
        for branch in selected:
            ticket = selected.ticket(branch)
            rows.append(
                (
                    branches.project_name,
                    branch.name,
                    ticket.status if ticket else "unknown",
                    ticket.summary if ticket else "",
                )
            )

    if not rows:
        ctx.console.info("No ticket branches found")
        return
    ctx.console.table(("Project", "Branch", "Status", "Summary"), rows)
