"""Work directory commands."""

from __future__ import annotations

import typer

from rt.cli.context import build_context
from rt.model.project import PROJECTS


def where() -> None:
    """Show the work directory and which project checkouts it holds."""
    ctx = build_context()
    ws = ctx.workspace
    ctx.console.print(f"work directory: {ws.root}")

    rows = [
        (project.name, project.repository_name, "yes" if ws.has_project_directory(project) else "no")
        for project in PROJECTS
    ]
    ctx.console.table(("Project", "Repository", "Checked out"), rows)


def cleanup(
    yes: bool = typer.Option(False, "--yes", "-y", help="Execute (default is dry-run)"),
) -> None:
    """Delete everything below the work directory."""
    ctx = build_context()
    ws = ctx.workspace

    if not ws.root.is_dir() or not any(ws.root.iterdir()):
        ctx.console.print("Nothing to clean")
        return

    if not yes:
        ctx.console.warning(f"DRY-RUN: would delete the contents of {ws.root}")
        ctx.console.print("Use -y to execute")
        return

    ws.cleanup()
    ctx.console.success(f"Cleaned {ws.root}")
