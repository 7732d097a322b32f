"""Release train catalog commands."""

from __future__ import annotations

import typer

from rt.cli.commands._helpers import resolve_train
from rt.cli.context import build_context
from rt.model.trains import TRAINS


def trains() -> None:
    """List the known release trains."""
    ctx = build_context()
    rows = [(t.name, str(len(t)), ", ".join(i.name for i in t.iterations)) for t in TRAINS]
    ctx.console.table(("Train", "Modules", "Iterations"), rows, title="Release trains")


def train(
    name: str = typer.Argument(..., help="Release train name, e.g. Hopper."),
) -> None:
    """Show the modules of a release train."""
    ctx = build_context()
    selected = resolve_train(ctx, name)

    rows = [
        (
            module.project.full_name,
            str(module.version),
            module.project.key,
            str(module.custom_first_iteration or ""),
        )
        for module in selected
    ]
    ctx.console.table(("Project", "Version", "Key", "Starts at"), rows, title=selected.name)
