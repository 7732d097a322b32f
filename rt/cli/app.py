from __future__ import annotations

import os
from pathlib import Path

import typer

from rt import __version__
from rt.cli.commands.git_cmd import git_app
from rt.cli.commands.model_cmd import train, trains
from rt.cli.commands.tracker_cmd import tracker_app
from rt.cli.commands.update_cmd import update_app
from rt.cli.commands.workspace_cmd import cleanup, where
from rt.core.config import CONFIG_ENV
from rt.core.errors import ErrorCode

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(trains)
app.command()(train)
app.command()(where)
app.command()(cleanup)

# Sub-apps
app.add_typer(update_app, name="update", help="Update build files, docs and resources of a train iteration.")
app.add_typer(git_app, name="git", help="Git overviews across projects.")
app.add_typer(tracker_app, name="tracker", help="Issue tracker queries.")


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Path to release.toml (default: $RT_CONFIG or ./release.toml)",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if config is not None:
        path = config.expanduser()
        if not path.is_file():
            typer.echo(f"error: --config '{path}' does not exist", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        os.environ[CONFIG_ENV] = str(path)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


def main() -> None:
    app()
