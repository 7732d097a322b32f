"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from rt.core.errors import ErrorCode
from rt.core.result import Err, Result
from rt.model.project import Project, project_by_name
from rt.model.train import Train, TrainIteration
from rt.model.trains import train_by_name
from rt.output.console import Style

if TYPE_CHECKING:
    from rt.cli.context import CLIContext


def exit_on_error[T, E](
    result: Result[T, E],
    ctx: CLIContext,
    error_code: ErrorCode = ErrorCode.UPDATE_ERROR,
) -> None:
    """Exit with error if result is Err, otherwise return.

    Expects error objects to have 'message' and optional 'hint' attributes.
    """
    if isinstance(result, Err):
        error = result.error
        message: str = getattr(error, "message", str(error))
        hint: str | None = getattr(error, "hint", None)
        ctx.console.error(message)
        if hint:
            ctx.console.print(f"hint: {hint}", Style.DIM)
        raise typer.Exit(code=int(error_code))


def exit_with_code(code: int) -> NoReturn:
    """Exit with given code. Explicit helper for clarity."""
    raise typer.Exit(code=code)


def resolve_train(ctx: CLIContext, name: str) -> Train:
    train = train_by_name(name)
    if train is None:
        ctx.console.error(f"unknown release train: {name}")
        exit_with_code(int(ErrorCode.USER_ERROR))
    return train


def resolve_project(ctx: CLIContext, name: str) -> Project:
    project = project_by_name(name)
    if project is None:
        ctx.console.error(f"unknown project: {name}")
        exit_with_code(int(ErrorCode.USER_ERROR))
    return project


def resolve_iteration(ctx: CLIContext, train_name: str, iteration_name: str) -> TrainIteration:
    train = resolve_train(ctx, train_name)
    try:
        return TrainIteration(train, train.iteration(iteration_name))
    except ValueError as e:
        ctx.console.error(str(e))
        exit_with_code(int(ErrorCode.USER_ERROR))
