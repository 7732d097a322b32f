"""Explicit success/failure values.

Release operations touch many repositories in one run; every step that can
fail returns a Result so the orchestrators decide whether to continue or to
stop and name the offending module.

Usage:
    def parse_train(name: str) -> Result[Train, str]:
        train = find_train(name)
        if train is None:
            return Err(f"unknown train: {name}")
        return Ok(train)

    match parse_train("Codd"):
        case Ok(train):
            print(train.name)
        case Err(message):
            print(f"error: {message}")
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful outcome carrying ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Return the value."""
        return self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed outcome carrying ``error``."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> None:
        """Raise ValueError describing the error.

        Raises:
            ValueError: Always.
        """
        raise ValueError(f"called unwrap on Err: {self.error}")

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
