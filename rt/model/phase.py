"""Direction of a release transition."""

from __future__ import annotations

from enum import Enum

__all__ = ["Phase"]


class Phase(Enum):
    """PREPARE points builds at release artifacts, CLEANUP back at snapshots."""

    PREPARE = "prepare"
    CLEANUP = "cleanup"

    @classmethod
    def parse(cls, value: str) -> Phase:
        """Case-insensitive lookup by value.

        Raises:
            ValueError: For anything other than ``prepare``/``cleanup``.
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"unknown phase {value!r} (expected prepare or cleanup)") from None

    def __str__(self) -> str:
        return self.value
