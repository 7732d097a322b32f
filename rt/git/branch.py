"""Branch names as used by the release tooling."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Branch", "TICKET_BRANCH_PREFIX"]

TICKET_BRANCH_PREFIX = "issue/"


@dataclass(frozen=True, slots=True)
class Branch:
    """A branch reduced to its last path segment.

    ``origin/issue/DATACMNS-123`` and ``issue/DATACMNS-123`` both become
    ``DATACMNS-123``, which for ticket branches is the ticket id.
    """

    name: str

    @classmethod
    def from_name(cls, name: str) -> Branch:
        text = name.strip()
        return cls(text[text.rfind("/") + 1 :])

    def __str__(self) -> str:
        return self.name
