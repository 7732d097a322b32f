"""Release train iterations (milestones, release candidates, GA, service releases)."""

from __future__ import annotations

import functools
import re
from collections.abc import Iterator
from dataclasses import dataclass

__all__ = [
    "DEFAULT_ITERATIONS",
    "GA",
    "Iteration",
    "Iterations",
    "M1",
    "RC1",
    "SR1",
]

_NAME_RE = re.compile(r"^(M|RC|GA|SR)(\d*)$")
_KIND_RANK = {"M": 0, "RC": 1, "GA": 2, "SR": 3}


@functools.total_ordering
@dataclass(frozen=True, slots=True)
class Iteration:
    """A milestone marker within a train, e.g. ``M1``, ``RC2``, ``GA``, ``SR3``.

    Iterations order naturally: M < RC < GA < SR, then by number.
    """

    name: str

    def __post_init__(self) -> None:
        m = _NAME_RE.match(self.name)
        if m is None or (m.group(1) == "GA") == bool(m.group(2)):
            raise ValueError(f"invalid iteration name: {self.name!r}")

    @property
    def _kind(self) -> str:
        m = _NAME_RE.match(self.name)
        assert m is not None
        return m.group(1)

    @property
    def _number(self) -> int:
        m = _NAME_RE.match(self.name)
        assert m is not None
        return int(m.group(2) or 0)

    @property
    def is_ga(self) -> bool:
        return self.name == "GA"

    @property
    def is_service_iteration(self) -> bool:
        return self._kind == "SR"

    @property
    def is_public(self) -> bool:
        """GA and service releases go to the release repository."""
        return self.is_ga or self.is_service_iteration

    @property
    def is_preview(self) -> bool:
        return not self.is_public

    @property
    def is_initial(self) -> bool:
        return self.name == "M1"

    @property
    def bugfix_value(self) -> int:
        return self._number if self.is_service_iteration else 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Iteration):
            return NotImplemented
        return (_KIND_RANK[self._kind], self._number) < (_KIND_RANK[other._kind], other._number)

    def __str__(self) -> str:
        return self.name


M1 = Iteration("M1")
RC1 = Iteration("RC1")
GA = Iteration("GA")
SR1 = Iteration("SR1")


@dataclass(frozen=True, slots=True)
class Iterations:
    """The ordered iterations a train moves through."""

    iterations: tuple[Iteration, ...]

    def __post_init__(self) -> None:
        if not self.iterations:
            raise ValueError("a train needs at least one iteration")
        if list(self.iterations) != sorted(self.iterations):
            raise ValueError("iterations must be in ascending order")

    @classmethod
    def of(cls, *names: str) -> Iterations:
        return cls(tuple(Iteration(name) for name in names))

    def __iter__(self) -> Iterator[Iteration]:
        return iter(self.iterations)

    def __len__(self) -> int:
        return len(self.iterations)

    def __contains__(self, iteration: object) -> bool:
        return iteration in self.iterations

    def by_name(self, name: str) -> Iteration:
        """Case-insensitive lookup.

        Raises:
            ValueError: If no iteration has that name.
        """
        wanted = name.strip().upper()
        for iteration in self.iterations:
            if iteration.name == wanted:
                return iteration
        raise ValueError(f"no iteration found with name {name}")

    def previous(self, iteration: Iteration) -> Iteration:
        """Iteration right before ``iteration``.

        Raises:
            ValueError: For the first iteration or one not in this list.
        """
        idx = self._index(iteration)
        if idx == 0:
            raise ValueError(f"could not find previous iteration for {iteration}")
        return self.iterations[idx - 1]

    def next(self, iteration: Iteration) -> Iteration | None:
        idx = self._index(iteration)
        return self.iterations[idx + 1] if idx + 1 < len(self.iterations) else None

    def _index(self, iteration: Iteration) -> int:
        try:
            return self.iterations.index(iteration)
        except ValueError:
            raise ValueError(f"iteration {iteration} is not part of this train") from None


DEFAULT_ITERATIONS = Iterations.of("M1", "RC1", "GA", *(f"SR{n}" for n in range(1, 13)))
