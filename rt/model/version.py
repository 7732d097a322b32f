"""Numeric versions and Maven-style artifact versions.

``Version`` is the plain ``major.minor[.bugfix[.build]]`` number of a module.
``ArtifactVersion`` adds the release qualifier used in published artifacts:

    1.7.0.M1
    1.7.0.RC1
    1.7.0.RELEASE
    1.7.1.BUILD-SNAPSHOT
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rt.model.train import ModuleIteration

__all__ = [
    "ArtifactVersion",
    "RELEASE_SUFFIX",
    "SNAPSHOT_SUFFIX",
    "Version",
]

RELEASE_SUFFIX = "RELEASE"
SNAPSHOT_SUFFIX = "BUILD-SNAPSHOT"

_MILESTONE_RE = re.compile(r"^(M|RC)(\d+)$")
_VALID_SUFFIX_RE = re.compile(r"^(RELEASE|BUILD-SNAPSHOT|M\d+|RC\d+)$")


@dataclass(frozen=True, slots=True, order=True)
class Version:
    major: int
    minor: int = 0
    bugfix: int = 0
    build: int = 0

    def __post_init__(self) -> None:
        for part in (self.major, self.minor, self.bugfix, self.build):
            if part < 0:
                raise ValueError(f"version parts must be >= 0: {self.major}.{self.minor}")

    @classmethod
    def parse(cls, source: str) -> Version:
        """Parse ``1``, ``1.7``, ``1.7.2`` or ``1.7.2.4``.

        Raises:
            ValueError: If the string is empty, has more than four parts or
                contains a non-numeric part.
        """
        text = source.strip()
        if not text:
            raise ValueError("version must not be empty")

        parts = text.split(".")
        if len(parts) > 4:
            raise ValueError(f"at most four version parts allowed: {source}")
        if not all(p.isdigit() for p in parts):
            raise ValueError(f"invalid version: {source}")

        return cls(*(int(p) for p in parts))

    def next_major(self) -> Version:
        return Version(self.major + 1)

    def next_minor(self) -> Version:
        return Version(self.major, self.minor + 1)

    def next_bugfix(self) -> Version:
        return Version(self.major, self.minor, self.bugfix + 1)

    def with_bugfix(self, bugfix: int) -> Version:
        return Version(self.major, self.minor, bugfix)

    def to_major_minor_bugfix(self) -> str:
        return f"{self.major}.{self.minor}.{self.bugfix}"

    def __str__(self) -> str:
        digits = [self.major, self.minor]
        if self.bugfix or self.build:
            digits.append(self.bugfix)
        if self.build:
            digits.append(self.build)
        return ".".join(str(d) for d in digits)


def _suffix_key(suffix: str) -> tuple[int, int]:
    if suffix == SNAPSHOT_SUFFIX:
        return (0, 0)
    if suffix == RELEASE_SUFFIX:
        return (3, 0)
    m = _MILESTONE_RE.match(suffix)
    if m is None:
        raise ValueError(f"invalid version suffix: {suffix}")
    return (1 if m.group(1) == "M" else 2, int(m.group(2)))


@functools.total_ordering
@dataclass(frozen=True, slots=True)
class ArtifactVersion:
    """A version plus release qualifier.

    Ordering is by version first, then snapshot < milestone < RC < release.
    """

    version: Version
    suffix: str = RELEASE_SUFFIX

    def __post_init__(self) -> None:
        if not _VALID_SUFFIX_RE.match(self.suffix):
            raise ValueError(f"invalid version suffix: {self.suffix}")

    @classmethod
    def parse(cls, source: str) -> ArtifactVersion:
        """Parse ``<version>.<suffix>``, e.g. ``1.4.5.RELEASE``.

        Raises:
            ValueError: On a missing or unknown suffix or a bad version part.
        """
        text = source.strip()
        idx = text.rfind(".")
        if idx <= 0:
            raise ValueError(f"invalid artifact version: {source}")
        return cls(Version.parse(text[:idx]), text[idx + 1 :])

    @classmethod
    def of(cls, module: ModuleIteration) -> ArtifactVersion:
        """Derive the artifact version a module ships in its iteration.

        GA maps to ``RELEASE``, ``SR<n>`` to bugfix ``n`` + ``RELEASE`` and any
        preview iteration name (``M1``, ``RC2``) becomes the suffix.
        """
        version = module.module.version
        iteration = module.iteration

        if iteration.is_ga:
            return cls(version, RELEASE_SUFFIX)
        if iteration.is_service_iteration:
            return cls(version.with_bugfix(iteration.bugfix_value), RELEASE_SUFFIX)
        return cls(version, iteration.name)

    @property
    def is_release(self) -> bool:
        return self.suffix == RELEASE_SUFFIX

    @property
    def is_milestone(self) -> bool:
        return _MILESTONE_RE.match(self.suffix) is not None

    @property
    def is_snapshot(self) -> bool:
        return self.suffix == SNAPSHOT_SUFFIX

    def snapshot_version(self) -> ArtifactVersion:
        return ArtifactVersion(self.version, SNAPSHOT_SUFFIX)

    def next_development_version(self) -> ArtifactVersion:
        """Snapshot version development continues with after this one.

        A GA release (bugfix 0) moves to the next minor, a service release to
        the next bugfix, milestones and RCs stay on their version.
        """
        if self.is_release:
            is_ga = self.version.with_bugfix(0) == self.version
            next_version = self.version.next_minor() if is_ga else self.version.next_bugfix()
            return ArtifactVersion(next_version, SNAPSHOT_SUFFIX)

        return self if self.is_snapshot else self.snapshot_version()

    def next_bugfix_version(self) -> ArtifactVersion:
        if self.is_release:
            return ArtifactVersion(self.version.next_bugfix(), SNAPSHOT_SUFFIX)
        return self if self.is_snapshot else self.snapshot_version()

    def to_short_string(self) -> str:
        """Plain version without trailing zero bugfix, e.g. ``1.7``."""
        return str(self.version)

    def _key(self) -> tuple[Version, tuple[int, int]]:
        return (self.version, _suffix_key(self.suffix))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ArtifactVersion):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        return f"{self.version.to_major_minor_bugfix()}.{self.suffix}"
