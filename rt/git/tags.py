"""Version tags of a repository."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rt.model.version import ArtifactVersion

if TYPE_CHECKING:
    from rt.model.train import ModuleIteration

__all__ = ["Tag", "VersionTags"]


@dataclass(frozen=True, slots=True)
class Tag:
    """A git tag; version tags look like ``1.7.0.RELEASE`` or ``v1.7.0.RELEASE``."""

    name: str

    @property
    def _version_source(self) -> str:
        return self.name[1:] if self.name.startswith("v") else self.name

    @property
    def is_version_tag(self) -> bool:
        try:
            self.to_artifact_version()
        except ValueError:
            return False
        return True

    def to_artifact_version(self) -> ArtifactVersion:
        """Raises ValueError for tags that are not version tags."""
        return ArtifactVersion.parse(self._version_source)

    def create_new(self, version: ArtifactVersion) -> Tag:
        """A tag for ``version`` in the same format (with or without ``v``)."""
        prefix = "v" if self.name.startswith("v") else ""
        return Tag(f"{prefix}{version}")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class VersionTags:
    """Version tags only, oldest first."""

    tags: tuple[Tag, ...]

    @classmethod
    def of(cls, tags: Iterable[Tag]) -> VersionTags:
        versioned = [t for t in tags if t.is_version_tag]
        versioned.sort(key=Tag.to_artifact_version)
        return cls(tuple(versioned))

    @classmethod
    def from_names(cls, names: Iterable[str]) -> VersionTags:
        return cls.of(Tag(n.strip()) for n in names if n.strip())

    def __iter__(self) -> Iterator[Tag]:
        return iter(self.tags)

    def __len__(self) -> int:
        return len(self.tags)

    def __contains__(self, tag: object) -> bool:
        return tag in self.tags

    def latest(self) -> Tag:
        """Raises ValueError if the repository has no version tags."""
        if not self.tags:
            raise ValueError("no version tags found")
        return self.tags[-1]

    def create_tag(self, module: ModuleIteration) -> Tag:
        """The tag ``module`` is (or will be) released under."""
        return self.latest().create_new(module.version)
