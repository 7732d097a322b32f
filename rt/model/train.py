"""Trains, modules and their per-iteration views.

A ``Train`` binds project versions together (``Module``). Materialising a
train at an iteration gives a ``TrainIteration`` whose items are
``ModuleIteration`` values: one project at one version in one iteration.

Usage:
    iteration = TrainIteration(CODD, M1)
    for module in iteration.modules_except(BUILD):
        print(module, module.version)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from rt.model.iteration import DEFAULT_ITERATIONS, Iteration, Iterations
from rt.model.project import Project
from rt.model.version import ArtifactVersion, Version

__all__ = [
    "Module",
    "ModuleIteration",
    "Train",
    "TrainIteration",
    "Transition",
]


class Transition(Enum):
    """How module versions move when deriving the next train."""

    MAJOR = "major"
    MINOR = "minor"


@dataclass(frozen=True, slots=True)
class Module:
    """A project's participation in a train at a base version.

    Attributes:
        project: The project.
        version: Base version, e.g. ``1.7``.
        custom_first_iteration: Iteration a late-joining module starts with
            instead of the train's initial one (e.g. ``M2``).
    """

    project: Project
    version: Version
    custom_first_iteration: Iteration | None = None

    @classmethod
    def of(cls, project: Project, version: str, custom_first_iteration: str | None = None) -> Module:
        return cls(
            project,
            Version.parse(version),
            Iteration(custom_first_iteration) if custom_first_iteration else None,
        )

    def has_name(self, name: str) -> bool:
        return self.project.name.lower() == name.strip().lower()

    def next(self, transition: Transition) -> Module:
        if transition is Transition.MAJOR:
            return Module(self.project, self.version.next_major())
        return Module(self.project, self.version.next_minor())

    def __str__(self) -> str:
        return f"{self.project.full_name} {self.version} - {self.project.key}"


@dataclass(frozen=True, slots=True)
class Train:
    """A named set of modules that ship together through ``iterations``."""

    name: str
    modules: tuple[Module, ...]
    iterations: Iterations = field(default=DEFAULT_ITERATIONS)

    def __post_init__(self) -> None:
        seen: set[Project] = set()
        for module in self.modules:
            if module.project in seen:
                raise ValueError(f"duplicate module {module.project.name} in train {self.name}")
            seen.add(module.project)

    @classmethod
    def of(cls, name: str, *modules: Module) -> Train:
        return cls(name, tuple(modules))

    def __iter__(self) -> Iterator[Module]:
        return iter(self.modules)

    def __len__(self) -> int:
        return len(self.modules)

    @property
    def log_name(self) -> str:
        return self.name

    def contains(self, project: Project) -> bool:
        return any(m.project == project for m in self.modules)

    def module(self, project_or_name: Project | str) -> Module:
        """Find a module by project or project name.

        Raises:
            ValueError: If the train has no such module.
        """
        for module in self.modules:
            if isinstance(project_or_name, Project):
                if module.project == project_or_name:
                    return module
            elif module.has_name(project_or_name):
                return module

        name = project_or_name.name if isinstance(project_or_name, Project) else project_or_name
        raise ValueError(f"no module found for project {name} in release train {self.name}")

    def iteration(self, name: str) -> Iteration:
        return self.iterations.by_name(name)

    def next(self, name: str, transition: Transition, *additional: Module) -> Train:
        """Derive the following train.

        Every module moves by ``transition``; an additional module replaces the
        bumped module of the same project or is appended if the project is new.
        """
        overrides = {m.project: m for m in additional}
        modules = [overrides.pop(m.project, m.next(transition)) for m in self.modules]
        modules.extend(m for m in additional if m.project in overrides)
        return Train(name, tuple(modules), self.iterations)

    def module_iteration(self, iteration: Iteration, project_or_name: Project | str) -> ModuleIteration:
        return ModuleIteration(self.module(project_or_name), TrainIteration(self, iteration))

    def module_iterations(self, iteration: Iteration, *exclusions: Project) -> list[ModuleIteration]:
        train_iteration = TrainIteration(self, iteration)
        return [
            ModuleIteration(module, train_iteration)
            for module in self.modules
            if module.project not in exclusions
        ]

    def module_version(self, project: Project, iteration: Iteration) -> ArtifactVersion:
        return self.module_iteration(iteration, project).version

    def __str__(self) -> str:
        lines = [self.name, ""]
        lines.extend(str(m) for m in self.modules)
        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class TrainIteration:
    """All modules of one train at one iteration, in train order."""

    train: Train
    iteration: Iteration

    def __post_init__(self) -> None:
        if self.iteration not in self.train.iterations:
            raise ValueError(f"iteration {self.iteration} is not part of train {self.train.name}")

    def __iter__(self) -> Iterator[ModuleIteration]:
        return iter(self.train.module_iterations(self.iteration))

    def __len__(self) -> int:
        return len(self.train)

    @property
    def log_name(self) -> str:
        return str(self)

    def modules_except(self, *exclusions: Project) -> list[ModuleIteration]:
        return self.train.module_iterations(self.iteration, *exclusions)

    def module(self, project_or_name: Project | str) -> ModuleIteration:
        return self.train.module_iteration(self.iteration, project_or_name)

    def module_version(self, project: Project) -> ArtifactVersion:
        return self.train.module_version(project, self.iteration)

    def previous_iteration(self, module: ModuleIteration) -> ModuleIteration:
        """The same module one iteration earlier.

        Raises:
            ValueError: For the train's first iteration.
        """
        previous = self.train.iterations.previous(self.iteration)
        return self.train.module_iteration(previous, module.project)

    def __str__(self) -> str:
        return f"{self.train.name} {self.iteration.name}"


@dataclass(frozen=True, slots=True)
class ModuleIteration:
    """One project at one version in one train iteration."""

    module: Module
    train_iteration: TrainIteration

    @property
    def project(self) -> Project:
        return self.module.project

    @property
    def train(self) -> Train:
        return self.train_iteration.train

    @property
    def iteration(self) -> Iteration:
        """The iteration this module ships in.

        A module with a custom first iteration uses it in place of the
        train's initial iteration.
        """
        train_iteration = self.train_iteration.iteration
        custom = self.module.custom_first_iteration
        if custom is not None and train_iteration.is_initial:
            return custom
        return train_iteration

    @property
    def version(self) -> ArtifactVersion:
        return ArtifactVersion.of(self)

    @property
    def log_name(self) -> str:
        return self.project.name

    @property
    def short_version_string(self) -> str:
        """``1.7 M1`` for previews, ``1.7.1`` for service releases."""
        short = self.version.to_short_string()
        iteration = self.iteration
        if iteration.is_service_iteration:
            return short
        return f"{short} {iteration.name}"

    @property
    def full_version_string(self) -> str:
        return f"{self.version} ({self.train_iteration})"

    def __str__(self) -> str:
        return f"{self.project.full_name} {self.short_version_string}"
