"""Release train domain model."""

from .iteration import DEFAULT_ITERATIONS, Iteration, Iterations
from .phase import Phase
from .project import PROJECTS, Project, Tracker, project_by_name
from .train import Module, ModuleIteration, Train, TrainIteration, Transition
from .trains import TRAINS, train_by_name
from .version import ArtifactVersion, Version

__all__ = [
    "ArtifactVersion",
    "DEFAULT_ITERATIONS",
    "Iteration",
    "Iterations",
    "Module",
    "ModuleIteration",
    "PROJECTS",
    "Phase",
    "Project",
    "TRAINS",
    "Tracker",
    "Train",
    "TrainIteration",
    "Transition",
    "Version",
    "project_by_name",
    "train_by_name",
]
