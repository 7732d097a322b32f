"""Release services.

Services implement the release workflows on top of the model (model/), the
workspace (core/) and the git and issue-tracker collaborators (git/, issues/).
"""

from rt.services.documentation import DocumentationOperations
from rt.services.gradle import GradleOperations
from rt.services.release import ReleaseOperations
from rt.services.updates import FileUpdate, ModuleUpdates, UpdateError, UpdateReport
from rt.services.workflow import CodeWorkflowOperations

__all__ = [
    "CodeWorkflowOperations",
    "DocumentationOperations",
    "FileUpdate",
    "GradleOperations",
    "ModuleUpdates",
    "ReleaseOperations",
    "UpdateError",
    "UpdateReport",
]
