"""Gradle build updates: Commons version property and repository URLs."""

from __future__ import annotations

from rt.core.result import Err, Ok, Result
from rt.core.workspace import Workspace
from rt.model.iteration import Iteration
from rt.model.phase import Phase
from rt.model.project import BUILD, COMMONS
from rt.model.train import ModuleIteration, TrainIteration
from rt.output.logger import ReleaseLogger
from rt.services.rewriters import gradle_property, repository_url
from rt.services.updates import FileUpdate, ModuleUpdates, UpdateError, UpdateReport, process

__all__ = ["GradleOperations", "release_repository_url", "snapshot_repository_url"]

BUILD_GRADLE = "build.gradle"
GRADLE_PROPERTIES = "gradle.properties"
COMMONS_PROPERTY = "springDataCommonsVersion"


def release_repository_url(base_url: str, iteration: Iteration) -> str:
    """``libs-release`` for GA and service releases, ``libs-milestone`` otherwise."""
    return base_url + ("release" if iteration.is_public else "milestone")


def snapshot_repository_url(base_url: str) -> str:
    return base_url + "snapshot"


class GradleOperations:
    def __init__(
        self,
        workspace: Workspace,
        logger: ReleaseLogger,
        repository_base_url: str,
        updates: ModuleUpdates | None = None,
    ) -> None:
        self._workspace = workspace
        self._logger = logger
        self._base_url = repository_base_url
        self._updates = updates or ModuleUpdates()

    def update_project(self, iteration: TrainIteration, phase: Phase) -> Result[UpdateReport, UpdateError]:
        """Point every Gradle module at the Commons version and repository of ``phase``.

        PREPARE sets the Commons release version and the release repository,
        CLEANUP the next development version and the snapshot repository.
        Modules without a ``build.gradle`` are skipped.
        """
        commons_version = iteration.module_version(COMMONS)
        version = commons_version if phase is Phase.PREPARE else commons_version.next_development_version()

        release_url = release_repository_url(self._base_url, iteration.iteration)
        snapshot_url = snapshot_repository_url(self._base_url)
        target_url = release_url if phase is Phase.PREPARE else snapshot_url

        property_rewriter = gradle_property(COMMONS_PROPERTY, str(version))
        url_rewriter = repository_url(phase, release_url, snapshot_url)

        def update(module: ModuleIteration) -> Result[list[FileUpdate], UpdateError]:
            project = module.project
            if not self._workspace.exists(BUILD_GRADLE, project):
                return Ok([])

            changed: list[FileUpdate] = []

            if self._workspace.exists(GRADLE_PROPERTIES, project):
                result = process(self._workspace, module, GRADLE_PROPERTIES, property_rewriter)
                if isinstance(result, Err):
                    return result
                if result.value:
                    self._logger.log(
                        project, "Setting Spring Data Commons version in %s to %s.", GRADLE_PROPERTIES, version
                    )
                    changed.append(FileUpdate(module, GRADLE_PROPERTIES))

            result = process(self._workspace, module, BUILD_GRADLE, url_rewriter)
            if isinstance(result, Err):
                return result
            if result.value:
                self._logger.log(project, "Switching to Spring repository %s.", target_url)
                changed.append(FileUpdate(module, BUILD_GRADLE))

            return Ok(changed)

        return self._updates.run(iteration.modules_except(BUILD), update)
