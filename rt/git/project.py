"""Remote coordinates of a project's repository."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

from rt.model.project import Project

__all__ = ["GitProject"]


@dataclass(frozen=True, slots=True)
class GitProject:
    """A project on a git server such as ``https://github.com/spring-projects/``."""

    project: Project
    server: str

    @property
    def repository_name(self) -> str:
        return self.project.repository_name

    @property
    def project_uri(self) -> str:
        base = self.server if self.server.endswith("/") else self.server + "/"
        return base + self.repository_name

    @property
    def owner(self) -> str:
        """Organisation part of the server URL (``spring-projects``)."""
        path = urlparse(self.server).path.strip("/")
        return path.split("/")[-1] if path else ""

    @property
    def slug(self) -> str:
        """``owner/repository`` as used by the GitHub API."""
        return f"{self.owner}/{self.repository_name}"
