"""Projects of the release family and their dependency relation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

__all__ = [
    "PROJECTS",
    "Project",
    "Tracker",
    "project_by_name",
    # catalog
    "BUILD",
    "CASSANDRA",
    "COMMONS",
    "COUCHBASE",
    "ELASTICSEARCH",
    "ENVERS",
    "GEMFIRE",
    "JPA",
    "KEY_VALUE",
    "LDAP",
    "MONGO_DB",
    "NEO4J",
    "REDIS",
    "REST",
    "SOLR",
]

FAMILY_NAME = "Spring Data"
REPOSITORY_PREFIX = "spring-data"


class Tracker(Enum):
    """Issue tracker a project files its tickets in."""

    JIRA = "jira"
    GITHUB = "github"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Project:
    """One sibling repository of the family, identified by its ticket key.

    Attributes:
        key: Ticket key, e.g. ``DATACMNS``.
        name: Display name, e.g. ``Commons``.
        dependencies: Projects this one builds against directly.
        tracker: Where tickets for this project live.
    """

    key: str
    name: str
    dependencies: tuple[Project, ...] = field(default=(), compare=False, repr=False)
    tracker: Tracker = field(default=Tracker.JIRA, compare=False)

    def depends_on(self, other: Project) -> bool:
        """True if ``other`` is a direct or transitive dependency."""
        return any(dep == other or dep.depends_on(other) for dep in self.dependencies)

    def uses(self, tracker: Tracker) -> bool:
        return self.tracker is tracker

    @property
    def full_name(self) -> str:
        return f"{FAMILY_NAME} {self.name}"

    @property
    def repository_name(self) -> str:
        """Repository (and checkout directory) name, e.g. ``spring-data-commons``."""
        return f"{REPOSITORY_PREFIX}-{self.name.lower()}"

    @property
    def log_name(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name


BUILD = Project("DATABUILD", "Build", tracker=Tracker.GITHUB)
COMMONS = Project("DATACMNS", "Commons", (BUILD,))
JPA = Project("DATAJPA", "JPA", (COMMONS,))
MONGO_DB = Project("DATAMONGO", "MongoDB", (COMMONS,))
NEO4J = Project("DATAGRAPH", "Neo4j", (COMMONS,))
SOLR = Project("DATASOLR", "Solr", (COMMONS,))
COUCHBASE = Project("DATACOUCH", "Couchbase", (COMMONS,))
CASSANDRA = Project("DATACASS", "Cassandra", (COMMONS,))
ELASTICSEARCH = Project("DATAES", "Elasticsearch", (COMMONS,))
KEY_VALUE = Project("DATAKV", "KeyValue", (COMMONS,))
REDIS = Project("DATAREDIS", "Redis", (KEY_VALUE,))
GEMFIRE = Project("SGF", "Gemfire", (COMMONS,))
ENVERS = Project("DATAENV", "Envers", (JPA,))
LDAP = Project("DATALDAP", "LDAP", (COMMONS,))
REST = Project("DATAREST", "REST", (COMMONS, JPA, MONGO_DB, NEO4J, GEMFIRE, SOLR, CASSANDRA, KEY_VALUE))

# Canonical order; also the sort order for per-project reports.
PROJECTS: tuple[Project, ...] = (
    BUILD,
    COMMONS,
    JPA,
    MONGO_DB,
    NEO4J,
    SOLR,
    COUCHBASE,
    CASSANDRA,
    ELASTICSEARCH,
    KEY_VALUE,
    REDIS,
    GEMFIRE,
    ENVERS,
    LDAP,
    REST,
)


def project_by_name(name: str) -> Project | None:
    """Case-insensitive lookup by name or ticket key."""
    wanted = name.strip().lower()
    for project in PROJECTS:
        if project.name.lower() == wanted or project.key.lower() == wanted:
            return project
    return None


def project_order(project: Project) -> int:
    """Position in the canonical catalog (unknown projects sort last)."""
    try:
        return PROJECTS.index(project)
    except ValueError:
        return len(PROJECTS)
