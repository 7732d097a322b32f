"""Typed loading of ``release.toml``.

Example file:

    [io]
    work_dir = "~/release-work"

    [git]
    author = "Release Bot <release@example.org>"
    server = "https://github.com/spring-projects/"

    [repository]
    base_url = "https://repo.spring.io/libs-"

    [jira]
    url = "https://jira.spring.io"
    username = "release-bot"

    [execution]
    max_workers = 8
    task_timeout = 300.0

Every table and key is optional; missing values fall back to the defaults
below. Secrets are never read from the file (see ``JIRA_PASSWORD_ENV``).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_int, get_str, get_table

__all__ = [
    "CONFIG_ENV",
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ExecutionConfig",
    "GitConfig",
    "IoConfig",
    "JIRA_PASSWORD_ENV",
    "JiraConfig",
    "ReleaseConfig",
    "RepositoryConfig",
    "WORK_DIR_ENV",
    "load_config",
    "load_config_or_default",
    "resolve_config_path",
]

CONFIG_FILE_NAME = "release.toml"
CONFIG_ENV = "RT_CONFIG"
WORK_DIR_ENV = "RT_WORK_DIR"
JIRA_PASSWORD_ENV = "RT_JIRA_PASSWORD"

DEFAULT_WORK_DIR = "~/release-work"
DEFAULT_GIT_SERVER = "https://github.com/spring-projects/"
DEFAULT_REPOSITORY_BASE_URL = "https://repo.spring.io/libs-"
DEFAULT_JIRA_URL = "https://jira.spring.io"
DEFAULT_MAX_WORKERS = 8
DEFAULT_TASK_TIMEOUT_SECONDS = 300.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class IoConfig:
    work_dir: str = DEFAULT_WORK_DIR

    def work_dir_path(self) -> Path:
        """Work directory with ``~`` expanded; ``$RT_WORK_DIR`` wins when set."""
        override = os.environ.get(WORK_DIR_ENV)
        return Path(override or self.work_dir).expanduser()


@dataclass(frozen=True, slots=True)
class GitConfig:
    author: str | None = None
    server: str = DEFAULT_GIT_SERVER


@dataclass(frozen=True, slots=True)
class RepositoryConfig:
    """Artifact repository base; ``release``/``milestone``/``snapshot`` get appended."""

    base_url: str = DEFAULT_REPOSITORY_BASE_URL


@dataclass(frozen=True, slots=True)
class JiraConfig:
    url: str = DEFAULT_JIRA_URL
    username: str | None = None

    def password(self) -> str | None:
        return os.environ.get(JIRA_PASSWORD_ENV) or None


@dataclass(frozen=True, slots=True)
class ExecutionConfig:
    """Fan-out limits for work that runs once per project."""

    max_workers: int = DEFAULT_MAX_WORKERS
    task_timeout: float = DEFAULT_TASK_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Main configuration container."""

    io: IoConfig = field(default_factory=IoConfig)
    git: GitConfig = field(default_factory=GitConfig)
    repository: RepositoryConfig = field(default_factory=RepositoryConfig)
    jira: JiraConfig = field(default_factory=JiraConfig)
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseConfig:
        """Create a config from parsed TOML.

        Raises:
            ValueError: If a numeric limit is out of range.
        """
        io: StrDict = get_table(data, "io") or {}
        git: StrDict = get_table(data, "git") or {}
        repository: StrDict = get_table(data, "repository") or {}
        jira: StrDict = get_table(data, "jira") or {}
        execution: StrDict = get_table(data, "execution") or {}

        max_workers = get_int(execution, "max_workers")
        if max_workers is not None and max_workers < 1:
            raise ValueError("execution.max_workers must be at least 1")

        task_timeout = get_float(execution, "task_timeout")
        if task_timeout is not None and task_timeout <= 0:
            raise ValueError("execution.task_timeout must be positive")

        return cls(
            io=IoConfig(work_dir=get_str(io, "work_dir") or DEFAULT_WORK_DIR),
            git=GitConfig(
                author=get_str(git, "author"),
                server=get_str(git, "server") or DEFAULT_GIT_SERVER,
            ),
            repository=RepositoryConfig(
                base_url=get_str(repository, "base_url") or DEFAULT_REPOSITORY_BASE_URL,
            ),
            jira=JiraConfig(
                url=(get_str(jira, "url") or DEFAULT_JIRA_URL).rstrip("/"),
                username=get_str(jira, "username"),
            ),
            execution=ExecutionConfig(
                max_workers=max_workers or DEFAULT_MAX_WORKERS,
                task_timeout=task_timeout or DEFAULT_TASK_TIMEOUT_SECONDS,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load and parse configuration from a TOML file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaseConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path | None) -> ReleaseConfig:
    """Load config from file, or return the default config if it can't be read."""
    if path is None:
        return ReleaseConfig()
    result = load_config(path)
    if isinstance(result, Ok):
        return result.value
    return ReleaseConfig()


def resolve_config_path(explicit: Path | None = None, *, cwd: Path | None = None) -> Path | None:
    """Pick the config file: explicit option, then ``$RT_CONFIG``, then ``./release.toml``."""
    if explicit is not None:
        return explicit.expanduser()

    env_value = os.environ.get(CONFIG_ENV)
    if env_value:
        return Path(env_value).expanduser()

    candidate = (cwd or Path.cwd()) / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None
