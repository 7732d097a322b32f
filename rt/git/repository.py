"""Git repository abstraction.

Thin wrapper over the ``git`` binary for one project checkout. All operations
return Result types.

Usage:
    repo = Repository(workspace.project_directory(COMMONS))

    match repo.tags():
        case Ok(names):
            print(names)
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rt.core.result import Err, Ok, Result
from rt.platform.process import ProcessError
from rt.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

# Separates commit messages in ``git log`` output; never part of a message.
_RECORD_SEPARATOR = "\x1e"

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1

    def __str__(self) -> str:
        return f"git {self.command}: {self.message}"


def _git_error(command: str, error: ProcessError, fallback: str) -> GitError:
    return GitError(
        command=command,
        message=error.stderr.strip() or error.stdout.strip() or fallback,
        returncode=error.returncode,
    )


class Repository:
    """Git operations on a single checkout.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """Check if this is a valid git repository."""
        return (self.path / ".git").exists()

    def tags(self) -> Result[list[str], GitError]:
        """All tag names (``git tag -l``)."""
        result = self._run(["tag", "-l"])
        match result:
            case Err(e):
                return Err(_git_error("tag -l", e, "listing tags failed"))
            case Ok(stdout):
                return Ok([line.strip() for line in stdout.splitlines() if line.strip()])

    def remote_branches(self, pattern: str) -> Result[list[str], GitError]:
        """Remote branch names matching ``pattern``, e.g. ``origin/issue/*``."""
        result = self._run(["branch", "-r", "--list", pattern])
        match result:
            case Err(e):
                return Err(_git_error("branch -r", e, "listing remote branches failed"))
            case Ok(stdout):
                names: list[str] = []
                for line in stdout.splitlines():
                    name = line.strip()
                    # Skip symbolic refs such as "origin/HEAD -> origin/main".
                    if name and "->" not in name:
                        names.append(name)
                return Ok(names)

    def add(self, *paths: Path) -> Result[None, GitError]:
        args = [str(p.relative_to(self.path)) if p.is_absolute() else str(p) for p in paths]
        result = self._run(["add", "--", *args])
        if isinstance(result, Err):
            return Err(_git_error("add", result.error, "add failed"))
        return Ok(None)

    def commit(self, message: str, *paths: Path, author: str | None = None) -> Result[None, GitError]:
        """Commit exactly ``paths`` (or the index if none are given)."""
        args = ["commit", "-m", message]
        if author:
            args.append(f"--author={author}")
        if paths:
            args.append("--")
            args.extend(str(p.relative_to(self.path)) if p.is_absolute() else str(p) for p in paths)

        result = self._run(args)
        if isinstance(result, Err):
            return Err(_git_error("commit", result.error, "commit failed"))
        return Ok(None)

    def log_messages(self, from_ref: str, to_ref: str) -> Result[list[str], GitError]:
        """Full commit messages reachable from ``to_ref`` but not ``from_ref``, newest first."""
        result = self._run(["log", f"--format=%B{_RECORD_SEPARATOR}", f"{from_ref}..{to_ref}"])
        match result:
            case Err(e):
                return Err(_git_error("log", e, f"log {from_ref}..{to_ref} failed"))
            case Ok(stdout):
                return Ok([m.strip() for m in stdout.split(_RECORD_SEPARATOR) if m.strip()])

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=_GIT_TIMEOUT_SECONDS)
