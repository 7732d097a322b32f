"""Process exit codes for the release CLI."""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: User error (unknown train, project or iteration)
    - 2: Environment error (missing work directory, missing git/gh, bad config)
    - 3: Update error (a file rewrite or commit failed)
    - 4: Tracker error (issue tracker unreachable or returned garbage)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    UPDATE_ERROR = 3
    TRACKER_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
