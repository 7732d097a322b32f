"""Git access for project checkouts.

- Repository: single checkout, wraps the ``git`` binary
- GitOperations: tags, commits, ticket branches and ticket references
"""

from rt.git.branch import Branch
from rt.git.commits import ParsedCommitMessage, parse_commit_message
from rt.git.operations import GitOperations
from rt.git.project import GitProject
from rt.git.repository import GitError, Repository
from rt.git.tags import Tag, VersionTags

__all__ = [
    "Branch",
    "GitError",
    "GitOperations",
    "GitProject",
    "ParsedCommitMessage",
    "Repository",
    "Tag",
    "VersionTags",
    "parse_commit_message",
]
