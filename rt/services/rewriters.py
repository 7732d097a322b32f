"""Line rewriters for ``Workspace.process_file``.

Each factory binds the values computed for one module and returns a pure
``(line, index) -> str | None`` function. Lines a rule does not target are
returned unchanged, and applying a rule to its own output changes nothing
further.
"""

from __future__ import annotations

from rt.core.workspace import LineRewriter
from rt.model.phase import Phase

__all__ = [
    "changelog_insertion",
    "docs_include",
    "gradle_property",
    "notice_header",
    "repository_url",
]

CHANGELOG_ANCHOR = "="
INCLUDE_DIRECTIVE = "xi:include"


def gradle_property(key: str, value: str) -> LineRewriter:
    """Replace any line mentioning ``key`` with ``key=value``."""
    replacement = f"{key}={value}"

    def rewrite(line: str, index: int) -> str:
        return replacement if key in line else line

    return rewrite


def repository_url(phase: Phase, release_url: str, snapshot_url: str) -> LineRewriter:
    """Point repository URLs at the release (PREPARE) or snapshot (CLEANUP) repository."""
    if phase is Phase.PREPARE:
        source, target = snapshot_url, release_url
    else:
        source, target = release_url, snapshot_url

    def rewrite(line: str, index: int) -> str:
        return line.replace(source, target) if source in line else line

    return rewrite


def docs_include(repository_name: str, previous_tag: str, new_tag: str) -> LineRewriter:
    """Move include directives that reference ``repository_name`` to ``new_tag``."""

    def rewrite(line: str, index: int) -> str:
        if INCLUDE_DIRECTIVE in line and repository_name in line:
            return line.replace(previous_tag, new_tag)
        return line

    return rewrite


def changelog_insertion(body: str) -> LineRewriter:
    """Insert ``body`` after every line starting with ``=``.

    The anchor line is kept; the body follows after a blank line.
    """

    def rewrite(line: str, index: int) -> str:
        if line.startswith(CHANGELOG_ANCHOR):
            return f"{line}\n\n{body}"
        return line

    return rewrite


def notice_header(display: str) -> LineRewriter:
    """Replace the first line only."""

    def rewrite(line: str, index: int) -> str:
        return display if index == 0 else line

    return rewrite
