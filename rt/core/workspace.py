"""Local checkouts of all projects below one work directory.

Layout:

    <work_dir>/
      spring-data-commons/
      spring-data-jpa/
      ...

``Workspace.process_file`` is the single way update operations touch files:
it streams a file through a line rewriter and writes the result back only
if something changed.
"""

from __future__ import annotations

import re
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from rt.core.result import Err, Ok, Result
from rt.platform.files import atomic_write_text, detect_line_separator

if TYPE_CHECKING:
    from rt.model.project import Project

__all__ = [
    "FileError",
    "LineRewriter",
    "Workspace",
]

_LINE_BREAK = re.compile(r"(\r?\n)")

LineRewriter = Callable[[str, int], str | None]
"""Maps ``(line, index)`` to the replacement text.

The result may be the line itself, a modified line, a block spanning
several lines (``\\n`` separated) or None to drop the line.
"""


@dataclass(frozen=True, slots=True)
class FileError:
    """Error from reading, rewriting or writing a project file.

    Attributes:
        kind: ``not_found`` (file absent), ``rewrite_failed`` (the rewriter
            rejected a line) or ``io_failed`` (read/write error).
        message: Human-readable description.
        path: The file involved.
    """

    kind: Literal["not_found", "rewrite_failed", "io_failed"]
    message: str
    path: Path


@dataclass(frozen=True, slots=True)
class Workspace:
    """The work directory holding one checkout per project."""

    root: Path

    def project_directory(self, project: Project) -> Path:
        return self.root / project.repository_name

    def has_project_directory(self, project: Project) -> bool:
        return self.project_directory(project).is_dir()

    def file(self, location: str, project: Project) -> Path:
        """Resolve ``location`` relative to the project's checkout.

        Raises:
            ValueError: If the location is empty or escapes the checkout.
        """
        rel = Path(location.strip().lstrip("/"))
        if not rel.parts or rel.is_absolute() or ".." in rel.parts:
            raise ValueError(f"invalid project file location: {location!r}")
        return self.project_directory(project) / rel

    def exists(self, location: str, project: Project) -> bool:
        return self.file(location, project).is_file()

    def cleanup(self) -> None:
        """Remove everything below the work directory, keeping the directory."""
        if not self.root.is_dir():
            return
        for child in self.root.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()

    def process_file(
        self,
        location: str,
        project: Project,
        rewriter: LineRewriter,
    ) -> Result[bool, FileError]:
        """Rewrite a project file line by line.

        Lines end at ``\\n`` or ``\\r\\n`` and are passed to ``rewriter`` with
        their 0-based index. Each output keeps the terminator of the line it
        replaces, so files with mixed endings round-trip unchanged; a trailing
        terminator is kept only if the original had one. The file is replaced
        atomically and only when the new content differs.

        Returns:
            Ok(True) if the file was written, Ok(False) if nothing changed,
            Err(FileError) if the file is missing, unreadable, or the rewriter
            raised ValueError (the file is left untouched).
        """
        path = self.file(location, project)
        if not path.is_file():
            return Err(FileError(kind="not_found", message=f"{location} not found in {project.name}", path=path))

        try:
            with path.open(encoding="utf-8", newline="") as handle:
                original = handle.read()
        except (OSError, UnicodeDecodeError) as e:
            return Err(FileError(kind="io_failed", message=f"failed to read {location}: {e}", path=path))

        # Alternating line and terminator pieces; the last line has none.
        pieces = _LINE_BREAK.split(original)
        lines = pieces[0::2]
        terminators = [*pieces[1::2], ""]
        if lines[-1] == "":
            lines.pop()
            terminators.pop()
        trailing = bool(terminators) and terminators[-1] != ""
        fallback = detect_line_separator(original)

        output: list[tuple[str, str]] = []
        for index, (line, terminator) in enumerate(zip(lines, terminators, strict=True)):
            separator = terminator or fallback
            try:
                result = rewriter(line, index)
            except ValueError as e:
                return Err(
                    FileError(
                        kind="rewrite_failed",
                        message=f"{location} line {index + 1}: {e}",
                        path=path,
                    )
                )
            if result is None:
                continue
            if result != line:
                result = result.replace("\r\n", "\n").replace("\n", separator)
            output.append((result, separator))

        if output and not trailing:
            output[-1] = (output[-1][0], "")
        updated = "".join(text + end for text, end in output)

        if updated == original:
            return Ok(False)

        try:
            atomic_write_text(path, updated)
        except OSError as e:
            return Err(FileError(kind="io_failed", message=f"failed to write {location}: {e}", path=path))

        return Ok(True)
