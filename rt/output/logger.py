"""Release log lines of the form ``<context> > <message>``.

The context is a project, module, train, train iteration or a plain string.
Model types expose ``log_name`` so this module does not import them.
"""

from __future__ import annotations

import threading
from typing import Protocol

from rt.output.console import ConsoleProtocol, Style

__all__ = ["LogContext", "ReleaseLogger"]

_PREFIX_TEMPLATE = "{context} > {message}"


class LogContext(Protocol):
    @property
    def log_name(self) -> str: ...


def _context_name(context: LogContext | str) -> str:
    if isinstance(context, str):
        return context
    return context.log_name


def _format(template: str, args: tuple[object, ...]) -> str:
    return template % args if args else template


class ReleaseLogger:
    """Fire-and-forget logger shared by all update operations.

    Calls may come from worker threads; a lock keeps lines from interleaving.
    """

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console
        self._lock = threading.Lock()

    def log(self, context: LogContext | str, template: str, *args: object) -> None:
        """Log an informational line, e.g. ``log(project, "Updated %s.", path)``."""
        line = _PREFIX_TEMPLATE.format(context=_context_name(context), message=_format(template, args))
        with self._lock:
            self._console.print(line, Style.DEFAULT)
