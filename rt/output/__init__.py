"""Output abstraction layer."""

from .console import (
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
)
from .logger import ReleaseLogger

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "ReleaseLogger",
    "RichConsole",
    "Style",
]
