"""Core types: results, error codes, configuration and the workspace."""

from .config import ConfigError, ReleaseConfig, load_config
from .errors import ErrorCode
from .result import Err, Ok, Result
from .workspace import FileError, LineRewriter, Workspace

__all__ = [
    # config
    "ConfigError",
    "ReleaseConfig",
    "load_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    # workspace
    "FileError",
    "LineRewriter",
    "Workspace",
]
