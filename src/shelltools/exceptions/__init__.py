"""Exception hierarchy for shelltools."""

from .base import ShellToolsError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
    UsageError,
)
from .operations import (
    ArchiveError,
    CommandError,
    DuplicateArchiveError,
    FileAccessError,
    InputReadError,
    NotRegularFileError,
    OperationError,
    WrongFormatError,
)

__all__ = [
    "ShellToolsError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidPathError",
    "UsageError",
    "OperationError",
    "FileAccessError",
    "NotRegularFileError",
    "WrongFormatError",
    "ArchiveError",
    "DuplicateArchiveError",
    "CommandError",
    "InputReadError",
]
