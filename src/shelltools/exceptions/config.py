"""Startup exceptions: flags, paths and settings that stop a run before it begins."""

from pathlib import Path
from typing import Any

from .base import ShellToolsError


class ConfigurationError(ShellToolsError):
    """Base class for configuration-related errors."""

    pass


class InvalidPathError(ConfigurationError):
    """Raised when a directory argument is missing or not a directory."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid path: {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class UsageError(ConfigurationError):
    """Raised for conflicting, missing or malformed command-line flags."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
