"""Per-item exceptions: stat, read, archive and exec failures."""

from pathlib import Path
from typing import Optional, Sequence

from .base import ShellToolsError


class OperationError(ShellToolsError):
    """Base class for errors raised while processing a single target."""

    pass


class FileAccessError(OperationError):
    """Raised when a file cannot be stat'ed, opened or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(f"{filepath}: {reason}")
        self.filepath = filepath
        self.reason = reason


class NotRegularFileError(OperationError):
    """Raised when a target exists but is not a regular file."""

    def __init__(self, filepath: Path):
        super().__init__(f"{filepath} is not a file")
        self.filepath = filepath


class WrongFormatError(OperationError):
    """Raised when an archiver input does not carry the expected suffix."""

    def __init__(self, filepath: Path, expected_suffix: str):
        super().__init__(
            f"Wrong file format, only {expected_suffix} accepted",
            details={"filepath": str(filepath)},
        )
        self.filepath = filepath
        self.expected_suffix = expected_suffix


class ArchiveError(OperationError):
    """Raised when building an archive fails. The partial archive is already gone."""

    def __init__(self, filepath: Path, archive: str, reason: str):
        super().__init__(
            f"Cannot archive {filepath}: {reason}",
            details={"archive": archive},
        )
        self.filepath = filepath
        self.archive = archive
        self.reason = reason


class DuplicateArchiveError(OperationError):
    """Raised when an input would produce the same archive as an earlier input."""

    def __init__(self, filepath: Path, archive: str, claimed_by: str):
        super().__init__(
            f"Cannot archive {filepath}: {archive} is already produced by {claimed_by}",
        )
        self.filepath = filepath
        self.archive = archive
        self.claimed_by = claimed_by
        self.reason = f"{archive} is already produced by {claimed_by}"


class CommandError(OperationError):
    """Raised when a forwarded command cannot be launched or exits non-zero."""

    def __init__(
        self,
        argv: Sequence[str],
        reason: str,
        returncode: Optional[int] = None,
        output: bytes = b"",
    ):
        details = {"command": " ".join(argv)}
        if returncode is not None:
            details["returncode"] = str(returncode)
        super().__init__(f"Command failed: {reason}", details=details)
        self.argv = list(argv)
        self.reason = reason
        self.returncode = returncode
        self.output = output


class InputReadError(OperationError):
    """Raised when standard input cannot be read."""

    def __init__(self, reason: str):
        super().__init__(f"Cannot read standard input: {reason}")
        self.reason = reason
