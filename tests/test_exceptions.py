"""Tests for the exception hierarchy."""

from pathlib import Path

from shelltools.exceptions import (
    ArchiveError,
    CommandError,
    ConfigurationError,
    DuplicateArchiveError,
    FileAccessError,
    InvalidPathError,
    NotRegularFileError,
    OperationError,
    ShellToolsError,
    UsageError,
    WrongFormatError,
)


def test_details_rendered_in_str():
    err = ShellToolsError("broken", details={"a": "1", "b": "2"})
    assert str(err) == "broken (a=1, b=2)"
    assert ShellToolsError("plain").details == {}


def test_startup_errors_are_configuration_errors():
    assert isinstance(UsageError("x"), ConfigurationError)
    assert isinstance(InvalidPathError(Path("/x"), "gone"), ConfigurationError)


def test_per_item_errors_are_operation_errors():
    for err in (
        FileAccessError(Path("a"), "No such file or directory"),
        NotRegularFileError(Path("a")),
        WrongFormatError(Path("a.txt"), ".log"),
        ArchiveError(Path("a.log"), "a_1.tar.gz", "disk full"),
        DuplicateArchiveError(Path("b/a.log"), "a_1.tar.gz", "a/a.log"),
        CommandError(["false"], "exit status 1", returncode=1),
    ):
        assert isinstance(err, OperationError)
        assert isinstance(err, ShellToolsError)


def test_messages():
    assert str(FileAccessError(Path("a"), "Permission denied")) == "a: Permission denied"
    assert str(NotRegularFileError(Path("dir"))) == "dir is not a file"
    assert str(DuplicateArchiveError(Path("b/a.log"), "a_1.tar.gz", "a/a.log")) == (
        "Cannot archive b/a.log: a_1.tar.gz is already produced by a/a.log"
    )
    assert str(CommandError(["false"], "exit status 1", returncode=1)) == (
        "Command failed: exit status 1 (command=false, returncode=1)"
    )
