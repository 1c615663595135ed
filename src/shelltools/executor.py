"""Argument forwarding for myxargs: base argv + one argument per stdin line."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Iterable, List, Sequence, TextIO

from .exceptions import CommandError, InputReadError, UsageError
from .file_ops import describe_os_error
from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExecConfig:
    """A fully assembled command line."""

    argv: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.argv:
            raise UsageError("No command provided")

    @property
    def command(self) -> str:
        return self.argv[0]

    @property
    def args(self) -> tuple[str, ...]:
        return self.argv[1:]


def read_arguments(stream: TextIO) -> List[str]:
    """
    Read one argument per line until end of input.

    Line terminators (and a trailing carriage return) are stripped. Blank
    lines become empty arguments.

    Raises:
        InputReadError: If the stream cannot be read or decoded
    """
    args: List[str] = []
    try:
        for line in stream:
            if line.endswith("\n"):
                line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
            args.append(line)
    except UnicodeDecodeError as e:
        raise InputReadError(str(e))
    except OSError as e:
        raise InputReadError(describe_os_error(e))
    logger.debug(f"Read {len(args)} argument(s) from input")
    return args


def build_argv(base: Iterable[str], extra: Iterable[str]) -> ExecConfig:
    """Combine command-line arguments with the ones read from input.

    Raises:
        UsageError: If the combined list is empty
    """
    return ExecConfig(argv=tuple(base) + tuple(extra))


def run_command(argv: Sequence[str]) -> bytes:
    """
    Run ``argv`` to completion and return stdout with stderr merged in.

    Raises:
        CommandError: If the command cannot be started or exits non-zero;
            the captured output travels on the exception
    """
    argv = list(argv)
    logger.debug(f"Executing: {argv}")
    try:
        completed = subprocess.run(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
    except OSError as e:
        raise CommandError(argv, f"{argv[0]}: {describe_os_error(e)}")

    if completed.returncode != 0:
        raise CommandError(
            argv,
            f"exit status {completed.returncode}",
            returncode=completed.returncode,
            output=completed.stdout,
        )
    return completed.stdout
