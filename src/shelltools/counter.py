"""Line, word and character counting for mywc."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

from .config import ToolSettings, default_settings
from .exceptions import FileAccessError, UsageError
from .fanout import FanOutResult, fan_out
from .file_ops import describe_os_error, open_binary, stat_regular_file
from .logging_config import get_logger

logger = get_logger(__name__)


class CountMode(str, Enum):
    """What mywc counts."""

    LINES = "lines"
    WORDS = "words"
    CHARS = "chars"


def resolve_mode(lines: bool = False, words: bool = False, chars: bool = False) -> CountMode:
    """Derive the counting mode from the -l / -w / -m flags.

    Raises:
        UsageError: If more than one flag is set
    """
    selected = [
        mode
        for mode, enabled in ((CountMode.LINES, lines), (CountMode.WORDS, words), (CountMode.CHARS, chars))
        if enabled
    ]
    if len(selected) > 1:
        raise UsageError("Only one of -l, -w, -m can be specified")
    return selected[0] if selected else CountMode.WORDS


@dataclass(frozen=True)
class CountConfig:
    """Everything a mywc run needs, assembled once from the command line."""

    paths: tuple[str, ...]
    mode: CountMode = CountMode.WORDS

    def __post_init__(self) -> None:
        if not self.paths:
            raise UsageError("No files provided")


def _records(raw_lines: Iterable[bytes]) -> Iterable[str]:
    """Split-on-newline records: terminator and one trailing CR removed.

    Invalid UTF-8 decodes to one surrogate per offending byte, so every
    such byte counts as a single character.
    """
    for raw in raw_lines:
        if raw.endswith(b"\n"):
            raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        yield raw.decode("utf-8", errors="surrogateescape")


def count_stream(raw_lines: Iterable[bytes], mode: CountMode) -> int:
    """
    Count over an iterable of raw byte lines.

    A last line without a terminator is still a line. In character mode
    every line contributes one extra character for its terminator.
    """
    total = 0
    for line in _records(raw_lines):
        if mode is CountMode.LINES:
            total += 1
        elif mode is CountMode.WORDS:
            total += len(line.split())
        else:
            total += len(line) + 1
    return total


def count_file(path: str, mode: CountMode = CountMode.WORDS) -> int:
    """
    Count lines, words or characters in a single regular file.

    Raises:
        FileAccessError: If the file cannot be stat'ed, opened or read
        NotRegularFileError: If the path is not a regular file
    """
    stat_regular_file(path)
    with open_binary(path) as f:
        try:
            total = count_stream(f, mode)
        except OSError as e:
            raise FileAccessError(Path(path), describe_os_error(e))
    logger.debug(f"Counted {total} {mode.value} in {path}")
    return total


def count_files(
    config: CountConfig, settings: Optional[ToolSettings] = None
) -> FanOutResult[int]:
    """Count every path in ``config`` concurrently."""
    settings = settings or default_settings
    return fan_out(
        config.paths,
        lambda path: count_file(path, config.mode),
        max_workers=settings.max_workers(len(config.paths)),
    )
