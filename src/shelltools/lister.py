"""Recursive directory listing with type and extension filters for myfind.

The walk never follows symbolic links. Readability is judged from the
owner read bit of each entry's mode alone; ownership, group bits and ACLs
are not consulted.
"""

from __future__ import annotations

import os
import re
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional, Sequence, Tuple, Union

from .exceptions import InvalidPathError, UsageError
from .file_ops import describe_os_error
from .logging_config import get_logger

logger = get_logger(__name__)

EXTENSION_PATTERN = re.compile(r"^[a-zA-Z0-9]+$")

BROKEN_LINK = "[broken]"


class EntryKind(str, Enum):
    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    OTHER = "other"


def validate_extension(value: str) -> str:
    """Turn ``txt`` into the ``.txt`` suffix used for matching.

    Raises:
        UsageError: If the value is not purely alphanumeric
    """
    if not EXTENSION_PATTERN.match(value):
        raise UsageError("Invalid extension")
    return f".{value}"


@dataclass(frozen=True)
class ListConfig:
    """Everything a myfind run needs, assembled once from the command line.

    Attributes:
        root: Directory the walk starts from
        show_dirs: Print directories
        show_files: Print regular files
        show_symlinks: Print symbolic links
        extensions: Suffixes (with leading dot) a file must end with
    """

    root: str
    show_dirs: bool = True
    show_files: bool = True
    show_symlinks: bool = True
    extensions: Tuple[str, ...] = ()

    @classmethod
    def from_flags(
        cls,
        root: str,
        dirs: bool = False,
        files: bool = False,
        symlinks: bool = False,
        extensions: Sequence[str] = (),
    ) -> "ListConfig":
        """Build a config from raw -d / -f / -sl / -ext values.

        Extensions are given without the dot and validated here.

        Raises:
            UsageError: On an invalid extension or -ext without -f
        """
        suffixes = tuple(validate_extension(ext) for ext in extensions)
        if suffixes and not files:
            raise UsageError("Need -f to specify extensions")
        if not (dirs or files or symlinks):
            dirs = files = symlinks = True
        return cls(
            root=root,
            show_dirs=dirs,
            show_files=files,
            show_symlinks=symlinks,
            extensions=suffixes,
        )


def validate_root(root: str) -> Path:
    """Check that the starting point exists and is a directory.

    Raises:
        InvalidPathError: If it does not exist or is not a directory
    """
    try:
        st = os.stat(root)
    except OSError as e:
        raise InvalidPathError(Path(root), describe_os_error(e))
    if not stat.S_ISDIR(st.st_mode):
        raise InvalidPathError(Path(root), f"{root} is not a directory")
    return Path(root)


# ── Walk ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class WalkError:
    """A directory that could not be listed or an entry that could not be stat'ed."""

    path: str
    error: OSError


WalkItem = Union[Tuple[str, os.stat_result], WalkError]


def walk(root: str) -> Iterator[WalkItem]:
    """
    Depth-first walk yielding ``(path, lstat)`` pairs.

    The root comes first, spelled exactly as given; entries below it are
    joined onto its normalized form. Directory entries follow in lexical
    order, each subdirectory immediately followed by its own contents.
    Problems below the root are yielded as WalkError items.

    Raises:
        OSError: If the root itself cannot be stat'ed
    """
    st = os.lstat(root)
    yield root, st
    if stat.S_ISDIR(st.st_mode):
        yield from _walk_children(root, os.path.normpath(root))


def _walk_children(shown: str, directory: str) -> Iterator[WalkItem]:
    try:
        names = sorted(os.listdir(directory))
    except OSError as e:
        yield WalkError(shown, e)
        return

    for name in names:
        path = os.path.join(directory, name)
        try:
            st = os.lstat(path)
        except OSError as e:
            yield WalkError(path, e)
            continue
        yield path, st
        if stat.S_ISDIR(st.st_mode):
            yield from _walk_children(path, path)


# ── Classification ─────────────────────────────────────────────


def is_readable(st: os.stat_result) -> bool:
    """Owner read bit check on the permission bits."""
    return bool(st.st_mode & stat.S_IRUSR)


def classify(st: os.stat_result) -> EntryKind:
    mode = st.st_mode
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    return EntryKind.OTHER


def resolve_link(path: str) -> Optional[str]:
    """
    Fully resolved target of a symbolic link, or None when it is broken.

    A relative link path resolves to a path relative to the working
    directory as long as the target lies below it; otherwise the result
    is absolute.
    """
    try:
        target = os.path.realpath(path, strict=True)
    except (OSError, RuntimeError):
        return None
    if os.path.isabs(path):
        return target
    relative = os.path.relpath(target, os.path.realpath(os.getcwd()))
    if relative == os.pardir or relative.startswith(os.pardir + os.sep):
        return target
    return relative


def format_link(path: str) -> str:
    target = resolve_link(path)
    return f"{path} -> {target if target is not None else BROKEN_LINK}"


def matches_extension(path: str, extensions: Sequence[str]) -> bool:
    if not extensions:
        return True
    return any(path.endswith(ext) for ext in extensions)


# ── Listing ────────────────────────────────────────────────────


@dataclass(frozen=True)
class Match:
    """An entry that passed the filters, rendered for output."""

    line: str


@dataclass(frozen=True)
class Denied:
    """An entry whose owner read bit is clear."""

    path: str

    @property
    def message(self) -> str:
        return f"{self.path}: Permission denied"


@dataclass(frozen=True)
class Problem:
    """A walk failure below the root."""

    path: str
    reason: str

    @property
    def message(self) -> str:
        return f"{self.path}: {self.reason}"


ListEvent = Union[Match, Denied, Problem]


def render_entry(path: str, st: os.stat_result, config: ListConfig) -> Optional[str]:
    """Output line for a readable entry, or None when the filters reject it."""
    kind = classify(st)
    if kind is EntryKind.DIRECTORY:
        return path if config.show_dirs else None
    if kind is EntryKind.FILE:
        if config.show_files and matches_extension(path, config.extensions):
            return path
        return None
    if kind is EntryKind.SYMLINK:
        return format_link(path) if config.show_symlinks else None
    return None


def list_entries(config: ListConfig) -> Iterator[ListEvent]:
    """
    Walk ``config.root`` and produce one event per reportable entry.

    Unreadable entries are reported as Denied and never printed, but
    unreadable directories are still descended into when the OS allows it.

    Raises:
        InvalidPathError: If the root is missing or not a directory
    """
    validate_root(config.root)
    denied: set[str] = set()

    try:
        items = walk(config.root)
        for item in items:
            if isinstance(item, WalkError):
                # already reported as Denied; the listing failure adds nothing
                if item.path in denied and isinstance(item.error, PermissionError):
                    continue
                logger.debug(f"Walk problem at {item.path}: {item.error}")
                yield Problem(item.path, describe_os_error(item.error))
                continue

            path, st = item
            if not is_readable(st):
                denied.add(path)
                yield Denied(path)
                continue

            line = render_entry(path, st, config)
            if line is not None:
                yield Match(line)
    except OSError as e:
        raise InvalidPathError(Path(config.root), describe_os_error(e))
