"""Archiving of .log files into single-member .tar.gz bundles for myrotate."""

from __future__ import annotations

import os
import shutil
import tarfile
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Dict, Iterable, Optional

from .config import ToolSettings, default_settings
from .exceptions import (
    ArchiveError,
    DuplicateArchiveError,
    FileAccessError,
    InvalidPathError,
    OperationError,
    UsageError,
    WrongFormatError,
)
from .fanout import FanOutResult, fan_out, unique_paths
from .file_ops import describe_os_error, open_binary, stat_regular_file
from .logging_config import get_logger

logger = get_logger(__name__)

ARCHIVE_SUFFIX = ".log"
ARCHIVE_EXTENSION = ".tar.gz"


@dataclass(frozen=True)
class ArchiveConfig:
    """Everything a myrotate run needs, assembled once from the command line.

    Attributes:
        paths: Files to archive
        dest: Directory that receives finished archives (None = leave in workdir)
        workdir: Directory archives are created in
    """

    paths: tuple[str, ...]
    dest: Optional[str] = None
    workdir: str = "."

    def __post_init__(self) -> None:
        if not self.paths:
            raise UsageError("No files provided for archiving")


@dataclass(frozen=True)
class ArchiveResult:
    """What happened to one archived file.

    Attributes:
        source: The input .log path
        archive: Archive file name
        location: Where the archive ended up
        move_error: Why moving to the destination failed, if it did
    """

    source: str
    archive: str
    location: Path
    move_error: Optional[str] = None


def validate_destination(dest: str) -> Path:
    """Check that the destination exists and is a directory.

    Raises:
        InvalidPathError: If it does not exist or is not a directory
    """
    path = Path(dest)
    try:
        is_dir = path.is_dir()
        exists = is_dir or path.exists()
    except OSError as e:
        raise InvalidPathError(path, describe_os_error(e))
    if not exists:
        raise InvalidPathError(path, "no such file or directory")
    if not is_dir:
        raise InvalidPathError(path, f"{dest} is not a directory")
    return path


def archive_name(path: str, st: os.stat_result) -> str:
    """
    Name of the archive for ``path``: ``<stem>_<mtime>.tar.gz``.

    The stem is the base name without its ``.log`` suffix and ``mtime`` is
    the modification time in whole Unix seconds.

    Raises:
        WrongFormatError: If the base name does not end with ``.log``
    """
    base = os.path.basename(path)
    if not base.endswith(ARCHIVE_SUFFIX):
        raise WrongFormatError(Path(path), ARCHIVE_SUFFIX)
    stem = base[: -len(ARCHIVE_SUFFIX)]
    return f"{stem}_{int(st.st_mtime)}{ARCHIVE_EXTENSION}"


def fill_archive(path: str, fileobj: BinaryIO) -> None:
    """Write a gzip-compressed tar stream holding ``path`` as its only member."""
    with open_binary(path) as src:
        with tarfile.open(fileobj=fileobj, mode="w:gz") as tar:
            info = tar.gettarinfo(arcname=os.path.basename(path), fileobj=src)
            tar.addfile(info, src)


def _remove_partial(archive_path: Path) -> None:
    try:
        archive_path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.error(f"Cannot remove partial archive {archive_path}: {describe_os_error(e)}")


def _move_archive(archive_path: Path, dest: str) -> tuple[Path, Optional[str]]:
    target = Path(dest) / archive_path.name
    try:
        shutil.move(str(archive_path), str(target))
    except (OSError, shutil.Error) as e:
        reason = describe_os_error(e) if isinstance(e, OSError) else str(e)
        logger.warning(f"Cannot move {archive_path} to {dest}: {reason}")
        return archive_path, reason
    return target, None


def archive_file(path: str, dest: Optional[str] = None, workdir: str = ".") -> ArchiveResult:
    """
    Archive one .log file.

    The archive is created in ``workdir`` and, when ``dest`` is given, moved
    there afterwards. If building the archive fails the partial file is
    deleted before the error propagates.

    Raises:
        FileAccessError: If the source cannot be stat'ed or the archive created
        NotRegularFileError: If the source is not a regular file
        WrongFormatError: If the source does not end with .log
        ArchiveError: If writing the archive failed
    """
    st = stat_regular_file(path)
    name = archive_name(path, st)
    archive_path = Path(workdir) / name

    try:
        out = open(archive_path, "wb")
    except OSError as e:
        raise FileAccessError(archive_path, describe_os_error(e))
    logger.debug(f"Created {archive_path}")

    try:
        with out:
            fill_archive(path, out)
    except Exception as e:
        _remove_partial(archive_path)
        if isinstance(e, OperationError):
            reason = getattr(e, "reason", str(e))
        elif isinstance(e, OSError):
            reason = describe_os_error(e)
        else:
            reason = str(e)
        raise ArchiveError(Path(path), name, reason) from e
    logger.debug(f"Archived {path} into {archive_path}")

    if dest is None:
        return ArchiveResult(source=path, archive=name, location=archive_path)

    location, move_error = _move_archive(archive_path, dest)
    return ArchiveResult(source=path, archive=name, location=location, move_error=move_error)


def find_name_collisions(paths: Iterable[str]) -> Dict[str, DuplicateArchiveError]:
    """
    Inputs whose archive name is already taken by an earlier input.

    Two sources with the same base name and mtime second would otherwise
    write the same archive file at the same time. The first one keeps the
    name; every later one maps to a DuplicateArchiveError. Inputs that
    cannot be stat'ed or named are left for their own task to report.
    """
    owners: Dict[str, str] = {}
    collisions: Dict[str, DuplicateArchiveError] = {}
    for path in paths:
        try:
            name = archive_name(path, stat_regular_file(path))
        except OperationError:
            continue
        if name in owners:
            collisions[path] = DuplicateArchiveError(Path(path), name, owners[name])
        else:
            owners[name] = path
    return collisions


def archive_files(
    config: ArchiveConfig, settings: Optional[ToolSettings] = None
) -> FanOutResult[ArchiveResult]:
    """Archive every path in ``config`` concurrently.

    The destination is checked once, before any file is touched. Inputs
    that would clash on an archive name with an earlier input are reported
    as errors and never started.

    Raises:
        InvalidPathError: If the destination is not an existing directory
    """
    settings = settings or default_settings
    if config.dest is not None:
        validate_destination(config.dest)

    targets = unique_paths(config.paths)
    collisions = find_name_collisions(targets)
    accepted = [path for path in targets if path not in collisions]

    outcome = fan_out(
        accepted,
        lambda path: archive_file(path, dest=config.dest, workdir=config.workdir),
        max_workers=settings.max_workers(len(accepted)),
    )

    result: FanOutResult[ArchiveResult] = FanOutResult()
    for path in targets:
        if path in outcome.values:
            result.values[path] = outcome.values[path]
        elif path in outcome.errors:
            result.errors[path] = outcome.errors[path]
        else:
            result.errors[path] = collisions[path]
    return result
