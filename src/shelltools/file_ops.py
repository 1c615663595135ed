"""
File operations shared by the per-path tools.

Turns raw OSError failures into FileAccessError / NotRegularFileError so
callers only have to deal with the shelltools exception hierarchy.
"""

import os
import stat
from pathlib import Path
from typing import BinaryIO, Union

from .exceptions import FileAccessError, NotRegularFileError

PathLike = Union[str, Path]


def describe_os_error(error: OSError) -> str:
    """Short human-readable reason for an OSError, without the path."""
    return error.strerror or str(error)


def stat_regular_file(path: PathLike) -> os.stat_result:
    """
    Stat a path and make sure it is a regular file.

    Args:
        path: Target path (symbolic links are followed)

    Returns:
        The stat result

    Raises:
        FileAccessError: If the path cannot be stat'ed
        NotRegularFileError: If the path is a directory, device, fifo, ...
    """
    try:
        st = os.stat(path)
    except OSError as e:
        raise FileAccessError(Path(path), describe_os_error(e))

    if not stat.S_ISREG(st.st_mode):
        raise NotRegularFileError(Path(path))
    return st


def open_binary(path: PathLike) -> BinaryIO:
    """Open a file for binary reading.

    Raises:
        FileAccessError: If the file cannot be opened
    """
    try:
        return open(path, "rb")
    except OSError as e:
        raise FileAccessError(Path(path), describe_os_error(e))
