"""
shelltools - small Unix-style command-line utilities.

Four independent tools share one package:

    mywc      count lines, words or characters in files
    myrotate  archive .log files into .tar.gz bundles
    myxargs   run a command with arguments read from stdin
    myfind    list a directory tree with type and extension filters
"""

__version__ = "0.3.0"

from .archiver import ArchiveResult, archive_file, archive_files
from .counter import CountMode, count_file, count_files
from .executor import build_argv, read_arguments, run_command
from .fanout import FanOutResult, fan_out
from .lister import list_entries, walk

__all__ = [
    "ArchiveResult",
    "archive_file",
    "archive_files",
    "CountMode",
    "count_file",
    "count_files",
    "build_argv",
    "read_arguments",
    "run_command",
    "FanOutResult",
    "fan_out",
    "list_entries",
    "walk",
]
