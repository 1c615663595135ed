"""Command-line entry points, one typer app per tool."""

from .find import app as find_app
from .rotate import app as rotate_app
from .wc import app as wc_app
from .xargs import app as xargs_app

__all__ = ["find_app", "rotate_app", "wc_app", "xargs_app"]
