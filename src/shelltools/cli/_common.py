"""Shared CLI helpers."""

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..config import ToolSettings, load_settings
from ..exceptions import ShellToolsError
from ..logging_config import get_logger, setup_logging

# Results go to stdout through typer.echo; this console is for errors only.
console = Console(stderr=True, soft_wrap=True, highlight=False)

logger = get_logger(__name__)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"shelltools {__version__}")
        raise typer.Exit(0)


def fail(error: ShellToolsError) -> NoReturn:
    """Report a fatal error and stop with status 1."""
    logger.debug(f"{error.__class__.__name__}: {error}")
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise typer.Exit(1)


def resolve_settings(
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> ToolSettings:
    """Build settings from CLI options and configure logging."""
    if verbose and quiet:
        console.print("[red]Error:[/red] --verbose and --quiet are mutually exclusive")
        raise typer.Exit(1)

    try:
        settings = load_settings(config_file=config, workers=workers, verbose=verbose, quiet=quiet)
    except ShellToolsError as e:
        fail(e)

    setup_logging(settings.verbosity, log_file=settings.log_file)
    logger.debug(f"Loaded settings: {settings}")
    return settings


def report(message: str) -> None:
    """Per-item diagnostic on stderr."""
    typer.echo(message, err=True)
