"""myrotate - archive .log files into .tar.gz bundles."""

from pathlib import Path
from typing import List, Optional

import typer

from ..archiver import ArchiveConfig, archive_files
from ..exceptions import ShellToolsError
from ..fanout import unique_paths
from ._common import fail, report, resolve_settings, version_callback

app = typer.Typer(
    name="myrotate",
    help="Archive .log files into compressed tar archives.",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.command()
def main(
    paths: List[str] = typer.Argument(
        ...,
        metavar="FILE...",
        help=".log files to archive",
        show_default=False,
    ),
    dest: Optional[str] = typer.Option(
        None,
        "-a",
        metavar="DIR",
        help="path/to/archive/destination (default: current directory)",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        help="Maximum number of files archived at once (default: auto)",
        min=1,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Configuration file path (TOML format)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose (DEBUG) logging"),
    quiet: bool = typer.Option(False, "--quiet", help="Suppress all but ERROR logging"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """
    Write each FILE into <name>_<mtime>.tar.gz.

    [bold cyan]Examples:[/bold cyan]

      myrotate app.log

      myrotate -a /var/archive app.log db.log
    """
    settings = resolve_settings(config, workers=workers, verbose=verbose, quiet=quiet)

    try:
        run = ArchiveConfig(paths=tuple(paths), dest=dest)
        result = archive_files(run, settings)
    except ShellToolsError as e:
        fail(e)

    for path in unique_paths(run.paths):
        if path in result.errors:
            report(str(result.errors[path]))
            continue
        archived = result.values[path]
        typer.echo(f"CREATED: {archived.archive}")
        typer.echo(f"ARCHIVED: {archived.source}")
        if archived.move_error:
            report(f"{archived.archive}: cannot move to {dest}: {archived.move_error}")
