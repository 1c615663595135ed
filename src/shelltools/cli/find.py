"""myfind - list a directory tree, filtered by entry type and extension."""

from pathlib import Path
from typing import List, Optional

import typer

from ..exceptions import ShellToolsError, UsageError
from ..lister import ListConfig, Match, list_entries, validate_extension
from ._common import fail, report, resolve_settings, version_callback

app = typer.Typer(
    name="myfind",
    help="List files, directories and symbolic links below a directory.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _check_extensions(values: Optional[List[str]]) -> Optional[List[str]]:
    for value in values or []:
        try:
            validate_extension(value)
        except UsageError as e:
            raise typer.BadParameter(f"{e.reason}: {value!r}")
    return values


@app.command()
def main(
    root: str = typer.Argument(..., metavar="DIR", help="Directory to search", show_default=False),
    files: bool = typer.Option(False, "-f", help="Print regular files"),
    dirs: bool = typer.Option(False, "-d", help="Print directories"),
    symlinks: bool = typer.Option(False, "-sl", help="Print symbolic links"),
    extensions: Optional[List[str]] = typer.Option(
        None,
        "-ext",
        metavar="EXT",
        help="Only print files ending in .EXT (repeatable, requires -f)",
        callback=_check_extensions,
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
    Print every entry below DIR, DIR included.

    Without -f, -d or -sl all three kinds are printed. Symbolic links are
    shown as "path -> target", or "path -> [broken]" when the target is
    missing. Entries without the owner read bit are reported on stderr.

    [bold cyan]Examples:[/bold cyan]

      myfind /var/log

      myfind -f -ext log -ext txt /var/log

      myfind -sl ~
    """
    resolve_settings(config, verbose=verbose, quiet=quiet)

    try:
        run = ListConfig.from_flags(
            root,
            dirs=dirs,
            files=files,
            symlinks=symlinks,
            extensions=extensions or (),
        )
        for event in list_entries(run):
            if isinstance(event, Match):
                typer.echo(event.line)
            else:
                report(event.message)
    except ShellToolsError as e:
        fail(e)
    except KeyboardInterrupt:
        raise typer.Exit(130)
