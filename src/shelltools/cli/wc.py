"""mywc - count lines, words or characters in files."""

from pathlib import Path
from typing import List, Optional

import typer

from ..counter import CountConfig, count_files, resolve_mode
from ..exceptions import ShellToolsError
from ._common import fail, report, resolve_settings, version_callback

app = typer.Typer(
    name="mywc",
    help="Count lines, words or characters in files.",
    add_completion=False,
)


@app.command()
def main(
    paths: List[str] = typer.Argument(
        ...,
        metavar="FILE...",
        help="Files to count",
        show_default=False,
    ),
    lines: bool = typer.Option(False, "-l", help="Count lines"),
    words: bool = typer.Option(False, "-w", help="Count words (default)"),
    chars: bool = typer.Option(False, "-m", help="Count characters"),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        help="Maximum number of files processed at once (default: auto)",
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
    Print "<count>TAB<path>" for every readable regular file.

    Words are counted unless -l or -m is given. Paths that cannot be read
    are reported on stderr and left out of the output.
    """
    settings = resolve_settings(config, workers=workers, verbose=verbose, quiet=quiet)

    try:
        mode = resolve_mode(lines=lines, words=words, chars=chars)
        result = count_files(CountConfig(paths=tuple(paths), mode=mode), settings)
    except ShellToolsError as e:
        fail(e)
    except KeyboardInterrupt:
        raise typer.Exit(130)

    for error in result.errors.values():
        report(str(error))
    for path, total in result.values.items():
        typer.echo(f"{total}\t{path}")
