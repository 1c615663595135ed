"""myxargs - run a command with extra arguments read from stdin."""

import sys
from typing import List, Optional

import typer

from ..config import load_settings
from ..exceptions import CommandError, ShellToolsError
from ..executor import build_argv, read_arguments, run_command
from ..logging_config import setup_logging
from ._common import fail

app = typer.Typer(name="myxargs", add_completion=False)


@app.command(
    add_help_option=False,
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
)
def main(
    args: Optional[List[str]] = typer.Argument(None, metavar="[COMMAND [ARG]...]"),
):
    """
    Append one argument per stdin line to COMMAND and run it.

    Every command-line argument, options included, belongs to COMMAND.
    A leading -- is dropped; any later -- is passed on to COMMAND.
    The command's stdout and stderr are printed together once it exits.
    """
    try:
        settings = load_settings()
    except ShellToolsError as e:
        fail(e)
    setup_logging(settings.verbosity, log_file=settings.log_file)

    try:
        extra = read_arguments(sys.stdin)
        command = build_argv(args or [], extra)
        output = run_command(command.argv)
    except CommandError as e:
        if e.output:
            typer.echo(e.output, nl=False)
        fail(e)
    except ShellToolsError as e:
        fail(e)

    typer.echo(output, nl=False)
