"""
Exit codes and error reporting for the isagen command.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from isagen.errors import IsagenError


class ExitCode(IntEnum):
    """Process exit status of an isagen run."""
    SUCCESS = 0
    TABLE_ERROR = 1      # Bad row, opcode collision or unencodable opcode
    INVALID_ARGS = 2     # Unreadable table or unwritable output location
    INTERNAL_ERROR = 3


def exit_code_for(error: Exception) -> ExitCode:
    """Map an exception raised during a run to its exit code."""
    if isinstance(error, IsagenError):
        return ExitCode.TABLE_ERROR
    if isinstance(error, OSError):
        return ExitCode.INVALID_ARGS
    return ExitCode.INTERNAL_ERROR


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """Print the error to stderr and exit with exit_code_for(error)."""
    code = exit_code_for(error)

    if code == ExitCode.TABLE_ERROR:
        # Row errors already carry their "source:line: error:" prefix
        click.echo(str(error), err=True)
    elif code == ExitCode.INVALID_ARGS:
        click.echo(f"Error: {error}", err=True)
    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()

    sys.exit(code)
