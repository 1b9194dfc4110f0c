"""
CLI Error Handling
==================

Provides consistent error reporting and exit codes for rktool commands.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from rkdisk.errors import InvalidInputError, RkDiskError, TapeWriteError


class ExitCode(IntEnum):
    """Standard exit codes for rktool."""
    SUCCESS = 0
    CONVERSION_ERROR = 1  # Output could not be produced or written
    INVALID_ARGS = 2      # Invalid arguments, input or missing files
    INTERNAL_ERROR = 3    # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception raised by a command and exit.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    if isinstance(error, InvalidInputError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, TapeWriteError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.CONVERSION_ERROR)

    elif isinstance(error, RkDiskError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.CONVERSION_ERROR)

    elif isinstance(error, (FileNotFoundError, PermissionError)):
        # Input file went away or is unreadable
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
