"""
CLI Error Handling
==================

Provides consistent error reporting and exit codes for the xtrans
command-line tool.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from xtrans.errors import XTransError


class ExitCode(IntEnum):
    """Exit codes of the xtrans command."""
    SUCCESS = 0
    TRANSLATION_ERROR = 1  # Unopenable input, short read, unmapped register
    INVALID_ARGS = 2       # Usage errors (reported by Click itself)
    INTERNAL_ERROR = 3     # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception on stderr and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always
    """
    if isinstance(error, XTransError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.TRANSLATION_ERROR)

    elif isinstance(error, (FileNotFoundError, PermissionError)):
        # Output file that cannot be created
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
