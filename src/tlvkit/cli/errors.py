"""
tlvtool Exit Codes
==================

Maps exceptions raised while a command runs onto process exit codes:

    Exception                                   Exit code
    ---------                                   ---------
    TLVReadError, TLVWriteError                 1 (DATA_ERROR)
    TagNotFoundError                            1 (DATA_ERROR)
    click.BadParameter, missing/locked file     2 (INVALID_ARGS)
    anything else                               3 (INTERNAL_ERROR)
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from tlvkit.errors import TagNotFoundError, TLVError, TLVReadError, TLVWriteError


class ExitCode(IntEnum):
    """Exit statuses of tlvtool."""
    SUCCESS = 0
    DATA_ERROR = 1
    INVALID_ARGS = 2
    INTERNAL_ERROR = 3


_ARGUMENT_ERRORS = (click.BadParameter, FileNotFoundError, PermissionError, IsADirectoryError)


def exit_code_for(error: BaseException) -> ExitCode:
    """Pick the exit code for an exception."""
    if isinstance(error, TLVError):
        return ExitCode.DATA_ERROR
    if isinstance(error, _ARGUMENT_ERRORS):
        return ExitCode.INVALID_ARGS
    return ExitCode.INTERNAL_ERROR


def describe_error(error: BaseException) -> str:
    """One-line message for stderr, prefixed by what went wrong."""
    if isinstance(error, TagNotFoundError):
        return f"Error: {error}"
    if isinstance(error, TLVReadError):
        return f"Error: malformed TLV data: {error}"
    if isinstance(error, TLVWriteError):
        return f"Error: could not write TLV data: {error}"
    if exit_code_for(error) is ExitCode.INTERNAL_ERROR:
        return f"Internal error: {error}"
    return f"Error: {error}"


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception from a command and exit.

    Internal errors also print a traceback in verbose mode.

    Raises:
        SystemExit: Always
    """
    code = exit_code_for(error)
    click.echo(describe_error(error), err=True)
    if verbose and code is ExitCode.INTERNAL_ERROR:
        traceback.print_exc()
    sys.exit(code)
