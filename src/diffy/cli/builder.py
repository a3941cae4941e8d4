#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/diffy/cli/builder.py
"""Argument parser construction and exit codes for the diffy CLI."""

import argparse
from typing import get_args

from diffy.constants import CONFIG_ENV_VAR, ColorMode, OutputFormat
from diffy.exceptions import FileError, ValidationError

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4

OUTPUT_FORMATS: tuple[str, ...] = get_args(OutputFormat)
COLOR_MODES: tuple[str, ...] = get_args(ColorMode)


def get_exit_code_for_exception(exception: Exception) -> int:
    """Return the process exit code for an error raised by a command.

    Parameters
    ----------
    exception : Exception
        Error that ended the command

    Returns
    -------
    int
        One of the ``EXIT_*`` constants

    """
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, (FileError, OSError)):
        return EXIT_FILE_ERROR

    return EXIT_ERROR


def _non_negative_int(value: str) -> int:
    """Validate a non-negative integer argument.

    Raises
    ------
    argparse.ArgumentTypeError
        If value is not a non-negative integer

    """
    try:
        ivalue = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"must be an integer, got '{value}'") from e

    if ivalue < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {ivalue}")

    return ivalue


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add configuration and logging options shared by every subcommand."""
    parser.add_argument(
        "--config",
        metavar="PATH",
        help=f"Configuration file (.toml, .yaml, .json or pyproject.toml); overrides ${CONFIG_ENV_VAR}",
    )
    parser.add_argument(
        "--no-config",
        action="store_true",
        help="Ignore configuration files and the environment",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Also append log records to this file",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with debug logging, timestamps and logger names",
    )


def _add_output_arguments(parser: argparse.ArgumentParser) -> None:
    """Add rendering options shared by compare and parse."""
    parser.add_argument(
        "--format",
        "-f",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format: unified (default, like diff -u), json (structured), side-by-side (terminal table)",
    )
    parser.add_argument(
        "--color",
        choices=COLOR_MODES,
        default=None,
        help="Colorize output: auto (default, if terminal), always, never",
    )
    parser.add_argument("--output", "-o", metavar="FILE", help="Write diff to file (default: stdout)")
    parser.add_argument(
        "--context",
        "-C",
        type=_non_negative_int,
        default=None,
        help="Number of context lines (default: 3, like diff -C)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the top-level argument parser with its subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Parser for ``diffy compare`` and ``diffy parse``

    """
    from diffy import __version__

    common = argparse.ArgumentParser(add_help=False)
    _add_common_arguments(common)
    output = argparse.ArgumentParser(add_help=False)
    _add_output_arguments(output)

    parser = argparse.ArgumentParser(
        prog="diffy",
        description="Compute and display structured line and word level diffs",
    )
    parser.add_argument("--version", "-V", action="version", version=f"diffy {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    compare = subparsers.add_parser(
        "compare",
        parents=[common, output],
        help="Compare two files or two directories",
        description="Compare two text files, or two directory trees file by file",
    )
    compare.add_argument("old", help="Original file or directory")
    compare.add_argument("new", help="Updated file or directory")
    compare.add_argument(
        "--parallel",
        "-p",
        type=_non_negative_int,
        nargs="?",
        const=0,
        default=1,
        help="Diff directory trees in parallel (optionally specify number of workers; 0 means one per CPU)",
    )

    parse = subparsers.add_parser(
        "parse",
        parents=[common, output],
        help="Parse and re-render a unified diff or git patch",
        description="Parse unified diff text (a git patch, a bare diff, or a +/- snippet)",
    )
    parse.add_argument("patch", nargs="?", default="-", help="Patch file to read ('-' or omitted for stdin)")

    return parser
