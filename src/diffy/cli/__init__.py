#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/diffy/cli/__init__.py
"""Command-line interface for the diffy library.

Examples
--------
Compare two files::

    $ diffy compare old.txt new.txt

Compare two directory trees in parallel as a side-by-side view::

    $ diffy compare before/ after/ --parallel --format side-by-side

Re-render a git patch as JSON::

    $ git diff | diffy parse --format json

Use a configuration file for defaults::

    $ cat .diffy.toml
    context_lines = 5
    format = "side-by-side"
    $ diffy compare old.txt new.txt

"""

import argparse
import logging
import os
import sys
from typing import Callable, Mapping, Optional

from diffy.cli.builder import (
    EXIT_ERROR,
    EXIT_VALIDATION_ERROR,
    create_parser,
    get_exit_code_for_exception,
)
from diffy.cli.commands import handle_compare_command, handle_parse_command
from diffy.cli.config import load_config_with_priority
from diffy.constants import CONFIG_ENV_VAR
from diffy.exceptions import DiffyError
from diffy.logging_utils import configure_logging

logger = logging.getLogger(__name__)

CommandHandler = Callable[[argparse.Namespace, Mapping[str, object]], int]

COMMANDS: dict[str, CommandHandler] = {
    "compare": handle_compare_command,
    "parse": handle_parse_command,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Run the diffy command line.

    Parameters
    ----------
    argv : list of str, optional
        Arguments without the program name; defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    try:
        parsed = parser.parse_args(argv)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0

    if parsed.command is None:
        parser.print_help(sys.stderr)
        return EXIT_ERROR

    log_level = "DEBUG" if parsed.trace else parsed.log_level
    configure_logging(log_level, log_file=parsed.log_file, trace_mode=parsed.trace)

    try:
        if parsed.no_config:
            config = {}
        else:
            config = load_config_with_priority(parsed.config, os.environ.get(CONFIG_ENV_VAR))
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        return COMMANDS[parsed.command](parsed, config)
    except DiffyError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e.message}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print(f"Unexpected error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)


__all__ = ["main"]
