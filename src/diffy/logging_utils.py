#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/logging_utils.py
"""Logging setup for the diffy command line.

Library modules log through ``logging.getLogger(__name__)`` and never install
handlers. :func:`configure_logging` is called once by :func:`diffy.cli.main`
and routes every record to stderr, optionally teeing it to a file.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: int | str) -> int:
    """Return the numeric level for a level name, falling back to WARNING."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.WARNING


def _attach(root_logger: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install the CLI's log handlers on the root logger.

    Any handlers already on the root logger are replaced, so repeated calls
    (one per :func:`diffy.cli.main` invocation) do not duplicate output.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name such as ``"DEBUG"``
    log_file : str, optional
        File that receives a copy of every record; a file that cannot be
        opened is reported as a warning and otherwise ignored
    trace_mode : bool, default False
        Prefix records with a timestamp and the logger name

    Returns
    -------
    logging.Logger
        The configured root logger

    """
    level = resolve_log_level(log_level)
    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(DEFAULT_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    _attach(root_logger, logging.StreamHandler(sys.stderr), level, formatter)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not open log file %s: %s", log_file, exc)
        else:
            _attach(root_logger, file_handler, level, formatter)
            logging.getLogger("diffy").debug("Logging to file: %s", log_file)

    return root_logger
