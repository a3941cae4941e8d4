#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/exceptions.py
"""Errors raised by diffy.

Computing, parsing and laying out diffs never fails for well-shaped input.
The exceptions below belong to the edges around the engine: option checks,
file access in the convenience API and cancellation of a running diff.

Hierarchy
---------
- DiffyError

  - ValidationError: an option or argument is out of range

  - FileError: an input path is missing or unreadable

  - DiffCancelledError: the caller set the cancellation event

"""

from typing import Any


class DiffyError(Exception):
    """Root of the diffy error types.

    Parameters
    ----------
    message : str
        Text shown to the user
    original_error : Exception, optional
        Lower-level exception this one wraps

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(DiffyError):
    """An option or argument value was rejected.

    ``parameter_name`` and ``parameter_value`` identify the offending
    setting, so the CLI can point at the flag or config key.
    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class FileError(DiffyError):
    """An input file or directory could not be read.

    Parameters
    ----------
    message : str
        Text shown to the user
    file_path : str, optional
        The path that failed
    original_error : Exception, optional
        Underlying ``OSError`` or decoding error

    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class DiffCancelledError(DiffyError):
    """The caller cancelled a diff computation before it finished.

    Raised from the outer loops of the sequence differ and the chunk builder
    once the cancellation event is set. Nothing partial is returned.
    """

    def __init__(self, message: str = "Diff computation was cancelled"):
        super().__init__(message)
