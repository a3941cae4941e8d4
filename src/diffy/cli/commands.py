#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/diffy/cli/commands.py
"""Handlers for the ``compare`` and ``parse`` subcommands.

Each handler receives the parsed arguments and the loaded configuration
mapping and returns an exit code. Library errors propagate to
:func:`diffy.cli.main`, which maps them to exit codes.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Sequence

from diffy.api import diff_files, diff_trees, parse_unified_diff, render_diff
from diffy.cli.builder import COLOR_MODES, EXIT_SUCCESS, OUTPUT_FORMATS
from diffy.exceptions import FileError, ValidationError
from diffy.models import FileDiff
from diffy.options import DiffOptions

logger = logging.getLogger(__name__)

# Config keys consumed by the CLI itself; every other key is a DiffOptions field
CLI_CONFIG_KEYS = ("format", "color")


def resolve_settings(parsed: argparse.Namespace, config: Mapping[str, Any]) -> tuple[DiffOptions, str, str]:
    """Combine configuration and command-line arguments.

    Command-line values override configuration values, which override the
    defaults.

    Parameters
    ----------
    parsed : argparse.Namespace
        Parsed command-line arguments
    config : Mapping[str, Any]
        Loaded configuration file contents

    Returns
    -------
    tuple of (DiffOptions, str, str)
        Diff options, output format and color mode

    Raises
    ------
    ValidationError
        If the configuration holds unknown keys or invalid values

    """
    options = DiffOptions.from_mapping({k: v for k, v in config.items() if k not in CLI_CONFIG_KEYS})
    if parsed.context is not None:
        options = options.create_updated(context_lines=parsed.context)

    output_format = parsed.format or config.get("format", "unified")
    if output_format not in OUTPUT_FORMATS:
        raise ValidationError(
            f"Invalid output format in configuration: {output_format!r}",
            parameter_name="format",
            parameter_value=output_format,
        )

    color = parsed.color or config.get("color", "auto")
    if color not in COLOR_MODES:
        raise ValidationError(
            f"Invalid color mode in configuration: {color!r}",
            parameter_name="color",
            parameter_value=color,
        )

    return options, output_format, color


def _should_use_color(color: str, output: str | None) -> bool:
    if color == "always":
        return True
    if color == "auto" and not output:
        return sys.stdout.isatty()
    return False


def _emit(files: Sequence[FileDiff], parsed: argparse.Namespace, config: Mapping[str, Any]) -> int:
    """Render changed files to stdout or to the ``--output`` file."""
    options, output_format, color = resolve_settings(parsed, config)
    changed = [file_diff for file_diff in files if file_diff.has_changes]

    if not changed:
        print("No differences found.", file=sys.stderr)
        if not parsed.output:
            return EXIT_SUCCESS

    use_color = _should_use_color(color, parsed.output)
    text = render_diff(changed, output_format, options=options, use_color=use_color)

    if parsed.output:
        output_path = Path(parsed.output)
        try:
            output_path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise FileError(f"Could not write output file: {output_path}", file_path=str(output_path), original_error=e) from e
        print(f"Diff written to: {output_path}", file=sys.stderr)
    else:
        sys.stdout.write(text)

    return EXIT_SUCCESS


def handle_compare_command(parsed: argparse.Namespace, config: Mapping[str, Any]) -> int:
    """Compare two files or two directory trees.

    Parameters
    ----------
    parsed : argparse.Namespace
        Arguments of ``diffy compare``
    config : Mapping[str, Any]
        Loaded configuration

    Returns
    -------
    int
        Exit code (0 for success, also when there are no differences)

    Raises
    ------
    FileError
        If an input does not exist or cannot be read
    ValidationError
        If a file is compared with a directory, or the configuration is invalid

    """
    options, _, _ = resolve_settings(parsed, config)
    old_path = Path(parsed.old)
    new_path = Path(parsed.new)

    for path in (old_path, new_path):
        if not path.exists():
            raise FileError(f"Source file not found: {path}", file_path=str(path))

    if old_path.is_dir() and new_path.is_dir():
        max_workers = parsed.parallel or None
        logger.info("Comparing directories %s and %s", old_path, new_path)
        files = diff_trees(old_path, new_path, options=options, max_workers=max_workers)
    elif old_path.is_dir() or new_path.is_dir():
        raise ValidationError(
            "Cannot compare a directory with a file",
            parameter_name="paths",
            parameter_value=(str(old_path), str(new_path)),
        )
    else:
        logger.info("Comparing %s and %s", old_path, new_path)
        files = [diff_files(old_path, new_path, options=options)]

    return _emit(files, parsed, config)


def handle_parse_command(parsed: argparse.Namespace, config: Mapping[str, Any]) -> int:
    """Parse a unified diff from a file or stdin and re-render it.

    Parameters
    ----------
    parsed : argparse.Namespace
        Arguments of ``diffy parse``
    config : Mapping[str, Any]
        Loaded configuration

    Returns
    -------
    int
        Exit code (0 for success)

    Raises
    ------
    FileError
        If the patch file cannot be read

    """
    if parsed.patch == "-":
        diff_text = sys.stdin.read()
    else:
        patch_path = Path(parsed.patch)
        try:
            diff_text = patch_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise FileError(f"Could not read patch file: {patch_path}", file_path=str(patch_path), original_error=e) from e

    files = parse_unified_diff(diff_text)
    logger.info("Parsed %d file(s) from patch", len(files))
    return _emit(files, parsed, config)
