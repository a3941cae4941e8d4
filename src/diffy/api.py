#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/api.py
"""High-level entry points of the diffy library.

The engine functions (:func:`compute_diff`, :func:`parse_unified_diff`, the
row layouts and :func:`find_matches`) are re-exported unchanged. This module
adds file-system helpers that read documents from disk and a single
:func:`render_diff` dispatcher over the available renderers.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from rich.console import Console

from diffy.constants import DEFAULT_FILE_NAME, FileKind, OutputFormat
from diffy.engine.chunks import compute_diff, edits_to_lines, group_into_chunks, split_lines
from diffy.engine.layout import build_side_by_side_rows, build_unified_rows
from diffy.engine.parser import parse_unified_diff
from diffy.engine.search import find_matches
from diffy.engine.sequence import diff_sequences
from diffy.exceptions import FileError, ValidationError
from diffy.models import FileDiff
from diffy.options import DiffOptions
from diffy.renderers import JsonDiffRenderer, SideBySideRenderer, UnifiedDiffRenderer

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Bytes inspected when sniffing for binary content
_BINARY_SNIFF_BYTES = 8000

__all__ = [
    "build_side_by_side_rows",
    "build_unified_rows",
    "compute_diff",
    "diff_files",
    "diff_trees",
    "find_matches",
    "parse_unified_diff",
    "render_diff",
]


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileError(f"Could not read file: {path}", file_path=str(path), original_error=e) from e


def _is_binary(data: bytes) -> bool:
    return b"\0" in data[:_BINARY_SNIFF_BYTES]


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _one_sided_diff(data: bytes, label: str, kind: FileKind, options: DiffOptions) -> FileDiff:
    """Diff a file that exists on only one side against nothing."""
    if _is_binary(data):
        return FileDiff.from_chunks(label, label, [], kind=kind, is_binary=True)

    text = _decode(data)
    lines = split_lines(text)
    if text.endswith("\n"):
        # the final newline has no counterpart line on the missing side
        lines.pop()

    old_lines: list[str] = lines if kind == "deleted" else []
    new_lines: list[str] = lines if kind == "added" else []
    edits = diff_sequences(
        old_lines,
        new_lines,
        size_limit=options.exact_size_limit,
        lookahead=options.fallback_lookahead,
    )
    chunks = group_into_chunks(edits_to_lines(edits), options.context_lines, label)
    return FileDiff.from_chunks(label, label, chunks, kind=kind)


def diff_files(
    old_path: PathLike,
    new_path: PathLike,
    *,
    options: Optional[DiffOptions] = None,
    label: Optional[str] = None,
) -> FileDiff:
    """Compare two text files on disk.

    Files are decoded as UTF-8 with undecodable bytes replaced. Files whose
    first bytes contain a NUL byte are treated as binary and reported
    without chunks.

    Parameters
    ----------
    old_path : str or Path
        Path to the original file
    new_path : str or Path
        Path to the updated file
    options : DiffOptions, optional
        Diff options; defaults to :class:`DiffOptions`
    label : str, optional
        Display path of the result (defaults to ``new_path`` as given)

    Returns
    -------
    FileDiff
        Structured diff of the two files

    Raises
    ------
    FileError
        If either file cannot be read

    """
    options = options or DiffOptions()
    old_path = Path(old_path)
    new_path = Path(new_path)
    label = label or str(new_path) or DEFAULT_FILE_NAME

    old_data = _read_bytes(old_path)
    new_data = _read_bytes(new_path)

    if _is_binary(old_data) or _is_binary(new_data):
        logger.debug("Treating %s as binary", label)
        return FileDiff.from_chunks(label, label, [], kind="modified", is_binary=old_data != new_data)

    return compute_diff(_decode(old_data), _decode(new_data), label, options=options)


def _diff_tree_entry(
    relative_path: str,
    old_path: Optional[Path],
    new_path: Optional[Path],
    options: DiffOptions,
) -> Optional[FileDiff]:
    """Diff one relative path of two trees; None when the files are identical."""
    if old_path is not None and new_path is not None:
        if _read_bytes(old_path) == _read_bytes(new_path):
            return None
        return diff_files(old_path, new_path, options=options, label=relative_path)
    if new_path is not None:
        return _one_sided_diff(_read_bytes(new_path), relative_path, "added", options)
    if old_path is not None:
        return _one_sided_diff(_read_bytes(old_path), relative_path, "deleted", options)
    return None


def _collect_files(root: Path) -> dict[str, Path]:
    if not root.is_dir():
        raise FileError(f"Not a directory: {root}", file_path=str(root))
    return {path.relative_to(root).as_posix(): path for path in root.rglob("*") if path.is_file()}


def diff_trees(
    old_root: PathLike,
    new_root: PathLike,
    *,
    options: Optional[DiffOptions] = None,
    max_workers: Optional[int] = None,
) -> list[FileDiff]:
    """Compare two directory trees file by file.

    Files are paired by their path relative to each root. A file present
    only under ``old_root`` is reported as ``deleted``, one present only
    under ``new_root`` as ``added``; byte-identical files are omitted.

    Parameters
    ----------
    old_root : str or Path
        Directory holding the original files
    new_root : str or Path
        Directory holding the updated files
    options : DiffOptions, optional
        Diff options; defaults to :class:`DiffOptions`
    max_workers : int, optional
        Worker processes used to diff files in parallel. ``1`` diffs
        sequentially in the calling process; ``None`` lets
        :class:`~concurrent.futures.ProcessPoolExecutor` choose.

    Returns
    -------
    list of FileDiff
        Diffs of changed files, ordered by relative path

    Raises
    ------
    FileError
        If a root is not a directory or a file cannot be read

    """
    options = options or DiffOptions()
    old_files = _collect_files(Path(old_root))
    new_files = _collect_files(Path(new_root))
    relative_paths = sorted(set(old_files) | set(new_files))

    results: dict[str, Optional[FileDiff]] = {}

    if max_workers == 1 or len(relative_paths) <= 1:
        for relative_path in relative_paths:
            results[relative_path] = _diff_tree_entry(
                relative_path, old_files.get(relative_path), new_files.get(relative_path), options
            )
    else:
        logger.debug("Diffing %d paths with %s worker processes", len(relative_paths), max_workers or "default")
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(
                    _diff_tree_entry,
                    relative_path,
                    old_files.get(relative_path),
                    new_files.get(relative_path),
                    options,
                ): relative_path
                for relative_path in relative_paths
            }

            for future in as_completed(futures):
                results[futures[future]] = future.result()

    return [file_diff for path in relative_paths if (file_diff := results[path]) is not None]


def render_diff(
    files: Iterable[FileDiff],
    format: OutputFormat = "unified",
    *,
    options: Optional[DiffOptions] = None,
    use_color: bool = False,
    width: Optional[int] = None,
) -> str:
    """Render file diffs to text in the requested format.

    Parameters
    ----------
    files : iterable of FileDiff
        Diffs to render
    format : {'unified', 'json', 'side-by-side'}, default 'unified'
        Output format
    options : DiffOptions, optional
        Supplies the context used when collapsing side-by-side rows
    use_color : bool, default False
        Emit ANSI colors (unified and side-by-side formats)
    width : int, optional
        Terminal width for the side-by-side format

    Returns
    -------
    str
        Rendered output

    Raises
    ------
    ValidationError
        If ``format`` is not a known output format

    """
    options = options or DiffOptions()
    file_list: Sequence[FileDiff] = list(files)

    if format == "unified":
        return UnifiedDiffRenderer(use_color=use_color).render_text(file_list)
    if format == "json":
        return JsonDiffRenderer().render(file_list) + "\n"
    if format == "side-by-side":
        console = Console(
            force_terminal=use_color,
            color_system="standard" if use_color else None,
            width=width,
        )
        return SideBySideRenderer(
            console=console,
            context_lines=options.context_lines,
            min_collapse_lines=options.min_collapse_lines,
        ).render(file_list)

    raise ValidationError(
        f"Unknown output format: {format}",
        parameter_name="format",
        parameter_value=format,
    )
