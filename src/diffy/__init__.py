#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/__init__.py
"""Structured, renderable diffs of text documents.

diffy computes line- and word-level differences between two texts, parses
unified diff text (including git patches) into the same structured model,
and lays the result out as side-by-side or unified rows with collapsible
unchanged regions.

Examples
--------
Compute a diff between two texts:
    >>> from diffy import compute_diff
    >>> diff = compute_diff("const foo = 1;\\n", "const bar = 2;\\n", "a.ts")
    >>> diff.additions, diff.deletions
    (1, 1)

Parse a git patch:
    >>> from diffy import parse_unified_diff
    >>> files = parse_unified_diff(patch_text)
    >>> [(f.new_path, f.kind) for f in files]

Build rows for a review UI:
    >>> from diffy import build_side_by_side_rows
    >>> rows = build_side_by_side_rows(diff.chunks, 3, expanded_region_keys=set())

"""

from importlib.metadata import PackageNotFoundError, version

from diffy.api import (
    build_side_by_side_rows,
    build_unified_rows,
    compute_diff,
    diff_files,
    diff_trees,
    find_matches,
    parse_unified_diff,
    render_diff,
)
from diffy.constants import ChunkDecision, FileKind, LineKind
from diffy.engine.layout import CollapsibleRegion, find_collapsible_regions
from diffy.exceptions import DiffCancelledError, DiffyError, FileError, ValidationError
from diffy.models import (
    ChangeRow,
    CollapsedRow,
    ContextRow,
    DiffChunk,
    DiffLine,
    FileDiff,
    LineRow,
    SearchMatch,
    SideBySideRow,
    UnifiedRow,
    WordSegment,
    region_key,
)
from diffy.options import DiffOptions

try:
    __version__ = version("diffy")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "__version__",
    # API
    "build_side_by_side_rows",
    "build_unified_rows",
    "compute_diff",
    "diff_files",
    "diff_trees",
    "find_collapsible_regions",
    "find_matches",
    "parse_unified_diff",
    "region_key",
    "render_diff",
    # Model
    "ChangeRow",
    "ChunkDecision",
    "CollapsedRow",
    "CollapsibleRegion",
    "ContextRow",
    "DiffChunk",
    "DiffLine",
    "FileDiff",
    "FileKind",
    "LineKind",
    "LineRow",
    "SearchMatch",
    "SideBySideRow",
    "UnifiedRow",
    "WordSegment",
    # Options
    "DiffOptions",
    # Exceptions
    "DiffCancelledError",
    "DiffyError",
    "FileError",
    "ValidationError",
]
