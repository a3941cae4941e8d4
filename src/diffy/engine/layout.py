#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/engine/layout.py
"""Row layouts for displaying chunks, with collapsible unchanged regions.

A chunk produced by :func:`~diffy.engine.chunks.compute_diff` or by the
parser may still contain long runs of unchanged lines (a file without
changes, or hunks with a wide context). The layout builders hide such runs
behind a single :class:`~diffy.models.CollapsedRow` unless the caller has
marked the region as expanded by putting its :func:`region_key` into
``expanded_region_keys``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Container, Sequence

from diffy.constants import DEFAULT_CONTEXT_LINES, MIN_COLLAPSE_LINES
from diffy.models import (
    ChangeRow,
    CollapsedRow,
    ContextRow,
    DiffChunk,
    DiffLine,
    LineRow,
    SideBySideRow,
    UnifiedRow,
    region_key,
)


__all__ = [
    "CollapsibleRegion",
    "find_collapsible_regions",
    "region_key",
    "build_side_by_side_rows",
    "build_unified_rows",
]


@dataclass(frozen=True, slots=True)
class CollapsibleRegion:
    """Half-open range ``[start, end)`` of line indices within a chunk."""

    start: int
    end: int

    @property
    def count(self) -> int:
        return self.end - self.start


def _change_runs(lines: Sequence[DiffLine]) -> list[tuple[int, int]]:
    runs: list[tuple[int, int]] = []
    i = 0
    while i < len(lines):
        if lines[i].is_change:
            start = i
            while i < len(lines) and lines[i].is_change:
                i += 1
            runs.append((start, i))
        else:
            i += 1
    return runs


def find_collapsible_regions(
    lines: Sequence[DiffLine],
    context_lines: int = DEFAULT_CONTEXT_LINES,
    min_lines: int = MIN_COLLAPSE_LINES,
) -> list[CollapsibleRegion]:
    """Find the unchanged spans of a chunk that may be hidden.

    Each run of unchanged lines keeps ``context_lines`` of context next to
    every neighbouring change. A run between two changes collapses when what
    remains spans at least ``min_lines`` lines; a run at either edge of the
    chunk collapses when it is longer than ``context_lines + min_lines``.
    A chunk without any change keeps
    ``context_lines`` at both ends and collapses the middle when the chunk
    is longer than ``2 * context_lines + 1``.

    Parameters
    ----------
    lines : sequence of DiffLine
        Lines of one chunk
    context_lines : int, default 3
        Context kept next to changes; negative values are treated as 0
    min_lines : int, default MIN_COLLAPSE_LINES
        Smallest span worth collapsing

    Returns
    -------
    list of CollapsibleRegion
        Non-overlapping regions in ascending order

    Examples
    --------
    Ten unchanged lines between two changes, with three lines of context,
    leave four hidden lines:

    >>> lines = [DiffLine.added("x", 1)] + [DiffLine.unchanged("", i, i) for i in range(10)]
    >>> lines += [DiffLine.added("y", 12)]
    >>> find_collapsible_regions(lines, 3)
    [CollapsibleRegion(start=4, end=8)]

    """
    total = len(lines)
    context = max(0, context_lines)
    runs = _change_runs(lines)

    if not runs:
        if total > 2 * context + 1:
            return [CollapsibleRegion(context, total - context)]
        return []

    candidates: list[tuple[int, int]] = []

    # edge runs keep context on one side only and must exceed context + min_lines
    first_start = runs[0][0]
    if first_start > context + min_lines:
        candidates.append((0, first_start - context))

    for (_, gap_start), (gap_end, _) in zip(runs, runs[1:]):
        if gap_end - gap_start - 2 * context >= min_lines:
            candidates.append((gap_start + context, gap_end - context))

    last_end = runs[-1][1]
    if total - last_end > context + min_lines:
        candidates.append((last_end + context, total))

    return [CollapsibleRegion(start, end) for start, end in candidates]


def _first_change_index(lines: Sequence[DiffLine]) -> int:
    return next((i for i, line in enumerate(lines) if line.is_change), -1)


def build_side_by_side_rows(
    chunks: Sequence[DiffChunk],
    context_lines: int = DEFAULT_CONTEXT_LINES,
    expanded_region_keys: Container[str] = frozenset(),
    *,
    min_collapse_lines: int = MIN_COLLAPSE_LINES,
) -> list[SideBySideRow]:
    """Lay chunks out as two-column rows.

    Unchanged lines become :class:`ContextRow` and collapsible regions that
    are not expanded become a single :class:`CollapsedRow`. A run of removed
    lines followed by a run of added lines is zipped into
    ``max(removed, added)`` :class:`ChangeRow` entries, leaving the shorter
    side empty; added lines with no preceding removal get an empty left cell.

    ``is_first_in_chunk`` is set on exactly one row per chunk with changes:
    the row holding the chunk's first changed line.

    Parameters
    ----------
    chunks : sequence of DiffChunk
        Chunks of one file, in order
    context_lines : int, default 3
        Context kept next to changes when collapsing
    expanded_region_keys : container of str, optional
        Keys (see :func:`region_key`) of regions the user has expanded
    min_collapse_lines : int, default MIN_COLLAPSE_LINES
        Smallest span worth collapsing

    Returns
    -------
    list of SideBySideRow
        Rows of every chunk, in order

    """
    rows: list[SideBySideRow] = []

    for chunk in chunks:
        lines = chunk.lines
        first_change = _first_change_index(lines)
        regions = {
            region.start: region
            for region in find_collapsible_regions(lines, context_lines, min_collapse_lines)
        }

        i = 0
        while i < len(lines):
            region = regions.get(i)
            if region is not None and region_key(chunk.id, region.start) not in expanded_region_keys:
                rows.append(CollapsedRow(region.count, region.start, chunk.id))
                i = region.end
                continue

            line = lines[i]
            if line.kind == "unchanged":
                rows.append(ContextRow(line, chunk.id))
                i += 1
            elif line.kind == "removed":
                removed_start = i
                while i < len(lines) and lines[i].kind == "removed":
                    i += 1
                added_start = i
                while i < len(lines) and lines[i].kind == "added":
                    i += 1

                removed_count = added_start - removed_start
                added_count = i - added_start
                for j in range(max(removed_count, added_count)):
                    left = lines[removed_start + j] if j < removed_count else None
                    right = lines[added_start + j] if j < added_count else None
                    is_first = (j < removed_count and removed_start + j == first_change) or (
                        j < added_count and added_start + j == first_change
                    )
                    rows.append(ChangeRow(left, right, chunk.id, is_first_in_chunk=is_first))
            else:
                rows.append(ChangeRow(None, line, chunk.id, is_first_in_chunk=i == first_change))
                i += 1

    return rows


def build_unified_rows(
    chunks: Sequence[DiffChunk],
    context_lines: int = DEFAULT_CONTEXT_LINES,
    expanded_region_keys: Container[str] = frozenset(),
    *,
    min_collapse_lines: int = MIN_COLLAPSE_LINES,
) -> list[UnifiedRow]:
    """Lay chunks out as single-column rows, one :class:`LineRow` per line.

    Collapsing follows :func:`build_side_by_side_rows`, so a region key
    expands the same region in both layouts.
    """
    rows: list[UnifiedRow] = []

    for chunk in chunks:
        lines = chunk.lines
        first_change = _first_change_index(lines)
        regions = {
            region.start: region
            for region in find_collapsible_regions(lines, context_lines, min_collapse_lines)
        }

        i = 0
        while i < len(lines):
            region = regions.get(i)
            if region is not None and region_key(chunk.id, region.start) not in expanded_region_keys:
                rows.append(CollapsedRow(region.count, region.start, chunk.id))
                i = region.end
                continue

            rows.append(LineRow(lines[i], chunk.id, is_first_in_chunk=i == first_change))
            i += 1

    return rows
