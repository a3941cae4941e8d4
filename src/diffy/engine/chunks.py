#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/engine/chunks.py
"""Build contextual chunks (hunks) from two texts.

The pipeline is::

    split_lines -> diff_sequences -> edits_to_lines -> attach_word_diffs
                -> group_into_chunks -> FileDiff

Every stage is a pure function of its input. Long-running stages check an
optional cancellation event so a stale request can be abandoned.
"""

from __future__ import annotations

import logging
from typing import Sequence

from diffy.constants import DEFAULT_CONTEXT_LINES, DEFAULT_FILE_NAME
from diffy.engine.sequence import CancelEvent, Edit, check_cancelled, diff_sequences
from diffy.engine.words import attach_word_diffs
from diffy.models import DiffChunk, DiffLine, FileDiff
from diffy.options import DiffOptions

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Split text on ``\\n``; the empty string is a single empty line."""
    return text.split("\n")


def edits_to_lines(
    edits: Sequence[Edit[str]],
    *,
    cancel_event: CancelEvent | None = None,
) -> list[DiffLine]:
    """Expand an edit script into one :class:`DiffLine` per line.

    Old and new line counters start at 1 and advance with every line on
    their side. Edit values spanning several lines are split on ``\\n``.
    """
    lines: list[DiffLine] = []
    old_number = 1
    new_number = 1

    for edit in edits:
        check_cancelled(cancel_event)
        for content in edit.value.split("\n"):
            if edit.kind == "equal":
                lines.append(DiffLine.unchanged(content, old_number, new_number))
                old_number += 1
                new_number += 1
            elif edit.kind == "delete":
                lines.append(DiffLine.removed(content, old_number))
                old_number += 1
            else:
                lines.append(DiffLine.added(content, new_number))
                new_number += 1

    return lines


def group_into_chunks(
    lines: Sequence[DiffLine],
    context_lines: int = DEFAULT_CONTEXT_LINES,
    path: str = DEFAULT_FILE_NAME,
    *,
    cancel_event: CancelEvent | None = None,
) -> list[DiffChunk]:
    """Group a file's lines into context-padded chunks.

    Line ``i`` belongs to a chunk when a changed line lies within
    ``context_lines`` of it. Contiguous member lines form one chunk; all
    other unchanged lines are dropped. A file without changes yields a
    single chunk spanning every line.

    Parameters
    ----------
    lines : sequence of DiffLine
        Full, unclipped line list of one file
    context_lines : int, default 3
        Radius of unchanged context around each change
    path : str, default "file"
        Path used to build deterministic chunk ids (``<path>-chunk-<n>``)
    cancel_event : CancelEvent, optional
        Checked once per line

    Returns
    -------
    list of DiffChunk
        Chunks in file order; empty only when ``lines`` is empty

    """
    total = len(lines)
    if total == 0:
        return []

    context = max(0, context_lines)
    in_chunk = [False] * total
    for i, line in enumerate(lines):
        check_cancelled(cancel_event)
        if line.is_change:
            for j in range(max(0, i - context), min(total, i + context + 1)):
                in_chunk[j] = True

    if not any(in_chunk):
        return [DiffChunk.from_lines(lines, f"{path}-chunk-0")]

    chunks: list[DiffChunk] = []
    current: list[DiffLine] = []
    # lines on each side preceding the current chunk
    old_before = 0
    new_before = 0
    old_seen = 0
    new_seen = 0

    for i, line in enumerate(lines):
        if in_chunk[i]:
            if not current:
                old_before = old_seen
                new_before = new_seen
            current.append(line)
        elif current:
            chunks.append(_make_chunk(current, f"{path}-chunk-{len(chunks)}", old_before, new_before))
            current = []

        if line.old_line_number is not None:
            old_seen += 1
        if line.new_line_number is not None:
            new_seen += 1

    if current:
        chunks.append(_make_chunk(current, f"{path}-chunk-{len(chunks)}", old_before, new_before))

    return chunks


def _make_chunk(lines: list[DiffLine], chunk_id: str, old_before: int, new_before: int) -> DiffChunk:
    # A side with no lines in the chunk starts at the preceding line number,
    # as in "@@ -0,0 +1,2 @@"
    has_old = any(line.old_line_number is not None for line in lines)
    has_new = any(line.new_line_number is not None for line in lines)
    return DiffChunk.from_lines(
        lines,
        chunk_id,
        old_start=None if has_old else old_before,
        new_start=None if has_new else new_before,
    )


def compute_diff(
    old_text: str,
    new_text: str,
    file_name: str | None = None,
    *,
    options: DiffOptions | None = None,
    cancel_event: CancelEvent | None = None,
) -> FileDiff:
    """Compute a structured diff between two texts.

    Parameters
    ----------
    old_text : str
        Original document text
    new_text : str
        Updated document text
    file_name : str, optional
        Display path for both sides; defaults to ``"file"``
    options : DiffOptions, optional
        Context radius and algorithm limits; defaults to :class:`DiffOptions`
    cancel_event : CancelEvent, optional
        When set, the computation stops with :class:`DiffCancelledError`

    Returns
    -------
    FileDiff
        Exactly one file diff whose kind is always ``"modified"``

    Examples
    --------
    >>> diff = compute_diff("const foo = 1;\\n", "const bar = 2;\\n", "a.ts")
    >>> (diff.additions, diff.deletions)
    (1, 1)

    """
    options = options or DiffOptions()
    path = file_name or DEFAULT_FILE_NAME

    edits = diff_sequences(
        split_lines(old_text),
        split_lines(new_text),
        size_limit=options.exact_size_limit,
        lookahead=options.fallback_lookahead,
        cancel_event=cancel_event,
    )
    lines = attach_word_diffs(edits_to_lines(edits, cancel_event=cancel_event))
    chunks = group_into_chunks(lines, options.context_lines, path, cancel_event=cancel_event)

    file_diff = FileDiff.from_chunks(path, path, chunks, kind="modified")
    logger.debug(
        "Computed diff for %s: %d chunk(s), +%d -%d",
        path,
        len(file_diff.chunks),
        file_diff.additions,
        file_diff.deletions,
    )
    return file_diff
