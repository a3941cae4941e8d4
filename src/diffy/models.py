#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/models.py
"""Structured diff model shared by the differ, the parser and the layouts.

Both entry points of the engine (computing a diff from two texts and
parsing unified-diff text) produce the same :class:`FileDiff` /
:class:`DiffChunk` / :class:`DiffLine` model, which the row layout builders
consume. Every model object is immutable: results can be cached, shared
between threads and compared by value.

Model Hierarchy
---------------
- FileDiff
    - DiffChunk (hunk, identified by ``id`` within its file)
        - DiffLine (added, removed or unchanged)
            - WordSegment (sub-line highlight)

Rows produced by the layout builders are tagged variants rather than one
record with optional flags:

- ContextRow: an unchanged line shown on both sides
- ChangeRow: a removed line, an added line, or a pair of them
- CollapsedRow: a placeholder for a hidden run of unchanged lines
- LineRow: one line of the unified (single column) layout

"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence, Union

from diffy.constants import FileKind, LineKind


@dataclass(frozen=True, slots=True)
class WordSegment:
    """A run of text inside a changed line, tagged with its change kind."""

    text: str
    kind: LineKind


@dataclass(frozen=True, slots=True)
class DiffLine:
    """A single line of a diff.

    Use the :meth:`added`, :meth:`removed` and :meth:`unchanged` constructors,
    which guarantee that ``old_line_number`` is set exactly for removed and
    unchanged lines and ``new_line_number`` exactly for added and unchanged
    lines.

    Parameters
    ----------
    kind : {'added', 'removed', 'unchanged'}
        Change kind of the line
    content : str
        Line text without a trailing newline or diff marker
    old_line_number : int or None
        1-based line number in the old text
    new_line_number : int or None
        1-based line number in the new text
    word_segments : tuple of WordSegment, optional
        Word-level highlighting, present only on paired changed lines

    """

    kind: LineKind
    content: str
    old_line_number: Optional[int]
    new_line_number: Optional[int]
    word_segments: Optional[tuple[WordSegment, ...]] = None

    @classmethod
    def added(cls, content: str, new_line_number: int) -> DiffLine:
        """Create a line that only exists in the new text."""
        return cls("added", content, None, new_line_number)

    @classmethod
    def removed(cls, content: str, old_line_number: int) -> DiffLine:
        """Create a line that only exists in the old text."""
        return cls("removed", content, old_line_number, None)

    @classmethod
    def unchanged(cls, content: str, old_line_number: int, new_line_number: int) -> DiffLine:
        """Create a line present in both texts."""
        return cls("unchanged", content, old_line_number, new_line_number)

    @property
    def is_change(self) -> bool:
        """Return True for added and removed lines."""
        return self.kind != "unchanged"

    def with_word_segments(self, segments: Iterable[WordSegment]) -> DiffLine:
        """Return a copy of this line carrying the given word segments."""
        return replace(self, word_segments=tuple(segments))


@dataclass(frozen=True, slots=True)
class DiffChunk:
    """A contiguous, context-padded group of lines (a hunk).

    ``old_length`` counts lines that are not added and ``new_length`` counts
    lines that are not removed, so the header ``@@ -old_start,old_length
    +new_start,new_length @@`` always describes ``lines`` exactly.
    """

    old_start: int
    old_length: int
    new_start: int
    new_length: int
    lines: tuple[DiffLine, ...]
    id: str

    @classmethod
    def from_lines(
        cls,
        lines: Sequence[DiffLine],
        chunk_id: str,
        old_start: int | None = None,
        new_start: int | None = None,
    ) -> DiffChunk:
        """Build a chunk whose lengths are derived from its lines.

        Parameters
        ----------
        lines : sequence of DiffLine
            Lines of the chunk, in order
        chunk_id : str
            Identifier unique within the owning file
        old_start : int, optional
            Starting old line number; defaults to the first old line number
            found in ``lines`` (or 1)
        new_start : int, optional
            Starting new line number; defaults to the first new line number
            found in ``lines`` (or 1)

        Returns
        -------
        DiffChunk
            The assembled chunk

        """
        if old_start is None:
            old_start = next((ln.old_line_number for ln in lines if ln.old_line_number is not None), 1)
        if new_start is None:
            new_start = next((ln.new_line_number for ln in lines if ln.new_line_number is not None), 1)
        return cls(
            old_start=old_start,
            old_length=sum(1 for ln in lines if ln.kind != "added"),
            new_start=new_start,
            new_length=sum(1 for ln in lines if ln.kind != "removed"),
            lines=tuple(lines),
            id=chunk_id,
        )

    @property
    def additions(self) -> int:
        """Number of added lines in the chunk."""
        return sum(1 for ln in self.lines if ln.kind == "added")

    @property
    def deletions(self) -> int:
        """Number of removed lines in the chunk."""
        return sum(1 for ln in self.lines if ln.kind == "removed")

    @property
    def has_changes(self) -> bool:
        """Return True if any line in the chunk is added or removed."""
        return any(ln.is_change for ln in self.lines)


@dataclass(frozen=True, slots=True)
class FileDiff:
    """All changes to a single file.

    Parameters
    ----------
    old_path, new_path : str
        Display paths; never the ``/dev/null`` sentinel
    chunks : tuple of DiffChunk
        Hunks in file order (empty for binary files and pure renames)
    kind : {'modified', 'added', 'deleted', 'renamed'}
        File-level change classification
    additions, deletions : int
        Added and removed line totals across ``chunks``
    is_binary : bool, default False
        True when the source diff only reported that binary content differs

    """

    old_path: str
    new_path: str
    chunks: tuple[DiffChunk, ...]
    kind: FileKind
    additions: int
    deletions: int
    is_binary: bool = False

    @classmethod
    def from_chunks(
        cls,
        old_path: str,
        new_path: str,
        chunks: Sequence[DiffChunk],
        kind: FileKind = "modified",
        is_binary: bool = False,
    ) -> FileDiff:
        """Build a file diff, deriving the addition and deletion totals."""
        return cls(
            old_path=old_path,
            new_path=new_path,
            chunks=tuple(chunks),
            kind=kind,
            additions=sum(chunk.additions for chunk in chunks),
            deletions=sum(chunk.deletions for chunk in chunks),
            is_binary=is_binary,
        )

    @property
    def has_changes(self) -> bool:
        """Return True if the file differs at all (lines, content, path or existence)."""
        return bool(self.additions or self.deletions or self.is_binary or self.kind != "modified")

    def iter_lines(self) -> Iterable[DiffLine]:
        """Iterate over every line of every chunk in order."""
        for chunk in self.chunks:
            yield from chunk.lines


# Row variants ---------------------------------------------------------------
#
# Every variant exposes ``is_first_in_chunk`` so renderers can read it off any
# row. Only a row holding a changed line (``ChangeRow``, or ``LineRow`` in the
# unified layout) ever sets it; on ``ContextRow`` and ``CollapsedRow`` it is
# always False.


@dataclass(frozen=True, slots=True)
class ContextRow:
    """An unchanged line displayed identically on both sides; never a chunk anchor."""

    line: DiffLine
    chunk_id: str
    is_first_in_chunk: bool = False

    @property
    def left(self) -> DiffLine:
        return self.line

    @property
    def right(self) -> DiffLine:
        return self.line


@dataclass(frozen=True, slots=True)
class ChangeRow:
    """A changed row; either side may be empty when runs have unequal length."""

    left: Optional[DiffLine]
    right: Optional[DiffLine]
    chunk_id: str
    is_first_in_chunk: bool = False


@dataclass(frozen=True, slots=True)
class CollapsedRow:
    """Placeholder for ``count`` hidden unchanged lines.

    ``start_offset`` is the index of the first hidden line within the chunk's
    ``lines``; together with ``chunk_id`` it forms the region key callers use
    to record which regions have been expanded. Hidden lines are unchanged,
    so a placeholder never anchors its chunk.
    """

    count: int
    start_offset: int
    chunk_id: str
    is_first_in_chunk: bool = False

    @property
    def left(self) -> None:
        return None

    @property
    def right(self) -> None:
        return None

    @property
    def region_key(self) -> str:
        """Opaque key identifying this region's expansion state."""
        return region_key(self.chunk_id, self.start_offset)


@dataclass(frozen=True, slots=True)
class LineRow:
    """One line of the unified (single column) layout."""

    line: DiffLine
    chunk_id: str
    is_first_in_chunk: bool = False


SideBySideRow = Union[ContextRow, ChangeRow, CollapsedRow]
UnifiedRow = Union[LineRow, CollapsedRow]


@dataclass(frozen=True, slots=True)
class SearchMatch:
    """Location of a query match inside a file diff.

    ``line_index`` indexes the lines of the chunk named by ``chunk_id``;
    columns are a half-open character range within that line's content.
    """

    file_index: int
    chunk_id: str
    line_index: int
    column_start: int
    column_end: int


def region_key(chunk_id: str, start_offset: int) -> str:
    """Return the expansion key of a collapsible region."""
    return f"{chunk_id}-{start_offset}"
