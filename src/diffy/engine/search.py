#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/engine/search.py
"""Plain-text search across the lines of parsed or computed diffs."""

from __future__ import annotations

import re
from typing import Sequence

from diffy.models import FileDiff, SearchMatch


def find_matches(files: Sequence[FileDiff], query: str, *, case_sensitive: bool = False) -> list[SearchMatch]:
    """Find every occurrence of ``query`` in the line contents of ``files``.

    Matches are reported in display order (file, chunk, line, column) and do
    not overlap within a line. Diff markers and line numbers are not part of
    the searched text.

    Parameters
    ----------
    files : sequence of FileDiff
        Diffs to search
    query : str
        Literal text to look for; an empty query matches nothing
    case_sensitive : bool, default False
        Compare case-sensitively

    Returns
    -------
    list of SearchMatch
        One entry per occurrence; columns index the original line content

    """
    if not query:
        return []

    pattern = re.compile(re.escape(query), 0 if case_sensitive else re.IGNORECASE)
    matches: list[SearchMatch] = []

    for file_index, file_diff in enumerate(files):
        for chunk in file_diff.chunks:
            for line_index, line in enumerate(chunk.lines):
                for found in pattern.finditer(line.content):
                    matches.append(SearchMatch(file_index, chunk.id, line_index, found.start(), found.end()))

    return matches
