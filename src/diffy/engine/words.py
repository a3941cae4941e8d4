#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/engine/words.py
"""Word-level sub-diffing of paired changed lines."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from diffy.engine.sequence import diff_sequences
from diffy.models import DiffLine, WordSegment

# Maximal runs of whitespace, word characters, or anything else
_TOKEN_RE = re.compile(r"\s+|\w+|[^\w\s]+")


@dataclass(frozen=True, slots=True)
class WordDiff:
    """Parallel segment lists for the old and new version of a line."""

    old_segments: tuple[WordSegment, ...]
    new_segments: tuple[WordSegment, ...]


def tokenize_words(line: str) -> list[str]:
    """Split a line into runs of whitespace, word characters and punctuation.

    Parameters
    ----------
    line : str
        Line content without a trailing newline

    Returns
    -------
    list of str
        Tokens whose concatenation is exactly ``line``

    Examples
    --------
    >>> tokenize_words("const foo = 1;")
    ['const', ' ', 'foo', ' ', '=', ' ', '1', ';']

    """
    return _TOKEN_RE.findall(line)


def compute_word_diff(old_line: str, new_line: str) -> WordDiff:
    """Diff two lines token by token.

    Unchanged tokens appear in both segment lists; removed tokens only in
    ``old_segments`` and added tokens only in ``new_segments``. Concatenating
    the text of either list reproduces the corresponding line.
    """
    old_segments: list[WordSegment] = []
    new_segments: list[WordSegment] = []

    for edit in diff_sequences(tokenize_words(old_line), tokenize_words(new_line)):
        if edit.kind == "equal":
            old_segments.append(WordSegment(edit.value, "unchanged"))
            new_segments.append(WordSegment(edit.value, "unchanged"))
        elif edit.kind == "delete":
            old_segments.append(WordSegment(edit.value, "removed"))
        else:
            new_segments.append(WordSegment(edit.value, "added"))

    return WordDiff(tuple(old_segments), tuple(new_segments))


def attach_word_diffs(lines: Sequence[DiffLine]) -> list[DiffLine]:
    """Annotate paired removed/added lines with word segments.

    Each maximal run of removed lines that is immediately followed by a
    maximal run of added lines is paired index by index, up to the length
    of the shorter run. Lines beyond the shorter run are left without
    segments and read as whole-line changes.

    Parameters
    ----------
    lines : sequence of DiffLine
        Lines of a file or hunk, in order

    Returns
    -------
    list of DiffLine
        A new list; paired lines are replaced by annotated copies

    """
    result = list(lines)
    i = 0
    total = len(result)

    while i < total:
        if result[i].kind != "removed":
            i += 1
            continue

        removed_start = i
        while i < total and result[i].kind == "removed":
            i += 1
        added_start = i
        while i < total and result[i].kind == "added":
            i += 1

        pairs = min(added_start - removed_start, i - added_start)
        for offset in range(pairs):
            old_line = result[removed_start + offset]
            new_line = result[added_start + offset]
            word_diff = compute_word_diff(old_line.content, new_line.content)
            result[removed_start + offset] = old_line.with_word_segments(word_diff.old_segments)
            result[added_start + offset] = new_line.with_word_segments(word_diff.new_segments)

    return result
