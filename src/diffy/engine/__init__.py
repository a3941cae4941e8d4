#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/engine/__init__.py
"""Diff engine: sequence diffing, chunking, parsing and row layout.

Key Features
------------
- Minimal edit scripts with Myers' algorithm, with a bounded lookahead
  heuristic for very large inputs
- Word-level highlighting of paired changed lines
- Context-padded chunks with deterministic ids
- Fault-tolerant unified diff parsing (git patches, bare hunks, snippets)
- Side-by-side and unified row layouts with collapsible unchanged regions

Examples
--------
Compute a diff and lay it out side by side:
    >>> from diffy.engine import compute_diff, build_side_by_side_rows
    >>> diff = compute_diff("a\\nb\\n", "a\\nc\\n", "notes.txt")
    >>> rows = build_side_by_side_rows(diff.chunks, 3, set())

Parse a patch:
    >>> from diffy.engine import parse_unified_diff
    >>> files = parse_unified_diff(open("change.patch").read())

"""

from diffy.engine.chunks import compute_diff, edits_to_lines, group_into_chunks, split_lines
from diffy.engine.layout import (
    CollapsibleRegion,
    build_side_by_side_rows,
    build_unified_rows,
    find_collapsible_regions,
    region_key,
)
from diffy.engine.parser import ParserState, UnifiedDiffParser, parse_unified_diff
from diffy.engine.search import find_matches
from diffy.engine.sequence import CancelEvent, Edit, diff_sequences, lookahead_diff, myers_diff, replay_edits
from diffy.engine.words import WordDiff, attach_word_diffs, compute_word_diff, tokenize_words

__all__ = [
    "CancelEvent",
    "CollapsibleRegion",
    "Edit",
    "ParserState",
    "UnifiedDiffParser",
    "WordDiff",
    "attach_word_diffs",
    "build_side_by_side_rows",
    "build_unified_rows",
    "compute_diff",
    "compute_word_diff",
    "diff_sequences",
    "edits_to_lines",
    "find_collapsible_regions",
    "find_matches",
    "group_into_chunks",
    "lookahead_diff",
    "myers_diff",
    "parse_unified_diff",
    "region_key",
    "replay_edits",
    "split_lines",
    "tokenize_words",
]
