#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/renderers/json.py
"""Machine-readable output of the diff model.

Every dataclass in :mod:`diffy.models` maps directly onto JSON objects, so
the document is the model itself plus a summary block.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Dict, Iterable, Optional

from diffy.models import FileDiff


class JsonDiffRenderer:
    """Serialise file diffs to a JSON document.

    Output shape::

        {"type": "diffy", "files": [...], "statistics": {...}}

    ``files`` holds one object per :class:`FileDiff` (chunks, lines and word
    segments included). ``statistics`` counts files, added, deleted and
    unchanged lines across the whole set.

    Parameters
    ----------
    pretty_print : bool, default True
        Indent the document; False gives a single line
    indent : int, default 2
        Spaces per nesting level when pretty printing

    """

    def __init__(self, pretty_print: bool = True, indent: int = 2):
        self.pretty_print = pretty_print
        self.indent = indent

    def render(self, files: Iterable[FileDiff]) -> str:
        """Return the JSON document for ``files``."""
        diffs = list(files)
        document: Dict[str, Any] = {
            "type": "diffy",
            "files": [asdict(file_diff) for file_diff in diffs],
            "statistics": summarize(diffs),
        }
        indent: Optional[int] = self.indent if self.pretty_print else None
        return json.dumps(document, indent=indent, ensure_ascii=False)


def summarize(files: list[FileDiff]) -> Dict[str, int]:
    """Count changed files and lines of each kind."""
    added = sum(file_diff.additions for file_diff in files)
    deleted = sum(file_diff.deletions for file_diff in files)
    unchanged = sum(1 for file_diff in files for line in file_diff.iter_lines() if line.kind == "unchanged")

    return {
        "files_changed": len(files),
        "lines_added": added,
        "lines_deleted": deleted,
        "lines_context": unchanged,
        "total_changes": added + deleted,
    }
