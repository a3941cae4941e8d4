#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/renderers/unified.py
"""Unified diff renderer with optional ANSI colors.

This renderer writes :class:`~diffy.models.FileDiff` objects back out as
git-style unified diff text, compatible with ``git apply --stat`` style
tools and with :func:`diffy.parse_unified_diff`.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from diffy.constants import DEV_NULL
from diffy.models import DiffChunk, DiffLine, FileDiff

RED = "\033[31m"
GREEN = "\033[32m"
CYAN = "\033[36m"
BOLD = "\033[1m"
RESET = "\033[0m"

_LINE_PREFIX = {"added": "+", "removed": "-", "unchanged": " "}


class UnifiedDiffRenderer:
    """Render file diffs as unified diff lines with optional ANSI colors.

    Colors follow the usual terminal conventions:
    - Red for deletions (lines starting with -)
    - Green for additions (lines starting with +)
    - Cyan for hunk headers (lines starting with @@)
    - Bold for file headers

    Parameters
    ----------
    use_color : bool, default = False
        If True, add ANSI color codes to output

    Examples
    --------
    Print a computed diff:
        >>> from diffy import compute_diff
        >>> from diffy.renderers import UnifiedDiffRenderer
        >>> diff = compute_diff("a\\n", "b\\n", "notes.txt")
        >>> for line in UnifiedDiffRenderer().render([diff]):
        ...     print(line)

    """

    def __init__(self, use_color: bool = False):
        """Initialize the unified diff renderer."""
        self.use_color = use_color

    def render(self, files: Iterable[FileDiff]) -> Iterator[str]:
        """Render file diffs as unified diff lines.

        Parameters
        ----------
        files : iterable of FileDiff
            Diffs to render, in order

        Yields
        ------
        str
            Diff lines without trailing newlines

        """
        for file_diff in files:
            for line in self._file_lines(file_diff):
                yield self._colorize(line) if self.use_color else line

    def render_text(self, files: Iterable[FileDiff]) -> str:
        """Render file diffs as a single newline-terminated string."""
        return "".join(f"{line}\n" for line in self.render(files))

    def _file_lines(self, file_diff: FileDiff) -> Iterator[str]:
        old_label = DEV_NULL if file_diff.kind == "added" else f"a/{file_diff.old_path}"
        new_label = DEV_NULL if file_diff.kind == "deleted" else f"b/{file_diff.new_path}"

        yield f"diff --git a/{file_diff.old_path} b/{file_diff.new_path}"
        if file_diff.kind == "added":
            yield "new file mode 100644"
        elif file_diff.kind == "deleted":
            yield "deleted file mode 100644"
        elif file_diff.kind == "renamed":
            yield f"rename from {file_diff.old_path}"
            yield f"rename to {file_diff.new_path}"

        if file_diff.is_binary:
            yield f"Binary files {old_label} and {new_label} differ"
            return
        if not file_diff.chunks:
            return

        yield f"--- {old_label}"
        yield f"+++ {new_label}"
        for chunk in file_diff.chunks:
            yield format_hunk_header(chunk)
            for line in chunk.lines:
                yield format_line(line)

    @staticmethod
    def _colorize(line: str) -> str:
        if line.startswith(("diff --git", "---", "+++")):
            return f"{BOLD}{line}{RESET}"
        if line.startswith("@@"):
            return f"{CYAN}{line}{RESET}"
        if line.startswith("+"):
            return f"{GREEN}{line}{RESET}"
        if line.startswith("-"):
            return f"{RED}{line}{RESET}"
        return line


def format_hunk_header(chunk: DiffChunk) -> str:
    """Return the ``@@ -a,b +c,d @@`` header of a chunk."""
    return f"@@ -{chunk.old_start},{chunk.old_length} +{chunk.new_start},{chunk.new_length} @@"


def format_line(line: DiffLine) -> str:
    """Return a diff line with its ``+``/``-``/space marker."""
    return f"{_LINE_PREFIX[line.kind]}{line.content}"
