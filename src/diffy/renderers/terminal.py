#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/renderers/terminal.py
"""Side-by-side terminal renderer built on rich tables."""

from __future__ import annotations

from typing import Container, Iterable, Optional

from rich.console import Console
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from diffy.constants import DEFAULT_CONTEXT_LINES, MIN_COLLAPSE_LINES
from diffy.engine.layout import build_side_by_side_rows
from diffy.models import ChangeRow, CollapsedRow, DiffLine, FileDiff, SideBySideRow

_LINE_STYLES = {"removed": "red", "added": "green", "unchanged": ""}
_SEGMENT_STYLES = {"removed": "bold white on red", "added": "bold white on green", "unchanged": ""}
_KIND_STYLES = {"modified": "yellow", "added": "green", "deleted": "red", "renamed": "magenta"}


class SideBySideRenderer:
    """Render file diffs as side-by-side tables in the terminal.

    Changed lines that were paired with a counterpart show their word-level
    changes highlighted; long unchanged runs are shown as a single
    placeholder row unless their region key is in ``expanded_region_keys``.

    Parameters
    ----------
    console : rich.console.Console, optional
        Console to print to; a default console is created when omitted
    context_lines : int, default = 3
        Context kept next to changes before collapsing
    show_line_numbers : bool, default = True
        Show old and new line number columns
    min_collapse_lines : int, default = 4
        Smallest unchanged span collapsed into a placeholder row

    """

    def __init__(
        self,
        console: Optional[Console] = None,
        context_lines: int = DEFAULT_CONTEXT_LINES,
        show_line_numbers: bool = True,
        min_collapse_lines: int = MIN_COLLAPSE_LINES,
    ):
        """Initialize the side-by-side renderer."""
        self.console = console or Console()
        self.context_lines = context_lines
        self.show_line_numbers = show_line_numbers
        self.min_collapse_lines = min_collapse_lines

    def print(self, files: Iterable[FileDiff], expanded_region_keys: Container[str] = frozenset()) -> None:
        """Print every file diff to the console."""
        for file_diff in files:
            self.console.print(self._title(file_diff))
            if file_diff.is_binary:
                self.console.print(Text("Binary files differ", style="dim"))
                continue
            if not file_diff.chunks:
                continue
            self.console.print(self.build_table(file_diff, expanded_region_keys))

    def render(self, files: Iterable[FileDiff], expanded_region_keys: Container[str] = frozenset()) -> str:
        """Render every file diff and return the console text.

        Colors are kept as ANSI escape sequences when the console has a
        color system, and dropped otherwise.
        """
        with self.console.capture() as capture:
            self.print(files, expanded_region_keys)
        return capture.get()

    def build_table(self, file_diff: FileDiff, expanded_region_keys: Container[str] = frozenset()) -> Table:
        """Build the rich table of one file diff."""
        table = Table(show_header=True, header_style="bold", expand=True, box=None, padding=(0, 1))
        if self.show_line_numbers:
            table.add_column("", justify="right", style="dim", no_wrap=True)
        table.add_column(file_diff.old_path, ratio=1, overflow="fold")
        if self.show_line_numbers:
            table.add_column("", justify="right", style="dim", no_wrap=True)
        table.add_column(file_diff.new_path, ratio=1, overflow="fold")

        rows = build_side_by_side_rows(
            file_diff.chunks,
            self.context_lines,
            expanded_region_keys,
            min_collapse_lines=self.min_collapse_lines,
        )
        for row in rows:
            table.add_row(*self._cells(row))

        return table

    def _title(self, file_diff: FileDiff) -> Rule:
        if file_diff.kind == "renamed":
            path = f"{file_diff.old_path} -> {file_diff.new_path}"
        else:
            path = file_diff.new_path
        title = Text.assemble(
            (path, "bold"),
            " ",
            (file_diff.kind, _KIND_STYLES[file_diff.kind]),
            " ",
            (f"+{file_diff.additions}", "green"),
            " ",
            (f"-{file_diff.deletions}", "red"),
        )
        return Rule(title, align="left")

    def _cells(self, row: SideBySideRow) -> list[Text]:
        if isinstance(row, CollapsedRow):
            placeholder = Text(f"... {row.count} unchanged lines ...", style="dim italic")
            cells = [placeholder, placeholder.copy()]
            numbers = [Text(""), Text("")]
        else:
            left = row.left
            right = row.right
            cells = [self._content(left), self._content(right)]
            numbers = [
                Text(str(left.old_line_number)) if left is not None else Text(""),
                Text(str(right.new_line_number)) if right is not None else Text(""),
            ]

        if isinstance(row, ChangeRow) and row.is_first_in_chunk:
            for number in numbers:
                number.stylize("bold")

        if self.show_line_numbers:
            return [numbers[0], cells[0], numbers[1], cells[1]]
        return cells

    @staticmethod
    def _content(line: Optional[DiffLine]) -> Text:
        if line is None:
            return Text("")

        if line.word_segments is None:
            return Text(line.content, style=_LINE_STYLES[line.kind])

        text = Text(style=_LINE_STYLES[line.kind])
        for segment in line.word_segments:
            text.append(segment.text, style=_SEGMENT_STYLES[segment.kind])
        return text
