"""Unit tests for the rich side-by-side renderer."""

import pytest
from rich.console import Console
from rich.table import Table
from utils import BINARY_ONLY_DIFF, RENAME_ONLY_DIFF

from diffy.engine.chunks import compute_diff
from diffy.engine.parser import parse_unified_diff
from diffy.models import region_key
from diffy.renderers.terminal import SideBySideRenderer


def _renderer(**kwargs) -> SideBySideRenderer:
    console = Console(width=120, color_system=None, force_terminal=False)
    return SideBySideRenderer(console=console, **kwargs)


def _long_unchanged_diff():
    text = "".join(f"line {i}\n" for i in range(1, 21))
    return compute_diff(text, text, "same.txt")


@pytest.mark.unit
class TestSideBySideRenderer:
    """Tests for SideBySideRenderer."""

    def test_title_and_contents(self, two_file_patch):
        """Test that file titles, counts and both sides are printed."""
        output = _renderer().render(parse_unified_diff(two_file_patch))
        assert "src/a.ts" in output
        assert "+1" in output
        assert "const foo = 1;" in output
        assert "const foo = 2;" in output

    def test_placeholder_row(self):
        """Test that a long unchanged run is shown as one placeholder."""
        output = _renderer().render([_long_unchanged_diff()])
        assert "... 15 unchanged lines ..." in output
        assert "line 10" not in output

    def test_expanded_region(self):
        """Test that expanding the region shows the hidden lines."""
        diff = _long_unchanged_diff()
        key = region_key(diff.chunks[0].id, 3)
        output = _renderer().render([diff], expanded_region_keys={key})
        assert "unchanged lines" not in output
        assert "line 10" in output

    def test_binary_file(self):
        """Test the binary notice."""
        output = _renderer().render(parse_unified_diff(BINARY_ONLY_DIFF))
        assert "Binary files differ" in output

    def test_rename_title(self):
        """Test that a rename shows both paths in its title."""
        output = _renderer().render(parse_unified_diff(RENAME_ONLY_DIFF))
        assert "old.txt -> new.txt" in output

    def test_table_columns(self, two_file_patch):
        """Test the column layout with and without line numbers."""
        file_diff = parse_unified_diff(two_file_patch)[0]
        with_numbers = _renderer().build_table(file_diff)
        without_numbers = _renderer(show_line_numbers=False).build_table(file_diff)

        assert isinstance(with_numbers, Table)
        assert len(with_numbers.columns) == 4
        assert len(without_numbers.columns) == 2
        assert with_numbers.row_count == 2

    def test_no_ansi_without_color_system(self, two_file_patch):
        """Test that a console without colors emits plain text."""
        output = _renderer().render(parse_unified_diff(two_file_patch))
        assert "\033[" not in output
