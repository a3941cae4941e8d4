"""Unit tests for the high-level diffy API."""

import json

import pytest
from utils import write_file

from diffy import diff_files, diff_trees, render_diff
from diffy.exceptions import FileError, ValidationError
from diffy.options import DiffOptions


@pytest.mark.unit
class TestDiffFiles:
    """Tests for diff_files."""

    def test_text_files(self, temp_dir, sample_texts):
        """Test comparing two text files on disk."""
        old_text, new_text = sample_texts
        old = write_file(temp_dir / "old.txt", old_text)
        new = write_file(temp_dir / "new.txt", new_text)

        result = diff_files(old, new, label="doc.txt")

        assert result.new_path == "doc.txt"
        assert (result.additions, result.deletions) == (1, 1)

    def test_label_defaults_to_new_path(self, temp_dir):
        """Test that the display path defaults to the new file path."""
        old = write_file(temp_dir / "a.txt", "x\n")
        new = write_file(temp_dir / "b.txt", "y\n")
        assert diff_files(old, new).new_path == str(new)

    def test_options_are_used(self, temp_dir, sample_texts):
        """Test that the context option reaches the chunk builder."""
        old_text, new_text = sample_texts
        old = write_file(temp_dir / "old.txt", old_text)
        new = write_file(temp_dir / "new.txt", new_text)
        result = diff_files(old, new, options=DiffOptions(context_lines=0))
        assert len(result.chunks[0].lines) == 2

    def test_binary_files(self, temp_dir):
        """Test that files with NUL bytes are reported as binary."""
        old = temp_dir / "a.bin"
        new = temp_dir / "b.bin"
        old.write_bytes(b"\x00\x01")
        new.write_bytes(b"\x00\x02")

        result = diff_files(old, new)
        assert result.is_binary
        assert result.chunks == ()

    def test_identical_binary_files_are_unchanged(self, temp_dir):
        """Test that equal binary content is not flagged as a change."""
        old = temp_dir / "a.bin"
        new = temp_dir / "b.bin"
        old.write_bytes(b"\x00same")
        new.write_bytes(b"\x00same")
        assert not diff_files(old, new).has_changes

    def test_missing_file(self, temp_dir):
        """Test that an unreadable file raises FileError with its path."""
        existing = write_file(temp_dir / "a.txt", "x")
        with pytest.raises(FileError) as exc_info:
            diff_files(existing, temp_dir / "missing.txt")
        assert exc_info.value.file_path.endswith("missing.txt")


@pytest.mark.unit
class TestDiffTrees:
    """Tests for diff_trees."""

    @pytest.fixture
    def trees(self, temp_dir):
        old_root = temp_dir / "old"
        new_root = temp_dir / "new"
        write_file(old_root / "same.txt", "same\n")
        write_file(new_root / "same.txt", "same\n")
        write_file(old_root / "pkg" / "mod.py", "x = 1\n")
        write_file(new_root / "pkg" / "mod.py", "x = 2\n")
        write_file(old_root / "gone.txt", "bye\nnow\n")
        write_file(new_root / "fresh.txt", "hello\n")
        return old_root, new_root

    def test_sequential(self, trees):
        """Test pairing, classification and ordering of tree entries."""
        old_root, new_root = trees
        files = diff_trees(old_root, new_root, max_workers=1)

        assert [f.new_path for f in files] == ["fresh.txt", "gone.txt", "pkg/mod.py"]
        assert [f.kind for f in files] == ["added", "deleted", "modified"]
        assert files[0].additions == 1
        assert files[1].deletions == 2

    def test_one_sided_files_have_no_phantom_line(self, trees):
        """Test that a trailing newline does not add an empty line."""
        old_root, new_root = trees
        added = diff_trees(old_root, new_root, max_workers=1)[0]
        assert [line.content for line in added.iter_lines()] == ["hello"]

    @pytest.mark.slow
    def test_parallel_matches_sequential(self, trees):
        """Test that worker processes produce the same result."""
        old_root, new_root = trees
        assert diff_trees(old_root, new_root, max_workers=2) == diff_trees(old_root, new_root, max_workers=1)

    def test_identical_trees(self, temp_dir):
        """Test that identical trees produce no entries."""
        write_file(temp_dir / "a" / "f.txt", "x")
        write_file(temp_dir / "b" / "f.txt", "x")
        assert diff_trees(temp_dir / "a", temp_dir / "b", max_workers=1) == []

    def test_root_must_be_directory(self, temp_dir):
        """Test that a file root raises FileError."""
        file_root = write_file(temp_dir / "f.txt", "x")
        (temp_dir / "dir").mkdir()
        with pytest.raises(FileError):
            diff_trees(file_root, temp_dir / "dir")


@pytest.mark.unit
class TestRenderDiff:
    """Tests for the render_diff dispatcher."""

    @pytest.fixture
    def files(self, two_file_patch):
        from diffy import parse_unified_diff

        return parse_unified_diff(two_file_patch)

    def test_unified(self, files):
        """Test the default unified format."""
        output = render_diff(files)
        assert output.startswith("diff --git a/src/a.ts b/src/a.ts\n")

    def test_json(self, files):
        """Test the JSON format is valid and newline-terminated."""
        output = render_diff(files, "json")
        assert output.endswith("\n")
        assert json.loads(output)["statistics"]["files_changed"] == 2

    def test_side_by_side(self, files):
        """Test the side-by-side format without colors."""
        output = render_diff(files, "side-by-side", width=100)
        assert "src/b.ts" in output
        assert "\033[" not in output

    def test_side_by_side_color(self, files):
        """Test that use_color emits ANSI sequences."""
        output = render_diff(files, "side-by-side", use_color=True, width=100)
        assert "\033[" in output

    def test_unknown_format(self, files):
        """Test that an unknown format raises ValidationError."""
        with pytest.raises(ValidationError):
            render_diff(files, "html")
