"""End-to-end tests for the diffy command line.

This module runs ``python -m diffy`` as a subprocess, covering the complete
pipeline from command-line arguments to rendered output and exit codes.
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest
from utils import MIXED_BINARY_DIFF, cleanup_test_dir, create_test_temp_dir

SRC_DIR = Path(__file__).parent.parent.parent / "src"


@pytest.mark.e2e
@pytest.mark.cli
@pytest.mark.slow
class TestDiffyCLI:
    """End-to-end tests for the compare and parse commands."""

    def setup_method(self):
        """Set up test environment."""
        self.temp_dir = create_test_temp_dir()

        self.file1 = self.temp_dir / "notes_v1.txt"
        self.file1.write_text(
            """Meeting notes

Attendees: Ann, Bo
Decision: ship on Friday
Owner: Ann
""",
            encoding="utf-8",
        )

        self.file2 = self.temp_dir / "notes_v2.txt"
        self.file2.write_text(
            """Meeting notes

Attendees: Ann, Bo, Cy
Decision: ship on Monday
Owner: Ann
Follow-up: release notes
""",
            encoding="utf-8",
        )

    def teardown_method(self):
        """Clean up test environment."""
        cleanup_test_dir(self.temp_dir)

    def _run(self, args: list[str], stdin: str | None = None) -> subprocess.CompletedProcess:
        """Run diffy as a subprocess.

        Parameters
        ----------
        args : list[str]
            Arguments passed after ``python -m diffy``
        stdin : str, optional
            Text piped to the process

        Returns
        -------
        subprocess.CompletedProcess
            Result of the subprocess execution

        """
        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))
        env.pop("DIFFY_CONFIG", None)
        cmd = [sys.executable, "-m", "diffy", *args, "--no-config"]
        return subprocess.run(
            cmd,
            cwd=self.temp_dir,
            input=stdin,
            capture_output=True,
            text=True,
            env=env,
        )

    def test_compare_unified(self):
        """Test the default unified output of compare."""
        result = self._run(["compare", str(self.file1), str(self.file2)])

        assert result.returncode == 0, f"Command failed: {result.stderr}"
        assert "--- a/" in result.stdout
        assert "+++ b/" in result.stdout
        assert "-Decision: ship on Friday" in result.stdout
        assert "+Follow-up: release notes" in result.stdout

    def test_compare_json(self):
        """Test JSON output with word-level segments."""
        result = self._run(["compare", str(self.file1), str(self.file2), "--format", "json"])

        assert result.returncode == 0, f"Command failed: {result.stderr}"
        data = json.loads(result.stdout)
        assert data["statistics"]["lines_added"] == 3
        assert data["statistics"]["lines_deleted"] == 2
        changed = [
            line
            for chunk in data["files"][0]["chunks"]
            for line in chunk["lines"]
            if line["kind"] == "removed"
        ]
        assert all(line["word_segments"] for line in changed)

    def test_compare_side_by_side(self):
        """Test the side-by-side table output."""
        result = self._run(["compare", str(self.file1), str(self.file2), "--format", "side-by-side"])

        assert result.returncode == 0, f"Command failed: {result.stderr}"
        assert "ship on Monday" in result.stdout
        assert "ship on Friday" in result.stdout

    def test_compare_identical(self):
        """Test that identical files succeed with a note on stderr."""
        result = self._run(["compare", str(self.file1), str(self.file1)])

        assert result.returncode == 0
        assert result.stdout == ""
        assert "No differences found" in result.stderr

    def test_compare_missing_file(self):
        """Test the exit code and message for a missing file."""
        result = self._run(["compare", str(self.file1), str(self.temp_dir / "missing.txt")])

        assert result.returncode == 4
        assert "not found" in result.stderr.lower()

    def test_compare_directories_in_parallel(self):
        """Test comparing two trees with worker processes."""
        old_dir = self.temp_dir / "old"
        new_dir = self.temp_dir / "new"
        for directory in (old_dir, new_dir):
            directory.mkdir()
        (old_dir / "a.txt").write_text("one\n", encoding="utf-8")
        (new_dir / "a.txt").write_text("two\n", encoding="utf-8")
        (old_dir / "b.txt").write_text("gone\n", encoding="utf-8")
        (new_dir / "c.txt").write_text("fresh\n", encoding="utf-8")

        result = self._run(["compare", "old", "new", "--parallel", "2", "--format", "json"])

        assert result.returncode == 0, f"Command failed: {result.stderr}"
        files = json.loads(result.stdout)["files"]
        assert [(f["new_path"], f["kind"]) for f in files] == [
            ("a.txt", "modified"),
            ("b.txt", "deleted"),
            ("c.txt", "added"),
        ]

    def test_parse_stdin(self):
        """Test parsing a patch from stdin, binary entry included."""
        result = self._run(["parse", "--format", "json"], stdin=MIXED_BINARY_DIFF)

        assert result.returncode == 0, f"Command failed: {result.stderr}"
        files = json.loads(result.stdout)["files"]
        assert [f["is_binary"] for f in files] == [False, True, False]

    def test_trace_logging(self):
        """Test that --trace writes debug logs to stderr."""
        result = self._run(["compare", str(self.file1), str(self.file2), "--trace"])

        assert result.returncode == 0
        assert "[DEBUG]" in result.stderr

    def test_help(self):
        """Test help output."""
        result = self._run(["compare", "--help"])

        assert result.returncode == 0
        assert "usage:" in result.stdout.lower()
        assert "--format" in result.stdout
        assert "--parallel" in result.stdout
