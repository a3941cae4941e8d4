"""Shared helpers and sample patches for the diffy test suite."""

import shutil
import tempfile
from pathlib import Path

from diffy.models import DiffLine

TWO_FILE_GIT_DIFF = "\n".join(
    [
        "diff --git a/src/a.ts b/src/a.ts",
        "index 1111111..2222222 100644",
        "--- a/src/a.ts",
        "+++ b/src/a.ts",
        "@@ -1,2 +1,2 @@",
        "-const foo = 1;",
        "+const foo = 2;",
        " export const ok = true;",
        "diff --git a/src/b.ts b/src/b.ts",
        "index 3333333..4444444 100644",
        "--- a/src/b.ts",
        "+++ b/src/b.ts",
        "@@ -1,1 +1,2 @@",
        " export const x = 1;",
        "+export const y = 2;",
        "",
    ]
)

RENAME_ONLY_DIFF = "\n".join(
    [
        "diff --git a/old.txt b/new.txt",
        "similarity index 100%",
        "rename from old.txt",
        "rename to new.txt",
        "",
    ]
)

ADDED_FILE_DIFF = "\n".join(
    [
        "diff --git a/dev/null b/new.txt",
        "new file mode 100644",
        "--- /dev/null",
        "+++ b/new.txt",
        "@@ -0,0 +1,2 @@",
        "+hello",
        "+world",
        "",
    ]
)

BINARY_ONLY_DIFF = "\n".join(
    [
        "diff --git a/assets/logo.png b/assets/logo.png",
        "index 1234567..89abcde 100644",
        "Binary files a/assets/logo.png and b/assets/logo.png differ",
        "",
    ]
)

MIXED_BINARY_DIFF = "\n".join(
    [
        "diff --git a/src/a.ts b/src/a.ts",
        "index 1111111..2222222 100644",
        "--- a/src/a.ts",
        "+++ b/src/a.ts",
        "@@ -1 +1 @@",
        "-const foo = 1;",
        "+const foo = 2;",
        "diff --git a/docs/screenshot copy.jpg b/docs/screenshot copy.jpg",
        "new file mode 100644",
        "index 0000000..042ec99",
        "Binary files /dev/null and b/docs/screenshot copy.jpg differ",
        "diff --git a/src/b.ts b/src/b.ts",
        "index 3333333..4444444 100644",
        "--- a/src/b.ts",
        "+++ b/src/b.ts",
        "@@ -1 +1,2 @@",
        " export const x = 1;",
        "+export const y = 2;",
        "",
    ]
)


def unchanged_lines(count: int, start: int = 1) -> list[DiffLine]:
    """Build ``count`` unchanged lines numbered from ``start`` on both sides."""
    return [DiffLine.unchanged(f"same {n}", n, n) for n in range(start, start + count)]


def write_file(path: Path, content: str) -> Path:
    """Write a UTF-8 text file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    if temp_dir.exists():
        shutil.rmtree(temp_dir)
