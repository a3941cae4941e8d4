#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/engine/parser.py
"""Parse unified-diff text into the structured diff model.

The parser accepts git-style patches (``diff --git`` headers, mode, rename
and binary markers) as well as bare unified diffs and headerless ``@@``
hunks. It is a line-classifying state machine::

    AWAITING_FILE_HEADER --diff --git / --- / @@--> IN_FILE_HEADER
    IN_FILE_HEADER       --+++-->                   AWAITING_HUNK
    IN_FILE_HEADER       --@@-->                    IN_HUNK_BODY
    AWAITING_HUNK        --@@-->                    IN_HUNK_BODY
    IN_HUNK_BODY         --end of body-->           AWAITING_HUNK (line re-read)

Parsing never fails: malformed hunk headers and unrecognised lines are
skipped and the parser resumes at the next recognisable marker. A
``Binary files ... differ`` line outside a git header is an entry of its
own. When no hunk is found anywhere but the text contains ``+``/``-`` body
lines, the input minus any ``---``/``+++`` pairs is read as one implicit
file (a pasted snippet without hunk headers).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Optional

from diffy.constants import (
    BINARY_PREFIX,
    DEFAULT_FILE_NAME,
    DEV_NULL,
    GIT_HEADER_PREFIX,
    HUNK_PREFIX,
    NEW_FILE_PREFIX,
    NO_NEWLINE_MARKER,
    OLD_FILE_PREFIX,
    FileKind,
)
from diffy.engine.words import attach_word_diffs
from diffy.models import DiffChunk, DiffLine, FileDiff

logger = logging.getLogger(__name__)

_HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
_PREFIXED_GIT_PATHS_RE = re.compile(r"^a/(.+?) b/(.+)$")
_QUOTED_GIT_PATHS_RE = re.compile(r'^("(?:[^"\\]|\\.)*")\s+("(?:[^"\\]|\\.)*")$')
_QUOTED_PATH_RE = re.compile(r'^"(?:[^"\\]|\\.)*"')
_BINARY_RE = re.compile(r"^Binary files (.+?) and (.+) differ$")

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "a": "\a", "b": "\b", "f": "\f", "v": "\v", '"': '"', "\\": "\\"}


class ParserState(Enum):
    """States of the unified diff line classifier."""

    AWAITING_FILE_HEADER = auto()
    IN_FILE_HEADER = auto()
    AWAITING_HUNK = auto()
    IN_HUNK_BODY = auto()


@dataclass
class _PendingHunk:
    old_start: int
    new_start: int
    old_expected: int
    new_expected: int
    lines: list[DiffLine] = field(default_factory=list)
    old_seen: int = 0
    new_seen: int = 0

    @property
    def exhausted(self) -> bool:
        return self.old_seen >= self.old_expected and self.new_seen >= self.new_expected

    def add(self, marker: str, content: str) -> None:
        old_number = self.old_start + self.old_seen
        new_number = self.new_start + self.new_seen
        if marker == "+":
            self.lines.append(DiffLine.added(content, new_number))
            self.new_seen += 1
        elif marker == "-":
            self.lines.append(DiffLine.removed(content, old_number))
            self.old_seen += 1
        else:
            self.lines.append(DiffLine.unchanged(content, old_number, new_number))
            self.old_seen += 1
            self.new_seen += 1


@dataclass
class _PendingFile:
    old_path: Optional[str] = None
    new_path: Optional[str] = None
    old_is_null: bool = False
    new_is_null: bool = False
    rename_from: Optional[str] = None
    rename_to: Optional[str] = None
    created: bool = False
    deleted: bool = False
    is_binary: bool = False
    has_git_header: bool = False
    hunks: list[_PendingHunk] = field(default_factory=list)

    @property
    def has_markers(self) -> bool:
        return (
            self.has_git_header
            or self.is_binary
            or self.created
            or self.deleted
            or self.rename_from is not None
            or self.rename_to is not None
        )


class UnifiedDiffParser:
    """Fault-tolerant parser for unified diff text.

    A parser instance keeps per-call state while :meth:`parse` runs; use one
    instance per thread, or the module-level :func:`parse_unified_diff`.

    Examples
    --------
    >>> files = UnifiedDiffParser().parse("--- a/x\\n+++ b/x\\n@@ -1 +1 @@\\n-old\\n+new\\n")
    >>> files[0].new_path, files[0].additions, files[0].deletions
    ('x', 1, 1)

    """

    def __init__(self) -> None:
        """Initialize the parser and its state handlers."""
        self._handlers: dict[ParserState, Callable[[str], None]] = {
            ParserState.AWAITING_FILE_HEADER: self._on_awaiting_file_header,
            ParserState.IN_FILE_HEADER: self._on_file_header,
            ParserState.AWAITING_HUNK: self._on_awaiting_hunk,
            ParserState.IN_HUNK_BODY: self._on_hunk_body,
        }
        self._reset()

    def _reset(self) -> None:
        self._state = ParserState.AWAITING_FILE_HEADER
        self._files: list[FileDiff] = []
        self._file: Optional[_PendingFile] = None
        self._hunk: Optional[_PendingHunk] = None
        self._next_line: Optional[str] = None

    @property
    def state(self) -> ParserState:
        """Current state of the line classifier."""
        return self._state

    def parse(self, diff_text: str) -> list[FileDiff]:
        """Parse unified diff text into file diffs.

        Parameters
        ----------
        diff_text : str
            Unified diff, git patch, or a bare ``+``/``-`` snippet

        Returns
        -------
        list of FileDiff
            Files in order of appearance; empty when nothing is recognisable

        """
        self._reset()
        lines = _split_diff_lines(diff_text)

        for index, line in enumerate(lines):
            self._next_line = lines[index + 1] if index + 1 < len(lines) else None
            self._feed(line)
        self._finish_file()

        files = self._files
        self._reset()

        if not any(file.chunks for file in files):
            header_rows = _file_header_rows(lines)
            if any(line.startswith(("+", "-")) for i, line in enumerate(lines) if i not in header_rows):
                logger.debug("No hunks recognised; reading input as a bare +/- snippet")
                return [_parse_bare_snippet(lines, header_rows)]

        return files

    # -- dispatch ---------------------------------------------------------

    def _feed(self, line: str) -> None:
        self._handlers[self._state](line)

    def _on_awaiting_file_header(self, line: str) -> None:
        if line.startswith(GIT_HEADER_PREFIX):
            self._start_file(git_header=line)
        elif line.startswith(OLD_FILE_PREFIX):
            self._start_file()
            self._set_old_path(line)
        elif line.startswith(HUNK_PREFIX):
            self._start_file()
            self._start_hunk(line)
        elif line.startswith(BINARY_PREFIX):
            self._on_binary_marker(line.rstrip("\r"))

    def _on_file_header(self, line: str) -> None:
        header = line.rstrip("\r")
        pending = self._require_file()

        if header.startswith(GIT_HEADER_PREFIX):
            self._start_file(git_header=header)
        elif header.startswith(OLD_FILE_PREFIX):
            self._set_old_path(header)
        elif header.startswith(NEW_FILE_PREFIX):
            self._set_new_path(header)
            self._state = ParserState.AWAITING_HUNK
        elif header.startswith(HUNK_PREFIX):
            self._start_hunk(header)
        elif header.startswith(("rename from ", "copy from ")):
            pending.rename_from = _unquote(header.split(" ", 2)[2])
        elif header.startswith(("rename to ", "copy to ")):
            pending.rename_to = _unquote(header.split(" ", 2)[2])
        elif header.startswith("new file mode"):
            pending.created = True
        elif header.startswith("deleted file mode"):
            pending.deleted = True
        elif header.startswith(BINARY_PREFIX):
            self._on_binary_marker(header)
        elif header == "GIT binary patch":
            self._mark_binary(header)
        # index, similarity and mode lines carry nothing the model needs

    def _on_awaiting_hunk(self, line: str) -> None:
        header = line.rstrip("\r")
        if header.startswith(HUNK_PREFIX):
            self._start_hunk(header)
        elif header.startswith(GIT_HEADER_PREFIX):
            self._start_file(git_header=header)
        elif header.startswith(OLD_FILE_PREFIX):
            self._start_file()
            self._set_old_path(header)
        elif header.startswith(BINARY_PREFIX):
            self._on_binary_marker(header)

    def _on_binary_marker(self, header: str) -> None:
        pending = self._file
        if pending is not None and not pending.hunks and not pending.is_binary:
            self._mark_binary(header)
            return

        # a marker of its own, as ``diff -r`` prints it between text files
        self._start_file()
        self._mark_binary(header)
        self._finish_file()

    def _on_hunk_body(self, line: str) -> None:
        hunk = self._hunk
        if hunk is None:
            self._state = ParserState.AWAITING_HUNK
            self._feed(line)
            return

        if line.startswith((GIT_HEADER_PREFIX, HUNK_PREFIX)):
            self._end_body(line)
            return
        if line.startswith(NO_NEWLINE_MARKER):
            return
        if hunk.exhausted and (line in ("", "\r") or self._at_file_header_pair(line)):
            self._end_body(line)
            return

        if line.startswith(("+", "-", " ")):
            hunk.add(line[0], line[1:])
        elif line == "":
            hunk.add(" ", "")
        else:
            self._end_body(line)

    # -- transitions ------------------------------------------------------

    def _at_file_header_pair(self, line: str) -> bool:
        return (
            line.startswith(OLD_FILE_PREFIX)
            and self._next_line is not None
            and self._next_line.startswith(NEW_FILE_PREFIX)
        )

    def _end_body(self, line: str) -> None:
        self._close_hunk()
        self._feed(line)

    def _require_file(self) -> _PendingFile:
        if self._file is None:
            self._file = _PendingFile()
        return self._file

    def _start_file(self, git_header: str | None = None) -> None:
        self._finish_file()
        pending = _PendingFile()
        if git_header is not None:
            pending.has_git_header = True
            pending.old_path, pending.new_path = _parse_git_header(git_header)
        self._file = pending
        self._state = ParserState.IN_FILE_HEADER

    def _start_hunk(self, line: str) -> None:
        self._close_hunk()
        match = _HUNK_HEADER_RE.match(line)
        if match is None:
            logger.debug("Skipping malformed hunk header: %r", line)
            self._state = ParserState.AWAITING_HUNK
            return

        old_start, old_len, new_start, new_len = match.groups()
        self._require_file()
        self._hunk = _PendingHunk(
            old_start=int(old_start),
            new_start=int(new_start),
            old_expected=int(old_len) if old_len is not None else 1,
            new_expected=int(new_len) if new_len is not None else 1,
        )
        self._state = ParserState.IN_HUNK_BODY

    def _close_hunk(self) -> None:
        hunk = self._hunk
        self._hunk = None
        if self._state == ParserState.IN_HUNK_BODY:
            self._state = ParserState.AWAITING_HUNK
        if hunk is not None and hunk.lines and self._file is not None:
            self._file.hunks.append(hunk)

    def _finish_file(self) -> None:
        self._close_hunk()
        pending = self._file
        self._file = None
        self._state = ParserState.AWAITING_FILE_HEADER
        if pending is None:
            return

        file_diff = _build_file_diff(pending)
        if file_diff is not None:
            self._files.append(file_diff)

    def _set_old_path(self, line: str) -> None:
        pending = self._require_file()
        path = _header_path(line[len(OLD_FILE_PREFIX) :])
        if path == DEV_NULL:
            pending.old_is_null = True
        elif path:
            pending.old_path = _strip_prefix(path, "a/")

    def _set_new_path(self, line: str) -> None:
        pending = self._require_file()
        path = _header_path(line[len(NEW_FILE_PREFIX) :])
        if path == DEV_NULL:
            pending.new_is_null = True
        elif path:
            pending.new_path = _strip_prefix(path, "b/")

    def _mark_binary(self, line: str) -> None:
        pending = self._require_file()
        pending.is_binary = True
        match = _BINARY_RE.match(line)
        if match is None:
            return

        old_raw, new_raw = (_unquote(part) for part in match.groups())
        if old_raw == DEV_NULL:
            pending.old_is_null = True
        elif pending.old_path is None:
            pending.old_path = _strip_prefix(old_raw, "a/")
        if new_raw == DEV_NULL:
            pending.new_is_null = True
        elif pending.new_path is None:
            pending.new_path = _strip_prefix(new_raw, "b/")


def parse_unified_diff(diff_text: str) -> list[FileDiff]:
    """Parse unified diff text into a list of :class:`FileDiff`.

    Parameters
    ----------
    diff_text : str
        Unified diff text (git-style or bare)

    Returns
    -------
    list of FileDiff
        Files in order of appearance; ``[]`` means nothing to display

    """
    return UnifiedDiffParser().parse(diff_text)


def _build_file_diff(pending: _PendingFile) -> FileDiff | None:
    if not pending.hunks and not pending.has_markers:
        logger.debug("Dropping header-only entry without hunks: %s", pending.new_path or pending.old_path)
        return None

    old_path = pending.rename_from or pending.old_path
    new_path = pending.rename_to or pending.new_path
    old_is_null = pending.old_is_null or (pending.created and not pending.new_is_null)
    new_is_null = pending.new_is_null or (pending.deleted and not old_is_null)

    kind: FileKind
    if old_is_null:
        kind = "added"
        old_path = new_path or old_path
    elif new_is_null:
        kind = "deleted"
        new_path = old_path or new_path
    elif pending.rename_from is not None or pending.rename_to is not None:
        kind = "renamed"
    else:
        kind = "modified"

    old_path = old_path or new_path or DEFAULT_FILE_NAME
    new_path = new_path or old_path

    chunks = []
    for ordinal, hunk in enumerate(pending.hunks):
        chunk = DiffChunk.from_lines(
            attach_word_diffs(hunk.lines),
            f"{old_path}-chunk-{ordinal}",
            old_start=hunk.old_start,
            new_start=hunk.new_start,
        )
        if (chunk.old_length, chunk.new_length) != (hunk.old_expected, hunk.new_expected):
            logger.debug(
                "Hunk %s declares -%d +%d lines but contains -%d +%d",
                chunk.id,
                hunk.old_expected,
                hunk.new_expected,
                chunk.old_length,
                chunk.new_length,
            )
        chunks.append(chunk)

    return FileDiff.from_chunks(old_path, new_path, chunks, kind=kind, is_binary=pending.is_binary)


def _file_header_rows(lines: list[str]) -> set[int]:
    """Return the indices of ``---`` / ``+++`` header pairs."""
    rows: set[int] = set()
    for i in range(len(lines) - 1):
        if lines[i].startswith(OLD_FILE_PREFIX) and lines[i + 1].startswith(NEW_FILE_PREFIX):
            rows.update((i, i + 1))
    return rows


def _parse_bare_snippet(lines: list[str], skip: set[int]) -> FileDiff:
    """Read the input, minus the rows in ``skip``, as one implicit hunk starting at line 1."""
    hunk = _PendingHunk(old_start=1, new_start=1, old_expected=0, new_expected=0)
    for i, line in enumerate(lines):
        if i in skip:
            continue
        if line.startswith(("+", "-")):
            hunk.add(line[0], line[1:])
        elif not line.startswith(NO_NEWLINE_MARKER):
            hunk.add(" ", line)

    chunk = DiffChunk.from_lines(
        attach_word_diffs(hunk.lines),
        f"{DEFAULT_FILE_NAME}-chunk-0",
        old_start=1,
        new_start=1,
    )
    return FileDiff.from_chunks(DEFAULT_FILE_NAME, DEFAULT_FILE_NAME, [chunk], kind="modified")


def _split_diff_lines(diff_text: str) -> list[str]:
    if not diff_text:
        return []
    lines = diff_text.split("\n")
    if diff_text.endswith("\n"):
        lines.pop()
    return lines


def _parse_git_header(line: str) -> tuple[Optional[str], Optional[str]]:
    """Extract old and new paths from a ``diff --git`` line, best effort."""
    rest = line.rstrip("\r")[len(GIT_HEADER_PREFIX) :].strip()

    quoted = _QUOTED_GIT_PATHS_RE.match(rest)
    if quoted:
        return _strip_prefix(_unquote(quoted.group(1)), "a/"), _strip_prefix(_unquote(quoted.group(2)), "b/")

    # Identical paths with spaces: "a/<p> b/<p>" splits exactly in the middle
    if len(rest) % 2 == 1:
        middle = len(rest) // 2
        old_half = _strip_prefix(rest[:middle], "a/")
        new_half = _strip_prefix(rest[middle + 1 :], "b/")
        if rest[middle] == " " and old_half == new_half:
            return old_half, new_half

    prefixed = _PREFIXED_GIT_PATHS_RE.match(rest)
    if prefixed:
        return prefixed.group(1), prefixed.group(2)

    parts = rest.split(" ")
    if len(parts) == 2:
        return _strip_prefix(parts[0], "a/"), _strip_prefix(parts[1], "b/")

    logger.debug("Could not read paths from git header: %r", line)
    return None, None


def _header_path(raw: str) -> str:
    """Return the path of a ``---``/``+++`` line, without any timestamp."""
    raw = raw.rstrip("\r")
    quoted = _QUOTED_PATH_RE.match(raw)
    if quoted:
        return _unquote(quoted.group(0))
    return raw.split("\t", 1)[0].rstrip()


def _strip_prefix(path: str, prefix: str) -> str:
    return path[len(prefix) :] if path.startswith(prefix) else path


def _unquote(path: str) -> str:
    """Decode a C-style quoted path as written by git; plain paths pass through."""
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    inner = path[1:-1]
    out = bytearray()
    i = 0
    while i < len(inner):
        ch = inner[i]
        if ch != "\\" or i + 1 >= len(inner):
            out.extend(ch.encode("utf-8"))
            i += 1
            continue

        nxt = inner[i + 1]
        octal = inner[i + 1 : i + 4]
        if len(octal) == 3 and all(c in "01234567" for c in octal):
            out.append(int(octal, 8) & 0xFF)
            i += 4
        elif nxt in _ESCAPES:
            out.extend(_ESCAPES[nxt].encode("utf-8"))
            i += 2
        else:
            out.extend(nxt.encode("utf-8"))
            i += 2

    return out.decode("utf-8", errors="replace")
