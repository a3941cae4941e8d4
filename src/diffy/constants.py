#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the diffy library.

This module centralizes the tunable limits and the literal types shared by
the diff engine, the parser, the layout builders and the CLI.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Algorithm Limits - Sequence differ thresholds
3. Layout Defaults - Context and collapsing settings
4. Unified Diff Format - Markers recognised by the parser
5. CLI and Configuration - File names and environment variables
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

LineKind = Literal["added", "removed", "unchanged"]
FileKind = Literal["modified", "added", "deleted", "renamed"]
EditKind = Literal["insert", "delete", "equal"]
ChunkDecision = Literal["accepted", "rejected", "pending"]
OutputFormat = Literal["unified", "json", "side-by-side"]
ColorMode = Literal["auto", "always", "never"]

# =============================================================================
# Algorithm Limits
# =============================================================================

# Above this combined length (N + M) the exact Myers search is replaced by the
# bounded lookahead heuristic.
EXACT_DIFF_SIZE_LIMIT = 20000

# Number of elements scanned ahead for a resynchronization point by the
# lookahead heuristic.
FALLBACK_LOOKAHEAD = 100

# =============================================================================
# Layout Defaults
# =============================================================================

DEFAULT_CONTEXT_LINES = 3

# Smallest unchanged span (after context padding) worth hiding behind a
# placeholder row.
MIN_COLLAPSE_LINES = 4

DEFAULT_FILE_NAME = "file"

# =============================================================================
# Unified Diff Format
# =============================================================================

DEV_NULL = "/dev/null"

GIT_HEADER_PREFIX = "diff --git "
OLD_FILE_PREFIX = "--- "
NEW_FILE_PREFIX = "+++ "
HUNK_PREFIX = "@@"
NO_NEWLINE_MARKER = "\\"
BINARY_PREFIX = "Binary files "

# =============================================================================
# CLI and Configuration
# =============================================================================

CONFIG_FILENAMES = [".diffy.toml", ".diffy.yaml", ".diffy.yml", ".diffy.json"]
PYPROJECT_TOOL_SECTION = "diffy"
CONFIG_ENV_VAR = "DIFFY_CONFIG"
