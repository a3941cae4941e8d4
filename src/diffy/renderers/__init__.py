#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/renderers/__init__.py
"""Diff renderers for various output formats.

Available Renderers
-------------------
- UnifiedDiffRenderer: git-style unified diff text, optionally colorized
- JsonDiffRenderer: Structured JSON output for programmatic access
- SideBySideRenderer: Two-column terminal tables via rich

Examples
--------
Render with colors for terminal:
    >>> from diffy import compute_diff
    >>> from diffy.renderers import UnifiedDiffRenderer
    >>> diff = compute_diff(old_text, new_text, "notes.txt")
    >>> for line in UnifiedDiffRenderer(use_color=True).render([diff]):
    ...     print(line)

Show a side-by-side view:
    >>> from diffy.renderers import SideBySideRenderer
    >>> SideBySideRenderer().print([diff])

"""

from diffy.renderers.json import JsonDiffRenderer
from diffy.renderers.terminal import SideBySideRenderer
from diffy.renderers.unified import UnifiedDiffRenderer

__all__ = [
    "JsonDiffRenderer",
    "SideBySideRenderer",
    "UnifiedDiffRenderer",
]
