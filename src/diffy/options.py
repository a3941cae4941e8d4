#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/options.py
"""Options controlling diff computation and layout.

A single frozen dataclass carries every tunable knob of the engine so it can
be loaded from a configuration file, passed across process boundaries and
cloned with overrides from the command line.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from diffy.constants import (
    DEFAULT_CONTEXT_LINES,
    EXACT_DIFF_SIZE_LIMIT,
    FALLBACK_LOOKAHEAD,
    MIN_COLLAPSE_LINES,
)
from diffy.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class DiffOptions(CloneFrozenMixin):
    """Configuration for computing and laying out diffs.

    Parameters
    ----------
    context_lines : int, default 3
        Unchanged lines kept around each change when chunking, and visible
        padding kept around collapsed regions.
    exact_size_limit : int, default 20000
        Largest combined sequence length (N + M) diffed with the exact
        Myers algorithm; larger inputs use the lookahead heuristic.
    fallback_lookahead : int, default 100
        Window searched by the lookahead heuristic for a resynchronization point.
    min_collapse_lines : int, default 4
        Smallest unchanged span hidden behind a placeholder row.

    """

    context_lines: int = field(
        default=DEFAULT_CONTEXT_LINES,
        metadata={"help": "Number of unchanged context lines around each change", "type": int},
    )
    exact_size_limit: int = field(
        default=EXACT_DIFF_SIZE_LIMIT,
        metadata={"help": "Largest N + M diffed with the exact algorithm", "type": int},
    )
    fallback_lookahead: int = field(
        default=FALLBACK_LOOKAHEAD,
        metadata={"help": "Lookahead window of the heuristic differ", "type": int},
    )
    min_collapse_lines: int = field(
        default=MIN_COLLAPSE_LINES,
        metadata={"help": "Minimum unchanged span that gets collapsed", "type": int},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.context_lines < 0:
            raise ValueError(f"context_lines must be non-negative, got {self.context_lines}")
        if self.exact_size_limit < 0:
            raise ValueError(f"exact_size_limit must be non-negative, got {self.exact_size_limit}")
        if self.fallback_lookahead <= 0:
            raise ValueError(f"fallback_lookahead must be positive, got {self.fallback_lookahead}")
        if self.min_collapse_lines <= 0:
            raise ValueError(f"min_collapse_lines must be positive, got {self.min_collapse_lines}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> DiffOptions:
        """Build options from a configuration mapping.

        Keys may use ``snake_case`` or ``kebab-case``. Keys that are not
        option fields are rejected so typos in configuration files surface.

        Parameters
        ----------
        data : Mapping[str, Any]
            Configuration values, typically loaded from a config file

        Returns
        -------
        DiffOptions
            Options with the given overrides applied to the defaults

        Raises
        ------
        ValidationError
            If a key is unknown or a value has the wrong type or range

        """
        known = {f.name: f for f in fields(cls)}
        values: dict[str, Any] = {}

        for raw_key, value in data.items():
            key = str(raw_key).replace("-", "_")
            if key not in known:
                raise ValidationError(
                    f"Unknown diff option: {raw_key}",
                    parameter_name=str(raw_key),
                    parameter_value=value,
                )
            expected = known[key].metadata.get("type", int)
            # bool is an int subclass; reject it explicitly
            if isinstance(value, bool) or not isinstance(value, expected):
                raise ValidationError(
                    f"Option {key} must be of type {expected.__name__}, got {type(value).__name__}",
                    parameter_name=key,
                    parameter_value=value,
                )
            values[key] = value

        try:
            return cls(**values)
        except ValueError as e:
            raise ValidationError(str(e), original_error=e) from e
