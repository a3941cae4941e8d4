#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/engine/sequence.py
"""Shortest edit script computation over arbitrary token sequences.

Two strategies are available:

- :func:`myers_diff` implements Myers' O((N+M)D) greedy algorithm and
  returns a minimum-length edit script.
- :func:`lookahead_diff` is a bounded heuristic used once ``N + M`` exceeds
  the exact size limit. It resynchronizes on the next equal element within a
  fixed window and is **not** guaranteed to be minimal; for very large inputs
  this is an accepted trade-off for O(N * window) cost.

:func:`diff_sequences` picks between them. Every function here is total for
sequence input: the only exception raised is :class:`DiffCancelledError`,
and only when the caller sets the supplied cancellation event.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, Hashable, Protocol, Sequence, TypeVar

from diffy.constants import EXACT_DIFF_SIZE_LIMIT, FALLBACK_LOOKAHEAD, EditKind
from diffy.exceptions import DiffCancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


class CancelEvent(Protocol):
    """Anything exposing ``is_set()``, such as :class:`threading.Event`."""

    def is_set(self) -> bool: ...


@dataclass(frozen=True, slots=True)
class Edit(Generic[T]):
    """One step of an edit script.

    ``old_index`` and ``new_index`` are the cursor positions in the old and
    new sequences at the time of the edit; ``value`` is the element that was
    kept, inserted or deleted.
    """

    kind: EditKind
    old_index: int
    new_index: int
    value: T


def check_cancelled(cancel_event: CancelEvent | None) -> None:
    """Raise :class:`DiffCancelledError` if the event has been set."""
    if cancel_event is not None and cancel_event.is_set():
        raise DiffCancelledError()


def diff_sequences(
    old: Sequence[T],
    new: Sequence[T],
    *,
    size_limit: int = EXACT_DIFF_SIZE_LIMIT,
    lookahead: int = FALLBACK_LOOKAHEAD,
    cancel_event: CancelEvent | None = None,
) -> list[Edit[T]]:
    """Compute an edit script transforming ``old`` into ``new``.

    Parameters
    ----------
    old : sequence
        Original tokens (lines, words, ...)
    new : sequence
        Updated tokens
    size_limit : int, default EXACT_DIFF_SIZE_LIMIT
        Largest ``len(old) + len(new)`` handled by the exact algorithm
    lookahead : int, default FALLBACK_LOOKAHEAD
        Window used by the heuristic above ``size_limit``
    cancel_event : CancelEvent, optional
        Checked between rounds; when set the computation is abandoned

    Returns
    -------
    list of Edit
        Edits in forward order; replaying them against ``old`` yields ``new``

    Raises
    ------
    DiffCancelledError
        If ``cancel_event`` is set while the computation runs

    """
    n = len(old)
    m = len(new)

    if n == 0 and m == 0:
        return []
    if n == 0:
        return [Edit("insert", 0, j, value) for j, value in enumerate(new)]
    if m == 0:
        return [Edit("delete", i, 0, value) for i, value in enumerate(old)]

    if n + m > size_limit:
        logger.debug("Sequence of size %d exceeds exact limit %d; using lookahead diff", n + m, size_limit)
        return lookahead_diff(old, new, lookahead=lookahead, cancel_event=cancel_event)

    return myers_diff(old, new, cancel_event=cancel_event)


def myers_diff(
    old: Sequence[T],
    new: Sequence[T],
    *,
    cancel_event: CancelEvent | None = None,
) -> list[Edit[T]]:
    """Compute a minimum-length edit script with Myers' algorithm.

    For each edit distance ``d`` the furthest-reaching x on every diagonal
    ``k = x - y`` is recorded before the round runs, then each diagonal is
    advanced by one non-diagonal move and extended along equal elements.
    The first round reaching ``(N, M)`` ends the search and the recorded
    frontiers are walked backwards to recover the path.

    A diagonal is entered from ``k + 1`` (an insert) when ``k == -d`` or when
    ``k != d`` and ``V[k - 1] < V[k + 1]``; otherwise from ``k - 1`` (a delete).
    The backtrack applies the same rule, which makes the output deterministic.
    """
    n = len(old)
    m = len(new)
    max_d = n + m
    if max_d == 0:
        return []

    offset = max_d + 1
    v = [-1] * (2 * max_d + 3)
    v[offset + 1] = 0
    # trace[d] holds V[-d..d] as it stood before round d
    trace: list[list[int]] = []

    for d in range(max_d + 1):
        check_cancelled(cancel_event)
        trace.append(v[offset - d : offset + d + 1])

        for k in range(-d, d + 1, 2):
            idx = k + offset
            if k == -d or (k != d and v[idx - 1] < v[idx + 1]):
                x = v[idx + 1]
            else:
                x = v[idx - 1] + 1
            y = x - k

            while x < n and y < m and old[x] == new[y]:
                x += 1
                y += 1

            v[idx] = x

            if x >= n and y >= m:
                return _backtrack(trace, old, new)

    # Unreachable: d == N + M always reaches (N, M)
    return lookahead_diff(old, new, cancel_event=cancel_event)


def _backtrack(trace: list[list[int]], old: Sequence[T], new: Sequence[T]) -> list[Edit[T]]:
    """Recover the edit path from the recorded frontiers."""
    edits: list[Edit[T]] = []
    x = len(old)
    y = len(new)

    for d in range(len(trace) - 1, 0, -1):
        frontier = trace[d]
        k = x - y

        # frontier index of diagonal j is j + d
        if k == -d or (k != d and frontier[k - 1 + d] < frontier[k + 1 + d]):
            prev_k = k + 1
        else:
            prev_k = k - 1

        prev_x = frontier[prev_k + d]
        prev_y = prev_x - prev_k

        while x > prev_x and y > prev_y:
            x -= 1
            y -= 1
            edits.append(Edit("equal", x, y, old[x]))

        if x == prev_x:
            y -= 1
            edits.append(Edit("insert", x, y, new[y]))
        else:
            x -= 1
            edits.append(Edit("delete", x, y, old[x]))

    while x > 0 and y > 0:
        x -= 1
        y -= 1
        edits.append(Edit("equal", x, y, old[x]))

    edits.reverse()
    return edits


def lookahead_diff(
    old: Sequence[T],
    new: Sequence[T],
    *,
    lookahead: int = FALLBACK_LOOKAHEAD,
    cancel_event: CancelEvent | None = None,
) -> list[Edit[T]]:
    """Compute a (not necessarily minimal) edit script in bounded time.

    Equal prefixes are consumed greedily. On a mismatch, positions
    ``1 .. min(lookahead, remaining)`` ahead are probed, checking ``new``
    before ``old`` at each distance: a match ahead in ``new`` emits inserts up
    to it, a match ahead in ``old`` emits deletes up to it, and when neither
    side resynchronizes one delete and one insert are emitted.
    """
    edits: list[Edit[T]] = []
    n = len(old)
    m = len(new)
    i = 0
    j = 0

    while i < n and j < m:
        check_cancelled(cancel_event)

        if old[i] == new[j]:
            edits.append(Edit("equal", i, j, old[i]))
            i += 1
            j += 1
            continue

        found_new = -1
        found_old = -1
        window = min(lookahead, max(n - i, m - j))

        for step in range(1, window):
            if j + step < m and old[i] == new[j + step]:
                found_new = j + step
                break
            if i + step < n and old[i + step] == new[j]:
                found_old = i + step
                break

        if found_new >= 0:
            while j < found_new:
                edits.append(Edit("insert", i, j, new[j]))
                j += 1
        elif found_old >= 0:
            while i < found_old:
                edits.append(Edit("delete", i, j, old[i]))
                i += 1
        else:
            edits.append(Edit("delete", i, j, old[i]))
            i += 1
            edits.append(Edit("insert", i, j, new[j]))
            j += 1

    while i < n:
        edits.append(Edit("delete", i, j, old[i]))
        i += 1
    while j < m:
        edits.append(Edit("insert", i, j, new[j]))
        j += 1

    return edits


def replay_edits(old: Sequence[T], edits: Sequence[Edit[T]]) -> list[T]:
    """Apply an edit script to ``old`` and return the resulting sequence.

    Equal edits copy the element found at ``old_index``, so a script that
    does not match ``old`` produces a visibly different result rather than
    silently echoing its own values.
    """
    result: list[T] = []
    for edit in edits:
        if edit.kind == "equal":
            result.append(old[edit.old_index])
        elif edit.kind == "insert":
            result.append(edit.value)
    return result
