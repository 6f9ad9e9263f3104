#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/diff/myers.py
"""Minimum edit script between two unit sequences.

This is the greedy O((N + M) * D) algorithm from Eugene W. Myers, "An O(ND)
Difference Algorithm and Its Variations" (1986), in two forms:

- Small regions run the forward pass while recording a snapshot of the
  furthest-reaching frontier for every edit distance ``d``, then walk those
  snapshots back from the end to recover one shortest path. The snapshots
  take O(D^2) space, so this form is limited to regions whose combined
  length is at most ``_SNAPSHOT_SEARCH_LIMIT``.
- Larger regions are bisected in linear space: a forward and a reverse
  search meet on the middle snake of a shortest path, and the two halves on
  either side of it are diffed independently.

When several shortest scripts exist the snapshot search prefers moving
right in the edit graph (a deletion) over moving down (an insertion) when
both frontiers are equally far, which keeps matching runs as early as
possible. Within each stretch between two matching runs the deletions are
reported before the insertions.

An optional ``max_cost`` bounds the work spent on a single bisection. Once
the searches have taken that many steps without meeting, the region is
split at the furthest point either search reached, as GNU diff does for
expensive inputs. The script is then valid but may not be minimal, which
:func:`edit_script` reports through :attr:`EditScript.exact`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Literal, Optional, Sequence

OpTag = Literal["equal", "delete", "insert"]
Step = tuple[OpTag, int, int]

_SNAPSHOT_SEARCH_LIMIT = 512  # combined region length handled by the snapshot search


@dataclass(frozen=True, slots=True)
class DiffOp:
    """A run of the edit script.

    ``old_range`` and ``new_range`` are half-open ``(start, stop)`` index
    ranges. A ``delete`` has an empty new range positioned at the insertion
    point in the new sequence, and an ``insert`` has an empty old range.
    """

    tag: OpTag
    old_range: tuple[int, int]
    new_range: tuple[int, int]

    @property
    def old_length(self) -> int:
        """Number of old units covered."""
        return self.old_range[1] - self.old_range[0]

    @property
    def new_length(self) -> int:
        """Number of new units covered."""
        return self.new_range[1] - self.new_range[0]


def _intern(a: Sequence[Hashable], b: Sequence[Hashable]) -> tuple[list[int], list[int]]:
    """Map both sequences onto small integers so comparisons are cheap."""
    table: dict[Hashable, int] = {}
    a_ids = [table.setdefault(item, len(table)) for item in a]
    b_ids = [table.setdefault(item, len(table)) for item in b]
    return a_ids, b_ids


def _forward_trace(a: list[int], b: list[int]) -> list[list[int]]:
    """Run the greedy forward pass and return frontier snapshots.

    Snapshot ``d`` holds the frontier as it was before step ``d`` for
    diagonals ``-d - 1 .. d + 1``, stored at index ``k + d + 1``.
    """
    n, m = len(a), len(b)
    max_d = n + m
    offset = max_d + 1
    v = [0] * (2 * max_d + 3)
    trace: list[list[int]] = []

    for d in range(max_d + 1):
        trace.append(v[offset - d - 1 : offset + d + 2])
        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and v[offset + k - 1] < v[offset + k + 1]):
                x = v[offset + k + 1]
            else:
                x = v[offset + k - 1] + 1
            y = x - k
            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1
            v[offset + k] = x
            if x >= n and y >= m:
                return trace

    raise AssertionError("Myers forward pass did not reach the end of both sequences")


def _backtrack(trace: list[list[int]], n: int, m: int) -> list[Step]:
    """Recover the edit path as ``(tag, old_index, new_index)`` steps in order."""
    steps: list[Step] = []
    x, y = n, m

    for d in range(len(trace) - 1, -1, -1):
        snapshot = trace[d]
        base = d + 1
        k = x - y
        if k == -d or (k != d and snapshot[base + k - 1] < snapshot[base + k + 1]):
            prev_k = k + 1
        else:
            prev_k = k - 1
        prev_x = snapshot[base + prev_k]
        prev_y = prev_x - prev_k

        while x > prev_x and y > prev_y:
            x -= 1
            y -= 1
            steps.append(("equal", x, y))

        if d > 0:
            if x == prev_x:
                steps.append(("insert", prev_x, prev_y))
            else:
                steps.append(("delete", prev_x, prev_y))
        x, y = prev_x, prev_y

    steps.reverse()
    return steps


def _group(steps: list[Step], old_start: int, new_start: int) -> list[DiffOp]:
    """Merge single steps into runs, deletions before insertions in each stretch."""
    ops: list[DiffOp] = []
    i = 0
    while i < len(steps):
        tag, x, y = steps[i]
        if tag == "equal":
            j = i
            while j < len(steps) and steps[j][0] == "equal":
                j += 1
            length = j - i
            ops.append(DiffOp("equal", (old_start + x, old_start + x + length), (new_start + y, new_start + y + length)))
            i = j
            continue

        deleted = inserted = 0
        j = i
        while j < len(steps) and steps[j][0] != "equal":
            if steps[j][0] == "delete":
                deleted += 1
            else:
                inserted += 1
            j += 1
        ox, oy = old_start + x, new_start + y
        if deleted:
            ops.append(DiffOp("delete", (ox, ox + deleted), (oy, oy)))
        if inserted:
            ops.append(DiffOp("insert", (ox + deleted, ox + deleted), (oy, oy + inserted)))
        i = j
    return ops


def _bisect(a: list[int], b: list[int], max_cost: Optional[int]) -> Optional[tuple[int, int, bool]]:
    """Find where to split a region with no common prefix or suffix.

    Returns ``(x, y, exact)``. When ``exact`` is true, ``(x, y)`` lies on a
    shortest path through the region. Otherwise the searches ran out of
    ``max_cost`` steps and ``(x, y)`` is the furthest point either reached.
    """
    n, m = len(a), len(b)
    max_d = (n + m + 1) // 2
    offset = max_d
    forward = [-1] * (2 * max_d + 2)
    forward[offset + 1] = 0
    reverse = forward[:]
    delta = n - m
    odd = delta % 2 != 0
    f_start = f_end = r_start = r_end = 0
    best_progress, best_x, best_y = 0, 0, 0

    for d in range(max_d):
        for k in range(-d + f_start, d + 1 - f_end, 2):
            i = offset + k
            if k == -d or (k != d and forward[i - 1] < forward[i + 1]):
                x = forward[i + 1]
            else:
                x = forward[i - 1] + 1
            y = x - k
            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1
            forward[i] = x
            if x > n:
                f_end += 2
            elif y > m:
                f_start += 2
            else:
                if x + y > best_progress:
                    best_progress, best_x, best_y = x + y, x, y
                if odd:
                    j = offset + delta - k
                    if 0 <= j < len(reverse) and reverse[j] != -1 and x >= n - reverse[j]:
                        return x, y, True

        for k in range(-d + r_start, d + 1 - r_end, 2):
            i = offset + k
            if k == -d or (k != d and reverse[i - 1] < reverse[i + 1]):
                x = reverse[i + 1]
            else:
                x = reverse[i - 1] + 1
            y = x - k
            while x < n and y < m and a[n - x - 1] == b[m - y - 1]:
                x += 1
                y += 1
            reverse[i] = x
            if x > n:
                r_end += 2
            elif y > m:
                r_start += 2
            else:
                if x + y > best_progress:
                    best_progress, best_x, best_y = x + y, n - x, m - y
                if not odd:
                    j = offset + delta - k
                    if 0 <= j < len(forward) and forward[j] != -1 and forward[j] >= n - x:
                        return forward[j], forward[j] - (j - offset), True

        if max_cost is not None and d + 1 >= max_cost and best_progress:
            return best_x, best_y, False

    return None


def _edit_steps(a: list[int], b: list[int], max_cost: Optional[int]) -> tuple[list[Step], bool]:
    """Return the edit steps for two interned sequences and whether they are minimal."""
    steps: list[Step] = []
    exact = True
    # Regions are (a_lo, a_hi, b_lo, b_hi); matched runs are (x, y, length).
    pending: list[tuple[int, ...]] = [(0, len(a), 0, len(b))]

    while pending:
        item = pending.pop()
        if len(item) == 3:
            x, y, length = item
            steps.extend(("equal", x + i, y + i) for i in range(length))
            continue

        a_lo, a_hi, b_lo, b_hi = item
        while a_lo < a_hi and b_lo < b_hi and a[a_lo] == b[b_lo]:
            steps.append(("equal", a_lo, b_lo))
            a_lo += 1
            b_lo += 1
        suffix = 0
        while a_lo < a_hi - suffix and b_lo < b_hi - suffix and a[a_hi - suffix - 1] == b[b_hi - suffix - 1]:
            suffix += 1
        if suffix:
            a_hi -= suffix
            b_hi -= suffix
            pending.append((a_hi, b_hi, suffix))

        if a_lo == a_hi or b_lo == b_hi:
            steps.extend(("delete", x, b_lo) for x in range(a_lo, a_hi))
            steps.extend(("insert", a_hi, y) for y in range(b_lo, b_hi))
            continue

        sub_a, sub_b = a[a_lo:a_hi], b[b_lo:b_hi]
        if len(sub_a) + len(sub_b) <= _SNAPSHOT_SEARCH_LIMIT:
            trace = _forward_trace(sub_a, sub_b)
            steps.extend((tag, a_lo + x, b_lo + y) for tag, x, y in _backtrack(trace, len(sub_a), len(sub_b)))
            continue

        split = _bisect(sub_a, sub_b, max_cost)
        if split is not None and not split[2]:
            exact = False
        # No split means every unit is edited, so replacing the region is minimal.
        if split is None or split[:2] in ((0, 0), (len(sub_a), len(sub_b))):
            steps.extend(("delete", x, b_lo) for x in range(a_lo, a_hi))
            steps.extend(("insert", a_hi, y) for y in range(b_lo, b_hi))
            continue

        x, y, _found = split
        pending.append((a_lo + x, a_hi, b_lo + y, b_hi))
        pending.append((a_lo, a_lo + x, b_lo, b_lo + y))

    return steps, exact


@dataclass(frozen=True, slots=True)
class EditScript:
    """Runs of an edit script and whether the script is a minimum one."""

    ops: list[DiffOp]
    exact: bool = True


def edit_script(a: Sequence[Hashable], b: Sequence[Hashable], max_cost: Optional[int] = None) -> EditScript:
    """Compute an edit script turning ``a`` into ``b``.

    Parameters
    ----------
    a : sequence of hashable
        Old sequence
    b : sequence of hashable
        New sequence
    max_cost : int, optional
        Steps a single bisection may search before it settles for an
        approximate split. ``None`` always searches for a minimum script.

    Returns
    -------
    EditScript
        Runs covering both sequences completely and in order, with adjacent
        runs of the same tag merged. ``exact`` is false when ``max_cost``
        cut at least one search short.

    Raises
    ------
    ValueError
        If ``max_cost`` is not positive

    """
    if max_cost is not None and max_cost < 1:
        raise ValueError(f"max_cost must be positive, got {max_cost}")

    n, m = len(a), len(b)

    prefix = 0
    while prefix < n and prefix < m and a[prefix] == b[prefix]:
        prefix += 1
    suffix = 0
    while suffix < n - prefix and suffix < m - prefix and a[n - 1 - suffix] == b[m - 1 - suffix]:
        suffix += 1

    ops: list[DiffOp] = []
    if prefix:
        ops.append(DiffOp("equal", (0, prefix), (0, prefix)))

    exact = True
    a_mid, b_mid = _intern(a[prefix : n - suffix], b[prefix : m - suffix])
    if a_mid and b_mid and not set(a_mid).isdisjoint(b_mid):
        steps, exact = _edit_steps(a_mid, b_mid, max_cost)
        ops.extend(_group(steps, prefix, prefix))
    else:
        if a_mid:
            ops.append(DiffOp("delete", (prefix, n - suffix), (prefix, prefix)))
        if b_mid:
            ops.append(DiffOp("insert", (n - suffix, n - suffix), (prefix, m - suffix)))

    if suffix:
        ops.append(DiffOp("equal", (n - suffix, n), (m - suffix, m)))

    merged: list[DiffOp] = []
    for op in ops:
        if merged and merged[-1].tag == op.tag:
            last = merged.pop()
            op = DiffOp(op.tag, (last.old_range[0], op.old_range[1]), (last.new_range[0], op.new_range[1]))
        merged.append(op)
    return EditScript(merged, exact)


def myers_opcodes(a: Sequence[Hashable], b: Sequence[Hashable]) -> list[DiffOp]:
    """Compute the minimum edit script turning ``a`` into ``b``.

    Examples
    --------
        >>> [op.tag for op in myers_opcodes(["a", "b", "c"], ["a", "X", "b", "c"])]
        ['equal', 'insert', 'equal']

    """
    return edit_script(a, b).ops
