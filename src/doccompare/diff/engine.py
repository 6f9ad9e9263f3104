#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/diff/engine.py
"""Translate an aligned edit script into classified change records.

Each change record covers exactly one unit: a deletion covers one old unit,
an addition one new unit, and a modification one old and one new unit.
Every unit of both sequences is therefore either unchanged (inside an
``equal`` run) or covered by exactly one record.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from doccompare.constants import (
    CONFIDENCE_COLLAPSED_MODIFICATION,
    CONFIDENCE_INDEPENDENT_EDIT,
    SECTION_CONTENT,
    SEVERITY_THRESHOLDS,
    ChangeCategory,
    Granularity,
    Severity,
)
from doccompare.diff.myers import DiffOp, myers_opcodes
from doccompare.diff.tokenizer import normalize_whitespace
from doccompare.models import ChangeLocation, ChangeRecord, ComparisonUnit

logger = logging.getLogger(__name__)


def classify_severity(old_content: Optional[str], new_content: Optional[str]) -> Severity:
    """Classify a change by the ratio of the shorter to the longer content.

    Parameters
    ----------
    old_content : str or None
        Content before the change
    new_content : str or None
        Content after the change

    Returns
    -------
    {"minor", "moderate", "major", "critical"}
        ``minor`` above 0.8, ``moderate`` above 0.5, ``major`` above 0.2,
        otherwise ``critical``. Empty content on either side is critical.

    """
    old_length = len(old_content or "")
    new_length = len(new_content or "")
    if old_length == 0 or new_length == 0:
        return "critical"

    ratio = min(old_length, new_length) / max(old_length, new_length)
    for threshold, severity in SEVERITY_THRESHOLDS:
        if ratio > threshold:
            return severity  # type: ignore[return-value]
    return "critical"


def _is_formatting_only(old: str, new: str) -> bool:
    """Return True when the values differ only in whitespace or letter case."""
    return old != new and normalize_whitespace(old).lower() == normalize_whitespace(new).lower()


def _unchanged_window(units: Sequence[ComparisonUnit], unchanged: set[int], start: int, stop: int) -> Optional[str]:
    """Join the unchanged unit values in ``units[start:stop]``."""
    start = max(start, 0)
    values = [units[i].value for i in range(start, min(stop, len(units))) if i in unchanged]
    return "\n".join(values) if values else None


class _RecordBuilder:
    """Build records for one comparison, holding context lookups."""

    def __init__(
        self,
        old_units: Sequence[ComparisonUnit],
        new_units: Sequence[ComparisonUnit],
        ops: Sequence[DiffOp],
        context_lines: int,
        granularity: Granularity,
    ):
        self.old_units = old_units
        self.new_units = new_units
        self.context_lines = context_lines
        self.granularity = granularity
        self.old_unchanged: set[int] = set()
        self.new_unchanged: set[int] = set()
        if context_lines > 0:
            for op in ops:
                if op.tag == "equal":
                    self.old_unchanged.update(range(*op.old_range))
                    self.new_unchanged.update(range(*op.new_range))

    def _context(self, on_old_side: bool, position: int) -> tuple[Optional[str], Optional[str]]:
        if self.context_lines <= 0:
            return None, None
        units = self.old_units if on_old_side else self.new_units
        unchanged = self.old_unchanged if on_old_side else self.new_unchanged
        before = _unchanged_window(units, unchanged, position - self.context_lines, position)
        after = _unchanged_window(units, unchanged, position + 1, position + 1 + self.context_lines)
        return before, after

    def _independent_category(self) -> ChangeCategory:
        return "structural" if self.granularity == "paragraph" else "content"

    def deletion(self, old_index: int, new_insertion_point: int) -> ChangeRecord:
        old_value = self.old_units[old_index].value
        before, after = self._context(True, old_index)
        return ChangeRecord(
            kind="deletion",
            location=ChangeLocation(
                line=old_index + 1,
                section=SECTION_CONTENT,
                old_position=old_index,
                new_position=new_insertion_point,
            ),
            old_content=old_value,
            new_content=None,
            confidence=CONFIDENCE_INDEPENDENT_EDIT,
            change_type=self._independent_category(),
            severity="minor",
            context_before=before,
            context_after=after,
        )

    def addition(self, old_insertion_point: int, new_index: int) -> ChangeRecord:
        new_value = self.new_units[new_index].value
        before, after = self._context(False, new_index)
        return ChangeRecord(
            kind="addition",
            location=ChangeLocation(
                line=new_index + 1,
                section=SECTION_CONTENT,
                old_position=old_insertion_point,
                new_position=new_index,
            ),
            old_content=None,
            new_content=new_value,
            confidence=CONFIDENCE_INDEPENDENT_EDIT,
            change_type=self._independent_category(),
            severity="minor",
            context_before=before,
            context_after=after,
        )

    def modification(self, old_index: int, new_index: int) -> ChangeRecord:
        old_value = self.old_units[old_index].value
        new_value = self.new_units[new_index].value
        before, after = self._context(True, old_index)
        return ChangeRecord(
            kind="modification",
            location=ChangeLocation(
                line=old_index + 1,
                section=SECTION_CONTENT,
                old_position=old_index,
                new_position=new_index,
            ),
            old_content=old_value,
            new_content=new_value,
            confidence=CONFIDENCE_COLLAPSED_MODIFICATION,
            change_type="formatting" if _is_formatting_only(old_value, new_value) else "content",
            severity=classify_severity(old_value, new_value),
            context_before=before,
            context_after=after,
        )


def compute_changes(
    old_units: Sequence[ComparisonUnit],
    new_units: Sequence[ComparisonUnit],
    context_lines: int = 0,
    granularity: Granularity = "line",
    pair_unequal_runs: bool = False,
    ops: Optional[Sequence[DiffOp]] = None,
) -> list[ChangeRecord]:
    """Diff two unit sequences and classify every edit.

    Parameters
    ----------
    old_units : sequence of ComparisonUnit
        Units of the old version
    new_units : sequence of ComparisonUnit
        Units of the new version
    context_lines : int, default 0
        Number of surrounding unchanged units to attach to each record
    granularity : {"character", "word", "line", "paragraph"}, default "line"
        Granularity the units were produced with; whole-paragraph additions
        and deletions are classified as structural
    pair_unequal_runs : bool, default False
        Also collapse deletion and addition runs of different lengths,
        pairing as many units as the shorter run holds
    ops : sequence of DiffOp, optional
        Edit script already computed for the unit values, for example by
        :func:`~doccompare.diff.myers.edit_script` with a cost limit. When
        omitted a minimum script is computed here.

    Returns
    -------
    list of ChangeRecord
        Records in edit-script order. A deletion run directly followed by an
        addition run of the same length becomes one modification per unit
        pair; otherwise each unit is a separate deletion or addition.

    """
    if ops is None:
        ops = myers_opcodes([unit.value for unit in old_units], [unit.value for unit in new_units])
    builder = _RecordBuilder(old_units, new_units, ops, context_lines, granularity)
    changes: list[ChangeRecord] = []

    i = 0
    while i < len(ops):
        op = ops[i]
        if op.tag == "equal":
            i += 1
            continue

        deleted = op if op.tag == "delete" else None
        inserted = op if op.tag == "insert" else None
        if deleted is not None and i + 1 < len(ops) and ops[i + 1].tag == "insert":
            inserted = ops[i + 1]
            i += 1
        i += 1

        old_start, old_stop = deleted.old_range if deleted else (inserted.old_range if inserted else (0, 0))
        new_start, new_stop = inserted.new_range if inserted else (deleted.new_range if deleted else (0, 0))
        old_count = old_stop - old_start
        new_count = new_stop - new_start

        paired = 0
        if old_count and new_count and (old_count == new_count or pair_unequal_runs):
            paired = min(old_count, new_count)

        for offset in range(paired):
            changes.append(builder.modification(old_start + offset, new_start + offset))
        for old_index in range(old_start + paired, old_stop):
            changes.append(builder.deletion(old_index, new_start + paired))
        for new_index in range(new_start + paired, new_stop):
            changes.append(builder.addition(old_stop, new_index))

    logger.debug(f"Edit script has {len(ops)} runs producing {len(changes)} change records")
    return changes
