#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/diff/scoring.py
"""Similarity scoring and change statistics."""

from __future__ import annotations

from typing import Iterable

from doccompare.constants import (
    BINARY_MAJOR_SIMILARITY_THRESHOLD,
    CONFIDENCE_BINARY_CONTENT,
    CONFIDENCE_BINARY_SIZE,
    SECTION_BINARY_CONTENT,
    SECTION_FILE_SIZE,
)
from doccompare.models import ChangeLocation, ChangeRecord, Statistics


def text_similarity(old_count: int, new_count: int, changes: Iterable[ChangeRecord]) -> float:
    """Score a unit-level comparison.

    Parameters
    ----------
    old_count : int
        Number of old units
    new_count : int
        Number of new units
    changes : iterable of ChangeRecord
        Unit-level change records, each covering one unit

    Returns
    -------
    float
        ``max(0, 1 - changed / max(old_count, new_count))``, or 1.0 when both
        sequences are empty

    """
    longest = max(old_count, new_count)
    if longest == 0:
        return 1.0
    changed = sum(1 for _ in changes)
    return max(0.0, 1.0 - changed / longest)


def binary_similarity(old: bytes, new: bytes) -> float:
    """Score two byte buffers by length ratio and matching overlap.

    Returns
    -------
    float
        ``(min_len / max_len) * (matching / min_len)`` where ``matching`` is the
        number of equal bytes at the same offset within the shorter length.
        Two empty buffers score 1.0 and one empty buffer scores 0.0.

    """
    if not old and not new:
        return 1.0
    if not old or not new:
        return 0.0

    shortest = min(len(old), len(new))
    longest = max(len(old), len(new))
    matching = sum(1 for a, b in zip(old, new) if a == b)
    return (shortest / longest) * (matching / shortest)


def binary_changes(old: bytes, new: bytes, similarity: float | None = None) -> list[ChangeRecord]:
    """Describe how two byte buffers differ.

    A ``file_size`` metadata modification is reported when the lengths
    differ; it is critical when either buffer is empty. A ``binary_content``
    modification is reported whenever the bytes differ; it is major when the
    similarity is below 0.5.

    Parameters
    ----------
    old : bytes
        Old payload
    new : bytes
        New payload
    similarity : float, optional
        Precomputed :func:`binary_similarity`

    Returns
    -------
    list of ChangeRecord
        Zero, one or two records

    """
    if old == new:
        return []

    if similarity is None:
        similarity = binary_similarity(old, new)

    changes: list[ChangeRecord] = []
    if len(old) != len(new):
        changes.append(
            ChangeRecord(
                kind="modification",
                location=ChangeLocation(section=SECTION_FILE_SIZE),
                old_content=f"{len(old)} bytes",
                new_content=f"{len(new)} bytes",
                confidence=CONFIDENCE_BINARY_SIZE,
                change_type="metadata",
                severity="critical" if not old or not new else "moderate",
            )
        )

    changes.append(
        ChangeRecord(
            kind="modification",
            location=ChangeLocation(section=SECTION_BINARY_CONTENT),
            old_content=None,
            new_content=None,
            confidence=CONFIDENCE_BINARY_CONTENT,
            change_type="content",
            severity="major" if similarity < BINARY_MAJOR_SIMILARITY_THRESHOLD else "moderate",
        )
    )
    return changes


def _line_count(text: str) -> int:
    return text.count("\n") + 1


def _word_count(text: str) -> int:
    return len(text.split())


def compute_statistics(changes: Iterable[ChangeRecord]) -> Statistics:
    """Aggregate counts over a change list in a single pass.

    Additions and deletions contribute their full content. A modification
    contributes only its net character delta, to ``characters_added`` when
    the new content is longer and to ``characters_deleted`` when it is
    shorter. Line counts are embedded newlines plus one; word counts are
    whitespace-separated tokens.
    """
    counts = dict.fromkeys(
        (
            "total_changes",
            "additions",
            "deletions",
            "modifications",
            "characters_added",
            "characters_deleted",
            "lines_added",
            "lines_deleted",
            "words_added",
            "words_deleted",
        ),
        0,
    )

    for change in changes:
        counts["total_changes"] += 1
        old = change.old_content or ""
        new = change.new_content or ""

        if change.kind == "addition":
            counts["additions"] += 1
            counts["characters_added"] += len(new)
            counts["lines_added"] += _line_count(new)
            counts["words_added"] += _word_count(new)
        elif change.kind == "deletion":
            counts["deletions"] += 1
            counts["characters_deleted"] += len(old)
            counts["lines_deleted"] += _line_count(old)
            counts["words_deleted"] += _word_count(old)
        else:
            counts["modifications"] += 1
            delta = len(new) - len(old)
            if delta > 0:
                counts["characters_added"] += delta
            elif delta < 0:
                counts["characters_deleted"] += -delta

    return Statistics(**counts)


def binary_statistics(old: bytes, new: bytes, changes: Iterable[ChangeRecord]) -> Statistics:
    """Statistics for a byte-level comparison.

    Every change is a modification; the character deltas reflect the byte
    length difference.
    """
    total = sum(1 for _ in changes)
    delta = len(new) - len(old)
    return Statistics(
        total_changes=total,
        modifications=total,
        characters_added=max(delta, 0),
        characters_deleted=max(-delta, 0),
    )
