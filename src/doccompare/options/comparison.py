#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/options/comparison.py
"""Options controlling how two versions are tokenized and compared.

``ComparisonOptions`` is supplied per call; ``ComparatorConfig`` is held by a
:class:`~doccompare.comparator.DocumentComparator` for its whole lifetime.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from doccompare.constants import (
    DEFAULT_CONTEXT_LINES,
    DEFAULT_DEGRADE_GRANULARITY,
    DEFAULT_EXTRACTION_TIMEOUT,
    DEFAULT_GRANULARITY,
    DEFAULT_IGNORE_CASE,
    DEFAULT_IGNORE_WHITESPACE,
    DEFAULT_MAX_EDIT_COST,
    DEFAULT_MAX_UNITS,
    DEFAULT_PAIR_UNEQUAL_RUNS,
    DEFAULT_SNIFF_SAMPLE_SIZE,
    DEFAULT_TEXT_RATIO_THRESHOLD,
    GRANULARITIES,
    Granularity,
)
from doccompare.exceptions import InvalidOptionsError
from doccompare.options.base import CloneFrozenMixin, validate_choice, validate_non_negative_int


@dataclass(frozen=True)
class ComparisonOptions(CloneFrozenMixin):
    """Per-call options for a document comparison.

    Parameters
    ----------
    ignore_whitespace : bool, default False
        Collapse runs of whitespace to a single space and trim before splitting
    ignore_case : bool, default False
        Lower-case both versions before splitting
    granularity : {"character", "word", "line", "paragraph"}, default "line"
        Unit size used for tokenization
    context_lines : int, default 3
        Number of unchanged units captured around each change

    Raises
    ------
    InvalidOptionsError
        If granularity is unknown or context_lines is negative

    """

    ignore_whitespace: bool = field(
        default=DEFAULT_IGNORE_WHITESPACE,
        metadata={"help": "Collapse whitespace runs and trim before comparing", "importance": "core"},
    )
    ignore_case: bool = field(
        default=DEFAULT_IGNORE_CASE,
        metadata={"help": "Compare case-insensitively", "importance": "core"},
    )
    granularity: Granularity = field(
        default=DEFAULT_GRANULARITY,
        metadata={"help": "Unit size: character, word, line or paragraph", "choices": GRANULARITIES},
    )
    context_lines: int = field(
        default=DEFAULT_CONTEXT_LINES,
        metadata={"help": "Unchanged units captured before and after each change", "type": int},
    )

    def __post_init__(self) -> None:
        """Validate option values."""
        validate_choice("granularity", self.granularity, GRANULARITIES)
        validate_non_negative_int("context_lines", self.context_lines)


@dataclass(frozen=True)
class ComparatorConfig(CloneFrozenMixin):
    """Long-lived configuration of a comparator instance.

    Parameters
    ----------
    extraction_timeout : float, default 5.0
        Seconds to wait for a pdf/docx extractor before falling back to a
        byte-level comparison
    max_units : int, default 20000
        Maximum number of units per side before the comparison is degraded
    max_edit_cost : int or None, default 256
        Search steps one diff region may take before it is split at the
        furthest point reached. The edit script stays valid but may no longer
        be minimal, and the result is marked degraded. ``None`` always
        searches for a minimum script.
    degrade_granularity : bool, default True
        When a character/word tokenization exceeds ``max_units``, retry at
        line granularity before truncating
    pair_unequal_runs : bool, default False
        Collapse adjacent deletion/addition runs of different lengths into
        modifications for their common length instead of keeping them as
        independent edits
    sniff_sample_size : int, default 1000
        Leading bytes inspected when no extension or MIME hint matches
    text_threshold : float, default 0.7
        Share of printable bytes required to classify content as text

    """

    extraction_timeout: float = field(
        default=DEFAULT_EXTRACTION_TIMEOUT,
        metadata={"help": "Seconds allowed for pdf/docx text extraction", "type": float},
    )
    max_units: int = field(
        default=DEFAULT_MAX_UNITS,
        metadata={"help": "Maximum units per side before degrading the comparison", "type": int},
    )
    max_edit_cost: Optional[int] = field(
        default=DEFAULT_MAX_EDIT_COST,
        metadata={"help": "Search steps per diff region before settling for an approximate script", "type": int},
    )
    degrade_granularity: bool = field(
        default=DEFAULT_DEGRADE_GRANULARITY,
        metadata={"help": "Fall back to line granularity for oversized character/word inputs"},
    )
    pair_unequal_runs: bool = field(
        default=DEFAULT_PAIR_UNEQUAL_RUNS,
        metadata={"help": "Collapse unequal adjacent deletion/addition runs into modifications"},
    )
    sniff_sample_size: int = field(
        default=DEFAULT_SNIFF_SAMPLE_SIZE,
        metadata={"help": "Bytes sampled by content sniffing", "type": int},
    )
    text_threshold: float = field(
        default=DEFAULT_TEXT_RATIO_THRESHOLD,
        metadata={"help": "Printable byte ratio above which content is text", "type": float},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges."""
        if self.extraction_timeout <= 0:
            raise InvalidOptionsError(
                "extraction_timeout",
                self.extraction_timeout,
                message=f"extraction_timeout must be positive, got {self.extraction_timeout}",
            )
        if self.max_units <= 0:
            raise InvalidOptionsError(
                "max_units", self.max_units, message=f"max_units must be positive, got {self.max_units}"
            )
        if self.max_edit_cost is not None and self.max_edit_cost <= 0:
            raise InvalidOptionsError(
                "max_edit_cost",
                self.max_edit_cost,
                message=f"max_edit_cost must be positive or None, got {self.max_edit_cost}",
            )
        if self.sniff_sample_size <= 0:
            raise InvalidOptionsError(
                "sniff_sample_size",
                self.sniff_sample_size,
                message=f"sniff_sample_size must be positive, got {self.sniff_sample_size}",
            )
        if not 0.0 <= self.text_threshold <= 1.0:
            raise InvalidOptionsError(
                "text_threshold",
                self.text_threshold,
                message=f"text_threshold must be between 0 and 1, got {self.text_threshold}",
            )
