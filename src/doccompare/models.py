#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/models.py
"""Data model shared by the comparison pipeline and the renderers.

Every value here is an immutable dataclass: a :class:`ComparisonResult` is
built once per comparison and never mutated afterwards, so it can be handed
to several renderers or threads without copying.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional

from doccompare.constants import ChangeCategory, ChangeKind, DocumentType, Severity


@dataclass(frozen=True, slots=True)
class ComparisonUnit:
    """An atomic comparable token and its ordinal position in its sequence."""

    value: str
    position: int


@dataclass(frozen=True, slots=True)
class DocumentTypeInfo:
    """Result of type detection for one payload."""

    type: DocumentType
    mime_type: str
    is_structured: bool
    encoding: Optional[str] = None


@dataclass(frozen=True)
class ExtractedContent:
    """Comparable text produced by an extractor, with optional structure."""

    text: str
    structure: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True, slots=True)
class ChangeLocation:
    """Where a change applies.

    ``line`` is 1-based into the old sequence for deletions and
    modifications and into the new sequence for additions. ``old_position``
    and ``new_position`` are the 0-based points in each sequence where the
    change applies (for an addition ``old_position`` is the insertion point
    in the old sequence and vice versa). All three are None for changes
    that do not map onto units, such as binary or style changes.
    """

    line: Optional[int] = None
    section: Optional[str] = None
    old_position: Optional[int] = None
    new_position: Optional[int] = None


@dataclass(frozen=True, slots=True)
class ChangeRecord:
    """One classified edit between the two versions."""

    kind: ChangeKind
    location: ChangeLocation
    old_content: Optional[str]
    new_content: Optional[str]
    confidence: float
    change_type: ChangeCategory
    severity: Severity
    context_before: Optional[str] = None
    context_after: Optional[str] = None

    @property
    def covers_old(self) -> bool:
        """True when this change consumes a unit of the old sequence."""
        return self.kind in ("deletion", "modification") and self.location.old_position is not None

    @property
    def covers_new(self) -> bool:
        """True when this change consumes a unit of the new sequence."""
        return self.kind in ("addition", "modification") and self.location.new_position is not None


@dataclass(frozen=True, slots=True)
class Statistics:
    """Aggregate counts derived from a list of change records."""

    total_changes: int = 0
    additions: int = 0
    deletions: int = 0
    modifications: int = 0
    characters_added: int = 0
    characters_deleted: int = 0
    lines_added: int = 0
    lines_deleted: int = 0
    words_added: int = 0
    words_deleted: int = 0


@dataclass(frozen=True)
class ComparisonMetadata:
    """How a comparison was produced."""

    algorithm: str
    options: Mapping[str, Any]
    document_type: DocumentType
    processing_time_ms: float
    compared_at: datetime
    degraded: bool = False


@dataclass(frozen=True)
class ComparisonResult:
    """Outcome of comparing two versions.

    ``old_units`` and ``new_units`` hold the compared unit values so that
    renderers can lay out unchanged content; both are empty for byte-level
    comparisons.
    """

    similarity: float
    changes: tuple[ChangeRecord, ...]
    statistics: Statistics
    metadata: ComparisonMetadata
    old_units: tuple[str, ...] = ()
    new_units: tuple[str, ...] = ()

    @property
    def similarity_percentage(self) -> int:
        """Similarity rounded to a whole percentage."""
        return int(round(self.similarity * 100))

    @property
    def has_changes(self) -> bool:
        """True when at least one change was detected."""
        return bool(self.changes)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable representation of the result."""
        return {
            "similarity": self.similarity,
            "similarity_percentage": self.similarity_percentage,
            "changes": [asdict(change) for change in self.changes],
            "statistics": asdict(self.statistics),
            "metadata": {
                "algorithm": self.metadata.algorithm,
                "options": dict(self.metadata.options),
                "document_type": self.metadata.document_type,
                "processing_time_ms": self.metadata.processing_time_ms,
                "compared_at": self.metadata.compared_at.isoformat(),
                "degraded": self.metadata.degraded,
            },
            "unit_counts": {"old": len(self.old_units), "new": len(self.new_units)},
        }


@dataclass(frozen=True)
class RenderedOutput:
    """A rendered artifact.

    HTML output carries its stylesheet in ``css`` and line totals in
    ``metadata``; Markdown, text and JSON output carry only ``content``.
    """

    format: str
    content: str
    css: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def html(self) -> str:
        """Alias of ``content`` for HTML artifacts."""
        return self.content

    def __str__(self) -> str:
        """Return the rendered content."""
        return self.content
