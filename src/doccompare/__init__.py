"""doccompare - Document version comparison and diff visualization.

doccompare compares two versions of a document and reports what changed.
Plain text is compared directly; PDF and DOCX payloads are turned into text
by a pluggable extractor first; anything else is compared byte by byte.

The comparison aligns both versions with the Myers minimum edit script at
character, word, line or paragraph granularity, classifies every edit as an
addition, deletion or modification with a severity and confidence, scores
the overall similarity and aggregates statistics. Results render to HTML
(side-by-side, inline or unified, light or dark, with right-to-left layout
for Arabic), Markdown, plain text or JSON.

Requirements
------------
- Python 3.10+
- Optional dependencies for the reference extractors (PyMuPDF, python-docx)

Examples
--------
Compare two text versions:

    >>> from doccompare import DocumentComparator
    >>> result = DocumentComparator().compare(b"a\\nb\\nc", b"a\\nX\\nb\\nc")
    >>> result.statistics.additions, result.statistics.modifications
    (1, 0)

Compare DOCX versions and render an HTML diff:

    >>> from doccompare import DocumentComparator, render_comparison
    >>> from doccompare.extraction import default_extractor
    >>> comparator = DocumentComparator(extractor=default_extractor())
    >>> result = comparator.compare(old_bytes, new_bytes, "v1.docx", "v2.docx")
    >>> rendered = render_comparison(result, {"format": "html", "style": "inline"})

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/__init__.py

import logging

from doccompare.comparator import DocumentComparator, compare_documents
from doccompare.detection import detect_document_type
from doccompare.exceptions import (
    DependencyError,
    DocCompareError,
    ExtractionError,
    InvalidOptionsError,
    RenderingError,
    TypeMismatchError,
    ValidationError,
    VersionAccessError,
)
from doccompare.extraction import CompositeExtractor, TextExtractor
from doccompare.models import (
    ChangeLocation,
    ChangeRecord,
    ComparisonMetadata,
    ComparisonResult,
    ComparisonUnit,
    DocumentTypeInfo,
    ExtractedContent,
    RenderedOutput,
    Statistics,
)
from doccompare.options import ComparatorConfig, ComparisonOptions, VisualizationOptions
from doccompare.renderers import render_comparison
from doccompare.versions import DocumentStore, VersionComparison, VersionComparisonService, VersionInfo

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Comparison
    "DocumentComparator",
    "compare_documents",
    "detect_document_type",
    "render_comparison",
    # Extraction
    "CompositeExtractor",
    "TextExtractor",
    # Versions
    "DocumentStore",
    "VersionComparison",
    "VersionComparisonService",
    "VersionInfo",
    # Options
    "ComparatorConfig",
    "ComparisonOptions",
    "VisualizationOptions",
    # Models
    "ChangeLocation",
    "ChangeRecord",
    "ComparisonMetadata",
    "ComparisonResult",
    "ComparisonUnit",
    "DocumentTypeInfo",
    "ExtractedContent",
    "RenderedOutput",
    "Statistics",
    # Exceptions
    "DependencyError",
    "DocCompareError",
    "ExtractionError",
    "InvalidOptionsError",
    "RenderingError",
    "TypeMismatchError",
    "ValidationError",
    "VersionAccessError",
]
