#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/extraction/base.py
"""Text extraction capability consumed by the comparator.

The comparator never parses pdf or docx payloads itself. The host
application supplies an object implementing :class:`TextExtractor`; the
reference extractors in :mod:`doccompare.extraction.pdf` and
:mod:`doccompare.extraction.docx` are one such implementation.
"""

from __future__ import annotations

import logging
from typing import Mapping, Protocol, runtime_checkable

from doccompare.constants import DocumentType
from doccompare.exceptions import ExtractionError
from doccompare.models import ExtractedContent

logger = logging.getLogger(__name__)


@runtime_checkable
class TextExtractor(Protocol):
    """Pluggable capability turning a structured payload into comparable text."""

    def extract(self, content: bytes, document_type: DocumentType) -> ExtractedContent:
        """Extract text (and optionally structure) from ``content``.

        Implementations may raise any exception; the comparator treats every
        failure as a reason to fall back to a byte-level comparison.
        """
        ...


def decode_text(content: bytes) -> str:
    """Decode a text payload as UTF-8, replacing undecodable bytes.

    A leading byte order mark is dropped so it never shows up as a change.
    """
    return content.decode("utf-8", errors="replace").removeprefix("\ufeff")


class CompositeExtractor:
    """Route extraction to one extractor per document type.

    Parameters
    ----------
    extractors : mapping of str to TextExtractor
        Extractor to use for each document type, e.g.
        ``{"pdf": PymupdfTextExtractor(), "docx": DocxTextExtractor()}``

    Examples
    --------
        >>> extractor = CompositeExtractor({"docx": DocxTextExtractor()})
        >>> comparator = DocumentComparator(extractor=extractor)

    """

    def __init__(self, extractors: Mapping[str, TextExtractor]):
        """Initialize the composite extractor."""
        self.extractors = dict(extractors)

    def supports(self, document_type: str) -> bool:
        """Return True when an extractor is registered for ``document_type``."""
        return document_type in self.extractors

    def extract(self, content: bytes, document_type: DocumentType) -> ExtractedContent:
        """Delegate to the extractor registered for ``document_type``.

        Raises
        ------
        ExtractionError
            If no extractor is registered for the type

        """
        extractor = self.extractors.get(document_type)
        if extractor is None:
            raise ExtractionError(f"No extractor registered for '{document_type}'", document_type=document_type)
        logger.debug(f"Extracting {document_type} content with {type(extractor).__name__}")
        return extractor.extract(content, document_type)
