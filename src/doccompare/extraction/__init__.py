#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/extraction/__init__.py
"""Content extraction for comparable text.

Text payloads are decoded directly. PDF and DOCX payloads go through a
host-supplied :class:`TextExtractor`; the PyMuPDF and python-docx backed
extractors shipped here are optional reference implementations.
"""

from doccompare.extraction.base import CompositeExtractor, TextExtractor, decode_text
from doccompare.extraction.docx import DocxTextExtractor
from doccompare.extraction.pdf import PymupdfTextExtractor
from doccompare.extraction.runner import run_with_timeout


def default_extractor() -> CompositeExtractor:
    """Return a composite extractor using the PyMuPDF and python-docx backends.

    The backing libraries are only imported on first use, so this can be
    built even when they are not installed; extraction then fails with a
    ``DependencyError`` and the comparator falls back to bytes.
    """
    return CompositeExtractor({"pdf": PymupdfTextExtractor(), "docx": DocxTextExtractor()})


__all__ = [
    "CompositeExtractor",
    "DocxTextExtractor",
    "PymupdfTextExtractor",
    "TextExtractor",
    "decode_text",
    "default_extractor",
    "run_with_timeout",
]
