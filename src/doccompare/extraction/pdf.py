#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/extraction/pdf.py
"""Reference PDF extractor backed by PyMuPDF."""

from __future__ import annotations

import logging
from typing import Optional

from doccompare.constants import DEPS_PDF, DocumentType
from doccompare.exceptions import ExtractionError
from doccompare.models import ExtractedContent
from doccompare.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)


class PymupdfTextExtractor:
    """Extract plain text from PDF payloads, page by page.

    Pages are joined with a blank line so paragraph granularity never merges
    the last paragraph of one page with the first of the next.

    Parameters
    ----------
    password : str, optional
        Password for encrypted documents

    """

    def __init__(self, password: Optional[str] = None):
        """Initialize the PDF extractor."""
        self.password = password

    @requires_dependencies("pdf", DEPS_PDF)
    def extract(self, content: bytes, document_type: DocumentType = "pdf") -> ExtractedContent:
        """Extract text from a PDF payload.

        Parameters
        ----------
        content : bytes
            Raw PDF bytes
        document_type : str, default "pdf"
            Must be ``"pdf"``

        Returns
        -------
        ExtractedContent
            Page text and a structure mapping with ``page_count``

        Raises
        ------
        ExtractionError
            If the payload cannot be opened or is encrypted without a
            matching password

        """
        import fitz

        if document_type != "pdf":
            raise ExtractionError(f"PDF extractor cannot handle '{document_type}'", document_type=document_type)

        try:
            doc = fitz.open(stream=content, filetype="pdf")
        except Exception as e:
            raise ExtractionError(f"Failed to open PDF document: {e!r}", document_type="pdf", original_error=e) from e

        try:
            if doc.is_encrypted and not doc.authenticate(self.password or ""):
                raise ExtractionError("PDF document is password-protected", document_type="pdf")

            pages = [page.get_text("text").strip("\n") for page in doc]
        finally:
            doc.close()

        logger.debug(f"Extracted text from {len(pages)} PDF pages")
        return ExtractedContent(text="\n\n".join(pages), structure={"page_count": len(pages)})
