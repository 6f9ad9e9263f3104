#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/extraction/docx.py
"""Reference DOCX extractor backed by python-docx.

Paragraph and table text is emitted in body order, one paragraph per line
and one table row per line, so that line granularity lines up with the
visible document. The returned structure lists paragraph style names so the
comparator can report style-only changes.
"""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING, Any, Iterator

from doccompare.constants import DEPS_DOCX, DocumentType
from doccompare.exceptions import ExtractionError
from doccompare.models import ExtractedContent
from doccompare.utils.decorators import requires_dependencies

if TYPE_CHECKING:
    import docx.document

logger = logging.getLogger(__name__)


def _iter_block_items(document: "docx.document.Document") -> Iterator[Any]:
    """Yield Paragraph and Table objects in body order."""
    from docx.table import Table
    from docx.text.paragraph import Paragraph

    for child in document.element.body.iterchildren():
        if child.tag.endswith("}tbl"):
            yield Table(child, document)  # type: ignore[arg-type]
        elif child.tag.endswith("}p"):
            yield Paragraph(child, document)  # type: ignore[arg-type]


def _table_rows(table: Any) -> list[str]:
    """Render each table row as ``cell | cell | cell``."""
    rows = []
    for row in table.rows:
        cells = [cell.text.strip() for cell in row.cells]
        rows.append(" | ".join(cells))
    return rows


class DocxTextExtractor:
    """Extract text and paragraph structure from DOCX payloads.

    Parameters
    ----------
    include_tables : bool, default True
        Emit table rows as text lines
    skip_empty_paragraphs : bool, default True
        Drop paragraphs without visible text

    """

    def __init__(self, include_tables: bool = True, skip_empty_paragraphs: bool = True):
        """Initialize the DOCX extractor."""
        self.include_tables = include_tables
        self.skip_empty_paragraphs = skip_empty_paragraphs

    @requires_dependencies("docx", DEPS_DOCX)
    def extract(self, content: bytes, document_type: DocumentType = "docx") -> ExtractedContent:
        """Extract text and structure from a DOCX payload.

        Parameters
        ----------
        content : bytes
            Raw DOCX bytes
        document_type : str, default "docx"
            Must be ``"docx"``

        Returns
        -------
        ExtractedContent
            Text with one line per paragraph or table row, and a structure
            mapping with ``paragraphs``, ``styles`` and ``tables`` keys

        Raises
        ------
        ExtractionError
            If the payload is not a readable DOCX document

        """
        import docx

        if document_type != "docx":
            raise ExtractionError(f"DOCX extractor cannot handle '{document_type}'", document_type=document_type)

        try:
            document = docx.Document(io.BytesIO(content))
        except Exception as e:
            raise ExtractionError(f"Failed to open DOCX document: {e!r}", document_type="docx", original_error=e) from e

        lines: list[str] = []
        paragraphs: list[dict[str, str]] = []
        styles: set[str] = set()
        table_count = 0

        for block in _iter_block_items(document):
            if hasattr(block, "rows"):
                table_count += 1
                if self.include_tables:
                    lines.extend(_table_rows(block))
                continue

            text = block.text
            if self.skip_empty_paragraphs and not text.strip():
                continue
            style_name = block.style.name if block.style is not None else "Normal"
            styles.add(style_name)
            paragraphs.append({"style": style_name, "text": text})
            lines.append(text)

        logger.debug(f"Extracted {len(paragraphs)} paragraphs and {table_count} tables from DOCX")
        structure = {
            "paragraphs": paragraphs,
            "styles": sorted(styles),
            "tables": table_count,
        }
        return ExtractedContent(text="\n".join(lines), structure=structure)
