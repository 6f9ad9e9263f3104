#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/detection.py
"""Document type detection.

Classifies a byte payload as ``text``, ``pdf``, ``docx`` or ``binary`` using,
in order:

1. The storage path suffix or declared MIME type
2. Content sniffing of the leading bytes
3. A ``binary`` default
"""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Optional

from doccompare.constants import (
    DEFAULT_SNIFF_SAMPLE_SIZE,
    DEFAULT_TEXT_RATIO_THRESHOLD,
    KNOWN_EXTENSIONS,
    KNOWN_MIME_TYPES,
    MIME_BINARY,
    MIME_TEXT,
    PRINTABLE_ASCII_MAX,
    PRINTABLE_ASCII_MIN,
    TEXT_CONTROL_BYTES,
)
from doccompare.models import DocumentTypeInfo

logger = logging.getLogger(__name__)


def _info_for(document_type: str) -> DocumentTypeInfo:
    for _ext, (known_type, mime_type, structured) in KNOWN_EXTENSIONS.items():
        if known_type == document_type:
            encoding = "utf-8" if document_type == "text" else None
            return DocumentTypeInfo(document_type, mime_type, structured, encoding)  # type: ignore[arg-type]
    return DocumentTypeInfo("binary", MIME_BINARY, False)


def _detect_by_hint(path_hint: Optional[str], mime_type: Optional[str]) -> Optional[DocumentTypeInfo]:
    """Match a storage path suffix, then a declared MIME type."""
    if path_hint:
        suffix = PurePosixPath(path_hint.replace("\\", "/").lower()).suffix
        if suffix in KNOWN_EXTENSIONS:
            return _info_for(KNOWN_EXTENSIONS[suffix][0])

    if mime_type:
        normalized = mime_type.split(";", 1)[0].strip().lower()
        if normalized in KNOWN_MIME_TYPES:
            return _info_for(KNOWN_MIME_TYPES[normalized])

    return None


def printable_ratio(content: bytes, sample_size: int = DEFAULT_SNIFF_SAMPLE_SIZE) -> float:
    """Return the share of printable ASCII/whitespace bytes in the leading sample.

    Parameters
    ----------
    content : bytes
        Payload to inspect
    sample_size : int, default 1000
        Maximum number of leading bytes considered

    Returns
    -------
    float
        Ratio in ``[0, 1]``; 1.0 for an empty payload

    """
    sample = content[:sample_size]
    if not sample:
        return 1.0

    text_bytes = sum(
        1 for byte in sample if PRINTABLE_ASCII_MIN <= byte <= PRINTABLE_ASCII_MAX or byte in TEXT_CONTROL_BYTES
    )
    return text_bytes / len(sample)


def is_text_content(
    content: bytes,
    sample_size: int = DEFAULT_SNIFF_SAMPLE_SIZE,
    threshold: float = DEFAULT_TEXT_RATIO_THRESHOLD,
) -> bool:
    """Return True when at least ``threshold`` of the sampled bytes look like text."""
    return printable_ratio(content, sample_size) >= threshold


def detect_document_type(
    content: bytes,
    path_hint: Optional[str] = None,
    mime_type: Optional[str] = None,
    *,
    sample_size: int = DEFAULT_SNIFF_SAMPLE_SIZE,
    threshold: float = DEFAULT_TEXT_RATIO_THRESHOLD,
) -> DocumentTypeInfo:
    """Detect the document type of a payload.

    Parameters
    ----------
    content : bytes
        Raw payload
    path_hint : str, optional
        Storage path or filename of the version
    mime_type : str, optional
        Declared MIME type of the version
    sample_size : int, default 1000
        Leading bytes inspected by content sniffing
    threshold : float, default 0.7
        Printable byte ratio at or above which the payload is text

    Returns
    -------
    DocumentTypeInfo
        Detected type, MIME type and whether the format is structured

    Examples
    --------
        >>> detect_document_type(b"%PDF-1.7 ...", "contracts/v2.PDF").type
        'pdf'
        >>> detect_document_type(b"plain words\\n").type
        'text'

    """
    info = _detect_by_hint(path_hint, mime_type)
    if info is not None:
        logger.debug(f"Document type '{info.type}' detected from hint")
        return info

    if is_text_content(content, sample_size, threshold):
        logger.debug("Document type 'text' detected from content")
        return DocumentTypeInfo("text", MIME_TEXT, False, "utf-8")

    logger.debug("No text signature found, defaulting to binary")
    return DocumentTypeInfo("binary", MIME_BINARY, False)
