#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/extraction/runner.py
"""Bounded execution of a host-supplied extractor."""

from __future__ import annotations

import logging
import threading
from typing import Any

from doccompare.constants import DocumentType
from doccompare.exceptions import ExtractionError
from doccompare.extraction.base import TextExtractor
from doccompare.models import ExtractedContent

logger = logging.getLogger(__name__)


def run_with_timeout(
    extractor: TextExtractor,
    content: bytes,
    document_type: DocumentType,
    timeout: float,
) -> ExtractedContent:
    """Run ``extractor.extract`` in a daemon thread and wait at most ``timeout``.

    A worker that overruns is abandoned rather than joined. Being a daemon
    thread, it also does not keep the interpreter alive at exit.

    Parameters
    ----------
    extractor : TextExtractor
        Extraction capability to invoke
    content : bytes
        Raw payload
    document_type : str
        Detected document type passed to the extractor
    timeout : float
        Seconds to wait for the result

    Returns
    -------
    ExtractedContent
        The extractor's result

    Raises
    ------
    ExtractionError
        If the extractor raises, returns something other than
        ``ExtractedContent``, or does not finish in time

    """
    holder: dict[str, Any] = {}

    def _work() -> None:
        try:
            holder["result"] = extractor.extract(content, document_type)
        except BaseException as e:  # re-raised in the calling thread
            holder["error"] = e

    worker = threading.Thread(target=_work, name=f"doccompare-extract-{document_type}", daemon=True)
    worker.start()
    worker.join(timeout)

    if worker.is_alive():
        logger.debug(f"Abandoning {document_type} extraction thread after {timeout:.1f}s")
        raise ExtractionError(
            f"{document_type} extraction timed out after {timeout:.1f}s",
            document_type=document_type,
            timed_out=True,
        )

    error = holder.get("error")
    if isinstance(error, ExtractionError):
        raise error
    if isinstance(error, Exception):
        raise ExtractionError(
            f"{document_type} extraction failed: {error!r}",
            document_type=document_type,
            original_error=error,
        ) from error
    if error is not None:
        raise error

    result = holder.get("result")
    if not isinstance(result, ExtractedContent):
        raise ExtractionError(
            f"{type(extractor).__name__} returned {type(result).__name__}, expected ExtractedContent",
            document_type=document_type,
        )
    return result
