#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/comparator.py
"""Comparison orchestration.

A :class:`DocumentComparator` is an explicit, caller-constructed value that
holds its configuration and the injected text extractor. For each pair of
payloads it runs::

    Detecting -> Extracting -> Tokenizing -> Diffing -> Scoring -> Done

Binary payloads skip straight to a byte-level diff, and a failed or
timed-out extraction drops the comparison to the same byte-level diff
instead of failing. The only fatal outcomes are invalid options and a
document type mismatch between the two versions.
"""

from __future__ import annotations

import asyncio
import logging
import os
import time
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Union

from doccompare.constants import (
    ALGORITHM_NAMES,
    CONFIDENCE_STRUCTURE,
    FALLBACK_ALGORITHM_TEMPLATE,
    SECTION_STYLES,
    DocumentType,
    Granularity,
)
from doccompare.detection import detect_document_type
from doccompare.diff.engine import compute_changes
from doccompare.diff.myers import edit_script
from doccompare.diff.scoring import (
    binary_changes,
    binary_similarity,
    binary_statistics,
    compute_statistics,
    text_similarity,
)
from doccompare.diff.tokenizer import tokenize
from doccompare.exceptions import ExtractionError, InvalidOptionsError, TypeMismatchError
from doccompare.extraction.base import TextExtractor, decode_text
from doccompare.extraction.runner import run_with_timeout
from doccompare.models import (
    ChangeLocation,
    ChangeRecord,
    ComparisonMetadata,
    ComparisonResult,
    ComparisonUnit,
    DocumentTypeInfo,
    ExtractedContent,
)
from doccompare.options import ComparatorConfig, ComparisonOptions
from doccompare.utils.decorators import debug_timer

logger = logging.getLogger(__name__)

# A hint is a path, an object exposing ``storage_path`` (and optionally
# ``mime_type``) such as VersionInfo, or nothing.
VersionHint = Union[str, "os.PathLike[str]", Any, None]


def _resolve_hint(hint: VersionHint) -> tuple[Optional[str], Optional[str]]:
    """Return ``(path, mime_type)`` from a version hint."""
    if hint is None:
        return None, None
    if isinstance(hint, (str, os.PathLike)):
        return os.fspath(hint), None
    path = getattr(hint, "storage_path", None)
    mime_type = getattr(hint, "mime_type", None)
    return (os.fspath(path) if path is not None else None), mime_type


def _coerce_options(options: Union[ComparisonOptions, Mapping[str, Any], None]) -> ComparisonOptions:
    """Accept options as a dataclass, a plain mapping or None."""
    if options is None:
        return ComparisonOptions()
    if isinstance(options, ComparisonOptions):
        return options
    if isinstance(options, Mapping):
        try:
            return ComparisonOptions(**options)
        except TypeError as e:
            raise InvalidOptionsError("options", dict(options), message=f"Unknown comparison option: {e}") from e
    raise InvalidOptionsError(
        "options", options, message=f"options must be ComparisonOptions or a mapping, got {type(options).__name__}"
    )


def _style_change(old: ExtractedContent, new: ExtractedContent) -> Optional[ChangeRecord]:
    """Report a difference between the paragraph style sets of two DOCX versions."""
    if not old.structure or not new.structure:
        return None
    if "styles" not in old.structure or "styles" not in new.structure:
        return None

    old_styles = sorted(set(old.structure["styles"]))
    new_styles = sorted(set(new.structure["styles"]))
    if old_styles == new_styles:
        return None

    return ChangeRecord(
        kind="modification",
        location=ChangeLocation(section=SECTION_STYLES),
        old_content=", ".join(old_styles),
        new_content=", ".join(new_styles),
        confidence=CONFIDENCE_STRUCTURE,
        change_type="formatting",
        severity="minor",
    )


class DocumentComparator:
    """Compare two versions of a document.

    Parameters
    ----------
    extractor : TextExtractor, optional
        Capability used to turn pdf/docx payloads into text. Without one,
        pdf and docx payloads are compared byte by byte.
    config : ComparatorConfig, optional
        Timeouts, unit limits and detection thresholds

    Examples
    --------
    Compare two plain text versions:

        >>> comparator = DocumentComparator()
        >>> result = comparator.compare(b"line1\\nline2\\nline3", b"line1\\nlineX\\nline3")
        >>> result.statistics.modifications
        1

    Compare DOCX files with the python-docx backed extractor:

        >>> from doccompare.extraction import default_extractor
        >>> comparator = DocumentComparator(extractor=default_extractor())
        >>> comparator.compare(old_bytes, new_bytes, "v1.docx", "v2.docx")

    """

    def __init__(self, extractor: Optional[TextExtractor] = None, config: Optional[ComparatorConfig] = None):
        """Initialize the comparator."""
        self.extractor = extractor
        self.config = config or ComparatorConfig()

    def detect(self, content: bytes, hint: VersionHint = None) -> DocumentTypeInfo:
        """Detect the document type of ``content`` using the configured thresholds."""
        path, mime_type = _resolve_hint(hint)
        return detect_document_type(
            content,
            path,
            mime_type,
            sample_size=self.config.sniff_sample_size,
            threshold=self.config.text_threshold,
        )

    def compare(
        self,
        old_content: bytes,
        new_content: bytes,
        old_hint: VersionHint = None,
        new_hint: VersionHint = None,
        options: Union[ComparisonOptions, Mapping[str, Any], None] = None,
    ) -> ComparisonResult:
        """Compare two payloads.

        Parameters
        ----------
        old_content : bytes
            Payload of the old version
        new_content : bytes
            Payload of the new version
        old_hint : str, path-like or version object, optional
            Where the old version is stored; its extension (and MIME type,
            when available) drives type detection
        new_hint : str, path-like or version object, optional
            Same for the new version
        options : ComparisonOptions or mapping, optional
            Per-call comparison options

        Returns
        -------
        ComparisonResult
            Similarity, change records, statistics and metadata

        Raises
        ------
        InvalidOptionsError
            If the options are invalid; nothing is processed
        TypeMismatchError
            If the two versions are detected as different document types

        """
        options = _coerce_options(options)
        started = time.perf_counter()

        with debug_timer(logger, "Type detection"):
            old_info = self.detect(old_content, old_hint)
            new_info = self.detect(new_content, new_hint)
        if old_info.type != new_info.type:
            raise TypeMismatchError(old_info.type, new_info.type)

        document_type = old_info.type
        logger.debug(f"Comparing {document_type} documents ({len(old_content)} -> {len(new_content)} bytes)")

        if document_type == "binary":
            return self._compare_bytes(
                old_content, new_content, options, document_type, ALGORITHM_NAMES["binary"], started, degraded=False
            )

        if document_type == "text":
            old_extracted = ExtractedContent(decode_text(old_content))
            new_extracted = ExtractedContent(decode_text(new_content))
        else:
            try:
                old_extracted, new_extracted = self._extract_pair(old_content, new_content, document_type)
            except ExtractionError as e:
                logger.warning(f"{document_type} extraction failed, falling back to byte comparison: {e}")
                return self._compare_bytes(
                    old_content,
                    new_content,
                    options,
                    document_type,
                    FALLBACK_ALGORITHM_TEMPLATE.format(document_type=document_type),
                    started,
                    degraded=True,
                )

        return self._compare_text(old_extracted, new_extracted, options, document_type, started)

    async def compare_async(
        self,
        old_content: bytes,
        new_content: bytes,
        old_hint: VersionHint = None,
        new_hint: VersionHint = None,
        options: Union[ComparisonOptions, Mapping[str, Any], None] = None,
    ) -> ComparisonResult:
        """Run :meth:`compare` in a worker thread for async hosts."""
        return await asyncio.to_thread(self.compare, old_content, new_content, old_hint, new_hint, options)

    def _extract_pair(
        self, old_content: bytes, new_content: bytes, document_type: DocumentType
    ) -> tuple[ExtractedContent, ExtractedContent]:
        if self.extractor is None:
            raise ExtractionError(f"No extractor configured for {document_type} documents", document_type=document_type)

        timeout = self.config.extraction_timeout
        with debug_timer(logger, f"Extracting {document_type} text"):
            old_extracted = run_with_timeout(self.extractor, old_content, document_type, timeout)
            new_extracted = run_with_timeout(self.extractor, new_content, document_type, timeout)
        return old_extracted, new_extracted

    def _tokenize_pair(
        self, old_text: str, new_text: str, options: ComparisonOptions
    ) -> tuple[list[ComparisonUnit], list[ComparisonUnit], Granularity, bool]:
        """Tokenize both sides, degrading granularity and truncating at ``max_units``."""
        limit = self.config.max_units
        granularity = options.granularity

        def split(text: str, level: Granularity) -> list[ComparisonUnit]:
            return tokenize(text, level, ignore_case=options.ignore_case, ignore_whitespace=options.ignore_whitespace)

        old_units = split(old_text, granularity)
        new_units = split(new_text, granularity)
        degraded = False

        if max(len(old_units), len(new_units)) > limit and granularity in ("character", "word"):
            if self.config.degrade_granularity:
                logger.warning(
                    f"{granularity} tokenization produced {max(len(old_units), len(new_units))} units "
                    f"(limit {limit}), comparing by line instead"
                )
                granularity = "line"
                old_units = split(old_text, granularity)
                new_units = split(new_text, granularity)
                degraded = True

        if max(len(old_units), len(new_units)) > limit:
            logger.warning(
                f"Unit count {max(len(old_units), len(new_units))} exceeds limit {limit}, "
                f"comparing only the first {limit} {granularity} units"
            )
            old_units = old_units[:limit]
            new_units = new_units[:limit]
            degraded = True

        return old_units, new_units, granularity, degraded

    def _compare_text(
        self,
        old: ExtractedContent,
        new: ExtractedContent,
        options: ComparisonOptions,
        document_type: DocumentType,
        started: float,
    ) -> ComparisonResult:
        with debug_timer(logger, "Tokenizing"):
            old_units, new_units, granularity, degraded = self._tokenize_pair(old.text, new.text, options)

        with debug_timer(logger, f"Diffing ({granularity})"):
            script = edit_script(
                [unit.value for unit in old_units],
                [unit.value for unit in new_units],
                max_cost=self.config.max_edit_cost,
            )
            if not script.exact:
                logger.warning(
                    f"Edit search exceeded {self.config.max_edit_cost} steps in at least one region, "
                    "reporting an approximate edit script"
                )
                degraded = True
            changes = compute_changes(
                old_units,
                new_units,
                context_lines=options.context_lines,
                granularity=granularity,
                pair_unequal_runs=self.config.pair_unequal_runs,
                ops=script.ops,
            )

        similarity = text_similarity(len(old_units), len(new_units), changes)

        if document_type == "docx":
            style_change = _style_change(old, new)
            if style_change is not None:
                changes.append(style_change)

        recorded_options = options.to_dict()
        if granularity != options.granularity:
            recorded_options["effective_granularity"] = granularity

        metadata = ComparisonMetadata(
            algorithm=ALGORITHM_NAMES[document_type],
            options=recorded_options,
            document_type=document_type,
            processing_time_ms=(time.perf_counter() - started) * 1000,
            compared_at=datetime.now(timezone.utc),
            degraded=degraded,
        )
        return ComparisonResult(
            similarity=similarity,
            changes=tuple(changes),
            statistics=compute_statistics(changes),
            metadata=metadata,
            old_units=tuple(unit.value for unit in old_units),
            new_units=tuple(unit.value for unit in new_units),
        )

    def _compare_bytes(
        self,
        old_content: bytes,
        new_content: bytes,
        options: ComparisonOptions,
        document_type: DocumentType,
        algorithm: str,
        started: float,
        degraded: bool,
    ) -> ComparisonResult:
        with debug_timer(logger, "Byte comparison"):
            similarity = binary_similarity(old_content, new_content)
            changes = binary_changes(old_content, new_content, similarity)

        metadata = ComparisonMetadata(
            algorithm=algorithm,
            options=options.to_dict(),
            document_type=document_type,
            processing_time_ms=(time.perf_counter() - started) * 1000,
            compared_at=datetime.now(timezone.utc),
            degraded=degraded,
        )
        return ComparisonResult(
            similarity=similarity,
            changes=tuple(changes),
            statistics=binary_statistics(old_content, new_content, changes),
            metadata=metadata,
        )


def compare_documents(
    old_content: bytes,
    new_content: bytes,
    old_hint: VersionHint = None,
    new_hint: VersionHint = None,
    options: Union[ComparisonOptions, Mapping[str, Any], None] = None,
    *,
    extractor: Optional[TextExtractor] = None,
    config: Optional[ComparatorConfig] = None,
) -> ComparisonResult:
    """Compare two payloads with a comparator built for this call.

    Shorthand for ``DocumentComparator(extractor, config).compare(...)``.
    """
    return DocumentComparator(extractor=extractor, config=config).compare(
        old_content, new_content, old_hint, new_hint, options
    )
