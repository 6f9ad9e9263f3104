#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/versions.py
"""Comparison of stored document versions.

The host application owns version storage; it exposes it through the
:class:`DocumentStore` protocol. :class:`VersionComparisonService` fetches
two versions, checks that they belong to the same document, orders them by
version number and hands the payloads to a :class:`DocumentComparator`.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

from doccompare.comparator import DocumentComparator
from doccompare.exceptions import RenderingError, VersionAccessError
from doccompare.models import ComparisonResult, RenderedOutput
from doccompare.options import ComparisonOptions, VisualizationOptions
from doccompare.renderers import render_comparison

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VersionInfo:
    """A stored version of a document.

    ``storage_path`` and ``mime_type`` double as type-detection hints when
    the version is passed to :meth:`DocumentComparator.compare`.
    """

    version_id: str
    document_id: str
    version_number: int
    storage_path: str
    mime_type: Optional[str] = None


@runtime_checkable
class DocumentStore(Protocol):
    """Read access to stored document versions."""

    def fetch_version(self, version_id: str) -> VersionInfo:
        """Return the metadata of a version."""
        ...

    def fetch_version_content(self, version_id: str) -> bytes:
        """Return the raw payload of a version."""
        ...


@dataclass(frozen=True)
class VersionComparison:
    """Two versions ordered by version number and their comparison."""

    old_version: VersionInfo
    new_version: VersionInfo
    result: ComparisonResult


class VersionComparisonService:
    """Compare and visualize versions held in a :class:`DocumentStore`.

    Parameters
    ----------
    store : DocumentStore
        Source of version metadata and payloads
    comparator : DocumentComparator, optional
        Comparator to use; a default one is built when omitted

    Examples
    --------
        >>> service = VersionComparisonService(store, DocumentComparator(extractor=default_extractor()))
        >>> rendered = service.generate_version_diff("v1", "v2", {"style": "unified"})

    """

    def __init__(self, store: DocumentStore, comparator: Optional[DocumentComparator] = None):
        """Initialize the service."""
        self.store = store
        self.comparator = comparator or DocumentComparator()

    def _fetch(self, version_id: str) -> tuple[VersionInfo, bytes]:
        try:
            version = self.store.fetch_version(version_id)
            content = self.store.fetch_version_content(version_id)
        except VersionAccessError:
            raise
        except Exception as e:
            raise VersionAccessError(
                f"Could not load version '{version_id}': {e!r}", version_id=version_id, original_error=e
            ) from e
        return version, content

    def compare_versions(
        self,
        version_id_1: str,
        version_id_2: str,
        options: Union[ComparisonOptions, Mapping[str, Any], None] = None,
    ) -> VersionComparison:
        """Compare two versions of the same document.

        The lower version number is always treated as the old version,
        whatever the argument order.

        Raises
        ------
        VersionAccessError
            If a version cannot be loaded or the versions belong to
            different documents

        """
        first, first_content = self._fetch(version_id_1)
        second, second_content = self._fetch(version_id_2)

        if first.document_id != second.document_id:
            raise VersionAccessError(
                f"Cannot compare versions from different documents "
                f"('{first.document_id}' and '{second.document_id}')",
                version_id=version_id_2,
            )

        if second.version_number < first.version_number:
            first, second = second, first
            first_content, second_content = second_content, first_content

        logger.info(
            f"Comparing document {first.document_id} version {first.version_number} "
            f"with version {second.version_number}"
        )
        result = self.comparator.compare(first_content, second_content, first, second, options)
        return VersionComparison(old_version=first, new_version=second, result=result)

    def build_visualization(self, result: ComparisonResult) -> dict[str, Any]:
        """Summarize a result for dashboards and API responses.

        Returns
        -------
        dict
            ``summary`` with the similarity percentage, total changes and a
            per-kind breakdown, followed by the change list, statistics and
            metadata

        """
        statistics = result.statistics
        data = result.to_dict()
        return {
            "summary": {
                "similarity_percentage": result.similarity_percentage,
                "total_changes": statistics.total_changes,
                "change_breakdown": {
                    "additions": statistics.additions,
                    "deletions": statistics.deletions,
                    "modifications": statistics.modifications,
                },
            },
            "changes": data["changes"],
            "statistics": asdict(statistics),
            "metadata": data["metadata"],
        }

    def generate_version_diff(
        self,
        version_id_1: str,
        version_id_2: str,
        visualization_options: Union[VisualizationOptions, Mapping[str, Any], None] = None,
        comparison_options: Union[ComparisonOptions, Mapping[str, Any], None] = None,
    ) -> RenderedOutput:
        """Compare two versions and render the result.

        Comparison defaults to line granularity with three context lines.

        Raises
        ------
        VersionAccessError
            If the versions cannot be compared
        RenderingError
            If rendering fails; the comparison result is attached

        """
        if comparison_options is None:
            comparison_options = ComparisonOptions(granularity="line", context_lines=3)

        comparison = self.compare_versions(version_id_1, version_id_2, comparison_options)
        try:
            return render_comparison(comparison.result, visualization_options)
        except RenderingError:
            logger.warning(f"Rendering diff of {version_id_1} and {version_id_2} failed")
            raise
