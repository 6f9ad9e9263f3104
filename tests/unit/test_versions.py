"""Unit tests for the version comparison service."""

import logging

import pytest

from doccompare.comparator import DocumentComparator
from doccompare.exceptions import RenderingError, VersionAccessError
from doccompare.models import RenderedOutput
from doccompare.versions import DocumentStore, VersionComparisonService, VersionInfo


class InMemoryStore:
    """Document store backed by dictionaries."""

    def __init__(self):
        self.versions = {}
        self.contents = {}

    def add(self, version, content):
        self.versions[version.version_id] = version
        self.contents[version.version_id] = content

    def fetch_version(self, version_id):
        return self.versions[version_id]

    def fetch_version_content(self, version_id):
        return self.contents[version_id]


@pytest.fixture
def store(contract_versions):
    """Store holding two versions of one contract and one unrelated version."""
    old, new = contract_versions
    store = InMemoryStore()
    store.add(VersionInfo("v1", "contract-7", 1, "contracts/7/v1.txt", "text/plain"), old)
    store.add(VersionInfo("v2", "contract-7", 2, "contracts/7/v2.txt", "text/plain"), new)
    store.add(VersionInfo("other", "lease-3", 1, "leases/3/v1.txt"), b"lease")
    return store


@pytest.fixture
def service(store):
    """Service over the in-memory store."""
    return VersionComparisonService(store)


@pytest.mark.unit
class TestCompareVersions:
    """Tests for compare_versions method."""

    def test_store_satisfies_protocol(self, store):
        """Test the runtime protocol check."""
        assert isinstance(store, DocumentStore)

    def test_compare_in_order(self, service):
        """Test a comparison of consecutive versions."""
        comparison = service.compare_versions("v1", "v2")

        assert comparison.old_version.version_id == "v1"
        assert comparison.new_version.version_id == "v2"
        assert comparison.result.statistics.total_changes == 3
        assert comparison.result.metadata.document_type == "text"

    def test_argument_order_does_not_matter(self, service):
        """Test that the lower version number is always the old version."""
        forward = service.compare_versions("v1", "v2")
        backward = service.compare_versions("v2", "v1")

        assert backward.old_version.version_id == "v1"
        assert [c.kind for c in backward.result.changes] == [c.kind for c in forward.result.changes]
        assert backward.result.similarity == forward.result.similarity

    def test_different_documents(self, service):
        """Test that versions of different documents are rejected."""
        with pytest.raises(VersionAccessError, match="different documents"):
            service.compare_versions("v1", "other")

    def test_missing_version(self, service):
        """Test that store failures are wrapped."""
        with pytest.raises(VersionAccessError) as exc_info:
            service.compare_versions("v1", "v9")
        assert exc_info.value.version_id == "v9"
        assert isinstance(exc_info.value.original_error, KeyError)

    def test_custom_comparator(self, store):
        """Test that the injected comparator is used."""
        comparator = DocumentComparator()
        service = VersionComparisonService(store, comparator)
        assert service.comparator is comparator

    def test_options_forwarded(self, service):
        """Test that comparison options reach the comparator."""
        comparison = service.compare_versions("v1", "v2", {"granularity": "word"})
        assert comparison.result.metadata.options["granularity"] == "word"


@pytest.mark.unit
class TestBuildVisualization:
    """Tests for build_visualization method."""

    def test_summary(self, service):
        """Test the summary block."""
        result = service.compare_versions("v1", "v2").result
        data = service.build_visualization(result)

        assert data["summary"] == {
            "similarity_percentage": 57,
            "total_changes": 3,
            "change_breakdown": {"additions": 2, "deletions": 1, "modifications": 0},
        }
        assert len(data["changes"]) == 3
        assert data["statistics"]["additions"] == 2
        assert data["metadata"]["algorithm"] == "Myers Diff Algorithm"


@pytest.mark.unit
class TestGenerateVersionDiff:
    """Tests for generate_version_diff method."""

    def test_default_html(self, service):
        """Test the default rendering."""
        rendered = service.generate_version_diff("v1", "v2")

        assert isinstance(rendered, RenderedOutput)
        assert rendered.format == "html"
        assert "Article 3: Delivery" in rendered.content

    def test_default_context(self, service):
        """Test that comparisons default to three context lines."""
        rendered = service.generate_version_diff("v1", "v2", {"format": "json"})
        assert '"context_lines": 3' in rendered.content

    def test_markdown_in_french(self, service):
        """Test visualization options."""
        rendered = service.generate_version_diff("v1", "v2", {"format": "markdown", "language": "fr"})
        assert rendered.content.startswith("# Comparaison de documents")

    def test_rendering_failure_is_logged(self, service, monkeypatch, caplog):
        """Test that rendering errors propagate with the result attached."""

        def broken(result, options=None):
            raise RenderingError("boom", result=result, rendering_stage="html")

        monkeypatch.setattr("doccompare.versions.render_comparison", broken)

        with caplog.at_level(logging.WARNING, logger="doccompare"):
            with pytest.raises(RenderingError) as exc_info:
                service.generate_version_diff("v1", "v2")

        assert exc_info.value.result is not None
        assert "Rendering diff of v1 and v2 failed" in caplog.text
