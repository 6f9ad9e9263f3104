"""Unit tests for DocumentComparator."""

import asyncio
import logging
import tracemalloc
from pathlib import Path

import pytest

from doccompare.comparator import DocumentComparator, compare_documents
from doccompare.exceptions import InvalidOptionsError, TypeMismatchError
from doccompare.options import ComparatorConfig, ComparisonOptions
from doccompare.versions import VersionInfo

BINARY_OLD = bytes(range(256))
BINARY_NEW = bytes(range(256)) + b"\x00\x01"


def _one_shared_line(side, count):
    lines = [f"{side} clause {i}" for i in range(count)]
    lines.insert(count // 2, "Shared clause")
    return "\n".join(lines)


@pytest.mark.unit
class TestTextComparison:
    """Tests for plain text comparisons."""

    def test_single_line_modification(self, comparator):
        """Test the basic modification scenario."""
        result = comparator.compare(b"line1\nline2\nline3", b"line1\nlineX\nline3")

        assert len(result.changes) == 1
        change = result.changes[0]
        assert change.kind == "modification"
        assert change.location.line == 2
        assert (change.old_content, change.new_content) == ("line2", "lineX")
        assert result.similarity == pytest.approx(2 / 3)
        assert result.statistics.modifications == 1
        assert result.metadata.document_type == "text"
        assert result.metadata.algorithm == "Myers Diff Algorithm"
        assert not result.metadata.degraded

    def test_insertion_is_not_a_cascade(self, comparator):
        """Test that inserting a line reports exactly one addition."""
        result = comparator.compare(b"a\nb\nc", b"a\nX\nb\nc")

        assert result.statistics.additions == 1
        assert result.statistics.modifications == 0
        assert result.statistics.deletions == 0
        assert result.similarity == pytest.approx(0.75)

    def test_identical_text(self, comparator):
        """Test that identical input has no changes."""
        result = comparator.compare(b"same\ntext", b"same\ntext")
        assert not result.has_changes
        assert result.similarity == 1.0
        assert result.similarity_percentage == 100

    def test_both_empty(self, comparator):
        """Test two empty payloads."""
        result = comparator.compare(b"", b"")
        assert result.similarity == 1.0
        assert result.changes == ()

    def test_against_empty(self, comparator):
        """Test that anything compared with nothing scores zero."""
        result = comparator.compare(b"abc", b"", "a.txt", "b.txt")
        assert result.similarity == 0.0
        assert [c.kind for c in result.changes] == ["deletion"]

    def test_units_are_kept_for_rendering(self, comparator):
        """Test that the compared units are part of the result."""
        result = comparator.compare(b"a\nb", b"a\nc")
        assert result.old_units == ("a", "b")
        assert result.new_units == ("a", "c")

    def test_contract_revision(self, comparator, contract_versions):
        """Test a realistic revision with a replaced and an added line."""
        old, new = contract_versions
        result = comparator.compare(old, new, "v1.txt", "v2.txt")

        assert result.statistics.deletions == 1
        assert result.statistics.additions == 2
        assert result.similarity == pytest.approx(4 / 7)

    def test_contract_revision_with_pairing(self, contract_versions):
        """Test that unequal runs collapse into a modification when configured."""
        old, new = contract_versions
        comparator = DocumentComparator(config=ComparatorConfig(pair_unequal_runs=True))

        result = comparator.compare(old, new)

        kinds = [c.kind for c in result.changes]
        assert kinds == ["modification", "addition"]
        assert result.changes[0].new_content == "The price is 120 000 DZD."
        assert result.changes[1].new_content == "Article 3: Delivery"

    def test_ignore_case(self, comparator):
        """Test case-insensitive comparison."""
        result = comparator.compare(b"Hello World", b"hello world", options={"ignore_case": True})
        assert not result.has_changes

    def test_word_granularity(self, comparator):
        """Test word-level comparison."""
        result = comparator.compare(b"the quick fox", b"the slow fox", options=ComparisonOptions(granularity="word"))

        assert len(result.changes) == 1
        assert (result.changes[0].old_content, result.changes[0].new_content) == ("quick", "slow")
        assert result.metadata.options["granularity"] == "word"

    def test_context_lines_recorded_on_changes(self, comparator):
        """Test that context is attached according to the options."""
        result = comparator.compare(b"a\nb\nc", b"a\nX\nc", options={"context_lines": 1})
        assert result.changes[0].context_before == "a"
        assert result.changes[0].context_after == "c"

    def test_byte_order_mark_is_ignored(self, comparator):
        """Test that a BOM on one side does not produce a change."""
        result = comparator.compare(b"\xef\xbb\xbfsame", b"same", "a.txt", "b.txt")
        assert not result.has_changes

    def test_to_dict_is_json_ready(self, comparator):
        """Test the dictionary form of a result."""
        data = comparator.compare(b"a\nb", b"a\nc").to_dict()

        assert data["similarity_percentage"] == 50
        assert data["changes"][0]["location"]["line"] == 2
        assert data["metadata"]["document_type"] == "text"
        assert isinstance(data["metadata"]["compared_at"], str)
        assert data["unit_counts"] == {"old": 2, "new": 2}


@pytest.mark.unit
class TestOptionValidation:
    """Tests for option handling."""

    def test_invalid_granularity_mapping(self, comparator):
        """Test that invalid options fail before processing."""
        with pytest.raises(InvalidOptionsError):
            comparator.compare(b"a", b"b", options={"granularity": "page"})

    def test_unknown_option_key(self, comparator):
        """Test that unknown option names are rejected."""
        with pytest.raises(InvalidOptionsError):
            comparator.compare(b"a", b"b", options={"colour": "red"})

    def test_wrong_options_type(self, comparator):
        """Test that options must be a dataclass or mapping."""
        with pytest.raises(InvalidOptionsError):
            comparator.compare(b"a", b"b", options=["line"])


@pytest.mark.unit
class TestTypeHandling:
    """Tests for type detection and dispatch."""

    def test_type_mismatch(self, comparator):
        """Test that different document types abort the comparison."""
        with pytest.raises(TypeMismatchError) as exc_info:
            comparator.compare(b"plain", b"%PDF-1.7", "a.txt", "b.pdf")
        assert (exc_info.value.old_type, exc_info.value.new_type) == ("text", "pdf")

    def test_identical_binary(self, comparator):
        """Test identical binary payloads."""
        result = comparator.compare(BINARY_OLD, BINARY_OLD)

        assert result.metadata.document_type == "binary"
        assert result.metadata.algorithm == "Binary Byte Comparison"
        assert result.similarity == 1.0
        assert result.changes == ()

    def test_binary_size_change(self, comparator):
        """Test binary payloads of different length."""
        result = comparator.compare(BINARY_OLD, BINARY_NEW)

        sections = [c.location.section for c in result.changes]
        assert sections == ["file_size", "binary_content"]
        assert result.changes[0].severity == "moderate"
        assert result.similarity == pytest.approx(256 / 258)
        assert result.statistics.characters_added == 2
        assert result.old_units == ()

    def test_hint_objects(self, comparator):
        """Test that version objects and paths are accepted as hints."""
        old_version = VersionInfo("v1", "doc", 1, "store/doc-v1.txt")
        info = comparator.detect(BINARY_OLD, old_version)
        assert info.type == "text"
        assert comparator.detect(b"x", Path("store/doc.docx")).type == "docx"

    def test_mime_hint_from_version_object(self, comparator):
        """Test that a version's MIME type is used when its path has no known suffix."""
        version = VersionInfo("v1", "doc", 1, "store/blob-17", "application/pdf")
        assert comparator.detect(b"", version).type == "pdf"


@pytest.mark.unit
class TestExtractionPaths:
    """Tests for pdf/docx extraction and its fallback."""

    def test_pdf_with_extractor(self, fake_extractor):
        """Test that extracted text is compared with Myers."""
        comparator = DocumentComparator(extractor=fake_extractor)

        result = comparator.compare(b"page one\npage two", b"page one\npage 2", "a.pdf", "b.pdf")

        assert result.metadata.algorithm == "PDF Text Extraction + Myers Diff"
        assert result.metadata.document_type == "pdf"
        assert len(result.changes) == 1
        assert fake_extractor.calls == ["pdf", "pdf"]

    def test_no_extractor_falls_back(self, comparator):
        """Test that a pdf without an extractor is compared by bytes."""
        result = comparator.compare(b"", b"%PDF-1.7", "a.pdf", "b.pdf")

        assert result.metadata.algorithm == "Binary Byte Comparison (extraction fallback: pdf)"
        assert result.metadata.degraded
        assert result.changes[0].location.section == "file_size"
        assert result.changes[0].severity == "critical"

    def test_failing_extractor_falls_back(self, failing_extractor, caplog):
        """Test that extraction errors are recovered."""
        comparator = DocumentComparator(extractor=failing_extractor)

        with caplog.at_level(logging.WARNING, logger="doccompare"):
            result = comparator.compare(b"%PDF-a", b"%PDF-b", "a.pdf", "b.pdf")

        assert "extraction fallback" in result.metadata.algorithm
        assert result.metadata.degraded
        assert result.metadata.document_type == "pdf"
        assert "falling back to byte comparison" in caplog.text

    def test_timeout_falls_back(self, blocking_extractor, fast_timeout_config):
        """Test that a slow extractor is abandoned."""
        comparator = DocumentComparator(extractor=blocking_extractor, config=fast_timeout_config)

        result = comparator.compare(b"old", b"new", "a.docx", "b.docx")

        assert result.metadata.algorithm == "Binary Byte Comparison (extraction fallback: docx)"
        assert result.metadata.degraded

    def test_docx_style_change(self, extractor_factory):
        """Test that a changed set of paragraph styles is reported."""
        old, new = b"Same text", b"Same  text"
        extractor = extractor_factory(
            {
                old: {"styles": ["Normal"]},
                new: {"styles": ["Normal", "Heading 1"]},
            }
        )
        comparator = DocumentComparator(extractor=extractor)

        result = comparator.compare(old, new, "a.docx", "b.docx", options={"ignore_whitespace": True})

        assert result.metadata.algorithm == "DOCX Structure + Text Diff"
        assert len(result.changes) == 1
        style_change = result.changes[0]
        assert style_change.location.section == "styles"
        assert style_change.change_type == "formatting"
        assert style_change.new_content == "Heading 1, Normal"
        assert result.similarity == 1.0

    def test_docx_without_structure(self, fake_extractor):
        """Test that no style change is reported when structure is missing."""
        comparator = DocumentComparator(extractor=fake_extractor)
        result = comparator.compare(b"x", b"x", "a.docx", "b.docx")
        assert result.changes == ()


@pytest.mark.unit
class TestUnitLimits:
    """Tests for the unit cap."""

    def test_character_granularity_degrades_to_line(self, caplog):
        """Test that oversized character tokenization retries by line."""
        comparator = DocumentComparator(config=ComparatorConfig(max_units=5))

        with caplog.at_level(logging.WARNING, logger="doccompare"):
            result = comparator.compare(b"abcdefghij", b"abcdefghiX", options={"granularity": "character"})

        assert result.metadata.degraded
        assert result.metadata.options["effective_granularity"] == "line"
        assert result.metadata.options["granularity"] == "character"
        assert len(result.changes) == 1
        assert "comparing by line instead" in caplog.text

    def test_truncation(self):
        """Test that units past the cap are not compared."""
        config = ComparatorConfig(max_units=3, degrade_granularity=False)
        comparator = DocumentComparator(config=config)

        result = comparator.compare(b"a\nb\nc\nd\ne", b"a\nb\nc\nd\nX")

        assert result.metadata.degraded
        assert len(result.old_units) == 3
        assert result.changes == ()

    def test_distant_large_inputs_stay_bounded(self, caplog):
        """Test memory and degradation for long versions sharing one line."""
        old = _one_shared_line("old", 3000)
        new = _one_shared_line("new", 3000)
        comparator = DocumentComparator()

        tracemalloc.start()
        try:
            with caplog.at_level(logging.WARNING, logger="doccompare"):
                result = comparator.compare(old.encode("utf-8"), new.encode("utf-8"))
            _current, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()

        assert peak < 64 * 1024 * 1024
        assert result.metadata.degraded
        assert "approximate edit script" in caplog.text
        assert len(result.old_units) == len(result.new_units) == 3001
        assert result.statistics.deletions + result.statistics.modifications >= 3000

    def test_unbounded_search_is_exact(self):
        """Test that disabling the edit cost limit keeps the minimum script."""
        old = "\n".join(f"line {i}" for i in range(400)).encode("utf-8")
        new = "\n".join(f"line {i}" if i % 100 else f"edited {i}" for i in range(400)).encode("utf-8")
        comparator = DocumentComparator(config=ComparatorConfig(max_edit_cost=None))

        result = comparator.compare(old, new)

        assert not result.metadata.degraded
        assert result.statistics.modifications == 4
        assert result.statistics.total_changes == 4


@pytest.mark.unit
class TestEntryPoints:
    """Tests for the async and functional entry points."""

    def test_compare_async(self, comparator):
        """Test the async wrapper."""
        result = asyncio.run(comparator.compare_async(b"a\nb", b"a\nc"))
        assert result.statistics.modifications == 1

    def test_compare_documents(self):
        """Test the one-shot helper."""
        result = compare_documents(b"one two", b"one three", options={"granularity": "word"})
        assert result.similarity == pytest.approx(0.5)
