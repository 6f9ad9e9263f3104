"""Unit tests for the HTML diff renderer."""

import pytest

from doccompare.comparator import DocumentComparator
from doccompare.renderers import HtmlDiffRenderer

BINARY_PAYLOAD = bytes(range(256))


@pytest.fixture
def modified_result():
    """Comparison with one modified line in three."""
    return DocumentComparator().compare(b"a\nb\nc", b"a\nX\nc")


@pytest.fixture
def identical_result():
    """Comparison without changes."""
    return DocumentComparator().compare(b"same", b"same")


@pytest.mark.unit
class TestSideBySide:
    """Tests for the side-by-side layout."""

    def test_structure(self, modified_result):
        """Test both columns with highlighted and unchanged lines."""
        content = HtmlDiffRenderer().render(modified_result).content

        assert '<div class="diff-container side-by-side">' in content
        assert content.count('<div class="line-number">') == 6
        assert content.count("content-line modified") == 2
        assert content.count("content-line unchanged") == 4
        assert "Old Version" in content
        assert "New Version" in content
        assert "Similarity: 67%" in content

    def test_without_line_numbers(self, modified_result):
        """Test that line numbers can be hidden."""
        content = HtmlDiffRenderer({"show_line_numbers": False}).render(modified_result).content
        assert "line-number" not in content

    def test_empty_line_placeholder(self):
        """Test that empty lines keep their height."""
        result = DocumentComparator().compare(b"a\n\nb", b"a\n\nc")
        content = HtmlDiffRenderer().render(result).content
        assert '<div class="content-line unchanged">&nbsp;</div>' in content

    def test_metadata(self, modified_result):
        """Test the line totals."""
        metadata = HtmlDiffRenderer().render(modified_result).metadata
        assert dict(metadata) == {"total_lines": 3, "changed_lines": 1, "added_lines": 0, "deleted_lines": 0}

    def test_binary_changes_listed_as_notes(self):
        """Test that changes without units are rendered as blocks."""
        result = DocumentComparator().compare(BINARY_PAYLOAD, BINARY_PAYLOAD + b"\x00")
        content = HtmlDiffRenderer().render(result).content

        assert '<div class="diff-notes">' in content
        assert "file_size" in content
        assert "Modified in section file_size" in content
        assert "Modified at line file_size" not in content

    def test_localized_section_heading(self):
        """Test the French heading for a change located by section."""
        result = DocumentComparator().compare(BINARY_PAYLOAD, BINARY_PAYLOAD + b"\x00")
        content = HtmlDiffRenderer({"language": "fr"}).render(result).content
        assert "Modifié dans la section binary_content" in content

    def test_no_changes(self, identical_result):
        """Test the empty-diff message."""
        content = HtmlDiffRenderer().render(identical_result).content
        assert '<p class="no-changes">No differences found.</p>' in content


@pytest.mark.unit
class TestInline:
    """Tests for the inline layout."""

    def test_change_blocks(self, modified_result):
        """Test one block per change with a localized heading."""
        content = HtmlDiffRenderer({"style": "inline"}).render(modified_result).content

        assert '<div class="diff-container inline">' in content
        assert '<div class="change-block modification">' in content
        assert "Modified at line 2" in content
        assert '<div class="content-line deleted">b</div>' in content
        assert '<div class="content-line added">X</div>' in content

    def test_french_labels(self, modified_result):
        """Test French headings."""
        content = HtmlDiffRenderer({"style": "inline", "language": "fr"}).render(modified_result).content
        assert "Modifié à la ligne 2" in content
        assert "Similarité" in content

    def test_addition_heading(self):
        """Test the heading of an addition."""
        result = DocumentComparator().compare(b"a\nb", b"a\nb\nc")
        content = HtmlDiffRenderer({"style": "inline"}).render(result).content
        assert "Added at line 3" in content


@pytest.mark.unit
class TestUnified:
    """Tests for the unified layout."""

    def test_minus_plus_lines(self, modified_result):
        """Test git-style removed and added lines."""
        content = HtmlDiffRenderer({"style": "unified"}).render(modified_result).content

        assert '<div class="diff-container unified">' in content
        assert '<div class="content-line deleted">-b</div>' in content
        assert '<div class="content-line added">+X</div>' in content
        assert "content-line context" not in content
        assert "--- Old Version" in content

    def test_context_lines(self, modified_result):
        """Test that preceding unchanged lines are shown on request."""
        options = {"style": "unified", "show_context": True, "context_lines": 1}
        content = HtmlDiffRenderer(options).render(modified_result).content
        assert '<div class="content-line context"> a</div>' in content

    def test_context_not_repeated(self):
        """Test that context lines are not emitted twice for adjacent changes."""
        result = DocumentComparator().compare(b"a\nb\nc\nd", b"a\nB\nc\nD")
        options = {"style": "unified", "show_context": True, "context_lines": 2}
        content = HtmlDiffRenderer(options).render(result).content

        assert content.count('<div class="content-line context"> a</div>') == 1
        assert content.count('<div class="content-line context"> c</div>') == 1


@pytest.mark.unit
class TestThemesAndLanguages:
    """Tests for CSS and right-to-left output."""

    def test_light_and_dark_palettes(self, modified_result):
        """Test that the theme selects the palette."""
        light = HtmlDiffRenderer({"theme": "light"}).render(modified_result).css
        dark = HtmlDiffRenderer({"theme": "dark"}).render(modified_result).css

        assert "#ffffff" in light
        assert "#1e1e1e" in dark
        assert "#1e1e1e" not in light

    def test_arabic_is_right_to_left(self, modified_result):
        """Test the dir attribute and Arabic labels."""
        content = HtmlDiffRenderer({"language": "ar"}).render(modified_result).content
        assert 'dir="rtl"' in content
        assert "التشابه" in content

    def test_rtl_rules_in_css(self, modified_result):
        """Test that the stylesheet handles right-to-left containers."""
        css = HtmlDiffRenderer().render(modified_result).css
        assert '.diff-container[dir="rtl"]' in css

    def test_standalone_document(self, modified_result):
        """Test the full page wrapper."""
        page = HtmlDiffRenderer({"language": "ar"}).render_document(modified_result)

        assert page.startswith("<!DOCTYPE html>")
        assert '<html lang="ar" dir="rtl">' in page
        assert "<style>" in page
        assert page.rstrip().endswith("</html>")


@pytest.mark.unit
class TestEscaping:
    """Tests for HTML escaping of document content."""

    def test_markup_is_escaped(self):
        """Test that document content cannot inject markup."""
        result = DocumentComparator().compare(b"<b>x</b>\n<script>1</script>", b"<b>y</b>\n<script>1</script>")

        for style in ("side-by-side", "inline", "unified"):
            content = HtmlDiffRenderer({"style": style}).render(result).content
            assert "<b>" not in content
            assert "<script>" not in content
            assert "&lt;b&gt;" in content

    def test_rendering_is_deterministic(self, modified_result):
        """Test that rendering twice gives identical output."""
        renderer = HtmlDiffRenderer({"style": "unified"})
        assert renderer.render(modified_result) == renderer.render(modified_result)
