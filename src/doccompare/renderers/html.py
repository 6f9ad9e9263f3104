#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/renderers/html.py
"""HTML renderer for comparison results.

Three layouts are available. ``side-by-side`` shows both versions in full
with changed lines highlighted, ``inline`` lists one block per change, and
``unified`` prints ``-``/``+`` lines in the manner of ``git diff``. The
rendered fragment and its stylesheet are returned separately so hosts can
embed the diff in their own pages; :meth:`HtmlDiffRenderer.render_document`
wraps both into a standalone page.
"""

from __future__ import annotations

from io import StringIO
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence, Union

from doccompare.constants import THEME_PALETTES
from doccompare.models import ChangeRecord, ComparisonResult, RenderedOutput
from doccompare.options import VisualizationOptions
from doccompare.renderers.base import (
    LINE_CLASSES,
    change_heading,
    coerce_visualization_options,
    get_labels,
    line_kinds,
)
from doccompare.utils.escape import escape_html


class HtmlDiffRenderer:
    """Render comparison results as HTML.

    Parameters
    ----------
    options : VisualizationOptions or mapping, optional
        Layout, theme and language. ``show_line_numbers`` applies to the
        side-by-side layout and ``show_context``/``context_lines`` to the
        unified layout.

    Examples
    --------
    Render a comparison side by side:
        >>> from doccompare import DocumentComparator
        >>> from doccompare.renderers import HtmlDiffRenderer
        >>> result = DocumentComparator().compare(old_bytes, new_bytes)
        >>> rendered = HtmlDiffRenderer({"style": "side-by-side", "theme": "dark"}).render(result)
        >>> rendered.metadata["changed_lines"]
        1

    """

    def __init__(self, options: Union[VisualizationOptions, Mapping[str, Any], None] = None):
        """Initialize the HTML renderer."""
        self.options = coerce_visualization_options(options)
        self.labels = get_labels(self.options.language)

    def render(self, result: ComparisonResult) -> RenderedOutput:
        """Render ``result`` as an HTML fragment.

        Parameters
        ----------
        result : ComparisonResult
            Comparison to render

        Returns
        -------
        RenderedOutput
            Fragment in ``content``, stylesheet in ``css`` and line totals
            in ``metadata``

        """
        output = StringIO()

        if self.options.style == "inline":
            self._render_inline(result, output)
        elif self.options.style == "unified":
            self._render_unified(result, output)
        else:
            self._render_side_by_side(result, output)

        return RenderedOutput(
            format="html",
            content=output.getvalue(),
            css=self._get_css(),
            metadata=MappingProxyType(self._compute_metadata(result)),
        )

    def render_document(self, result: ComparisonResult) -> str:
        """Render ``result`` as a standalone HTML page with inline styles."""
        rendered = self.render(result)
        output = StringIO()
        self._write_html_prefix(output, rendered.css or "")
        output.write(rendered.content)
        self._write_html_suffix(output)
        return output.getvalue()

    def _dir_attribute(self) -> str:
        return ' dir="rtl"' if self.options.is_rtl else ""

    def _write_html_prefix(self, output: StringIO, css: str) -> None:
        """Write the static HTML prefix."""
        output.write("<!DOCTYPE html>\n")
        output.write(f'<html lang="{self.options.language}"{self._dir_attribute()}>\n')
        output.write("<head>\n")
        output.write('  <meta charset="UTF-8">\n')
        output.write('  <meta name="viewport" content="width=device-width, initial-scale=1.0">\n')
        output.write(f"  <title>{escape_html(self.labels['title'])}</title>\n")
        output.write("  <style>\n")
        output.write(css)
        output.write("  </style>\n")
        output.write("</head>\n")
        output.write("<body>\n")
        output.write(f"  <h1>{escape_html(self.labels['title'])}</h1>\n")

    def _write_html_suffix(self, output: StringIO) -> None:
        """Write the closing HTML tags."""
        output.write("</body>\n")
        output.write("</html>\n")

    def _get_css(self) -> str:
        """Get CSS styles for the selected theme."""
        colors = THEME_PALETTES[self.options.theme]
        return f"""
        .diff-container {{
            font-family: 'Consolas', 'Monaco', 'Courier New', monospace;
            font-size: 14px;
            line-height: 1.4;
            background: {colors["background"]};
            color: {colors["text"]};
            border: 1px solid {colors["border"]};
            border-radius: 6px;
            overflow: hidden;
        }}
        .diff-header {{
            background: {colors["border"]};
            padding: 10px;
            border-bottom: 1px solid {colors["border"]};
        }}
        .diff-stats span {{
            margin-inline-end: 15px;
            font-weight: bold;
        }}
        .similarity {{ color: {colors["text"]}; }}
        .additions {{ color: {colors["added_text"]}; }}
        .deletions {{ color: {colors["deleted_text"]}; }}
        .side-by-side .diff-content {{
            display: flex;
        }}
        .diff-column {{
            flex: 1;
            display: flex;
            flex-direction: column;
            min-width: 0;
        }}
        .column-header {{
            background: {colors["border"]};
            padding: 8px;
            font-weight: bold;
            text-align: center;
        }}
        .column-body {{
            display: flex;
        }}
        .line-numbers {{
            background: {colors["border"]};
            text-align: right;
            user-select: none;
            min-width: 50px;
        }}
        .line-number {{
            padding: 2px 8px;
            border-bottom: 1px solid {colors["border"]};
            color: #666;
        }}
        .content {{
            flex: 1;
            overflow-x: auto;
        }}
        .content-line {{
            padding: 2px 8px;
            border-bottom: 1px solid {colors["border"]};
            white-space: pre-wrap;
            word-break: break-all;
        }}
        .content-line.added {{
            background: {colors["added"]};
            color: {colors["added_text"]};
        }}
        .content-line.deleted {{
            background: {colors["deleted"]};
            color: {colors["deleted_text"]};
        }}
        .content-line.modified {{
            background: {colors["modified"]};
            color: {colors["modified_text"]};
        }}
        .content-line.unchanged {{
            background: {colors["background"]};
        }}
        .change-block {{
            margin: 10px 0;
            border: 1px solid {colors["border"]};
            border-radius: 4px;
        }}
        .change-header {{
            background: {colors["border"]};
            padding: 5px 10px;
            font-weight: bold;
            font-size: 12px;
        }}
        .unified .content-line.context {{
            color: #666;
        }}
        .no-changes {{
            padding: 10px;
            font-style: italic;
        }}
        .diff-container[dir="rtl"] {{
            text-align: right;
        }}
        .diff-container[dir="rtl"] .line-numbers {{
            text-align: left;
        }}
        @media (max-width: 768px) {{
            .side-by-side .diff-content {{
                flex-direction: column;
            }}
        }}
        """

    def _open_container(self, layout: str, output: StringIO) -> None:
        output.write(f'<div class="diff-container {layout}"{self._dir_attribute()}>\n')

    def _render_stats(self, result: ComparisonResult, output: StringIO, *, file_info: bool = False) -> None:
        """Render the similarity and change totals header."""
        labels = self.labels
        stats = result.statistics
        output.write('  <div class="diff-header">\n')
        output.write('    <div class="diff-stats">\n')
        output.write(
            f'      <span class="similarity">{escape_html(labels["similarity"])}: '
            f"{result.similarity_percentage}%</span>\n"
        )
        output.write(f'      <span class="changes">{escape_html(labels["changes"])}: {stats.total_changes}</span>\n')
        if file_info:
            output.write(f'      <span class="file-info">--- {escape_html(labels["old_version"])}</span>\n')
            output.write(f'      <span class="file-info">+++ {escape_html(labels["new_version"])}</span>\n')
        else:
            output.write(f'      <span class="additions">+{stats.lines_added}</span>\n')
            output.write(f'      <span class="deletions">-{stats.lines_deleted}</span>\n')
        output.write("    </div>\n")
        output.write("  </div>\n")

    def _render_change_block(self, change: ChangeRecord, output: StringIO, indent: str = "    ") -> None:
        """Render one change as a block with a localized heading."""
        block_class = change.kind
        output.write(f'{indent}<div class="change-block {block_class}">\n')
        output.write(f'{indent}  <div class="change-header">{escape_html(change_heading(change, self.labels))}</div>\n')
        if change.old_content is not None:
            output.write(f'{indent}  <div class="content-line deleted">{escape_html(change.old_content)}</div>\n')
        if change.new_content is not None:
            output.write(f'{indent}  <div class="content-line added">{escape_html(change.new_content)}</div>\n')
        output.write(f"{indent}</div>\n")

    def _render_no_changes(self, output: StringIO) -> None:
        output.write(f'    <p class="no-changes">{escape_html(self.labels["no_changes"])}</p>\n')

    def _render_column(
        self,
        title: str,
        column_class: str,
        lines: Sequence[str],
        kinds: Mapping[int, str],
        output: StringIO,
    ) -> None:
        """Render one side of the side-by-side layout."""
        output.write(f'    <div class="diff-column {column_class}">\n')
        output.write(f'      <div class="column-header">{escape_html(title)}</div>\n')
        output.write('      <div class="column-body">\n')

        if self.options.show_line_numbers:
            output.write('        <div class="line-numbers">\n')
            for number in range(1, len(lines) + 1):
                output.write(f'          <div class="line-number">{number}</div>\n')
            output.write("        </div>\n")

        output.write('        <div class="content">\n')
        for position, line in enumerate(lines):
            kind = kinds.get(position)
            css_class = LINE_CLASSES[kind] if kind else "unchanged"
            text = escape_html(line) if line else "&nbsp;"
            output.write(f'          <div class="content-line {css_class}">{text}</div>\n')
        output.write("        </div>\n")

        output.write("      </div>\n")
        output.write("    </div>\n")

    def _render_side_by_side(self, result: ComparisonResult, output: StringIO) -> None:
        """Render both versions in full, one column each."""
        self._open_container("side-by-side", output)
        self._render_stats(result, output)
        output.write('  <div class="diff-content">\n')

        unit_changes = [c for c in result.changes if c.covers_old or c.covers_new]
        other_changes = [c for c in result.changes if not (c.covers_old or c.covers_new)]

        if result.old_units or result.new_units or not result.changes:
            old_kinds, new_kinds = line_kinds(result)
            self._render_column(self.labels["old_version"], "old-version", result.old_units, old_kinds, output)
            self._render_column(self.labels["new_version"], "new-version", result.new_units, new_kinds, output)
        else:
            other_changes = list(result.changes)

        output.write("  </div>\n")

        if other_changes:
            output.write('  <div class="diff-notes">\n')
            for change in other_changes:
                self._render_change_block(change, output)
            output.write("  </div>\n")
        elif not unit_changes:
            self._render_no_changes(output)

        output.write("</div>\n")

    def _render_inline(self, result: ComparisonResult, output: StringIO) -> None:
        """Render one block per change, in edit-script order."""
        self._open_container("inline", output)
        self._render_stats(result, output)
        output.write('  <div class="diff-content">\n')

        if not result.changes:
            self._render_no_changes(output)
        for change in result.changes:
            self._render_change_block(change, output)

        output.write("  </div>\n")
        output.write("</div>\n")

    def _render_unified(self, result: ComparisonResult, output: StringIO) -> None:
        """Render ``-``/``+`` lines with optional preceding context."""
        self._open_container("unified", output)
        self._render_stats(result, output, file_info=True)
        output.write('  <div class="diff-content">\n')

        context = self.options.context_lines if self.options.show_context else 0
        cursor = 0
        notes: list[ChangeRecord] = []

        if not result.changes:
            self._render_no_changes(output)

        for change in result.changes:
            position: Optional[int] = change.location.old_position
            if position is None:
                notes.append(change)
                continue

            if context:
                for index in range(max(cursor, position - context), min(position, len(result.old_units))):
                    output.write(
                        f'    <div class="content-line context"> {escape_html(result.old_units[index])}</div>\n'
                    )

            if change.kind != "addition" and change.old_content is not None:
                output.write(f'    <div class="content-line deleted">-{escape_html(change.old_content)}</div>\n')
            if change.kind != "deletion" and change.new_content is not None:
                output.write(f'    <div class="content-line added">+{escape_html(change.new_content)}</div>\n')

            cursor = max(cursor, position + (1 if change.covers_old else 0))

        for change in notes:
            self._render_change_block(change, output)

        output.write("  </div>\n")
        output.write("</div>\n")

    def _compute_metadata(self, result: ComparisonResult) -> dict[str, int]:
        """Compute line totals for the rendered artifact."""
        stats = result.statistics
        return {
            "total_lines": max(len(result.old_units), len(result.new_units)),
            "changed_lines": stats.total_changes,
            "added_lines": stats.lines_added,
            "deleted_lines": stats.lines_deleted,
        }
