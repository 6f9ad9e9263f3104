#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/renderers/markdown.py
"""Markdown comparison report."""

from __future__ import annotations

from io import StringIO

from doccompare.models import ComparisonResult, RenderedOutput
from doccompare.renderers.base import count_label, describe_location, get_labels, location_section
from doccompare.utils.escape import escape_markdown_fence


class MarkdownDiffRenderer:
    """Render a comparison result as a Markdown report.

    The report opens with the similarity and totals, followed by one section
    per change with the old and new content in fenced code blocks.

    Examples
    --------
        >>> report = MarkdownDiffRenderer().render(result).content
        >>> report.splitlines()[0]
        '# Document Comparison'

    """

    def __init__(self, language: str = "en"):
        """Initialize the Markdown renderer."""
        self.labels = get_labels(language)

    def render(self, result: ComparisonResult) -> RenderedOutput:
        """Render ``result`` as Markdown."""
        stats = result.statistics
        output = StringIO()

        output.write(f"# {self.labels['title']}\n\n")
        output.write(f"**{self.labels['similarity']}:** {result.similarity_percentage}%\n")
        output.write(f"**Total Changes:** {stats.total_changes}\n\n")

        output.write("## Statistics\n\n")
        output.write(f"- **Additions:** {stats.additions} ({count_label(stats.lines_added)})\n")
        output.write(f"- **Deletions:** {stats.deletions} ({count_label(stats.lines_deleted)})\n")
        output.write(f"- **Modifications:** {stats.modifications}\n")
        output.write(f"- **Characters:** +{stats.characters_added} / -{stats.characters_deleted}\n")
        output.write(f"- **Words:** +{stats.words_added} / -{stats.words_deleted}\n\n")

        output.write(f"## {self.labels['changes']}\n\n")
        if not result.changes:
            output.write(f"_{self.labels['no_changes']}_\n")

        for index, change in enumerate(result.changes, start=1):
            output.write(f"### Change {index} ({change.kind})\n\n")
            section = location_section(change)
            location = f"Section: {section}" if section else f"Line {describe_location(change, self.labels)}"
            output.write(f"**Location:** {location}\n")
            output.write(f"**Severity:** {change.severity}\n")
            output.write(f"**Type:** {change.change_type}\n\n")

            if change.old_content is not None:
                output.write(f"**Old:**\n```\n{escape_markdown_fence(change.old_content)}\n```\n\n")
            if change.new_content is not None:
                output.write(f"**New:**\n```\n{escape_markdown_fence(change.new_content)}\n```\n\n")

        return RenderedOutput(format="markdown", content=output.getvalue())
