#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/renderers/text.py
"""Plain-text comparison report with optional ANSI colors."""

from __future__ import annotations

from io import StringIO

from doccompare.models import ChangeRecord, ComparisonResult, RenderedOutput
from doccompare.renderers.base import count_label, describe_location, get_labels, location_section

RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BOLD = "\033[1m"
RESET = "\033[0m"

_KIND_COLORS = {
    "addition": GREEN,
    "deletion": RED,
    "modification": YELLOW,
}


class TextDiffRenderer:
    """Render a comparison result as a plain-text report.

    Parameters
    ----------
    language : str, default "en"
        Label language for the title and headings
    use_color : bool, default False
        If True, color change headings and content with ANSI codes

    """

    def __init__(self, language: str = "en", use_color: bool = False):
        """Initialize the text renderer."""
        self.labels = get_labels(language)
        self.use_color = use_color

    def _color(self, text: str, color: str) -> str:
        return f"{color}{text}{RESET}" if self.use_color else text

    def _write_content(self, label: str, content: str, color: str, output: StringIO) -> None:
        """Write content as a fenced block, one ``|`` row per line."""
        output.write(f"   {label}:\n")
        for line in content.split("\n"):
            output.write(f"     | {self._color(line, color)}\n" if line else "     |\n")

    def _write_change(self, index: int, change: ChangeRecord, output: StringIO) -> None:
        section = location_section(change)
        where = f"- Section: {section}" if section else f"at line {describe_location(change, self.labels)}"
        heading = f"{index}. {change.kind.upper()} {where}"
        output.write(self._color(heading, _KIND_COLORS[change.kind]) + "\n")
        output.write(f"   Severity: {change.severity}\n")
        if change.old_content is not None:
            self._write_content("Old", change.old_content, RED, output)
        if change.new_content is not None:
            self._write_content("New", change.new_content, GREEN, output)
        output.write("\n")

    def render(self, result: ComparisonResult) -> RenderedOutput:
        """Render ``result`` as plain text."""
        stats = result.statistics
        output = StringIO()

        title = self.labels["title"]
        output.write(self._color(title, BOLD) + "\n")
        output.write("=" * len(title) + "\n\n")
        output.write(f"{self.labels['similarity']}: {result.similarity_percentage}%\n")
        output.write(f"Total Changes: {stats.total_changes}\n")
        output.write(f"Algorithm: {result.metadata.algorithm}\n\n")

        output.write("Statistics:\n")
        output.write(f"- Additions: {stats.additions} ({count_label(stats.lines_added)})\n")
        output.write(f"- Deletions: {stats.deletions} ({count_label(stats.lines_deleted)})\n")
        output.write(f"- Modifications: {stats.modifications}\n\n")

        output.write(f"{self.labels['changes']}:\n")
        output.write("-" * (len(self.labels["changes"]) + 1) + "\n\n")
        if not result.changes:
            output.write(f"{self.labels['no_changes']}\n")

        for index, change in enumerate(result.changes, start=1):
            self._write_change(index, change, output)

        return RenderedOutput(format="text", content=output.getvalue())
