#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/renderers/base.py
"""Helpers shared by the comparison renderers."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from doccompare.constants import SECTION_CONTENT, UI_LABELS
from doccompare.exceptions import InvalidOptionsError
from doccompare.models import ChangeRecord, ComparisonResult
from doccompare.options import VisualizationOptions

# Line kind -> CSS class
LINE_CLASSES = {
    "addition": "added",
    "deletion": "deleted",
    "modification": "modified",
}


def coerce_visualization_options(
    options: Union[VisualizationOptions, Mapping[str, Any], None],
) -> VisualizationOptions:
    """Accept visualization options as a dataclass, a plain mapping or None."""
    if options is None:
        return VisualizationOptions()
    if isinstance(options, VisualizationOptions):
        return options
    if isinstance(options, Mapping):
        try:
            return VisualizationOptions(**options)
        except TypeError as e:
            raise InvalidOptionsError("options", dict(options), message=f"Unknown visualization option: {e}") from e
    raise InvalidOptionsError(
        "options",
        options,
        message=f"options must be VisualizationOptions or a mapping, got {type(options).__name__}",
    )


def get_labels(language: str) -> Mapping[str, str]:
    """Return the UI labels for ``language``, falling back to English."""
    return UI_LABELS.get(language, UI_LABELS["en"])


def line_kinds(result: ComparisonResult) -> tuple[dict[int, str], dict[int, str]]:
    """Map unit positions on each side to the kind of change covering them.

    Returns
    -------
    tuple of dict
        ``(old_kinds, new_kinds)`` keyed by 0-based unit position. Positions
        without an entry are unchanged.

    """
    old_kinds: dict[int, str] = {}
    new_kinds: dict[int, str] = {}
    for change in result.changes:
        if change.covers_old:
            old_kinds[change.location.old_position] = change.kind  # type: ignore[index]
        if change.covers_new:
            new_kinds[change.location.new_position] = change.kind  # type: ignore[index]
    return old_kinds, new_kinds


def location_section(change: ChangeRecord) -> Optional[str]:
    """Return the section of a change that is not tied to a line, e.g. ``file_size``."""
    if change.location.line is None and change.location.section and change.location.section != SECTION_CONTENT:
        return change.location.section
    return None


def describe_location(change: ChangeRecord, labels: Mapping[str, str]) -> str:
    """Return the line number, or the section for changes not tied to a line."""
    if change.location.line is not None:
        return str(change.location.line)
    return location_section(change) or labels["unknown"]


def change_heading(change: ChangeRecord, labels: Mapping[str, str]) -> str:
    """Return the localized heading for a change, e.g. ``Added at line 4``.

    Changes located by section instead of line read ``Modified in section
    file_size``.
    """
    verb = {"addition": "added", "deletion": "deleted"}.get(change.kind, "modified")
    section = location_section(change)
    if section is not None:
        return f"{labels[verb + '_in']} {section}"
    return f"{labels[verb + '_at']} {describe_location(change, labels)}"


def count_label(count: int, unit: str = "line") -> str:
    """Pluralize a count, e.g. ``3 lines``."""
    return f"{count} {unit}{'s' if count != 1 else ''}"
