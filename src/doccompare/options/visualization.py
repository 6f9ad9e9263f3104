#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/options/visualization.py
"""Options controlling how a comparison result is rendered."""

from __future__ import annotations

from dataclasses import dataclass, field

from doccompare.constants import (
    DEFAULT_CONTEXT_LINES,
    DEFAULT_DIFF_STYLE,
    DEFAULT_LANGUAGE,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_SHOW_CONTEXT,
    DEFAULT_SHOW_LINE_NUMBERS,
    DEFAULT_THEME,
    DIFF_STYLES,
    LANGUAGES,
    OUTPUT_FORMATS,
    RTL_LANGUAGES,
    THEMES,
    DiffStyle,
    Language,
    OutputFormat,
    Theme,
)
from doccompare.options.base import CloneFrozenMixin, validate_choice, validate_non_negative_int


@dataclass(frozen=True)
class VisualizationOptions(CloneFrozenMixin):
    """Rendering options for a comparison result.

    Parameters
    ----------
    format : {"html", "markdown", "json", "text"}, default "html"
        Output artifact format
    style : {"side-by-side", "inline", "unified"}, default "side-by-side"
        HTML layout; ignored by the other formats
    show_line_numbers : bool, default True
        Emit line-number columns in side-by-side HTML
    show_context : bool, default False
        Emit unchanged context lines before each change in unified HTML
    context_lines : int, default 3
        Number of context lines emitted when ``show_context`` is set
    theme : {"light", "dark"}, default "light"
        Color palette of the generated CSS
    language : {"fr", "ar", "en"}, default "en"
        Label language; ``"ar"`` also switches the layout to right-to-left

    """

    format: OutputFormat = field(
        default=DEFAULT_OUTPUT_FORMAT,
        metadata={"help": "Output format: html, markdown, json or text", "choices": OUTPUT_FORMATS},
    )
    style: DiffStyle = field(
        default=DEFAULT_DIFF_STYLE,
        metadata={"help": "HTML layout: side-by-side, inline or unified", "choices": DIFF_STYLES},
    )
    show_line_numbers: bool = field(
        default=DEFAULT_SHOW_LINE_NUMBERS,
        metadata={"help": "Show line numbers in side-by-side HTML"},
    )
    show_context: bool = field(
        default=DEFAULT_SHOW_CONTEXT,
        metadata={"help": "Show unchanged context lines in unified HTML"},
    )
    context_lines: int = field(
        default=DEFAULT_CONTEXT_LINES,
        metadata={"help": "Context lines shown before each change", "type": int},
    )
    theme: Theme = field(
        default=DEFAULT_THEME,
        metadata={"help": "CSS palette: light or dark", "choices": THEMES},
    )
    language: Language = field(
        default=DEFAULT_LANGUAGE,
        metadata={"help": "Label language: fr, ar or en", "choices": LANGUAGES},
    )

    def __post_init__(self) -> None:
        """Validate option values."""
        validate_choice("format", self.format, OUTPUT_FORMATS)
        validate_choice("style", self.style, DIFF_STYLES)
        validate_choice("theme", self.theme, THEMES)
        validate_choice("language", self.language, LANGUAGES)
        validate_non_negative_int("context_lines", self.context_lines)

    @property
    def is_rtl(self) -> bool:
        """Return True when the selected language is written right-to-left."""
        return self.language in RTL_LANGUAGES
