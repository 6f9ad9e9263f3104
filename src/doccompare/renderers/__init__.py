#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/renderers/__init__.py
"""Renderers turning comparison results into human-readable artifacts.

Available Renderers
-------------------
- HtmlDiffRenderer: Side-by-side, inline or unified HTML with themed CSS
- MarkdownDiffRenderer: Markdown report with fenced old/new content
- TextDiffRenderer: Plain-text report, optionally ANSI-colored
- JsonDiffRenderer: Full structured result as JSON

Examples
--------
Render through the dispatcher:
    >>> from doccompare.renderers import render_comparison
    >>> rendered = render_comparison(result, {"format": "html", "style": "unified", "language": "fr"})
    >>> rendered.css is not None
    True

"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Union

from doccompare.exceptions import DocCompareError, RenderingError
from doccompare.models import ComparisonResult, RenderedOutput
from doccompare.options import VisualizationOptions
from doccompare.renderers.base import coerce_visualization_options
from doccompare.renderers.html import HtmlDiffRenderer
from doccompare.renderers.json import JsonDiffRenderer
from doccompare.renderers.markdown import MarkdownDiffRenderer
from doccompare.renderers.text import TextDiffRenderer

logger = logging.getLogger(__name__)


def render_comparison(
    result: ComparisonResult,
    options: Union[VisualizationOptions, Mapping[str, Any], None] = None,
) -> RenderedOutput:
    """Render a comparison result in the requested format.

    Parameters
    ----------
    result : ComparisonResult
        Comparison to render
    options : VisualizationOptions or mapping, optional
        Format, layout, theme and language

    Returns
    -------
    RenderedOutput
        The rendered artifact. Rendering the same result with the same
        options always produces identical output.

    Raises
    ------
    InvalidOptionsError
        If the options are invalid
    RenderingError
        If rendering fails; the result is attached to the error

    """
    options = coerce_visualization_options(options)
    logger.debug(f"Rendering comparison as {options.format} ({options.style})")

    try:
        if options.format == "html":
            return HtmlDiffRenderer(options).render(result)
        if options.format == "markdown":
            return MarkdownDiffRenderer(options.language).render(result)
        if options.format == "text":
            return TextDiffRenderer(options.language).render(result)
        return JsonDiffRenderer().render(result)
    except DocCompareError:
        raise
    except Exception as e:
        raise RenderingError(
            f"{options.format} rendering failed: {e!r}",
            result=result,
            rendering_stage=options.format,
            original_error=e,
        ) from e


__all__ = [
    "HtmlDiffRenderer",
    "JsonDiffRenderer",
    "MarkdownDiffRenderer",
    "TextDiffRenderer",
    "render_comparison",
]
