#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/renderers/json.py
"""JSON renderer for structured output.

This renderer serializes the full comparison result, including every change
record, for programmatic processing and API responses.
"""

from __future__ import annotations

import json

from doccompare.models import ComparisonResult, RenderedOutput


class JsonDiffRenderer:
    """Render a comparison result as JSON.

    Parameters
    ----------
    pretty_print : bool, default = True
        If True, format JSON with indentation
    indent : int, default = 2
        Number of spaces for indentation (if pretty_print=True)

    Examples
    --------
    Render a comparison as JSON:
        >>> from doccompare.renderers import JsonDiffRenderer
        >>> payload = JsonDiffRenderer(pretty_print=False).render(result).content

    """

    def __init__(
        self,
        pretty_print: bool = True,
        indent: int = 2,
    ):
        """Initialize the JSON renderer."""
        self.pretty_print = pretty_print
        self.indent = indent

    def render(self, result: ComparisonResult) -> RenderedOutput:
        """Render ``result`` to a JSON document.

        Parameters
        ----------
        result : ComparisonResult
            Comparison to serialize

        Returns
        -------
        RenderedOutput
            JSON text in ``content``

        """
        data = result.to_dict()

        if self.pretty_print:
            content = json.dumps(data, indent=self.indent, ensure_ascii=False)
        else:
            content = json.dumps(data, ensure_ascii=False)
        return RenderedOutput(format="json", content=content)
