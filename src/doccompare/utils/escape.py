#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/utils/escape.py
"""Text escaping utilities for rendered diff output.

Escaping is done on plain strings so renderers never depend on a browser
or DOM runtime.

"""

from __future__ import annotations

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
}


def escape_html(text: str) -> str:
    """Escape the five HTML metacharacters in text content.

    ``&`` is replaced first so the entities produced for the other
    characters are not escaped a second time.

    Parameters
    ----------
    text : str
        Text to escape

    Returns
    -------
    str
        Escaped text safe for element content and quoted attribute values

    Examples
    --------
        >>> escape_html('<a href="x">Tom & Jerry</a>')
        '&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&lt;/a&gt;'

    """
    if not text:
        return text

    result = text.replace("&", _HTML_ESCAPES["&"])
    for char in ("<", ">", '"', "'"):
        result = result.replace(char, _HTML_ESCAPES[char])
    return result


def escape_markdown_fence(text: str) -> str:
    """Break up triple backticks so content cannot close a fenced block.

    Parameters
    ----------
    text : str
        Content placed inside a fenced code block

    Returns
    -------
    str
        Content with every run of three backticks interrupted by a
        zero-width space

    """
    return text.replace("```", "`\u200b``")
