#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/diff/tokenizer.py
"""Text normalization and splitting into comparison units."""

from __future__ import annotations

import re

from doccompare.constants import GRANULARITIES, Granularity
from doccompare.exceptions import InvalidOptionsError
from doccompare.models import ComparisonUnit

_WHITESPACE_RE = re.compile(r"\s+")
_HORIZONTAL_WHITESPACE_RE = re.compile(r"[^\S\r\n]+")
_LINE_SPLIT_RE = re.compile(r"\r?\n")
_PARAGRAPH_SPLIT_RE = re.compile(r"\r?\n\s*\r?\n")
_WORD_RE = re.compile(r"\S+")


def normalize_whitespace(text: str, preserve_lines: bool = False) -> str:
    """Collapse whitespace runs to a single space and trim.

    Parameters
    ----------
    text : str
        Text to normalize
    preserve_lines : bool, default False
        Keep line breaks and normalize each line on its own

    Returns
    -------
    str
        Normalized text

    """
    if not preserve_lines:
        return _WHITESPACE_RE.sub(" ", text).strip()

    lines = [_HORIZONTAL_WHITESPACE_RE.sub(" ", line).strip() for line in _LINE_SPLIT_RE.split(text)]
    return "\n".join(lines).strip("\n")


def normalize_text(
    text: str,
    ignore_case: bool = False,
    ignore_whitespace: bool = False,
    preserve_lines: bool = False,
) -> str:
    """Apply case and whitespace normalization before splitting.

    Parameters
    ----------
    text : str
        Raw comparable text
    ignore_case : bool, default False
        Lower-case the text
    ignore_whitespace : bool, default False
        Collapse whitespace runs and trim
    preserve_lines : bool, default False
        With ``ignore_whitespace``, keep line breaks so that line and
        paragraph splitting still sees them

    Returns
    -------
    str
        Normalized text

    """
    if ignore_case:
        text = text.lower()
    if ignore_whitespace:
        text = normalize_whitespace(text, preserve_lines=preserve_lines)
    return text


def split_units(text: str, granularity: Granularity) -> list[str]:
    """Split already-normalized text into unit values.

    Empty text yields no units for every granularity. Line splitting keeps
    empty lines, including a trailing one; paragraph splitting drops blank
    paragraphs.

    Raises
    ------
    InvalidOptionsError
        If ``granularity`` is not supported

    """
    if granularity not in GRANULARITIES:
        raise InvalidOptionsError("granularity", granularity, allowed=GRANULARITIES)

    if not text:
        return []

    if granularity == "character":
        return list(text)

    if granularity == "word":
        return _WORD_RE.findall(text)

    if granularity == "line":
        return _LINE_SPLIT_RE.split(text)

    return [paragraph for paragraph in _PARAGRAPH_SPLIT_RE.split(text) if paragraph.strip()]


def tokenize(
    text: str,
    granularity: Granularity,
    ignore_case: bool = False,
    ignore_whitespace: bool = False,
) -> list[ComparisonUnit]:
    """Normalize ``text`` and split it into positioned comparison units.

    Parameters
    ----------
    text : str
        Comparable text
    granularity : {"character", "word", "line", "paragraph"}
        Unit size
    ignore_case : bool, default False
        Lower-case before splitting
    ignore_whitespace : bool, default False
        Collapse whitespace before splitting

    Returns
    -------
    list of ComparisonUnit
        Units with 0-based positions in sequence order

    Examples
    --------
        >>> [u.value for u in tokenize("a\\n\\nb", "line")]
        ['a', '', 'b']

    """
    normalized = normalize_text(
        text,
        ignore_case=ignore_case,
        ignore_whitespace=ignore_whitespace,
        preserve_lines=granularity in ("line", "paragraph"),
    )
    return [ComparisonUnit(value, position) for position, value in enumerate(split_units(normalized, granularity))]
