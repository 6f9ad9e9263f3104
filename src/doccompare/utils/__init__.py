#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/utils/__init__.py
"""Utility modules for the doccompare package.

This package contains escaping helpers, dependency checking and timing
decorators shared by the comparator, extractors and renderers.
"""

from doccompare.utils.escape import escape_html, escape_markdown_fence

__all__ = [
    "escape_html",
    "escape_markdown_fence",
]
