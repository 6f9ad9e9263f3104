#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for document comparison and rendering.

Using frozen dataclasses provides type safety, default values, validation at
construction time and a clean API for configuring behaviour.
"""

from __future__ import annotations

from doccompare.options.base import CloneFrozenMixin
from doccompare.options.comparison import ComparatorConfig, ComparisonOptions
from doccompare.options.visualization import VisualizationOptions

__all__ = [
    "CloneFrozenMixin",
    "ComparatorConfig",
    "ComparisonOptions",
    "VisualizationOptions",
]
