#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/diff/__init__.py
"""Tokenization, alignment, classification and scoring."""

from doccompare.diff.engine import classify_severity, compute_changes
from doccompare.diff.myers import DiffOp, EditScript, edit_script, myers_opcodes
from doccompare.diff.scoring import (
    binary_changes,
    binary_similarity,
    binary_statistics,
    compute_statistics,
    text_similarity,
)
from doccompare.diff.tokenizer import normalize_text, split_units, tokenize

__all__ = [
    "DiffOp",
    "EditScript",
    "binary_changes",
    "binary_similarity",
    "binary_statistics",
    "classify_severity",
    "compute_changes",
    "compute_statistics",
    "edit_script",
    "myers_opcodes",
    "normalize_text",
    "split_units",
    "text_similarity",
    "tokenize",
]
