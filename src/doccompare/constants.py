#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the doccompare library.

This module centralizes the hardcoded values, thresholds and default
configuration constants used across the comparison engine and renderers.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Type Detection - Extension table and content sniffing thresholds
3. Comparison Behavior - Tokenization, diffing and resource limits
4. Classification - Confidence and severity thresholds
5. Rendering - Styles, themes, palettes and labels
6. Dependencies - Optional extractor packages
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

DocumentType = Literal["text", "pdf", "docx", "binary"]
Granularity = Literal["character", "word", "line", "paragraph"]
ChangeKind = Literal["addition", "deletion", "modification"]
ChangeCategory = Literal["structural", "content", "formatting", "metadata"]
Severity = Literal["minor", "moderate", "major", "critical"]
OutputFormat = Literal["html", "markdown", "json", "text"]
DiffStyle = Literal["side-by-side", "inline", "unified"]
Theme = Literal["light", "dark"]
Language = Literal["fr", "ar", "en"]

DOCUMENT_TYPES: tuple[str, ...] = ("text", "pdf", "docx", "binary")
GRANULARITIES: tuple[str, ...] = ("character", "word", "line", "paragraph")
OUTPUT_FORMATS: tuple[str, ...] = ("html", "markdown", "json", "text")
DIFF_STYLES: tuple[str, ...] = ("side-by-side", "inline", "unified")
THEMES: tuple[str, ...] = ("light", "dark")
LANGUAGES: tuple[str, ...] = ("fr", "ar", "en")

# =============================================================================
# Type Detection
# =============================================================================

MIME_PDF = "application/pdf"
MIME_DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
MIME_TEXT = "text/plain"
MIME_BINARY = "application/octet-stream"

# Extension -> (document type, MIME type, structured)
KNOWN_EXTENSIONS: dict[str, tuple[str, str, bool]] = {
    ".pdf": ("pdf", MIME_PDF, True),
    ".docx": ("docx", MIME_DOCX, True),
    ".txt": ("text", MIME_TEXT, False),
}

# MIME type -> document type, for hints that carry no usable path
KNOWN_MIME_TYPES: dict[str, str] = {
    MIME_PDF: "pdf",
    MIME_DOCX: "docx",
    MIME_TEXT: "text",
}

DEFAULT_SNIFF_SAMPLE_SIZE = 1000  # Leading bytes inspected by content sniffing
DEFAULT_TEXT_RATIO_THRESHOLD = 0.7  # Minimum share of printable bytes for text
TEXT_CONTROL_BYTES = frozenset({9, 10, 13})  # tab, newline, carriage return
PRINTABLE_ASCII_MIN = 32
PRINTABLE_ASCII_MAX = 126

# =============================================================================
# Comparison Behavior
# =============================================================================

DEFAULT_GRANULARITY: Granularity = "line"
DEFAULT_CONTEXT_LINES = 3
DEFAULT_IGNORE_WHITESPACE = False
DEFAULT_IGNORE_CASE = False

# Resource limits
DEFAULT_EXTRACTION_TIMEOUT = 5.0  # Seconds to wait for a pdf/docx extractor
DEFAULT_MAX_UNITS = 20000  # Units per side before granularity is degraded or truncated
DEFAULT_MAX_EDIT_COST = 256  # Search steps per diff region before an approximate split is taken
DEFAULT_DEGRADE_GRANULARITY = True

# Collapsing adjacent deletion/addition runs into modifications
DEFAULT_PAIR_UNEQUAL_RUNS = False

# Algorithm names recorded in ComparisonMetadata.algorithm
ALGORITHM_NAMES: dict[str, str] = {
    "text": "Myers Diff Algorithm",
    "pdf": "PDF Text Extraction + Myers Diff",
    "docx": "DOCX Structure + Text Diff",
    "binary": "Binary Byte Comparison",
}
FALLBACK_ALGORITHM_TEMPLATE = "Binary Byte Comparison (extraction fallback: {document_type})"

# Location sections
SECTION_CONTENT = "content"
SECTION_FILE_SIZE = "file_size"
SECTION_BINARY_CONTENT = "binary_content"
SECTION_STYLES = "styles"

# =============================================================================
# Classification
# =============================================================================

CONFIDENCE_INDEPENDENT_EDIT = 0.9  # Stand-alone addition or deletion
CONFIDENCE_COLLAPSED_MODIFICATION = 0.8  # Deletion+addition collapsed heuristically
CONFIDENCE_BINARY_SIZE = 1.0
CONFIDENCE_BINARY_CONTENT = 0.8
CONFIDENCE_STRUCTURE = 0.7

# Length ratio thresholds, checked in order (ratio > threshold)
SEVERITY_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (0.8, "minor"),
    (0.5, "moderate"),
    (0.2, "major"),
)
BINARY_MAJOR_SIMILARITY_THRESHOLD = 0.5

# =============================================================================
# Rendering
# =============================================================================

DEFAULT_OUTPUT_FORMAT: OutputFormat = "html"
DEFAULT_DIFF_STYLE: DiffStyle = "side-by-side"
DEFAULT_THEME: Theme = "light"
DEFAULT_LANGUAGE: Language = "en"
DEFAULT_SHOW_LINE_NUMBERS = True
DEFAULT_SHOW_CONTEXT = False
DEFAULT_JSON_INDENT = 2

RTL_LANGUAGES = frozenset({"ar"})

THEME_PALETTES: dict[str, dict[str, str]] = {
    "light": {
        "background": "#ffffff",
        "text": "#333333",
        "border": "#e1e4e8",
        "added": "#e6ffed",
        "deleted": "#ffeef0",
        "modified": "#fff5b4",
        "added_text": "#28a745",
        "deleted_text": "#d73a49",
        "modified_text": "#b08800",
    },
    "dark": {
        "background": "#1e1e1e",
        "text": "#d4d4d4",
        "border": "#3e3e3e",
        "added": "#1e3a1e",
        "deleted": "#3a1e1e",
        "modified": "#3a3a1e",
        "added_text": "#4ec9b0",
        "deleted_text": "#f48771",
        "modified_text": "#dcdcaa",
    },
}

UI_LABELS: dict[str, dict[str, str]] = {
    "en": {
        "title": "Document Comparison",
        "old_version": "Old Version",
        "new_version": "New Version",
        "similarity": "Similarity",
        "changes": "Changes",
        "added_at": "Added at line",
        "deleted_at": "Deleted at line",
        "modified_at": "Modified at line",
        "added_in": "Added in section",
        "deleted_in": "Deleted in section",
        "modified_in": "Modified in section",
        "unknown": "unknown",
        "no_changes": "No differences found.",
    },
    "fr": {
        "title": "Comparaison de documents",
        "old_version": "Ancienne version",
        "new_version": "Nouvelle version",
        "similarity": "Similarité",
        "changes": "Modifications",
        "added_at": "Ajouté à la ligne",
        "deleted_at": "Supprimé à la ligne",
        "modified_at": "Modifié à la ligne",
        "added_in": "Ajouté dans la section",
        "deleted_in": "Supprimé dans la section",
        "modified_in": "Modifié dans la section",
        "unknown": "inconnue",
        "no_changes": "Aucune différence trouvée.",
    },
    "ar": {
        "title": "مقارنة المستندات",
        "old_version": "النسخة القديمة",
        "new_version": "النسخة الجديدة",
        "similarity": "التشابه",
        "changes": "التغييرات",
        "added_at": "أضيف في السطر",
        "deleted_at": "حذف في السطر",
        "modified_at": "عدل في السطر",
        "added_in": "أضيف في القسم",
        "deleted_in": "حذف في القسم",
        "modified_in": "عدل في القسم",
        "unknown": "غير معروف",
        "no_changes": "لم يتم العثور على اختلافات.",
    },
}

# =============================================================================
# Dependencies - Optional extractor packages
# =============================================================================

PDF_MIN_PYMUPDF_VERSION = "1.26.4"
DEPS_PDF = [("pymupdf", "fitz", f">={PDF_MIN_PYMUPDF_VERSION}")]
DEPS_DOCX = [("python-docx", "docx", "")]

# =============================================================================
# CLI exit codes
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_FILE_ERROR = 2
EXIT_TYPE_MISMATCH = 3
