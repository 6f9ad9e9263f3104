#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/cli.py
"""Command line entry point for comparing two document versions.

The command reads two payloads, compares them with a comparator using the
PyMuPDF/python-docx reference extractors, and prints or writes the rendered
result. It is a thin wrapper over the library API.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from doccompare.comparator import DocumentComparator
from doccompare.constants import (
    DEFAULT_CONTEXT_LINES,
    DEFAULT_EXTRACTION_TIMEOUT,
    DIFF_STYLES,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_TYPE_MISMATCH,
    GRANULARITIES,
    LANGUAGES,
    OUTPUT_FORMATS,
    THEMES,
)
from doccompare.exceptions import DocCompareError, TypeMismatchError
from doccompare.extraction import default_extractor
from doccompare.logging_utils import configure_logging
from doccompare.models import ComparisonResult
from doccompare.options import ComparatorConfig, ComparisonOptions, VisualizationOptions
from doccompare.renderers import HtmlDiffRenderer, TextDiffRenderer, render_comparison

logger = logging.getLogger(__name__)


def _validate_context_lines(value: str) -> int:
    """Validate context lines is a non-negative integer.

    Raises
    ------
    argparse.ArgumentTypeError
        If value is not a non-negative integer

    """
    try:
        ivalue = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"context lines must be an integer, got '{value}'") from e

    if ivalue < 0:
        raise argparse.ArgumentTypeError(f"context lines must be non-negative, got {ivalue}")

    return ivalue


def _validate_timeout(value: str) -> float:
    """Validate the extraction timeout is a positive number."""
    try:
        fvalue = float(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"timeout must be a number, got '{value}'") from e

    if fvalue <= 0:
        raise argparse.ArgumentTypeError(f"timeout must be positive, got {fvalue}")

    return fvalue


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``doccompare`` command."""
    parser = argparse.ArgumentParser(
        prog="doccompare",
        description="Compare two versions of a document (text, PDF, DOCX or binary) and render the differences",
    )

    parser.add_argument("old", help="Old version of the document (use '-' for stdin)")
    parser.add_argument("new", help="New version of the document (use '-' for stdin)")

    # Output options
    parser.add_argument(
        "--format",
        "-f",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--style",
        choices=DIFF_STYLES,
        default="side-by-side",
        help="HTML layout (default: side-by-side)",
    )
    parser.add_argument("--output", "-o", help="Write the rendered diff to file (default: stdout)")
    parser.add_argument("--theme", choices=THEMES, default="light", help="HTML color theme (default: light)")
    parser.add_argument("--language", choices=LANGUAGES, default="en", help="Label language (default: en)")
    parser.add_argument(
        "--no-line-numbers",
        dest="show_line_numbers",
        action="store_false",
        default=True,
        help="Hide line numbers in side-by-side HTML",
    )
    parser.add_argument(
        "--show-context",
        action="store_true",
        help="Show unchanged context lines in unified HTML",
    )
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Colorize text output: auto (default, if terminal), always, never",
    )

    # Comparison options
    parser.add_argument(
        "--granularity",
        choices=GRANULARITIES,
        default="line",
        help="Comparison unit (default: line)",
    )
    parser.add_argument("--ignore-whitespace", "-w", action="store_true", help="Ignore whitespace changes")
    parser.add_argument("--ignore-case", "-i", action="store_true", help="Ignore letter case")
    parser.add_argument(
        "--context",
        "-C",
        type=_validate_context_lines,
        default=DEFAULT_CONTEXT_LINES,
        help=f"Number of context lines (default: {DEFAULT_CONTEXT_LINES})",
    )
    parser.add_argument(
        "--timeout",
        type=_validate_timeout,
        default=DEFAULT_EXTRACTION_TIMEOUT,
        help=f"Seconds allowed for PDF/DOCX text extraction (default: {DEFAULT_EXTRACTION_TIMEOUT})",
    )

    # Logging options
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output (--log-level DEBUG)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING). Overrides --verbose if both are specified.",
    )
    parser.add_argument("--log-file", metavar="PATH", help="Write log messages to file as well")
    parser.add_argument("--trace", action="store_true", help="Verbose logging with timestamps and logger names")

    return parser


def _setup_logging(parsed: argparse.Namespace) -> None:
    """Configure logging from the parsed arguments."""
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed.trace:
        log_level = logging.DEBUG
    elif parsed.verbose and parsed.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed.log_level.upper())

    configure_logging(log_level, log_file=parsed.log_file, trace_mode=parsed.trace)


def _read_source(source: str) -> tuple[Optional[bytes], Optional[str]]:
    """Read a payload from a path or stdin.

    Returns
    -------
    tuple
        ``(content, hint)``; content is None when the source cannot be read

    """
    if source == "-":
        data = sys.stdin.buffer.read()
        if not data:
            print("Error: No data received from stdin", file=sys.stderr)
            return None, None
        return data, None

    path = Path(source)
    if not path.is_file():
        print(f"Error: Source file not found: {source}", file=sys.stderr)
        return None, None
    try:
        return path.read_bytes(), str(path)
    except OSError as e:
        print(f"Error: Cannot read {source}: {e}", file=sys.stderr)
        return None, None


def _render(result: ComparisonResult, parsed: argparse.Namespace, options: VisualizationOptions) -> str:
    """Render the result for the terminal or an output file."""
    if options.format == "html":
        return HtmlDiffRenderer(options).render_document(result)

    if options.format == "text":
        use_color = parsed.color == "always" or (parsed.color == "auto" and not parsed.output and sys.stdout.isatty())
        return TextDiffRenderer(options.language, use_color=use_color).render(result).content

    return render_comparison(result, options).content


def main(argv: Optional[list[str]] = None) -> int:
    """Run the ``doccompare`` command.

    Parameters
    ----------
    argv : list of str, optional
        Command line arguments (defaults to ``sys.argv[1:]``)

    Returns
    -------
    int
        0 on success, 1 on error, 2 when a file cannot be read and 3 when
        the two versions are different document types

    """
    parser = create_parser()
    try:
        parsed = parser.parse_args(argv)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else EXIT_SUCCESS

    _setup_logging(parsed)

    if parsed.old == "-" and parsed.new == "-":
        print("Error: Cannot read both versions from stdin", file=sys.stderr)
        return EXIT_FILE_ERROR

    old_content, old_hint = _read_source(parsed.old)
    if old_content is None:
        return EXIT_FILE_ERROR
    new_content, new_hint = _read_source(parsed.new)
    if new_content is None:
        return EXIT_FILE_ERROR

    try:
        comparison_options = ComparisonOptions(
            ignore_whitespace=parsed.ignore_whitespace,
            ignore_case=parsed.ignore_case,
            granularity=parsed.granularity,
            context_lines=parsed.context,
        )
        visualization_options = VisualizationOptions(
            format=parsed.format,
            style=parsed.style,
            show_line_numbers=parsed.show_line_numbers,
            show_context=parsed.show_context,
            context_lines=parsed.context,
            theme=parsed.theme,
            language=parsed.language,
        )
        comparator = DocumentComparator(
            extractor=default_extractor(),
            config=ComparatorConfig(extraction_timeout=parsed.timeout),
        )

        result = comparator.compare(old_content, new_content, old_hint, new_hint, comparison_options)
        if not result.has_changes:
            print("No differences found.", file=sys.stderr)

        output = _render(result, parsed, visualization_options)
    except TypeMismatchError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_TYPE_MISMATCH
    except DocCompareError as e:
        print(f"Error comparing documents: {e}", file=sys.stderr)
        return EXIT_ERROR

    if parsed.output:
        output_path = Path(parsed.output)
        try:
            output_path.write_text(output, encoding="utf-8")
        except OSError as e:
            print(f"Error: Cannot write {output_path}: {e}", file=sys.stderr)
            return EXIT_FILE_ERROR
        print(f"Diff written to: {output_path}", file=sys.stderr)
    else:
        print(output)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
