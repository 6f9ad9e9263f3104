#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the doccompare library.

This module defines specialized exception classes for the error conditions
that can occur while comparing document versions and rendering the result.

Exception Hierarchy
-------------------
- DocCompareError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (unknown granularity, format, style, ...)

  - TypeMismatchError (old/new versions resolve to different types)

  - ExtractionError (pdf/docx text extraction failure or timeout)

  - RenderingError (output generation failures, carries the result)

  - VersionAccessError (document store could not supply a version)

  - DependencyError (missing/incompatible optional packages)

Only ``ExtractionError`` is recovered internally: the comparator falls back
to a byte-level comparison and records the degradation in the result
metadata. Every other error is surfaced to the caller.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from doccompare.models import ComparisonResult


class DocCompareError(Exception):
    """Base exception class for all doccompare-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(DocCompareError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when a comparison or visualization option is invalid.

    Raised before any processing starts, for example for an unknown
    granularity, output format, HTML style, theme or language, or for a
    negative number of context lines.

    Parameters
    ----------
    parameter_name : str
        Name of the offending option
    parameter_value : any
        The rejected value
    allowed : sequence of str, optional
        Accepted values, included in the generated message
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        parameter_name: str,
        parameter_value: Any,
        allowed: tuple[str, ...] | list[str] | None = None,
        message: str | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = f"Invalid value for '{parameter_name}': {parameter_value!r}"
            if allowed:
                message += f". Must be one of: {', '.join(allowed)}"
        super().__init__(message, parameter_name=parameter_name, parameter_value=parameter_value)
        self.allowed = tuple(allowed) if allowed else None


class TypeMismatchError(DocCompareError):
    """Exception raised when two versions resolve to different document types.

    Comparing a ``text`` version with a ``pdf`` version has no meaningful
    alignment, so the comparison is aborted instead of silently degraded.

    Parameters
    ----------
    old_type : str
        Detected type of the old version
    new_type : str
        Detected type of the new version

    """

    def __init__(self, old_type: str, new_type: str):
        """Initialize the type mismatch error."""
        super().__init__(f"Cannot compare different document types: {old_type} vs {new_type}")
        self.old_type = old_type
        self.new_type = new_type


class ExtractionError(DocCompareError):
    """Exception raised when text extraction from a pdf/docx payload fails.

    Parameters
    ----------
    message : str
        Description of the extraction failure
    document_type : str, optional
        Document type the extractor was asked to handle
    timed_out : bool, default False
        True when the extractor exceeded its time budget
    original_error : Exception, optional
        The underlying parser exception

    """

    def __init__(
        self,
        message: str,
        document_type: str | None = None,
        timed_out: bool = False,
        original_error: Exception | None = None,
    ):
        """Initialize the extraction error."""
        super().__init__(message, original_error)
        self.document_type = document_type
        self.timed_out = timed_out


class RenderingError(DocCompareError):
    """Exception raised when a comparison result cannot be rendered.

    The comparison result is attached so the caller keeps the computed
    changes even though no artifact could be produced.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    result : ComparisonResult, optional
        The comparison result that was being rendered
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(
        self,
        message: str,
        result: ComparisonResult | None = None,
        rendering_stage: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.result = result
        self.rendering_stage = rendering_stage


class VersionAccessError(DocCompareError):
    """Exception raised when versions cannot be fetched or compared together.

    Parameters
    ----------
    message : str
        Description of the failure
    version_id : str, optional
        Identifier of the offending version
    original_error : Exception, optional
        The exception raised by the document store

    """

    def __init__(self, message: str, version_id: str | None = None, original_error: Exception | None = None):
        """Initialize the version access error."""
        super().__init__(message, original_error)
        self.version_id = version_id


class DependencyError(DocCompareError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    converter_name : str
        Name of the extractor requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_import_error : ImportError, optional
        The first import error encountered

    """

    def __init__(
        self,
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        self.original_import_error = original_import_error
        if message is None:
            message_parts = []
            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{converter_name.upper()} extraction requires the following packages: {pkg_list}")
            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{converter_name.upper()} extraction has version mismatches: {mismatch_str}")
            packages = [name for name, _spec in missing_packages] + [name for name, _r, _i in version_mismatches]
            if packages:
                message_parts.append(f"Install with: pip install --upgrade {' '.join(packages)}")
            message = ". ".join(message_parts) if message_parts else f"Missing dependencies for {converter_name}"

        super().__init__(message, original_error=original_import_error)
        self.converter_name = converter_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
