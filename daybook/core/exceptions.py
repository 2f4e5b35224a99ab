#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Daybook project.

This module defines a hierarchy of exceptions used throughout the project
to handle specific error conditions in the codec, the pipelines, and the
record store.

Exception Hierarchy:
    Exception (built-in)
    ├── ValidationError - Data validation failures
    │   └── RecordValidationError - Note/Todo/Schedule field failures
    ├── JournalParseError - Nothing recoverable in a journal document
    ├── JournalImportError - Journal file → records failures
    ├── JournalExportError - Records → journal file failures
    └── StoreError - YAML record store failures

Usage:
    from daybook.core.exceptions import JournalImportError, StoreError

    try:
        stats = import_journal(path, store)
    except JournalImportError as e:
        logger.error(f"Import failed: {e}")
"""


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Invalid date formats
    - Missing required fields
    - Type mismatches

    Examples:
        >>> raise ValidationError("Invalid date format: expected YYYY-MM-DD")
        >>> raise ValidationError("Missing required field: 'date'")
    """

    pass


class RecordValidationError(ValidationError):
    """
    Exception for record-specific validation failures.

    Raised when a Note, Todo, Schedule or TagContent cannot be built:
    - Empty note content
    - Empty todo text
    - Schedule without title or time

    Examples:
        >>> raise RecordValidationError("Todo content cannot be empty")
        >>> raise RecordValidationError("Schedule time is required")
    """

    pass


class JournalParseError(Exception):
    """
    Exception for journal documents with no recoverable data.

    The parser itself never raises; this is raised by the import
    pipeline when a document parsed cleanly but produced no records.

    Examples:
        >>> raise JournalParseError("No notes, todos or schedules found")
    """

    pass


class JournalImportError(Exception):
    """
    Exception for journal file → records failures.

    Raised when a journal document cannot be read at all:
    - File not found or not readable
    - Unsupported file extension
    - Encoding issues

    Pipeline Stage: file → parse → store

    Examples:
        >>> raise JournalImportError("Unsupported file type: .docx")
        >>> raise JournalImportError("Cannot read journal file: permission denied")
    """

    pass


class JournalExportError(Exception):
    """
    Exception for records → journal file failures.

    Raised when exporting fails:
    - Record source unavailable
    - Output directory not writable

    Pipeline Stage: store → serialize → file

    Examples:
        >>> raise JournalExportError("Cannot write export: disk full")
    """

    pass


class StoreError(Exception):
    """
    Exception for YAML record store failures.

    Raised when the store file exists but cannot be used:
    - YAML syntax errors
    - Unexpected top-level structure
    - Write failures

    Examples:
        >>> raise StoreError("Store file is not a mapping: data/daybook.yaml")
    """

    pass
