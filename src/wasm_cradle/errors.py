"""
wasm-cradle Error Base
======================

This module defines the root of the exception hierarchy for wasm-cradle.
All exceptions inherit from CradleError, allowing callers to catch every
translator-related error with a single except clause.

The translator-specific exceptions live in
:mod:`wasm_cradle.translator.errors`; this module only carries what is
shared by the whole package: the base class and source location tracking.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class CradleError(Exception):
    """
    Base exception for all wasm-cradle errors.

    All exceptions in the package inherit from this class:

        try:
            translate_control("iaee")
        except CradleError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source text for error reporting.

    The cursor produces one of these for its current look-ahead. The
    immutable (frozen) design ensures locations cannot be accidentally
    modified after an error captures them.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
