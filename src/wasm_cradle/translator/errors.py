"""
Translator Error Hierarchy
==========================

This module defines the exception hierarchy for the single-pass
translator. All exceptions inherit from TranslationError, which itself
inherits from the base CradleError.

Exception Hierarchy
-------------------
TranslationError (base for all translation errors)
├── SyntaxMismatchError - look-ahead does not match what the grammar requires
│   ├── UnterminatedConstructError - end of input while a construct was open
│   └── InvalidCharacterError - byte outside the accepted character set
├── UndeclaredIdentifierError - read of a local that was never declared
├── DuplicateDeclarationError - local declared twice (strict policy only)
├── NestingDepthError - blocks nested deeper than the configured limit
└── TranslationArithmeticError - constant arithmetic failed
    ├── DivisionByZeroError
    └── IntegerOverflowError

None of these is recoverable: the translator raises on the first
violation and never resynchronizes. Whatever had already been emitted is
attached to the exception as ``partial_output`` by the orchestrating
Translator, so a caller can decide to show or discard it.

Example:
    demo.cr:1:4: error: expected 'e', found nothing
        iab
           ^
"""

from typing import Optional, List

from wasm_cradle.errors import CradleError, SourceLocation


# =============================================================================
# Base Translation Exception
# =============================================================================

class TranslationError(CradleError):
    """
    Base exception for all translation errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
        partial_output: Instructions emitted before the failure
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        self.partial_output: list = []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            demo.cr:1:3: error: undeclared identifier 'y'
                x=y
                  ^
            hint: did you mean 'x'?
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Syntax Errors
# =============================================================================

def describe_char(char: Optional[str]) -> str:
    """Render a look-ahead for an error message; None reads as 'nothing'."""
    if char is None:
        return "nothing"
    if char == "\n":
        return "newline"
    if char.isprintable():
        return f"'{char}'"
    return f"byte 0x{ord(char):02X}"


class SyntaxMismatchError(TranslationError):
    """
    The look-ahead does not match what the grammar requires.

    This is the translator's single "expected X, found Y" diagnostic;
    every literal-character and character-class expectation funnels
    through it.
    """

    def __init__(
        self,
        expected: str,
        found: Optional[str],
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected {expected}, found {describe_char(found)}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnterminatedConstructError(SyntaxMismatchError):
    """
    End of input reached while a block, condition or operand was required.

    Example:
        wa      // while loop never closed with 'e'
    """

    def __init__(
        self,
        expected: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            expected,
            None,
            location=location,
            source_line=source_line,
            hint="the input ended before the construct was closed",
        )


class InvalidCharacterError(SyntaxMismatchError):
    """
    A byte outside printable ASCII where a statement or condition was required.
    """

    def __init__(
        self,
        char: str,
        expected: str = "a printable character",
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            expected,
            char,
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Symbol Errors
# =============================================================================

class UndeclaredIdentifierError(TranslationError):
    """
    Read of a local that was never declared or assigned.

    The translator suggests similarly-named locals when any exist,
    helping to catch typos.
    """

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_identifiers: Optional[List[str]] = None,
    ):
        self.identifier = identifier
        self.similar_identifiers = similar_identifiers or []

        hint = None
        if self.similar_identifiers:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_identifiers[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"undeclared identifier '{identifier}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class DuplicateDeclarationError(TranslationError):
    """
    Local declared more than once.

    Only raised when the symbol table runs with the strict
    redeclaration policy; by default redeclaration silently succeeds.
    """

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.identifier = identifier
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{identifier}' was first declared at {original_location}"

        super().__init__(
            f"duplicate declaration of '{identifier}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


# =============================================================================
# Structural Limits
# =============================================================================

class NestingDepthError(TranslationError):
    """Blocks are nested deeper than the translator is configured to follow."""

    def __init__(
        self,
        limit: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = "raise max_depth or flatten the program",
    ):
        self.limit = limit
        super().__init__(
            f"blocks nested deeper than {limit} levels",
            location=location,
            hint=hint,
            source_line=source_line,
        )


# =============================================================================
# Arithmetic Errors
# =============================================================================

class TranslationArithmeticError(TranslationError):
    """
    Constant arithmetic failed while evaluating an expression.

    Raised only when both operands are known at translation time;
    values that come from calls are never evaluated.
    """
    pass


class DivisionByZeroError(TranslationArithmeticError):
    """Division whose divisor is known to be zero."""

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "division by zero",
            location=location,
            source_line=source_line,
        )


class IntegerOverflowError(TranslationArithmeticError):
    """
    Literal or result outside the signed 32-bit range.

    Literals are always checked; intermediate results only under the
    "reject" overflow policy. A literal is checked before a leading '-'
    applies, so -2147483648 is written as -2147483647-1.
    """

    def __init__(
        self,
        value: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.value = value
        super().__init__(
            f"integer {value} does not fit in 32 bits",
            location=location,
            hint="values must lie between -2147483648 and 2147483647; a literal is "
                 "checked before a leading '-', so write the minimum as -2147483647-1",
            source_line=source_line,
        )
