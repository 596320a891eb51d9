"""
Character Cursor
================

The cursor owns the raw source buffer and a one-character look-ahead.
It is the only input the translator has: there is no token stream, each
procedure pulls characters one at a time and decides on the look-ahead
alone (LL(1)).

End of input is represented by a look-ahead of ``None``. The cursor
never rewinds.

The cursor also hosts the two diagnostic primitives every procedure
relies on:

- ``fail(expected)`` raises the "expected X, found Y" error for the
  current look-ahead and never returns;
- ``expect(char)`` consumes a required literal character or fails.

Example Usage
-------------
>>> cursor = Cursor("i a")
>>> cursor.current
'i'
>>> cursor.advance()
' '
>>> cursor.skip_whitespace()
'a'
"""

from typing import NoReturn, Optional

from wasm_cradle.errors import SourceLocation
from wasm_cradle.translator.classify import is_printable, is_whitespace
from wasm_cradle.translator.errors import (
    SyntaxMismatchError,
    UnterminatedConstructError,
    InvalidCharacterError,
)


class Cursor:
    """
    Forward-only reader over an in-memory source buffer.

    Attributes:
        source: The complete source text
        filename: Source filename for error messages
    """

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

        # Index of the look-ahead within source
        self._pos = 0
        self._line = 1
        self._column = 1

    # =========================================================================
    # Look-ahead
    # =========================================================================

    @property
    def current(self) -> Optional[str]:
        """The next unconsumed character, or None at end of input."""
        if self._pos < len(self.source):
            return self.source[self._pos]
        return None

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self.source)

    def advance(self) -> Optional[str]:
        """Consume the look-ahead and return the new one."""
        char = self.current
        if char is None:
            return None

        self._pos += 1
        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return self.current

    def skip_whitespace(self) -> Optional[str]:
        """Advance past spaces; stops cleanly at end of input."""
        while is_whitespace(self.current):
            self.advance()
        return self.current

    # =========================================================================
    # Location Tracking
    # =========================================================================

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(self.filename, self._line, self._column)

    @property
    def source_line(self) -> str:
        """Text of the line holding the look-ahead, without its newline."""
        start = self.source.rfind("\n", 0, self._pos) + 1
        end = self.source.find("\n", self._pos)
        if end == -1:
            end = len(self.source)
        return self.source[start:end]

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def fail(self, expected: str) -> NoReturn:
        """
        Raise "expected X, found Y" for the current look-ahead.

        End of input raises UnterminatedConstructError and a byte outside
        printable ASCII raises InvalidCharacterError; both are
        SyntaxMismatchError subclasses.
        """
        char = self.current
        if char is None:
            raise UnterminatedConstructError(
                expected, location=self.location, source_line=self.source_line
            )
        if not is_printable(char):
            raise InvalidCharacterError(
                char, expected, location=self.location, source_line=self.source_line
            )
        raise SyntaxMismatchError(
            expected, char, location=self.location, source_line=self.source_line
        )

    def expect(self, char: str) -> str:
        """
        Consume ``char`` if it is the look-ahead; otherwise fail.

        Returns:
            The consumed character
        """
        if self.current != char:
            self.fail(f"'{char}'")
        self.advance()
        return char

    def expect_end(self) -> None:
        """Require that only spaces remain."""
        self.skip_whitespace()
        if not self.at_end:
            self.fail("end of input")
