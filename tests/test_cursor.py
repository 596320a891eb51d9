# =============================================================================
# test_cursor.py - Character Cursor and Classifier Unit Tests
# =============================================================================
# Tests for the one-character look-ahead reader and the character-class
# predicates the translators call inline.
#
# Test coverage includes:
#   - Look-ahead, advance and end of input
#   - Whitespace skipping (spaces only)
#   - Line/column tracking and source line extraction
#   - expect() / fail() diagnostics and their error classes
#   - Classifier predicates, including None for end of input
# =============================================================================

import pytest
from wasm_cradle.translator.cursor import Cursor
from wasm_cradle.translator import classify
from wasm_cradle.translator.errors import (
    SyntaxMismatchError,
    UnterminatedConstructError,
    InvalidCharacterError,
)


# =============================================================================
# Look-ahead Tests
# =============================================================================

class TestLookahead:
    """Test reading characters one at a time."""

    def test_empty_source_is_at_end(self):
        """An empty buffer starts at end of input."""
        cursor = Cursor("")
        assert cursor.current is None
        assert cursor.at_end

    def test_current_does_not_consume(self):
        cursor = Cursor("ab")
        assert cursor.current == "a"
        assert cursor.current == "a"

    def test_advance_returns_new_lookahead(self):
        cursor = Cursor("ab")
        assert cursor.advance() == "b"
        assert cursor.advance() is None
        assert cursor.at_end

    def test_advance_past_end_stays_at_end(self):
        """Advancing at end of input is harmless."""
        cursor = Cursor("a")
        cursor.advance()
        assert cursor.advance() is None
        assert cursor.current is None


class TestWhitespace:
    """Test space skipping."""

    def test_skips_spaces(self):
        cursor = Cursor("   x")
        assert cursor.skip_whitespace() == "x"

    def test_stops_cleanly_at_end(self):
        """Trailing spaces run into end of input without error."""
        cursor = Cursor("   ")
        assert cursor.skip_whitespace() is None
        assert cursor.at_end

    def test_newline_is_not_skipped(self):
        """Only the space character counts as whitespace."""
        cursor = Cursor(" \nx")
        assert cursor.skip_whitespace() == "\n"

    def test_no_whitespace_is_noop(self):
        cursor = Cursor("x ")
        assert cursor.skip_whitespace() == "x"


# =============================================================================
# Location Tests
# =============================================================================

class TestLocation:
    """Test line/column tracking for diagnostics."""

    def test_initial_location(self):
        cursor = Cursor("abc", "demo.cr")
        location = cursor.location
        assert (location.filename, location.line, location.column) == ("demo.cr", 1, 1)

    def test_column_advances(self):
        cursor = Cursor("abc")
        cursor.advance()
        cursor.advance()
        assert cursor.location.column == 3

    def test_newline_starts_next_line(self):
        cursor = Cursor("ab\ncd")
        for _ in range(4):
            cursor.advance()
        assert cursor.current == "d"
        assert cursor.location.line == 2
        assert cursor.location.column == 2

    def test_source_line(self):
        cursor = Cursor("x=1\ny=2")
        for _ in range(5):
            cursor.advance()
        assert cursor.source_line == "y=2"

    def test_location_format(self):
        cursor = Cursor("a", "demo.cr")
        assert str(cursor.location) == "demo.cr:1:1"


# =============================================================================
# Diagnostics Tests
# =============================================================================

class TestDiagnostics:
    """Test expect() and fail()."""

    def test_expect_match_consumes(self):
        cursor = Cursor("=5")
        assert cursor.expect("=") == "="
        assert cursor.current == "5"

    def test_expect_mismatch(self):
        """A wrong character reports what was expected and what was found."""
        cursor = Cursor("x")
        with pytest.raises(SyntaxMismatchError) as exc_info:
            cursor.expect("e")
        assert exc_info.value.expected == "'e'"
        assert exc_info.value.found == "x"
        assert "expected 'e', found 'x'" in str(exc_info.value)

    def test_expect_at_end(self):
        """End of input reads as 'nothing'."""
        cursor = Cursor("")
        with pytest.raises(UnterminatedConstructError) as exc_info:
            cursor.expect("e")
        assert "expected 'e', found nothing" in str(exc_info.value)

    def test_fail_on_control_byte(self):
        cursor = Cursor("\x01")
        with pytest.raises(InvalidCharacterError) as exc_info:
            cursor.fail("a statement")
        assert "0x01" in str(exc_info.value)

    def test_unterminated_is_syntax_mismatch(self):
        """All three failures share one base class."""
        assert issubclass(UnterminatedConstructError, SyntaxMismatchError)
        assert issubclass(InvalidCharacterError, SyntaxMismatchError)

    def test_expect_end_allows_trailing_spaces(self):
        cursor = Cursor("   ")
        cursor.expect_end()

    def test_expect_end_rejects_text(self):
        cursor = Cursor(" x")
        with pytest.raises(SyntaxMismatchError, match="expected end of input"):
            cursor.expect_end()

    def test_error_shows_caret(self):
        """The message shows the source line with a caret under the column."""
        cursor = Cursor("abc", "demo.cr")
        cursor.advance()
        with pytest.raises(SyntaxMismatchError) as exc_info:
            cursor.expect("e")
        lines = str(exc_info.value).splitlines()
        assert lines[0] == "demo.cr:1:2: error: expected 'e', found 'b'"
        assert lines[1] == "    abc"
        assert lines[2] == "     ^"


# =============================================================================
# Classifier Tests
# =============================================================================

class TestClassifier:
    """Test the character-class predicates."""

    def test_digits(self):
        assert all(classify.is_digit(c) for c in "0123456789")
        assert not classify.is_digit("a")

    def test_letters(self):
        assert classify.is_letter("a")
        assert classify.is_letter("Z")
        assert not classify.is_letter("1")
        assert not classify.is_letter("_")

    def test_whitespace(self):
        assert classify.is_whitespace(" ")
        assert not classify.is_whitespace("\t")

    def test_block_terminators(self):
        assert all(classify.is_block_terminator(c) for c in "elu")
        assert not classify.is_block_terminator("i")

    def test_operators(self):
        assert classify.is_addop("+") and classify.is_addop("-")
        assert classify.is_mulop("*") and classify.is_mulop("/")
        assert not classify.is_addop("*")

    def test_printable(self):
        assert classify.is_printable("~")
        assert classify.is_printable(" ")
        assert not classify.is_printable("\n")
        assert not classify.is_printable("\x7f")

    def test_none_is_never_classified(self):
        """End of input matches no character class."""
        predicates = [
            classify.is_digit,
            classify.is_letter,
            classify.is_alnum,
            classify.is_whitespace,
            classify.is_block_terminator,
            classify.is_addop,
            classify.is_mulop,
            classify.is_printable,
        ]
        for predicate in predicates:
            assert not predicate(None)
