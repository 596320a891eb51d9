"""
Arithmetic/Assignment Translator
================================

Recursive-descent translator for arithmetic expressions and assignments.
Each method both recognizes its production and emits the stack
instructions for it, and also returns the value of what it recognized
when that value is known at translation time.

Grammar (EBNF)
--------------
script      ::= assignment { separator assignment } [ separator ]
separator   ::= ';' | newline
assignment  ::= identifier '=' expression
expression  ::= [ '+' | '-' ] term { ('+' | '-') term }
term        ::= factor { ('*' | '/') factor }
factor      ::= '(' expression ')' | identifier [ '(' ')' ] | number
identifier  ::= letter { letter | digit }
number      ::= digit { digit }

Spaces between tokens are skipped.

Evaluation Rules
----------------
- ``-x`` is emitted and evaluated as ``0 - x``; a leading ``+`` is a no-op
- ``*`` and ``/`` bind tighter than ``+`` and ``-``; all associate left
- ``/`` truncates toward zero: ``7/2 == 3`` and ``-7/2 == -3``
- a divisor known to be zero raises DivisionByZeroError
- literals above 2147483647 raise IntegerOverflowError
- results outside 32 bits raise IntegerOverflowError ("reject") or wrap
  in two's complement ("wrap")
- ``f()`` emits a call; its value is unknown (None), and so is any
  result computed from it

Example
-------
>>> from wasm_cradle.translator import translate_expression
>>> result = translate_expression("1+2*3")
>>> result.value
7
"""

from typing import Optional

from wasm_cradle.errors import SourceLocation
from wasm_cradle.translator.base import RecursiveTranslator, DEFAULT_MAX_DEPTH
from wasm_cradle.translator.classify import (
    is_addop,
    is_alnum,
    is_digit,
    is_letter,
    is_mulop,
)
from wasm_cradle.translator.cursor import Cursor
from wasm_cradle.translator.emitter import BINARY_OPS, Emitter, Op
from wasm_cradle.translator.errors import DivisionByZeroError, IntegerOverflowError
from wasm_cradle.translator.symbols import SymbolTable


INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

OVERFLOW_POLICIES = ("reject", "wrap")

SEPARATORS = frozenset(";\n")


def truncating_div(dividend: int, divisor: int) -> int:
    """Signed integer division rounding toward zero, like i32.div_s."""
    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        return -quotient
    return quotient


def wrap_int32(value: int) -> int:
    """Reduce ``value`` to the signed 32-bit range (two's complement)."""
    return (value - INT32_MIN) % (2 ** 32) + INT32_MIN


class ArithmeticTranslator(RecursiveTranslator):
    """
    Translates expressions and assignment scripts.

    Attributes:
        overflow: "reject" or "wrap"
    """

    def __init__(
        self,
        cursor: Cursor,
        symbols: SymbolTable,
        emitter: Emitter,
        max_depth: int = DEFAULT_MAX_DEPTH,
        overflow: str = "reject",
    ):
        if overflow not in OVERFLOW_POLICIES:
            raise ValueError(f"unknown overflow policy '{overflow}'")
        super().__init__(cursor, symbols, emitter, max_depth)
        self.overflow = overflow

    # =========================================================================
    # Entry Points
    # =========================================================================

    def translate_expression(self) -> Optional[int]:
        """
        Translate a program that is a single expression.

        The expression becomes the result of ``main``.

        Returns:
            The expression value, or None if it depends on a call
        """
        self.emitter.emit_module_start()
        self.emitter.emit_function_start("main", "i32")

        value = self._expression()
        self.cursor.expect_end()

        self.emitter.emit_function_end("main")
        self.emitter.emit_module_end()
        return value

    def translate_assignments(self) -> Optional[int]:
        """
        Translate a script of assignments.

        ``main`` returns the local assigned last.

        Returns:
            Value of the last assignment, or None if it is not known
        """
        self.emitter.emit_module_start()
        self.emitter.emit_function_start("main", "i32")

        last_name, value = self._assignment()
        while self._separator():
            if self.cursor.at_end:
                break
            last_name, value = self._assignment()
        self.cursor.expect_end()

        self.emitter.emit(Op.LOCAL_GET, last_name)
        self.emitter.emit_function_end("main")
        self.emitter.emit_module_end()
        return value

    # =========================================================================
    # Statements
    # =========================================================================

    def _separator(self) -> bool:
        """Consume a run of separators; False if none was present."""
        if self.cursor.skip_whitespace() not in SEPARATORS:
            return False
        while self.cursor.skip_whitespace() in SEPARATORS:
            self.cursor.advance()
        return True

    def _assignment(self) -> tuple[str, Optional[int]]:
        self.cursor.skip_whitespace()
        location = self.cursor.location
        name = self._identifier()

        self.cursor.skip_whitespace()
        self.cursor.expect("=")

        # The local is declared ahead of its value, but only enters the
        # table afterwards: 'x=x' still fails when x is new.
        if name not in self.symbols:
            self.emitter.emit(Op.LOCAL, name)

        value = self._expression()
        self.symbols.assign(name, value, location)
        self.emitter.emit(Op.LOCAL_SET, name)
        return name, value

    # =========================================================================
    # Expressions
    # =========================================================================

    def _expression(self) -> Optional[int]:
        char = self.cursor.skip_whitespace()

        if char == "-":
            location = self.cursor.location
            self.cursor.advance()
            self.emitter.emit(Op.CONST, 0)
            operand = self._term()
            self.emitter.emit(Op.SUB)
            value = self._apply("-", 0, operand, location)
        elif char == "+":
            self.cursor.advance()
            value = self._term()
        else:
            value = self._term()

        while is_addop(self.cursor.skip_whitespace()):
            value = self._binary(value, self._term)

        return value

    def _term(self) -> Optional[int]:
        value = self._factor()

        while is_mulop(self.cursor.skip_whitespace()):
            value = self._binary(value, self._factor)

        return value

    def _binary(self, left: Optional[int], operand) -> Optional[int]:
        """Consume an operator and its right operand, emitting the operation."""
        op = self.cursor.current
        location = self.cursor.location
        self.cursor.advance()

        right = operand()
        self.emitter.emit(BINARY_OPS[op])
        return self._apply(op, left, right, location)

    def _factor(self) -> Optional[int]:
        char = self.cursor.skip_whitespace()

        if char == "(":
            self.cursor.advance()
            self._enter()
            value = self._expression()
            self.cursor.skip_whitespace()
            self.cursor.expect(")")
            self._leave()
            return value

        if is_letter(char):
            location = self.cursor.location
            source_line = self.cursor.source_line
            name = self._identifier()

            if self.cursor.current == "(":
                self.cursor.advance()
                self.cursor.expect(")")
                self.emitter.emit(Op.CALL, name)
                return None

            binding = self.symbols.lookup(name, location, source_line)
            self.emitter.emit(Op.LOCAL_GET, name)
            return binding.value

        if is_digit(char):
            return self._number()

        self.cursor.fail("an identifier, number or '('")

    # =========================================================================
    # Lexical Elements
    # =========================================================================

    def _identifier(self) -> str:
        if not is_letter(self.cursor.current):
            self.cursor.fail("an identifier")

        chars = []
        while is_alnum(self.cursor.current):
            chars.append(self.cursor.current)
            self.cursor.advance()
        return "".join(chars)

    def _number(self) -> int:
        location = self.cursor.location
        source_line = self.cursor.source_line

        digits = []
        while is_digit(self.cursor.current):
            digits.append(self.cursor.current)
            self.cursor.advance()

        value = int("".join(digits))
        if value > INT32_MAX:
            raise IntegerOverflowError(value, location=location, source_line=source_line)

        self.emitter.emit(Op.CONST, value)
        return value

    # =========================================================================
    # Constant Evaluation
    # =========================================================================

    def _apply(
        self,
        op: str,
        left: Optional[int],
        right: Optional[int],
        location: SourceLocation,
    ) -> Optional[int]:
        if op == "/" and right == 0:
            raise DivisionByZeroError(location=location, source_line=self.cursor.source_line)
        if left is None or right is None:
            return None

        if op == "+":
            result = left + right
        elif op == "-":
            result = left - right
        elif op == "*":
            result = left * right
        else:
            result = truncating_div(left, right)

        return self._fit(result, location)

    def _fit(self, value: int, location: SourceLocation) -> int:
        if INT32_MIN <= value <= INT32_MAX:
            return value
        if self.overflow == "wrap":
            return wrap_int32(value)
        raise IntegerOverflowError(value, location=location, source_line=self.cursor.source_line)
