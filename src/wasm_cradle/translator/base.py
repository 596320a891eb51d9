"""
Shared state for the recursive-descent translators.

Both translators pull characters from a Cursor, record locals in a
SymbolTable and append to an Emitter. Block nesting is never stored as
data: it is the depth of the Python call stack, which is why the depth
is bounded here instead of letting the interpreter hit its recursion
limit.
"""

from wasm_cradle.translator.cursor import Cursor
from wasm_cradle.translator.emitter import Emitter
from wasm_cradle.translator.errors import NestingDepthError
from wasm_cradle.translator.symbols import SymbolTable


DEFAULT_MAX_DEPTH = 200


class RecursiveTranslator:
    """
    Base class wiring a translator to its collaborators.

    Attributes:
        cursor: Source reader holding the look-ahead
        symbols: Locals declared in this translation unit
        emitter: Instruction sink
        max_depth: Deepest block or parenthesis nesting accepted
    """

    def __init__(
        self,
        cursor: Cursor,
        symbols: SymbolTable,
        emitter: Emitter,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.cursor = cursor
        self.symbols = symbols
        self.emitter = emitter
        self.max_depth = max_depth
        self._depth = 0

    @property
    def depth(self) -> int:
        """Current nesting depth."""
        return self._depth

    def _enter(self) -> None:
        """Open one nesting level."""
        self._depth += 1
        if self._depth > self.max_depth:
            raise NestingDepthError(
                self.max_depth,
                location=self.cursor.location,
                source_line=self.cursor.source_line,
            )

    def _leave(self) -> None:
        self._depth -= 1
