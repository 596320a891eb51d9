"""
Control-Flow Translator
=======================

Recursive-descent translator for the single-letter control-flow
language. There is one method per grammar production; each consumes its
characters from the cursor and, in the same step, appends the equivalent
instructions to the emitter. No syntax tree is built.

Grammar (EBNF)
--------------
program    ::= block 'e'
block      ::= { statement }            -- stops at 'e' | 'l' | 'u'
statement  ::= if | while | do_loop | repeat | other
if         ::= 'i' condition block [ 'l' block ] 'e'
while      ::= 'w' condition block 'e'
do_loop    ::= 'p' block 'e'
repeat     ::= 'r' block 'u' condition
condition  ::= any character            -- opaque predicate code
other      ::= any character            -- declares a local named by itself

Spaces between statements and before conditions are skipped.

Dispatch
--------
| Look-ahead   | Action                    |
|--------------|---------------------------|
| e, l, u      | end the current block     |
| i            | if                        |
| w            | while                     |
| p            | do_loop                   |
| r            | repeat                    |
| anything     | other                     |

Example
-------
>>> from wasm_cradle.translator import translate_control
>>> print(translate_control("iablcee").text)
(module
  (func $main
    (if (call $cond_a) (then
      (local $b i32)
    ) (else
      (local $c i32)
    ))
  )
  (export "main" (func $main))
)
"""

from wasm_cradle.translator.base import RecursiveTranslator
from wasm_cradle.translator.classify import (
    IF, ELSE, END, WHILE, DO_LOOP, REPEAT, UNTIL,
    is_block_terminator,
    is_printable,
)
from wasm_cradle.translator.emitter import Op, predicate


class ControlFlowTranslator(RecursiveTranslator):
    """
    Translates a control-flow program into structured loop/if instructions.

    Every construct emits its closing instruction before its method
    returns, so block nesting in the output mirrors the source exactly.
    """

    def translate(self) -> None:
        """
        Translate a complete program.

        Raises:
            TranslationError: On the first violation; nothing is recovered
        """
        self.emitter.emit_module_start()
        self.emitter.emit_function_start("main")

        self._block()
        self.cursor.expect(END)
        self.cursor.expect_end()

        self.emitter.emit_function_end("main")
        self.emitter.emit_module_end()

    # =========================================================================
    # Blocks and Statements
    # =========================================================================

    def _block(self) -> None:
        """Translate statements until a block terminator or end of input."""
        while True:
            char = self.cursor.skip_whitespace()
            if char is None or is_block_terminator(char):
                return
            self._statement(char)

    def _statement(self, char: str) -> None:
        if char == IF:
            self._if()
        elif char == WHILE:
            self._while()
        elif char == DO_LOOP:
            self._do_loop()
        elif char == REPEAT:
            self._repeat()
        else:
            self._other()

    def _if(self) -> None:
        self.cursor.expect(IF)
        code = self._condition()

        self._enter()
        self.emitter.emit(Op.IF_OPEN, predicate(code))
        self._block()

        if self.cursor.current == ELSE:
            self.cursor.advance()
            self.emitter.emit(Op.ELSE)
            self._block()

        self.cursor.expect(END)
        self.emitter.emit(Op.IF_CLOSE)
        self._leave()

    def _while(self) -> None:
        # Pre-check: the condition is tested before each pass
        self.cursor.expect(WHILE)
        code = self._condition()

        self._enter()
        self.emitter.emit(Op.WHILE_OPEN, predicate(code))
        self._block()
        self.cursor.expect(END)
        self.emitter.emit(Op.WHILE_CLOSE)
        self._leave()

    def _do_loop(self) -> None:
        self.cursor.expect(DO_LOOP)

        self._enter()
        self.emitter.emit(Op.LOOP_OPEN)
        self._block()
        self.cursor.expect(END)
        self.emitter.emit(Op.LOOP_CLOSE)
        self._leave()

    def _repeat(self) -> None:
        # Post-check: the body always runs once before the condition
        self.cursor.expect(REPEAT)

        self._enter()
        self.emitter.emit(Op.REPEAT_OPEN)
        self._block()
        self.cursor.expect(UNTIL)
        code = self._condition()
        self.emitter.emit(Op.REPEAT_CHECK, predicate(code))
        self.emitter.emit(Op.REPEAT_CLOSE)
        self._leave()

    def _other(self) -> None:
        """Declare the look-ahead character as a local."""
        char = self.cursor.current
        if not is_printable(char):
            self.cursor.fail("a statement")

        self.symbols.declare(char, self.cursor.location, self.cursor.source_line)
        self.emitter.emit(Op.LOCAL, char)
        self.cursor.advance()

    # =========================================================================
    # Conditions
    # =========================================================================

    def _condition(self) -> str:
        """Consume one condition character and return it."""
        char = self.cursor.skip_whitespace()
        if not is_printable(char):
            self.cursor.fail("a condition")
        self.cursor.advance()
        return char
