"""
Single-Pass Translator
======================

This package implements a one-character-token, recursive-descent
translator that turns a minimal imperative notation into stack-machine
text spelled like WebAssembly.

There is no lexer pass and no syntax tree: each grammar production is a
method that pulls characters from the cursor and appends instructions to
the emitter in the same step.

Pipeline
--------
    Source → Cursor → Translator → Emitter → Text

Components
----------
- cursor: source buffer, one-character look-ahead, diagnostics
- classify: character-class predicates used inline by every procedure
- symbols: flat table of declared locals
- emitter: append-only instruction sink and text rendering
- control: the control-flow language (if/while/loop/repeat)
- arithmetic: expressions and assignments
- compiler: options, results and the Translator front end

Usage
-----
>>> from wasm_cradle.translator import translate_control, translate_expression
>>> translate_expression("(1+2)*3").value
9
>>> print(translate_control("raube").text)
"""

from wasm_cradle.translator.compiler import (
    Translator,
    TranslatorOptions,
    TranslationResult,
    translate_control,
    translate_expression,
    translate_assignments,
    strip_line_break,
    MODES,
)
from wasm_cradle.translator.errors import (
    TranslationError,
    SyntaxMismatchError,
    UnterminatedConstructError,
    InvalidCharacterError,
    UndeclaredIdentifierError,
    DuplicateDeclarationError,
    NestingDepthError,
    TranslationArithmeticError,
    DivisionByZeroError,
    IntegerOverflowError,
)
from wasm_cradle.translator.cursor import Cursor
from wasm_cradle.translator.symbols import SymbolTable, LocalBinding
from wasm_cradle.translator.emitter import Emitter, Instruction, Op, block_balance
from wasm_cradle.translator.control import ControlFlowTranslator
from wasm_cradle.translator.arithmetic import ArithmeticTranslator

__all__ = [
    # Main API
    "Translator",
    "TranslatorOptions",
    "TranslationResult",
    "translate_control",
    "translate_expression",
    "translate_assignments",
    "strip_line_break",
    "MODES",
    # Errors
    "TranslationError",
    "SyntaxMismatchError",
    "UnterminatedConstructError",
    "InvalidCharacterError",
    "UndeclaredIdentifierError",
    "DuplicateDeclarationError",
    "NestingDepthError",
    "TranslationArithmeticError",
    "DivisionByZeroError",
    "IntegerOverflowError",
    # Components
    "Cursor",
    "SymbolTable",
    "LocalBinding",
    "Emitter",
    "Instruction",
    "Op",
    "block_balance",
    "ControlFlowTranslator",
    "ArithmeticTranslator",
]
