"""
wasm-cradle - Single-Pass Translator to Stack-Machine Text
==========================================================

wasm-cradle translates a tiny imperative notation directly into
WebAssembly-style stack-machine text, one character at a time, in the
tradition of the "Let's Build a Compiler" cradle.

Main Components
---------------
- **translator**: cursor, symbol table, emitter and the two
  recursive-descent translators (control flow, arithmetic)
- **cli**: the ``cradlec`` command-line tool

Quick Start
-----------
    >>> from wasm_cradle import translate_expression
    >>> result = translate_expression("1+2*3")
    >>> result.value
    7
    >>> print(result.text)

Or from the command line:
    $ cradlec --mode expression sum.cr
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from wasm_cradle.errors import CradleError, SourceLocation
from wasm_cradle.translator import (
    Translator,
    TranslatorOptions,
    TranslationResult,
    TranslationError,
    translate_control,
    translate_expression,
    translate_assignments,
)

__all__ = [
    "__version__",
    "CradleError",
    "SourceLocation",
    "Translator",
    "TranslatorOptions",
    "TranslationResult",
    "TranslationError",
    "translate_control",
    "translate_expression",
    "translate_assignments",
]
