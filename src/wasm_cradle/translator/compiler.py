"""
Translator Main Module
======================

This module provides the main interface to the translator. It wires a
fresh Cursor, SymbolTable and Emitter together for every translation and
runs one of the three entry productions:

| Mode        | Source                          | main returns          |
|-------------|---------------------------------|-----------------------|
| control     | control-flow program            | nothing               |
| expression  | a single arithmetic expression  | the expression        |
| assign      | assignments separated by ';'    | the last assigned     |

Usage
-----
Command line:
    $ cradlec program.cr -o program.wat

Programmatic:
    >>> from wasm_cradle.translator import translate_control
    >>> print(translate_control("wxyee").text)

Configuration
-------------
TranslatorOptions can be built directly or from environment variables
with ``TranslatorOptions.from_env()``:

    CRADLE_REDECLARATION   allow | error
    CRADLE_OVERFLOW        reject | wrap
    CRADLE_MAX_DEPTH       integer
    CRADLE_INDENT          integer

Error Handling
--------------
Translation stops at the first violation. The raised TranslationError
carries the instructions emitted so far in ``partial_output``; nothing
else of the failed translation survives.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging
import os

from wasm_cradle.translator.arithmetic import ArithmeticTranslator, OVERFLOW_POLICIES
from wasm_cradle.translator.base import DEFAULT_MAX_DEPTH
from wasm_cradle.translator.control import ControlFlowTranslator
from wasm_cradle.translator.cursor import Cursor
from wasm_cradle.translator.emitter import Emitter, Instruction, render
from wasm_cradle.translator.errors import NestingDepthError, TranslationError
from wasm_cradle.translator.symbols import SymbolTable, REDECLARATION_POLICIES

# Logger for this module
logger = logging.getLogger(__name__)


MODES = ("control", "expression", "assign")


def strip_line_break(source: str) -> str:
    """Drop one trailing line terminator (LF or CRLF) that ends a source file."""
    return source.removesuffix("\n").removesuffix("\r")


@dataclass
class TranslatorOptions:
    """
    Translator configuration options.

    Attributes:
        redeclaration: "allow" tolerates declaring a local twice,
                       "error" raises DuplicateDeclarationError
        overflow: "reject" raises on 32-bit overflow, "wrap" wraps around
        max_depth: Deepest block or parenthesis nesting accepted
        indent: Spaces per nesting level in rendered output
    """
    redeclaration: str = "allow"
    overflow: str = "reject"
    max_depth: int = DEFAULT_MAX_DEPTH
    indent: int = 2

    def __post_init__(self):
        if self.redeclaration not in REDECLARATION_POLICIES:
            raise ValueError(
                f"redeclaration must be one of {', '.join(REDECLARATION_POLICIES)}"
            )
        if self.overflow not in OVERFLOW_POLICIES:
            raise ValueError(f"overflow must be one of {', '.join(OVERFLOW_POLICIES)}")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        if self.indent < 0:
            raise ValueError("indent must not be negative")

    @classmethod
    def from_env(cls) -> "TranslatorOptions":
        """
        Create TranslatorOptions from environment variables.

        Unset variables keep their defaults; malformed integers are
        ignored, unknown policy names raise ValueError.
        """
        options = {}

        if redeclaration := os.environ.get("CRADLE_REDECLARATION"):
            options["redeclaration"] = redeclaration.lower()

        if overflow := os.environ.get("CRADLE_OVERFLOW"):
            options["overflow"] = overflow.lower()

        if max_depth := os.environ.get("CRADLE_MAX_DEPTH"):
            try:
                options["max_depth"] = int(max_depth)
            except ValueError:
                logger.warning(f"ignoring non-integer CRADLE_MAX_DEPTH '{max_depth}'")

        if indent := os.environ.get("CRADLE_INDENT"):
            try:
                options["indent"] = int(indent)
            except ValueError:
                logger.warning(f"ignoring non-integer CRADLE_INDENT '{indent}'")

        return cls(**options)


@dataclass
class TranslationResult:
    """
    Result of one translation.

    Attributes:
        filename: Source filename
        mode: "control", "expression" or "assign"
        instructions: Emitted instructions in order
        text: Rendered output
        locals: Declared locals mapped to their last known value
        value: Result value for arithmetic modes, when known
    """
    filename: str
    mode: str
    instructions: tuple[Instruction, ...] = ()
    text: str = ""
    locals: dict[str, Optional[int]] = field(default_factory=dict)
    value: Optional[int] = None

    @property
    def lines(self) -> list[str]:
        """Rendered instructions without indentation."""
        return [instruction.render() for instruction in self.instructions]


class Translator:
    """
    Single-pass translator front end.

    Each call builds its own Cursor, SymbolTable and Emitter, so
    translations never share state.

    Example:
        translator = Translator(TranslatorOptions(overflow="wrap"))
        result = translator.translate_assignments("x=2147483647+1")
        print(result.value)   # -2147483648

    Attributes:
        options: Translator configuration options
    """

    def __init__(self, options: Optional[TranslatorOptions] = None):
        self.options = options or TranslatorOptions()

    def translate(self, source: str, mode: str = "control", filename: str = "<input>") -> TranslationResult:
        """
        Translate ``source`` in the given mode.

        Raises:
            ValueError: Unknown mode
            TranslationError: The source violates the grammar
        """
        if mode == "control":
            return self.translate_control(source, filename)
        if mode == "expression":
            return self.translate_expression(source, filename)
        if mode == "assign":
            return self.translate_assignments(source, filename)
        raise ValueError(f"unknown mode '{mode}', expected one of {', '.join(MODES)}")

    def translate_control(self, source: str, filename: str = "<input>") -> TranslationResult:
        """Translate a control-flow program."""
        return self._run(source, filename, "control")

    def translate_expression(self, source: str, filename: str = "<input>") -> TranslationResult:
        """Translate a single arithmetic expression."""
        return self._run(source, filename, "expression")

    def translate_assignments(self, source: str, filename: str = "<input>") -> TranslationResult:
        """Translate a script of assignments."""
        return self._run(source, filename, "assign")

    def translate_file(self, filepath: str, mode: str = "control") -> TranslationResult:
        """
        Translate a source file.

        A single trailing line break is not part of the program and is
        dropped; any further line breaks are source text.
        Bytes are read one-to-one so that non-ASCII input reaches the
        translator and is reported as an invalid character.

        Raises:
            FileNotFoundError: If the source file does not exist
            TranslationError: The source violates the grammar
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = strip_line_break(path.read_text(encoding="latin-1"))
        return self.translate(source, mode, str(path))

    def _run(self, source: str, filename: str, mode: str) -> TranslationResult:
        cursor = Cursor(source, filename)
        symbols = SymbolTable(self.options.redeclaration)
        emitter = Emitter()

        logger.debug(f"Translating {filename} ({len(source)} bytes, mode={mode})")

        if mode == "control":
            translator = ControlFlowTranslator(cursor, symbols, emitter, self.options.max_depth)
        else:
            translator = ArithmeticTranslator(
                cursor, symbols, emitter, self.options.max_depth, self.options.overflow
            )

        try:
            try:
                if mode == "control":
                    translator.translate()
                    value = None
                elif mode == "expression":
                    value = translator.translate_expression()
                else:
                    value = translator.translate_assignments()
            except RecursionError:
                # max_depth is above what the interpreter stack can hold
                logger.debug(
                    f"Interpreter stack exhausted at nesting depth {translator.depth} "
                    f"(max_depth={self.options.max_depth})"
                )
                raise NestingDepthError(
                    translator.depth,
                    location=cursor.location,
                    source_line=cursor.source_line,
                    hint=f"max_depth={self.options.max_depth} exceeds what the "
                         f"interpreter stack supports; flatten the program",
                ) from None
        except TranslationError as e:
            e.partial_output = list(emitter.instructions)
            logger.debug(
                f"Translation of {filename} failed after {len(emitter)} instructions"
            )
            raise

        instructions = emitter.instructions
        logger.debug(
            f"Translated {filename}: {len(instructions)} instructions, "
            f"{len(symbols)} locals"
        )

        return TranslationResult(
            filename=filename,
            mode=mode,
            instructions=instructions,
            text=render(instructions, self.options.indent),
            locals=symbols.values(),
            value=value,
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def translate_control(
    source: str,
    filename: str = "<input>",
    options: Optional[TranslatorOptions] = None,
) -> TranslationResult:
    """Translate a control-flow program with the given (or default) options."""
    return Translator(options).translate_control(source, filename)


def translate_expression(
    source: str,
    filename: str = "<input>",
    options: Optional[TranslatorOptions] = None,
) -> TranslationResult:
    """Translate a single expression with the given (or default) options."""
    return Translator(options).translate_expression(source, filename)


def translate_assignments(
    source: str,
    filename: str = "<input>",
    options: Optional[TranslatorOptions] = None,
) -> TranslationResult:
    """Translate an assignment script with the given (or default) options."""
    return Translator(options).translate_assignments(source, filename)
