"""
Lexical Classifier
==================

Pure predicates over a single look-ahead character. There is no
tokenizing pass: every translator procedure calls these inline to decide
which production the next character starts.

All predicates accept ``None`` (end of input) and return False for it.
"""

from typing import Optional
import string


# Statement keywords of the control-flow language
IF = "i"
ELSE = "l"
END = "e"
WHILE = "w"
DO_LOOP = "p"
REPEAT = "r"
UNTIL = "u"

# Characters that close a Block
BLOCK_TERMINATORS = frozenset({END, ELSE, UNTIL})

# Only the space is skipped between constructs
WHITESPACE = " "

ADD_OPS = frozenset("+-")
MUL_OPS = frozenset("*/")

_PRINTABLE = frozenset(c for c in string.printable if c not in string.whitespace) | {" "}


def is_digit(char: Optional[str]) -> bool:
    """True for an ASCII decimal digit."""
    return char is not None and char in string.digits


def is_letter(char: Optional[str]) -> bool:
    """True for an ASCII letter."""
    return char is not None and char in string.ascii_letters


def is_alnum(char: Optional[str]) -> bool:
    """True for an ASCII letter or digit."""
    return is_letter(char) or is_digit(char)


def is_whitespace(char: Optional[str]) -> bool:
    """True for the space character."""
    return char == WHITESPACE


def is_block_terminator(char: Optional[str]) -> bool:
    """True for 'e', 'l' or 'u'."""
    return char is not None and char in BLOCK_TERMINATORS


def is_addop(char: Optional[str]) -> bool:
    return char is not None and char in ADD_OPS


def is_mulop(char: Optional[str]) -> bool:
    return char is not None and char in MUL_OPS


def is_printable(char: Optional[str]) -> bool:
    """True for printable ASCII, space included."""
    return char is not None and char in _PRINTABLE
