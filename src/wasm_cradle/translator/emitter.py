"""
Emit Sink
=========

Append-only sequence of emitted instructions. The translator only ever
appends; nothing reads the sink back until translation is over, when
``render()`` turns it into text.

Target Notation
---------------
The output is a stack-machine notation spelled like WebAssembly text.
It is meant to be deterministic (identical source gives byte-identical
text), not to be accepted by any particular assembler.

| Op            | Spelling                                          |
|---------------|---------------------------------------------------|
| MODULE_OPEN   | (module                                           |
| FUNC_OPEN     | (func $main  /  (func $main (result i32)          |
| EXPORT        | (export "main" (func $main))                      |
| LOCAL         | (local $x i32)                                    |
| CONST         | (i32.const 42)                                    |
| ADD/SUB/MUL   | (i32.add)  (i32.sub)  (i32.mul)                   |
| DIV           | (i32.div_s)                                       |
| LOCAL_GET/SET | (local.get $x)  (local.set $x)                    |
| CALL          | (call $f)                                         |
| IF_OPEN       | (if (call $cond_a) (then                          |
| ELSE          | ) (else                                           |
| IF_CLOSE      | ))                                                |
| WHILE_OPEN    | (block (loop (br_if 1 (i32.eqz (call $cond_a)))   |
| WHILE_CLOSE   | (br 0)))                                          |
| LOOP_OPEN     | (loop                                             |
| LOOP_CLOSE    | (br 0))                                           |
| REPEAT_OPEN   | (loop                                             |
| REPEAT_CHECK  | (br_if 0 (i32.eqz (call $cond_a)))                |
| REPEAT_CLOSE  | )                                                 |
| MODULE_CLOSE / FUNC_CLOSE | )                                     |

Names that are not alphanumeric are mangled to ``_`` plus their hex code
(``+`` becomes ``$_2b``), so every condition or local character yields
a plain identifier.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional, Union


class Op(Enum):
    """Kinds of emitted instruction."""

    # === Module Structure ===
    MODULE_OPEN = auto()
    MODULE_CLOSE = auto()
    FUNC_OPEN = auto()
    FUNC_CLOSE = auto()
    EXPORT = auto()

    # === Locals and Values ===
    LOCAL = auto()
    CONST = auto()
    LOCAL_GET = auto()
    LOCAL_SET = auto()
    CALL = auto()

    # === Arithmetic ===
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()

    # === Control Flow ===
    IF_OPEN = auto()
    ELSE = auto()
    IF_CLOSE = auto()
    WHILE_OPEN = auto()
    WHILE_CLOSE = auto()
    LOOP_OPEN = auto()
    LOOP_CLOSE = auto()
    REPEAT_OPEN = auto()
    REPEAT_CHECK = auto()
    REPEAT_CLOSE = auto()


OPENING = frozenset({
    Op.MODULE_OPEN, Op.FUNC_OPEN, Op.IF_OPEN,
    Op.WHILE_OPEN, Op.LOOP_OPEN, Op.REPEAT_OPEN,
})

CLOSING = frozenset({
    Op.MODULE_CLOSE, Op.FUNC_CLOSE, Op.IF_CLOSE,
    Op.WHILE_CLOSE, Op.LOOP_CLOSE, Op.REPEAT_CLOSE,
})

BINARY_OPS = {
    "+": Op.ADD,
    "-": Op.SUB,
    "*": Op.MUL,
    "/": Op.DIV,
}

_TEMPLATES = {
    Op.MODULE_OPEN: "(module",
    Op.MODULE_CLOSE: ")",
    Op.FUNC_CLOSE: ")",
    Op.EXPORT: '(export "{0}" (func ${0}))',
    Op.LOCAL: "(local ${0} i32)",
    Op.CONST: "(i32.const {0})",
    Op.LOCAL_GET: "(local.get ${0})",
    Op.LOCAL_SET: "(local.set ${0})",
    Op.CALL: "(call ${0})",
    Op.ADD: "(i32.add)",
    Op.SUB: "(i32.sub)",
    Op.MUL: "(i32.mul)",
    Op.DIV: "(i32.div_s)",
    Op.IF_OPEN: "(if {0} (then",
    Op.ELSE: ") (else",
    Op.IF_CLOSE: "))",
    Op.WHILE_OPEN: "(block (loop (br_if 1 (i32.eqz {0}))",
    Op.WHILE_CLOSE: "(br 0)))",
    Op.LOOP_OPEN: "(loop",
    Op.LOOP_CLOSE: "(br 0))",
    Op.REPEAT_OPEN: "(loop",
    Op.REPEAT_CHECK: "(br_if 0 (i32.eqz {0}))",
    Op.REPEAT_CLOSE: ")",
}


def mangle(name: str) -> str:
    """Map a source name to a plain identifier."""
    return "".join(c if c.isascii() and c.isalnum() else f"_{ord(c):02x}" for c in name)


def predicate(code: str) -> str:
    """
    Reference to the opaque predicate named by a condition character.

    A mangled code already starts with ``_``: ``a`` gives ``$cond_a``
    and ``?`` gives ``$cond_3f``.
    """
    name = mangle(code)
    if not name.startswith("_"):
        name = "_" + name
    return f"(call $cond{name})"


@dataclass(frozen=True)
class Instruction:
    """
    One emitted instruction.

    Attributes:
        op: Instruction kind
        operand: Name, literal, predicate reference, or (name, result) for FUNC_OPEN
    """
    op: Op
    operand: Union[str, int, tuple, None] = None

    @property
    def opens(self) -> bool:
        return self.op in OPENING

    @property
    def closes(self) -> bool:
        return self.op in CLOSING

    def render(self) -> str:
        if self.op is Op.FUNC_OPEN:
            name, result = self.operand
            if result:
                return f"(func ${name} (result {result})"
            return f"(func ${name}"
        if self.op in (Op.LOCAL, Op.LOCAL_GET, Op.LOCAL_SET, Op.CALL):
            return _TEMPLATES[self.op].format(mangle(self.operand))
        return _TEMPLATES[self.op].format(self.operand)

    def __str__(self) -> str:
        return self.render()


class Emitter:
    """
    Append-only instruction sink.

    Example:
        sink = Emitter()
        sink.emit(Op.CONST, 1)
        sink.emit(Op.CONST, 2)
        sink.emit(Op.ADD)
        print(sink.render())
    """

    def __init__(self):
        self._instructions: list[Instruction] = []

    def __len__(self) -> int:
        return len(self._instructions)

    @property
    def instructions(self) -> tuple[Instruction, ...]:
        """Emitted instructions in emission order."""
        return tuple(self._instructions)

    def emit(self, op: Op, operand: Union[str, int, tuple, None] = None) -> Instruction:
        instruction = Instruction(op, operand)
        self._instructions.append(instruction)
        return instruction

    # =========================================================================
    # Structural Helpers
    # =========================================================================

    def emit_module_start(self) -> None:
        self.emit(Op.MODULE_OPEN)

    def emit_module_end(self) -> None:
        self.emit(Op.MODULE_CLOSE)

    def emit_function_start(self, name: str = "main", result: Optional[str] = None) -> None:
        self.emit(Op.FUNC_OPEN, (name, result))

    def emit_function_end(self, name: str = "main") -> None:
        """Close the function and export it under its own name."""
        self.emit(Op.FUNC_CLOSE)
        self.emit(Op.EXPORT, name)

    def render(self, indent: int = 2) -> str:
        return render(self._instructions, indent)


def render(instructions: Iterable[Instruction], indent: int = 2) -> str:
    """
    Render instructions as text, one per line.

    Lines are indented by block depth; ELSE sits at the depth of its IF.
    The result always ends with a newline (or is empty).
    """
    lines = []
    depth = 0

    for instruction in instructions:
        if instruction.closes or instruction.op is Op.ELSE:
            depth = max(depth - 1, 0)
        lines.append(" " * (indent * depth) + instruction.render())
        if instruction.opens or instruction.op is Op.ELSE:
            depth += 1

    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def block_balance(instructions: Iterable[Instruction]) -> int:
    """Number of opens minus number of closes; zero for complete output."""
    balance = 0
    for instruction in instructions:
        if instruction.opens:
            balance += 1
        elif instruction.closes:
            balance -= 1
    return balance
