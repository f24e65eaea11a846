from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

# ---------------- Instruction nodes ----------------
@dataclass(frozen=True)
class Op:
    char: str  # one of '+-<>.,'

@dataclass(frozen=True)
class JumpIfZero:
    target: int  # index of the matching JumpIfNonZero

@dataclass(frozen=True)
class JumpIfNonZero:
    target: int  # index of the matching JumpIfZero

Instruction = Union[Op, JumpIfZero, JumpIfNonZero]

PRIMITIVE_OPS = frozenset("+-<>.,")
BF_OPS = PRIMITIVE_OPS | {"[", "]"}

# Placeholder for a '[' whose ']' has not been scanned yet.
OPEN_PLACEHOLDER = Op("[")


def symbol(instr: Instruction) -> str:
    if isinstance(instr, JumpIfZero):
        return "["
    if isinstance(instr, JumpIfNonZero):
        return "]"
    return instr.char


def describe(instr: Instruction) -> str:
    if isinstance(instr, JumpIfZero):
        return f"jz {instr.target}"
    if isinstance(instr, JumpIfNonZero):
        return f"jnz {instr.target}"
    return {
        "+": "inc",
        "-": "dec",
        ">": "right",
        "<": "left",
        ".": "putch",
        ",": "getch",
    }.get(instr.char, "<unknown>")


def disassemble(
    instructions: Sequence[Instruction],
    start: int = 0,
    end: Optional[int] = None,
    marker: Optional[int] = None,
) -> str:
    """Render instructions[start..end] one per line, '*' marking ``marker``."""
    if end is None or end >= len(instructions):
        end = len(instructions) - 1
    result = ''
    for i in range(max(0, start), end + 1):
        instr = instructions[i]
        result += '%s %5i: %-12s | %s\n' % (
            '*' if i == marker else ' ', i, describe(instr), symbol(instr))
    return result
