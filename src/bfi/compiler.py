from __future__ import annotations

import sys
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from .errors import mismatched_bracket, unexpected_eof
from .instructions import (
    OPEN_PLACEHOLDER,
    Instruction,
    JumpIfNonZero,
    JumpIfZero,
    Op,
    disassemble,
    symbol,
)
from .lexer import scan
from .state import CompilerState


@dataclass(frozen=True)
class Program:
    instructions: Tuple[Instruction, ...]
    input_buffer: str = ''

    def __len__(self) -> int:
        return len(self.instructions)

    def stats(self) -> Dict[str, int]:
        counts = Counter(symbol(instr) for instr in self.instructions)
        return {op: counts.get(op, 0) for op in '+-<>.,[]'}

    def disasm(self, start: int = 0, end: Optional[int] = None, marker: Optional[int] = None) -> str:
        return disassemble(self.instructions, start, end, marker)


def _stdin_readline() -> str:
    return sys.stdin.readline()


class BrainfuckCompiler:
    """
    Brainfuck Compiler

    Turns source text into a flat instruction sequence in a single pass.

    Bracket Resolution:
    - '[' appends a placeholder and pushes its index on the bracket stack
    - ']' pops the matching index, appends JumpIfNonZero(loc) at ``here``
      and back-patches the placeholder at ``loc`` to JumpIfZero(here)
    - Leftover entries on the stack at the end mean an unclosed '['

    Input Capture:
    - The first ',' in source order reads one line through ``read_line``
      and keeps it as the program's whole input buffer
    - Later ',' characters never read again, even if that first one is
      unreachable at run time
    """

    def __init__(self, read_line: Optional[Callable[[], str]] = None, trace: bool = False):
        self.read_line = read_line if read_line is not None else _stdin_readline
        self.state = CompilerState(is_tracing=trace)

    @property
    def trace(self):
        return self.state.trace

    # ===== Main Compilation Pipeline =====

    def compile(self, source: str) -> Program:
        """
        Compile ``source`` into a Program.

        Raises:
            MismatchedBracketError: a ']' with no open '['
            UnexpectedEofError: a '[' still open at the end of source
        """
        state = self.state
        state.reset()

        for n, ch in scan(source):
            if ch == '[':
                self._open_loop(n)
            elif ch == ']':
                self._close_loop(source, n)
            else:
                if ch == ',':
                    self._capture_input()
                state.instructions.append(Op(ch))

        if state.bracket_stack:
            raise unexpected_eof(source, state.open_positions[-1])

        return Program(instructions=tuple(state.instructions), input_buffer=state.input_buffer)

    def _capture_input(self):
        state = self.state
        if not state.pending_read:
            return
        state.pending_read = False
        line = self.read_line()
        state.input_buffer = line if line else ''
        state.add_trace(f"input: captured {len(state.input_buffer)} chars")

    def _open_loop(self, n):
        state = self.state
        state.instructions.append(OPEN_PLACEHOLDER)
        state.bracket_stack.append(len(state.instructions) - 1)
        state.open_positions.append(n)

    def _close_loop(self, source, n):
        state = self.state
        if not state.bracket_stack:
            raise mismatched_bracket(source, n)
        loc = state.bracket_stack.pop()
        state.open_positions.pop()
        state.instructions.append(JumpIfNonZero(loc))
        here = len(state.instructions) - 1
        state.instructions[loc] = JumpIfZero(here)
        state.add_trace(f"loop: [ at {loc} <-> ] at {here} (char {n})")


def compile_source(source: str, read_line: Optional[Callable[[], str]] = None) -> Program:
    return BrainfuckCompiler(read_line=read_line).compile(source)
