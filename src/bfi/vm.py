from __future__ import annotations

import sys
from typing import Iterable, Optional, TextIO

from .compiler import Program
from .errors import pointer_underflow, step_limit_exceeded
from .instructions import JumpIfNonZero, JumpIfZero, describe
from .state import MachineState

CELL_SIZE = 256


def format_tape(tape: Iterable[int]) -> str:
    return "tape: (" + ",".join(str(int(v)) for v in tape) + ")"


class BrainfuckVM:
    """Tape machine for a compiled Program.

    The tape starts as a single zero cell and grows one cell at a time to
    the right. Moving left of the first cell is fatal. A ',' on an empty
    input buffer leaves the cell as it is.
    """

    def __init__(self, max_steps: Optional[int] = None, trace: bool = False, capture_output: bool = False):
        self.max_steps = max_steps
        self.state = MachineState(is_tracing=trace, is_capturing=capture_output)

    def run(self, program: Program, stdout: Optional[TextIO] = None) -> MachineState:
        out = stdout if stdout is not None else sys.stdout
        state = self.state
        state.reset(input_buffer=program.input_buffer)

        code = program.instructions
        length = len(code)
        while state.ip < length:
            if self.max_steps is not None and state.steps >= self.max_steps:
                raise step_limit_exceeded(ip=state.ip, ptr=state.ptr, steps=state.steps)

            instr = code[state.ip]
            cell = state.tape[state.ptr]
            if state.is_tracing:
                state.add_trace(
                    f"step {state.steps}: ip={state.ip} op={describe(instr)} ptr={state.ptr} cell={cell}")

            if isinstance(instr, JumpIfZero):
                if cell == 0:
                    state.ip = instr.target
            elif isinstance(instr, JumpIfNonZero):
                if cell != 0:
                    state.ip = instr.target
            else:
                op = instr.char
                if op == '+':
                    state.tape[state.ptr] = (cell + 1) % CELL_SIZE
                elif op == '-':
                    state.tape[state.ptr] = (cell + CELL_SIZE - 1) % CELL_SIZE
                elif op == '>':
                    state.ptr += 1
                    if state.ptr >= len(state.tape):
                        state.tape.append(0)
                elif op == '<':
                    state.ptr -= 1
                    if state.ptr < 0:
                        state.add_trace(f"halt: pointer underflow at ip={state.ip}")
                        raise pointer_underflow(ip=state.ip)
                elif op == '.':
                    ch = chr(cell)
                    state.add_output(ch)
                    out.write(ch)
                    out.flush()
                elif op == ',':
                    ch = state.read_char()
                    if ch is not None:
                        state.tape[state.ptr] = ord(ch) % CELL_SIZE

            state.ip += 1
            state.steps += 1

        return state

    def dump(self) -> str:
        return format_tape(self.state.tape)
