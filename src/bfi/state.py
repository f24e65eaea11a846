from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .instructions import Instruction


@dataclass
class CompilerState:
    instructions: List[Instruction] = field(default_factory=list)
    bracket_stack: List[int] = field(default_factory=list)
    # source positions of the '[' on bracket_stack, for diagnostics
    open_positions: List[int] = field(default_factory=list)
    input_buffer: str = ''
    pending_read: bool = True
    trace: List[str] = field(default_factory=list)
    is_tracing: bool = False

    def reset(self) -> None:
        self.instructions.clear()
        self.bracket_stack.clear()
        self.open_positions.clear()
        self.input_buffer = ''
        self.pending_read = True
        self.trace.clear()

    def add_trace(self, message: str) -> None:
        if self.is_tracing:
            self.trace.append(message)


@dataclass
class MachineState:
    input_buffer: str = ''
    # index of the next unread character of input_buffer
    input_pos: int = 0
    ip: int = 0
    ptr: int = 0
    tape: List[int] = field(default_factory=lambda: [0])
    steps: int = 0
    output: List[str] = field(default_factory=list)
    is_capturing: bool = False
    trace: List[str] = field(default_factory=list)
    is_tracing: bool = False

    def reset(self, *, input_buffer: str = '') -> None:
        self.input_buffer = input_buffer
        self.input_pos = 0
        self.ip = 0
        self.ptr = 0
        self.tape = [0]
        self.steps = 0
        self.output.clear()
        self.trace.clear()

    @property
    def remaining_input(self) -> str:
        return self.input_buffer[self.input_pos:]

    def read_char(self) -> Optional[str]:
        if self.input_pos >= len(self.input_buffer):
            return None
        ch = self.input_buffer[self.input_pos]
        self.input_pos += 1
        return ch

    def add_output(self, ch: str) -> None:
        if self.is_capturing:
            self.output.append(ch)

    def add_trace(self, message: str) -> None:
        if self.is_tracing:
            self.trace.append(message)
