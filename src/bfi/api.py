from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO, Tuple

from .compiler import BrainfuckCompiler, Program
from .vm import BrainfuckVM, format_tape


@dataclass(frozen=True)
class RunOptions:
    max_steps: Optional[int] = None
    trace: bool = False
    dump_tape: bool = True


@dataclass(frozen=True)
class RunResult:
    tape: Tuple[int, ...]
    ptr: int
    steps: int
    output: str
    trace: Tuple[str, ...] = ()

    @property
    def tape_dump(self) -> str:
        return format_tape(self.tape)


def compile_string(source: str, *, stdin: Optional[TextIO] = None, trace: bool = False) -> Program:
    read_line = None if stdin is None else stdin.readline
    return BrainfuckCompiler(read_line=read_line, trace=trace).compile(source)


def run_program(program: Program, *, stdout: Optional[TextIO] = None, options: Optional[RunOptions] = None) -> RunResult:
    opts = RunOptions() if options is None else options
    out = sys.stdout if stdout is None else stdout
    vm = BrainfuckVM(max_steps=opts.max_steps, trace=opts.trace, capture_output=True)
    state = vm.run(program, stdout=out)
    result = RunResult(
        tape=tuple(state.tape),
        ptr=state.ptr,
        steps=state.steps,
        output=''.join(state.output),
        trace=tuple(state.trace),
    )
    if opts.dump_tape:
        out.write(result.tape_dump + "\n")
        out.flush()
    return result


def run_string(
    source: str,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    options: Optional[RunOptions] = None,
) -> RunResult:
    program = compile_string(source, stdin=stdin)
    return run_program(program, stdout=stdout, options=options)


def run_file(
    path: str | Path,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    options: Optional[RunOptions] = None,
    encoding: str = "utf-8",
) -> RunResult:
    p = Path(path)
    return run_string(p.read_text(encoding=encoding), stdin=stdin, stdout=stdout, options=options)
