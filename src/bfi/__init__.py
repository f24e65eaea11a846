from .compiler import BrainfuckCompiler, Program
from .vm import BrainfuckVM, format_tape
from .lexer import scan, strip_comments
from .instructions import JumpIfNonZero, JumpIfZero, Op, disassemble
from .errors import (
    BFICompileError,
    BFIError,
    BFIRuntimeError,
    MismatchedBracketError,
    PointerUnderflowError,
    StepLimitExceeded,
    UnexpectedEofError,
)
from .api import RunOptions, RunResult, compile_string, run_file, run_program, run_string

__all__ = [
    'BrainfuckCompiler',
    'Program',
    'BrainfuckVM',
    'format_tape',
    'scan',
    'strip_comments',
    'Op',
    'JumpIfZero',
    'JumpIfNonZero',
    'disassemble',
    'BFIError',
    'BFICompileError',
    'BFIRuntimeError',
    'MismatchedBracketError',
    'UnexpectedEofError',
    'PointerUnderflowError',
    'StepLimitExceeded',
    'RunOptions',
    'RunResult',
    'compile_string',
    'run_string',
    'run_file',
    'run_program',
]
