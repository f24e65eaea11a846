from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Type


def _locate(source: str, position: int) -> Tuple[int, int]:
    # 1-based character offset -> (1-based line, 1-based column)
    before = source[:max(0, position - 1)]
    line = before.count('\n') + 1
    column = len(before) - (before.rfind('\n') + 1) + 1
    return line, column


def _build_context(lines: List[str], line_no_1: int, column: int, *, context: int = 1) -> str:
    idx = max(1, min(line_no_1, len(lines)))
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"  {'':4s} | {' ' * (column - 1)}^")
    return "\n".join(out)


def _hint_for(error: 'BFIError') -> Optional[str]:
    if isinstance(error, MismatchedBracketError):
        return 'This "]" has no open "[" before it.'
    if isinstance(error, UnexpectedEofError):
        return 'The "[" marked above is never closed.'
    if isinstance(error, PointerUnderflowError):
        return 'The tape only grows to the right; the first cell has nothing to its left.'
    if isinstance(error, StepLimitExceeded):
        return 'Input is captured once at compile time; a "," on an empty buffer leaves the cell unchanged.'
    return None


@dataclass
class BFIError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message

    def describe(self) -> str:
        hint = _hint_for(self)
        hint_block = f"\nHint: {hint}" if hint else ""
        return f"{type(self).__name__}: {self.message}{hint_block}"


@dataclass
class BFICompileError(BFIError):
    position: int
    context: str = ''

    def describe(self) -> str:
        text = super().describe()
        if self.context:
            head, _, rest = text.partition('\n')
            text = f"{head}\n{self.context}" + (f"\n{rest}" if rest else "")
        return text


@dataclass
class MismatchedBracketError(BFICompileError):
    pass


@dataclass
class UnexpectedEofError(BFICompileError):
    pass


@dataclass
class BFIRuntimeError(BFIError):
    ip: int
    ptr: int


@dataclass
class PointerUnderflowError(BFIRuntimeError):
    pass


@dataclass
class StepLimitExceeded(BFIRuntimeError):
    steps: int = 0


def make_compile_error(cls: Type[BFICompileError], *, message: str, source: str, position: int) -> BFICompileError:
    lines = source.split('\n')
    line, column = _locate(source, position)
    ctx = _build_context(lines, line, column) if source else ''
    return cls(message=message, position=position, context=ctx)


def mismatched_bracket(source: str, position: int) -> MismatchedBracketError:
    return make_compile_error(
        MismatchedBracketError,
        message=f"mismatched brackets at character {position}",
        source=source,
        position=position,
    )


def unexpected_eof(source: str, position: int) -> UnexpectedEofError:
    return make_compile_error(
        UnexpectedEofError,
        message="unexpected end of file",
        source=source,
        position=position,
    )


def pointer_underflow(*, ip: int) -> PointerUnderflowError:
    return PointerUnderflowError(message="negative index", ip=ip, ptr=-1)


def step_limit_exceeded(*, ip: int, ptr: int, steps: int) -> StepLimitExceeded:
    return StepLimitExceeded(
        message=f"step limit of {steps} exceeded",
        ip=ip,
        ptr=ptr,
        steps=steps,
    )
