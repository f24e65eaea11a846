from typing import Iterator, Tuple

from .instructions import BF_OPS


def is_code_char(ch: str) -> bool:
    return ch in BF_OPS


def scan(source: str) -> Iterator[Tuple[int, str]]:
    """Yield (1-based position, char) for every command character.

    Everything else is a comment and is skipped, inside or outside loops.
    """
    for n, ch in enumerate(source, start=1):
        if is_code_char(ch):
            yield n, ch


def strip_comments(source: str) -> str:
    return ''.join(ch for _, ch in scan(source))
