from __future__ import annotations

import argparse
import sys
import time
from typing import List, Optional

from .compiler import BrainfuckCompiler
from .errors import BFIError
from .vm import BrainfuckVM


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfi",
        description="Compile and run a Brainfuck program on a growable byte tape.",
    )
    parser.add_argument("file", nargs="?", help="Brainfuck source file")
    parser.add_argument("-e", "--eval", dest="source", help="Program text to run instead of a file")
    parser.add_argument("--disasm", action="store_true", help="Print the compiled instructions and exit")
    parser.add_argument("--trace", action="store_true", help="Dump a per-step trace to stderr")
    parser.add_argument("--max-steps", type=int, default=None, help="Abort after N executed instructions")
    parser.add_argument("--stats", action="store_true", help="Print timings and instruction counts to stderr")
    parser.add_argument("--verbose", action="store_true", help="Show source context for compile errors")
    return parser


def _load_source(args, parser) -> str:
    if args.file is not None and args.source is not None:
        parser.error("give either FILE or --eval, not both")
    if args.source is not None:
        return args.source
    if args.file is None:
        parser.error("a program FILE or --eval is required")
    try:
        with open(args.file, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        parser.error(f"couldn't find file {args.file}")
    except UnicodeDecodeError:
        parser.error(f"{args.file} is not valid UTF-8 text")
    except OSError as e:
        parser.error(f"couldn't read {args.file}: {e.strerror or e}")


def _print_trace(lines, err) -> None:
    for line in lines:
        print(line, file=err)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_steps is not None and args.max_steps < 1:
        parser.error("--max-steps must be a positive integer")
    code = _load_source(args, parser)

    out = sys.stdout
    err = sys.stderr

    compiler = BrainfuckCompiler(trace=args.trace)
    start = time.time()
    try:
        program = compiler.compile(code)
    except BFIError as e:
        if args.trace:
            _print_trace(compiler.trace, err)
        print(e.describe() if args.verbose else str(e), file=err)
        return 1
    end = time.time()

    if args.stats:
        print(f"Compilation took {(end - start) * 1000:.2f} ms", file=err)
        counts = program.stats()
        print("Instructions: " + " ".join(f"{op}={n}" for op, n in counts.items()), file=err)

    if args.disasm:
        out.write(program.disasm())
        return 0

    vm = BrainfuckVM(max_steps=args.max_steps, trace=args.trace)
    start = time.time()
    try:
        vm.run(program, stdout=out)
    except BFIError as e:
        out.flush()
        if args.trace:
            _print_trace(compiler.trace + vm.state.trace, err)
        print(e.describe() if args.verbose else str(e), file=err)
        return 1
    end = time.time()

    out.write(vm.dump() + "\n")
    out.flush()

    if args.trace:
        _print_trace(compiler.trace + vm.state.trace, err)
    if args.stats:
        print(f"Execution took {(end - start) * 1000:.2f} ms ({vm.state.steps} steps)", file=err)
    return 0
