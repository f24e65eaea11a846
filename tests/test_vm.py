#!/usr/bin/env python3
"""
Test the tape machine: cell arithmetic, tape growth, loops, I/O and halting.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import io

import pytest

from bfi import (
    BrainfuckCompiler,
    BrainfuckVM,
    PointerUnderflowError,
    StepLimitExceeded,
    format_tape,
)

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


def execute_bf_code(bf_code, input_data="", max_steps=None, trace=False):
    """Compile and run BF code in-process; return (vm, output)."""
    stdin = io.StringIO(input_data)
    stdout = io.StringIO()
    program = BrainfuckCompiler(read_line=stdin.readline).compile(bf_code)
    vm = BrainfuckVM(max_steps=max_steps, trace=trace)
    vm.run(program, stdout=stdout)
    return vm, stdout.getvalue()


def test_empty_program():
    vm, output = execute_bf_code("")
    assert output == ""
    assert vm.state.tape == [0]
    assert vm.dump() == "tape: (0)"


def test_increment_wraps():
    """k '+' leave k mod 256 in the cell."""
    for k in (0, 1, 65, 255, 256, 257, 600):
        vm, _ = execute_bf_code("+" * k)
        assert vm.state.tape == [k % 256]


def test_decrement_wraps():
    vm, _ = execute_bf_code("-")
    assert vm.state.tape == [255]
    vm, _ = execute_bf_code("+--")
    assert vm.state.tape == [255]


def test_clear_loop():
    vm, _ = execute_bf_code("+++[-]")
    assert vm.dump() == "tape: (0)"


def test_tape_grows_by_one_cell():
    vm, _ = execute_bf_code(">+")
    assert vm.dump() == "tape: (0,1)"

    vm, _ = execute_bf_code("><>")
    assert vm.state.tape == [0, 0]
    assert vm.state.ptr == 1

    vm, _ = execute_bf_code(">>>")
    assert vm.state.tape == [0, 0, 0, 0]


def test_loop_skipped_on_zero_cell():
    vm, _ = execute_bf_code("[+]")
    assert vm.state.tape == [0]
    # only the jump itself runs
    assert vm.state.steps == 1


def test_loop_steps():
    vm, _ = execute_bf_code("+[-]")
    assert vm.state.steps == 4


def test_move_value_loop():
    vm, _ = execute_bf_code("+++++[->++<]")
    assert vm.dump() == "tape: (0,10)"


def test_hello_world():
    vm, output = execute_bf_code(HELLO_WORLD)
    assert output == "Hello World!\n"
    assert len(vm.state.tape) == 7


def test_output_is_unbuffered_character():
    """'.' writes chr(cell) with no separator."""
    _, output = execute_bf_code("+" * 65 + ".+.")
    assert output == "AB"

    _, output = execute_bf_code(".")
    assert output == "\x00"


def test_input_single_character():
    vm, output = execute_bf_code(",.", input_data="A\n")
    assert output == "A"
    assert vm.dump() == "tape: (65)"


def test_input_empty_is_noop():
    """An empty buffer leaves the cell untouched."""
    vm, output = execute_bf_code(",.", input_data="")
    assert output == "\x00"
    assert vm.dump() == "tape: (0)"

    vm, _ = execute_bf_code("+++,", input_data="")
    assert vm.state.tape == [3]


def test_input_consumed_from_front():
    vm, _ = execute_bf_code(",>,>,", input_data="ab")
    assert vm.state.tape == [97, 98, 0]
    assert vm.state.remaining_input == ''
    assert vm.state.input_buffer == 'ab'


def test_only_first_line_is_available():
    vm, _ = execute_bf_code(",>,>,>,", input_data="ab\ncd\n")
    assert vm.state.tape == [97, 98, 10, 0]


def test_input_code_point_mod_256():
    vm, _ = execute_bf_code(",>,", input_data="é€")
    assert vm.state.tape == [0xE9, 0x20AC % 256]


def test_exhausted_input_stalls():
    """Echo-until-EOF never ends once the buffer runs dry."""
    with pytest.raises(StepLimitExceeded) as exc:
        execute_bf_code(",[.,]", input_data="A", max_steps=50)
    assert exc.value.steps == 50
    assert str(exc.value) == "step limit of 50 exceeded"


def test_max_steps_not_hit_on_exact_count():
    vm, _ = execute_bf_code("++", max_steps=2)
    assert vm.state.tape == [2]


def test_pointer_underflow():
    with pytest.raises(PointerUnderflowError) as exc:
        execute_bf_code("<")
    assert str(exc.value) == "negative index"
    assert exc.value.ip == 0


def test_pointer_underflow_keeps_earlier_output():
    stdout = io.StringIO()
    program = BrainfuckCompiler(read_line=lambda: '').compile("+" * 65 + ".><<+.")
    vm = BrainfuckVM()
    with pytest.raises(PointerUnderflowError):
        vm.run(program, stdout=stdout)
    assert stdout.getvalue() == "A"


def test_trace():
    vm, _ = execute_bf_code("+>", trace=True)
    assert vm.state.trace == [
        "step 0: ip=0 op=inc ptr=0 cell=0",
        "step 1: ip=1 op=right ptr=0 cell=1",
    ]

    vm, _ = execute_bf_code("+>")
    assert vm.state.trace == []


def test_trace_off_skips_formatting(monkeypatch):
    """With tracing off the step description is never rendered."""
    import bfi.vm

    calls = []

    def counting_describe(instr):
        calls.append(instr)
        return "x"

    monkeypatch.setattr(bfi.vm, 'describe', counting_describe)
    vm, _ = execute_bf_code("+" * 1000)
    assert vm.state.tape == [1000 % 256]
    assert calls == []

    execute_bf_code("+", trace=True)
    assert len(calls) == 1


def test_output_not_kept_by_default():
    """A long-running echo loop keeps no copy of what it printed."""
    stdout = io.StringIO()
    program = BrainfuckCompiler(read_line=lambda: "A").compile(",[.,]")
    vm = BrainfuckVM(max_steps=3000)
    with pytest.raises(StepLimitExceeded):
        vm.run(program, stdout=stdout)
    assert stdout.getvalue() == "A" * 1000
    assert vm.state.output == []


def test_output_kept_when_capturing():
    stdout = io.StringIO()
    program = BrainfuckCompiler(read_line=lambda: "hi").compile(",.>,.")
    vm = BrainfuckVM(capture_output=True)
    vm.run(program, stdout=stdout)
    assert ''.join(vm.state.output) == "hi"
    assert stdout.getvalue() == "hi"


def test_long_input_read_through_cursor():
    """Reading never rewrites the captured line; a cursor moves instead."""
    line = "xyz" * 2000 + "\0"
    vm, _ = execute_bf_code(",[,]", input_data=line)
    assert vm.state.input_buffer == line
    assert vm.state.input_pos == len(line)
    assert vm.state.remaining_input == ''
    # the trailing NUL ends the loop
    assert vm.state.tape == [0]


def test_vm_reuse_resets_state():
    program = BrainfuckCompiler(read_line=lambda: '').compile(">+")
    vm = BrainfuckVM()
    vm.run(program, stdout=io.StringIO())
    vm.run(program, stdout=io.StringIO())
    assert vm.state.tape == [0, 1]


def test_format_tape():
    assert format_tape([0]) == "tape: (0)"
    assert format_tape([72, 0, 255]) == "tape: (72,0,255)"


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__]))
