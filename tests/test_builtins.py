## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import io

import pytest

from minforth.runtime import Runtime
from minforth.errors import ForthDivideByZero, ForthStackUnderflow, ForthStackOverflow


def run_and_items(src: str, values=None):
    rt = Runtime(output=io.StringIO())
    if values is not None:
        rt.to_stack(values)
    rt.run(src)
    return rt.from_stack()


def run_and_output(src: str) -> str:
    rt = Runtime(output=io.StringIO())
    rt.run(src)
    return rt.context.output.getvalue()


@pytest.mark.parametrize("src, expected", [
    ("2 3 +", 5), ("2 3 -", -1), ("6 7 *", 42),
    ("7 2 /", 3), ("-7 2 /", -3), ("7 -2 /", -3), ("-7 -2 /", 3),
    ("7 2 MOD", 1), ("-7 2 MOD", -1), ("7 -2 MOD", 1), ("-7 -2 MOD", -1),
    ("12 10 AND", 8), ("12 10 OR", 14), ("0 NOT", -1), ("5 NOT", -6),
])
def test_arithmetic_and_bitwise(src, expected):
    assert run_and_items(src) == [expected]


def test_arithmetic_does_not_wrap():
    assert run_and_items("4611686018427387904 4 *") == [2**64]


@pytest.mark.parametrize("src, expected", [
    ("3 5 <", -1), ("5 3 <", 0), ("5 3 >", -1), ("3 5 >", 0),
    ("4 4 =", -1), ("4 -4 =", 0), ("4 4 <", 0),
])
def test_comparisons_use_all_bits_set_for_true(src, expected):
    assert run_and_items(src) == [expected]


@pytest.mark.parametrize("src", ["1 0 /", "1 0 MOD"])
def test_divide_by_zero_is_fatal_and_keeps_stack(src):
    rt = Runtime(output=io.StringIO())
    with pytest.raises(ForthDivideByZero):
        rt.interpret(src)
    assert rt.from_stack() == [0, 1]
    assert rt.context.output.getvalue() == "Division by zero!\n"


def test_dup_then_drop_is_identity():
    for values in ([1], [3, 2, 1], [-9, 0]):
        assert run_and_items("DUP DROP", values) == values


def test_dup_needs_one_item():
    rt = Runtime(output=io.StringIO())
    with pytest.raises(ForthStackUnderflow):
        rt.interpret("DUP")


def test_swap_twice_restores_order():
    assert run_and_items("SWAP", [1, 2, 3]) == [2, 1, 3]
    assert run_and_items("SWAP SWAP", [1, 2, 3]) == [1, 2, 3]


def test_over_and_rot():
    assert run_and_items("1 2 OVER") == [1, 2, 1]
    assert run_and_items("1 2 3 ROT") == [1, 3, 2]


def test_underflow_leaves_stack_untouched():
    rt = Runtime(output=io.StringIO())
    rt.interpret("1 2")
    with pytest.raises(ForthStackUnderflow):
        rt.interpret("ROT")
    assert rt.from_stack() == [2, 1]
    assert rt.context.output.getvalue() == "Stack underflow!\n"


def test_dup_at_capacity_overflows():
    rt = Runtime(output=io.StringIO(), stack_size=2)
    rt.interpret("1 2")
    with pytest.raises(ForthStackOverflow):
        rt.interpret("DUP")
    assert rt.from_stack() == [2, 1]


def test_dot_writes_decimal_and_separator():
    assert run_and_output("5 . -3 .") == "5 -3 "


def test_emit_and_cr():
    assert run_and_output("72 EMIT 105 EMIT CR") == "Hi\n"
    assert run_and_output("321 EMIT") == "A"


def test_dot_s_prints_depth_and_bottom_to_top():
    rt = Runtime(output=io.StringIO())
    rt.run("1 2 3 .S")
    assert rt.context.output.getvalue() == "<sp=3> 1 2 3 \n"
    assert rt.from_stack() == [3, 2, 1]


def test_dot_s_on_empty_stack():
    assert run_and_output(".S") == "<sp=0> \n"


def test_words_are_case_insensitive():
    assert run_and_items("1 2 dup * Swap drop") == [4]


def test_emit_high_byte_writes_latin1_code_point():
    assert run_and_output("200 EMIT") == "È"
    assert run_and_output("456 EMIT") == "È"
