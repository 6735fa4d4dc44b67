## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from minforth import operators
from minforth.errors import ForthTypeMissing
from minforth.loader import get_stack_effects, get_forth_name


def test_forth_names_from_python_names():
    assert get_forth_name('op_dup') == 'DUP'
    assert get_forth_name('op_dot_s') == 'DOT-S'
    with pytest.raises(ForthTypeMissing):
        get_forth_name('dup')


def test_stack_effects_for_binary_operation():
    meta = get_stack_effects(fn=operators.op_add, name='+')
    assert meta == {'arity': 2, 'valency': 1, 'output': False}


def test_stack_effects_for_tuple_results():
    assert get_stack_effects(fn=operators.op_rot)['valency'] == 3
    assert get_stack_effects(fn=operators.op_swap)['valency'] == 2
    assert get_stack_effects(fn=operators.op_drop)['valency'] == 0


def test_stack_effects_for_whole_stack_and_output():
    meta = get_stack_effects(fn=operators.op_dot_s)
    assert meta == {'arity': -2, 'valency': 0, 'output': True}
    assert get_stack_effects(fn=operators.op_dup)['arity'] == -2
    assert get_stack_effects(fn=operators.op_cr) == {'arity': 0, 'valency': 0, 'output': True}


def test_stack_effects_accepts_string_stack_annotation():
    def depth(s: 'Stack') -> int: return len(s)
    assert get_stack_effects(fn=depth)['arity'] == -2


def test_stack_effects_require_annotations():
    def no_return(x: int): return x
    def no_param(x) -> int: return x
    for fn in (no_return, no_param):
        with pytest.raises(ForthTypeMissing):
            get_stack_effects(fn=fn)


def test_stack_effects_reject_unsupported_parameters():
    def variadic(*xs: int) -> int: return 0
    def keyword(x: int, *, scale: int) -> int: return x
    def bare_tuple(x: int) -> tuple: return (x,)
    for fn in (variadic, keyword, bare_tuple):
        with pytest.raises(ForthTypeMissing):
            get_stack_effects(fn=fn)
