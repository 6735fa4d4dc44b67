## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import io

import pytest

from minforth.types import Word, Stack, Literal
from minforth.errors import ForthStackUnderflow, ForthDivideByZero
from minforth.compiler import Compiler
from minforth.dictionary import Dictionary
from minforth.builtins import load_builtins_dictionary
from minforth.interpreter import Context
from minforth import operators


def _context(dictionary=None, values=()):
    ctx = Context(data=Stack(), rstack=Stack(title="Return stack"),
                  dictionary=dictionary or Dictionary(), compiler=Compiler(), output=io.StringIO())
    for v in values:
        ctx.data.push(v)
    return ctx


def test_lookup_is_case_insensitive():
    d = Dictionary()
    word = d.add_compiled('Double')
    assert d.lookup('DOUBLE') is word
    assert d.lookup('double') is word
    assert d.lookup('triple') is None


def test_lookup_prefers_newest_entry():
    d = Dictionary()
    old = d.add_compiled('F', [Literal(1)])
    new = d.add_compiled('f', [Literal(2)])
    assert d.lookup('F') is new
    assert len(d) == 2
    assert list(d) == [new, old]


def test_abandon_drops_entry_wherever_it_sits():
    d = Dictionary()
    old = d.add_compiled("F", [Literal(1)])
    partial = d.add_compiled("F")
    later = d.add_compiled("G")
    d.abandon(partial)
    assert d.lookup("F") is old
    assert list(d) == [later, old]
    d.abandon(partial)
    assert len(d) == 2


def test_builtins_catalog():
    d = load_builtins_dictionary()
    names = {w.name for w in d}
    assert names == {'+', '-', '*', '/', 'MOD', 'DUP', 'DROP', 'SWAP', 'OVER', 'ROT',
                     '=', '<', '>', 'AND', 'OR', 'NOT', 'EMIT', 'CR', '.', '.S', ':', ';'}
    assert all(w.type == Word.PRIMITIVE for w in d)
    assert [w.name for w in d if w.immediate] == [';']


def test_primitive_pops_in_push_order():
    d = Dictionary()
    sub = d.add_primitive('-', operators.op_sub)
    ctx = _context(d, (10, 3))
    sub.ptr(ctx)
    assert list(ctx.data) == [7]
    assert sub.ptr.__forth_meta__['arity'] == 2


def test_primitive_restores_arguments_on_underflow():
    d = Dictionary()
    over = d.add_primitive('OVER', operators.op_over)
    ctx = _context(d, (5,))
    with pytest.raises(ForthStackUnderflow):
        over.ptr(ctx)
    assert list(ctx.data) == [5]


def test_primitive_restores_arguments_on_failure():
    d = Dictionary()
    div = d.add_primitive('/', operators.op_div)
    ctx = _context(d, (9, 1, 0))
    with pytest.raises(ForthDivideByZero):
        div.ptr(ctx)
    assert list(ctx.data) == [9, 1, 0]


def test_primitive_with_output_stream():
    d = Dictionary()
    dot = d.add_primitive('.', operators.op_dot)
    ctx = _context(d, (1, 2))
    dot.ptr(ctx)
    assert ctx.output.getvalue() == "2 "
    assert list(ctx.data) == [1]
