## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable
from dataclasses import dataclass, field

from .types import Word, Stack
from .errors import ForthError, ForthStackUnderflow
from .loader import get_stack_effects


@dataclass
class Dictionary:
    """Append-only arena of words; lookups scan from the newest entry backward."""

    entries: list[Word] = field(default_factory=list)

    def define(self, word: Word) -> Word:
        self.entries.append(word)
        return word

    # Registration helpers
    def add_primitive(self, name: str, fn: Callable[..., Any], immediate: bool = False) -> Word:
        """Wrap an annotated Python function so it pops its inputs and pushes its outputs."""
        ptr, meta = _make_wrapper(fn, name)
        ptr.__forth_meta__ = meta
        return self.define(Word(Word.PRIMITIVE, ptr, name, immediate))

    def add_word(self, name: str, ptr: Callable[..., Any], immediate: bool = False) -> Word:
        """Register a primitive that receives the whole interpreter context."""
        return self.define(Word(Word.PRIMITIVE, ptr, name, immediate))

    def add_compiled(self, name: str, body: list | None = None) -> Word:
        return self.define(Word(Word.COMPILED, [] if body is None else body, name))

    def lookup(self, name: str) -> Word | None:
        key = name.upper()
        for word in reversed(self.entries):
            if word.key == key:
                return word
        return None

    def abandon(self, word: Word) -> None:
        """Drop the entry of a definition that failed to compile, wherever it sits."""
        for i in range(len(self.entries) - 1, -1, -1):
            if self.entries[i] is word:
                del self.entries[i]
                return

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return reversed(self.entries)


def _pop_args(stk: Stack, arity: int) -> tuple:
    args = ()
    try:
        for _ in range(arity):
            args = (stk.pop(),) + args
    except ForthStackUnderflow:
        _restore(stk, args)
        raise
    return args

def _restore(stk: Stack, args: tuple) -> None:
    for v in args:
        stk.push(v)


def _make_wrapper(fn: Callable[..., Any], name: str) -> tuple[Callable[..., Any], dict]:
    meta = get_stack_effects(fn=fn, name=name)

    match meta['valency']:
        case 0:
            def push(stk, _): return None
        case 1:
            def push(stk, res): stk.push(res)
        case _:
            def push(stk, res):
                for v in res: stk.push(v)

    if meta['output']:
        def call(ctx, *args): return fn(*args, out=ctx.out)
    else:
        def call(ctx, *args): return fn(*args)

    match meta['arity']:
        case -2: # pass stack as-is
            def w_s(ctx):
                push(ctx.data, call(ctx, ctx.data))
            return w_s, meta
        case 0: # no arguments
            def w_0(ctx):
                push(ctx.data, call(ctx))
            return w_0, meta
        case _:
            arity = meta['arity']
            def w_n(ctx):
                args = _pop_args(ctx.data, arity)
                try:
                    res = call(ctx, *args)
                except ForthError:
                    _restore(ctx.data, args)
                    raise
                push(ctx.data, res)
            return w_n, meta
