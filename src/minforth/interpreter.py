## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys
from typing import TextIO
from dataclasses import dataclass, field

from .types import Word, Literal, WordRef, Stack
from .errors import ForthError, ForthUnknownWord, ForthUnexpectedSemicolon
from .parser import Tokenizer, parse_number
from .compiler import Compiler
from .dictionary import Dictionary
from .formatting import show_trace


@dataclass
class Context:
    """All state of one interpreter instance; nothing is shared between instances."""
    data: Stack
    rstack: Stack
    dictionary: Dictionary
    compiler: Compiler = field(default_factory=Compiler)
    output: TextIO | None = None
    tokens: Tokenizer | None = None
    verbosity: int = 0
    steps: int = 0
    stats: dict | None = None

    @property
    def out(self) -> TextIO:
        return sys.stdout if self.output is None else self.output


def execute(word: Word, ctx: Context, depth: int = 0) -> None:
    if ctx.verbosity == 2 or (ctx.verbosity == 1 and depth == 0):
        show_trace(ctx.steps, word, ctx.data, depth)
    ctx.steps += 1
    if ctx.stats is not None:
        ctx.stats['steps'] = ctx.stats.get('steps', 0) + 1

    match word.type:
        case Word.PRIMITIVE:
            word.ptr(ctx)
        case Word.COMPILED:
            for item in word.ptr:
                match item:
                    case Literal(value):
                        ctx.data.push(value)
                    case WordRef(ref):
                        execute(ref, ctx, depth + 1)


def interpret_token(token: str, ctx: Context) -> None:
    compiler = ctx.compiler
    if (number := parse_number(token)) is not None:
        if compiler.compiling:
            compiler.append(Literal(number))
        else:
            try:
                ctx.data.push(number)
            except ForthError as exc:
                exc.forth_token = str(token)
                raise
        return

    if (word := ctx.dictionary.lookup(token)) is None:
        raise ForthUnknownWord(f"Unknown word: {token}", forth_token=str(token), forth_column=getattr(token, 'column', None))

    if compiler.compiling and not word.immediate:
        compiler.append(WordRef(word))
    else:
        try:
            execute(word, ctx)
        except ForthError as exc:
            if exc.forth_word is None: exc.forth_word = word
            if exc.forth_token is None: exc.forth_token = str(token)
            raise


def abandon_definition(ctx: Context) -> None:
    if (word := ctx.compiler.abort()) is not None:
        ctx.dictionary.abandon(word)


def report_error(exc: ForthError, ctx: Context) -> None:
    ctx.out.write(f"{exc}\n")


def interpret_line(line: str, ctx: Context) -> None:
    """Interpret one line; recoverable errors are reported, fatal ones are reported then raised."""
    ctx.tokens = Tokenizer(line)
    try:
        for token in ctx.tokens:
            try:
                interpret_token(token, ctx)
            except ForthUnexpectedSemicolon as exc:
                report_error(exc, ctx)
            except ForthError as exc:
                if ctx.compiler.compiling:
                    abandon_definition(ctx)
                report_error(exc, ctx)
                if exc.fatal: raise
                break
    finally:
        ctx.tokens = None
