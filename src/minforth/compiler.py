## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Word, Literal, WordRef
from .errors import ForthMissingName, ForthUnexpectedSemicolon


class Compiler:
    """Definition state, plus the buffer of encoded values for the word being built."""

    INTERACTIVE = 0
    COMPILING = 1

    def __init__(self):
        self.target: Word | None = None
        self.buffer: list | None = None

    @property
    def state(self) -> int:
        return Compiler.COMPILING if self.target is not None else Compiler.INTERACTIVE

    @property
    def compiling(self) -> bool:
        return self.target is not None

    def begin(self, word: Word) -> None:
        assert self.target is None, "Nested definitions are not supported."
        self.target, self.buffer = word, []

    def append(self, value: Literal | WordRef) -> None:
        assert self.buffer is not None
        self.buffer.append(value)

    def finish(self) -> Word:
        if self.target is None:
            raise ForthUnexpectedSemicolon("Error: ';' outside definition", forth_token=';')
        word = self.target
        word.ptr, self.buffer = self.buffer, None
        self.target = None
        return word

    def abort(self) -> Word | None:
        """Drop the buffer and return the half-built word, if any, for the caller to discard."""
        word, self.target, self.buffer = self.target, None, None
        return word


## DEFINING WORDS
def word_colon(ctx) -> None:
    name = ctx.tokens.next_token() if ctx.tokens is not None else None
    if name is None:
        raise ForthMissingName("Error: expected word name after ':'", forth_token=':')
    # Registered right away so the body can refer to the word itself.
    word = ctx.dictionary.add_compiled(str(name))
    ctx.compiler.begin(word)

def word_semicolon(ctx) -> None:
    ctx.compiler.finish()
