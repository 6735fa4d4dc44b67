## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable, TextIO

from .types import Word, Stack, STACK_SIZE
from .errors import ForthUnknownWord
from .compiler import Compiler
from .dictionary import Dictionary
from .builtins import load_builtins_dictionary
from .formatting import format_body
from .interpreter import Context, execute, interpret_line, abandon_definition


class Runtime:
    """Minimal runtime facade focused on embedding and extension.

    One instance owns its stacks, dictionary and compiler state.  Calls are not
    synchronized, so concurrent callers must lock around the whole instance.
    """

    def __init__(self, dictionary: Dictionary | None = None, output: TextIO | None = None,
                 stack_size: int = STACK_SIZE, verbosity: int = 0, stats: dict | None = None):
        self.dictionary = dictionary if dictionary is not None else load_builtins_dictionary()
        self.context = Context(
            data=Stack(stack_size, title="Stack"),
            rstack=Stack(stack_size, title="Return stack"),
            dictionary=self.dictionary,
            compiler=Compiler(),
            output=output,
            verbosity=verbosity,
            stats=stats,
        )

    @property
    def data(self) -> Stack:
        return self.context.data

    @property
    def rstack(self) -> Stack:
        return self.context.rstack

    @property
    def compiling(self) -> bool:
        return self.context.compiler.compiling

    @property
    def prompt(self) -> str:
        return "... " if self.compiling else "ok> "

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def interpret(self, line: str) -> None:
        interpret_line(line, self.context)

    def run(self, source: str) -> Stack:
        """Interpret each line of `source` in order, returning the data stack."""
        for line in source.splitlines():
            self.interpret(line)
        return self.context.data

    def execute(self, word_or_name: Word | str) -> Stack:
        word = word_or_name if isinstance(word_or_name, Word) else self.word(word_or_name)
        execute(word, self.context)
        return self.context.data

    def reset(self) -> None:
        """Empty both stacks and drop any definition in progress."""
        abandon_definition(self.context)
        self.context.data.clear()
        self.context.rstack.clear()

    # Registration ────────────────────────────────────────────────────────────────────────────
    def register_operation(self, name: str, func: Callable, immediate: bool = False) -> Word:
        return self.dictionary.add_primitive(name, func, immediate=immediate)

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def lookup(self, name: str) -> Word | None:
        return self.dictionary.lookup(name)

    def word(self, name: str) -> Word:
        if (word := self.dictionary.lookup(name)) is None:
            raise ForthUnknownWord(f"Unknown word: {name}", forth_token=name)
        return word

    def see(self, name: str) -> str:
        return format_body(self.word(name))

    def list_words(self) -> list[str]:
        """Visible word names, newest first, shadowed entries omitted."""
        seen, names = set(), []
        for word in self.dictionary:
            if word.key in seen: continue
            seen.add(word.key)
            names.append(word.name)
        return names

    def to_stack(self, values: list[Any]) -> Stack:
        """Replace the data stack content with `values`, given top-first."""
        self.context.data.clear()
        for value in reversed(values):
            self.context.data.push(value)
        return self.context.data

    def from_stack(self, stack: Stack | None = None) -> list:
        """Data stack content as a list, top-first."""
        return list(reversed(list(self.context.data if stack is None else stack)))
