## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from collections import namedtuple

from .errors import ForthStackOverflow, ForthStackUnderflow


STACK_SIZE = 256

# Canonical flags, all bits set for true.
TRUE, FALSE = -1, 0


# Encoded values stored in a compiled body; the tag is the class itself.
class Literal(namedtuple('Literal', ['value'])):
    __slots__ = ()

    def __repr__(self):
        return str(self.value)

class WordRef(namedtuple('WordRef', ['word'])):
    __slots__ = ()

    def __repr__(self):
        return self.word.name


class Word:
    PRIMITIVE = 1
    COMPILED = 2

    def __init__(self, type, ptr, name, immediate=False):
        assert type in (Word.PRIMITIVE, Word.COMPILED)
        self.type = type
        self.ptr = ptr          # callable(ctx) for primitives, list of encoded values otherwise
        self.name = name
        self.key = name.upper()
        self.immediate = immediate

    @property
    def body(self) -> list | None:
        return self.ptr if self.type == Word.COMPILED else None

    def __repr__(self):
        return f"{self.name}"


class Stack:
    """Bounded last-in-first-out sequence of integers.

    Iteration and indexing go from bottom to top, matching how `.S` prints.
    """

    __slots__ = ('title', 'capacity', '_items')

    def __init__(self, capacity: int = STACK_SIZE, title: str = "Stack"):
        self.title = title
        self.capacity = capacity
        self._items = []

    def push(self, value: int) -> None:
        if len(self._items) >= self.capacity:
            raise ForthStackOverflow(f"{self.title} overflow!", forth_stack=self.title)
        self._items.append(value)

    def pop(self) -> int:
        if not self._items:
            raise ForthStackUnderflow(f"{self.title} underflow!", forth_stack=self.title)
        return self._items.pop()

    def peek(self) -> int:
        if not self._items:
            raise ForthStackUnderflow(f"{self.title} underflow!", forth_stack=self.title)
        return self._items[-1]

    def clear(self) -> None:
        self._items.clear()

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __repr__(self):
        if not self._items:
            return "< >"
        return "< " + " ".join(str(v) for v in self._items) + " >"
