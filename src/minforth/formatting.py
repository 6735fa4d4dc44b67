## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import sys

from .types import Word, Literal, WordRef


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def format_item(it) -> str:
    if isinstance(it, Literal): return str(it.value)
    if isinstance(it, WordRef): return it.word.name
    if isinstance(it, Word): return it.name
    return str(it)

def format_body(word: Word) -> str:
    """Source-like rendering of a word, e.g. `: DOUBLE 2 * ;` for compiled ones."""
    if word.type == Word.PRIMITIVE:
        suffix = ' IMMEDIATE' if word.immediate else ''
        return f"<primitive {word.name}>{suffix}"
    items = ' '.join(format_item(v) for v in word.body)
    return f": {word.name} {items} ;" if items else f": {word.name} ;"


def show_stack(stack, width=48, end='\n', file=None):
    stack_str = ' '.join(format_item(v) for v in stack) if len(stack) else '∅'
    if width is not None and len(stack_str) > width:
        stack_str = '… ' + stack_str[-width+2:]
    print(f"{stack_str:>{width}}" if width else stack_str, end=end, file=file)

def show_trace(step: int, word: Word, stack, depth: int = 0, file=None):
    file = sys.stderr if file is None else file
    print(f"\033[90m{step:>3} :\033[0m  ", end='', file=file)
    show_stack(stack, end='', file=file)
    print(f" \033[36m <=> \033[0m {'  ' * depth}{word.name}", file=file)
