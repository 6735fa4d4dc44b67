## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from . import operators
from . import compiler as C
from .loader import get_forth_name
from .dictionary import Dictionary


def load_builtins_dictionary() -> Dictionary:
    symbols = {
        'ADD': '+', 'SUB': '-', 'MUL': '*', 'DIV': '/',
        'EQUAL': '=', 'LT': '<', 'GT': '>',
        'DOT': '.', 'DOT-S': '.S',
    }

    dictionary = Dictionary()

    # Primitives (wrapped via Dictionary helper)
    for k in dir(operators):
        if not k.startswith('op_'): continue
        name = get_forth_name(k)
        dictionary.add_primitive(symbols.get(name, name), getattr(operators, k))

    # Defining words
    dictionary.add_word(':', C.word_colon)
    dictionary.add_word(';', C.word_semicolon, immediate=True)
    return dictionary
