## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re

import lark


GRAMMAR = r"""start: WORD*

// TOKENS
WORD: /\S+/

// WHITESPACE
WS: /\s+/
%ignore WS
"""

NUMBER_RE = re.compile(r'[+-]?[0-9]+')

_PARSER = None


def _get_parser() -> lark.Lark:
    global _PARSER
    if _PARSER is None:
        _PARSER = lark.Lark(GRAMMAR, parser="lalr", lexer="basic")
    return _PARSER


class Tokenizer:
    """Cursor over the whitespace-delimited tokens of one input line.

    Each token is handed out exactly once, whether it's consumed by the
    interpreter loop or by a word reading ahead (like `:` reading a name).
    """

    def __init__(self, line: str):
        self.line = line
        self._tokens = iter(_get_parser().parse(line).children)

    def next_token(self) -> lark.Token | None:
        return next(self._tokens, None)

    def __iter__(self):
        while (token := self.next_token()) is not None:
            yield token


def parse_number(token: str) -> int | None:
    """Strict base-10 signed integer; any stray character means it's not a number."""
    if NUMBER_RE.fullmatch(token) is None:
        return None
    return int(token)
