## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import TextIO

from .types import Stack, TRUE, FALSE
from .errors import ForthDivideByZero


def _divmod_truncated(a: int, b: int) -> tuple[int, int]:
    if b == 0:
        raise ForthDivideByZero("Division by zero!")
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q, a - b * q


## ARITHMETIC
def op_add(a: int, b: int) -> int: return a + b
def op_sub(a: int, b: int) -> int: return a - b
def op_mul(a: int, b: int) -> int: return a * b
def op_div(a: int, b: int) -> int: return _divmod_truncated(a, b)[0]
def op_mod(a: int, b: int) -> int: return _divmod_truncated(a, b)[1]
# STACK OPERATIONS
def op_dup(s: Stack) -> int: return s.peek()
def op_drop(_: int) -> None: return None
def op_swap(a: int, b: int) -> tuple[int, int]: return (b, a)
def op_over(a: int, b: int) -> tuple[int, int, int]: return (a, b, a)
def op_rot(a: int, b: int, c: int) -> tuple[int, int, int]: return (b, c, a)
## COMPARISON
def op_equal(a: int, b: int) -> int: return TRUE if a == b else FALSE
def op_lt(a: int, b: int) -> int: return TRUE if a < b else FALSE
def op_gt(a: int, b: int) -> int: return TRUE if a > b else FALSE
## BITWISE LOGIC
def op_and(a: int, b: int) -> int: return a & b
def op_or(a: int, b: int) -> int: return a | b
def op_not(x: int) -> int: return ~x
# INPUT/OUTPUT
def op_emit(c: int, *, out: TextIO) -> None:
    out.write(chr(c & 0xFF))

def op_cr(*, out: TextIO) -> None:
    out.write('\n')

def op_dot(x: int, *, out: TextIO) -> None:
    out.write(f"{x} ")

def op_dot_s(s: Stack, *, out: TextIO) -> None:
    """Print depth then contents from bottom to top, without consuming anything."""
    out.write(f"<sp={len(s)}> " + ''.join(f"{v} " for v in s) + '\n')
