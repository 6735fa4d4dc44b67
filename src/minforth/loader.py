## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import inspect
from typing import Any, ForwardRef, Callable, get_origin, get_args

from .types import Stack
from .errors import ForthTypeMissing


def get_forth_name(py_name: str) -> str:
    """Map a Python `op_*` function name to its Forth word name."""
    if not py_name.startswith("op_"):
        raise ForthTypeMissing(f"Operator function `{py_name}` requires prefix `op_` by convention.", forth_token=py_name)
    return py_name[3:].replace('_', '-').upper()


def _is_stack_annotation(annotation: Any) -> bool:
    if isinstance(annotation, ForwardRef) or hasattr(annotation, '__forward_arg__'):
        annotation = annotation.__forward_arg__
    if annotation is Stack:
        return True
    if isinstance(annotation, str):
        return annotation == 'Stack' or annotation.endswith('.Stack')
    return False


def get_stack_effects(*, fn: Callable, name: str = None) -> dict:
    """Parse the type annotations from Python to determine the stack effects in Forth.

    Arity (input) conventions:
        -2: pass the data stack as-is to the function, nothing is popped
        >=0: pop that many items from the data stack, deepest item first

    Valency (output) conventions:
        0: nothing pushed
        1: single output pushed
        >=1: tuple of multiple outputs pushed in order

    A keyword-only parameter named `out` receives the output stream.
    """
    assert fn is not None, "Must specify the function to inspect."

    sig = inspect.signature(fn)
    params = list(sig.parameters.values())
    op_name = name or getattr(fn, '__name__', '<unnamed>')

    positional = [p for p in params if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    keywords = [p for p in params if p.kind == inspect.Parameter.KEYWORD_ONLY]
    if any(p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD) for p in params):
        raise ForthTypeMissing(f"Operation `{op_name}` cannot take variadic arguments.", forth_token=op_name)
    if unknown := [p.name for p in keywords if p.name != 'out']:
        raise ForthTypeMissing(f"Operation `{op_name}` has unsupported keyword parameters: {', '.join(unknown)}.", forth_token=op_name)

    ret_ann = sig.return_annotation
    if ret_ann is inspect.Signature.empty:
        raise ForthTypeMissing(f"Operation `{op_name}` must declare a return annotation.", forth_token=op_name)

    missing_inputs = [p.name for p in positional if p.annotation is inspect.Parameter.empty]
    if missing_inputs:
        missing = ', '.join(missing_inputs)
        raise ForthTypeMissing(f"Operation `{op_name}` must annotate parameters: {missing}.", forth_token=op_name)

    returns_none = (ret_ann is type(None) or ret_ann is None)
    returns_tuple = (ret_ann is tuple or get_origin(ret_ann) is tuple)
    if returns_tuple and not get_args(ret_ann):
        raise ForthTypeMissing(f"Operation `{op_name}` must list the items of its tuple return.", forth_token=op_name)

    pass_stack = (len(positional) == 1 and _is_stack_annotation(positional[0].annotation))

    meta = {
        'arity': -2 if pass_stack else len(positional),
        'valency': 0 if returns_none else (len(get_args(ret_ann)) if returns_tuple else 1),
        'output': bool(keywords),
    }
    return meta
