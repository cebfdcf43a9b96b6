## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import inspect
from typing import Any, Callable

from .errors import VerbTypeError


def get_python_name(verb_name: str) -> str:
    """Map a verb name to its Python function name."""
    return 'op_' + re.sub(r'\?$', '_q', re.sub(r'!$', '_b', verb_name)).replace('-', '_')


def get_verb_name(py_name: str) -> str:
    """Inverse of `get_python_name` for well-formed operator names."""
    if not py_name.startswith("op_"):
        raise VerbTypeError(f"Verb function `{py_name}` requires prefix `op_` by convention.", verb_name=py_name)
    return re.sub(r'_q$', '?', re.sub(r'_b$', '!', py_name[3:])).replace('_', '-')


def get_verb_meta(fn: Callable[..., Any], name: str) -> dict:
    """Check that `fn` follows the `(ctx, opts, *args)` convention and describe it.

    Metadata holds the one-line summary from the docstring, the number of explicit arguments
    after `ctx, opts`, and whether the verb returns an awaitable.
    """
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        raise VerbTypeError(f"Verb `{name}` has no inspectable signature.", verb_name=name) from None

    params = list(sig.parameters.values())
    positional = [p for p in params if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    if len(positional) < 2:
        raise VerbTypeError(f"Verb `{name}` must accept `(ctx, opts, ...)` as its first parameters.", verb_name=name)

    doc = inspect.getdoc(fn) or ''
    return {
        'name': name,
        'summary': doc.split('\n', 1)[0],
        'arguments': [p.name for p in positional[2:]],
        'variadic': any(p.kind == inspect.Parameter.VAR_POSITIONAL for p in params),
        'async': inspect.iscoroutinefunction(fn),
    }
