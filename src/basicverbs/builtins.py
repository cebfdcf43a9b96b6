## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from . import operators
from .loader import get_verb_name
from .library import Library


def load_builtins_library():
    lib = Library()

    for k in dir(operators):
        if not k.startswith('op_'): continue
        lib.add_verb(get_verb_name(k), getattr(operators, k))

    aliases = {
        'print': 'log', 'power': 'pow', 'max': 'math-max', 'min': 'math-min',
        'sleep': 'wait', 'evaluate': 'eval', 'getElement': 'get-element',
    }
    for alias, name in aliases.items():
        lib.add_alias(alias, name)

    lib.ensure_consistent()
    return lib
