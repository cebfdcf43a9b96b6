## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Registry of curried library functions, looked up by name at call time by the `call` verb and
# re-used by the math verbs.  Argument order follows the data-last convention: the collection
# or object being operated on always comes last, so partial application reads naturally.
#

import math
import operator
from functools import reduce as _reduce
from typing import Any, Callable, NamedTuple

from .types import Partial, undefined
from .curry import curry, curry_n, invoke
from .errors import VerbNameError


class Entry(NamedTuple):
    fn: Callable[..., Any]
    arity: int
    variadic: bool = False


num = int | float


def round_half_up(x: num) -> int:
    """Round like JavaScript's `Math.round`, halves towards positive infinity."""
    return math.floor(x + 0.5)

def _nth(i: int, xs: Any) -> Any:
    try:
        return xs[int(i)]
    except (IndexError, KeyError, TypeError, ValueError):
        return undefined

def _prop(key: Any, obj: Any) -> Any:
    if isinstance(obj, dict):
        return obj.get(key, undefined)
    if isinstance(obj, (list, tuple, str)) and isinstance(key, int):
        return _nth(key, obj)
    return undefined

def get_path(keys: list, obj: Any) -> Any:
    for key in keys:
        obj = _prop(key, obj)
        if obj is undefined: break
    return obj

def _assoc(key: Any, value: Any, obj: dict) -> dict:
    return {**obj, key: value}

def _map(fn: Any, xs: list) -> list: return [invoke(fn, x) for x in xs]
def _filter(fn: Any, xs: list) -> list: return [x for x in xs if invoke(fn, x)]
def _reduce_fn(fn: Any, acc: Any, xs: list) -> Any: return _reduce(lambda a, x: invoke(fn, a, x), xs, acc)

def _pipe(*fns) -> Callable[..., Any]:
    def piped(*args):
        result = invoke(fns[0], *args)
        for fn in fns[1:]:
            result = invoke(fn, result)
        return result
    return piped

def _compose(*fns) -> Callable[..., Any]:
    return _pipe(*reversed(fns))


FUNCTIONS: dict[str, Entry] = {
    # ARITHMETIC
    'add': Entry(operator.add, 2),
    'subtract': Entry(operator.sub, 2),
    'multiply': Entry(operator.mul, 2),
    'divide': Entry(operator.truediv, 2),
    'modulo': Entry(operator.mod, 2),
    'negate': Entry(operator.neg, 1),
    'inc': Entry(lambda x: x + 1, 1),
    'dec': Entry(lambda x: x - 1, 1),
    # MATH
    'abs': Entry(abs, 1),
    'ceil': Entry(math.ceil, 1),
    'floor': Entry(math.floor, 1),
    'pow': Entry(operator.pow, 2),
    'round': Entry(round_half_up, 1),
    'trunc': Entry(math.trunc, 1),
    'sqrt': Entry(math.sqrt, 1),
    'max': Entry(max, 2, True),
    'min': Entry(min, 2, True),
    # LISTS
    'head': Entry(lambda xs: _nth(0, xs), 1),
    'tail': Entry(lambda xs: xs[1:], 1),
    'last': Entry(lambda xs: _nth(-1, xs), 1),
    'nth': Entry(_nth, 2),
    'take': Entry(lambda n, xs: xs[:n], 2),
    'drop': Entry(lambda n, xs: xs[n:], 2),
    'concat': Entry(operator.add, 2),
    'append': Entry(lambda x, xs: list(xs) + [x], 2),
    'prepend': Entry(lambda x, xs: [x] + list(xs), 2),
    'reverse': Entry(lambda xs: xs[::-1], 1),
    'length': Entry(len, 1),
    'map': Entry(_map, 2),
    'filter': Entry(_filter, 2),
    'reduce': Entry(_reduce_fn, 3),
    'sum': Entry(sum, 1),
    'product': Entry(math.prod, 1),
    # OBJECTS
    'prop': Entry(_prop, 2),
    'path': Entry(get_path, 2),
    'keys': Entry(lambda obj: list(obj.keys()), 1),
    'values': Entry(lambda obj: list(obj.values()), 1),
    'assoc': Entry(_assoc, 3),
    # STRINGS
    'split': Entry(lambda sep, s: s.split(sep), 2),
    'join': Entry(lambda sep, xs: sep.join(str(x) for x in xs), 2),
    'to-upper': Entry(str.upper, 1),
    'to-lower': Entry(str.lower, 1),
    'trim': Entry(str.strip, 1),
    # LOGIC
    'equals': Entry(operator.eq, 2),
    'not': Entry(operator.not_, 1),
    'gt': Entry(operator.gt, 2),
    'gte': Entry(operator.ge, 2),
    'lt': Entry(operator.lt, 2),
    'lte': Entry(operator.le, 2),
    # COMPOSITION
    'identity': Entry(lambda x: x, 1),
    'always': Entry(lambda x: (lambda *_: x), 1),
    'pipe': Entry(_pipe, 1, True),
    'compose': Entry(_compose, 1, True),
}


def lookup(name: str) -> Partial:
    if (entry := FUNCTIONS.get(name)) is None:
        raise VerbNameError(f"Function `{name}` not found in functional library.", verb_args=(name,))
    if entry.variadic:
        return curry_n(entry.arity, entry.fn, name=name)
    return curry(entry.fn, arity=entry.arity, name=name)


def list_functions() -> list[str]:
    return sorted(FUNCTIONS.keys())
