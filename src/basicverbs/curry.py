## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Currying for verbs: the scripting host passes whatever tokens appear on a line, so every
# wrapped function must cope with receiving too few, exactly enough, or too many arguments.
#

import inspect
from typing import Any, Callable, Sequence

from .types import Partial, Result, is_placeholder
from .errors import NotCallableError, VerbTypeError


def get_arity(fn: Callable, name: str | None = None) -> tuple[int, bool]:
    """Inspect the signature of `fn` and return `(arity, variadic)`.

    Arity counts required positional parameters only, so optional ones never block saturation.
    """
    op_name = name or getattr(fn, '__name__', '<unnamed>')
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        raise VerbTypeError(f"Function `{op_name}` has no inspectable signature, specify its arity explicitly.") from None

    params = list(sig.parameters.values())
    positional = [p for p in params if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
                                       and p.default is inspect.Parameter.empty]
    has_varargs = any(p.kind == inspect.Parameter.VAR_POSITIONAL for p in params)
    return len(positional), has_varargs


def curry(fn: Callable, arity: int | None = None, variadic: bool | None = None, name: str = "") -> Partial:
    if isinstance(fn, Partial):
        return fn
    if arity is None:
        arity, inferred = get_arity(fn, name)
        variadic = inferred if variadic is None else variadic
    if arity < 0:
        raise VerbTypeError(f"Arity of `{name or getattr(fn, '__name__', '<unnamed>')}` must not be negative.")
    return Partial(fn=fn, arity=arity, bound=(), variadic=bool(variadic), name=name)


def curry_n(n: int, fn: Callable, name: str = "") -> Partial:
    """Fix the effective arity of an unbounded function like `max`; larger calls reduce in full."""
    return curry(fn, arity=n, variadic=True, name=name)


def _combine(bound: tuple, args: Sequence) -> tuple:
    pending = list(args)
    combined = []
    for x in bound:
        combined.append(pending.pop(0) if is_placeholder(x) and pending else x)
    combined.extend(pending)
    return tuple(combined)


def step(partial: Partial, args: Sequence = ()) -> Result | Partial:
    combined = _combine(partial.bound, args)
    head = combined[:partial.arity]

    if len(head) < partial.arity or any(is_placeholder(x) for x in head):
        return Partial(fn=partial.fn, arity=partial.arity, bound=combined,
                       variadic=partial.variadic, name=partial.name)

    if partial.variadic:
        return Result(partial.fn(*(x for x in combined if not is_placeholder(x))))
    return Result(partial.fn(*head))


def apply(fn: Callable | Partial, args: Sequence = ()) -> Any:
    """Apply `args` to a curried function, returning the value or a further `Partial`."""
    outcome = step(fn if isinstance(fn, Partial) else curry(fn), args)
    return outcome.value if isinstance(outcome, Result) else outcome


def invoke(value: Any, *args) -> Any:
    """Call a value produced by an earlier verb, e.g. the `Partial` returned by `pow 2`."""
    if isinstance(value, Result):
        return value(*args)
    if isinstance(value, Partial):
        return apply(value, args)
    if callable(value):
        return value(*args)
    raise NotCallableError(f"Value `{value!r}` of type {type(value).__name__} is not callable.", verb_args=args)
