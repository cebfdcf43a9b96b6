## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable
from dataclasses import dataclass, field

from .errors import NotCallableError


class Undefined:
    """Sentinel for values that are absent, as opposed to present and `None`."""
    __slots__ = ()
    _singleton = None

    def __new__(cls):
        # Only one instance is ever created, the module-level `undefined` below.
        if cls._singleton is None:
            cls._singleton = super().__new__(cls)
        return cls._singleton

    def __repr__(self):
        return "undefined"

    def __bool__(self):
        return False

    def __reduce__(self):
        return (Undefined, ())


class Placeholder:
    """Marks an argument position to be filled by a later call of a curried function."""
    __slots__ = ()
    _singleton = None

    def __new__(cls):
        if cls._singleton is None:
            cls._singleton = super().__new__(cls)
        return cls._singleton

    def __repr__(self):
        return "__"


# All checks for missing values must be done by comparing to this, with `is`.
undefined = Undefined()

# Positional placeholder for curried verbs, e.g. `pow __ 2` squares its later argument.
__ = placeholder = Placeholder()


def is_placeholder(x: Any) -> bool:
    return x is placeholder


@dataclass(frozen=True)
class Reference:
    """Unquoted `$name` token from a script, replaced by the variable's value before a verb runs."""
    token: str

    def __repr__(self):
        return self.token


@dataclass(frozen=True)
class Result:
    """Fully-applied outcome of a curried function."""
    value: Any

    def __call__(self, *args):
        raise NotCallableError(f"Result `{self.value!r}` is a value and cannot be called with {len(args)} argument(s).",
                               verb_args=args)


@dataclass(frozen=True)
class Partial:
    """Immutable snapshot of a curried function and the arguments bound so far.

    `arity` is the number of positions that must be filled (without placeholders) before the
    function is applied.  When `variadic` is set, a saturated call passes every argument to the
    function instead of truncating to `arity`.
    """
    fn: Callable[..., Any]
    arity: int
    bound: tuple = ()
    variadic: bool = False
    name: str = field(default="", compare=False)

    def __call__(self, *args):
        from .curry import apply
        return apply(self, args)

    @property
    def remaining(self) -> int:
        filled = sum(1 for x in self.bound[:self.arity] if not is_placeholder(x))
        return max(self.arity - filled, 0)

    def __repr__(self):
        name = self.name or getattr(self.fn, '__name__', 'λ')
        bound = ' '.join(repr(x) for x in self.bound)
        return f"<{name}{' ' + bound if bound else ''} …{self.remaining}>"


@dataclass
class Verb:
    name: str
    fn: Callable[..., Any]
    meta: dict = field(default_factory=dict)

    def __call__(self, ctx, opts, *args):
        return self.fn(ctx, opts, *args)

    def __repr__(self):
        return f"{self.name}"
