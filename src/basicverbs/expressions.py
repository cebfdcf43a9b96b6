## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Algebraic formulas evaluated against positional arguments, which are bound to the symbols
# `a`, `b`, `c`, ... in order.  Formulas are parsed once into a tree of closures and can then
# be evaluated any number of times with different bindings.
#

import math
import operator
from functools import lru_cache, wraps
from dataclasses import dataclass
from typing import Any, Callable, Sequence

import lark

from .types import undefined
from .curry import invoke
from .errors import ExpressionSyntaxError, ExpressionNameError


GRAMMAR = r"""?start: expr
?expr: sum
    | sum COMP_OP sum                   -> compare
?sum: product
    | sum ADD_OP product                -> binary
?product: unary
    | product MUL_OP unary              -> binary
?unary: power
    | ADD_OP unary                      -> unary
?power: atom
    | atom "^" unary                    -> power
?atom: NUMBER                           -> number
    | NAME                              -> symbol
    | NAME "(" ")"                      -> call
    | NAME "(" arguments ")"            -> call
    | "(" expr ")"

arguments: expr ("," expr)*

COMP_OP: /==|!=|<=|>=|<|>/
ADD_OP: "+" | "-"
MUL_OP: "*" | "/" | "%"
NUMBER: /(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?/
NAME: /[A-Za-z_][A-Za-z_0-9]*/

%import common.WS
%ignore WS
"""

_PARSER = lark.Lark(GRAMMAR, start='start', parser='lalr', propagate_positions=True)


CONSTANTS: dict[str, Any] = {'pi': math.pi, 'e': math.e, 'true': True, 'false': False}

# Arithmetic follows IEEE floats: division by zero gives an infinity, undefined results give NaN.
def _divide(a, b):
    if b == 0:
        if a == 0 or a != a: return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return operator.truediv(a, b)

def _modulo(a, b):
    return math.nan if b == 0 else operator.mod(a, b)

def _power(a, b):
    try:
        value = operator.pow(a, b)
    except ZeroDivisionError:
        return math.inf
    except OverflowError:
        odd = float(b).is_integer() and int(b) % 2 == 1
        return -math.inf if a < 0 and odd else math.inf
    return math.nan if isinstance(value, complex) else value

def _real(fn):
    @wraps(fn)
    def wrapper(*args):
        try:
            return fn(*args)
        except ValueError:
            return math.nan
        except OverflowError:
            return math.inf
    return wrapper

def _logarithm(fn):
    return _real(lambda x: -math.inf if x == 0 else fn(x))


FUNCTIONS: dict[str, Callable[..., Any]] = {
    'sqrt': _real(math.sqrt), 'abs': abs, 'ceil': _real(math.ceil), 'floor': _real(math.floor),
    'round': _real(lambda x: math.floor(x + 0.5)), 'exp': _real(math.exp),
    'log': _logarithm(math.log), 'log10': _logarithm(math.log10),
    'sin': _real(math.sin), 'cos': _real(math.cos), 'tan': _real(math.tan),
    'min': min, 'max': max, 'pow': _power,
}

_BINARY = {
    '+': operator.add, '-': operator.sub, '*': operator.mul, '/': _divide, '%': _modulo,
    '==': operator.eq, '!=': operator.ne, '<': operator.lt, '<=': operator.le, '>': operator.gt, '>=': operator.ge,
}


class _Compiler(lark.Transformer):
    """Turn the parse tree into nested closures of the form `f(scope) -> value`."""

    def __init__(self, text: str):
        super().__init__()
        self.text = text
        self.symbols: set[str] = set()

    def number(self, children):
        (token,) = children
        value = float(token) if any(c in token for c in '.eE') else int(token)
        return lambda scope: value

    def symbol(self, children):
        name, text = str(children[0]), self.text
        if name not in CONSTANTS: self.symbols.add(name)

        def lookup(scope):
            if name in scope: return scope[name]
            if name in CONSTANTS: return CONSTANTS[name]
            raise ExpressionNameError(f"Undefined symbol `{name}` in expression `{text}`.", symbol=name, expression=text)
        return lookup

    def call(self, children):
        name, text = str(children[0]), self.text
        args = children[1] if len(children) > 1 else []

        def apply(scope):
            values = [a(scope) for a in args]
            if name in scope: return invoke(scope[name], *values)
            if name in FUNCTIONS: return FUNCTIONS[name](*values)
            raise ExpressionNameError(f"Undefined function `{name}` in expression `{text}`.", symbol=name, expression=text)
        return apply

    def arguments(self, children):
        return list(children)

    def binary(self, children):
        lhs, op, rhs = children
        fn = _BINARY[str(op)]
        return lambda scope: fn(lhs(scope), rhs(scope))

    compare = binary

    def unary(self, children):
        op, operand = children
        if str(op) == '-':
            return lambda scope: -operand(scope)
        return operand

    def power(self, children):
        base, exponent = children
        return lambda scope: _power(base(scope), exponent(scope))


@dataclass(frozen=True)
class CompiledExpression:
    text: str
    symbols: frozenset
    _fn: Callable[[dict], Any]

    def evaluate(self, scope: dict | None = None) -> Any:
        return self._fn({} if scope is None or scope is undefined else scope)

    def __repr__(self):
        return f"CompiledExpression({self.text!r})"


def compile_expression(text: str) -> CompiledExpression:
    if not isinstance(text, str):
        raise ExpressionSyntaxError(f"Expression must be text, got {type(text).__name__}.", expression=text)
    return _compile(text)


@lru_cache(maxsize=256)
def _compile(text: str) -> CompiledExpression:
    try:
        tree = _PARSER.parse(text)
    except lark.exceptions.UnexpectedInput as exc:
        def attr(k): return getattr(exc, k, None)
        def position(k): return v if isinstance(v := attr(k), int) else None
        token_val = getattr(token, 'value', '') if (token := attr('token')) is not None else ''
        raise ExpressionSyntaxError(f"Cannot parse expression `{text}`: {exc}", expression=text,
                                    line=position('line'), column=position('column'), token=token_val) from None

    compiler = _Compiler(text)
    fn = compiler.transform(tree)
    return CompiledExpression(text=text, symbols=frozenset(compiler.symbols), _fn=fn)


def symbol_name(index: int) -> str:
    return chr(ord('a') + index)

def bind(args: Sequence) -> dict | Any:
    """Map positional arguments to the symbols `a`, `b`, `c`, ...; no arguments bind nothing."""
    if not args: return undefined
    return {symbol_name(i): v for i, v in enumerate(args)}


def evaluate(expression: str, args: Sequence = (), function: Any = undefined) -> Any:
    """Evaluate now, or return a callable that evaluates once it receives further arguments.

    `function=True` always defers, `function=False` always evaluates immediately, and anything
    else defers only when no arguments were given.
    """
    compiled = compile_expression(expression)
    args = tuple(args)

    if function is True or (function is not False and not args):
        def deferred(*more):
            return compiled.evaluate(bind(args + more))
        deferred.__name__ = f"eval({expression!r})"
        return deferred

    return compiled.evaluate(bind(args))
