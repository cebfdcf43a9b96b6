## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import math

import pytest

from basicverbs.types import undefined
from basicverbs.errors import ExpressionSyntaxError, ExpressionNameError
from basicverbs.functional import lookup
from basicverbs.expressions import compile_expression, bind, evaluate


def test_bind_maps_positions_to_letters():
    assert bind([5, 4, 3]) == {'a': 5, 'b': 4, 'c': 3}
    assert bind([]) is undefined


def test_automatic_mode():
    assert evaluate("a + b", [5, 4]) == 9
    deferred = evaluate("a + b")
    assert callable(deferred)
    assert deferred(5, 4) == 9


def test_forced_deferred_merges_later_arguments():
    f = evaluate("a + b", [5], function=True)
    assert f(4) == 9
    assert f(10) == 15


def test_forced_immediate_without_arguments():
    assert evaluate("9 + 4", function=False) == 13
    with pytest.raises(ExpressionNameError):
        evaluate("a + 1", function=False)


@pytest.mark.parametrize("text, expected", [
    ("2 + 3 * 4", 14),
    ("(1 + 2) * 3", 9),
    ("-2 ^ 2", -4),
    ("2 ^ 3 ^ 2", 512),
    ("2 ^ -1", 0.5),
    ("7 % 4", 3),
    ("10 / 4", 2.5),
    ("1.5e1 - .5", 14.5),
    ("sqrt(16) + max(1, 5, 3)", 9),
    ("3 >= 3", True),
    ("1 + 1 == 3", False),
])
def test_arithmetic(text, expected):
    assert compile_expression(text).evaluate() == expected


def test_constants_and_scope_precedence():
    assert compile_expression("pi").evaluate() == math.pi
    assert compile_expression("e").evaluate(bind([0, 0, 0, 0, 7])) == 7


def test_free_symbols():
    assert compile_expression("a * b + pi - sqrt(c)").symbols == {'a', 'b', 'c'}


def test_callable_arguments():
    assert evaluate("a(3) + 1", [lookup('inc')]) == 5


def test_compiled_once_and_reused():
    first, second = compile_expression("a * b"), compile_expression("a * b")
    assert first is second
    assert first.evaluate({'a': 2, 'b': 3}) == second.evaluate({'a': 2, 'b': 3}) == 6
    assert first.evaluate({'a': 4, 'b': 5}) == 20


@pytest.mark.parametrize("text", ["a +", "(1 + 2", "2 * * 3", "a = b", "1 $ 2"])
def test_syntax_errors(text):
    with pytest.raises(ExpressionSyntaxError) as info:
        compile_expression(text)
    assert info.value.expression == text


def test_non_text_expression():
    with pytest.raises(ExpressionSyntaxError):
        compile_expression(['a'])


def test_unknown_function():
    with pytest.raises(ExpressionNameError) as info:
        compile_expression("frob(1)").evaluate()
    assert info.value.symbol == 'frob'


@pytest.mark.parametrize("text, expected", [
    ("1 / 0", math.inf),
    ("-1 / 0", -math.inf),
    ("log(0)", -math.inf),
    ("2 ^ -1", 0.5),
    ("0 ^ -1", math.inf),
])
def test_arithmetic_overflows_to_infinity(text, expected):
    assert evaluate(text, function=False) == expected


@pytest.mark.parametrize("text", ["0 / 0", "sqrt(-1)", "5 % 0", "log(-1)", "(-8) ^ 0.5"])
def test_undefined_arithmetic_is_nan(text):
    assert math.isnan(evaluate(text, function=False))


def test_division_by_zero_in_bound_arguments():
    assert evaluate("a / b", [3, 0]) == math.inf
    assert math.isnan(evaluate("sqrt(a)", [-4]))
