## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from basicverbs.types import undefined, Reference
from basicverbs.errors import InvalidNameError
from basicverbs.environment import VariableEnvironment, ExecutionContext, is_variable_token


@pytest.mark.parametrize("name", ["period", "$period", "  period ", " $period"])
def test_assign_is_readable_with_and_without_dollar(name):
    env = VariableEnvironment()
    assert env.assign(name, 5) == 5
    assert env.resolve('period') == 5
    assert env.resolve('$period') == 5


def test_assign_returns_value_unchanged():
    env = VariableEnvironment()
    value = {'a': [1, 2]}
    assert env.assign('x', value) is value


def test_assign_overwrites_both_keys():
    env = VariableEnvironment()
    env.assign('x', 1)
    env.assign('$x', 2)
    assert env.resolve('x') == 2 and env.resolve('$x') == 2


@pytest.mark.parametrize("name", ["", "   ", "$", " $ "])
def test_assign_rejects_empty_names(name):
    env = VariableEnvironment()
    with pytest.raises(InvalidNameError):
        env.assign(name, 1)
    assert len(env) == 0


def test_resolve_miss_is_undefined_not_none():
    env = VariableEnvironment()
    env.assign('nothing', None)
    assert env.resolve('missing') is undefined
    assert env.resolve('nothing') is None
    assert not undefined


def test_last_result_tracking():
    ctx = ExecutionContext()
    assert ctx.result is undefined
    ctx.result = 42
    assert ctx.variables.last_result() == 42
    assert ctx.variables.resolve('$RESULT') == 42


def test_substitute_replaces_references_only():
    env = VariableEnvironment()
    env.assign('x', 3)
    args = [Reference('$x'), '$x', 'x', 4, Reference('$y')]
    assert env.substitute(args) == [3, '$x', 'x', 4, undefined]


@pytest.mark.parametrize("token, expected", [
    ('$x', True), ('$RESULT', True), ('$_tmp2', True),
    ('$', False), ('$5 off', False), ('$1', False), ('x', False), (5, False),
])
def test_variable_tokens(token, expected):
    assert is_variable_token(token) is expected
