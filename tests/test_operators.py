## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import asyncio

import pytest

from basicverbs.types import Partial, Reference, undefined
from basicverbs.errors import InvalidNameError, NotCallableError, ExpressionSyntaxError, VerbNameError, VerbTypeError
from basicverbs.config import RuntimeConfig
from basicverbs.runtime import Runtime


class Emitter:
    def __init__(self):
        self.listeners = {}

    def on(self, name, fn):
        self.listeners.setdefault(name, []).append((fn, False))

    def once(self, name, fn):
        self.listeners.setdefault(name, []).append((fn, True))

    def emit(self, name, *params):
        for entry in list(self.listeners.get(name, [])):
            fn, once = entry
            if once: self.listeners[name].remove(entry)
            fn(*params)


@pytest.fixture
def rt():
    return Runtime(config=RuntimeConfig())

@pytest.fixture
def output():
    return []

@pytest.fixture
def ctx(rt, output):
    return rt.new_context(write=output.append)


@pytest.mark.asyncio
async def test_log_prints_and_returns_text(rt, ctx, output):
    assert await rt.call(ctx, 'log', 'Hello') == 'Hello'
    assert await rt.call(ctx, 'log', Reference('$RESULT')) == 'Hello'
    assert await rt.call(ctx, 'print', [1, 'a', True]) == [1, 'a', True]
    assert output == ['Hello\n', 'Hello\n', '[1, "a", true]\n']


@pytest.mark.asyncio
async def test_log_without_text_returns_printer(rt, ctx, output):
    printer = await rt.call(ctx, 'log')
    assert callable(printer)
    assert await rt.apply(ctx, printer, 'later') == 'later'
    assert output == ['later\n']


@pytest.mark.asyncio
async def test_log_prints_falsy_values(rt, ctx, output):
    assert await rt.call(ctx, 'log', 0) == 0
    assert await rt.call(ctx, 'log', '') == ''
    assert output == ['0\n', '\n']


@pytest.mark.asyncio
async def test_as_and_assign(rt, ctx):
    assert await rt.call(ctx, 'as', 'period', 5) == 5
    assert await rt.call(ctx, 'assign', 'other', 6) == 6
    assert ctx.variables['period'] == 5 and ctx.variables['$period'] == 5
    assert await rt.call(ctx, 'get', 'other') == 6
    assert await rt.call(ctx, 'get', 'missing') is undefined


@pytest.mark.asyncio
async def test_as_curried_for_pipelines(rt, ctx):
    pending = await rt.call(ctx, 'as', 'content')
    assert isinstance(pending, Partial)
    await rt.apply(ctx, pending, 'text')
    assert ctx.variables['$content'] == 'text'


@pytest.mark.asyncio
async def test_as_rejects_empty_name(rt, ctx):
    with pytest.raises(InvalidNameError) as info:
        await rt.call(ctx, 'as', '  ', 1)
    assert info.value.verb_name == 'as'


@pytest.mark.asyncio
async def test_variables_are_substituted(rt, ctx):
    await rt.call(ctx, 'as', 'x', 2)
    assert await rt.call(ctx, 'pow', Reference('$x'), 3) == 8
    assert ctx.result == 8


@pytest.mark.asyncio
async def test_dollar_names_in_plain_strings_are_literal(rt, ctx, output):
    assert await rt.call(ctx, 'as', '$x', 5) == 5
    assert ctx.variables['x'] == 5 and ctx.variables['$x'] == 5

    await rt.call(ctx, 'as', 'y', 7)
    assert await rt.call(ctx, 'get', '$y') == 7

    assert await rt.call(ctx, 'log', '$5 off') == '$5 off'
    assert output == ['$5 off\n']


@pytest.mark.asyncio
@pytest.mark.parametrize("verb, args, expected", [
    ('abs', [-5.1], 5.1),
    ('ceil', [5.1], 6),
    ('floor', [5.9], 5),
    ('round', [1.5], 2),
    ('round', [-1.5], -1),
    ('trunc', [-1.7], -1),
    ('pow', [5, 3], 125),
    ('math-max', [5.1, 1.2, 3.3], 5.1),
    ('math-min', [5.1, 1.2, 3.3], 1.2),
    ('min', [7, 1], 1),
])
async def test_math_verbs(rt, ctx, verb, args, expected):
    assert await rt.call(ctx, verb, *args) == expected


@pytest.mark.asyncio
async def test_math_verbs_are_curried(rt, ctx):
    smaller = await rt.call(ctx, 'math-min', 9)
    assert smaller(3) == 3
    square = await rt.call(ctx, 'pow')
    assert square(4, 2) == 16


@pytest.mark.asyncio
async def test_random_is_in_unit_interval(rt, ctx):
    value = await rt.call(ctx, 'random')
    assert 0.0 <= value < 1.0


@pytest.mark.asyncio
async def test_stringify(rt, ctx):
    assert await rt.call(ctx, 'stringify', {'a': [1, 2]}) == '{"a": [1, 2]}'
    assert await rt.call(ctx, 'stringify', 'x') == '"x"'
    assert await rt.call(ctx, 'stringify') is undefined


@pytest.mark.asyncio
async def test_get_element(rt, ctx):
    data = {'a': 1, 'b': 2, 'c': {'d': 5}}
    assert await rt.call(ctx, 'get-element', data, 'c', 'd') == 5
    assert await rt.call(ctx, 'get-element', data, 'c', 'f') is undefined


@pytest.mark.asyncio
async def test_eval_modes(rt, ctx):
    assert await rt.call(ctx, 'eval', 'a + b', 5, 4) == 9
    f = await rt.call(ctx, 'eval', 'a + b', 5, function=True)
    assert f(4) == 9
    assert await rt.call(ctx, 'eval', '9 + 4', function=False) == 13


@pytest.mark.asyncio
async def test_eval_syntax_error_reaches_host(rt, ctx):
    with pytest.raises(ExpressionSyntaxError) as info:
        await rt.call(ctx, 'eval', 'a +', 1)
    assert info.value.verb_name == 'eval'


@pytest.mark.asyncio
async def test_call_by_name(rt, ctx):
    assert await rt.call(ctx, 'call', 'subtract', 10, 4) == 6
    minus = await rt.call(ctx, 'call', 'subtract', 10)
    assert minus(3) == 7
    with pytest.raises(VerbNameError):
        await rt.call(ctx, 'call', 'frobnicate', 1)


@pytest.mark.asyncio
async def test_calling_a_result_is_an_error(rt, ctx):
    value = await rt.call(ctx, 'pow', 2, 3)
    with pytest.raises(NotCallableError):
        await rt.apply(ctx, value, 1)


@pytest.mark.asyncio
async def test_listen_once(rt, ctx):
    emitter = Emitter()
    task = asyncio.create_task(rt.call(ctx, 'listen-once', emitter, 'connected'))
    await asyncio.sleep(0)
    emitter.emit('connected', 1, 2)
    emitter.emit('connected', 3)
    assert await task == [1, 2]
    assert emitter.listeners['connected'] == []


@pytest.mark.asyncio
async def test_listen_on(rt, ctx):
    emitter, received = Emitter(), []
    assert await rt.call(ctx, 'listen-on', emitter, 'tick', received.append) is emitter
    emitter.emit('tick', 1)
    emitter.emit('tick', 2, 3)
    assert received == [[1], [2, 3]]


@pytest.mark.asyncio
async def test_listen_requires_emitter(rt, ctx):
    with pytest.raises(VerbTypeError):
        await rt.call(ctx, 'listen-once', object(), 'x')
