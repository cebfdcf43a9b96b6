## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Verbs callable by name from scripts.  Every verb takes `(ctx, opts, *args)`; most of them
# route their arguments through the curry adapter, so supplying fewer arguments than needed
# returns a callable that waits for the rest.
#

import json
import random
import asyncio
from typing import Any

from .types import Partial, undefined
from .curry import apply, curry, invoke
from .delay import sleep, busy_wait, wait_blocking
from .errors import VerbTypeError
from .formatting import format_text
from .functional import lookup, get_path
from .expressions import evaluate
from .environment import ExecutionContext


## CONSOLE
def op_log(ctx: ExecutionContext, opts: dict, *args) -> Any:
    """Print text on the console and return it; without text, return the printer itself.

    log 'Hello'
    log $RESULT
    """
    def printer(*texts):
        ctx.write(' '.join(format_text(t) for t in texts) + '\n')
        return texts[0] if len(texts) == 1 else list(texts)

    if not args or args[0] is undefined:
        return printer
    return printer(*args)

def op_stringify(ctx: ExecutionContext, opts: dict, obj: Any = undefined) -> Any:
    """Serialize a value as JSON text."""
    if obj is undefined or callable(obj): return undefined
    return json.dumps(obj, default=lambda o: None if o is undefined or callable(o) else str(o))


## VARIABLES
def op_as(ctx: ExecutionContext, opts: dict, *args) -> Any:
    """Assign a value to a variable, readable afterwards as `$name`.

    as 'period' 5
    read 'filename.txt' | as 'content'
    """
    return apply(curry(ctx.variables.assign, arity=2, name='as'), args)

def op_assign(ctx: ExecutionContext, opts: dict, *args) -> Any:
    """Synonym of `as`."""
    return op_as(ctx, opts, *args)

def op_get(ctx: ExecutionContext, opts: dict, *args) -> Any:
    """Read a variable by name, `undefined` if it was never assigned."""
    return apply(curry(ctx.variables.resolve, arity=1, name='get'), args)


## TIMING
def op_wait(ctx: ExecutionContext, opts: dict, *args) -> Any:
    """Pause the pipeline for a period in seconds, then return the response or previous result.

    wait 5
    wait 0.5 'done'
    """
    if not args:
        return Partial(fn=lambda *more: op_wait(ctx, opts, *more), arity=1, variadic=True, name='wait')

    period, response = args[0], (args[1] if len(args) > 1 else undefined)
    if ctx.config.blocking_wait:
        busy_wait(period)
        return ctx.result if response is undefined else response
    # The previous result is captured now, later stages must not change what this resolves to.
    return sleep(period, response, fallback=ctx.result)

def op_wait_sync(ctx: ExecutionContext, opts: dict, *args) -> Any:
    """Stall the whole process for a period in seconds, then return the response.

    Unlike `wait` nothing else runs during the pause, not even unrelated timers or listeners.
    With only a period, returns a callable awaiting the response.
    """
    return wait_blocking(*args)


## EXPRESSIONS
def op_eval(ctx: ExecutionContext, opts: dict, expression: str, *args) -> Any:
    """Evaluate a formula with arguments bound to `a`, `b`, `c`, ...

    eval 'a + b' 5 4
    eval --function 'a * 2'
    """
    return evaluate(expression, args, function=(opts or {}).get('function', undefined))


## MATH
def op_abs(ctx: ExecutionContext, opts: dict, *args) -> Any:
    """Absolute value."""
    return apply(lookup('abs'), args)

def op_ceil(ctx: ExecutionContext, opts: dict, *args) -> Any:
    """Round up to the nearest integer."""
    return apply(lookup('ceil'), args)

def op_floor(ctx: ExecutionContext, opts: dict, *args) -> Any:
    """Round down to the nearest integer."""
    return apply(lookup('floor'), args)

def op_round(ctx: ExecutionContext, opts: dict, *args) -> Any:
    """Round to the nearest integer, halves upwards."""
    return apply(lookup('round'), args)

def op_trunc(ctx: ExecutionContext, opts: dict, *args) -> Any:
    """Drop the fractional digits."""
    return apply(lookup('trunc'), args)

def op_pow(ctx: ExecutionContext, opts: dict, *args) -> Any:
    """Raise the first number to the power of the second.

    pow 5 3
    """
    return apply(lookup('pow'), args)

def op_math_max(ctx: ExecutionContext, opts: dict, *args) -> Any:
    """Largest of two or more numbers."""
    return apply(lookup('max'), args)

def op_math_min(ctx: ExecutionContext, opts: dict, *args) -> Any:
    """Smallest of two or more numbers."""
    return apply(lookup('min'), args)

def op_random(ctx: ExecutionContext, opts: dict) -> float:
    """Random number in [0, 1)."""
    return random.random()


## DATA
def op_get_element(ctx: ExecutionContext, opts: dict, obj: Any = undefined, *keys) -> Any:
    """Follow keys or indices into nested data, `undefined` when any step is missing.

    get-element $config 'server' 'port'
    """
    return get_path(keys, obj)

def op_call(ctx: ExecutionContext, opts: dict, name: str, *args) -> Any:
    """Call a function of the functional library by name, curried.

    call 'subtract' 10 4
    """
    return apply(lookup(name), args)


## EVENTS
def _check_emitter(emitter: Any, method: str) -> None:
    if not callable(getattr(emitter, method, None)):
        raise VerbTypeError(f"Value of type {type(emitter).__name__} is not an event emitter, `{method}` is missing.")

async def op_listen_once(ctx: ExecutionContext, opts: dict, emitter: Any, event_name: str) -> list:
    """Wait for the next occurrence of an event, returning its parameters as a list.

    listen-once $emitter 'connected'
    """
    _check_emitter(emitter, 'once')
    future = asyncio.get_running_loop().create_future()

    def resolve(*params):
        if not future.done(): future.set_result(list(params))
    emitter.once(event_name, resolve)
    return await future

def op_listen_on(ctx: ExecutionContext, opts: dict, emitter: Any, event_name: str, callback: Any) -> Any:
    """Call back every time an event fires, with its parameters as a list; returns the emitter.

    listen-on $emitter 'start' $handler
    """
    _check_emitter(emitter, 'on')
    emitter.on(event_name, lambda *params: invoke(callback, list(params)))
    return emitter
