## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Pausing a pipeline.  `sleep` is the default: it suspends only the current pipeline while
# timers, I/O callbacks and listeners keep running on the event loop.  `busy_wait` holds the
# thread instead and freezes every other task in the process, so it is only reachable through
# the `wait-sync` verb or when `RuntimeConfig.blocking_wait` is set.
#

import time
import asyncio
from typing import Any

from .types import Partial, undefined
from .curry import apply


def _seconds(period: Any) -> float:
    return max(float(period), 0.0)


async def sleep(period: float, response: Any = undefined, *, fallback: Any = undefined) -> Any:
    """Resolve with `response` after `period` seconds, or with `fallback` if no response given."""
    await asyncio.sleep(_seconds(period))
    return fallback if response is undefined else response


def busy_wait(period: float) -> float:
    """Spin on the monotonic clock for `period` seconds without yielding, returns time spent."""
    start = time.monotonic()
    deadline = start + _seconds(period)
    while time.monotonic() < deadline:
        pass
    return time.monotonic() - start


def _stall_then_respond(period: Any, response: Any) -> Any:
    busy_wait(period)
    return response

# Curried over (period, response): `wait-sync 2` returns a callable awaiting its response.
blocking_wait = Partial(fn=_stall_then_respond, arity=2, name='wait-sync')


def wait_blocking(*args) -> Any | Partial:
    return apply(blocking_wait, args)
