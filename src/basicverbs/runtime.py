## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import asyncio
import inspect
from typing import Any, Callable, Iterable

from .types import Verb
from .curry import invoke
from .config import RuntimeConfig
from .library import Library
from .builtins import load_builtins_library
from .formatting import show_call, show_result
from .environment import ExecutionContext


class Runtime:
    """Host-side facade: resolves verbs by name, substitutes `$name` tokens and tracks `$RESULT`."""

    def __init__(self, library: Library | None = None, config: RuntimeConfig | None = None):
        self.library = library or load_builtins_library()
        self.config = config or RuntimeConfig.from_env()

    def new_context(self, write: Callable[[str], Any] | None = None, **overrides) -> ExecutionContext:
        config = self.config.updated(**overrides) if overrides else self.config
        return ExecutionContext(config=config, write=write)

    # Execution ───────────────────────────────────────────────────────────────────────────────
    async def call(self, ctx: ExecutionContext, name: str, *args, **opts) -> Any:
        verb = self.library.get_verb(name)
        return await self._run(ctx, verb.name, lambda a: verb(ctx, opts, *a), args)

    async def apply(self, ctx: ExecutionContext, value: Any, *args) -> Any:
        """Call a value returned by an earlier stage, such as a partially applied verb."""
        return await self._run(ctx, '<apply>', lambda a: invoke(value, *a), args)

    async def _run(self, ctx: ExecutionContext, name: str, fn: Callable, args: tuple) -> Any:
        args = ctx.variables.substitute(args)
        ctx.steps += 1
        step = ctx.steps
        if ctx.config.verbose > 0:
            show_call(step, name, args)

        try:
            result = fn(args)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            if getattr(exc, 'verb_name', None) is None: exc.verb_name = name
            if getattr(exc, 'verb_args', None) is None: exc.verb_args = tuple(args)
            raise

        ctx.result = result
        if ctx.config.verbose > 1:
            show_result(step, result)
        return result

    async def pipeline(self, ctx: ExecutionContext, stages: Iterable[tuple]) -> Any:
        """Run `(name, args)` or `(name, args, opts)` stages strictly in order."""
        result = ctx.result
        for stage in stages:
            name, args, opts = (*stage, {}) if len(stage) == 2 else stage
            result = await self.call(ctx, name, *args, **opts)
        return result

    def call_sync(self, ctx: ExecutionContext, name: str, *args, **opts) -> Any:
        return asyncio.run(self.call(ctx, name, *args, **opts))

    # Registration ────────────────────────────────────────────────────────────────────────────
    def register_verb(self, name: str, func: Callable) -> Verb:
        return self.library.add_verb(name, func)

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def get_signature(self, name: str) -> dict:
        return self.library.get_verb(name).meta

    def list_verbs(self) -> dict[str, dict]:
        return self.library.list_verbs()
