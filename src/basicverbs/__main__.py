## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys
import asyncio
import traceback
from dataclasses import dataclass

import click

from .types import undefined
from .config import RuntimeConfig
from .errors import VerbError, VerbNameError, ExpressionSyntaxError, ScriptSyntaxError, ConfigError
from .runner import parse_literal, parse_option, run_script
from .runtime import Runtime
from .formatting import write_without_ansi, format_value


@dataclass
class CommandRunner:
    runtime: Runtime
    ignore: bool = False
    failure: bool = False

    def _maybe_fatal_error(self, message: str, detail: str, exc_type: str = None, context: str = '') -> None:
        header = detail if not exc_type else f"{detail} (Exception: \033[33m{exc_type}\033[0m)"
        print(f'\033[30;43m {message} \033[0m {header}{chr(10) + context if context else ""}', file=sys.stderr)
        self.failure = True
        if not self.ignore: sys.exit(1)

    def handle_exception(self, exc: Exception, source: str) -> None:
        verb = f"\033[1;97m`{getattr(exc, 'verb_name', None) or '?'}`\033[0m"
        if isinstance(exc, ExpressionSyntaxError):
            context = f"    {exc.expression}\n    {' ' * max((exc.column or 1) - 1, 0)}\033[1;97m^\033[0m"
            self._maybe_fatal_error("SYNTAX ERROR.", f"Expression in {verb} from `\033[97m{source}\033[0m` could not be parsed!", type(exc).__name__, context)
        elif isinstance(exc, ScriptSyntaxError):
            self._maybe_fatal_error("SYNTAX ERROR.", f"Line {exc.line or '?'} of `\033[97m{source}\033[0m` could not be split! {exc}",
                                    type(exc).__name__, f"    {exc.text}" if exc.text else '')
        elif isinstance(exc, VerbNameError):
            self._maybe_fatal_error("NAME ERROR.", f"{exc} Called from `\033[97m{source}\033[0m`.", type(exc).__name__)
        elif isinstance(exc, VerbError):
            self._maybe_fatal_error("VERB ERROR.", f"Verb {verb} failed: {exc}", type(exc).__name__)
        else:
            print(f'\033[30;43m RUNTIME ERROR. \033[0m Verb {verb} caused an error! (Exception: \033[33m{type(exc).__name__}\033[0m)', file=sys.stderr)
            traceback.print_exc()
            self.failure = True
            if not self.ignore: sys.exit(1)

    def run(self, coro_fn, source: str):
        try:
            return asyncio.run(coro_fn())
        except Exception as exc:
            self.handle_exception(exc, source)
            return undefined

    def finalize(self) -> int:
        return 1 if self.failure else 0


def _make_runner(ctx: click.Context) -> tuple[CommandRunner, object]:
    config: RuntimeConfig = ctx.obj['config']
    runner = CommandRunner(Runtime(config=config), ignore=ctx.obj['ignore'])
    return runner, runner.runtime.new_context()


@click.group(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--verbose', '-v', default=0, count=True, help='Trace verb calls, twice to also show results.')
@click.option('--blocking-wait', is_flag=True, help='Make `wait` stall the whole process instead of yielding.')
@click.option('--ignore', '-i', is_flag=True, help='Ignore errors and continue executing.')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes from the output.')
@click.pass_context
def cli(ctx: click.Context, verbose: int, blocking_wait: bool, ignore: bool, plain: bool) -> None:
    try:
        base = RuntimeConfig.from_env()
    except ConfigError as exc:
        raise click.BadParameter(str(exc))
    config = base.updated(verbose=max(verbose, base.verbose), blocking_wait=blocking_wait or base.blocking_wait,
                          plain=plain or base.plain)

    if config.plain:
        writer = write_without_ansi(sys.stdout.write)
        sys.stdout.write, sys.stderr.write = writer, writer

    ctx.ensure_object(dict)
    ctx.obj['config'] = config
    ctx.obj['ignore'] = ignore


@cli.command('call')
@click.argument('verb')
@click.argument('args', nargs=-1)
@click.option('--opt', '-o', 'options', multiple=True, help='Verb option as key=value, e.g. `function=true`.')
@click.pass_context
def call_verb(ctx: click.Context, verb: str, args: tuple[str, ...], options: tuple[str, ...]) -> None:
    runner, context = _make_runner(ctx)
    values = [parse_literal(a) for a in args]
    opts = dict(parse_option(o) for o in options)

    result = runner.run(lambda: runner.runtime.call(context, verb, *values, **opts), f'<CALL:{verb}>')
    if not runner.failure:
        print(format_value(result))
    ctx.exit(runner.finalize())


@cli.command('run')
@click.argument('script', type=click.File('r', encoding='utf-8'))
@click.pass_context
def run_file(ctx: click.Context, script) -> None:
    runner, context = _make_runner(ctx)
    source = script.read()
    runner.run(lambda: run_script(runner.runtime, context, source), script.name or '<STDIN>')
    ctx.exit(runner.finalize())


@cli.command('list')
@click.pass_context
def list_verbs(ctx: click.Context) -> None:
    runtime = Runtime(config=ctx.obj['config'])
    for name, meta in runtime.list_verbs().items():
        print(f"\033[97m{name:<14}\033[0m {meta['summary']}")


def main(argv: list[str] | None = None) -> None:
    cli.main(args=argv, prog_name='basicverbs')


if __name__ == "__main__":
    main()
