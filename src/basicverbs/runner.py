## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Minimal line runner used by the command line: one pipeline per line, stages separated by `|`,
# each stage written as `verb arg arg ...`.  The result of a stage is appended as the last
# argument of the next one, so `pow 2 3 | as 'x'` assigns 8 to `$x`.  Lines starting with `;`
# are comments.  Unquoted `$name` tokens read variables; quoted text is always literal.
#

import ast
import json
import shlex
from typing import Any

from .types import Reference
from .errors import ScriptSyntaxError
from .environment import ExecutionContext, is_variable_token


def parse_literal(token: str) -> Any:
    """Interpret a command-line token as JSON or a Python literal, falling back to raw text."""
    try:
        return json.loads(token)
    except ValueError:
        pass
    try:
        return ast.literal_eval(token)
    except (ValueError, SyntaxError):
        return token


def parse_option(token: str) -> tuple[str, Any]:
    key, sep, value = token.lstrip('-').partition('=')
    return key, (parse_literal(value) if sep else True)


def parse_token(token: str) -> Any:
    """Interpret one unquoted or quoted script token; bare `$name` tokens become references."""
    if _is_quoted(token):
        return _unquote(token)
    if is_variable_token(token):
        return Reference(token)
    return parse_literal(token)


def parse_stage(tokens: list[str] | str) -> tuple[str, list, dict]:
    if isinstance(tokens, str): tokens = tokenize(tokens)
    if not tokens:
        raise ScriptSyntaxError("Empty pipeline stage.")
    name, args, opts = tokens[0], [], {}
    for token in tokens[1:]:
        if token.startswith('--') and len(token) > 2:
            key, value = parse_option(token)
            opts[key] = value
        else:
            args.append(parse_token(token))
    return name, args, opts


def _is_quoted(token: str) -> bool:
    return len(token) >= 2 and token[0] == token[-1] and token[0] in ('"', "'")

def _unquote(token: str) -> str:
    return token[1:-1] if _is_quoted(token) else token


def tokenize(line: str) -> list[str]:
    """Split on whitespace and bare `|`, keeping quoted text (and the quotes) as one token."""
    lexer = shlex.shlex(line, posix=False, punctuation_chars='|')
    lexer.whitespace_split = True
    lexer.commenters = ''
    try:
        return list(lexer)
    except ValueError as exc:
        raise ScriptSyntaxError(f"Cannot split `{line}`: {exc}.", text=line) from exc


def split_stages(line: str) -> list[list[str]]:
    stages = [[]]
    for token in tokenize(line):
        if token == '|': stages.append([])
        else: stages[-1].append(token)
    return stages


def iter_pipelines(source: str):
    for line_no, line in enumerate(source.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith(';'): continue
        try:
            stages = [parse_stage(stage) for stage in split_stages(line)]
        except ScriptSyntaxError as exc:
            exc.line, exc.text = line_no, line
            raise
        yield line_no, stages


async def run_script(runtime, ctx: ExecutionContext, source: str) -> Any:
    result = ctx.result
    for _, stages in iter_pipelines(source):
        for index, (name, args, opts) in enumerate(stages):
            if index > 0: args = args + [result]
            result = await runtime.call(ctx, name, *args, **opts)
    return result
