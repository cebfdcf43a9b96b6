## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import sys

from .types import Partial, undefined


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def _format_value(it, width=None, indent=0, abbreviate: bool = False):
    if it is undefined: return 'undefined'
    if isinstance(it, (list, tuple, dict)):
        if abbreviate:
            return f'≪{type(it).__name__}:{len(it)}≫'
        if isinstance(it, dict):
            lhs, rhs = '{', '}'
            formatted_items = [f'{_format_value(k)}: {_format_value(v, width, indent + 4)}' for k, v in it.items()]
        else:
            lhs, rhs = '[', ']'
            formatted_items = [_format_value(i, width, indent + 4) for i in it]
        single_line = lhs + ', '.join(formatted_items) + rhs
        # If it fits on one line, use single line format.
        if width is None or len(single_line) + indent <= width: return single_line
        # Otherwise use multi-line format...
        result = lhs + '   '
        for i, item in enumerate(formatted_items):
            if i > 0: result += '\n' + (' ' * (indent + 4))
            result += item
        result += '\n' + (' ' * indent) + rhs
        return result
    if isinstance(it, str):
        return f'≪string:{len(it)}≫' if abbreviate else '"' + it.replace('"', '\\"') + '"'
    if isinstance(it, bool): return str(it).lower()
    if it is None: return 'null'
    if isinstance(it, Partial): return repr(it)
    if callable(it): return f'<{getattr(it, "__name__", "function")}>'
    return str(it)

def format_value(it, width=None, indent=0):
    return _format_value(it, width=width, indent=indent, abbreviate=False)

def format_text(it, width=120):
    """Text for console output: strings are printed raw, everything else formatted."""
    return it if isinstance(it, str) else format_value(it, width=width)


def show_call(step: int, name: str, args, end='\n', file=None, width=72):
    args_str = ' '.join(_format_value(a, abbreviate=True) for a in args) if args else '∅'
    if len(args_str) > width:
        args_str = args_str[:+width-2] + ' …'
    print(f"\033[90m{step:>3} :\033[0m  \033[97m{name}\033[0m \033[36m<=\033[0m {args_str}", end=end, file=file or sys.stdout)

def show_result(step: int, result, file=None, width=72):
    result_str = _format_value(result, width=None)
    if len(result_str) > width:
        result_str = result_str[:+width-2] + ' …'
    print(f"\033[90m{step:>3} :\033[0m  \033[36m=>\033[0m {result_str}", file=file or sys.stdout)
