## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import sys
from typing import Any, Callable

from .types import undefined, Reference
from .errors import InvalidNameError
from .config import RuntimeConfig


RESULT_KEY = '$RESULT'

VARIABLE_TOKEN = re.compile(r'\$[A-Za-z_]\w*')


def is_variable_token(token: Any) -> bool:
    return isinstance(token, str) and VARIABLE_TOKEN.fullmatch(token) is not None


def canonical_names(raw_name: str) -> tuple[str, str]:
    """Return the bare name and its `$`-prefixed alias; a leading `$` in `raw_name` is optional."""
    if not isinstance(raw_name, str):
        raise InvalidNameError(f"Variable name must be a string, got {type(raw_name).__name__}.", verb_args=(raw_name,))
    name = raw_name.strip()
    bare = name[1:] if name.startswith('$') else name
    if not bare.strip():
        raise InvalidNameError(f"Variable name `{raw_name}` is empty.", verb_args=(raw_name,))
    return bare, '$' + bare


class VariableEnvironment:
    """Per-run symbol table; every assignment is reachable both as `name` and `$name`."""

    def __init__(self):
        self._values: dict[str, Any] = {}

    def assign(self, raw_name: str, value: Any) -> Any:
        name, alias = canonical_names(raw_name)
        self._values[name] = value
        self._values[alias] = value
        return value

    def resolve(self, name: str) -> Any:
        return self._values.get(name, undefined)

    def last_result(self) -> Any:
        return self._values.get(RESULT_KEY, undefined)

    def set_last_result(self, value: Any) -> None:
        self._values[RESULT_KEY] = value

    def substitute(self, args) -> list:
        """Replace `Reference` tokens by their values; plain strings are passed through untouched."""
        return [self.resolve(a.token) if isinstance(a, Reference) else a for a in args]

    def keys(self):
        return self._values.keys()

    def __getitem__(self, name: str) -> Any:
        return self.resolve(name)

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"VariableEnvironment({self._values!r})"


class ExecutionContext:
    """State of one script run, passed by reference into every verb call."""

    def __init__(self, config: RuntimeConfig | None = None, write: Callable[[str], Any] | None = None):
        self.config = config or RuntimeConfig()
        self.variables = VariableEnvironment()
        self.write = write or sys.stdout.write
        self.steps = 0

    @property
    def result(self) -> Any:
        return self.variables.last_result()

    @result.setter
    def result(self, value: Any) -> None:
        self.variables.set_last_result(value)
