## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import os
from dataclasses import dataclass, replace

from .errors import ConfigError


_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off', '')


def _env_flag(environ, key: str) -> bool:
    value = environ.get(key, '').strip().lower()
    if value in _TRUE_VALUES: return True
    if value in _FALSE_VALUES: return False
    raise ConfigError(f"Environment variable `{key}` expects a boolean, got `{value}`.")

def _env_int(environ, key: str) -> int:
    value = environ.get(key, '').strip()
    if not value: return 0
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"Environment variable `{key}` expects an integer, got `{value}`.") from None


@dataclass(frozen=True)
class RuntimeConfig:
    """Settings shared by every verb call of a run.

    `blocking_wait` switches the `wait` verb to the busy-waiting variant, which stalls the
    entire process (including the asyncio event loop) for the requested period.
    """
    verbose: int = 0
    blocking_wait: bool = False
    plain: bool = False

    @classmethod
    def from_env(cls, environ=None) -> "RuntimeConfig":
        environ = os.environ if environ is None else environ
        return cls(verbose=_env_int(environ, 'BASICVERBS_VERBOSE'),
                   blocking_wait=_env_flag(environ, 'BASICVERBS_BLOCKING_WAIT'),
                   plain=_env_flag(environ, 'BASICVERBS_PLAIN'))

    def updated(self, **changes) -> "RuntimeConfig":
        return replace(self, **changes)
