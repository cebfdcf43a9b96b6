## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Partial, Result, Reference, undefined, placeholder, __
from .errors import *
from .runtime import Runtime
from .environment import ExecutionContext, VariableEnvironment

_RUNTIME = Runtime()

def __getattr__(name):
    return getattr(_RUNTIME, name)
