## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class VerbError(Exception):
    def __init__(self, message: str = "", *, verb_name=None, verb_args=None):
        """Base class for all errors raised by verbs or their adapters."""
        super().__init__(message)
        self.verb_name: str = verb_name
        self.verb_args: tuple = verb_args


class InvalidNameError(VerbError, ValueError):
    pass

class NotCallableError(VerbError, TypeError):
    pass

class VerbNameError(VerbError, NameError):
    pass

class VerbTypeError(VerbError, TypeError):
    """Loading-time problems when wrapping Python functions, e.g. unknown arity."""
    pass

class ConfigError(VerbError, ValueError):
    pass


class ExpressionSyntaxError(VerbError, ValueError):
    def __init__(self, message, *, expression=None, line=None, column=None, token=None):
        super().__init__(message)
        self.expression = expression
        self.line = line
        self.column = column
        self.token = token


class ExpressionNameError(VerbNameError):
    def __init__(self, message: str = "", *, symbol=None, expression=None):
        super().__init__(message)
        self.symbol = symbol
        self.expression = expression


class ScriptSyntaxError(VerbError, ValueError):
    """A script line that cannot be split into stages, e.g. an unclosed quote."""
    def __init__(self, message: str = "", *, line=None, text=None):
        super().__init__(message)
        self.line = line
        self.text = text
