## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class PlatesError(Exception):
    def __init__(self, message: str = "", *, plates_instruction=None):
        """Base class for all plates-raised errors."""
        super().__init__(message)
        self.plates_instruction: object = plates_instruction

class PlatesSyntaxError(PlatesError, SyntaxError):
    def __init__(self, message, *, line=None, column=None, token=None):
        super().__init__(message)
        self.msg = message
        self.line = line
        self.column = column
        self.token = token

    def __str__(self):
        return self.msg


class PlatesRuntimeError(PlatesError, RuntimeError):
    pass

class PlatesStackUnderflow(PlatesRuntimeError, IndexError):
    pass

class PlatesTypeError(PlatesRuntimeError, TypeError):
    """Expected a data word and found a function reference, or vice versa."""
    pass

class PlatesNameError(PlatesRuntimeError, NameError):
    """Undefined function, unknown built-in or out-of-range argument."""
    pass

class PlatesCodepointError(PlatesRuntimeError, ValueError):
    pass

class PlatesIOError(PlatesRuntimeError, OSError):
    pass
