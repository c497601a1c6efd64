## plates — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Word, Data, Function
from .errors import *
from .runtime import Runtime
from .runner import execute

_RUNTIME = Runtime()


def run(source: str, verbosity=0, stats=None) -> bool:
    exited, _ = execute(source, _RUNTIME, verbosity=verbosity, stats=stats)
    return exited

def to_stack(values: list[int | str]) -> list[Word]:
    return [Function(v) if isinstance(v, str) else Data(v) for v in values]

def from_stack(stack: list[Word] | None = None) -> list[int | str]:
    """Plain values of the stack, top first; function references become their names."""
    stack = _RUNTIME.value_stack if stack is None else stack
    return [w.value if isinstance(w, Data) else w.name for w in reversed(stack)]

def reset() -> None:
    global _RUNTIME
    _RUNTIME = Runtime()

def __getattr__(name):
    return getattr(_RUNTIME, name)
