## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# plates — A minimal stack language with user functions and a trampolined interpreter.
#

from .parser import Parser
from .reader import ListReader
from .runtime import Runtime
from .interpreter import interpret


def execute(source: str, runtime: Runtime | None = None, verbosity=0, stats=None) -> tuple[bool, Runtime]:
    runtime = Runtime() if runtime is None else runtime
    parser = Parser(ListReader.from_text(source))
    exited = interpret(parser, runtime, verbosity=verbosity, stats=stats)
    # The session carries on, so whatever the exited call left pending must not run later.
    if exited: runtime.instruction_stack.clear()
    return exited, runtime
