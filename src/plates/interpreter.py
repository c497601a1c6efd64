## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Callable

from .types import Instruction
from .errors import PlatesError
from .parser import Parser
from .runtime import Runtime
from .formatting import show_instruction, show_stack


def interpret_step(parser: Parser, runtime: Runtime) -> tuple[Instruction | None, bool]:
    """Fetch one top-level instruction and run it; returns it with the exit flag."""
    if (instruction := parser.next_instruction()) is None:
        return None, False
    return instruction, runtime.run(instruction)


def interpret(parser: Parser, runtime: Runtime,
              on_error: Callable[[PlatesError], bool] | None = None,
              after_step: Callable[[Runtime, Instruction], None] | None = None,
              verbosity=0, stats=None) -> bool:
    """Drive the parser and runtime until end of input (False) or `EXIT` (True).

    Errors are handed to `on_error`; the loop carries on only if it returns true,
    otherwise the error propagates to the caller.
    """
    step, start = 0, runtime.steps
    while True:
        try:
            instruction, exiting = interpret_step(parser, runtime)
        except PlatesError as exc:
            # Tokens left over from the failing line would be misread as a fresh instruction.
            parser.clear_line()
            if on_error is None or not on_error(exc): raise
            continue

        if instruction is None: break
        step += 1
        if verbosity > 0:
            show_instruction(step, instruction)
        if after_step is not None:
            after_step(runtime, instruction)
        if exiting: break

    if stats is not None:
        stats['steps'] = stats.get('steps', 0) + runtime.steps - start
    return instruction is not None
