## plates — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys
import random
from typing import Callable, TextIO

from .types import Word, Data, Function, Instruction, PushData, PushFunction, PushRandom, PushArg, Define, CallIf, Exit, MAX_WORD, RESERVED_PREFIX
from .errors import PlatesError, PlatesStackUnderflow, PlatesTypeError, PlatesNameError
from .builtins import load_builtins
from .formatting import format_stack


class Runtime:
    """Stack machine executing one top-level instruction at a time.

    Function calls never recurse in Python: the body of a called function is
    pushed onto `instruction_stack` and picked up by the loop in `run()`, so the
    depth of interpreted recursion is only bounded by memory.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None,
                 rng: random.Random | None = None, builtins: dict[str, Callable] | None = None):
        self.value_stack: list[Word] = []
        self.function_table: dict[str, tuple[int, tuple]] = {}
        self.instruction_stack: list[Instruction] = []
        self.args_array: list[Word] = []

        self.builtins = load_builtins() if builtins is None else builtins
        self.rng = rng or random.Random()
        self._stdin, self._stdout = stdin, stdout
        self.steps = 0

    # Streams resolved late, so redirections of `sys.stdout` are honored.
    @property
    def stdin(self) -> TextIO:
        return sys.stdin if self._stdin is None else self._stdin

    @property
    def stdout(self) -> TextIO:
        return sys.stdout if self._stdout is None else self._stdout

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def run(self, instruction: Instruction) -> bool:
        """Execute an instruction and everything it calls; returns True on `EXIT`."""
        self.instruction_stack.append(instruction)
        while self.instruction_stack:
            current = self.instruction_stack.pop()
            self.steps += 1
            try:
                if self.run_instruction(current):
                    return True
            except BaseException as exc:
                # Abort the whole call chain, but keep the value stack as it is.
                self.instruction_stack.clear()
                if isinstance(exc, PlatesError) and exc.plates_instruction is None:
                    exc.plates_instruction = current
                raise
        return False

    def run_instruction(self, instruction: Instruction) -> bool:
        match instruction:
            case Exit():
                return True
            case PushData(n):
                self.push(Data(n))
            case PushFunction(name):
                self.push(Function(name))
            case PushRandom():
                self.push(Data(self.rng.getrandbits(32)))
            case PushArg(index):
                if index >= len(self.args_array):
                    raise PlatesNameError(f"argument ${index} is undefined")
                self.push(self.args_array[index])
            case Define(name, arity, body):
                self.function_table[name] = (arity, tuple(body))
            case CallIf():
                func = self.pop_function()
                if self.pop_data() != 0:
                    self.call_function(func)
            case _:
                raise PlatesTypeError(f"cannot execute {instruction!r}")
        return False

    def call_function(self, name: str) -> None:
        self.args_array.clear()

        if name.startswith(RESERVED_PREFIX):
            if (builtin := self.builtins.get(name)) is None:
                raise PlatesNameError(f"built-in function '{name}' is undefined")
            builtin(self)
            return

        if (entry := self.function_table.get(name)) is None:
            raise PlatesNameError(f"function '{name}' is undefined")
        arity, body = entry
        for _ in range(arity):
            self.args_array.append(self.pop())
        self.instruction_stack.extend(reversed(body))

    # Value stack ─────────────────────────────────────────────────────────────────────────────
    def push(self, word: Word) -> None:
        if isinstance(word, Data): assert 0 <= word.value <= MAX_WORD
        self.value_stack.append(word)

    def pop(self) -> Word:
        if not self.value_stack:
            raise PlatesStackUnderflow("cannot pop from empty stack")
        return self.value_stack.pop()

    def pop_data(self) -> int:
        match self.pop():
            case Function(name):
                raise PlatesTypeError(f"expected data but received function '{name}'")
            case Data(n):
                return n

    def pop_function(self) -> str:
        match self.pop():
            case Data(n):
                raise PlatesTypeError(f"expected function but received data '{n}'")
            case Function(name):
                return name

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def stack_to_string(self) -> str:
        return format_stack(self.value_stack)
