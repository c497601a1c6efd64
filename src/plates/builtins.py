## plates — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Callable

from .types import Data, MAX_WORD, RESERVED_PREFIX
from .errors import PlatesCodepointError, PlatesIOError


def _is_scalar_value(n: int) -> bool:
    return n <= 0x10FFFF and not (0xD800 <= n <= 0xDFFF)


## INPUT / OUTPUT
def op_print(rt) -> None:
    """Pop characters until a zero terminator, writing each one out."""
    while True:
        n = rt.pop_data()
        try:
            if n == 0:
                rt.stdout.flush()
                return
            if not _is_scalar_value(n):
                raise PlatesCodepointError(f"{n} is not a valid code point")
            rt.stdout.write(chr(n))
        except (OSError, UnicodeEncodeError) as exc:
            raise PlatesIOError(f"failed to write to stdout: {exc}") from exc

def op_input(rt) -> None:
    """Read one line and push it so the first character ends up on top."""
    try:
        line = rt.stdin.readline()
    except (OSError, UnicodeDecodeError) as exc:
        raise PlatesIOError(f"failed to read from stdin: {exc}") from exc
    for c in reversed(line):
        rt.push(Data(ord(c)))

## BITWISE
def op_nand(rt) -> None:
    a = rt.pop_data()
    b = rt.pop_data()
    rt.push(Data(~(a & b) & MAX_WORD))

def op_shift_left(rt) -> None:
    rt.push(Data((rt.pop_data() << 1) & MAX_WORD))

def op_shift_right(rt) -> None:
    rt.push(Data(rt.pop_data() >> 1))


def get_builtin_name(py_name: str) -> str:
    """Map `op_shift_left` to `__shift_left__`."""
    return RESERVED_PREFIX + py_name[3:] + RESERVED_PREFIX


def load_builtins() -> dict[str, Callable]:
    return {get_builtin_name(k): fn for k, fn in globals().items() if k.startswith('op_') and callable(fn)}
