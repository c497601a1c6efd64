## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re

from .types import Data, Function, PushData, PushFunction, PushRandom, PushArg, Define, CallIf, Exit


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def format_word(word) -> str:
    match word:
        case Data(n): return str(n)
        case Function(name): return f"function {name}"
    return repr(word)

def format_stack(stack: list) -> str:
    return f"[{', '.join(format_word(w) for w in stack)}]  <-- top"


def format_instruction(it, width=None) -> str:
    """Render an instruction back into source form, abbreviating long bodies."""
    match it:
        case PushData(n): return f"PUSH {n}"
        case PushFunction(name): return f"PUSH {name}"
        case PushRandom(): return "PUSH *"
        case PushArg(i): return f"PUSH ${i}"
        case CallIf(): return "CALLIF"
        case Exit(): return "EXIT"
        case Define(name, arity, body):
            text = f"DEFN {name}({arity}) {{ {' '.join(format_instruction(b) for b in body)} }}"
            if width is not None and len(text) > width:
                text = f"DEFN {name}({arity}) {{ ≪body:{len(body)}≫ }}"
            return text
    return repr(it)


def show_stack(stack: list, end='\n', file=None):
    print(f"\033[90m{format_stack(stack)}\033[0m", end=end, file=file)

def show_instruction(step: int, instruction, width=72, file=None):
    print(f"\033[90m{step:>3} :\033[0m  {format_instruction(instruction, width=width)}", file=file)
