## plates — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from dataclasses import dataclass, field


MAX_WORD = 2**32 - 1
RESERVED_PREFIX = '__'


@dataclass(frozen=True)
class Token:
    PUSH = 'Push'
    DEFN = 'Defn'
    CALLIF = 'CallIf'
    EXIT = 'Exit'
    ASTERISK = 'Asterisk'
    LBRACE = 'LeftCurlyBracket'
    RBRACE = 'RightCurlyBracket'
    LPAREN = 'LeftParen'
    RPAREN = 'RightParen'
    FUNCTION_NAME = 'FunctionName'
    WORD = 'Word'
    ARGUMENT = 'Argument'

    type: str
    value: int | str | None = None

    def __str__(self):
        return self.type if self.value is None else f"{self.type}({self.value!r})"


## INSTRUCTIONS
@dataclass(frozen=True)
class PushData:
    value: int

@dataclass(frozen=True)
class PushFunction:
    name: str

@dataclass(frozen=True)
class PushRandom:
    pass

@dataclass(frozen=True)
class PushArg:
    index: int

@dataclass(frozen=True)
class Define:
    name: str
    arity: int
    body: tuple = field(default_factory=tuple)

@dataclass(frozen=True)
class CallIf:
    pass

@dataclass(frozen=True)
class Exit:
    pass

Instruction = PushData | PushFunction | PushRandom | PushArg | Define | CallIf | Exit


## WORDS
@dataclass(frozen=True)
class Data:
    value: int

@dataclass(frozen=True)
class Function:
    name: str

Word = Data | Function
