## plates — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from collections import deque

import lark

from .types import Token, MAX_WORD
from .errors import PlatesSyntaxError
from .reader import LineSource


# Keywords are plain strings that also match NAME; lark only assigns the keyword
# type when the whole identifier run equals it, so `PUSH123` stays one NAME.
GRAMMAR = r"""start: _token*
_token: PUSH | DEFN | CALLIF | EXIT | ASTERISK | LBRACE | RBRACE | LPAREN | RPAREN | NAME | WORD | ARGUMENT

// KEYWORDS
PUSH: "PUSH"
DEFN: "DEFN"
CALLIF: "CALLIF"
EXIT: "EXIT"

// PUNCTUATION
ASTERISK: "*"
LBRACE: "{"
RBRACE: "}"
LPAREN: "("
RPAREN: ")"

// TOKENS
NAME: /[A-Za-z_][A-Za-z0-9_]*/
WORD: /[0-9]+/
ARGUMENT: /\$[0-9]+/

// COMMENTS & WHITESPACE
COMMENT: /\/\/[^\n]*/
WS: /\s+/
%ignore WS
%ignore COMMENT
"""

_SIMPLE_TOKENS = {
    'PUSH': Token.PUSH, 'DEFN': Token.DEFN, 'CALLIF': Token.CALLIF, 'EXIT': Token.EXIT,
    'ASTERISK': Token.ASTERISK, 'LBRACE': Token.LBRACE, 'RBRACE': Token.RBRACE,
    'LPAREN': Token.LPAREN, 'RPAREN': Token.RPAREN,
}

_LARK = None

def _get_lark() -> lark.Lark:
    global _LARK
    if _LARK is None:
        _LARK = lark.Lark(GRAMMAR, parser="lalr", lexer="basic")
    return _LARK


_MAX_DIGITS = len(str(MAX_WORD))

def _parse_u32(digits: str) -> int | None:
    # Length check first, very long runs exceed what `int()` accepts.
    if len(digits := digits.lstrip("0") or "0") > _MAX_DIGITS: return None
    return n if (n := int(digits)) <= MAX_WORD else None


def _convert(tok: lark.Token, lineno: int) -> Token:
    match tok.type:
        case "NAME":
            return Token(Token.FUNCTION_NAME, str(tok))
        case "WORD":
            if (n := _parse_u32(tok)) is None:
                raise PlatesSyntaxError(f"invalid word '{tok}'", line=lineno, column=tok.column, token=str(tok))
            return Token(Token.WORD, n)
        case "ARGUMENT":
            if (n := _parse_u32(tok[1:])) is None:
                raise PlatesSyntaxError(f"invalid argument '{tok}'", line=lineno, column=tok.column, token=str(tok))
            return Token(Token.ARGUMENT, n)
    return Token(_SIMPLE_TOKENS[tok.type])


def tokenize(text: str, lineno: int | None = None) -> list[Token]:
    """Convert source text into tokens, raising `PlatesSyntaxError` on the first bad character."""
    def line_of(n): return n if lineno is None else lineno + n - 1

    try:
        return [_convert(tok, line_of(tok.line)) for tok in _get_lark().lex(text)]
    except lark.exceptions.UnexpectedCharacters as exc:
        raise PlatesSyntaxError(f"unexpected character '{exc.char}'", line=line_of(exc.line),
                                column=exc.column, token=exc.char) from None


class Lexer:
    """Token queue refilled one line at a time from a `LineSource`."""

    def __init__(self, source: LineSource):
        self.source = source
        self.queue: deque[Token] = deque()
        self.lineno = 0

    def next_token(self, depth: int) -> Token | None:
        # Blank and comment-only lines produce no tokens, so keep pulling.
        while not self.queue:
            if (line := self.source.next_line(depth)) is None:
                return None
            self.lineno += 1
            self.queue.extend(tokenize(line, lineno=self.lineno))
        return self.queue.popleft()

    def clear(self) -> None:
        self.queue.clear()

    def full_line_consumed(self) -> bool:
        return not self.queue
