## plates — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Token, Instruction, PushData, PushFunction, PushRandom, PushArg, Define, CallIf, Exit, RESERVED_PREFIX
from .errors import PlatesSyntaxError
from .lexer import Lexer
from .reader import LineSource, ListReader


class Parser:
    """Recursive-descent parser producing one top-level instruction at a time.

    The `depth` counter is raised for every construct that may continue on the
    next line, and is passed to the line source so it can prompt accordingly.
    """

    def __init__(self, source: Lexer | LineSource):
        self.lexer = source if isinstance(source, Lexer) else Lexer(source)
        self.depth = 0

    def __iter__(self):
        while (instruction := self.next_instruction()) is not None:
            yield instruction

    def next_instruction(self) -> Instruction | None:
        try:
            return self.consume_instruction(False, "")
        except PlatesSyntaxError:
            # A failure mid-construct must not leave continuation prompts behind.
            self.depth = 0
            raise

    def clear_line(self) -> None:
        self.lexer.clear()

    def full_line_consumed(self) -> bool:
        return self.lexer.full_line_consumed()

    def _error(self, message: str, token: Token | None = None) -> PlatesSyntaxError:
        return PlatesSyntaxError(message, line=self.lexer.lineno, token=token)

    def consume_instruction(self, inside_defn: bool, func_name: str) -> Instruction | None:
        token = self.lexer.next_token(self.depth)
        if token is None:
            if inside_defn: raise self._error(f"unterminated definition for '{func_name}'")
            return None

        match token.type:
            case Token.PUSH:
                return self.consume_push(inside_defn)
            case Token.DEFN if inside_defn:
                raise self._error("nested definitions are not allowed", token)
            case Token.DEFN:
                return self.consume_defn()
            case Token.CALLIF:
                return CallIf()
            case Token.EXIT:
                return Exit()
            case Token.RBRACE if inside_defn:
                return None
        raise self._error(f"unexpected token {token}", token)

    def consume_push(self, inside_defn: bool) -> Instruction:
        # The value may be on the next line.
        self.depth += 1

        token = self.lexer.next_token(self.depth)
        if token is None:
            raise self._error(f"unexpected end of input after {Token.PUSH}")
        match token.type:
            case Token.WORD:
                instruction = PushData(token.value)
            case Token.FUNCTION_NAME:
                instruction = PushFunction(token.value)
            case Token.ASTERISK:
                instruction = PushRandom()
            case Token.ARGUMENT if not inside_defn:
                raise self._error("cannot use arguments outside functions", token)
            case Token.ARGUMENT:
                instruction = PushArg(token.value)
            case _:
                raise self._error(f"unexpected token {token}", token)

        self.depth -= 1
        return instruction

    def consume_defn(self) -> Instruction:
        # Signature and body may span several lines.
        self.depth += 1

        token = self.lexer.next_token(self.depth)
        if token is None:
            raise self._error(f"unexpected end of input after {Token.DEFN}")
        if token.type != Token.FUNCTION_NAME:
            raise self._error(f"unexpected token {token}", token)
        func_name = token.value
        if func_name.startswith(RESERVED_PREFIX):
            raise self._error(f"cannot define function '{func_name}': the prefix "
                              f"'{RESERVED_PREFIX}' is reserved for built-in functions", token)

        eof_msg = f"unexpected end of input in signature of function '{func_name}'"
        self.expect(Token.LPAREN, eof_msg)
        arity = self.expect(Token.WORD, eof_msg).value
        self.expect(Token.RPAREN, eof_msg)
        self.expect(Token.LBRACE, eof_msg)

        body = []
        while (instruction := self.consume_instruction(True, func_name)) is not None:
            body.append(instruction)

        self.depth -= 1
        return Define(func_name, arity, tuple(body))

    def expect(self, token_type: str, eof_msg: str) -> Token:
        token = self.lexer.next_token(self.depth)
        if token is None:
            raise self._error(eof_msg)
        if token.type != token_type:
            raise self._error(f"unexpected token {token}", token)
        return token


def parse(source: str) -> list[Instruction]:
    """Parse a complete program held in memory."""
    return list(Parser(ListReader.from_text(source)))
