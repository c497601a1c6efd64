## plates — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from plates.types import PushData, PushFunction, PushRandom, PushArg, Define, CallIf, Exit
from plates.parser import Parser, parse
from plates.reader import ListReader
from plates.errors import PlatesSyntaxError


def _parse_error(source: str) -> str:
    """Helper: parse and return the message of the syntax error raised."""
    with pytest.raises(PlatesSyntaxError) as info:
        parse(source)
    return str(info.value)


@pytest.mark.parametrize("source, expected", [
    ("PUSH 123", PushData(123)),
    ("PUSH foo", PushFunction("foo")),
    ("PUSH *", PushRandom()),
    ("CALLIF", CallIf()),
    ("EXIT", Exit()),
    ("DEFN foo(0) {}", Define("foo", 0, ())),
    ("DEFN swap(2) { PUSH $0 PUSH $1 }", Define("swap", 2, (PushArg(0), PushArg(1)))),
])
def test_parse_single_instruction(source, expected):
    assert parse(source) == [expected]


def test_parse_program_across_lines():
    source = """
    // Print 'A' when called with a true condition.
    DEFN say_a(0) {
        PUSH 0 PUSH 65
        PUSH 1 PUSH __print__ CALLIF
    }
    PUSH 1
    PUSH say_a
    CALLIF
    """
    body = (PushData(0), PushData(65), PushData(1), PushFunction("__print__"), CallIf())
    assert parse(source) == [Define("say_a", 0, body), PushData(1), PushFunction("say_a"), CallIf()]


@pytest.mark.parametrize("body", ["", "PUSH 1", "PUSH $0 CALLIF", "EXIT"])
def test_reserved_prefix_is_rejected_regardless_of_body(body):
    message = _parse_error(f"DEFN __mine(1) {{ {body} }}")
    assert message == "cannot define function '__mine': the prefix '__' is reserved for built-in functions"


@pytest.mark.parametrize("source, message", [
    ("DEFN foo(0) { DEFN bar(0) { } }", "nested definitions are not allowed"),
    ("}", "unexpected token RightCurlyBracket"),
    ("(", "unexpected token LeftParen"),
    ("PUSH )", "unexpected token RightParen"),
    ("PUSH PUSH", "unexpected token Push"),
    ("DEFN 42", "unexpected token Word(42)"),
    ("DEFN foo *", "unexpected token Asterisk"),
    ("DEFN foo(PUSH", "unexpected token Push"),
    ("DEFN foo(0}", "unexpected token RightCurlyBracket"),
    ("DEFN foo(0)(", "unexpected token LeftParen"),
    ("DEFN foo(bar) {}", "unexpected token FunctionName('bar')"),
    ("PUSH $0", "cannot use arguments outside functions"),
    ("PUSH", "unexpected end of input after Push"),
    ("DEFN", "unexpected end of input after Defn"),
    ("DEFN foo", "unexpected end of input in signature of function 'foo'"),
    ("DEFN foo(", "unexpected end of input in signature of function 'foo'"),
    ("DEFN foo(0", "unexpected end of input in signature of function 'foo'"),
    ("DEFN foo(0)", "unexpected end of input in signature of function 'foo'"),
    ("DEFN foo(0) {", "unterminated definition for 'foo'"),
    ("DEFN foo(1) { PUSH $0", "unterminated definition for 'foo'"),
])
def test_parse_failures(source, message):
    assert _parse_error(source) == message


def test_depth_follows_open_constructs():
    reader = ListReader(["DEFN f(0) {", "PUSH", "1", "}"])
    parser = Parser(reader)
    assert parser.next_instruction() == Define("f", 0, (PushData(1),))
    assert parser.next_instruction() is None
    assert reader.depths == [0, 1, 2, 1, 0]
    assert parser.depth == 0


def test_depth_is_reset_after_error():
    reader = ListReader(["DEFN f(0) {", "PUSH -", "PUSH 1"])
    parser = Parser(reader)
    with pytest.raises(PlatesSyntaxError):
        parser.next_instruction()
    assert parser.depth == 0
    assert parser.next_instruction() == PushData(1)
    assert parser.next_instruction() is None
    assert reader.depths == [0, 1, 0, 0]


def test_clear_line_drops_remaining_tokens():
    parser = Parser(ListReader(["PUSH 1 PUSH 2", "PUSH 3"]))
    assert parser.next_instruction() == PushData(1)
    assert not parser.full_line_consumed()
    parser.clear_line()
    assert parser.full_line_consumed()
    assert list(parser) == [PushData(3)]


def test_uppercase_names_are_accepted():
    assert parse("DEFN Foo(0) {} PUSH Foo") == [Define("Foo", 0, ()), PushFunction("Foo")]
