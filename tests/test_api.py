## plates — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

import plates.api as J


@pytest.fixture(autouse=True)
def fresh_runtime():
    J.reset()
    yield


def test_run_string_push():
    assert J.run("PUSH 1 PUSH 2") is False
    assert J.from_stack() == [2, 1]


def test_definitions_persist_between_runs():
    J.run("DEFN twice(1) { PUSH $0 PUSH $0 }")
    J.run("PUSH 3 PUSH 1 PUSH twice CALLIF")
    assert J.from_stack() == [3, 3]
    assert 'twice' in J.function_table


def test_run_reports_exit():
    assert J.run("PUSH 1 EXIT PUSH 2") is True
    assert J.from_stack() == [1]


def test_errors_are_exposed():
    with pytest.raises(J.PlatesNameError):
        J.run("PUSH 1 PUSH nope CALLIF")
    with pytest.raises(J.PlatesSyntaxError):
        J.run("PUSH -1")


def test_stack_conversion_helpers():
    stack = J.to_stack([1, "f"])
    assert stack == [J.Data(1), J.Function("f")]
    assert J.from_stack(stack) == ["f", 1]


def test_exit_discards_pending_instructions_of_the_exited_call():
    J.run("DEFN f(0) { EXIT PUSH 6 }")
    assert J.run("PUSH 1 PUSH f CALLIF") is True
    assert J.instruction_stack == []
    J.run("PUSH 9")
    assert J.from_stack() == [9]
