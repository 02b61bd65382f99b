import math

import pytest

from jvmlite.instructions.comparisons import (
    Condition,
    DCmp,
    FCmp,
    IfACmp,
    IfICmp,
    IfZero,
    LCmp,
)
from jvmlite.rtda import JavaObject, Thread

PC = 20
START_NEXT_PC = 23


def make_frame():
    thread = Thread()
    thread.pc = PC
    frame = thread.new_frame(4, 8)
    frame.next_pc = START_NEXT_PC
    return frame


def lcmp(a, b):
    frame = make_frame()
    frame.operand_stack.push_long(a)
    frame.operand_stack.push_long(b)
    LCmp().execute(frame)
    return frame.operand_stack.pop_int()


def fcmp(a, b, nan_result):
    frame = make_frame()
    frame.operand_stack.push_float(a)
    frame.operand_stack.push_float(b)
    FCmp(nan_result).execute(frame)
    return frame.operand_stack.pop_int()


def dcmp(a, b, nan_result):
    frame = make_frame()
    frame.operand_stack.push_double(a)
    frame.operand_stack.push_double(b)
    DCmp(nan_result).execute(frame)
    return frame.operand_stack.pop_int()


PAIRS = [(1, 2), (2, 1), (5, 5), (-7, 3), (2997924580, -2997924580)]


@pytest.mark.parametrize("a, b", PAIRS)
def test_condition_complements(a, b):
    assert Condition.NE.test(a, b) is not Condition.EQ.test(a, b)
    assert Condition.GE.test(a, b) is not Condition.LT.test(a, b)
    assert Condition.LE.test(a, b) is not Condition.GT.test(a, b)


def test_lcmp_pinned_values():
    assert lcmp(1, 2) == -1
    assert lcmp(2, 1) == 1
    assert lcmp(9, 9) == 0


@pytest.mark.parametrize("a, b", PAIRS)
def test_lcmp_is_antisymmetric(a, b):
    assert lcmp(a, b) == -lcmp(b, a)


@pytest.mark.parametrize("cmp", [fcmp, dcmp])
@pytest.mark.parametrize("a, b", [(1.5, 2.5), (2.5, 1.5), (3.0, 3.0)])
def test_floating_compare_agrees_with_lcmp(cmp, a, b):
    assert cmp(a, b, 1) == lcmp(int(a * 2), int(b * 2))


@pytest.mark.parametrize("nan_result", [1, -1])
@pytest.mark.parametrize("a, b", [(math.nan, 1.0), (1.0, math.nan)])
def test_fcmp_nan_gives_configured_result(nan_result, a, b):
    frame = make_frame()
    frame.operand_stack.push_float(a)
    frame.operand_stack.push_float(b)
    FCmp(nan_result).execute(frame)
    assert frame.operand_stack.pop_int() == nan_result


@pytest.mark.parametrize("nan_result", [1, -1])
@pytest.mark.parametrize("a, b", [(math.nan, 1.0), (1.0, math.nan)])
def test_dcmp_nan_gives_configured_result(nan_result, a, b):
    frame = make_frame()
    frame.operand_stack.push_double(a)
    frame.operand_stack.push_double(b)
    DCmp(nan_result).execute(frame)
    assert frame.operand_stack.pop_int() == nan_result


@pytest.mark.parametrize(
    "condition, value, taken",
    [
        (Condition.EQ, 0, True),
        (Condition.EQ, 4, False),
        (Condition.LT, -1, True),
        (Condition.GE, -1, False),
    ],
)
def test_if_zero(condition, value, taken):
    frame = make_frame()
    inst = IfZero(condition)
    inst.offset = 12
    frame.operand_stack.push_int(value)
    inst.execute(frame)
    assert frame.next_pc == (PC + 12 if taken else START_NEXT_PC)
    assert not list(frame.operand_stack)


@pytest.mark.parametrize("condition", list(Condition))
@pytest.mark.parametrize("a, b", [(3, 8), (8, 3), (6, 6)])
def test_if_icmp_follows_condition(condition, a, b):
    frame = make_frame()
    inst = IfICmp(condition)
    inst.offset = -9
    frame.operand_stack.push_int(a)
    frame.operand_stack.push_int(b)
    inst.execute(frame)
    expected = PC - 9 if condition.test(a, b) else START_NEXT_PC
    assert frame.next_pc == expected


@pytest.mark.parametrize("equal", [True, False])
def test_if_acmp(equal):
    obj, other = JavaObject(), JavaObject()
    for ref1, ref2, same in [(obj, obj, True), (obj, other, False), (None, None, True)]:
        frame = make_frame()
        inst = IfACmp(equal)
        inst.offset = 7
        frame.operand_stack.push_ref(ref1)
        frame.operand_stack.push_ref(ref2)
        inst.execute(frame)
        assert frame.next_pc == (PC + 7 if same == equal else START_NEXT_PC)


def test_if_icmp_underflow_raises():
    frame = make_frame()
    frame.operand_stack.push_int(1)
    with pytest.raises(IndexError):
        IfICmp(Condition.EQ).execute(frame)