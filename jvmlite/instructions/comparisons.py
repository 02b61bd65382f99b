"""Numeric comparisons and conditional branches."""

from __future__ import annotations

import operator
from enum import Enum

from jvmlite.instructions.base import BranchInstruction, NoOperandsInstruction, branch


class Condition(Enum):
    """A relation tested by a conditional branch."""

    EQ = "eq"
    NE = "ne"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"

    def test(self, left, right) -> bool:
        return _RELATIONS[self](left, right)


_RELATIONS = {
    Condition.EQ: operator.eq,
    Condition.NE: operator.ne,
    Condition.LT: operator.lt,
    Condition.LE: operator.le,
    Condition.GT: operator.gt,
    Condition.GE: operator.ge,
}


def _compare(v1, v2, nan_result: int) -> int:
    if v1 > v2:
        return 1
    if v1 == v2:
        return 0
    if v1 < v2:
        return -1
    return nan_result


class LCmp(NoOperandsInstruction):
    """Compare two longs, pushing 1, 0 or -1."""

    def execute(self, frame):
        stack = frame.operand_stack
        v2 = stack.pop_long()
        v1 = stack.pop_long()
        stack.push_int(_compare(v1, v2, -1))


class FCmp(NoOperandsInstruction):
    """Compare two floats; ``nan_result`` is pushed when either is NaN."""

    def __init__(self, nan_result):
        self.nan_result = nan_result

    def execute(self, frame):
        stack = frame.operand_stack
        v2 = stack.pop_float()
        v1 = stack.pop_float()
        stack.push_int(_compare(v1, v2, self.nan_result))


class DCmp(NoOperandsInstruction):
    """Compare two doubles; ``nan_result`` is pushed when either is NaN."""

    def __init__(self, nan_result):
        self.nan_result = nan_result

    def execute(self, frame):
        stack = frame.operand_stack
        v2 = stack.pop_double()
        v1 = stack.pop_double()
        stack.push_int(_compare(v1, v2, self.nan_result))


class IfZero(BranchInstruction):
    """Branch when an int compares to zero under ``condition``."""

    def __init__(self, condition):
        super().__init__()
        self.condition = condition

    def execute(self, frame):
        value = frame.operand_stack.pop_int()
        if self.condition.test(value, 0):
            branch(frame, self.offset)


class IfICmp(BranchInstruction):
    """Branch when two ints compare under ``condition``."""

    def __init__(self, condition):
        super().__init__()
        self.condition = condition

    def execute(self, frame):
        stack = frame.operand_stack
        v2 = stack.pop_int()
        v1 = stack.pop_int()
        if self.condition.test(v1, v2):
            branch(frame, self.offset)


class IfACmp(BranchInstruction):
    """Branch when two references are (or, with ``equal`` false, are not) the same."""

    def __init__(self, equal):
        super().__init__()
        self.equal = equal

    def execute(self, frame):
        stack = frame.operand_stack
        ref2 = stack.pop_ref()
        ref1 = stack.pop_ref()
        if (ref1 is ref2) == self.equal:
            branch(frame, self.offset)