"""Arithmetic, bitwise, shift and increment instructions."""

from __future__ import annotations

import math
from abc import abstractmethod

from jvmlite.instructions.base import (
    Instruction,
    NoOperandsInstruction,
    ValueKind,
    to_float32,
    to_int32,
    to_int64,
)

_INTEGRAL = (ValueKind.INT, ValueKind.LONG)
_NUMERIC = (ValueKind.INT, ValueKind.LONG, ValueKind.FLOAT, ValueKind.DOUBLE)


class JavaArithmeticError(ArithmeticError):
    """Raised for integer division or remainder by zero."""


def _wrap(kind: ValueKind, value):
    if kind is ValueKind.INT:
        return to_int32(value)
    if kind is ValueKind.LONG:
        return to_int64(value)
    if kind is ValueKind.FLOAT:
        return to_float32(value)
    return float(value)


def _check_kind(kind: ValueKind, allowed) -> ValueKind:
    if kind not in allowed:
        raise ValueError(f"unsupported value kind for this operation: {kind.value}")
    return kind


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def _float_div(a: float, b: float) -> float:
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _float_rem(a: float, b: float) -> float:
    if math.isnan(a) or math.isnan(b) or math.isinf(a) or b == 0:
        return math.nan
    return math.fmod(a, b)


def _division_by_zero() -> JavaArithmeticError:
    return JavaArithmeticError("java.lang.ArithmeticException: / by zero")


class BinaryOperation(NoOperandsInstruction):
    """Pop two values of one kind, combine them and push the result."""

    _allowed = _NUMERIC

    def __init__(self, kind):
        self.kind = _check_kind(kind, self._allowed)

    @property
    def integral(self) -> bool:
        return self.kind in _INTEGRAL

    @abstractmethod
    def _apply(self, v1, v2):
        """Combine the deeper value ``v1`` with the top value ``v2``."""

    def execute(self, frame):
        stack = frame.operand_stack
        v2 = self.kind.pop(stack)
        v1 = self.kind.pop(stack)
        self.kind.push(stack, _wrap(self.kind, self._apply(v1, v2)))


class Add(BinaryOperation):
    def _apply(self, v1, v2):
        return v1 + v2


class Sub(BinaryOperation):
    def _apply(self, v1, v2):
        return v1 - v2


class Mul(BinaryOperation):
    def _apply(self, v1, v2):
        return v1 * v2


class Div(BinaryOperation):
    """Division; integer division truncates and rejects a zero divisor."""

    def _apply(self, v1, v2):
        if self.integral:
            if v2 == 0:
                raise _division_by_zero()
            return _trunc_div(v1, v2)
        return _float_div(v1, v2)


class Rem(BinaryOperation):
    """Remainder with the sign of the dividend."""

    def _apply(self, v1, v2):
        if self.integral:
            if v2 == 0:
                raise _division_by_zero()
            return v1 - _trunc_div(v1, v2) * v2
        return _float_rem(v1, v2)


class And(BinaryOperation):
    _allowed = _INTEGRAL

    def _apply(self, v1, v2):
        return v1 & v2


class Or(BinaryOperation):
    _allowed = _INTEGRAL

    def _apply(self, v1, v2):
        return v1 | v2


class Xor(BinaryOperation):
    _allowed = _INTEGRAL

    def _apply(self, v1, v2):
        return v1 ^ v2


class Neg(NoOperandsInstruction):
    """Negate the top value."""

    def __init__(self, kind):
        self.kind = _check_kind(kind, _NUMERIC)

    def execute(self, frame):
        stack = frame.operand_stack
        value = self.kind.pop(stack)
        self.kind.push(stack, _wrap(self.kind, -value))


class Shift(NoOperandsInstruction):
    """Shift an int or long by an int count masked to the operand width."""

    def __init__(self, kind):
        self.kind = _check_kind(kind, _INTEGRAL)

    @property
    def bits(self) -> int:
        return 32 if self.kind is ValueKind.INT else 64

    @abstractmethod
    def _shift(self, value: int, count: int) -> int:
        """Shift ``value`` by ``count`` bits."""

    def execute(self, frame):
        stack = frame.operand_stack
        count = stack.pop_int() & (self.bits - 1)
        value = self.kind.pop(stack)
        self.kind.push(stack, _wrap(self.kind, self._shift(value, count)))


class ShiftLeft(Shift):
    def _shift(self, value, count):
        return value << count


class ShiftRight(Shift):
    """Arithmetic shift right, keeping the sign."""

    def _shift(self, value, count):
        return value >> count


class UnsignedShiftRight(Shift):
    """Logical shift right, filling with zeros."""

    def _shift(self, value, count):
        return (value & ((1 << self.bits) - 1)) >> count


class Iinc(Instruction):
    """Add a signed constant to an int local variable."""

    def __init__(self, index=0, const=0):
        self.index = index
        self.const = const

    def fetch_operands(self, reader):
        self.index = reader.read_u8()
        self.const = reader.read_i8()

    def execute(self, frame):
        local_vars = frame.local_vars
        local_vars.set_int(self.index, local_vars.get_int(self.index) + self.const)