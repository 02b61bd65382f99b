"""Instructions that convert between numeric value kinds."""

from __future__ import annotations

import math

from jvmlite.instructions.base import (
    NoOperandsInstruction,
    ValueKind,
    to_float32,
    to_int32,
    to_int64,
)

_NUMERIC = (ValueKind.INT, ValueKind.LONG, ValueKind.FLOAT, ValueKind.DOUBLE)
_FLOATING = (ValueKind.FLOAT, ValueKind.DOUBLE)


def _truncate(value: float, bits: int) -> int:
    """Round toward zero into a signed integer of ``bits`` bits, saturating."""
    if math.isnan(value):
        return 0
    low = -(1 << (bits - 1))
    high = (1 << (bits - 1)) - 1
    if value >= high:
        return high
    if value <= low:
        return low
    return int(value)


class Convert(NoOperandsInstruction):
    """Pop a value of kind ``source`` and push it converted to ``target``."""

    def __init__(self, source, target):
        if source not in _NUMERIC or target not in _NUMERIC:
            raise ValueError(
                f"conversion needs numeric kinds, got {source.value} -> {target.value}"
            )
        if source is target:
            raise ValueError(f"conversion from {source.value} to itself")
        self.source = source
        self.target = target

    def _convert(self, value):
        target = self.target
        if target is ValueKind.INT:
            if self.source in _FLOATING:
                return _truncate(value, 32)
            return to_int32(value)
        if target is ValueKind.LONG:
            if self.source in _FLOATING:
                return _truncate(value, 64)
            return to_int64(value)
        if target is ValueKind.FLOAT:
            return to_float32(value)
        return float(value)

    def execute(self, frame):
        stack = frame.operand_stack
        value = self.source.pop(stack)
        self.target.push(stack, self._convert(value))


class IntToByte(NoOperandsInstruction):
    """Narrow an int to a signed byte, then sign-extend it back to int."""

    def execute(self, frame):
        stack = frame.operand_stack
        value = stack.pop_int()
        stack.push_int(((value + 0x80) & 0xFF) - 0x80)


class IntToChar(NoOperandsInstruction):
    """Narrow an int to an unsigned 16-bit char, then zero-extend it."""

    def execute(self, frame):
        stack = frame.operand_stack
        value = stack.pop_int()
        stack.push_int(value & 0xFFFF)


class IntToShort(NoOperandsInstruction):
    """Narrow an int to a signed short, then sign-extend it back to int."""

    def execute(self, frame):
        stack = frame.operand_stack
        value = stack.pop_int()
        stack.push_int(((value + 0x8000) & 0xFFFF) - 0x8000)