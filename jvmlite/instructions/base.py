"""Bytecode decoding and the instruction base classes."""

from __future__ import annotations

import math
import struct
from abc import ABC, abstractmethod
from enum import Enum

_F32 = struct.Struct(">f")


def to_int32(value) -> int:
    """Wrap an integer to a signed 32-bit value."""
    value = int(value) & 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def to_int64(value) -> int:
    """Wrap an integer to a signed 64-bit value."""
    value = int(value) & 0xFFFFFFFFFFFFFFFF
    return value - (1 << 64) if value & 0x8000000000000000 else value


def to_float32(value) -> float:
    """Round a number to single precision, overflowing to infinity."""
    value = float(value)
    try:
        return _F32.unpack(_F32.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


class ValueKind(Enum):
    """The value types that instructions move between locals and the stack."""

    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    REF = "ref"

    @property
    def slots(self) -> int:
        """Number of slots a value of this kind occupies."""
        return 2 if self in (ValueKind.LONG, ValueKind.DOUBLE) else 1

    def push(self, stack, value) -> None:
        getattr(stack, f"push_{self.value}")(value)

    def pop(self, stack):
        return getattr(stack, f"pop_{self.value}")()

    def load(self, local_vars, index):
        return getattr(local_vars, f"get_{self.value}")(index)

    def store(self, local_vars, index, value) -> None:
        getattr(local_vars, f"set_{self.value}")(index, value)


class BytecodeReader:
    """Reads big-endian operands from a method's bytecode."""

    def __init__(self, code=b"", pc=0):
        self.code = bytes(code)
        self.pc = pc

    def reset(self, code, pc):
        self.code = bytes(code)
        self.pc = pc

    def read_u8(self) -> int:
        try:
            value = self.code[self.pc]
        except IndexError:
            raise IndexError(f"bytecode exhausted at pc {self.pc}") from None
        self.pc += 1
        return value

    def read_i8(self) -> int:
        value = self.read_u8()
        return value - 0x100 if value & 0x80 else value

    def read_u16(self) -> int:
        high = self.read_u8()
        return (high << 8) | self.read_u8()

    def read_i16(self) -> int:
        value = self.read_u16()
        return value - 0x10000 if value & 0x8000 else value

    def read_i32(self) -> int:
        value = 0
        for _ in range(4):
            value = (value << 8) | self.read_u8()
        return to_int32(value)

    def read_i32s(self, n) -> list[int]:
        if n < 0:
            raise ValueError(f"negative operand count: {n}")
        return [self.read_i32() for _ in range(n)]

    def skip_padding(self):
        """Advance to the next multiple of four."""
        while self.pc % 4:
            self.read_u8()


class Instruction(ABC):
    """A decoded instruction that can fetch its operands and run."""

    @abstractmethod
    def fetch_operands(self, reader):
        """Read this instruction's operands from ``reader``."""

    @abstractmethod
    def execute(self, frame):
        """Run the instruction against ``frame``."""

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in vars(self).items())
        return f"{type(self).__name__}({fields})"


class NoOperandsInstruction(Instruction):
    """An instruction with no operands."""

    def fetch_operands(self, reader):
        pass


class BranchInstruction(Instruction):
    """An instruction with a signed 16-bit branch offset."""

    def __init__(self, offset=0):
        self.offset = offset

    def fetch_operands(self, reader):
        self.offset = reader.read_i16()


class Index8Instruction(Instruction):
    """An instruction with an unsigned 8-bit local variable index."""

    def __init__(self, index=0):
        self.index = index

    def fetch_operands(self, reader):
        self.index = reader.read_u8()


class Index16Instruction(Instruction):
    """An instruction with an unsigned 16-bit index."""

    def __init__(self, index=0):
        self.index = index

    def fetch_operands(self, reader):
        self.index = reader.read_u16()


def branch(frame, offset):
    """Set the frame's next pc relative to the thread's current pc."""
    frame.next_pc = frame.thread.pc + offset