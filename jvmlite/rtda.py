"""Runtime data area: slots, local variables, operand stacks, frames and threads."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, replace

_I32 = struct.Struct(">i")
_F32 = struct.Struct(">f")
_I64 = struct.Struct(">q")
_F64 = struct.Struct(">d")


class StackOverflowError(RuntimeError):
    """Raised when a thread's frame stack is full."""


class EmptyStackError(RuntimeError):
    """Raised when popping or peeking an empty frame stack."""


class JavaObject:
    """An object reference held in a slot."""

    __slots__ = ()


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _to_int64(value: int) -> int:
    value &= 0xFFFFFFFFFFFFFFFF
    return value - (1 << 64) if value & 0x8000000000000000 else value


def _float_to_bits(value: float) -> int:
    try:
        packed = _F32.pack(value)
    except OverflowError:
        packed = _F32.pack(math.copysign(math.inf, value))
    return _I32.unpack(packed)[0]


def _bits_to_float(bits: int) -> float:
    return _F32.unpack(_I32.pack(bits))[0]


def _double_to_bits(value: float) -> int:
    return _I64.unpack(_F64.pack(value))[0]


def _bits_to_double(bits: int) -> float:
    return _F64.unpack(_I64.pack(bits))[0]


def _split_long(value: int) -> tuple[int, int]:
    value = _to_int64(value)
    return _to_int32(value), _to_int32(value >> 32)


def _join_long(low: int, high: int) -> int:
    return _to_int64(((high & 0xFFFFFFFF) << 32) | (low & 0xFFFFFFFF))


@dataclass(frozen=True)
class Slot:
    """One 32-bit value cell, holding a number or a reference."""

    num: int = 0
    ref: JavaObject | None = None


class LocalVars:
    """Fixed-size table of local variable slots."""

    __slots__ = ("_slots",)

    def __init__(self, max_locals):
        self._slots = [Slot()] * max_locals

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self):
        return iter(self._slots)

    def __getitem__(self, index: int) -> Slot:
        return self._slots[self._check(index)]

    def __repr__(self) -> str:
        return f"LocalVars({self._slots!r})"

    def _check(self, index: int) -> int:
        if not 0 <= index < len(self._slots):
            raise IndexError(f"local variable index {index} out of range")
        return index

    def _set_num(self, index: int, num: int) -> None:
        self._slots[index] = replace(self._slots[index], num=num)

    def set_int(self, index, value):
        self._set_num(self._check(index), _to_int32(value))

    def get_int(self, index) -> int:
        return self._slots[self._check(index)].num

    def set_float(self, index, value):
        self._set_num(self._check(index), _float_to_bits(value))

    def get_float(self, index) -> float:
        return _bits_to_float(self.get_int(index))

    def set_long(self, index, value):
        self._check(index)
        self._check(index + 1)
        low, high = _split_long(value)
        self._set_num(index, low)
        self._set_num(index + 1, high)

    def get_long(self, index) -> int:
        return _join_long(self.get_int(index), self.get_int(index + 1))

    def set_double(self, index, value):
        self.set_long(index, _double_to_bits(value))

    def get_double(self, index) -> float:
        return _bits_to_double(self.get_long(index))

    def set_ref(self, index, ref):
        index = self._check(index)
        self._slots[index] = replace(self._slots[index], ref=ref)

    def get_ref(self, index) -> JavaObject | None:
        return self._slots[self._check(index)].ref


class OperandStack:
    """Bounded stack of slots; longs and doubles take two slots."""

    __slots__ = ("_max", "_slots")

    def __init__(self, max_stack):
        self._max = max_stack
        self._slots: list[Slot] = []

    @property
    def max_stack(self) -> int:
        return self._max

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self):
        return iter(self._slots)

    def __repr__(self) -> str:
        return f"OperandStack(max_stack={self._max}, slots={self._slots!r})"

    def _push(self, *slots: Slot) -> None:
        if len(self._slots) + len(slots) > self._max:
            raise IndexError("operand stack overflow")
        self._slots.extend(slots)

    def _pop(self, count: int = 1) -> list[Slot]:
        if len(self._slots) < count:
            raise IndexError("operand stack underflow")
        popped = self._slots[-count:]
        del self._slots[-count:]
        return popped

    def push_int(self, value):
        self._push(Slot(num=_to_int32(value)))

    def pop_int(self) -> int:
        return self._pop()[0].num

    def push_float(self, value):
        self._push(Slot(num=_float_to_bits(value)))

    def pop_float(self) -> float:
        return _bits_to_float(self.pop_int())

    def push_long(self, value):
        low, high = _split_long(value)
        self._push(Slot(num=low), Slot(num=high))

    def pop_long(self) -> int:
        low, high = self._pop(2)
        return _join_long(low.num, high.num)

    def push_double(self, value):
        self.push_long(_double_to_bits(value))

    def pop_double(self) -> float:
        return _bits_to_double(self.pop_long())

    def push_ref(self, ref):
        self._push(Slot(ref=ref))

    def pop_ref(self) -> JavaObject | None:
        return self._pop()[0].ref

    def push_slot(self, slot):
        self._push(slot)

    def pop_slot(self) -> Slot:
        return self._pop()[0]


class Frame:
    """A method activation: local variables, operand stack and next pc."""

    def __init__(self, max_locals, max_stack, thread=None):
        self.local_vars = LocalVars(max_locals)
        self.operand_stack = OperandStack(max_stack)
        self.thread = thread
        self.next_pc = 0

    def __repr__(self) -> str:
        return (
            f"Frame(local_vars={self.local_vars!r}, "
            f"operand_stack={self.operand_stack!r}, next_pc={self.next_pc})"
        )


class JvmStack:
    """Bounded stack of frames."""

    def __init__(self, max_size):
        self.max_size = max_size
        self._frames: list[Frame] = []

    def __len__(self) -> int:
        return len(self._frames)

    def push(self, frame):
        if len(self._frames) >= self.max_size:
            raise StackOverflowError("java.lang.StackOverflowError")
        self._frames.append(frame)

    def pop(self) -> Frame:
        if not self._frames:
            raise EmptyStackError("jvm stack is empty!")
        return self._frames.pop()

    def top(self) -> Frame:
        if not self._frames:
            raise EmptyStackError("jvm stack is empty!")
        return self._frames[-1]


class Thread:
    """A thread of execution with a program counter and a frame stack."""

    def __init__(self, max_depth=1024):
        self.pc = 0
        self.stack = JvmStack(max_depth)

    def push_frame(self, frame):
        self.stack.push(frame)

    def pop_frame(self) -> Frame:
        return self.stack.pop()

    def current_frame(self) -> Frame:
        return self.stack.top()

    def new_frame(self, max_locals, max_stack) -> Frame:
        return Frame(max_locals, max_stack, self)