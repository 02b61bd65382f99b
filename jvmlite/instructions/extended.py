"""Wide-index branches, null tests and the wide prefix."""

from __future__ import annotations

from jvmlite.instructions.arithmetic import Iinc
from jvmlite.instructions.base import BranchInstruction, Instruction, ValueKind, branch
from jvmlite.instructions.loads import Load
from jvmlite.instructions.stores import Store

_WIDE_LOADS = {
    0x15: ValueKind.INT,
    0x16: ValueKind.LONG,
    0x17: ValueKind.FLOAT,
    0x18: ValueKind.DOUBLE,
    0x19: ValueKind.REF,
}

_WIDE_STORES = {
    0x36: ValueKind.INT,
    0x37: ValueKind.LONG,
    0x38: ValueKind.FLOAT,
    0x39: ValueKind.DOUBLE,
    0x3A: ValueKind.REF,
}

_IINC = 0x84


class GotoW(Instruction):
    """Branch unconditionally by a 32-bit offset."""

    def __init__(self, offset=0):
        self.offset = offset

    def fetch_operands(self, reader):
        self.offset = reader.read_i32()

    def execute(self, frame):
        branch(frame, self.offset)


class IfNull(BranchInstruction):
    """Branch when the popped reference is null."""

    def execute(self, frame):
        if frame.operand_stack.pop_ref() is None:
            branch(frame, self.offset)


class IfNonNull(BranchInstruction):
    """Branch when the popped reference is not null."""

    def execute(self, frame):
        if frame.operand_stack.pop_ref() is not None:
            branch(frame, self.offset)


class Wide(Instruction):
    """Prefix that widens the local variable index of the following instruction."""

    def __init__(self):
        self.modified_instruction: Instruction | None = None

    def fetch_operands(self, reader):
        opcode = reader.read_u8()
        if opcode in _WIDE_LOADS:
            self.modified_instruction = Load(_WIDE_LOADS[opcode], reader.read_u16())
        elif opcode in _WIDE_STORES:
            self.modified_instruction = Store(_WIDE_STORES[opcode], reader.read_u16())
        elif opcode == _IINC:
            index = reader.read_u16()
            self.modified_instruction = Iinc(index, reader.read_i16())
        else:
            raise ValueError(f"Unsupported opcode: 0x{opcode:x}!")

    def execute(self, frame):
        if self.modified_instruction is None:
            raise ValueError("wide instruction has no operands fetched")
        self.modified_instruction.execute(frame)