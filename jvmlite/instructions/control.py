"""Unconditional jumps and switch tables."""

from __future__ import annotations

from jvmlite.instructions.base import BranchInstruction, Instruction, branch


class Goto(BranchInstruction):
    """Branch unconditionally by a 16-bit offset."""

    def execute(self, frame):
        branch(frame, self.offset)


class TableSwitch(Instruction):
    """Jump through a dense table indexed by the popped int."""

    def __init__(self):
        self.default_offset = 0
        self.low = 0
        self.high = 0
        self.jump_offsets: list[int] = []

    def fetch_operands(self, reader):
        reader.skip_padding()
        self.default_offset = reader.read_i32()
        self.low = reader.read_i32()
        self.high = reader.read_i32()
        self.jump_offsets = reader.read_i32s(self.high - self.low + 1)

    def execute(self, frame):
        index = frame.operand_stack.pop_int()
        if self.low <= index <= self.high:
            offset = self.jump_offsets[index - self.low]
        else:
            offset = self.default_offset
        branch(frame, offset)


class LookupSwitch(Instruction):
    """Jump to the offset paired with the popped int key, or the default."""

    def __init__(self):
        self.default_offset = 0
        self.pairs: list[tuple[int, int]] = []

    def fetch_operands(self, reader):
        reader.skip_padding()
        self.default_offset = reader.read_i32()
        npairs = reader.read_i32()
        flat = reader.read_i32s(npairs * 2)
        self.pairs = list(zip(flat[::2], flat[1::2]))

    def execute(self, frame):
        key = frame.operand_stack.pop_int()
        offset = next(
            (offset for match, offset in self.pairs if match == key),
            self.default_offset,
        )
        branch(frame, offset)