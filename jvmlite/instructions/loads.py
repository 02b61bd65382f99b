"""Instructions that load local variables onto the operand stack."""

from __future__ import annotations

from jvmlite.instructions.base import Index8Instruction


def load_local(frame, kind, index):
    """Push the local variable at ``index`` of the given kind."""
    value = kind.load(frame.local_vars, index)
    kind.push(frame.operand_stack, value)


class Load(Index8Instruction):
    """Load a local variable whose index is an 8-bit operand."""

    def __init__(self, kind, index=0):
        super().__init__(index)
        self.kind = kind
        self._opcode_index = index

    def execute(self, frame):
        load_local(frame, self.kind, self.index)


class FixedLoad(Load):
    """Load a local variable whose index is part of the opcode."""

    def fetch_operands(self, reader):
        """Read nothing; the index is the one encoded in the opcode."""
        self.index = self._opcode_index