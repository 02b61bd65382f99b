"""Instructions that store operand stack values into local variables."""

from __future__ import annotations

from jvmlite.instructions.base import Index8Instruction


def store_local(frame, kind, index):
    """Pop a value of the given kind and store it in local variable ``index``."""
    value = kind.pop(frame.operand_stack)
    kind.store(frame.local_vars, index, value)


class Store(Index8Instruction):
    """Store into a local variable whose index is an 8-bit operand."""

    def __init__(self, kind, index=0):
        super().__init__(index)
        self.kind = kind
        self._opcode_index = index

    def execute(self, frame):
        store_local(frame, self.kind, self.index)


class FixedStore(Store):
    """Store into a local variable whose index is part of the opcode."""

    def fetch_operands(self, reader):
        """Read nothing; the index is the one encoded in the opcode."""
        self.index = self._opcode_index