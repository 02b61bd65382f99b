"""Instructions that push constants and the no-op."""

from __future__ import annotations

from jvmlite.instructions.base import Instruction, NoOperandsInstruction, ValueKind


class Nop(NoOperandsInstruction):
    """Do nothing."""

    def execute(self, frame):
        pass


class AconstNull(NoOperandsInstruction):
    """Push a null reference."""

    def execute(self, frame):
        frame.operand_stack.push_ref(None)


class PushConstant(NoOperandsInstruction):
    """Push a fixed constant of a given kind."""

    def __init__(self, kind, value):
        self.kind = kind
        self.value = value

    def execute(self, frame):
        self.kind.push(frame.operand_stack, self.value)


class BiPush(Instruction):
    """Push a sign-extended byte operand as an int."""

    def __init__(self, value=0):
        self.value = value

    def fetch_operands(self, reader):
        self.value = reader.read_i8()

    def execute(self, frame):
        frame.operand_stack.push_int(self.value)


class SiPush(Instruction):
    """Push a sign-extended short operand as an int."""

    def __init__(self, value=0):
        self.value = value

    def fetch_operands(self, reader):
        self.value = reader.read_i16()

    def execute(self, frame):
        frame.operand_stack.push_int(self.value)


__all__ = ["AconstNull", "BiPush", "Nop", "PushConstant", "SiPush", "ValueKind"]