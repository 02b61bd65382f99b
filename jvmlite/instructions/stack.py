"""Instructions that pop, duplicate and swap operand stack slots."""

from __future__ import annotations

from jvmlite.instructions.base import NoOperandsInstruction


def _pop_slots(stack, count: int) -> list:
    """Pop ``count`` slots, returning them from the top down."""
    return [stack.pop_slot() for _ in range(count)]


def _push_slots(stack, slots) -> None:
    for slot in slots:
        stack.push_slot(slot)


class Pop(NoOperandsInstruction):
    """Discard the top slot."""

    def execute(self, frame):
        frame.operand_stack.pop_slot()


class Pop2(NoOperandsInstruction):
    """Discard the top two slots."""

    def execute(self, frame):
        _pop_slots(frame.operand_stack, 2)


class Dup(NoOperandsInstruction):
    """[..., a] -> [..., a, a]"""

    def execute(self, frame):
        stack = frame.operand_stack
        (a,) = _pop_slots(stack, 1)
        _push_slots(stack, (a, a))


class DupX1(NoOperandsInstruction):
    """[..., b, a] -> [..., a, b, a]"""

    def execute(self, frame):
        stack = frame.operand_stack
        a, b = _pop_slots(stack, 2)
        _push_slots(stack, (a, b, a))


class DupX2(NoOperandsInstruction):
    """[..., c, b, a] -> [..., a, c, b, a]"""

    def execute(self, frame):
        stack = frame.operand_stack
        a, b, c = _pop_slots(stack, 3)
        _push_slots(stack, (a, c, b, a))


class Dup2(NoOperandsInstruction):
    """[..., b, a] -> [..., b, a, b, a]"""

    def execute(self, frame):
        stack = frame.operand_stack
        a, b = _pop_slots(stack, 2)
        _push_slots(stack, (b, a, b, a))


class Dup2X1(NoOperandsInstruction):
    """[..., c, b, a] -> [..., b, a, c, b, a]"""

    def execute(self, frame):
        stack = frame.operand_stack
        a, b, c = _pop_slots(stack, 3)
        _push_slots(stack, (b, a, c, b, a))


class Dup2X2(NoOperandsInstruction):
    """[..., d, c, b, a] -> [..., b, a, d, c, b, a]"""

    def execute(self, frame):
        stack = frame.operand_stack
        a, b, c, d = _pop_slots(stack, 4)
        _push_slots(stack, (b, a, d, c, b, a))


class Swap(NoOperandsInstruction):
    """[..., b, a] -> [..., a, b]"""

    def execute(self, frame):
        stack = frame.operand_stack
        a, b = _pop_slots(stack, 2)
        _push_slots(stack, (a, b))