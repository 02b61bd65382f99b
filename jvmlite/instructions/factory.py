"""Mapping from opcodes to instruction instances."""

from __future__ import annotations

from functools import partial
from typing import Callable

from jvmlite.instructions.arithmetic import (
    Add,
    And,
    Div,
    Iinc,
    Mul,
    Neg,
    Or,
    Rem,
    ShiftLeft,
    ShiftRight,
    Sub,
    UnsignedShiftRight,
    Xor,
)
from jvmlite.instructions.base import Instruction, ValueKind
from jvmlite.instructions.comparisons import (
    Condition,
    DCmp,
    FCmp,
    IfACmp,
    IfICmp,
    IfZero,
    LCmp,
)
from jvmlite.instructions.constants import AconstNull, BiPush, Nop, PushConstant, SiPush
from jvmlite.instructions.control import Goto, LookupSwitch, TableSwitch
from jvmlite.instructions.conversions import Convert, IntToByte, IntToChar, IntToShort
from jvmlite.instructions.extended import GotoW, IfNonNull, IfNull, Wide
from jvmlite.instructions.loads import FixedLoad, Load
from jvmlite.instructions.stack import (
    Dup,
    Dup2,
    Dup2X1,
    Dup2X2,
    DupX1,
    DupX2,
    Pop,
    Pop2,
    Swap,
)
from jvmlite.instructions.stores import FixedStore, Store

_INT = ValueKind.INT
_LONG = ValueKind.LONG
_FLOAT = ValueKind.FLOAT
_DOUBLE = ValueKind.DOUBLE
_REF = ValueKind.REF

_LOCAL_KINDS = (_INT, _LONG, _FLOAT, _DOUBLE, _REF)
_NUMERIC_KINDS = (_INT, _LONG, _FLOAT, _DOUBLE)
_INTEGRAL_KINDS = (_INT, _LONG)
_BRANCH_CONDITIONS = (
    Condition.EQ,
    Condition.NE,
    Condition.LT,
    Condition.GE,
    Condition.GT,
    Condition.LE,
)
_CONVERSIONS = (
    (_INT, _LONG),
    (_INT, _FLOAT),
    (_INT, _DOUBLE),
    (_LONG, _INT),
    (_LONG, _FLOAT),
    (_LONG, _DOUBLE),
    (_FLOAT, _INT),
    (_FLOAT, _LONG),
    (_FLOAT, _DOUBLE),
    (_DOUBLE, _INT),
    (_DOUBLE, _LONG),
    (_DOUBLE, _FLOAT),
)


class UnsupportedOpcodeError(ValueError):
    """Raised for opcodes this interpreter does not implement."""


def _shared_instructions() -> dict[int, Instruction]:
    """Operand-free instructions, one shared instance per opcode."""
    table: dict[int, Instruction] = {0x00: Nop(), 0x01: AconstNull()}
    for opcode, value in zip(range(0x02, 0x09), range(-1, 6)):
        table[opcode] = PushConstant(_INT, value)
    table.update(
        {
            0x09: PushConstant(_LONG, 0),
            0x0A: PushConstant(_LONG, 1),
            0x0B: PushConstant(_FLOAT, 0.0),
            0x0C: PushConstant(_FLOAT, 1.0),
            0x0D: PushConstant(_FLOAT, 2.0),
            0x0E: PushConstant(_DOUBLE, 0.0),
            0x0F: PushConstant(_DOUBLE, 1.0),
        }
    )
    for kind_no, kind in enumerate(_LOCAL_KINDS):
        for index in range(4):
            table[0x1A + 4 * kind_no + index] = FixedLoad(kind, index)
            table[0x3B + 4 * kind_no + index] = FixedStore(kind, index)
    stack_ops = (Pop, Pop2, Dup, DupX1, DupX2, Dup2, Dup2X1, Dup2X2, Swap)
    for opcode, cls in enumerate(stack_ops, start=0x57):
        table[opcode] = cls()
    for op_no, cls in enumerate((Add, Sub, Mul, Div, Rem, Neg)):
        for kind_no, kind in enumerate(_NUMERIC_KINDS):
            table[0x60 + 4 * op_no + kind_no] = cls(kind)
    for op_no, cls in enumerate((ShiftLeft, ShiftRight, UnsignedShiftRight)):
        for kind_no, kind in enumerate(_INTEGRAL_KINDS):
            table[0x78 + 2 * op_no + kind_no] = cls(kind)
    for op_no, cls in enumerate((And, Or, Xor)):
        for kind_no, kind in enumerate(_INTEGRAL_KINDS):
            table[0x7E + 2 * op_no + kind_no] = cls(kind)
    for opcode, (source, target) in enumerate(_CONVERSIONS, start=0x85):
        table[opcode] = Convert(source, target)
    table.update(
        {
            0x91: IntToByte(),
            0x92: IntToChar(),
            0x93: IntToShort(),
            0x94: LCmp(),
            0x95: FCmp(-1),
            0x96: FCmp(1),
            0x97: DCmp(-1),
            0x98: DCmp(1),
        }
    )
    return table


def _fresh_instructions() -> dict[int, Callable[[], Instruction]]:
    """Instructions with operands, built anew for every decode."""
    table: dict[int, Callable[[], Instruction]] = {
        0x10: BiPush,
        0x11: SiPush,
        0x84: Iinc,
        0xA5: partial(IfACmp, True),
        0xA6: partial(IfACmp, False),
        0xA7: Goto,
        0xAA: TableSwitch,
        0xAB: LookupSwitch,
        0xC4: Wide,
        0xC6: IfNull,
        0xC7: IfNonNull,
        0xC8: GotoW,
    }
    for offset, kind in enumerate(_LOCAL_KINDS):
        table[0x15 + offset] = partial(Load, kind)
        table[0x36 + offset] = partial(Store, kind)
    for offset, condition in enumerate(_BRANCH_CONDITIONS):
        table[0x99 + offset] = partial(IfZero, condition)
        table[0x9F + offset] = partial(IfICmp, condition)
    return table


_SHARED = _shared_instructions()
_FRESH = _fresh_instructions()


def new_instruction(opcode) -> Instruction:
    """Return the instruction for ``opcode``, ready to fetch its operands."""
    shared = _SHARED.get(opcode)
    if shared is not None:
        return shared
    make = _FRESH.get(opcode)
    if make is not None:
        return make()
    raise UnsupportedOpcodeError(f"Unsupported opcode: 0x{opcode:x}!")