import struct

import pytest

from jvmlite.instructions.arithmetic import Iinc
from jvmlite.instructions.base import BytecodeReader, ValueKind
from jvmlite.instructions.extended import GotoW, IfNonNull, IfNull, Wide
from jvmlite.instructions.loads import Load
from jvmlite.instructions.stores import Store
from jvmlite.rtda import JavaObject, Thread

PC = 12
START_NEXT_PC = 15


def make_frame(max_locals=4):
    thread = Thread()
    thread.pc = PC
    frame = thread.new_frame(max_locals, 4)
    frame.next_pc = START_NEXT_PC
    return frame


def wide(code):
    inst = Wide()
    inst.fetch_operands(BytecodeReader(code, 0))
    return inst


def test_goto_w_fetch_and_branch():
    inst = GotoW()
    inst.fetch_operands(BytecodeReader(struct.pack(">i", -100000), 0))
    assert inst.offset == -100000
    frame = make_frame()
    inst.execute(frame)
    assert frame.next_pc == PC - 100000


@pytest.mark.parametrize(
    "inst_type, ref, taken",
    [
        (IfNull, None, True),
        (IfNull, JavaObject(), False),
        (IfNonNull, None, False),
        (IfNonNull, JavaObject(), True),
    ],
)
def test_null_branches(inst_type, ref, taken):
    inst = inst_type()
    inst.offset = 30
    frame = make_frame()
    frame.operand_stack.push_ref(ref)
    inst.execute(frame)
    assert frame.next_pc == (PC + 30 if taken else START_NEXT_PC)


@pytest.mark.parametrize(
    "opcode, kind",
    [
        (0x15, ValueKind.INT),
        (0x16, ValueKind.LONG),
        (0x17, ValueKind.FLOAT),
        (0x18, ValueKind.DOUBLE),
        (0x19, ValueKind.REF),
    ],
)
def test_wide_load_decoding(opcode, kind):
    inst = wide(bytes([opcode]) + struct.pack(">H", 300))
    assert isinstance(inst.modified_instruction, Load)
    assert inst.modified_instruction.kind is kind
    assert inst.modified_instruction.index == 300


@pytest.mark.parametrize(
    "opcode, kind",
    [
        (0x36, ValueKind.INT),
        (0x37, ValueKind.LONG),
        (0x38, ValueKind.FLOAT),
        (0x39, ValueKind.DOUBLE),
        (0x3A, ValueKind.REF),
    ],
)
def test_wide_store_decoding(opcode, kind):
    inst = wide(bytes([opcode]) + struct.pack(">H", 513))
    assert isinstance(inst.modified_instruction, Store)
    assert inst.modified_instruction.kind is kind
    assert inst.modified_instruction.index == 513


def test_wide_iload_executes_with_wide_index():
    frame = make_frame(max_locals=400)
    frame.local_vars.set_int(300, 77)
    wide(b"\x15" + struct.pack(">H", 300)).execute(frame)
    assert frame.operand_stack.pop_int() == 77


def test_wide_dstore_round_trip():
    frame = make_frame(max_locals=400)
    frame.operand_stack.push_double(2.71828182845)
    wide(b"\x39" + struct.pack(">H", 350)).execute(frame)
    assert frame.local_vars.get_double(350) == 2.71828182845
    assert not list(frame.operand_stack)


def test_wide_iinc_reads_16_bit_index_and_constant():
    inst = wide(b"\x84" + struct.pack(">Hh", 300, -1234))
    assert isinstance(inst.modified_instruction, Iinc)
    assert inst.modified_instruction.index == 300
    assert inst.modified_instruction.const == -1234
    frame = make_frame(max_locals=400)
    frame.local_vars.set_int(300, 5000)
    inst.execute(frame)
    assert frame.local_vars.get_int(300) == 5000 - 1234


def test_wide_ret_is_unsupported():
    with pytest.raises(ValueError, match="0xa9"):
        wide(b"\xa9\x00\x01")


def test_wide_unknown_opcode_raises():
    with pytest.raises(ValueError):
        wide(b"\x60\x00\x01")


def test_wide_execute_without_operands_raises():
    with pytest.raises(ValueError):
        Wide().execute(make_frame())