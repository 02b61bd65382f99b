import struct

import pytest

from jvmlite.instructions.base import BytecodeReader
from jvmlite.instructions.control import Goto, LookupSwitch, TableSwitch
from jvmlite.rtda import Thread

PC = 40


def make_frame():
    thread = Thread()
    thread.pc = PC
    return thread.new_frame(2, 4)


def tableswitch_code(default, low, high, offsets, prefix=b"\xaa"):
    pad = (-len(prefix)) % 4
    return (
        prefix
        + b"\x00" * pad
        + struct.pack(">iii", default, low, high)
        + struct.pack(f">{len(offsets)}i", *offsets)
    )


def lookupswitch_code(default, pairs, prefix=b"\xab"):
    pad = (-len(prefix)) % 4
    flat = [value for pair in pairs for value in pair]
    return (
        prefix
        + b"\x00" * pad
        + struct.pack(">ii", default, len(pairs))
        + struct.pack(f">{len(flat)}i", *flat)
    )


def test_goto_fetches_signed_offset():
    inst = Goto()
    inst.fetch_operands(BytecodeReader(struct.pack(">h", -300), 0))
    assert inst.offset == -300


def test_goto_branches_relative_to_pc():
    frame = make_frame()
    inst = Goto()
    inst.offset = -15
    inst.execute(frame)
    assert frame.next_pc == PC - 15


def test_tableswitch_fetch_reads_table_after_padding():
    code = tableswitch_code(100, 3, 5, [10, 20, 30])
    reader = BytecodeReader(code, 1)
    inst = TableSwitch()
    inst.fetch_operands(reader)
    assert (inst.default_offset, inst.low, inst.high) == (100, 3, 5)
    assert inst.jump_offsets == [10, 20, 30]
    assert reader.pc == len(code)


def test_tableswitch_padding_depends_on_position():
    code = tableswitch_code(-8, 0, 0, [44], prefix=b"\x00" * 4 + b"\xaa")
    reader = BytecodeReader(code, 5)
    inst = TableSwitch()
    inst.fetch_operands(reader)
    assert inst.default_offset == -8
    assert inst.jump_offsets == [44]


@pytest.mark.parametrize(
    "index, expected", [(3, 10), (4, 20), (5, 30), (2, 100), (6, 100), (-1, 100)]
)
def test_tableswitch_execute(index, expected):
    inst = TableSwitch()
    inst.fetch_operands(BytecodeReader(tableswitch_code(100, 3, 5, [10, 20, 30]), 1))
    frame = make_frame()
    frame.operand_stack.push_int(index)
    inst.execute(frame)
    assert frame.next_pc == PC + expected


def test_lookupswitch_fetch():
    code = lookupswitch_code(64, [(-5, 12), (1000, 24)])
    reader = BytecodeReader(code, 1)
    inst = LookupSwitch()
    inst.fetch_operands(reader)
    assert inst.default_offset == 64
    assert inst.pairs == [(-5, 12), (1000, 24)]
    assert reader.pc == len(code)


@pytest.mark.parametrize("key, expected", [(-5, 12), (1000, 24), (7, 64)])
def test_lookupswitch_execute(key, expected):
    inst = LookupSwitch()
    inst.fetch_operands(
        BytecodeReader(lookupswitch_code(64, [(-5, 12), (1000, 24)]), 1)
    )
    frame = make_frame()
    frame.operand_stack.push_int(key)
    inst.execute(frame)
    assert frame.next_pc == PC + expected


def test_lookupswitch_first_match_wins():
    inst = LookupSwitch()
    inst.fetch_operands(BytecodeReader(lookupswitch_code(0, [(9, 4), (9, 8)]), 1))
    frame = make_frame()
    frame.operand_stack.push_int(9)
    inst.execute(frame)
    assert frame.next_pc == PC + 4


def test_tableswitch_truncated_table_raises():
    code = tableswitch_code(0, 0, 3, [1, 2])
    with pytest.raises(IndexError):
        TableSwitch().fetch_operands(BytecodeReader(code, 1))