"""A fetch-decode-execute loop over one method's bytecode."""

from __future__ import annotations

import sys

from jvmlite.instructions.base import BytecodeReader
from jvmlite.instructions.factory import new_instruction
from jvmlite.rtda import Thread


def run(thread, bytecode, out=None):
    """Execute ``bytecode`` in the thread's top frame, tracing each step to ``out``.

    The loop has no natural end: it stops only when an instruction raises.
    """
    out = sys.stdout if out is None else out
    frame = thread.pop_frame()
    reader = BytecodeReader()
    while True:
        pc = frame.next_pc
        thread.pc = pc

        reader.reset(bytecode, pc)
        opcode = reader.read_u8()
        inst = new_instruction(opcode)
        inst.fetch_operands(reader)
        frame.next_pc = reader.pc

        print(f"pc:{pc:2d} inst:{type(inst).__name__} {inst!r}", file=out)
        inst.execute(frame)


def interpret(method, out=None):
    """Run a method's Code attribute; on failure dump the frame and re-raise."""
    out = sys.stdout if out is None else out
    code = method.code_attribute()
    if code is None:
        raise ValueError(f"method {method.name()} has no Code attribute")
    thread = Thread()
    frame = thread.new_frame(code.max_locals, code.max_stack)
    thread.push_frame(frame)
    try:
        run(thread, code.code, out)
    except Exception:
        print(f"LocalVars:{frame.local_vars!r}", file=out)
        print(f"OperandStack:{frame.operand_stack!r}", file=out)
        raise