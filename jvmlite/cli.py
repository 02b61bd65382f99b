"""Command line front end."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

from jvmlite.rtda import Frame

_VERSION = "0.0.1"

_BOOL_FLAGS = {"help": "help_flag", "?": "help_flag", "version": "version_flag"}
_STRING_FLAGS = {"classpath": "cp_option", "cp": "cp_option", "Xjre": "xjre_option"}
_TRUE = {"1", "t", "T", "true", "TRUE", "True"}
_FALSE = {"0", "f", "F", "false", "FALSE", "False"}


@dataclass
class Command:
    """Parsed command line options and the class to run."""

    help_flag: bool = False
    version_flag: bool = False
    cp_option: str = ""
    xjre_option: str = ""
    class_name: str = ""
    args: list[str] = field(default_factory=list)


def _parse_bool(value: str, name: str) -> bool:
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f'invalid boolean value "{value}" for -{name}')


def parse_command(argv=None) -> Command:
    """Parse options up to the first non-option; the rest are class and args."""
    args = list(sys.argv[1:] if argv is None else argv)
    values: dict[str, object] = {}
    i = 0
    while i < len(args):
        arg = args[i]
        if len(arg) < 2 or not arg.startswith("-"):
            break
        i += 1
        if arg == "--":
            break
        body = arg[2:] if arg.startswith("--") else arg[1:]
        if not body or body.startswith(("-", "=")):
            raise ValueError(f"bad flag syntax: {arg}")
        name, has_value, value = body.partition("=")
        if name in _BOOL_FLAGS:
            values[_BOOL_FLAGS[name]] = _parse_bool(value, name) if has_value else True
        elif name in _STRING_FLAGS:
            if not has_value:
                if i >= len(args):
                    raise ValueError(f"flag needs an argument: -{name}")
                value = args[i]
                i += 1
            values[_STRING_FLAGS[name]] = value
        else:
            raise ValueError(f"flag provided but not defined: -{name}")
    rest = args[i:]
    if rest:
        values["class_name"] = rest[0]
        values["args"] = rest[1:]
    return Command(**values)


def usage(prog) -> str:
    """The one-line usage message."""
    return f"Usage: {prog} [-options] class [args...]"


def start_jvm(command, out=None):
    """Exercise a frame's local variables and operand stack, printing each value."""
    out = sys.stdout if out is None else out
    frame = Frame(100, 100)

    local_vars = frame.local_vars
    local_vars.set_int(0, 100)
    local_vars.set_int(1, -100)
    local_vars.set_long(2, 2997924580)
    local_vars.set_long(4, -2997924580)
    local_vars.set_float(6, 3.1415926)
    local_vars.set_double(7, 2.71828182845)
    local_vars.set_ref(9, None)
    for value in (
        local_vars.get_int(0),
        local_vars.get_int(1),
        local_vars.get_long(2),
        local_vars.get_long(4),
        local_vars.get_float(6),
        local_vars.get_double(7),
        local_vars.get_ref(9),
    ):
        print(value, file=out)

    stack = frame.operand_stack
    stack.push_int(100)
    stack.push_int(-100)
    stack.push_long(2997924580)
    stack.push_long(-2997924580)
    stack.push_float(3.1415926)
    stack.push_double(2.71828182845)
    stack.push_ref(None)
    print(stack.pop_ref(), file=out)
    print(stack.pop_double(), file=out)
    print(stack.pop_float(), file=out)
    print(stack.pop_long(), file=out)
    print(stack.pop_long(), file=out)
    print(stack.pop_int(), file=out)
    print(stack.pop_int(), file=out)


def main(argv=None) -> int:
    """Entry point; returns the process exit status."""
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "jvmlite"
    try:
        command = parse_command(argv)
    except ValueError as err:
        print(err, file=sys.stderr)
        print(usage(prog))
        return 2
    if command.version_flag:
        print(f"version {_VERSION}")
    elif command.help_flag or not command.class_name:
        print(usage(prog))
    else:
        start_jvm(command, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())