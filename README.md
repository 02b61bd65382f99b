# jvmlite

jvmlite is a small Java virtual machine written in pure Python, with no
dependencies outside the standard library.

It provides:

- `jvmlite.classfile`: a parser for Java `.class` files (major version 45,
  or 46 to 52 with minor version 0), covering the constant pool, fields,
  methods and their attributes;
- `jvmlite.classpath`: class lookup in the JRE's boot and extension
  directories and in a user classpath made of directories, `.jar`/`.zip`
  archives, `*` wildcards and path lists;
- `jvmlite.rtda`: the runtime data area — threads, frames, local variable
  tables and operand stacks holding Java `int`, `long`, `float`, `double`
  and reference values;
- `jvmlite.instructions`: bytecode decoding and instructions for constants,
  loads, stores, stack manipulation, arithmetic, conversions, comparisons
  and branches, `tableswitch`, `lookupswitch`, `wide`, `goto_w`, `ifnull`
  and `ifnonnull`;
- `jvmlite.interpreter`: a fetch–decode–execute loop that runs one method's
  bytecode and prints a trace line per instruction.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
jvmlite [-options] class [args...]
```

Options take one or two leading dashes; a string option's value may follow
as the next argument or after `=`. Option parsing stops at the first
argument that is not an option, or at `--`.

| Option                    | Meaning                          |
|---------------------------|----------------------------------|
| `-help`, `-?`             | print the usage line             |
| `-version`                | print the version                |
| `-classpath`, `-cp PATH`  | the user classpath               |
| `-Xjre PATH`              | the JRE directory                |

```
jvmlite -version
```

prints `version 0.0.1`. With `-help`, `-?` or no class name, the usage line
is printed. An unknown or malformed option prints an error and the usage line
and exits with status 2.

When a class name is given, the command does not load that class. It
exercises the runtime data area instead: it stores `int`, `long`, `float`,
`double` and null reference values in a local variable table, reads them
back, pushes the same values on an operand stack, pops them, and prints every
value.

## Library use

Parsing a class file:

```python
from pathlib import Path

from jvmlite.classfile.class_file import parse

class_file = parse(Path("Hello.class").read_bytes())
print(class_file.class_name())
print(class_file.super_class_name())
print(class_file.interface_names())
for method in class_file.methods:
    print(method.name(), method.descriptor())
```

Malformed data raises `ClassFormatError` (from `jvmlite.classfile.reader`);
an unsupported version raises `UnsupportedClassVersionError`, a subclass of it.

Finding a class:

```python
from jvmlite.classpath import parse_classpath

classpath = parse_classpath("/path/to/jre", "classes:lib/app.jar")
data, entry = classpath.read_class("java/lang/Object")
```

`read_class` appends `.class` and searches the boot entries (`jre/lib/*`),
the extension entries (`jre/ext/*`), then the user classpath (`.` when none
is given). A missing class raises `ClassNotFoundError`. When `-Xjre` does not
name an existing path, `./jre` and then `$JAVA_HOME/jre` are tried; if none
is found, `JreNotFoundError` is raised.

Working with an operand stack:

```python
from jvmlite.rtda import OperandStack

stack = OperandStack(4)
stack.push_long(2997924580)
stack.push_int(-100)
assert stack.pop_int() == -100
assert stack.pop_long() == 2997924580
```

Decoding an instruction:

```python
from jvmlite.instructions.factory import new_instruction

instruction = new_instruction(0x60)  # iadd
```

An opcode that is not implemented raises `UnsupportedOpcodeError`. Integer
arithmetic wraps to 32 or 64 bits, and integer division or remainder by zero
raises `JavaArithmeticError` (from `jvmlite.instructions.arithmetic`).

Running a method:

```python
from jvmlite.interpreter import interpret

main_method = next(m for m in class_file.methods if m.name() == "main")
interpret(main_method)
```

## What it does not do

jvmlite cannot run a Java program. There are no instructions for method
invocation or return, field access, object or array creation, array
element access, `ldc`, exceptions, `jsr`/`ret` or monitors, and classes
are not loaded or linked. The interpreter loop therefore has no normal end:
it runs until an instruction raises (for example an unsupported opcode),
then prints the frame's local variables and operand stack and re-raises the
error.