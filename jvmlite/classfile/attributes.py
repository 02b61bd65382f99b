"""Class file attributes attached to classes, fields, methods and code."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from jvmlite.classfile.constant_pool import ConstantPool
from jvmlite.classfile.reader import ClassReader


class AttributeInfo:
    """Base class of all attributes."""

    __slots__ = ()


@dataclass(frozen=True)
class ExceptionTableEntry:
    """One handler range in a Code attribute's exception table."""

    start_pc: int
    end_pc: int
    handler_pc: int
    catch_type: int


@dataclass
class CodeAttribute(AttributeInfo):
    """A method's bytecode, limits, exception handlers and nested attributes."""

    pool: ConstantPool = field(repr=False, compare=False)
    max_stack: int
    max_locals: int
    code: bytes
    exception_table: list[ExceptionTableEntry]
    attributes: list[AttributeInfo]


@dataclass
class ConstantValueAttribute(AttributeInfo):
    """Points at the constant pool entry holding a field's constant value."""

    constant_value_index: int


@dataclass
class MarkerAttribute(AttributeInfo):
    """An attribute that carries no data beyond its presence."""


@dataclass
class DeprecatedAttribute(MarkerAttribute):
    """Marks a class, field or method as deprecated."""


@dataclass
class SyntheticAttribute(MarkerAttribute):
    """Marks a member as generated by the compiler."""


@dataclass
class ExceptionsAttribute(AttributeInfo):
    """Constant pool indices of the checked exceptions a method declares."""

    exception_index_table: list[int]


@dataclass(frozen=True)
class LineNumberTableEntry:
    start_pc: int
    line_number: int


@dataclass
class LineNumberTableAttribute(AttributeInfo):
    """Maps bytecode offsets to source line numbers."""

    line_number_table: list[LineNumberTableEntry]

    def line_number(self, pc) -> int:
        """The source line for ``pc``, or -1 when no entry covers it."""
        for entry in reversed(self.line_number_table):
            if pc >= entry.start_pc:
                return entry.line_number
        return -1


@dataclass(frozen=True)
class LocalVariableTableEntry:
    start_pc: int
    length: int
    name_index: int
    descriptor_index: int
    index: int


@dataclass
class LocalVariableTableAttribute(AttributeInfo):
    local_variable_table: list[LocalVariableTableEntry]


@dataclass(frozen=True)
class LocalVariableTypeTableEntry:
    start_pc: int
    length: int
    name_index: int
    signature_index: int
    index: int


@dataclass
class LocalVariableTypeTableAttribute(AttributeInfo):
    local_variable_type_table: list[LocalVariableTypeTableEntry]


@dataclass
class SourceFileAttribute(AttributeInfo):
    """Names the source file a class was compiled from."""

    pool: ConstantPool = field(repr=False, compare=False)
    source_file_index: int

    def file_name(self) -> str:
        return self.pool.utf8(self.source_file_index)


@dataclass
class SignatureAttribute(AttributeInfo):
    """Generic signature of a class, field or method."""

    pool: ConstantPool = field(repr=False, compare=False)
    signature_index: int

    def signature(self) -> str:
        return self.pool.utf8(self.signature_index)


@dataclass
class EnclosingMethodAttribute(AttributeInfo):
    """Encloses a local or anonymous class in a class and optional method."""

    pool: ConstantPool = field(repr=False, compare=False)
    class_index: int
    method_index: int

    def class_name(self) -> str:
        return self.pool.class_name(self.class_index)

    def method_name_and_descriptor(self) -> tuple[str, str]:
        """Name and descriptor of the enclosing method, or two empty strings."""
        if self.method_index > 0:
            return self.pool.name_and_type(self.method_index)
        return "", ""


@dataclass(frozen=True)
class BootstrapMethod:
    bootstrap_method_ref: int
    bootstrap_arguments: list[int]


@dataclass
class BootstrapMethodsAttribute(AttributeInfo):
    bootstrap_methods: list[BootstrapMethod]


@dataclass(frozen=True)
class InnerClassInfo:
    inner_class_info_index: int
    outer_class_info_index: int
    inner_name_index: int
    inner_class_access_flags: int


@dataclass
class InnerClassesAttribute(AttributeInfo):
    classes: list[InnerClassInfo]


@dataclass
class UnparsedAttribute(AttributeInfo):
    """An attribute kept as raw bytes."""

    name: str
    length: int
    info: bytes


_Reader = Callable[[ClassReader, ConstantPool, str, int], AttributeInfo]


def _read_exception_table(reader: ClassReader) -> list[ExceptionTableEntry]:
    count = reader.read_u16()
    return [
        ExceptionTableEntry(
            reader.read_u16(), reader.read_u16(), reader.read_u16(), reader.read_u16()
        )
        for _ in range(count)
    ]


def _read_code(reader, pool, name, length) -> CodeAttribute:
    max_stack = reader.read_u16()
    max_locals = reader.read_u16()
    code = reader.read_bytes(reader.read_u32())
    exception_table = _read_exception_table(reader)
    attributes = read_attributes(reader, pool)
    return CodeAttribute(pool, max_stack, max_locals, code, exception_table, attributes)


def _read_line_numbers(reader, pool, name, length) -> LineNumberTableAttribute:
    count = reader.read_u16()
    return LineNumberTableAttribute(
        [LineNumberTableEntry(reader.read_u16(), reader.read_u16()) for _ in range(count)]
    )


def _read_local_variables(reader, pool, name, length) -> LocalVariableTableAttribute:
    count = reader.read_u16()
    return LocalVariableTableAttribute(
        [
            LocalVariableTableEntry(
                reader.read_u16(),
                reader.read_u16(),
                reader.read_u16(),
                reader.read_u16(),
                reader.read_u16(),
            )
            for _ in range(count)
        ]
    )


_READERS: dict[str, _Reader] = {
    "Code": _read_code,
    "ConstantValue": lambda r, p, n, l: ConstantValueAttribute(r.read_u16()),
    "Deprecated": lambda r, p, n, l: DeprecatedAttribute(),
    "Exceptions": lambda r, p, n, l: ExceptionsAttribute(r.read_u16s()),
    "LineNumberTable": _read_line_numbers,
    "LocalVariableTable": _read_local_variables,
    "SourceFile": lambda r, p, n, l: SourceFileAttribute(p, r.read_u16()),
    "Synthetic": lambda r, p, n, l: SyntheticAttribute(),
}


def _read_unparsed(reader, pool, name, length) -> UnparsedAttribute:
    return UnparsedAttribute(name, length, reader.read_bytes(length))


def read_attribute(reader, pool) -> AttributeInfo:
    """Read one attribute: name index, length, then its body."""
    name = pool.utf8(reader.read_u16())
    length = reader.read_u32()
    read = _READERS.get(name, _read_unparsed)
    return read(reader, pool, name, length)


def read_attributes(reader, pool) -> list[AttributeInfo]:
    """Read a u2 count followed by that many attributes."""
    count = reader.read_u16()
    return [read_attribute(reader, pool) for _ in range(count)]