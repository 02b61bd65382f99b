"""Parsing of whole class files into their structure."""

from __future__ import annotations

from dataclasses import dataclass, field

from jvmlite.classfile.attributes import AttributeInfo, CodeAttribute, read_attributes
from jvmlite.classfile.constant_pool import ConstantPool, read_constant_pool
from jvmlite.classfile.reader import ClassFormatError, ClassReader

_MAGIC = 0xCAFEBABE


class UnsupportedClassVersionError(ClassFormatError):
    """Raised for class file versions this reader does not accept."""


@dataclass
class MemberInfo:
    """A field or method."""

    pool: ConstantPool = field(repr=False, compare=False)
    access_flags: int
    name_index: int
    descriptor_index: int
    attributes: list[AttributeInfo]

    def name(self) -> str:
        return self.pool.utf8(self.name_index)

    def descriptor(self) -> str:
        return self.pool.utf8(self.descriptor_index)

    def code_attribute(self) -> CodeAttribute | None:
        """The member's Code attribute, or None if it has none."""
        return next(
            (a for a in self.attributes if isinstance(a, CodeAttribute)), None
        )


def _read_member(reader: ClassReader, pool: ConstantPool) -> MemberInfo:
    access_flags = reader.read_u16()
    name_index = reader.read_u16()
    descriptor_index = reader.read_u16()
    attributes = read_attributes(reader, pool)
    return MemberInfo(pool, access_flags, name_index, descriptor_index, attributes)


def read_members(reader, pool) -> list[MemberInfo]:
    """Read a u2 count followed by that many fields or methods."""
    count = reader.read_u16()
    return [_read_member(reader, pool) for _ in range(count)]


@dataclass
class ClassFile:
    """The parsed contents of one class file."""

    minor_version: int
    major_version: int
    constant_pool: ConstantPool = field(repr=False, compare=False)
    access_flags: int
    this_class: int
    super_class: int
    interfaces: list[int]
    fields: list[MemberInfo]
    methods: list[MemberInfo]
    attributes: list[AttributeInfo]

    def class_name(self) -> str:
        return self.constant_pool.class_name(self.this_class)

    def super_class_name(self) -> str:
        """Name of the superclass, or an empty string when there is none."""
        if self.super_class > 0:
            return self.constant_pool.class_name(self.super_class)
        return ""

    def interface_names(self) -> list[str]:
        return [self.constant_pool.class_name(i) for i in self.interfaces]


def _check_version(minor: int, major: int) -> None:
    if major == 45:
        return
    if 46 <= major <= 52 and minor == 0:
        return
    raise UnsupportedClassVersionError("java.lang.UnsupportedClassVersionError!")


def parse(class_data) -> ClassFile:
    """Parse raw class file bytes; raises ClassFormatError on bad input."""
    reader = ClassReader(class_data)
    if reader.read_u32() != _MAGIC:
        raise ClassFormatError("java.lang.ClassFormatError: magic!")
    minor = reader.read_u16()
    major = reader.read_u16()
    _check_version(minor, major)
    pool = read_constant_pool(reader)
    access_flags = reader.read_u16()
    this_class = reader.read_u16()
    super_class = reader.read_u16()
    interfaces = reader.read_u16s()
    fields = read_members(reader, pool)
    methods = read_members(reader, pool)
    attributes = read_attributes(reader, pool)
    return ClassFile(
        minor,
        major,
        pool,
        access_flags,
        this_class,
        super_class,
        interfaces,
        fields,
        methods,
        attributes,
    )