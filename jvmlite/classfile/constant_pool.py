"""The class file constant pool and its entry kinds."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

from jvmlite.classfile.reader import ClassFormatError, ClassReader


class ConstantTag(IntEnum):
    """Tags that identify constant pool entry kinds."""

    UTF8 = 1
    INTEGER = 3
    FLOAT = 4
    LONG = 5
    DOUBLE = 6
    CLASS = 7
    STRING = 8
    FIELDREF = 9
    METHODREF = 10
    INTERFACE_METHODREF = 11
    NAME_AND_TYPE = 12
    METHOD_HANDLE = 15
    METHOD_TYPE = 16
    INVOKE_DYNAMIC = 18


class ConstantInfo:
    """Base class of all constant pool entries."""

    __slots__ = ()


@dataclass
class ConstantIntegerInfo(ConstantInfo):
    value: int


@dataclass
class ConstantFloatInfo(ConstantInfo):
    value: float


@dataclass
class ConstantLongInfo(ConstantInfo):
    value: int


@dataclass
class ConstantDoubleInfo(ConstantInfo):
    value: float


@dataclass
class ConstantUtf8Info(ConstantInfo):
    value: str


@dataclass
class ConstantStringInfo(ConstantInfo):
    pool: ConstantPool = field(repr=False, compare=False)
    string_index: int


@dataclass
class ConstantClassInfo(ConstantInfo):
    pool: ConstantPool = field(repr=False, compare=False)
    name_index: int

    def name(self) -> str:
        """The class or interface name."""
        return self.pool.utf8(self.name_index)


@dataclass
class ConstantMemberRefInfo(ConstantInfo):
    pool: ConstantPool = field(repr=False, compare=False)
    class_index: int
    name_and_type_index: int

    def class_name(self) -> str:
        return self.pool.class_name(self.class_index)

    def name_and_descriptor(self) -> tuple[str, str]:
        return self.pool.name_and_type(self.name_and_type_index)


class ConstantFieldRefInfo(ConstantMemberRefInfo):
    """A field reference."""


class ConstantMethodRefInfo(ConstantMemberRefInfo):
    """A class method reference."""


class ConstantInterfaceMethodRefInfo(ConstantMemberRefInfo):
    """An interface method reference."""


@dataclass
class ConstantNameAndTypeInfo(ConstantInfo):
    name_index: int
    descriptor_index: int


@dataclass
class ConstantMethodTypeInfo(ConstantInfo):
    descriptor_index: int


@dataclass
class ConstantMethodHandleInfo(ConstantInfo):
    reference_kind: int
    reference_index: int


@dataclass
class ConstantInvokeDynamicInfo(ConstantInfo):
    bootstrap_method_attr_index: int
    name_and_type_index: int


class ConstantPool:
    """Indexed constant pool; index 0 and the slot after a long or double are empty."""

    def __init__(self, size=0):
        self._entries: list[ConstantInfo | None] = [None] * size

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ConstantPool({self._entries!r})"

    def constant_info(self, index: int) -> ConstantInfo:
        if 0 <= index < len(self._entries):
            info = self._entries[index]
            if info is not None:
                return info
        raise ClassFormatError("Invalid constant pool index!")

    def _typed(self, index: int, kind: type):
        info = self.constant_info(index)
        if not isinstance(info, kind):
            raise ClassFormatError(
                f"constant pool entry {index} is {type(info).__name__}, "
                f"expected {kind.__name__}"
            )
        return info

    def name_and_type(self, index: int) -> tuple[str, str]:
        info = self._typed(index, ConstantNameAndTypeInfo)
        return self.utf8(info.name_index), self.utf8(info.descriptor_index)

    def class_name(self, index: int) -> str:
        return self.utf8(self._typed(index, ConstantClassInfo).name_index)

    def utf8(self, index: int) -> str:
        return self._typed(index, ConstantUtf8Info).value


def decode_mutf8(data) -> str:
    """Decode Java's modified UTF-8 into a string."""
    data = bytes(data)
    length = len(data)
    units: list[int] = []
    count = 0
    while count < length:
        c = data[count]
        high = c >> 4
        if high <= 7:
            units.append(c)
            count += 1
        elif high in (12, 13):
            count += 2
            if count > length:
                raise ClassFormatError("malformed input: partial character at end")
            char2 = data[count - 1]
            if char2 & 0xC0 != 0x80:
                raise ClassFormatError(f"malformed input around byte {count}")
            units.append((c & 0x1F) << 6 | (char2 & 0x3F))
        elif high == 14:
            count += 3
            if count > length:
                raise ClassFormatError("malformed input: partial character at end")
            char2 = data[count - 2]
            char3 = data[count - 1]
            if char2 & 0xC0 != 0x80 or char3 & 0xC0 != 0x80:
                raise ClassFormatError(f"malformed input around byte {count - 1}")
            units.append((c & 0x0F) << 12 | (char2 & 0x3F) << 6 | (char3 & 0x3F))
        else:
            raise ClassFormatError(f"malformed input around byte {count}")
    raw = b"".join(unit.to_bytes(2, "big") for unit in units)
    return raw.decode("utf-16-be", errors="replace")


def _read_utf8(reader: ClassReader, pool: ConstantPool) -> ConstantInfo:
    length = reader.read_u16()
    return ConstantUtf8Info(decode_mutf8(reader.read_bytes(length)))


def _member_ref(kind: type):
    def read(reader: ClassReader, pool: ConstantPool) -> ConstantInfo:
        return kind(pool, reader.read_u16(), reader.read_u16())

    return read


_READERS = {
    ConstantTag.INTEGER: lambda r, p: ConstantIntegerInfo(
        struct.unpack(">i", r.read_bytes(4))[0]
    ),
    ConstantTag.FLOAT: lambda r, p: ConstantFloatInfo(
        struct.unpack(">f", r.read_bytes(4))[0]
    ),
    ConstantTag.LONG: lambda r, p: ConstantLongInfo(
        struct.unpack(">q", r.read_bytes(8))[0]
    ),
    ConstantTag.DOUBLE: lambda r, p: ConstantDoubleInfo(
        struct.unpack(">d", r.read_bytes(8))[0]
    ),
    ConstantTag.UTF8: _read_utf8,
    ConstantTag.STRING: lambda r, p: ConstantStringInfo(p, r.read_u16()),
    ConstantTag.CLASS: lambda r, p: ConstantClassInfo(p, r.read_u16()),
    ConstantTag.FIELDREF: _member_ref(ConstantFieldRefInfo),
    ConstantTag.METHODREF: _member_ref(ConstantMethodRefInfo),
    ConstantTag.INTERFACE_METHODREF: _member_ref(ConstantInterfaceMethodRefInfo),
    ConstantTag.NAME_AND_TYPE: lambda r, p: ConstantNameAndTypeInfo(
        r.read_u16(), r.read_u16()
    ),
    ConstantTag.METHOD_TYPE: lambda r, p: ConstantMethodTypeInfo(r.read_u16()),
    ConstantTag.METHOD_HANDLE: lambda r, p: ConstantMethodHandleInfo(
        r.read_u8(), r.read_u16()
    ),
    ConstantTag.INVOKE_DYNAMIC: lambda r, p: ConstantInvokeDynamicInfo(
        r.read_u16(), r.read_u16()
    ),
}


def read_constant_info(reader: ClassReader, pool: ConstantPool) -> ConstantInfo:
    """Read one tagged constant pool entry."""
    tag = reader.read_u8()
    try:
        read = _READERS[ConstantTag(tag)]
    except ValueError:
        raise ClassFormatError("java.lang.ClassFormatError: constant pool tag!") from None
    return read(reader, pool)


def read_constant_pool(reader: ClassReader) -> ConstantPool:
    """Read the count-prefixed constant pool."""
    count = reader.read_u16()
    pool = ConstantPool(count)
    index = 1
    while index < count:
        info = read_constant_info(reader, pool)
        pool._entries[index] = info
        # Longs and doubles take up two pool slots.
        index += 2 if isinstance(info, (ConstantLongInfo, ConstantDoubleInfo)) else 1
    return pool