import struct

import pytest

from jvmlite.classfile.constant_pool import (
    ConstantClassInfo,
    ConstantFieldRefInfo,
    ConstantInterfaceMethodRefInfo,
    ConstantMethodHandleInfo,
    ConstantMethodRefInfo,
    ConstantStringInfo,
    decode_mutf8,
    read_constant_info,
    read_constant_pool,
)
from jvmlite.classfile.reader import ClassFormatError, ClassReader


def _utf8(text):
    encoded = text.encode()
    return bytes([1]) + struct.pack(">H", len(encoded)) + encoded


def _u2_pair(tag, a, b):
    return bytes([tag]) + struct.pack(">HH", a, b)


ENTRIES = [
    _utf8("java/lang/Object"),  # 1
    bytes([7]) + struct.pack(">H", 1),  # 2 Class
    _utf8("toString"),  # 3
    _utf8("()Ljava/lang/String;"),  # 4
    _u2_pair(12, 3, 4),  # 5 NameAndType
    _u2_pair(10, 2, 5),  # 6 Methodref
    bytes([5]) + struct.pack(">q", 2997924580),  # 7,8 Long
    bytes([3]) + struct.pack(">i", -100),  # 9 Integer
    bytes([4]) + struct.pack(">f", 3.1415926),  # 10 Float
    bytes([6]) + struct.pack(">d", 2.71828182845),  # 11,12 Double
    bytes([8]) + struct.pack(">H", 3),  # 13 String
    bytes([15, 6]) + struct.pack(">H", 6),  # 14 MethodHandle
    bytes([16]) + struct.pack(">H", 4),  # 15 MethodType
    _u2_pair(18, 0, 5),  # 16 InvokeDynamic
    _u2_pair(9, 2, 5),  # 17 Fieldref
    _u2_pair(11, 2, 5),  # 18 InterfaceMethodref
]


@pytest.fixture
def pool():
    data = struct.pack(">H", 19) + b"".join(ENTRIES)
    return read_constant_pool(ClassReader(data))


def test_pool_length(pool):
    assert len(pool) == 19


def test_class_name(pool):
    assert pool.class_name(2) == "java/lang/Object"
    info = pool.constant_info(2)
    assert isinstance(info, ConstantClassInfo)
    assert info.name() == "java/lang/Object"


def test_name_and_type(pool):
    assert pool.name_and_type(5) == ("toString", "()Ljava/lang/String;")


def test_member_refs(pool):
    method = pool.constant_info(6)
    assert isinstance(method, ConstantMethodRefInfo)
    assert method.class_name() == "java/lang/Object"
    assert method.name_and_descriptor() == ("toString", "()Ljava/lang/String;")
    field_ref = pool.constant_info(17)
    assert isinstance(field_ref, ConstantFieldRefInfo)
    assert field_ref.class_name() == "java/lang/Object"
    iface = pool.constant_info(18)
    assert isinstance(iface, ConstantInterfaceMethodRefInfo)
    assert iface.name_and_descriptor()[0] == "toString"


def test_numeric_values(pool):
    assert pool.constant_info(7).value == 2997924580
    assert pool.constant_info(9).value == -100
    assert pool.constant_info(10).value == pytest.approx(3.1415926, rel=1e-6)
    assert pool.constant_info(11).value == 2.71828182845


def test_long_and_double_take_two_slots(pool):
    with pytest.raises(ClassFormatError, match="Invalid constant pool index"):
        pool.constant_info(8)
    with pytest.raises(ClassFormatError):
        pool.constant_info(12)


def test_other_entries(pool):
    string = pool.constant_info(13)
    assert isinstance(string, ConstantStringInfo)
    assert string.string_index == 3
    handle = pool.constant_info(14)
    assert isinstance(handle, ConstantMethodHandleInfo)
    assert (handle.reference_kind, handle.reference_index) == (6, 6)
    assert pool.constant_info(15).descriptor_index == 4
    assert pool.constant_info(16).name_and_type_index == 5


def test_index_zero_and_out_of_range_invalid(pool):
    with pytest.raises(ClassFormatError):
        pool.constant_info(0)
    with pytest.raises(ClassFormatError):
        pool.constant_info(19)


def test_wrong_entry_kind_raises(pool):
    with pytest.raises(ClassFormatError):
        pool.utf8(2)
    with pytest.raises(ClassFormatError):
        pool.class_name(1)


def test_unknown_tag_raises():
    data = struct.pack(">H", 2) + b"\x02"
    with pytest.raises(ClassFormatError, match="constant pool tag"):
        read_constant_pool(ClassReader(data))


def test_read_constant_info_single_entry():
    pool = read_constant_pool(ClassReader(struct.pack(">H", 0)))
    info = read_constant_info(ClassReader(_utf8("hello")), pool)
    assert info.value == "hello"


def test_decode_ascii_and_bmp():
    text = "héllo 中文"
    assert decode_mutf8(text.encode()) == text


def test_decode_encoded_nul():
    assert decode_mutf8(b"a\xc0\x80b") == "a\x00b"


def test_decode_surrogate_pair():
    assert decode_mutf8(b"\xed\xa0\xbd\xed\xb8\x80") == "\U0001F600"


def test_decode_partial_character():
    with pytest.raises(ClassFormatError, match="partial character at end"):
        decode_mutf8("中".encode()[:2])


def test_decode_bad_lead_byte():
    with pytest.raises(ClassFormatError, match="malformed input around byte 0"):
        decode_mutf8(b"\x80")


def test_decode_bad_continuation():
    with pytest.raises(ClassFormatError, match="malformed input"):
        decode_mutf8(b"\xc3\x41")