"""
CLType descriptor tests

Goals:
- Descriptor wire bytes: tag byte, nested descriptors, u32 length for ByteArray.
- Structural equality for nested descriptors.
- Unsupported network tags fail loudly; unknown tags are decode errors.
"""

from __future__ import annotations

import pytest

from casper_sdk.errors import DeserializationError, NotImplementedFeature, ValidationError
from casper_sdk.types import cl_type as T
from casper_sdk.types.cl_type import CLType, CLTypeTag


def test_simple_descriptor_bytes_are_single_tags():
    assert T.BOOL.to_bytes() == b"\x00"
    assert T.U512.to_bytes() == b"\x08"
    assert T.STRING.to_bytes() == b"\x0a"
    assert T.PUBLIC_KEY.to_bytes() == b"\x16"


def test_composite_descriptor_bytes():
    assert CLType.option(T.U64).to_bytes() == b"\x0d\x05"
    assert CLType.list_of(T.STRING).to_bytes() == b"\x0e\x0a"
    assert CLType.byte_array(32).to_bytes() == b"\x0f\x20\x00\x00\x00"
    assert CLType.tuple2(T.U8, T.STRING).to_bytes() == b"\x13\x03\x0a"
    nested = CLType.list_of(CLType.option(CLType.tuple3(T.BOOL, T.I32, T.UREF)))
    assert nested.to_bytes() == b"\x0e\x0d\x14\x00\x01\x0c"


def test_structural_equality():
    assert CLType.list_of(T.U64) == CLType.list_of(CLType(CLTypeTag.U64))
    assert CLType.tuple2(T.U8, T.STRING) != CLType.tuple2(T.STRING, T.U8)
    assert CLType.byte_array(32) != CLType.byte_array(33)
    assert hash(CLType.option(T.U8)) == hash(CLType.option(T.U8))


def test_descriptor_decode_inverts_encode():
    t = CLType.tuple3(CLType.byte_array(4), CLType.list_of(T.U512), CLType.option(T.PUBLIC_KEY))
    assert CLType.from_bytes(t.to_bytes()) == t


@pytest.mark.parametrize("tag", [11, 16, 17, 21])
def test_unsupported_network_tags_raise_not_implemented(tag):
    with pytest.raises(NotImplementedFeature):
        CLType.from_bytes(bytes([tag]))
    with pytest.raises(NotImplementedFeature):
        CLType(CLTypeTag(tag))


def test_unknown_tag_and_trailing_bytes_are_decode_errors():
    with pytest.raises(DeserializationError):
        CLType.from_bytes(b"\x63")
    with pytest.raises(DeserializationError):
        CLType.from_bytes(b"\x00\x00")
    with pytest.raises(DeserializationError):
        CLType.from_bytes(b"\x0f\x20\x00")  # truncated ByteArray length


def test_arity_and_length_are_checked():
    with pytest.raises(ValidationError):
        CLType(CLTypeTag.OPTION)
    with pytest.raises(ValidationError):
        CLType(CLTypeTag.TUPLE2, (T.U8,))
    with pytest.raises(ValidationError):
        CLType(CLTypeTag.U8, (T.U8,))
    with pytest.raises(ValidationError):
        CLType.byte_array(-1)


def test_deeply_nested_descriptor_is_rejected_on_decode():
    data = b"\x0d" * 100 + b"\x00"
    with pytest.raises(DeserializationError):
        CLType.from_bytes(data)


def test_obj_projection_and_str():
    t = CLType.tuple2(CLType.option(T.U64), CLType.byte_array(32))
    assert t.to_obj() == {"Tuple2": [{"Option": "U64"}, {"ByteArray": 32}]}
    assert CLType.from_obj(t.to_obj()) == t
    assert str(t) == "Tuple2(Option(U64), ByteArray(32))"
    assert T.BOOL.to_obj() == "Bool"
    with pytest.raises(ValidationError):
        CLType.from_obj("Nope")


def test_inner_accessor():
    assert CLType.list_of(T.U8).inner == T.U8
    with pytest.raises(AttributeError):
        _ = T.U8.inner
