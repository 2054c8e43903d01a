"""
casper_sdk.types.cl_value
=========================

Typed values: an immutable (CLType, canonical bytes, advisory projection)
triple plus the byte-exact decoder.

Encoding table
--------------
    Bool                0x00 | 0x01
    I32 / U32           4 bytes little-endian
    I64 / U64           8 bytes little-endian
    U8                  1 byte
    U128 / U256 / U512  length byte + minimal little-endian magnitude
    Unit                (nothing)
    String              u32 LE byte length + UTF-8
    URef                32 address bytes + access-rights byte
    Option(T)           0x00 | 0x01 + T
    List(T)             u32 LE count + elements
    ByteArray(N)        N raw bytes
    Tuple1/2/3          elements concatenated
    PublicKey           algorithm tag + raw key

Big unsigned integers always use the trimmed little-endian rule, so
`from_u512(n)` and `u512_from_u64(n)` agree byte-for-byte for n < 2**64.

`parsed` is only a display aid; `raw` is authoritative.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from casper_sdk.errors import DeserializationError, ListTypeMismatch, ValidationError
from casper_sdk.types import cl_type as T
from casper_sdk.types.cl_type import CLType, CLTypeTag
from casper_sdk.types.keys import KeyAlgo, PublicKey
from casper_sdk.types.uref import URef, UREF_SERIALIZED_LENGTH
from casper_sdk.utils.bytes import (
    ByteReader,
    BytesLike,
    ensure_bytes,
    i32_le,
    i64_le,
    string_bytes,
    to_hex,
    u8,
    u32_le,
    u64_le,
    uint_le_minimal,
)

_BIG_UINT_BITS = {
    CLTypeTag.U128: 128,
    CLTypeTag.U256: 256,
    CLTypeTag.U512: 512,
}

# Fewest bytes any value of a fixed-width or prefixed type can occupy.
_MIN_SIZE = {
    CLTypeTag.BOOL: 1,
    CLTypeTag.I32: 4,
    CLTypeTag.I64: 8,
    CLTypeTag.U8: 1,
    CLTypeTag.U32: 4,
    CLTypeTag.U64: 8,
    CLTypeTag.U128: 1,
    CLTypeTag.U256: 1,
    CLTypeTag.U512: 1,
    CLTypeTag.UNIT: 0,
    CLTypeTag.STRING: 4,
    CLTypeTag.UREF: UREF_SERIALIZED_LENGTH,
    CLTypeTag.PUBLIC_KEY: 33,
    CLTypeTag.OPTION: 1,
    CLTypeTag.LIST: 4,
}

# Upper bound on the element count of a list whose elements encode to nothing.
MAX_ZERO_SIZE_LIST = 1 << 16


@dataclass(frozen=True)
class CLValue:
    cl_type: CLType
    raw: bytes
    parsed: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.cl_type, CLType):
            raise ValidationError("CLValue.cl_type must be a CLType")
        if not isinstance(self.raw, (bytes, bytearray)):
            raise ValidationError("CLValue.raw must be bytes")
        object.__setattr__(self, "raw", bytes(self.raw))

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    @staticmethod
    def from_bool(value: bool) -> "CLValue":
        if not isinstance(value, bool):
            raise ValidationError("Bool expects a bool", got=type(value).__name__)
        return CLValue(T.BOOL, b"\x01" if value else b"\x00", value)

    @staticmethod
    def from_i32(value: int) -> "CLValue":
        return CLValue(T.I32, i32_le(value), value)

    @staticmethod
    def from_i64(value: int) -> "CLValue":
        return CLValue(T.I64, i64_le(value), value)

    @staticmethod
    def from_u8(value: int) -> "CLValue":
        return CLValue(T.U8, u8(value), value)

    @staticmethod
    def from_u32(value: int) -> "CLValue":
        return CLValue(T.U32, u32_le(value), value)

    @staticmethod
    def from_u64(value: int) -> "CLValue":
        return CLValue(T.U64, u64_le(value), value)

    @staticmethod
    def from_u128(value: int) -> "CLValue":
        return CLValue(T.U128, uint_le_minimal(value, bits=128), str(value))

    @staticmethod
    def from_u256(value: int) -> "CLValue":
        return CLValue(T.U256, uint_le_minimal(value, bits=256), str(value))

    @staticmethod
    def from_u512(value: int) -> "CLValue":
        return CLValue(T.U512, uint_le_minimal(value, bits=512), str(value))

    @staticmethod
    def u512_from_u64(value: int) -> "CLValue":
        """U512 from a native 64-bit value: trim trailing zeros of the 8-byte LE form."""
        le = u64_le(value)
        n = len(le)
        while n > 0 and le[n - 1] == 0:
            n -= 1
        return CLValue(T.U512, bytes((n,)) + le[:n], str(value))

    @staticmethod
    def unit() -> "CLValue":
        return CLValue(T.UNIT, b"", None)

    @staticmethod
    def from_string(value: str) -> "CLValue":
        return CLValue(T.STRING, string_bytes(value), value)

    @staticmethod
    def from_uref(value: Union[str, URef]) -> "CLValue":
        uref = value if isinstance(value, URef) else URef.parse(value)
        return CLValue(T.UREF, uref.to_bytes(), str(uref))

    @staticmethod
    def from_public_key(
        key: Union[PublicKey, BytesLike, str], algorithm: Optional[KeyAlgo] = None
    ) -> "CLValue":
        """Accept a PublicKey, or raw key bytes / hex plus the key algorithm."""
        if not isinstance(key, PublicKey):
            if algorithm is None:
                raise ValidationError("raw public key bytes need an algorithm")
            key = PublicKey.from_raw(ensure_bytes(key), algorithm)
        return CLValue(T.PUBLIC_KEY, key.to_bytes(), key.to_hex())

    # ------------------------------------------------------------------
    # Composites
    # ------------------------------------------------------------------

    @staticmethod
    def option(inner: Optional["CLValue"], inner_type: Optional[CLType] = None) -> "CLValue":
        """
        Option(T). An empty option still needs its inner descriptor, so
        `inner_type` is required when `inner` is None.
        """
        if inner is None:
            if inner_type is None:
                raise ValidationError("an empty Option needs its inner type")
            return CLValue(CLType.option(inner_type), b"\x00", None)
        if not isinstance(inner, CLValue):
            raise ValidationError("Option inner value must be a CLValue")
        if inner_type is not None and inner_type != inner.cl_type:
            raise ValidationError(
                "Option inner type does not match value",
                expected=str(inner_type),
                got=str(inner.cl_type),
            )
        return CLValue(CLType.option(inner.cl_type), b"\x01" + inner.raw, inner.parsed)

    @staticmethod
    def list_of(values: Sequence["CLValue"]) -> "CLValue":
        """
        List(T). Rejects empty and heterogeneous input before emitting any
        bytes.
        """
        values = list(values)
        if not values:
            raise ValidationError("can't create a List from an empty sequence")
        for i, v in enumerate(values):
            if not isinstance(v, CLValue):
                raise ValidationError("List elements must be CLValues", index=i)
        element = values[0].cl_type
        for i, v in enumerate(values):
            if v.cl_type != element:
                raise ListTypeMismatch(expected=str(element), got=str(v.cl_type), index=i)
        if min_encoded_size(element) == 0 and len(values) > MAX_ZERO_SIZE_LIST:
            raise ValidationError("List of zero-size elements is too long", count=len(values))
        raw = u32_le(len(values)) + b"".join(v.raw for v in values)
        return CLValue(CLType.list_of(element), raw, [v.parsed for v in values])

    @staticmethod
    def byte_array(data: Union[BytesLike, str]) -> "CLValue":
        raw = ensure_bytes(data)
        return CLValue(CLType.byte_array(len(raw)), raw, to_hex(raw))

    @staticmethod
    def tuple1(t0: "CLValue") -> "CLValue":
        return CLValue(CLType.tuple1(t0.cl_type), t0.raw, t0.parsed)

    @staticmethod
    def tuple2(t0: "CLValue", t1: "CLValue") -> "CLValue":
        return CLValue(
            CLType.tuple2(t0.cl_type, t1.cl_type),
            t0.raw + t1.raw,
            [t0.parsed, t1.parsed],
        )

    @staticmethod
    def tuple3(t0: "CLValue", t1: "CLValue", t2: "CLValue") -> "CLValue":
        return CLValue(
            CLType.tuple3(t0.cl_type, t1.cl_type, t2.cl_type),
            t0.raw + t1.raw + t2.raw,
            [t0.parsed, t1.parsed, t2.parsed],
        )

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    @staticmethod
    def from_bytes(cl_type: CLType, raw: BytesLike) -> "CLValue":
        """Validate `raw` against `cl_type` and wrap it; parsed is the decoded value."""
        raw = bytes(raw)
        value = decode_value(cl_type, raw)
        return CLValue(cl_type, raw, _project(cl_type, value))

    def value(self) -> Any:
        """Decode `raw` back into a native Python value."""
        return decode_value(self.cl_type, self.raw)

    def to_obj(self) -> dict:
        return {
            "cl_type": self.cl_type.to_obj(),
            "bytes": to_hex(self.raw),
            "parsed": self.parsed,
        }


# ----------------------------------------------------------------------
# Decoder
# ----------------------------------------------------------------------


def decode_value(cl_type: CLType, raw: BytesLike) -> Any:
    """
    Decode canonical bytes into a native value:

        Bool → bool, integers → int, Unit → None, String → str,
        URef → URef, PublicKey → PublicKey, Option → None | value,
        List → list, ByteArray → bytes, Tuple1/2/3 → tuple

    Truncated input and trailing bytes raise DeserializationError.
    """
    reader = ByteReader(raw)
    value = read_value(reader, cl_type)
    reader.expect_end()
    return value


def read_value(reader: ByteReader, cl_type: CLType) -> Any:
    tag = cl_type.tag
    if tag is CLTypeTag.BOOL:
        b = reader.read_u8()
        if b > 1:
            raise DeserializationError("invalid Bool byte", value=b)
        return b == 1
    if tag is CLTypeTag.I32:
        return reader.read_i32()
    if tag is CLTypeTag.I64:
        return reader.read_i64()
    if tag is CLTypeTag.U8:
        return reader.read_u8()
    if tag is CLTypeTag.U32:
        return reader.read_u32()
    if tag is CLTypeTag.U64:
        return reader.read_u64()
    if tag in _BIG_UINT_BITS:
        return reader.read_uint_minimal(bits=_BIG_UINT_BITS[tag])
    if tag is CLTypeTag.UNIT:
        return None
    if tag is CLTypeTag.STRING:
        return reader.read_string()
    if tag is CLTypeTag.UREF:
        return URef.from_bytes(reader.read(UREF_SERIALIZED_LENGTH))
    if tag is CLTypeTag.PUBLIC_KEY:
        return PublicKey.read(reader)
    if tag is CLTypeTag.OPTION:
        flag = reader.read_u8()
        if flag == 0:
            return None
        if flag != 1:
            raise DeserializationError("invalid Option flag", value=flag)
        return read_value(reader, cl_type.params[0])
    if tag is CLTypeTag.LIST:
        count = reader.read_u32()
        element = cl_type.params[0]
        size = min_encoded_size(element)
        if size == 0:
            if count > MAX_ZERO_SIZE_LIST:
                raise DeserializationError(
                    "List of zero-size elements is too long", count=count, max=MAX_ZERO_SIZE_LIST
                )
        elif count * size > reader.remaining:
            raise DeserializationError("List count exceeds input", count=count)
        return [read_value(reader, element) for _ in range(count)]
    if tag is CLTypeTag.BYTE_ARRAY:
        return reader.read(cl_type.length)  # type: ignore[arg-type]
    if tag in (CLTypeTag.TUPLE1, CLTypeTag.TUPLE2, CLTypeTag.TUPLE3):
        return tuple(read_value(reader, p) for p in cl_type.params)
    raise DeserializationError("unsupported CLType", tag=int(tag))  # pragma: no cover


def min_encoded_size(cl_type: CLType) -> int:
    """Smallest number of bytes a value of `cl_type` can encode to."""
    tag = cl_type.tag
    if tag is CLTypeTag.BYTE_ARRAY:
        return cl_type.length  # type: ignore[return-value]
    if tag in (CLTypeTag.TUPLE1, CLTypeTag.TUPLE2, CLTypeTag.TUPLE3):
        return sum(min_encoded_size(p) for p in cl_type.params)
    return _MIN_SIZE[tag]


def _project(cl_type: CLType, value: Any) -> Any:
    """Advisory display form, mirroring what the constructors store in `parsed`."""
    tag = cl_type.tag
    if tag in _BIG_UINT_BITS:
        return str(value)
    if tag is CLTypeTag.UREF:
        return str(value)
    if tag is CLTypeTag.PUBLIC_KEY:
        return value.to_hex()
    if tag is CLTypeTag.BYTE_ARRAY:
        return to_hex(value)
    if tag is CLTypeTag.OPTION:
        return None if value is None else _project(cl_type.params[0], value)
    if tag is CLTypeTag.LIST:
        return [_project(cl_type.params[0], v) for v in value]
    if tag is CLTypeTag.TUPLE1:
        return _project(cl_type.params[0], value[0])
    if tag in (CLTypeTag.TUPLE2, CLTypeTag.TUPLE3):
        return [_project(p, v) for p, v in zip(cl_type.params, value)]
    return value


__all__ = ["CLValue", "decode_value", "read_value", "min_encoded_size", "MAX_ZERO_SIZE_LIST"]
