"""
casper_sdk.utils.bytes
======================

Byte helpers shared by the codec layers:

- Hex helpers: to_hex/from_hex (network hex is unprefixed lowercase)
- Length guards: ensure_len
- Fixed-width little-endian integer primitives. These are the ONLY place the
  SDK chooses a byte order; every codec goes through them.
- `ByteReader`: a bounds-checked cursor used by all decoders.

Examples
--------
>>> u32_le(1)
b'\\x01\\x00\\x00\\x00'
>>> ByteReader(b'\\x2a\\x00\\x00\\x00').read_u32()
42
"""

from __future__ import annotations

from typing import Union

from casper_sdk.errors import DeserializationError, ValidationError

BytesLike = Union[bytes, bytearray, memoryview]


# -----------------------
# Hex
# -----------------------


def is_byteslike(x: object) -> bool:
    return isinstance(x, (bytes, bytearray, memoryview))


def strip0x(s: str) -> str:
    return s[2:] if s.startswith(("0x", "0X")) else s


def to_hex(data: BytesLike, *, prefix: bool = False) -> str:
    """Return lowercase hex string of data."""
    if not is_byteslike(data):
        raise TypeError("to_hex expects bytes-like")
    h = bytes(data).hex()
    return f"0x{h}" if prefix else h


def from_hex(h: str) -> bytes:
    """
    Parse a hex string with or without 0x prefix.

    Strict: odd-length or non-hex input raises ValidationError.
    """
    if not isinstance(h, str):
        raise TypeError("from_hex expects str")
    h = strip0x(h.strip())
    if len(h) % 2 == 1:
        raise ValidationError("hex string must have even length", length=len(h))
    try:
        return bytes.fromhex(h)
    except ValueError as e:
        raise ValidationError(f"invalid hex string: {e}") from e


def ensure_bytes(data: Union[BytesLike, str]) -> bytes:
    """bytes-like → bytes; str is treated as hex."""
    if is_byteslike(data):
        return bytes(data)  # type: ignore[arg-type]
    if isinstance(data, str):
        return from_hex(data)
    raise TypeError(f"unsupported type for ensure_bytes: {type(data)!r}")


def ensure_len(data: Union[BytesLike, str], n: int, *, name: str = "bytes") -> bytes:
    data_b = ensure_bytes(data)
    if len(data_b) != n:
        raise ValidationError(f"{name} must be length {n}", name=name, got=len(data_b))
    return data_b


# -----------------------
# Fixed-width integers (little-endian)
# -----------------------

U8_MAX = (1 << 8) - 1
U32_MAX = (1 << 32) - 1
U64_MAX = (1 << 64) - 1
I32_MIN, I32_MAX = -(1 << 31), (1 << 31) - 1
I64_MIN, I64_MAX = -(1 << 63), (1 << 63) - 1


def _check_range(value: int, lo: int, hi: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} expects an int", got=type(value).__name__)
    if not lo <= value <= hi:
        raise ValidationError(f"{name} out of range", value=str(value), min=str(lo), max=str(hi))
    return value


def u8(value: int) -> bytes:
    return bytes((_check_range(value, 0, U8_MAX, "u8"),))


def u32_le(value: int) -> bytes:
    return _check_range(value, 0, U32_MAX, "u32").to_bytes(4, "little")


def u64_le(value: int) -> bytes:
    return _check_range(value, 0, U64_MAX, "u64").to_bytes(8, "little")


def i32_le(value: int) -> bytes:
    return _check_range(value, I32_MIN, I32_MAX, "i32").to_bytes(4, "little", signed=True)


def i64_le(value: int) -> bytes:
    return _check_range(value, I64_MIN, I64_MAX, "i64").to_bytes(8, "little", signed=True)


def uint_le_minimal(value: int, *, bits: int) -> bytes:
    """
    Length-prefixed minimal little-endian magnitude for big unsigned ints
    (U128/U256/U512): one length byte, then the magnitude with trailing zero
    bytes trimmed. Zero encodes as a single 0x00.
    """
    _check_range(value, 0, (1 << bits) - 1, f"u{bits}")
    magnitude = value.to_bytes((value.bit_length() + 7) // 8, "little")
    return bytes((len(magnitude),)) + magnitude


# -----------------------
# Reader
# -----------------------


class ByteReader:
    """
    Bounds-checked cursor over an immutable buffer.

    Every read either returns exactly the requested bytes or raises
    DeserializationError; `expect_end` rejects trailing bytes.
    """

    __slots__ = ("_buf", "_pos")

    def __init__(self, data: BytesLike) -> None:
        self._buf = bytes(data)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._buf) - self._pos

    def read(self, n: int) -> bytes:
        if n < 0:
            raise DeserializationError("negative read length", length=n)
        if self.remaining < n:
            raise DeserializationError(
                "unexpected end of input",
                needed=n,
                available=self.remaining,
                offset=self._pos,
            )
        out = self._buf[self._pos : self._pos + n]
        self._pos += n
        return out

    def read_u8(self) -> int:
        return self.read(1)[0]

    def read_u32(self) -> int:
        return int.from_bytes(self.read(4), "little")

    def read_u64(self) -> int:
        return int.from_bytes(self.read(8), "little")

    def read_i32(self) -> int:
        return int.from_bytes(self.read(4), "little", signed=True)

    def read_i64(self) -> int:
        return int.from_bytes(self.read(8), "little", signed=True)

    def read_uint_minimal(self, *, bits: int) -> int:
        n = self.read_u8()
        if n > bits // 8:
            raise DeserializationError(f"u{bits} magnitude too long", length=n)
        magnitude = self.read(n)
        if n and magnitude[-1] == 0:
            raise DeserializationError(f"non-canonical u{bits} (trailing zero byte)")
        return int.from_bytes(magnitude, "little")

    def read_string(self) -> str:
        n = self.read_u32()
        raw = self.read(n)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DeserializationError("string is not valid UTF-8") from e

    def read_sized(self) -> bytes:
        """u32 LE length followed by that many bytes."""
        return self.read(self.read_u32())

    def expect_end(self) -> None:
        if self.remaining:
            raise DeserializationError(
                "trailing bytes after value", trailing=self.remaining, offset=self._pos
            )


def string_bytes(value: str) -> bytes:
    """u32 LE UTF-8 byte length + UTF-8 bytes."""
    if not isinstance(value, str):
        raise ValidationError("string expects str", got=type(value).__name__)
    raw = value.encode("utf-8")
    return u32_le(len(raw)) + raw


def sized_bytes(data: BytesLike) -> bytes:
    raw = bytes(data)
    return u32_le(len(raw)) + raw


__all__ = [
    "BytesLike",
    "is_byteslike",
    "strip0x",
    "to_hex",
    "from_hex",
    "ensure_bytes",
    "ensure_len",
    "U8_MAX",
    "U32_MAX",
    "U64_MAX",
    "I32_MIN",
    "I32_MAX",
    "I64_MIN",
    "I64_MAX",
    "u8",
    "u32_le",
    "u64_le",
    "i32_le",
    "i64_le",
    "uint_le_minimal",
    "string_bytes",
    "sized_bytes",
    "ByteReader",
]
