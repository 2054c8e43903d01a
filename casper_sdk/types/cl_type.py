"""
casper_sdk.types.cl_type
========================

Type descriptors for CLValues: a closed sum type over simple tags and a few
parametric composites. Descriptors are immutable and compare structurally, so
`list_of(U64) == list_of(U64)` and `tuple2(U8, STRING) != tuple2(STRING, U8)`.

Wire form (used when a value travels as a named runtime argument):

    tag:u8  [nested descriptors...]  [u32 LE length for ByteArray]

JSON-friendly projection (`to_obj` / `from_obj`):

    "Bool"   {"Option": "U64"}   {"List": "String"}   {"ByteArray": 32}
    {"Tuple2": ["U8", "String"]}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Mapping, Optional, Tuple

from casper_sdk.errors import DeserializationError, NotImplementedFeature, ValidationError
from casper_sdk.utils.bytes import U32_MAX, ByteReader, BytesLike, u32_le

MAX_DEPTH = 64


class CLTypeTag(IntEnum):
    BOOL = 0
    I32 = 1
    I64 = 2
    U8 = 3
    U32 = 4
    U64 = 5
    U128 = 6
    U256 = 7
    U512 = 8
    UNIT = 9
    STRING = 10
    KEY = 11
    UREF = 12
    OPTION = 13
    LIST = 14
    BYTE_ARRAY = 15
    RESULT = 16
    MAP = 17
    TUPLE1 = 18
    TUPLE2 = 19
    TUPLE3 = 20
    ANY = 21
    PUBLIC_KEY = 22


SIMPLE_TAGS = frozenset(
    (
        CLTypeTag.BOOL,
        CLTypeTag.I32,
        CLTypeTag.I64,
        CLTypeTag.U8,
        CLTypeTag.U32,
        CLTypeTag.U64,
        CLTypeTag.U128,
        CLTypeTag.U256,
        CLTypeTag.U512,
        CLTypeTag.UNIT,
        CLTypeTag.STRING,
        CLTypeTag.UREF,
        CLTypeTag.PUBLIC_KEY,
    )
)

# Number of nested descriptors carried by each parametric tag.
_ARITY = {
    CLTypeTag.OPTION: 1,
    CLTypeTag.LIST: 1,
    CLTypeTag.TUPLE1: 1,
    CLTypeTag.TUPLE2: 2,
    CLTypeTag.TUPLE3: 3,
}

# Network tags outside the closed set this SDK encodes.
UNSUPPORTED_TAGS = frozenset((CLTypeTag.KEY, CLTypeTag.RESULT, CLTypeTag.MAP, CLTypeTag.ANY))

_NAMES = {
    CLTypeTag.BOOL: "Bool",
    CLTypeTag.I32: "I32",
    CLTypeTag.I64: "I64",
    CLTypeTag.U8: "U8",
    CLTypeTag.U32: "U32",
    CLTypeTag.U64: "U64",
    CLTypeTag.U128: "U128",
    CLTypeTag.U256: "U256",
    CLTypeTag.U512: "U512",
    CLTypeTag.UNIT: "Unit",
    CLTypeTag.STRING: "String",
    CLTypeTag.KEY: "Key",
    CLTypeTag.UREF: "URef",
    CLTypeTag.OPTION: "Option",
    CLTypeTag.LIST: "List",
    CLTypeTag.BYTE_ARRAY: "ByteArray",
    CLTypeTag.RESULT: "Result",
    CLTypeTag.MAP: "Map",
    CLTypeTag.TUPLE1: "Tuple1",
    CLTypeTag.TUPLE2: "Tuple2",
    CLTypeTag.TUPLE3: "Tuple3",
    CLTypeTag.ANY: "Any",
    CLTypeTag.PUBLIC_KEY: "PublicKey",
}
_BY_NAME = {v: k for k, v in _NAMES.items()}


@dataclass(frozen=True)
class CLType:
    tag: CLTypeTag
    params: Tuple["CLType", ...] = ()
    length: Optional[int] = None

    def __post_init__(self) -> None:
        tag = self.tag
        if not isinstance(tag, CLTypeTag):
            object.__setattr__(self, "tag", CLTypeTag(tag))
            tag = self.tag
        if tag in UNSUPPORTED_TAGS:
            raise NotImplementedFeature(f"CLType {_NAMES[tag]} is not supported", tag=int(tag))
        object.__setattr__(self, "params", tuple(self.params))
        for p in self.params:
            if not isinstance(p, CLType):
                raise ValidationError("nested descriptors must be CLType", got=type(p).__name__)

        if tag in SIMPLE_TAGS:
            if self.params or self.length is not None:
                raise ValidationError(f"{_NAMES[tag]} takes no parameters")
        elif tag is CLTypeTag.BYTE_ARRAY:
            if self.params:
                raise ValidationError("ByteArray takes a length, not nested types")
            if isinstance(self.length, bool) or not isinstance(self.length, int):
                raise ValidationError("ByteArray length must be an int")
            if not 0 <= self.length <= U32_MAX:
                raise ValidationError("ByteArray length out of range", length=self.length)
        else:
            if self.length is not None:
                raise ValidationError(f"{_NAMES[tag]} does not take a length")
            if len(self.params) != _ARITY[tag]:
                raise ValidationError(
                    f"{_NAMES[tag]} takes {_ARITY[tag]} nested type(s)", got=len(self.params)
                )

    # -- constructors --

    @staticmethod
    def option(inner: "CLType") -> "CLType":
        return CLType(CLTypeTag.OPTION, (inner,))

    @staticmethod
    def list_of(element: "CLType") -> "CLType":
        return CLType(CLTypeTag.LIST, (element,))

    @staticmethod
    def byte_array(length: int) -> "CLType":
        return CLType(CLTypeTag.BYTE_ARRAY, length=length)

    @staticmethod
    def tuple1(t0: "CLType") -> "CLType":
        return CLType(CLTypeTag.TUPLE1, (t0,))

    @staticmethod
    def tuple2(t0: "CLType", t1: "CLType") -> "CLType":
        return CLType(CLTypeTag.TUPLE2, (t0, t1))

    @staticmethod
    def tuple3(t0: "CLType", t1: "CLType", t2: "CLType") -> "CLType":
        return CLType(CLTypeTag.TUPLE3, (t0, t1, t2))

    # -- accessors --

    @property
    def name(self) -> str:
        return _NAMES[self.tag]

    @property
    def inner(self) -> "CLType":
        """Nested type of Option / List / Tuple1."""
        if self.tag not in (CLTypeTag.OPTION, CLTypeTag.LIST, CLTypeTag.TUPLE1):
            raise AttributeError(f"{self.name} has no single inner type")
        return self.params[0]

    @property
    def is_simple(self) -> bool:
        return self.tag in SIMPLE_TAGS

    # -- wire form --

    def to_bytes(self) -> bytes:
        out = bytes((int(self.tag),))
        if self.tag is CLTypeTag.BYTE_ARRAY:
            return out + u32_le(self.length)  # type: ignore[arg-type]
        for p in self.params:
            out += p.to_bytes()
        return out

    @staticmethod
    def read(reader: ByteReader, *, _depth: int = 0) -> "CLType":
        if _depth > MAX_DEPTH:
            raise DeserializationError("CLType nesting too deep", max_depth=MAX_DEPTH)
        raw_tag = reader.read_u8()
        try:
            tag = CLTypeTag(raw_tag)
        except ValueError:
            raise DeserializationError("unknown CLType tag", tag=raw_tag) from None
        if tag in UNSUPPORTED_TAGS:
            raise NotImplementedFeature(f"CLType {_NAMES[tag]} is not supported", tag=raw_tag)
        if tag in SIMPLE_TAGS:
            return CLType(tag)
        if tag is CLTypeTag.BYTE_ARRAY:
            return CLType(tag, length=reader.read_u32())
        params = tuple(CLType.read(reader, _depth=_depth + 1) for _ in range(_ARITY[tag]))
        return CLType(tag, params)

    @staticmethod
    def from_bytes(data: BytesLike) -> "CLType":
        reader = ByteReader(data)
        t = CLType.read(reader)
        reader.expect_end()
        return t

    # -- JSON-friendly projection --

    def to_obj(self) -> Any:
        if self.is_simple:
            return self.name
        if self.tag is CLTypeTag.BYTE_ARRAY:
            return {self.name: self.length}
        if self.tag in (CLTypeTag.TUPLE1, CLTypeTag.TUPLE2, CLTypeTag.TUPLE3):
            return {self.name: [p.to_obj() for p in self.params]}
        return {self.name: self.params[0].to_obj()}

    @staticmethod
    def from_obj(o: Any) -> "CLType":
        if isinstance(o, str):
            tag = _BY_NAME.get(o)
            if tag is None or tag not in SIMPLE_TAGS:
                raise ValidationError(f"unknown simple CLType {o!r}")
            return CLType(tag)
        if isinstance(o, Mapping) and len(o) == 1:
            (name, arg), = o.items()
            tag = _BY_NAME.get(name)
            if tag is None:
                raise ValidationError(f"unknown CLType {name!r}")
            if tag is CLTypeTag.BYTE_ARRAY:
                return CLType(tag, length=int(arg))
            if tag in (CLTypeTag.TUPLE1, CLTypeTag.TUPLE2, CLTypeTag.TUPLE3):
                return CLType(tag, tuple(CLType.from_obj(x) for x in arg))
            return CLType(tag, (CLType.from_obj(arg),))
        raise ValidationError("CLType must be a name or a single-key mapping")

    def __str__(self) -> str:
        if self.is_simple:
            return self.name
        if self.tag is CLTypeTag.BYTE_ARRAY:
            return f"ByteArray({self.length})"
        return f"{self.name}({', '.join(str(p) for p in self.params)})"


BOOL = CLType(CLTypeTag.BOOL)
I32 = CLType(CLTypeTag.I32)
I64 = CLType(CLTypeTag.I64)
U8 = CLType(CLTypeTag.U8)
U32 = CLType(CLTypeTag.U32)
U64 = CLType(CLTypeTag.U64)
U128 = CLType(CLTypeTag.U128)
U256 = CLType(CLTypeTag.U256)
U512 = CLType(CLTypeTag.U512)
UNIT = CLType(CLTypeTag.UNIT)
STRING = CLType(CLTypeTag.STRING)
UREF = CLType(CLTypeTag.UREF)
PUBLIC_KEY = CLType(CLTypeTag.PUBLIC_KEY)


__all__ = [
    "CLTypeTag",
    "CLType",
    "SIMPLE_TAGS",
    "UNSUPPORTED_TAGS",
    "BOOL",
    "I32",
    "I64",
    "U8",
    "U32",
    "U64",
    "U128",
    "U256",
    "U512",
    "UNIT",
    "STRING",
    "UREF",
    "PUBLIC_KEY",
]
