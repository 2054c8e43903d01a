"""
casper_sdk.types.executable
===========================

Execution items carried as a deploy's payment and session logic.

Each variant has a stable textual `discriminant` (e.g. "ModuleBytes") and a
one-byte wire `tag`. The pair (discriminant, canonical payload) is encoded as
one unit by `casper_sdk.encoding.canonical.encode_item`:

    ModuleBytes                    0  sized module bytes, args
    StoredContractByHash           1  hash32, entry_point, args
    StoredContractByName           2  name, entry_point, args
    StoredVersionedContractByHash  3  hash32, Option<u32> version, entry_point, args
    StoredVersionedContractByName  4  name, Option<u32> version, entry_point, args
    Transfer                       5  args

Runtime args are an ordered tuple of `NamedArg`s; order is significant.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from casper_sdk.errors import ValidationError
from casper_sdk.types.cl_value import CLValue
from casper_sdk.utils.bytes import U32_MAX, ensure_bytes, ensure_len, to_hex

HASH_LENGTH = 32


class ItemTag(IntEnum):
    MODULE_BYTES = 0
    STORED_CONTRACT_BY_HASH = 1
    STORED_CONTRACT_BY_NAME = 2
    STORED_VERSIONED_CONTRACT_BY_HASH = 3
    STORED_VERSIONED_CONTRACT_BY_NAME = 4
    TRANSFER = 5


@dataclass(frozen=True)
class NamedArg:
    name: str
    value: CLValue

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValidationError("argument name must be a non-empty string")
        if not isinstance(self.value, CLValue):
            raise ValidationError("argument value must be a CLValue", name=self.name)

    def to_obj(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value.to_obj()}


RuntimeArgs = Tuple[NamedArg, ...]
ArgsInput = Union[
    Mapping[str, CLValue],
    Iterable[Union[NamedArg, Tuple[str, CLValue]]],
    None,
]


def runtime_args(args: ArgsInput = None) -> RuntimeArgs:
    """
    Normalise args into an ordered tuple of NamedArg.

    Accepts a mapping (insertion order is kept), an iterable of NamedArg, or
    an iterable of (name, CLValue) pairs.
    """
    if args is None:
        return ()
    if isinstance(args, Mapping):
        return tuple(NamedArg(k, v) for k, v in args.items())
    out = []
    for a in args:
        if isinstance(a, NamedArg):
            out.append(a)
        else:
            name, value = a
            out.append(NamedArg(name, value))
    return tuple(out)


def _check_entry_point(entry_point: str) -> None:
    if not isinstance(entry_point, str) or not entry_point:
        raise ValidationError("entry_point must be a non-empty string")


def _check_version(version: Optional[int]) -> None:
    if version is None:
        return
    if isinstance(version, bool) or not isinstance(version, int) or not 0 <= version <= U32_MAX:
        raise ValidationError("contract version must be a u32 or None", version=str(version))


class ExecutableDeployItem:
    """Base for the six execution item variants."""

    discriminant: str = ""
    tag: ItemTag

    args: RuntimeArgs

    def to_bytes(self) -> bytes:
        from casper_sdk.encoding.canonical import encode_item

        return encode_item(self)

    def _fields_obj(self) -> Dict[str, Any]:
        return {}

    def to_obj(self) -> Dict[str, Any]:
        body = self._fields_obj()
        body["args"] = [a.to_obj() for a in self.args]
        return {self.discriminant: body}

    def arg(self, name: str) -> Optional[CLValue]:
        """First argument value with `name`, or None."""
        for a in self.args:
            if a.name == name:
                return a.value
        return None


@dataclass(frozen=True)
class ModuleBytes(ExecutableDeployItem):
    module_bytes: bytes = b""
    args: RuntimeArgs = field(default_factory=tuple)

    discriminant = "ModuleBytes"
    tag = ItemTag.MODULE_BYTES

    def __post_init__(self) -> None:
        object.__setattr__(self, "module_bytes", ensure_bytes(self.module_bytes))
        object.__setattr__(self, "args", runtime_args(self.args))

    def _fields_obj(self) -> Dict[str, Any]:
        return {"module_bytes": to_hex(self.module_bytes)}


@dataclass(frozen=True)
class StoredContractByHash(ExecutableDeployItem):
    hash: bytes
    entry_point: str
    args: RuntimeArgs = field(default_factory=tuple)

    discriminant = "StoredContractByHash"
    tag = ItemTag.STORED_CONTRACT_BY_HASH

    def __post_init__(self) -> None:
        object.__setattr__(self, "hash", ensure_len(self.hash, HASH_LENGTH, name="contract hash"))
        _check_entry_point(self.entry_point)
        object.__setattr__(self, "args", runtime_args(self.args))

    def _fields_obj(self) -> Dict[str, Any]:
        return {"hash": to_hex(self.hash), "entry_point": self.entry_point}


@dataclass(frozen=True)
class StoredContractByName(ExecutableDeployItem):
    name: str
    entry_point: str
    args: RuntimeArgs = field(default_factory=tuple)

    discriminant = "StoredContractByName"
    tag = ItemTag.STORED_CONTRACT_BY_NAME

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValidationError("contract name must be a non-empty string")
        _check_entry_point(self.entry_point)
        object.__setattr__(self, "args", runtime_args(self.args))

    def _fields_obj(self) -> Dict[str, Any]:
        return {"name": self.name, "entry_point": self.entry_point}


@dataclass(frozen=True)
class StoredVersionedContractByHash(ExecutableDeployItem):
    hash: bytes
    version: Optional[int]
    entry_point: str
    args: RuntimeArgs = field(default_factory=tuple)

    discriminant = "StoredVersionedContractByHash"
    tag = ItemTag.STORED_VERSIONED_CONTRACT_BY_HASH

    def __post_init__(self) -> None:
        object.__setattr__(self, "hash", ensure_len(self.hash, HASH_LENGTH, name="contract hash"))
        _check_version(self.version)
        _check_entry_point(self.entry_point)
        object.__setattr__(self, "args", runtime_args(self.args))

    def _fields_obj(self) -> Dict[str, Any]:
        return {"hash": to_hex(self.hash), "version": self.version, "entry_point": self.entry_point}


@dataclass(frozen=True)
class StoredVersionedContractByName(ExecutableDeployItem):
    name: str
    version: Optional[int]
    entry_point: str
    args: RuntimeArgs = field(default_factory=tuple)

    discriminant = "StoredVersionedContractByName"
    tag = ItemTag.STORED_VERSIONED_CONTRACT_BY_NAME

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValidationError("contract name must be a non-empty string")
        _check_version(self.version)
        _check_entry_point(self.entry_point)
        object.__setattr__(self, "args", runtime_args(self.args))

    def _fields_obj(self) -> Dict[str, Any]:
        return {"name": self.name, "version": self.version, "entry_point": self.entry_point}


@dataclass(frozen=True)
class Transfer(ExecutableDeployItem):
    args: RuntimeArgs = field(default_factory=tuple)

    discriminant = "Transfer"
    tag = ItemTag.TRANSFER

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", runtime_args(self.args))


__all__ = [
    "HASH_LENGTH",
    "ItemTag",
    "NamedArg",
    "RuntimeArgs",
    "runtime_args",
    "ExecutableDeployItem",
    "ModuleBytes",
    "StoredContractByHash",
    "StoredContractByName",
    "StoredVersionedContractByHash",
    "StoredVersionedContractByName",
    "Transfer",
]
