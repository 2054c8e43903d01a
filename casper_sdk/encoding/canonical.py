from __future__ import annotations

"""
Canonical deploy encoder
========================

Deterministic byte layout for the deploy's fixed-shape structs. Fields are
written in one fixed order regardless of how a caller (or a JSON document)
happened to arrange them, so two equal structs always encode to equal bytes.

Header (hashed into the deploy hash):

    account       PublicKey (tag + raw)
    timestamp     u64 LE, milliseconds since the Unix epoch
    ttl           u64 LE, milliseconds
    gas_price     u64 LE
    body_hash     32 raw bytes
    dependencies  u32 LE count + 32-byte hashes
    chain_name    String

Execution item (hashed into the body hash):

    tag:u8 || variant payload          (see casper_sdk.types.executable)

Named argument:

    name:String || u32 LE len + value bytes || CLType descriptor bytes

Deploy (not hashed; used for size and transport):

    header || hash:32 || payment || session || u32 count + approvals
    approval = signer PublicKey || Signature (tag + 64 raw bytes)

Every encoder here is pure. Decoders are strict: truncated input, trailing
bytes and unknown tags raise DeserializationError.
"""

from typing import TYPE_CHECKING, Iterable, List, Optional

from casper_sdk.errors import DeserializationError, ValidationError
from casper_sdk.types.cl_type import CLType
from casper_sdk.types.cl_value import CLValue
from casper_sdk.types.executable import (
    HASH_LENGTH,
    ExecutableDeployItem,
    ItemTag,
    ModuleBytes,
    NamedArg,
    RuntimeArgs,
    StoredContractByHash,
    StoredContractByName,
    StoredVersionedContractByHash,
    StoredVersionedContractByName,
    Transfer,
)
from casper_sdk.types.keys import PublicKey
from casper_sdk.types.signature import SIGNATURE_LENGTH, Signature
from casper_sdk.utils.bytes import (
    ByteReader,
    BytesLike,
    sized_bytes,
    string_bytes,
    u32_le,
    u64_le,
)

if TYPE_CHECKING:  # pragma: no cover
    from casper_sdk.types.deploy import Approval, Deploy, DeployHeader


# --------------------------
# Header
# --------------------------


def encode_header(header: "DeployHeader") -> bytes:
    if header.body_hash is None:
        raise ValidationError("header has no body hash; build it through Deploy")
    out = bytearray()
    out += header.account.to_bytes()
    out += u64_le(header.timestamp)
    out += u64_le(header.ttl)
    out += u64_le(header.gas_price)
    out += header.body_hash
    out += u32_le(len(header.dependencies))
    for dep in header.dependencies:
        out += dep
    out += string_bytes(header.chain_name)
    return bytes(out)


def read_header(reader: ByteReader) -> "DeployHeader":
    from casper_sdk.types.deploy import DeployHeader

    account = PublicKey.read(reader)
    timestamp = reader.read_u64()
    ttl = reader.read_u64()
    gas_price = reader.read_u64()
    body_hash = reader.read(HASH_LENGTH)
    count = reader.read_u32()
    if count * HASH_LENGTH > reader.remaining:
        raise DeserializationError("dependency count exceeds input", count=count)
    deps = tuple(reader.read(HASH_LENGTH) for _ in range(count))
    chain_name = reader.read_string()
    return DeployHeader(
        account=account,
        timestamp=timestamp,
        ttl=ttl,
        gas_price=gas_price,
        dependencies=deps,
        chain_name=chain_name,
        body_hash=body_hash,
    )


def decode_header(data: BytesLike) -> "DeployHeader":
    reader = ByteReader(data)
    header = read_header(reader)
    reader.expect_end()
    return header


# --------------------------
# Runtime args
# --------------------------


def encode_named_arg(arg: NamedArg) -> bytes:
    return string_bytes(arg.name) + sized_bytes(arg.value.raw) + arg.value.cl_type.to_bytes()


def encode_runtime_args(args: Iterable[NamedArg]) -> bytes:
    args = tuple(args)
    return u32_le(len(args)) + b"".join(encode_named_arg(a) for a in args)


def read_named_arg(reader: ByteReader) -> NamedArg:
    name = reader.read_string()
    raw = reader.read_sized()
    cl_type = CLType.read(reader)
    return NamedArg(name, CLValue.from_bytes(cl_type, raw))


def read_runtime_args(reader: ByteReader) -> RuntimeArgs:
    count = reader.read_u32()
    if count > reader.remaining:
        raise DeserializationError("argument count exceeds input", count=count)
    return tuple(read_named_arg(reader) for _ in range(count))


# --------------------------
# Execution items
# --------------------------


def _option_u32(version: Optional[int]) -> bytes:
    return b"\x00" if version is None else b"\x01" + u32_le(version)


def _read_option_u32(reader: ByteReader) -> Optional[int]:
    flag = reader.read_u8()
    if flag == 0:
        return None
    if flag != 1:
        raise DeserializationError("invalid Option flag", value=flag)
    return reader.read_u32()


def encode_item(item: ExecutableDeployItem) -> bytes:
    """Tag byte followed by the variant payload; the pair is one unit."""
    if isinstance(item, ModuleBytes):
        body = sized_bytes(item.module_bytes)
    elif isinstance(item, StoredContractByHash):
        body = item.hash + string_bytes(item.entry_point)
    elif isinstance(item, StoredContractByName):
        body = string_bytes(item.name) + string_bytes(item.entry_point)
    elif isinstance(item, StoredVersionedContractByHash):
        body = item.hash + _option_u32(item.version) + string_bytes(item.entry_point)
    elif isinstance(item, StoredVersionedContractByName):
        body = string_bytes(item.name) + _option_u32(item.version) + string_bytes(item.entry_point)
    elif isinstance(item, Transfer):
        body = b""
    else:
        raise ValidationError("not an execution item", got=type(item).__name__)
    return bytes((int(item.tag),)) + body + encode_runtime_args(item.args)


def read_item(reader: ByteReader) -> ExecutableDeployItem:
    raw_tag = reader.read_u8()
    try:
        tag = ItemTag(raw_tag)
    except ValueError:
        raise DeserializationError("unknown execution item tag", tag=raw_tag) from None

    if tag is ItemTag.MODULE_BYTES:
        return ModuleBytes(reader.read_sized(), read_runtime_args(reader))
    if tag is ItemTag.STORED_CONTRACT_BY_HASH:
        h = reader.read(HASH_LENGTH)
        return StoredContractByHash(h, reader.read_string(), read_runtime_args(reader))
    if tag is ItemTag.STORED_CONTRACT_BY_NAME:
        name = reader.read_string()
        return StoredContractByName(name, reader.read_string(), read_runtime_args(reader))
    if tag is ItemTag.STORED_VERSIONED_CONTRACT_BY_HASH:
        h = reader.read(HASH_LENGTH)
        version = _read_option_u32(reader)
        return StoredVersionedContractByHash(h, version, reader.read_string(), read_runtime_args(reader))
    if tag is ItemTag.STORED_VERSIONED_CONTRACT_BY_NAME:
        name = reader.read_string()
        version = _read_option_u32(reader)
        return StoredVersionedContractByName(name, version, reader.read_string(), read_runtime_args(reader))
    return Transfer(read_runtime_args(reader))


def decode_item(data: BytesLike) -> ExecutableDeployItem:
    reader = ByteReader(data)
    item = read_item(reader)
    reader.expect_end()
    return item


# --------------------------
# Approvals & deploy
# --------------------------


def encode_approval(approval: "Approval") -> bytes:
    return approval.signer.to_bytes() + approval.signature.to_bytes()


def read_approval(reader: ByteReader) -> "Approval":
    from casper_sdk.types.deploy import Approval

    signer = PublicKey.read(reader)
    return Approval(signer, Signature.from_bytes(reader.read(1 + SIGNATURE_LENGTH)))


def encode_deploy(deploy: "Deploy") -> bytes:
    approvals = deploy.approvals
    out = bytearray()
    out += encode_header(deploy.header)
    out += deploy.hash
    out += encode_item(deploy.payment_item)
    out += encode_item(deploy.session_item)
    out += u32_le(len(approvals))
    for a in approvals:
        out += encode_approval(a)
    return bytes(out)


def decode_deploy(data: BytesLike) -> "Deploy":
    """
    Rebuild a deploy from bytes without re-deriving its hashes. Call
    `validate()` on the result before trusting it.
    """
    from casper_sdk.types.deploy import Deploy

    reader = ByteReader(data)
    header = read_header(reader)
    deploy_hash = reader.read(HASH_LENGTH)
    payment = read_item(reader)
    session = read_item(reader)
    count = reader.read_u32()
    if count > reader.remaining:
        raise DeserializationError("approval count exceeds input", count=count)
    approvals: List["Approval"] = [read_approval(reader) for _ in range(count)]
    reader.expect_end()
    return Deploy.from_parts(header, deploy_hash, payment, session, approvals)


__all__ = [
    "encode_header",
    "decode_header",
    "encode_named_arg",
    "encode_runtime_args",
    "encode_item",
    "decode_item",
    "encode_approval",
    "encode_deploy",
    "decode_deploy",
]
