"""
casper_sdk.tx.build
===================

Builders for deploy headers, the common execution items, and whole deploys.

The builders return the dataclasses from `casper_sdk.types`. Header fields a
caller leaves out (timestamp, ttl, gas price, chain name) come from a
`DeployConfig`; the timestamp defaults to "now".

Design notes
------------
- `standard_payment`: ModuleBytes with empty module bytes and one U512
  `amount` argument; the network's built-in payment logic.
- `transfer`: native transfer with `amount` (U512), `target` and `id`
  (Option<U64>) arguments.
- `contract_by_hash` / `contract_by_name`: call an entry point of a stored
  contract; the `versioned_*` forms pin a contract version (None = latest).

Examples
--------
    from casper_sdk.tx.build import make_deploy, standard_payment, transfer
    from casper_sdk.wallet import KeyPair

    sender = KeyPair.generate("ed25519")
    deploy = make_deploy(
        account=sender.public_key,
        payment=standard_payment(100_000_000),
        session=transfer(2_500_000_000, target=recipient_pk, transfer_id=7),
        chain_name="casper-test",
        signers=[sender],
    )
    assert deploy.validate()
"""

from __future__ import annotations

from typing import Iterable, Optional, Union

from casper_sdk.config import DeployConfig
from casper_sdk.errors import ValidationError
from casper_sdk.types.cl_type import U64
from casper_sdk.types.cl_value import CLValue
from casper_sdk.types.deploy import Deploy, DeployHeader
from casper_sdk.types.executable import (
    ArgsInput,
    ExecutableDeployItem,
    ModuleBytes,
    StoredContractByHash,
    StoredContractByName,
    StoredVersionedContractByHash,
    StoredVersionedContractByName,
    Transfer,
)
from casper_sdk.types.keys import PublicKey
from casper_sdk.types.uref import URef
from casper_sdk.utils.bytes import BytesLike, ensure_bytes
from casper_sdk.utils.timefmt import now_ms, parse_timestamp, parse_ttl

Timestamp = Union[int, str, None]
TransferTarget = Union[PublicKey, URef, BytesLike, str]

ACCOUNT_HASH_LENGTH = 32


# -----------------------------------------------------------------------------
# Header
# -----------------------------------------------------------------------------


def _timestamp_ms(timestamp: Timestamp) -> int:
    if timestamp is None:
        return now_ms()
    if isinstance(timestamp, str):
        return parse_timestamp(timestamp)
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise ValidationError(
            "timestamp must be int milliseconds or an ISO-8601 string", got=type(timestamp).__name__
        )
    return timestamp


def make_header(
    account: PublicKey,
    *,
    timestamp: Timestamp = None,
    ttl: Union[int, str, None] = None,
    gas_price: Optional[int] = None,
    chain_name: Optional[str] = None,
    dependencies: Iterable[BytesLike] = (),
    config: Optional[DeployConfig] = None,
) -> DeployHeader:
    """
    Construct a `DeployHeader` with config defaults. `timestamp` may be
    milliseconds or an ISO-8601 string; `ttl` may be milliseconds or a
    duration such as "30m". The body hash is left for Deploy to fill.
    """
    cfg = config or DeployConfig()
    return DeployHeader(
        account=account,
        timestamp=_timestamp_ms(timestamp),
        ttl=parse_ttl(ttl) if ttl is not None else cfg.ttl_ms,
        gas_price=gas_price if gas_price is not None else cfg.gas_price,
        dependencies=tuple(ensure_bytes(d) for d in dependencies),
        chain_name=chain_name or cfg.chain_name,
    )


# -----------------------------------------------------------------------------
# Execution items
# -----------------------------------------------------------------------------


def standard_payment(amount: int) -> ModuleBytes:
    """Pay `amount` motes for execution from the account's main purse."""
    return ModuleBytes(b"", {"amount": CLValue.from_u512(amount)})


def module_bytes(wasm: Union[BytesLike, str], args: ArgsInput = None) -> ModuleBytes:
    return ModuleBytes(ensure_bytes(wasm), args)


def _target_value(target: TransferTarget) -> CLValue:
    if isinstance(target, PublicKey):
        return CLValue.from_public_key(target)
    if isinstance(target, URef):
        return CLValue.from_uref(target)
    if isinstance(target, str) and target.startswith("uref-"):
        return CLValue.from_uref(target)
    raw = ensure_bytes(target)
    if len(raw) == ACCOUNT_HASH_LENGTH:
        # Bare account hash.
        return CLValue.byte_array(raw)
    # Anything else must be a tagged public key.
    return CLValue.from_public_key(PublicKey.from_bytes(raw))


def transfer(
    amount: int,
    target: TransferTarget,
    transfer_id: Optional[int] = None,
) -> Transfer:
    """
    Native transfer of `amount` motes to `target`: a PublicKey, a URef (or
    its `uref-...` text), a 32-byte account hash, or tagged public key bytes.
    """
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise ValidationError("transfer amount must be a positive int", amount=str(amount))
    transfer_id_value = CLValue.option(
        None if transfer_id is None else CLValue.from_u64(transfer_id), U64
    )
    return Transfer(
        (
            ("amount", CLValue.from_u512(amount)),
            ("target", _target_value(target)),
            ("id", transfer_id_value),
        )
    )


def contract_by_hash(
    contract_hash: Union[BytesLike, str], entry_point: str, args: ArgsInput = None
) -> StoredContractByHash:
    return StoredContractByHash(ensure_bytes(contract_hash), entry_point, args)


def contract_by_name(name: str, entry_point: str, args: ArgsInput = None) -> StoredContractByName:
    return StoredContractByName(name, entry_point, args)


def versioned_contract_by_hash(
    contract_hash: Union[BytesLike, str],
    entry_point: str,
    args: ArgsInput = None,
    *,
    version: Optional[int] = None,
) -> StoredVersionedContractByHash:
    return StoredVersionedContractByHash(ensure_bytes(contract_hash), version, entry_point, args)


def versioned_contract_by_name(
    name: str,
    entry_point: str,
    args: ArgsInput = None,
    *,
    version: Optional[int] = None,
) -> StoredVersionedContractByName:
    return StoredVersionedContractByName(name, version, entry_point, args)


# -----------------------------------------------------------------------------
# Deploy
# -----------------------------------------------------------------------------


def make_deploy(
    *,
    account: PublicKey,
    payment: ExecutableDeployItem,
    session: ExecutableDeployItem,
    timestamp: Timestamp = None,
    ttl: Union[int, str, None] = None,
    gas_price: Optional[int] = None,
    chain_name: Optional[str] = None,
    dependencies: Iterable[BytesLike] = (),
    config: Optional[DeployConfig] = None,
    signers: Iterable = (),
) -> Deploy:
    """
    Build the header, derive the hashes, and approve with each of `signers`
    (SigningKey objects) in order.
    """
    header = make_header(
        account,
        timestamp=timestamp,
        ttl=ttl,
        gas_price=gas_price,
        chain_name=chain_name,
        dependencies=dependencies,
        config=config,
    )
    deploy = Deploy(header, payment, session)
    for key in signers:
        deploy.sign(key)
    return deploy


__all__ = [
    "make_header",
    "standard_payment",
    "module_bytes",
    "transfer",
    "contract_by_hash",
    "contract_by_name",
    "versioned_contract_by_hash",
    "versioned_contract_by_name",
    "make_deploy",
]
