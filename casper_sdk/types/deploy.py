from __future__ import annotations

"""
casper_sdk.types.deploy
=======================

Deploy aggregate: an immutable core (header, hash, payment, session) plus an
append-only, lock-guarded list of approvals.

Construction derives the two-stage commitment:

    body_hash = blake2b_256(encode(payment) || encode(session))
    header'   = header with body_hash embedded
    hash      = blake2b_256(encode(header'))

`hash` is the signing target. After construction only `sign` and
`add_approval` mutate the deploy, and neither touches header or hash.

`validate()` re-derives both hashes and reports a mismatch as a
`ValidationResult` rather than raising. Deploys of untrusted provenance
(decoded bytes, approvals received from another signer) are rebuilt with
`Deploy.from_parts` / `Deploy.from_bytes`, which keep the stored hashes as-is
so that `validate()` can judge them.
"""

import dataclasses
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from casper_sdk.encoding import canonical, hashing
from casper_sdk.errors import ValidationError
from casper_sdk.logging import get_logger
from casper_sdk.types.executable import HASH_LENGTH, ExecutableDeployItem
from casper_sdk.types.keys import PublicKey
from casper_sdk.types.signature import Signature
from casper_sdk.utils.bytes import U64_MAX, BytesLike, to_hex
from casper_sdk.utils.timefmt import format_timestamp, format_ttl

log = get_logger(__name__)


def _u64(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= U64_MAX:
        raise ValidationError(f"{name} must be a u64", value=str(value))
    return value


def _hash32(name: str, value: Any) -> bytes:
    if not isinstance(value, (bytes, bytearray)) or len(value) != HASH_LENGTH:
        raise ValidationError(f"{name} must be {HASH_LENGTH} bytes")
    return bytes(value)


@dataclass(frozen=True)
class DeployHeader:
    """
    Header fields. `timestamp` is milliseconds since the Unix epoch, `ttl` is
    milliseconds. `body_hash` is filled in by Deploy; callers leave it None.
    """

    account: PublicKey
    timestamp: int
    ttl: int
    gas_price: int
    dependencies: Tuple[bytes, ...] = field(default_factory=tuple)
    chain_name: str = ""
    body_hash: Optional[bytes] = None

    def __post_init__(self) -> None:
        if not isinstance(self.account, PublicKey):
            raise ValidationError("header account must be a PublicKey")
        _u64("timestamp", self.timestamp)
        _u64("ttl", self.ttl)
        _u64("gas_price", self.gas_price)
        object.__setattr__(
            self, "dependencies", tuple(_hash32("dependency", d) for d in self.dependencies)
        )
        if not isinstance(self.chain_name, str) or not self.chain_name:
            raise ValidationError("chain_name must be a non-empty string")
        if self.body_hash is not None:
            object.__setattr__(self, "body_hash", _hash32("body_hash", self.body_hash))

    def with_body_hash(self, body_hash: bytes) -> "DeployHeader":
        return dataclasses.replace(self, body_hash=body_hash)

    def to_bytes(self) -> bytes:
        return canonical.encode_header(self)

    def to_obj(self) -> Dict[str, Any]:
        return {
            "account": self.account.to_hex(),
            "timestamp": format_timestamp(self.timestamp),
            "ttl": format_ttl(self.ttl),
            "gas_price": self.gas_price,
            "body_hash": None if self.body_hash is None else to_hex(self.body_hash),
            "dependencies": [to_hex(d) for d in self.dependencies],
            "chain_name": self.chain_name,
        }


@dataclass(frozen=True)
class Approval:
    signer: PublicKey
    signature: Signature

    def __post_init__(self) -> None:
        if not isinstance(self.signer, PublicKey):
            raise ValidationError("approval signer must be a PublicKey")
        if not isinstance(self.signature, Signature):
            raise ValidationError("approval signature must be a Signature")

    def to_obj(self) -> Dict[str, str]:
        return {"signer": self.signer.to_hex(), "signature": self.signature.to_hex()}


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    message: str = ""

    def __bool__(self) -> bool:
        return self.ok


class Deploy:
    __slots__ = ("_header", "_hash", "_payment", "_session", "_approvals", "_lock")

    def __init__(
        self,
        header: DeployHeader,
        payment: ExecutableDeployItem,
        session: ExecutableDeployItem,
    ) -> None:
        _check_parts(header, payment, session)
        header = header.with_body_hash(hashing.body_hash(payment, session))
        deploy_hash = hashing.header_hash(header)
        self._set(header, deploy_hash, payment, session, ())
        log.debug(
            "deploy constructed",
            extra={
                "deploy_hash": to_hex(deploy_hash),
                "payment": payment.discriminant,
                "session": session.discriminant,
            },
        )

    @classmethod
    def from_parts(
        cls,
        header: DeployHeader,
        hash: BytesLike,
        payment: ExecutableDeployItem,
        session: ExecutableDeployItem,
        approvals: Iterable["Approval"] = (),
    ) -> "Deploy":
        """Reassemble a deploy without re-deriving its hashes."""
        _check_parts(header, payment, session)
        if header.body_hash is None:
            raise ValidationError("a reassembled header must carry its body hash")
        approvals = tuple(approvals)
        for a in approvals:
            if not isinstance(a, Approval):
                raise ValidationError("approvals must be Approval instances")
        self = cls.__new__(cls)
        self._set(header, _hash32("hash", hash), payment, session, approvals)
        return self

    def _set(self, header, deploy_hash, payment, session, approvals) -> None:
        self._header = header
        self._hash = deploy_hash
        self._payment = payment
        self._session = session
        self._approvals: List[Approval] = list(approvals)
        self._lock = threading.Lock()

    # ---- fixed fields ----

    @property
    def header(self) -> DeployHeader:
        return self._header

    @property
    def hash(self) -> bytes:
        return self._hash

    @property
    def hash_hex(self) -> str:
        return to_hex(self._hash)

    @property
    def payment(self) -> Tuple[str, ExecutableDeployItem]:
        return (self._payment.discriminant, self._payment)

    @property
    def session(self) -> Tuple[str, ExecutableDeployItem]:
        return (self._session.discriminant, self._session)

    @property
    def payment_item(self) -> ExecutableDeployItem:
        return self._payment

    @property
    def session_item(self) -> ExecutableDeployItem:
        return self._session

    @property
    def approvals(self) -> Tuple[Approval, ...]:
        """Snapshot of the approvals in append order."""
        with self._lock:
            return tuple(self._approvals)

    # ---- mutation ----

    def sign(self, key) -> Approval:
        """
        Approve with `key` (any SigningKey): sign the deploy hash, tag the
        signature with the key's algorithm, append the approval.
        """
        signer = key.public_key
        signature = Signature(signer.algorithm, key.sign(self._hash))
        approval = Approval(signer, signature)
        self.add_approval(approval)
        return approval

    def add_approval(self, approval: Approval) -> None:
        if not isinstance(approval, Approval):
            raise ValidationError("add_approval expects an Approval")
        with self._lock:
            self._approvals.append(approval)
            count = len(self._approvals)
        log.info(
            "approval added",
            extra={
                "deploy_hash": self.hash_hex,
                "signer": approval.signer.to_hex(),
                "approvals": count,
            },
        )

    # ---- integrity ----

    def validate(self) -> ValidationResult:
        computed_body = hashing.body_hash(self._payment, self._session)
        if computed_body != self._header.body_hash:
            return self._fail(
                f"invalid body hash: expected {to_hex(self._header.body_hash)}, "
                f"computed {to_hex(computed_body)}"
            )
        computed_hash = hashing.header_hash(self._header)
        if computed_hash != self._hash:
            return self._fail(
                f"invalid deploy hash: expected {to_hex(self._hash)}, "
                f"computed {to_hex(computed_hash)}"
            )
        return ValidationResult(True)

    def verify_approvals(self) -> ValidationResult:
        """Check every approval's signature against the deploy hash."""
        from casper_sdk.wallet.signer import verify_signature

        for i, a in enumerate(self.approvals):
            if not verify_signature(a.signer, self._hash, a.signature):
                return self._fail(f"approval {i} from {a.signer.to_hex()} has an invalid signature")
        return ValidationResult(True)

    def _fail(self, message: str) -> ValidationResult:
        log.warning(message, extra={"deploy_hash": self.hash_hex})
        return ValidationResult(False, message)

    # ---- encoding ----

    def to_bytes(self) -> bytes:
        return canonical.encode_deploy(self)

    @staticmethod
    def from_bytes(data: BytesLike) -> "Deploy":
        return canonical.decode_deploy(data)

    def size_in_bytes(self) -> int:
        return len(self.to_bytes())

    def to_obj(self) -> Dict[str, Any]:
        return {
            "hash": self.hash_hex,
            "header": self._header.to_obj(),
            "payment": self._payment.to_obj(),
            "session": self._session.to_obj(),
            "approvals": [a.to_obj() for a in self.approvals],
        }

    def __repr__(self) -> str:
        return f"Deploy(hash={self.hash_hex}, approvals={len(self.approvals)})"


def _check_parts(header: Any, payment: Any, session: Any) -> None:
    if not isinstance(header, DeployHeader):
        raise ValidationError("header must be a DeployHeader")
    for name, item in (("payment", payment), ("session", session)):
        if not isinstance(item, ExecutableDeployItem):
            raise ValidationError(f"{name} must be an execution item", got=type(item).__name__)


__all__ = ["DeployHeader", "Approval", "ValidationResult", "Deploy"]
