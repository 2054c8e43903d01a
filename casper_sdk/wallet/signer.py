"""
casper_sdk.wallet.signer
========================

ED25519 and SECP256K1 key pairs for approving deploys.

This module is a thin, well-typed facade over the `cryptography` package. The
algorithm is a property of the key, never a caller choice at signing time.

Signature shapes
----------------
- ED25519   : 64-byte signature over the message itself.
- SECP256K1 : ECDSA over SHA-256(message), returned as compact 64-byte r||s
              with s normalised to the lower half of the curve order.

Public keys are reported as `casper_sdk.types.keys.PublicKey` (32-byte ED25519
key, or 33-byte compressed SEC1 point).

Examples
--------
    kp = KeyPair.generate("ed25519")
    sig = kp.sign(deploy.hash)
    assert verify_signature(kp.public_key, deploy.hash, sig)
"""

from __future__ import annotations

from typing import Optional, Protocol, Union, runtime_checkable

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from casper_sdk.errors import KeyFormatError, SignatureFormatError
from casper_sdk.types.keys import KeyAlgo, PublicKey
from casper_sdk.types.signature import SIGNATURE_LENGTH, Signature
from casper_sdk.utils.bytes import BytesLike, ensure_bytes

# Order of the secp256k1 group.
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_HALF_N = SECP256K1_N // 2

PRIVATE_KEY_LENGTH = 32

__all__ = [
    "SigningKey",
    "KeyPair",
    "verify_signature",
    "SECP256K1_N",
]


@runtime_checkable
class SigningKey(Protocol):
    """Anything that can approve a deploy: exposes its public key and signs bytes."""

    @property
    def public_key(self) -> PublicKey: ...

    def sign(self, message: bytes) -> bytes: ...


# --- Helpers -----------------------------------------------------------------


def _normalize_algo(algo: Union[str, int, KeyAlgo]) -> KeyAlgo:
    if isinstance(algo, KeyAlgo):
        return algo
    if isinstance(algo, str):
        n = algo.strip().lower().replace("-", "").replace("_", "")
        aliases = {"ed25519": KeyAlgo.ED25519, "secp256k1": KeyAlgo.SECP256K1}
        if n not in aliases:
            raise KeyFormatError(f"unsupported key algorithm: {algo!r}")
        return aliases[n]
    return KeyAlgo.from_tag(int(algo))


def _compact_low_s(der: bytes) -> bytes:
    r, s = decode_dss_signature(der)
    if s > _HALF_N:
        s = SECP256K1_N - s
    return r.to_bytes(32, "big") + s.to_bytes(32, "big")


def _load_public(public_key: PublicKey):
    if public_key.algorithm is KeyAlgo.ED25519:
        return ed25519.Ed25519PublicKey.from_public_bytes(public_key.raw)
    return ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), public_key.raw)


# --- Key pair ----------------------------------------------------------------


class KeyPair:
    """
    A private key bound to its algorithm.

    Create instances via:
        - KeyPair.generate(algo)
        - KeyPair.from_private_bytes(algo, secret)
        - KeyPair.from_pem(data)
    """

    def __init__(self, *, algorithm: KeyAlgo, private_key) -> None:
        self._algorithm = _normalize_algo(algorithm)
        if self._algorithm is KeyAlgo.ED25519:
            if not isinstance(private_key, ed25519.Ed25519PrivateKey):
                raise KeyFormatError("ED25519 key pair needs an Ed25519 private key")
            raw = private_key.public_key().public_bytes(
                serialization.Encoding.Raw, serialization.PublicFormat.Raw
            )
        else:
            if not isinstance(private_key, ec.EllipticCurvePrivateKey) or not isinstance(
                private_key.curve, ec.SECP256K1
            ):
                raise KeyFormatError("SECP256K1 key pair needs a secp256k1 private key")
            raw = private_key.public_key().public_bytes(
                serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint
            )
        self._sk = private_key
        self._pk = PublicKey(self._algorithm, raw)

    # ---- Constructors ----

    @classmethod
    def generate(cls, algorithm: Union[str, KeyAlgo] = KeyAlgo.ED25519) -> "KeyPair":
        algo = _normalize_algo(algorithm)
        if algo is KeyAlgo.ED25519:
            return cls(algorithm=algo, private_key=ed25519.Ed25519PrivateKey.generate())
        return cls(algorithm=algo, private_key=ec.generate_private_key(ec.SECP256K1()))

    @classmethod
    def from_private_bytes(
        cls, algorithm: Union[str, KeyAlgo], secret: Union[BytesLike, str]
    ) -> "KeyPair":
        """
        Import a 32-byte secret: the ED25519 seed, or the SECP256K1 scalar
        (big-endian, in [1, n-1]).
        """
        algo = _normalize_algo(algorithm)
        sk = ensure_bytes(secret)
        if len(sk) != PRIVATE_KEY_LENGTH:
            raise KeyFormatError("private key must be 32 bytes", got=len(sk))
        if algo is KeyAlgo.ED25519:
            return cls(algorithm=algo, private_key=ed25519.Ed25519PrivateKey.from_private_bytes(sk))
        d = int.from_bytes(sk, "big")
        if not 1 <= d < SECP256K1_N:
            raise KeyFormatError("secp256k1 scalar out of range")
        return cls(algorithm=algo, private_key=ec.derive_private_key(d, ec.SECP256K1()))

    @classmethod
    def from_pem(cls, data: Union[bytes, str], password: Optional[bytes] = None) -> "KeyPair":
        """Load a PEM private key (PKCS#8, or SEC1 for secp256k1)."""
        if isinstance(data, str):
            data = data.encode("ascii")
        try:
            sk = serialization.load_pem_private_key(data, password=password)
        except (ValueError, TypeError) as e:
            raise KeyFormatError(f"cannot load PEM private key: {e}") from e
        if isinstance(sk, ed25519.Ed25519PrivateKey):
            return cls(algorithm=KeyAlgo.ED25519, private_key=sk)
        if isinstance(sk, ec.EllipticCurvePrivateKey):
            return cls(algorithm=KeyAlgo.SECP256K1, private_key=sk)
        raise KeyFormatError("PEM key is neither ED25519 nor SECP256K1")

    # ---- Properties ----

    @property
    def algorithm(self) -> KeyAlgo:
        return self._algorithm

    @property
    def public_key(self) -> PublicKey:
        return self._pk

    def private_bytes(self) -> bytes:
        """The 32-byte secret: ED25519 seed or big-endian SECP256K1 scalar."""
        if self._algorithm is KeyAlgo.ED25519:
            return self._sk.private_bytes(
                serialization.Encoding.Raw,
                serialization.PrivateFormat.Raw,
                serialization.NoEncryption(),
            )
        return self._sk.private_numbers().private_value.to_bytes(PRIVATE_KEY_LENGTH, "big")

    def to_pem(self) -> bytes:
        return self._sk.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )

    # ---- Operations ----

    def sign(self, message: bytes) -> bytes:
        """Raw 64-byte signature over `message` (the deploy hash, for approvals)."""
        message = bytes(message)
        if self._algorithm is KeyAlgo.ED25519:
            return self._sk.sign(message)
        return _compact_low_s(self._sk.sign(message, ec.ECDSA(hashes.SHA256())))

    def sign_envelope(self, message: bytes) -> Signature:
        return Signature(self._algorithm, self.sign(message))

    def verify(self, message: bytes, signature: Union[bytes, Signature]) -> bool:
        return verify_signature(self._pk, message, signature)

    def __repr__(self) -> str:
        return f"KeyPair({self._algorithm.name}, public_key={self._pk.to_hex()})"


# --- Verification ------------------------------------------------------------


def verify_signature(
    public_key: PublicKey, message: bytes, signature: Union[bytes, Signature]
) -> bool:
    """
    Check `signature` over `message` for `public_key`.

    Returns False for a wrong signature, an algorithm mismatch between key and
    envelope, or a key that is not a valid curve point. Raises
    SignatureFormatError only when `signature` is neither bytes nor a Signature.
    """
    if isinstance(signature, Signature):
        if signature.algorithm is not public_key.algorithm:
            return False
        raw = signature.raw
    elif isinstance(signature, (bytes, bytearray)):
        raw = bytes(signature)
    else:
        raise SignatureFormatError("signature must be bytes or Signature")
    if len(raw) != SIGNATURE_LENGTH:
        return False

    try:
        pub = _load_public(public_key)
    except ValueError:
        return False

    message = bytes(message)
    try:
        if public_key.algorithm is KeyAlgo.ED25519:
            pub.verify(raw, message)
        else:
            r = int.from_bytes(raw[:32], "big")
            s = int.from_bytes(raw[32:], "big")
            pub.verify(encode_dss_signature(r, s), message, ec.ECDSA(hashes.SHA256()))
    except InvalidSignature:
        return False
    return True
