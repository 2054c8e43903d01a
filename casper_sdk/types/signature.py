"""
casper_sdk.types.signature
==========================

Algorithm-tagged signature envelope.

    wire  : tag:u8 (0x01 ED25519 | 0x02 SECP256K1) || raw signature
    hex   : "01" / "02" + lowercase hex of raw

The raw signature is always 64 bytes for both algorithms.
"""

from __future__ import annotations

from dataclasses import dataclass

from casper_sdk.errors import SignatureFormatError, ValidationError
from casper_sdk.types.keys import KeyAlgo
from casper_sdk.utils.bytes import BytesLike, from_hex, to_hex

SIGNATURE_LENGTH = 64


@dataclass(frozen=True)
class Signature:
    algorithm: KeyAlgo
    raw: bytes

    def __post_init__(self) -> None:
        try:
            algo = KeyAlgo(int(self.algorithm))
        except ValueError:
            raise SignatureFormatError("unknown signature algorithm", tag=int(self.algorithm)) from None
        object.__setattr__(self, "algorithm", algo)
        if not isinstance(self.raw, (bytes, bytearray)):
            raise SignatureFormatError("Signature.raw must be bytes")
        if len(self.raw) != SIGNATURE_LENGTH:
            raise SignatureFormatError(
                f"signature must be {SIGNATURE_LENGTH} bytes", got=len(self.raw)
            )
        object.__setattr__(self, "raw", bytes(self.raw))

    @staticmethod
    def from_raw_bytes(raw: BytesLike, algorithm: KeyAlgo) -> "Signature":
        return Signature(algorithm, bytes(raw))

    @staticmethod
    def from_bytes(data: BytesLike) -> "Signature":
        data = bytes(data)
        if not data:
            raise SignatureFormatError("empty signature")
        tag = data[0]
        if tag not in (KeyAlgo.ED25519, KeyAlgo.SECP256K1):
            raise SignatureFormatError("invalid signature algorithm tag", tag=tag)
        return Signature(KeyAlgo(tag), data[1:])

    @staticmethod
    def from_hex(text: str) -> "Signature":
        try:
            data = from_hex(text)
        except ValidationError as e:
            raise SignatureFormatError("signature is not valid hex").with_cause(e) from e
        return Signature.from_bytes(data)

    def to_bytes(self) -> bytes:
        return bytes((int(self.algorithm),)) + self.raw

    def to_hex(self) -> str:
        return f"{int(self.algorithm):02x}{to_hex(self.raw)}"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.to_hex()


__all__ = ["Signature", "SIGNATURE_LENGTH"]
