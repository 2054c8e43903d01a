"""
casper_sdk.types.keys
=====================

Public keys as they appear on the wire: a one-byte algorithm tag followed by
the raw key bytes. The tag space is shared with the signature envelope
(`casper_sdk.types.signature`).

    ED25519    tag 0x01, 32-byte key
    SECP256K1  tag 0x02, 33-byte compressed SEC1 point
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from casper_sdk.errors import KeyFormatError
from casper_sdk.utils.bytes import ByteReader, BytesLike, from_hex, to_hex
from casper_sdk.utils.hash import blake2b_256


class KeyAlgo(IntEnum):
    ED25519 = 1
    SECP256K1 = 2

    @classmethod
    def from_tag(cls, tag: int) -> "KeyAlgo":
        try:
            return cls(tag)
        except ValueError:
            raise KeyFormatError("unknown key algorithm tag", tag=tag) from None


KEY_LENGTHS = {
    KeyAlgo.ED25519: 32,
    KeyAlgo.SECP256K1: 33,
}


@dataclass(frozen=True)
class PublicKey:
    algorithm: KeyAlgo
    raw: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.algorithm, KeyAlgo):
            object.__setattr__(self, "algorithm", KeyAlgo.from_tag(int(self.algorithm)))
        if not isinstance(self.raw, (bytes, bytearray)):
            raise KeyFormatError("PublicKey.raw must be bytes")
        object.__setattr__(self, "raw", bytes(self.raw))
        expected = KEY_LENGTHS[self.algorithm]
        if len(self.raw) != expected:
            raise KeyFormatError(
                f"{self.algorithm.name} public key must be {expected} bytes",
                got=len(self.raw),
            )

    # -- wire form --

    def to_bytes(self) -> bytes:
        return bytes((int(self.algorithm),)) + self.raw

    def to_hex(self) -> str:
        return to_hex(self.to_bytes())

    @staticmethod
    def from_bytes(data: BytesLike) -> "PublicKey":
        data = bytes(data)
        if not data:
            raise KeyFormatError("empty public key")
        return PublicKey(KeyAlgo.from_tag(data[0]), data[1:])

    @staticmethod
    def read(reader: ByteReader) -> "PublicKey":
        """Read tag + raw key from a cursor; the tag fixes the key length."""
        algo = KeyAlgo.from_tag(reader.read_u8())
        return PublicKey(algo, reader.read(KEY_LENGTHS[algo]))

    @staticmethod
    def from_hex(text: str) -> "PublicKey":
        return PublicKey.from_bytes(from_hex(text))

    @staticmethod
    def from_raw(raw: BytesLike, algorithm: KeyAlgo) -> "PublicKey":
        return PublicKey(KeyAlgo(algorithm), bytes(raw))

    # -- derived values --

    def account_hash(self) -> bytes:
        """blake2b-256(lowercase algorithm name || 0x00 || raw key)."""
        return blake2b_256(self.algorithm.name.lower().encode("ascii") + b"\x00" + self.raw)

    def to_obj(self) -> str:
        return self.to_hex()

    @staticmethod
    def from_obj(o: Any) -> "PublicKey":
        if not isinstance(o, str):
            raise KeyFormatError("public key must be a hex string")
        return PublicKey.from_hex(o)

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.to_hex()


__all__ = ["KeyAlgo", "KEY_LENGTHS", "PublicKey"]
