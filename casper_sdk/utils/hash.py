"""
casper_sdk.utils.hash
=====================

Digest provider for the deploy hash chain.

- blake2b_256(data)  → 32-byte BLAKE2b digest (the network's hash function)

`hashlib.blake2b` is always available on CPython 3.6+, so no optional
backends are needed here.
"""

from __future__ import annotations

import hashlib

from .bytes import BytesLike, ensure_bytes

DIGEST_LENGTH = 32


def blake2b_256(data: BytesLike) -> bytes:
    """BLAKE2b digest with a 32-byte output."""
    return hashlib.blake2b(ensure_bytes(data), digest_size=DIGEST_LENGTH).digest()


class Blake2b256:
    """Streaming BLAKE2b-256 hasher with update()/digest()/hexdigest()."""

    __slots__ = ("_h",)

    def __init__(self) -> None:
        self._h = hashlib.blake2b(digest_size=DIGEST_LENGTH)

    def update(self, data: BytesLike) -> "Blake2b256":
        self._h.update(ensure_bytes(data))
        return self

    def digest(self) -> bytes:
        return self._h.digest()

    def hexdigest(self) -> str:
        return self._h.hexdigest()


__all__ = ["DIGEST_LENGTH", "blake2b_256", "Blake2b256"]
