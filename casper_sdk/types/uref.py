"""
casper_sdk.types.uref
=====================

Unforgeable references: a 32-byte address plus an access-rights byte.

Textual form:  uref-<64 lowercase hex chars>-<3 decimal digits>
Wire form:     32 address bytes || 1 access-rights byte   (33 bytes)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag

from casper_sdk.errors import DeserializationError, ValidationError
from casper_sdk.utils.bytes import BytesLike

UREF_PREFIX = "uref-"
UREF_ADDR_LENGTH = 32
UREF_SERIALIZED_LENGTH = UREF_ADDR_LENGTH + 1


class AccessRights(IntFlag):
    NONE = 0
    READ = 1
    WRITE = 2
    ADD = 4
    READ_WRITE = READ | WRITE
    READ_ADD = READ | ADD
    ADD_WRITE = ADD | WRITE
    READ_ADD_WRITE = READ | ADD | WRITE


_MAX_RIGHTS = int(AccessRights.READ_ADD_WRITE)


@dataclass(frozen=True)
class URef:
    address: bytes
    access_rights: AccessRights = AccessRights.READ_ADD_WRITE

    def __post_init__(self) -> None:
        if not isinstance(self.address, (bytes, bytearray)) or len(self.address) != UREF_ADDR_LENGTH:
            raise ValidationError("URef address must be 32 bytes")
        object.__setattr__(self, "address", bytes(self.address))
        rights = int(self.access_rights)
        if not 0 <= rights <= _MAX_RIGHTS:
            raise ValidationError("URef access rights out of range", access_rights=rights)
        object.__setattr__(self, "access_rights", AccessRights(rights))

    @staticmethod
    def parse(text: str) -> "URef":
        """
        Parse `uref-<hex>-<ddd>`. Every malformation raises ValidationError
        before any bytes are produced.
        """
        if not isinstance(text, str) or not text.startswith(UREF_PREFIX):
            raise ValidationError("a URef must start with 'uref-'")
        parts = text[len(UREF_PREFIX):].split("-")
        if len(parts) != 2:
            raise ValidationError("a URef must end with an access rights suffix")
        addr_hex, rights = parts
        if len(addr_hex) != 2 * UREF_ADDR_LENGTH:
            raise ValidationError("a URef must contain a 32 byte value", hex_length=len(addr_hex))
        if len(rights) != 3 or not rights.isdigit() or not rights.isascii():
            raise ValidationError("a URef must contain a 3 digit access rights suffix")
        try:
            address = bytes.fromhex(addr_hex)
        except ValueError as e:
            raise ValidationError("URef address is not valid hex") from e
        return URef(address, AccessRights(_check_rights(int(rights, 10))))

    def to_bytes(self) -> bytes:
        return self.address + bytes((int(self.access_rights),))

    @staticmethod
    def from_bytes(data: BytesLike) -> "URef":
        data = bytes(data)
        if len(data) != UREF_SERIALIZED_LENGTH:
            raise DeserializationError("URef must be 33 bytes", got=len(data))
        rights = data[UREF_ADDR_LENGTH]
        if rights > _MAX_RIGHTS:
            raise DeserializationError("URef access rights out of range", access_rights=rights)
        return URef(data[:UREF_ADDR_LENGTH], AccessRights(rights))

    def __str__(self) -> str:
        return f"{UREF_PREFIX}{self.address.hex()}-{int(self.access_rights):03d}"


def _check_rights(value: int) -> int:
    if value > _MAX_RIGHTS:
        raise ValidationError("URef access rights out of range", access_rights=value)
    return value


__all__ = ["AccessRights", "URef", "UREF_PREFIX", "UREF_SERIALIZED_LENGTH"]
