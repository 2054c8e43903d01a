"""
Utility helpers for the deploy SDK.

Re-exports:
- bytes: hex helpers, little-endian integer primitives, ByteReader
- hash: BLAKE2b-256 digest provider
- timefmt: ttl / timestamp conversions
"""

from .bytes import ByteReader, ensure_bytes, from_hex, to_hex
from .hash import blake2b_256
from .timefmt import format_timestamp, format_ttl, parse_timestamp, parse_ttl

__all__ = [
    # bytes
    "ByteReader",
    "ensure_bytes",
    "from_hex",
    "to_hex",
    # hash
    "blake2b_256",
    # timefmt
    "parse_ttl",
    "format_ttl",
    "parse_timestamp",
    "format_timestamp",
]
