"""
casper_sdk.encoding
===================

- canonical : fixed-order byte layout for headers, execution items, approvals
              and whole deploys (plus strict decoders)
- hashing   : body hash and deploy hash derivation
"""

from . import canonical as canonical
from . import hashing as hashing
from .canonical import decode_deploy, encode_deploy, encode_header, encode_item
from .hashing import blake2b_256, body_hash, header_hash

__all__ = [
    "canonical",
    "hashing",
    "encode_header",
    "encode_item",
    "encode_deploy",
    "decode_deploy",
    "blake2b_256",
    "body_hash",
    "header_hash",
]
