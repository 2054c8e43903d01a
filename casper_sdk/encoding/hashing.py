"""
casper_sdk.encoding.hashing
===========================

The deploy's two-stage commitment:

    body_hash   = blake2b_256(encode_item(payment) || encode_item(session))
    deploy hash = blake2b_256(encode_header(header))   # header embeds body_hash

The deploy hash is what every approval signs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from casper_sdk.encoding.canonical import encode_header, encode_item
from casper_sdk.types.executable import ExecutableDeployItem
from casper_sdk.utils.hash import Blake2b256, blake2b_256

if TYPE_CHECKING:  # pragma: no cover
    from casper_sdk.types.deploy import DeployHeader


def body_hash(payment: ExecutableDeployItem, session: ExecutableDeployItem) -> bytes:
    return Blake2b256().update(encode_item(payment)).update(encode_item(session)).digest()


def header_hash(header: "DeployHeader") -> bytes:
    return blake2b_256(encode_header(header))


__all__ = ["blake2b_256", "body_hash", "header_hash"]
