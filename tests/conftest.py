"""
Shared fixtures: deterministic key pairs, a fixed header, and the usual
payment/session items.
"""

from __future__ import annotations

import pytest

from casper_sdk import logging as clog
from casper_sdk.tx import build
from casper_sdk.types import CLValue, DeployHeader, KeyAlgo
from casper_sdk.wallet import KeyPair

# 2021-05-04T13:09:29.105Z
FIXED_TIMESTAMP_MS = 1620133769105
THIRTY_MINUTES_MS = 30 * 60 * 1000


def _seed(fill: int) -> bytes:
    return bytes([fill]) * 32


@pytest.fixture
def ed25519_key() -> KeyPair:
    return KeyPair.from_private_bytes(KeyAlgo.ED25519, _seed(0x11))


@pytest.fixture
def secp256k1_key() -> KeyPair:
    return KeyPair.from_private_bytes(KeyAlgo.SECP256K1, _seed(0x22))


@pytest.fixture
def header(ed25519_key: KeyPair) -> DeployHeader:
    return DeployHeader(
        account=ed25519_key.public_key,
        timestamp=FIXED_TIMESTAMP_MS,
        ttl=THIRTY_MINUTES_MS,
        gas_price=1,
        dependencies=(),
        chain_name="casper-test",
    )


@pytest.fixture
def payment():
    return build.standard_payment(100_000_000)


@pytest.fixture
def session(secp256k1_key: KeyPair):
    return build.transfer(2_500_000_000, target=secp256k1_key.public_key, transfer_id=42)


@pytest.fixture
def contract_session():
    return build.contract_by_name(
        "counter",
        "increment",
        {"step": CLValue.from_u32(1), "note": CLValue.from_string("hi")},
    )


@pytest.fixture(autouse=True)
def _clean_log_context():
    clog.clear_context()
    yield
    clog.clear_context()
