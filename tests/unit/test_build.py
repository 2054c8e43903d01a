"""
Builder tests

Goals:
- Header defaults come from DeployConfig; explicit values win.
- Payment/session helpers produce the documented argument shapes.
- make_deploy signs with every signer in order.
"""

from __future__ import annotations

import pytest

from casper_sdk.config import DeployConfig
from casper_sdk.errors import ValidationError
from casper_sdk.tx import build
from casper_sdk.types import (
    CLType,
    CLValue,
    ModuleBytes,
    PublicKey,
    StoredContractByHash,
    StoredVersionedContractByHash,
    StoredVersionedContractByName,
    Transfer,
    URef,
)
from casper_sdk.types import cl_type as T


def test_make_header_uses_config(ed25519_key):
    cfg = DeployConfig(chain_name="casper-net-1", ttl_ms=3_600_000, gas_price=2)
    h = build.make_header(ed25519_key.public_key, timestamp=5, config=cfg)
    assert (h.chain_name, h.ttl, h.gas_price, h.timestamp) == ("casper-net-1", 3_600_000, 2, 5)
    assert h.body_hash is None


def test_make_header_explicit_values_win(ed25519_key):
    h = build.make_header(
        ed25519_key.public_key,
        timestamp="2021-05-04T13:09:29.105Z",
        ttl="1h 30m",
        gas_price=3,
        chain_name="mainnet",
        dependencies=["00" * 32],
    )
    assert h.timestamp == 1620133769105
    assert h.ttl == 5_400_000
    assert h.gas_price == 3
    assert h.chain_name == "mainnet"
    assert h.dependencies == (b"\x00" * 32,)


def test_make_header_defaults_timestamp_to_now(ed25519_key, monkeypatch):
    monkeypatch.setattr(build, "now_ms", lambda: 123_456)
    assert build.make_header(ed25519_key.public_key).timestamp == 123_456


@pytest.mark.parametrize("timestamp", [1620133769105.7, True, b"\x00"])
def test_make_header_rejects_non_int_timestamps(ed25519_key, timestamp):
    with pytest.raises(ValidationError):
        build.make_header(ed25519_key.public_key, timestamp=timestamp)


def test_make_header_rejects_float_gas_price(ed25519_key):
    with pytest.raises(ValidationError):
        build.make_header(ed25519_key.public_key, timestamp=0, gas_price=1.5)


def test_standard_payment():
    p = build.standard_payment(100_000_000)
    assert isinstance(p, ModuleBytes)
    assert p.module_bytes == b""
    amount = p.arg("amount")
    assert amount.cl_type == T.U512
    assert amount.value() == 100_000_000


def test_transfer_to_public_key(secp256k1_key):
    t = build.transfer(2_500_000_000, target=secp256k1_key.public_key, transfer_id=7)
    assert isinstance(t, Transfer)
    assert [a.name for a in t.args] == ["amount", "target", "id"]
    assert t.arg("target").cl_type == T.PUBLIC_KEY
    assert t.arg("id").cl_type == CLType.option(T.U64)
    assert t.arg("id").value() == 7


def test_transfer_targets():
    no_id = build.transfer(1, target=b"\x01" * 32)
    assert no_id.arg("target").cl_type == CLType.byte_array(32)
    assert no_id.arg("id").raw == b"\x00"

    uref_text = "uref-" + "ab" * 32 + "-007"
    by_uref = build.transfer(1, target=uref_text)
    assert by_uref.arg("target").cl_type == T.UREF
    assert build.transfer(1, target=URef.parse(uref_text)).arg("target").raw == by_uref.arg("target").raw

    tagged = PublicKey.from_raw(b"\x05" * 32, 1).to_bytes()
    assert build.transfer(1, target=tagged).arg("target").cl_type == T.PUBLIC_KEY


@pytest.mark.parametrize("amount", [0, -1, True])
def test_transfer_rejects_bad_amounts(amount):
    with pytest.raises(ValidationError):
        build.transfer(amount, target=b"\x01" * 32)


def test_stored_contract_builders():
    h = "11" * 32
    by_hash = build.contract_by_hash(h, "mint", {"amount": CLValue.from_u64(3)})
    assert isinstance(by_hash, StoredContractByHash)
    assert by_hash.hash == b"\x11" * 32
    assert by_hash.arg("amount").value() == 3

    versioned = build.versioned_contract_by_hash(h, "mint", version=3)
    assert isinstance(versioned, StoredVersionedContractByHash) and versioned.version == 3
    latest = build.versioned_contract_by_name("erc20", "transfer")
    assert isinstance(latest, StoredVersionedContractByName) and latest.version is None

    with pytest.raises(ValidationError):
        build.contract_by_hash("11" * 31, "mint")
    with pytest.raises(ValidationError):
        build.contract_by_name("counter", "")


def test_module_bytes_builder():
    m = build.module_bytes("0061736d", [("n", build.standard_payment(1).arg("amount"))])
    assert m.module_bytes == b"\x00asm"
    assert m.args[0].name == "n"


def test_make_deploy_signs_in_order(ed25519_key, secp256k1_key, payment, contract_session):
    deploy = build.make_deploy(
        account=ed25519_key.public_key,
        payment=payment,
        session=contract_session,
        timestamp=1_620_133_769_105,
        chain_name="casper-test",
        signers=[ed25519_key, secp256k1_key],
    )
    assert [a.signer for a in deploy.approvals] == [ed25519_key.public_key, secp256k1_key.public_key]
    assert deploy.validate().ok
    assert deploy.verify_approvals().ok
