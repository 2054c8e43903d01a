"""
Keys and signer tests

Goals:
- PublicKey wire form, length checks, account hash.
- ED25519 matches the RFC 8032 vector; SECP256K1 yields compact low-S r||s.
- verify_signature rejects tampering and algorithm mismatches.
"""

from __future__ import annotations

import hashlib

import pytest

from casper_sdk.errors import KeyFormatError
from casper_sdk.types.keys import KeyAlgo, PublicKey
from casper_sdk.types.signature import Signature
from casper_sdk.wallet.signer import SECP256K1_N, KeyPair, SigningKey, verify_signature

# RFC 8032, section 7.1, TEST 1
RFC_SECRET = "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
RFC_PUBLIC = "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
RFC_SIG_EMPTY = (
    "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065224901555"
    "fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
)


# -----------------------------------------------------------------------------
# PublicKey
# -----------------------------------------------------------------------------


def test_public_key_wire_form():
    pk = PublicKey(KeyAlgo.ED25519, b"\x07" * 32)
    assert pk.to_bytes() == b"\x01" + b"\x07" * 32
    assert pk.to_hex() == "01" + "07" * 32
    assert PublicKey.from_hex(pk.to_hex()) == pk
    assert PublicKey.from_obj(pk.to_obj()) == pk


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"\x01" + b"\x00" * 31,
        b"\x02" + b"\x00" * 32,
        b"\x05" + b"\x00" * 32,
    ],
)
def test_public_key_rejects_bad_input(data):
    with pytest.raises(KeyFormatError):
        PublicKey.from_bytes(data)


def test_account_hash():
    pk = PublicKey(KeyAlgo.ED25519, bytes.fromhex(RFC_PUBLIC))
    expected = hashlib.blake2b(b"ed25519\x00" + pk.raw, digest_size=32).digest()
    assert pk.account_hash() == expected


# -----------------------------------------------------------------------------
# ED25519
# -----------------------------------------------------------------------------


def test_ed25519_rfc8032_vector():
    kp = KeyPair.from_private_bytes("ed25519", RFC_SECRET)
    assert kp.algorithm is KeyAlgo.ED25519
    assert kp.public_key.raw.hex() == RFC_PUBLIC
    assert kp.sign(b"").hex() == RFC_SIG_EMPTY
    assert kp.private_bytes().hex() == RFC_SECRET


def test_ed25519_sign_and_verify(ed25519_key):
    msg = b"\x42" * 32
    sig = ed25519_key.sign(msg)
    assert len(sig) == 64
    assert ed25519_key.verify(msg, sig)
    assert not ed25519_key.verify(b"\x43" * 32, sig)
    assert verify_signature(ed25519_key.public_key, msg, Signature(KeyAlgo.ED25519, sig))


# -----------------------------------------------------------------------------
# SECP256K1
# -----------------------------------------------------------------------------


def test_secp256k1_public_key_is_compressed(secp256k1_key):
    raw = secp256k1_key.public_key.raw
    assert len(raw) == 33
    assert raw[0] in (0x02, 0x03)


def test_secp256k1_signature_is_compact_low_s(secp256k1_key):
    msg = b"\x42" * 32
    for _ in range(8):
        sig = secp256k1_key.sign(msg)
        assert len(sig) == 64
        assert int.from_bytes(sig[32:], "big") <= SECP256K1_N // 2
        assert secp256k1_key.verify(msg, sig)
    assert not secp256k1_key.verify(b"\x00" * 32, sig)


def test_secp256k1_deterministic_import():
    a = KeyPair.from_private_bytes(KeyAlgo.SECP256K1, b"\x01" * 32)
    b = KeyPair.from_private_bytes("secp256k1", (b"\x01" * 32).hex())
    assert a.public_key == b.public_key
    assert a.private_bytes() == b"\x01" * 32


@pytest.mark.parametrize("secret", [b"\x00" * 32, SECP256K1_N.to_bytes(32, "big"), b"\x01" * 31])
def test_secp256k1_rejects_bad_scalars(secret):
    with pytest.raises(KeyFormatError):
        KeyPair.from_private_bytes(KeyAlgo.SECP256K1, secret)


# -----------------------------------------------------------------------------
# Cross-cutting
# -----------------------------------------------------------------------------


def test_algorithm_mismatch_fails_verification(ed25519_key):
    msg = b"m" * 32
    sig = ed25519_key.sign(msg)
    assert not verify_signature(ed25519_key.public_key, msg, Signature(KeyAlgo.SECP256K1, sig))
    assert not verify_signature(ed25519_key.public_key, msg, sig[:63])


def test_invalid_curve_point_is_not_verified():
    bogus = PublicKey(KeyAlgo.SECP256K1, b"\x02" + b"\xff" * 32)
    assert verify_signature(bogus, b"m", b"\x01" * 64) is False


@pytest.mark.parametrize("algo", ["ed25519", "secp256k1"])
def test_pem_round_trip(algo):
    kp = KeyPair.generate(algo)
    again = KeyPair.from_pem(kp.to_pem())
    assert again.public_key == kp.public_key
    assert again.algorithm == kp.algorithm


def test_key_pair_satisfies_signing_key_protocol(ed25519_key):
    assert isinstance(ed25519_key, SigningKey)


def test_unknown_algorithm_name():
    with pytest.raises(KeyFormatError):
        KeyPair.generate("rsa")


def test_sign_envelope_tags_with_key_algorithm(secp256k1_key):
    msg = b"\x01" * 32
    env = secp256k1_key.sign_envelope(msg)
    assert env.algorithm is KeyAlgo.SECP256K1
    assert env.to_hex().startswith("02")
    assert verify_signature(secp256k1_key.public_key, msg, env)
