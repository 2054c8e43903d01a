"""
casper_sdk.wallet
=================

Key pairs (ED25519 / SECP256K1) and the SigningKey protocol used to approve
deploys.
"""

from .signer import KeyPair, SigningKey, verify_signature

__all__ = ["KeyPair", "SigningKey", "verify_signature"]
