"""
casper_sdk.tx
=============

Deploy helpers.

Submodules
----------
- build : builders for headers, payment/session items and whole deploys.

Typical usage
-------------
    from casper_sdk.tx import build

    deploy = build.make_deploy(
        account=kp.public_key,
        payment=build.standard_payment(100_000_000),
        session=build.contract_by_name("counter", "increment"),
        signers=[kp],
    )
"""

from __future__ import annotations

from . import build as build

__all__ = ["build"]
