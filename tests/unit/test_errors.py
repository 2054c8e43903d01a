"""
Error model tests: stable codes, JSON-safe payloads, immutable enrichment.
"""

from __future__ import annotations

from casper_sdk.errors import (
    CasperSdkError,
    DeserializationError,
    ErrorCode,
    InternalError,
    ListTypeMismatch,
    ValidationError,
    wrap,
)


def test_codes_and_dict_shape():
    err = DeserializationError("unexpected end of input", needed=4, raw=b"\x01\x02")
    assert isinstance(err, CasperSdkError)
    d = err.to_dict()
    assert d["code"] == ErrorCode.DESERIALIZATION.value
    assert d["data"] == {"needed": 4, "raw": "0102"}
    assert d["retryable"] is False
    assert ErrorCode.DESERIALIZATION.value in str(err)


def test_with_context_returns_a_copy():
    err = ValidationError("bad", a=1)
    enriched = err.with_context(b=2)
    assert enriched is not err
    assert enriched.data == {"a": 1, "b": 2}
    assert err.data == {"a": 1}
    assert type(enriched) is ValidationError


def test_list_type_mismatch_is_a_validation_error():
    err = ListTypeMismatch(expected="U32", got="String", index=3)
    assert isinstance(err, ValidationError)
    assert err.code == ErrorCode.LIST_TYPE_MISMATCH
    assert err.data == {"expected": "U32", "got": "String", "index": 3}


def test_wrap_foreign_exception():
    cause = ValueError("boom")
    err = wrap(cause, where="decode")
    assert isinstance(err, InternalError)
    assert err.cause is cause
    assert err.data == {"where": "decode"}
    assert err.to_dict(include_cause=True)["cause"]["type"] == "ValueError"


def test_wrap_sdk_error_keeps_type():
    err = wrap(ValidationError("bad"), field="x")
    assert type(err) is ValidationError
    assert err.data == {"field": "x"}
