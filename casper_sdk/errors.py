"""
casper_sdk.errors
-----------------

A small, consistent error system for the deploy SDK.

Design goals
------------
- One root `CasperSdkError` with machine-friendly `code` and optional `data`.
- Concrete subclasses for the failure domains of the codec and signing layers
  (validation, deserialization, signature/key formats, config).
- Safe JSON representation (`to_dict`) suitable for logs and RPC bridges.
- Everything raised here is a *permanent* input error: nothing in this SDK
  retries.

Hash-integrity mismatches are NOT raised: `Deploy.validate()` reports them as
data (see `casper_sdk.types.deploy.ValidationResult`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

__all__ = [
    "ErrorCode",
    "CasperSdkError",
    "InternalError",
    "NotImplementedFeature",
    "ValidationError",
    "ListTypeMismatch",
    "DeserializationError",
    "SignatureFormatError",
    "KeyFormatError",
    "ConfigError",
    "wrap",
]


class ErrorCode(str, Enum):
    INTERNAL = "SDK/INTERNAL"
    NOT_IMPLEMENTED = "SDK/NOT_IMPLEMENTED"
    CONFIG = "SDK/CONFIG"

    # Codec
    VALIDATION = "SDK/VALIDATION"
    LIST_TYPE_MISMATCH = "SDK/LIST_TYPE_MISMATCH"
    DESERIALIZATION = "SDK/DESERIALIZATION"

    # Keys / signatures
    SIGNATURE_FORMAT = "SDK/SIGNATURE_FORMAT"
    KEY_FORMAT = "SDK/KEY_FORMAT"


@dataclass(eq=False)
class CasperSdkError(Exception):
    """
    Root error for the SDK.

    Attributes
    ----------
    code: str
        Machine-stable error code (see ErrorCode).
    message: str
        Human hint suitable for logs.
    data: dict
        Optional machine data (lengths, tags, offending values). JSON-safe.
    retryable: bool
        Always False for codec errors; kept for bridges that inspect it.
    cause: Optional[BaseException]
        Wrapped original exception; not included in equality comparison.
    """

    code: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    retryable: bool = False
    cause: Optional[BaseException] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        super().__init__(f"{getattr(self.code, 'value', self.code)}: {self.message}")

    def with_context(self, **ctx: Any) -> "CasperSdkError":
        """Return a *new* error with extra context merged (does not mutate)."""
        d = dict(self.data)
        for k, v in ctx.items():
            d[k] = _coerce_json(v)
        err = _clone(self)
        err.data = d
        return err

    def with_cause(self, exc: BaseException) -> "CasperSdkError":
        """Attach/replace the causal exception (returns a new instance)."""
        err = _clone(self)
        err.cause = exc
        return err

    def to_dict(self, include_cause: bool = False) -> Dict[str, Any]:
        """JSON-safe shape suitable for logs/RPC bridges."""
        out = {
            "code": str(getattr(self.code, "value", self.code)),
            "message": self.message,
            "data": _coerce_json(self.data),
            "retryable": self.retryable,
        }
        if include_cause and self.cause is not None:
            out["cause"] = {
                "type": type(self.cause).__name__,
                "message": str(self.cause),
            }
        return out

    def __str__(self) -> str:  # pragma: no cover - human formatting
        code = getattr(self.code, "value", self.code)
        parts = [f"{code}: {self.message}"]
        if self.data:
            preview = ", ".join(f"{k}={_preview(v)}" for k, v in self.data.items())
            parts.append(f"[{preview}]")
        return " ".join(parts)


class InternalError(CasperSdkError):
    def __init__(self, message="internal error", **data: Any) -> None:
        super().__init__(code=ErrorCode.INTERNAL, message=message, data=_jsonmap(data))


class NotImplementedFeature(CasperSdkError):
    """Raised by paths that are deliberately unsupported; never a silent fallback."""

    def __init__(self, message="feature not implemented", **data: Any) -> None:
        super().__init__(
            code=ErrorCode.NOT_IMPLEMENTED, message=message, data=_jsonmap(data)
        )


class ValidationError(CasperSdkError):
    def __init__(self, message="invalid value", **data: Any) -> None:
        super().__init__(code=ErrorCode.VALIDATION, message=message, data=_jsonmap(data))


class ListTypeMismatch(ValidationError):
    def __init__(self, expected: Any, got: Any, index: int) -> None:
        super().__init__(
            "a list cannot contain different types",
            expected=expected,
            got=got,
            index=index,
        )
        self.code = ErrorCode.LIST_TYPE_MISMATCH


class DeserializationError(CasperSdkError):
    def __init__(self, message="deserialization failed", **data: Any) -> None:
        super().__init__(
            code=ErrorCode.DESERIALIZATION, message=message, data=_jsonmap(data)
        )


class SignatureFormatError(CasperSdkError):
    def __init__(self, message="malformed signature", **data: Any) -> None:
        super().__init__(
            code=ErrorCode.SIGNATURE_FORMAT, message=message, data=_jsonmap(data)
        )


class KeyFormatError(CasperSdkError):
    def __init__(self, message="malformed public key", **data: Any) -> None:
        super().__init__(code=ErrorCode.KEY_FORMAT, message=message, data=_jsonmap(data))


class ConfigError(CasperSdkError):
    def __init__(self, message="invalid configuration", **data: Any) -> None:
        super().__init__(code=ErrorCode.CONFIG, message=message, data=_jsonmap(data))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

T = TypeVar("T", bound=CasperSdkError)


def wrap(exc: BaseException, *, as_: Type[T] = InternalError, **ctx: Any) -> T:
    """
    Wrap any exception into a CasperSdkError subclass, attaching context.
    If `exc` is already a CasperSdkError, returns a context-enriched copy.
    """
    if isinstance(exc, CasperSdkError):
        return exc.with_context(**ctx)  # type: ignore[return-value]
    err = as_(str(exc) or "wrapped exception", **ctx)  # type: ignore[call-arg]
    return err.with_cause(exc)  # type: ignore[return-value]


def _clone(err: CasperSdkError) -> CasperSdkError:
    # Subclasses have bespoke __init__ signatures; copy the instance state instead.
    new = Exception.__new__(type(err))
    new.__dict__.update(err.__dict__)
    new.args = err.args
    return new


def _jsonmap(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: _coerce_json(v) for k, v in data.items()}


def _coerce_json(v: Any) -> Any:
    # Keep JSON primitives; hex-encode bytes; stringify the rest.
    if v is None or isinstance(v, (bool, int, float, str)):
        return v
    if isinstance(v, (list, tuple)):
        return [_coerce_json(x) for x in v]
    if isinstance(v, dict):
        return {str(k): _coerce_json(x) for k, x in v.items()}
    if isinstance(v, (bytes, bytearray)):
        return bytes(v).hex()
    return str(v)


def _preview(v: Any, limit: int = 96) -> str:
    s = str(_coerce_json(v))
    return s if len(s) <= limit else s[:limit] + "…"
