"""
SDK configuration: default chain name, deploy ttl, gas price and logging.

- Loads sane defaults and supports overrides via environment variables (CASPER_SDK_*).
- Used by `casper_sdk.tx.build` to fill header fields callers leave out.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .errors import ConfigError, ValidationError
from .utils.timefmt import parse_ttl

_DEFAULT_CHAIN = "casper-test"
_DEFAULT_TTL_MS = 30 * 60 * 1000
_DEFAULT_GAS_PRICE = 1
_LOG_FORMATS = ("json", "text", "auto")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None else default


def _parse_int(name: str, val: Any) -> int:
    try:
        out = int(str(val).strip(), 10)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer", value=str(val)) from e
    if out < 0:
        raise ConfigError(f"{name} must be non-negative", value=out)
    return out


def _parse_ttl(val: Any) -> int:
    try:
        return parse_ttl(val)
    except ValidationError as e:
        raise ConfigError("ttl must be milliseconds or a duration like '30m'", value=str(val)).with_cause(e)


@dataclass(slots=True)
class DeployConfig:
    chain_name: str = _DEFAULT_CHAIN
    ttl_ms: int = _DEFAULT_TTL_MS
    gas_price: int = _DEFAULT_GAS_PRICE
    # Logging
    log_level: str = "INFO"
    log_format: str = "auto"
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.chain_name:
            raise ConfigError("chain_name must be non-empty")
        if self.log_format not in _LOG_FORMATS:
            raise ConfigError("log_format must be json|text|auto", value=self.log_format)

    @classmethod
    def from_env(cls, prefix: str = "CASPER_SDK_") -> "DeployConfig":
        """
        Create config from environment variables:

        CASPER_SDK_CHAIN_NAME   (str)
        CASPER_SDK_TTL          (ms or duration, e.g. 30m)
        CASPER_SDK_GAS_PRICE    (int)
        CASPER_SDK_LOG_LEVEL    (str)
        CASPER_SDK_LOG_FORMAT   (json|text|auto)
        """
        return cls(
            chain_name=_env(f"{prefix}CHAIN_NAME", _DEFAULT_CHAIN) or _DEFAULT_CHAIN,
            ttl_ms=_parse_ttl(_env(f"{prefix}TTL", str(_DEFAULT_TTL_MS))),
            gas_price=_parse_int("gas_price", _env(f"{prefix}GAS_PRICE", str(_DEFAULT_GAS_PRICE))),
            log_level=(_env(f"{prefix}LOG_LEVEL", "INFO") or "INFO").upper(),
            log_format=(_env(f"{prefix}LOG_FORMAT", "auto") or "auto").lower(),
        )

    @classmethod
    def with_overrides(
        cls, base: Optional["DeployConfig"] = None, **overrides: Any
    ) -> "DeployConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys are ignored.
        """
        base = base or cls.from_env()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data})
        if "ttl_ms" in overrides:
            data["ttl_ms"] = _parse_ttl(overrides["ttl_ms"])
        if "gas_price" in overrides:
            data["gas_price"] = _parse_int("gas_price", overrides["gas_price"])
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chain_name": self.chain_name,
            "ttl_ms": int(self.ttl_ms),
            "gas_price": int(self.gas_price),
            "log_level": self.log_level,
            "log_format": self.log_format,
            "extra": dict(self.extra),
        }


__all__ = ["DeployConfig"]
