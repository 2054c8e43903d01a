"""
DeployConfig tests: defaults, environment overrides and validation.
"""

from __future__ import annotations

import pytest

from casper_sdk.config import DeployConfig
from casper_sdk.errors import ConfigError

ENV_KEYS = (
    "CASPER_SDK_CHAIN_NAME",
    "CASPER_SDK_TTL",
    "CASPER_SDK_GAS_PRICE",
    "CASPER_SDK_LOG_LEVEL",
    "CASPER_SDK_LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for k in ENV_KEYS:
        monkeypatch.delenv(k, raising=False)


def test_defaults():
    cfg = DeployConfig()
    assert cfg.chain_name == "casper-test"
    assert cfg.ttl_ms == 30 * 60 * 1000
    assert cfg.gas_price == 1
    assert DeployConfig.from_env().to_dict() == cfg.to_dict()


def test_from_env(monkeypatch):
    monkeypatch.setenv("CASPER_SDK_CHAIN_NAME", "casper-net-1")
    monkeypatch.setenv("CASPER_SDK_TTL", "1h")
    monkeypatch.setenv("CASPER_SDK_GAS_PRICE", "3")
    monkeypatch.setenv("CASPER_SDK_LOG_LEVEL", "debug")
    monkeypatch.setenv("CASPER_SDK_LOG_FORMAT", "JSON")
    cfg = DeployConfig.from_env()
    assert cfg.chain_name == "casper-net-1"
    assert cfg.ttl_ms == 3_600_000
    assert cfg.gas_price == 3
    assert cfg.log_level == "DEBUG"
    assert cfg.log_format == "json"


@pytest.mark.parametrize(
    "key, value",
    [
        ("CASPER_SDK_GAS_PRICE", "cheap"),
        ("CASPER_SDK_GAS_PRICE", "-1"),
        ("CASPER_SDK_TTL", "soon"),
        ("CASPER_SDK_LOG_FORMAT", "xml"),
    ],
)
def test_bad_env_values(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ConfigError):
        DeployConfig.from_env()


def test_with_overrides():
    base = DeployConfig(chain_name="a")
    cfg = DeployConfig.with_overrides(base, chain_name="b", ttl_ms="2h", gas_price="5", nope=1)
    assert (cfg.chain_name, cfg.ttl_ms, cfg.gas_price) == ("b", 7_200_000, 5)
    assert base.chain_name == "a"


def test_empty_chain_name_is_rejected():
    with pytest.raises(ConfigError):
        DeployConfig(chain_name="")
