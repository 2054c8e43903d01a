"""
Logging tests: context binding, trace scopes and both formatters.
"""

from __future__ import annotations

import io
import json
import logging

import pytest

from casper_sdk import logging as clog
from casper_sdk.config import DeployConfig


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


def test_bind_unbind_and_trace_scope():
    clog.bind(chain_name="casper-test", raw=b"\xab")
    assert clog.context() == {"chain_name": "casper-test", "raw": "ab"}
    with clog.trace_scope("t-1"):
        assert clog.context()["trace_id"] == "t-1"
        clog.bind(signer="01aa")
    assert "trace_id" not in clog.context()
    assert "signer" not in clog.context()
    clog.unbind("chain_name")
    assert clog.context() == {"raw": "ab"}


def test_json_output(restore_root):
    buf = io.StringIO()
    clog.configure(json=True, level="DEBUG", stream=buf)
    with clog.trace_scope("abc"):
        clog.get_logger("casper_sdk.test").info("deploy signed", extra={"deploy_hash": "ff"})
    line = json.loads(buf.getvalue().strip().splitlines()[-1])
    assert line["msg"] == "deploy signed"
    assert line["level"] == "INFO"
    assert line["trace_id"] == "abc"
    assert line["deploy_hash"] == "ff"


def test_text_output_without_color(restore_root):
    buf = io.StringIO()
    clog.configure(json=False, level="INFO", stream=buf)
    clog.bind(chain_name="casper-test")
    log = clog.get_logger("casper_sdk.test")
    log.debug("hidden")
    log.warning("integrity failure")
    out = buf.getvalue()
    assert "hidden" not in out
    assert "WARNING | casper_sdk.test | chain_name=casper-test | integrity failure" in out
    assert "\x1b[" not in out


def test_configure_from_config(restore_root, monkeypatch):
    monkeypatch.delenv(clog.ENV_FORMAT, raising=False)
    buf = io.StringIO()
    clog.configure_from_config(DeployConfig(chain_name="casper-net-1", log_format="json"), stream=buf)
    clog.get_logger().info("ready")
    line = json.loads(buf.getvalue().strip())
    assert line["chain_name"] == "casper-net-1"
    assert line["logger"] == "casper_sdk"


def test_env_decides_format(restore_root, monkeypatch):
    monkeypatch.setenv(clog.ENV_FORMAT, "json")
    buf = io.StringIO()
    clog.configure(stream=buf, level=logging.INFO)
    clog.get_logger().info("x")
    assert json.loads(buf.getvalue())["msg"] == "x"
