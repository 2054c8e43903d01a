from __future__ import annotations

from importlib import metadata

import casper_sdk
from casper_sdk import version as v


def test_static_version_is_exported():
    assert casper_sdk.__version__ == v.__version__ == "0.1.0"


def test_installed_version_falls_back_to_source(monkeypatch):
    def missing(name):
        raise metadata.PackageNotFoundError(name)

    monkeypatch.setattr(v.metadata, "version", missing)
    assert v.installed_version() == v.__version__


def test_installed_version_reads_metadata(monkeypatch):
    monkeypatch.setattr(v.metadata, "version", lambda name: "9.9.9" if name == v.DIST_NAME else "")
    assert v.installed_version() == "9.9.9"
