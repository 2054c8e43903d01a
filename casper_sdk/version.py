"""Package version."""

from __future__ import annotations

from importlib import metadata

DIST_NAME = "casper-deploy-sdk"

# Keep in step with pyproject.toml.
__version__ = "0.1.0"


def installed_version() -> str:
    """Version recorded for the installed distribution, else the source version."""
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return __version__


__all__ = ["__version__", "DIST_NAME", "installed_version"]
