"""Runtime version resolution helpers."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "werror"


def get_runtime_version() -> str:
    """Resolve the installed distribution version, or a dev marker."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "dev+unknown"
