"""Loads environment configuration and detects the container build mode."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import load_dotenv

from werror.config.defaults import (
    BUILD_MODE_ENV_VAR,
    DEBUG_FLAG_ENV_VAR,
    LOG_LEVEL_ENV_VAR,
    LOGGING_DEFAULTS,
    PRODUCTION_FLAG_ENV_VAR,
)
from werror.enums import BuildMode


def load_environment(dotenv_path: str | Path | None = None) -> bool:
    """Load a `.env` file when available; returns whether one was read."""
    path = Path(dotenv_path) if dotenv_path else Path(".env")
    if not path.exists():
        return False
    return load_dotenv(dotenv_path=path)


def _environ(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def build_mode_from_flags(environ: Mapping[str, str] | None = None) -> BuildMode:
    """Detect the build mode from which flag variable exists.

    Only the presence of ``production_mode`` / ``debug_mode`` matters, never
    their values.
    """
    env = _environ(environ)
    if PRODUCTION_FLAG_ENV_VAR in env:
        return BuildMode.PRODUCTION
    if DEBUG_FLAG_ENV_VAR in env:
        return BuildMode.DEBUG
    return BuildMode.UNKNOWN


def build_mode_from_variable(environ: Mapping[str, str] | None = None) -> BuildMode:
    """Detect the build mode from the ``__BUILD_MODE__`` value (lowercase only)."""
    value = _environ(environ).get(BUILD_MODE_ENV_VAR, "")
    if value == BuildMode.PRODUCTION.value:
        return BuildMode.PRODUCTION
    if value == BuildMode.DEBUG.value:
        return BuildMode.DEBUG
    return BuildMode.UNKNOWN


@dataclass(frozen=True)
class BuildModeReport:
    """Outcome of both build-mode checks."""

    from_flags: BuildMode
    from_variable: BuildMode

    @property
    def mode(self) -> BuildMode:
        if self.from_flags is not BuildMode.UNKNOWN:
            return self.from_flags
        return self.from_variable


def detect_build_mode(environ: Mapping[str, str] | None = None) -> BuildModeReport:
    return BuildModeReport(
        from_flags=build_mode_from_flags(environ),
        from_variable=build_mode_from_variable(environ),
    )


def log_level_from_env(environ: Mapping[str, str] | None = None) -> str:
    """Log level requested through ``WERROR_LOG_LEVEL``, upper-cased."""
    value = _environ(environ).get(LOG_LEVEL_ENV_VAR, "").strip()
    return (value or str(LOGGING_DEFAULTS["log_level"])).upper()


__all__ = [
    "BuildModeReport",
    "build_mode_from_flags",
    "build_mode_from_variable",
    "detect_build_mode",
    "load_environment",
    "log_level_from_env",
]
