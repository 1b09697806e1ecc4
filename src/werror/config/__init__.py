"""Configuration helpers for werror."""

from __future__ import annotations

from .env import (
    BuildModeReport,
    build_mode_from_flags,
    build_mode_from_variable,
    detect_build_mode,
    load_environment,
    log_level_from_env,
)

__all__ = [
    "BuildModeReport",
    "build_mode_from_flags",
    "build_mode_from_variable",
    "detect_build_mode",
    "load_environment",
    "log_level_from_env",
]
