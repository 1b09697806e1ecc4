"""Centralized semantic enums for werror."""

from __future__ import annotations

from enum import Enum


class BuildMode(str, Enum):
    """Container build flavor a process was started from."""

    PRODUCTION = "production"
    DEBUG = "debug"
    UNKNOWN = "unknown"


class OutputFormat(str, Enum):
    """How the CLI prints its results."""

    JSON = "json"
    TEXT = "text"
