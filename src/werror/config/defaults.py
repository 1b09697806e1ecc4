"""Explicit default settings for logging and environment detection."""

from __future__ import annotations

LOG_LEVEL_ENV_VAR = "WERROR_LOG_LEVEL"
BUILD_MODE_ENV_VAR = "__BUILD_MODE__"
PRODUCTION_FLAG_ENV_VAR = "production_mode"
DEBUG_FLAG_ENV_VAR = "debug_mode"

LOGGING_DEFAULTS: dict[str, object] = {
    "log_level": "INFO",
    "structured_logging": False,
    "log_file_name": "werror.log",
    "max_file_size_mb": 10,
    "backup_count": 3,
}
