from __future__ import annotations

from collections.abc import Generator
import logging
from pathlib import Path
import sys

import pytest

sys.dont_write_bytecode = True

from werror.utilities.logger_manager import (  # noqa: E402
    LoggerConfig,
    LoggerManager,
)

ROOT_LOGGER_NAME = "werror"


def _release_managed_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, "_werror_managed", False):
            logger.removeHandler(handler)
            handler.close()


@pytest.fixture(autouse=True)
def reset_werror_logger() -> Generator[None, None, None]:
    """Give every test an unconfigured ``werror`` logger that propagates."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    level = logger.level
    yield
    _release_managed_handlers(logger)
    logger.setLevel(level)
    logger.propagate = True


@pytest.fixture
def logger_manager(tmp_path: Path) -> LoggerManager:
    return LoggerManager(LoggerConfig(log_dir=tmp_path / "logs"))
