from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from werror import ERR_NOT_FOUND, PlainError, new_err, new_err_from_error
from werror.utilities.logger_manager import (
    LoggerConfig,
    LoggerManager,
    service_error_context,
)


def _log_lines(manager: LoggerManager) -> list[str]:
    manager.flush()
    assert manager.config.log_dir is not None
    log_file = manager.config.log_dir / manager.config.log_file_name
    return log_file.read_text(encoding="utf-8").splitlines()


def test_logger_config_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown log level: LOUD"):
        LoggerConfig(log_level="loud")


def test_logger_config_creates_log_dir(tmp_path: Path) -> None:
    config = LoggerConfig(log_level="debug", log_dir=tmp_path / "nested" / "logs")
    assert config.log_level == "DEBUG"
    assert config.log_dir is not None and config.log_dir.is_dir()
    assert config.log_colors == LoggerConfig.DEFAULT_LOG_COLORS


def test_logger_writes_to_file(logger_manager: LoggerManager) -> None:
    logger = logger_manager.get_logger()
    assert logger.name == "werror"
    assert logger.propagate is False
    logger.info("catalog loaded")
    lines = _log_lines(logger_manager)
    assert any("[INFO] werror: catalog loaded" in line for line in lines)


def test_reconfiguring_replaces_managed_handlers(tmp_path: Path) -> None:
    first = LoggerManager(LoggerConfig(log_dir=tmp_path / "a"))
    count = len(first.get_logger().handlers)
    second = LoggerManager(LoggerConfig(log_dir=tmp_path / "b"))
    assert len(second.get_logger().handlers) == count


def test_structured_logging_includes_context(tmp_path: Path) -> None:
    manager = LoggerManager(
        LoggerConfig(log_dir=tmp_path / "logs", structured_logging=True)
    )
    with manager.context(request_id="r-42") as logger:
        logger.warning("slow render")
    manager.get_logger().info("outside")

    records = [json.loads(line) for line in _log_lines(manager)]
    assert records[0]["message"] == "slow render"
    assert records[0]["level"] == "WARNING"
    assert records[0]["context"] == {"request_id": "r-42"}
    assert records[1]["context"] == {}


def test_log_service_error_records_code_and_chain(tmp_path: Path) -> None:
    manager = LoggerManager(
        LoggerConfig(log_dir=tmp_path / "logs", structured_logging=True)
    )
    err = new_err_from_error(ERR_NOT_FOUND, PlainError("row 7 missing"))
    manager.log_service_error(err)

    record = json.loads(_log_lines(manager)[0])
    assert record["level"] == "ERROR"
    assert record["message"].startswith("NotFound (404): Not found: row 7 missing")
    assert record["context"]["code"] == "NotFound"
    assert record["context"]["status"] == 404
    assert record["context"]["chain"] == [
        "ServiceError: 404: row 7 missing",
        "PlainError: row 7 missing",
    ]


def test_log_service_error_handles_plain_exceptions(tmp_path: Path) -> None:
    manager = LoggerManager(
        LoggerConfig(log_dir=tmp_path / "logs", structured_logging=True)
    )
    manager.log_service_error(ValueError("bad"), level=logging.WARNING)
    record = json.loads(_log_lines(manager)[0])
    assert record["message"] == "ValueError: bad"
    assert record["context"]["error_type"] == "ValueError"


def test_service_error_context_for_derived_error() -> None:
    context = service_error_context(new_err(ERR_NOT_FOUND, "gone"))
    assert context["code"] == "NotFound"
    assert context["error_message"] == "gone"
    assert len(context["chain"]) == 2


def test_add_filter_drops_records(logger_manager: LoggerManager) -> None:
    logger_manager.add_filter("no-noise", lambda record: "noise" not in record.msg)
    logger = logger_manager.get_logger()
    logger.info("noise here")
    logger.info("signal here")
    lines = _log_lines(logger_manager)
    assert not any("noise here" in line for line in lines)
    assert any("signal here" in line for line in lines)
