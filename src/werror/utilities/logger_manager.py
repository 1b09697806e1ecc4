"""Logger manager with colored console output, rotation and structured records.

Library modules only call ``logging.getLogger(__name__)``; applications (and
the ``werror`` CLI) use :class:`LoggerManager` to decide where those records
go and how they look.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
import datetime
import json
import logging
from logging import (
    Handler,
    Logger,
    LogRecord,
    getLevelName,
    getLogRecordFactory,
    setLogRecordFactory,
)
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys
from typing import Any, ClassVar

import colorlog

from werror.core.error import ServiceError, iter_chain

CONSOLE_FORMAT = "%(log_color)s%(asctime)s - [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s - [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class LoggerConfig:
    """Configuration for LoggerManager."""

    name: str = "werror"
    log_level: str = "INFO"
    log_dir: Path | None = None
    log_file_name: str = "werror.log"
    max_file_size_mb: int = 10
    backup_count: int = 3
    structured_logging: bool = False
    log_filters: dict[str, Callable[[LogRecord], bool]] | None = None
    log_colors: dict[str, str] | None = None

    DEFAULT_LOG_COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "red,bg_white",
    }

    def __post_init__(self) -> None:
        """Normalize and validate configuration."""
        self.log_level = self.log_level.upper()
        if not isinstance(getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")
        if self.log_dir is not None:
            self.log_dir = Path(self.log_dir).resolve()
            self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_colors = self.log_colors or self.DEFAULT_LOG_COLORS


class ContextLogRecord(LogRecord):
    """LogRecord carrying the context installed by ``LoggerManager.context``."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.custom_context: dict[str, Any] = {}


class StructuredFormatter(logging.Formatter):
    """Render each record as one JSON object."""

    def format(self, record: LogRecord) -> str:
        context = dict(getattr(record, "custom_context", {}) or {})
        context.update(getattr(record, "context", {}) or {})
        log_data = {
            "timestamp": datetime.datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
            "context": context,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, ensure_ascii=False, default=str)


class LoggerSettings:
    """Builds the handlers described by a LoggerConfig."""

    def __init__(self, config: LoggerConfig) -> None:
        self.config = config

    def get_handlers(self) -> list[Handler]:
        handlers = [self._get_console_handler()]
        file_handler = self._get_file_handler()
        if file_handler is not None:
            handlers.append(file_handler)
        return handlers

    def _get_console_handler(self) -> Handler:
        handler = colorlog.StreamHandler(sys.stderr)
        formatter: logging.Formatter = (
            StructuredFormatter()
            if self.config.structured_logging
            else colorlog.ColoredFormatter(
                CONSOLE_FORMAT,
                datefmt=DATE_FORMAT,
                log_colors=self.config.log_colors,
            )
        )
        handler.setFormatter(formatter)
        self._apply_filters(handler)
        return handler

    def _get_file_handler(self) -> RotatingFileHandler | None:
        if self.config.log_dir is None:
            return None
        file_path = self.config.log_dir / self.config.log_file_name
        try:
            handler = RotatingFileHandler(
                file_path,
                maxBytes=self.config.max_file_size_mb * 1024 * 1024,
                backupCount=self.config.backup_count,
                encoding="utf-8",
            )
        except OSError as e:
            print(f"Failed to create RotatingFileHandler: {e}", file=sys.stderr)
            return None
        handler.setFormatter(
            StructuredFormatter()
            if self.config.structured_logging
            else logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT)
        )
        self._apply_filters(handler)
        return handler

    def _apply_filters(self, handler: Handler) -> None:
        if self.config.log_filters:
            for filter_fn in self.config.log_filters.values():
                handler.addFilter(filter_fn)


class LoggerManager:
    """Configures one named logger tree and exposes error-aware helpers."""

    def __init__(self, config: LoggerConfig | None = None) -> None:
        self.config = config or LoggerConfig()
        self.settings = LoggerSettings(self.config)
        self._logger = self._configure_logger()

    @property
    def name(self) -> str:
        return self.config.name

    def get_logger(self) -> Logger:
        return self._logger

    def _configure_logger(self) -> Logger:
        logger = logging.getLogger(self.config.name)
        for handler in list(logger.handlers):
            if getattr(handler, "_werror_managed", False):
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(getLevelName(self.config.log_level))
        for handler in self.settings.get_handlers():
            handler._werror_managed = True  # type: ignore[attr-defined]
            logger.addHandler(handler)
        logger.propagate = False
        return logger

    @contextmanager
    def context(self, **context_kwargs: Any) -> Iterator[Logger]:
        """Attach ``context_kwargs`` to every record created inside the block."""
        current_factory = getLogRecordFactory()

        def context_log_record_factory(*args: Any, **kwargs: Any) -> LogRecord:
            record = current_factory(*args, **kwargs)
            custom_record = ContextLogRecord(
                record.name,
                record.levelno,
                record.pathname,
                record.lineno,
                record.msg,
                record.args,
                record.exc_info,
                record.funcName,
                record.stack_info,
            )
            inherited = getattr(record, "custom_context", {}) or {}
            custom_record.custom_context = {**inherited, **context_kwargs}
            return custom_record

        setLogRecordFactory(context_log_record_factory)
        try:
            yield self._logger
        finally:
            setLogRecordFactory(current_factory)

    def log_service_error(
        self, err: BaseException, level: int = logging.ERROR
    ) -> None:
        """Log ``err`` with its status, code and rendered cause chain as context."""
        log_service_error(self._logger, err, level)

    def add_filter(self, name: str, filter_fn: Callable[[LogRecord], bool]) -> None:
        if self.config.log_filters is None:
            self.config.log_filters = {}
        self.config.log_filters[name] = filter_fn
        for handler in self._logger.handlers:
            handler.addFilter(filter_fn)

    def flush(self) -> None:
        for handler in self._logger.handlers:
            handler.flush()


def service_error_context(err: BaseException) -> dict[str, Any]:
    """Structured fields describing ``err`` for log records."""
    chain = [f"{type(node).__name__}: {node}" for node in iter_chain(err)]
    if isinstance(err, ServiceError):
        return {
            "status": err.status,
            "code": err.code,
            "error_message": err.message,
            "chain": chain,
        }
    return {"error_type": type(err).__name__, "chain": chain}


def log_service_error(
    logger: Logger, err: BaseException, level: int = logging.ERROR
) -> None:
    context = service_error_context(err)
    if isinstance(err, ServiceError):
        logger.log(
            level,
            "%s (%s): %s",
            err.code,
            err.status,
            err.message,
            extra={"context": context},
        )
    else:
        logger.log(
            level, "%s: %s", type(err).__name__, err, extra={"context": context}
        )


__all__ = [
    "ContextLogRecord",
    "LoggerConfig",
    "LoggerManager",
    "LoggerSettings",
    "StructuredFormatter",
    "log_service_error",
    "service_error_context",
]
