"""Logging helpers for the bank application.

Loggers write to ``<project root>/logs/<subdir>/<YYYYMMDD>_<prefix>.log`` and,
optionally, to the console. Two singletons are exposed: the application
logger used by every layer, and the audit logger that records one line per
balance-affecting event.
"""

import logging
import os
import sys
from datetime import date
from pathlib import Path
from typing import Callable

from bank.utils.utils import get_project_root

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

FormatterFactory = Callable[[], logging.Formatter]
FileHandlerFactory = Callable[[Path, logging.Formatter], logging.Handler]
ConsoleHandlerFactory = Callable[[logging.Formatter], logging.Handler]


def _resolve_level(default: int = logging.INFO) -> int:
    """Return the level configured by BANK_LOG_LEVEL, or the default."""
    raw_level = os.getenv("BANK_LOG_LEVEL")
    if not raw_level:
        return default
    level = logging.getLevelName(raw_level.strip().upper())
    return level if isinstance(level, int) else default


class LoggerBuilder:
    """Fluent builder producing configured ``logging.Logger`` instances."""

    def __init__(self) -> None:
        self._name = "bank"
        self._subdir = "app"
        self._prefix = "app_logs"
        self._console = True
        self._level = logging.INFO
        self._formatter_factory: FormatterFactory = self._default_formatter
        self._file_handler_factory: FileHandlerFactory = (
            self._default_file_handler
        )
        self._console_handler_factory: ConsoleHandlerFactory = (
            self._default_console_handler
        )

    def name(self, name: str) -> "LoggerBuilder":
        self._name = name
        return self

    def subdir(self, subdir: str) -> "LoggerBuilder":
        self._subdir = subdir
        return self

    def prefix(self, prefix: str) -> "LoggerBuilder":
        self._prefix = prefix
        return self

    def console(self, enabled: bool) -> "LoggerBuilder":
        self._console = enabled
        return self

    def level(self, level: int) -> "LoggerBuilder":
        self._level = level
        return self

    def formatter(self, factory: FormatterFactory) -> "LoggerBuilder":
        self._formatter_factory = factory
        return self

    def file_handler(self, factory: FileHandlerFactory) -> "LoggerBuilder":
        self._file_handler_factory = factory
        return self

    def console_handler(
        self,
        factory: ConsoleHandlerFactory,
    ) -> "LoggerBuilder":
        self._console_handler_factory = factory
        return self

    def build(self) -> logging.Logger:
        """Return the configured logger.

        Handlers are attached only once per logger name, so building twice
        returns the same, unchanged logger.
        """
        logger = logging.getLogger(self._name)
        if logger.handlers:
            return logger

        logger.setLevel(self._level)
        logger.propagate = False
        fmt = self._formatter_factory()

        log_dir = get_project_root() / "logs" / self._subdir
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / f"{self._today_stamp()}_{self._prefix}.log"
        logger.addHandler(self._file_handler_factory(log_path, fmt))
        if self._console:
            logger.addHandler(self._console_handler_factory(fmt))
        return logger

    @staticmethod
    def _today_stamp() -> str:
        return date.today().strftime("%Y%m%d")

    @staticmethod
    def _default_formatter() -> logging.Formatter:
        return logging.Formatter(LOG_FORMAT)

    @staticmethod
    def _default_file_handler(
        path: Path,
        fmt: logging.Formatter,
    ) -> logging.Handler:
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler

    @staticmethod
    def _default_console_handler(fmt: logging.Formatter) -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler


class Logger:
    """Singleton wrapper delegating to a built ``logging.Logger``."""

    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._initialized = False
            cls._instance = instance
        return cls._instance

    def __init__(
        self,
        name: str = "bank",
        subdir: str = "app",
        prefix: str = "app_logs",
        console: bool = True,
    ) -> None:
        if self._initialized:
            return
        self.logger = (
            LoggerBuilder()
            .name(name)
            .subdir(subdir)
            .prefix(prefix)
            .console(console)
            .level(_resolve_level())
            .build()
        )
        self._initialized = True

    def debug(self, msg, *args, **kwargs) -> None:
        self.logger.debug(msg, *args, **kwargs)

    def info(self, msg, *args, **kwargs) -> None:
        self.logger.info(msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs) -> None:
        self.logger.warning(msg, *args, **kwargs)

    def error(self, msg, *args, **kwargs) -> None:
        self.logger.error(msg, *args, **kwargs)

    def critical(self, msg, *args, **kwargs) -> None:
        self.logger.critical(msg, *args, **kwargs)

    def exception(self, msg, *args, **kwargs) -> None:
        self.logger.exception(msg, *args, **kwargs)


class AppLogger(Logger):
    """Application-wide logger."""

    _instance = None

    def __init__(self) -> None:
        super().__init__(name="bank", subdir="app", prefix="app_logs")


class AuditLogger(Logger):
    """File-only logger for postings, rejections and compensations."""

    _instance = None

    def __init__(self) -> None:
        super().__init__(
            name="bank.audit",
            subdir="audit",
            prefix="audit_logs",
            console=False,
        )


def get_app_logger() -> AppLogger:
    """Return the application logger singleton."""
    return AppLogger()


def get_audit_logger() -> AuditLogger:
    """Return the audit logger singleton."""
    return AuditLogger()


__all__ = [
    "LoggerBuilder",
    "Logger",
    "AppLogger",
    "AuditLogger",
    "get_app_logger",
    "get_audit_logger",
]
