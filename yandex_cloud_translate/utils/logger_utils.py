"""Logging setup for the yandex_cloud_translate package.

Every module logs through ``LoggerUtils.get_logger(__name__)``, which places its logger
under the ``YandexCloudTranslate`` namespace. The package itself never attaches handlers:
an application (the command line) instantiates ``LoggerUtils`` once to route records to
stderr and, optionally, to a rotating log file.
"""

from __future__ import annotations

import logging
import sys
from logging import Formatter, Handler, NullHandler, StreamHandler
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, ClassVar, Final, Self

if TYPE_CHECKING:
    from pathlib import Path

__all__: list[str] = ["NAMESPACE", "LoggerUtils"]

NAMESPACE: Final[str] = "YandexCloudTranslate"

_LOG_FILE_SIZE: Final[int] = 2 * 1024 * 1024  # 2MB
_LOG_BACKUP_COUNT: Final[int] = 2

_CONSOLE_FORMAT: Final[str] = "%(levelname)s: %(message)s"
_FILE_FORMAT: Final[str] = "%(asctime)s %(levelname)-8s %(name)-56s\t%(funcName)s\t%(message)s"

DEFAULT_LOG_LEVEL: Final[int] = logging.INFO


class LoggerUtils:
    """Attaches the package handlers to the namespace logger, once per process.

    The console handler shows warnings and errors only. The file handler, created when a
    filename is given, records everything down to DEBUG. Instantiating the class again
    returns the same object without adding handlers.
    """

    _instance: ClassVar[Self | None] = None
    _configured: ClassVar[bool] = False

    def __new__(cls, *args, **kwargs) -> Self:
        _ = args, kwargs
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, filename: str | Path = "") -> None:
        """
        Args:
            filename (str | Path): Log file path. Empty disables file logging.
        """
        if LoggerUtils._configured:
            return

        self.namespace_logger: logging.Logger = logging.getLogger(NAMESPACE)
        self.namespace_logger.setLevel(DEFAULT_LOG_LEVEL)

        self._attach(self._console_handler())
        log_file: str = str(filename).strip()
        if log_file:
            file_handler: RotatingFileHandler | None = self._file_handler(log_file)
            if file_handler is not None:
                self._attach(file_handler)

        LoggerUtils._configured = True

    @staticmethod
    def _console_handler() -> Handler:
        # pythonw and similar hosts run without a stderr stream
        if sys.stderr is None:
            return NullHandler()

        handler: StreamHandler = StreamHandler(sys.stderr)
        handler.setLevel(logging.WARNING)
        handler.setFormatter(Formatter(_CONSOLE_FORMAT))
        return handler

    def _file_handler(self, filename: str) -> RotatingFileHandler | None:
        try:
            handler = RotatingFileHandler(
                filename=filename,
                maxBytes=_LOG_FILE_SIZE,
                backupCount=_LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError as err:
            self.namespace_logger.error("Cannot open log file '%s', file logging disabled: %s", filename, err)
            return None

        handler.setLevel(logging.DEBUG)
        handler.setFormatter(Formatter(_FILE_FORMAT))
        return handler

    def _attach(self, handler: Handler) -> None:
        # RotatingFileHandler subclasses StreamHandler, so compare exact types
        if any(type(existing) is type(handler) for existing in self.namespace_logger.handlers):
            handler.close()
            return
        self.namespace_logger.addHandler(handler)

    def set_level(self, level: str) -> None:
        """Set the namespace logger level by name, falling back to INFO for unknown names."""
        level_value: int | None = logging.getLevelNamesMapping().get(level.upper())
        if level_value is None:
            self.namespace_logger.setLevel(DEFAULT_LOG_LEVEL)
            self.namespace_logger.warning("Unknown logging level '%s', using INFO", level)
            return
        self.namespace_logger.setLevel(level_value)

    @staticmethod
    def get_logger(name: str | None = None) -> logging.Logger:
        """Return the logger for ``name`` inside the package namespace.

        Args:
            name (str | None): Module or component name. None returns the namespace logger.
        """
        return logging.getLogger(f"{NAMESPACE}.{name}" if name else NAMESPACE)
