import logging
import os

from typing import IO, Optional

import psutil

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [Memory: %(memory_usage).2f MB] - %(message)s"
_MANAGED_ATTR = "_tsvd_memory_managed"


def get_memory_usage() -> float:
    """Get current memory usage in MB"""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


class _MemoryUsageFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "memory_usage"):
            record.memory_usage = get_memory_usage()
        return True


def remove_managed_memory_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, _MANAGED_ATTR, False):
            logger.removeHandler(handler)
            handler.close()


def configure_memory_logger(
    logger: logging.Logger,
    stream: Optional[IO[str]] = None,
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    replace_managed_handlers: bool = False,
) -> list[logging.Handler]:
    """Attach console (and optionally file) handlers that stamp memory usage.

    Handlers installed here are tagged so that a later call with
    `replace_managed_handlers=True`, or `remove_managed_memory_handlers`,
    can remove them without touching handlers owned by the application.
    """
    if replace_managed_handlers:
        remove_managed_memory_handlers(logger)

    formatter = logging.Formatter(_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(stream)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(_MemoryUsageFilter())
        setattr(handler, _MANAGED_ATTR, True)
        logger.addHandler(handler)

    logger.setLevel(level)
    return handlers


class MemoryLogger:
    def __init__(
        self,
        name: Optional[str] = None,
        log_file: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if logger is None and name is None:
            raise ValueError("Either name or logger must be provided")
        if logger is not None:
            self.logger = logger
            return

        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            configure_memory_logger(self.logger, log_file=log_file)

    def _log(self, level: int, message: str) -> None:
        self.logger.log(level, message, extra={"memory_usage": get_memory_usage()})

    def info(self, message: str) -> None:
        """Log info message with memory usage"""
        self._log(logging.INFO, message)

    def debug(self, message: str) -> None:
        self._log(logging.DEBUG, message)

    def warning(self, message: str) -> None:
        self._log(logging.WARNING, message)
