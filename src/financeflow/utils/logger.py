"""Logging for the CLI: a rotating log file in the data dir plus stdout."""
import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] [op:%(operation)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MB = 1024 * 1024


def get_data_dir() -> Path:
    """Return the FinanceFlow data directory."""
    return Path(os.getenv("FINANCEFLOW_HOME", Path.home() / ".financeflow")).expanduser()


class OperationContextFilter(logging.Filter):
    """Stamps each record with the CLI command being run."""

    def __init__(self):
        super().__init__()
        self.operation: Optional[str] = None

    def filter(self, record):
        record.operation = self.operation or "system"
        return True


class FinanceFlowLogger:
    """
    Owns the "financeflow" logger and its two handlers.

    The file handler records everything down to DEBUG; the console only
    shows INFO and above. The logger level gates both.
    """

    def __init__(self, log_level: str = "INFO", max_file_size_mb: int = 10, backup_count: int = 30):
        self.log_file = get_data_dir() / "logs" / "financeflow.log"
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        self.operation_filter = OperationContextFilter()
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        self.file_handler = RotatingFileHandler(
            self.log_file, maxBytes=max_file_size_mb * MB, backupCount=backup_count, encoding="utf-8"
        )
        self.file_handler.setLevel(logging.DEBUG)
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)

        self.logger = logging.getLogger("financeflow")
        self.logger.propagate = False
        self.logger.handlers.clear()
        for handler in (self.file_handler, console_handler):
            handler.setFormatter(formatter)
            handler.addFilter(self.operation_filter)
            self.logger.addHandler(handler)
        self.set_level(log_level)

    def set_level(self, log_level: str):
        self.logger.setLevel(getattr(logging, log_level.upper()))

    def set_rotation(self, max_file_size_mb: int, backup_count: int):
        """Change when the log file rolls over and how many old files are kept."""
        self.file_handler.maxBytes = max_file_size_mb * MB
        self.file_handler.backupCount = backup_count


_logger_instance: Optional[FinanceFlowLogger] = None


def get_logger(log_level: str = "INFO") -> logging.Logger:
    """Get or create the shared "financeflow" logger."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = FinanceFlowLogger(log_level)
    return _logger_instance.logger


def configure_logging(log_level: str, max_file_size_mb: Optional[int] = None, backup_count: Optional[int] = None):
    """
    Apply settings to the shared logger.

    Modules grab the logger at import time, before settings are read, so
    the level and rotation limits are applied to the existing handlers.
    Rotation is left alone unless both limits are given.
    """
    get_logger()
    _logger_instance.set_level(log_level)
    if max_file_size_mb is not None and backup_count is not None:
        _logger_instance.set_rotation(max_file_size_mb, backup_count)


def set_operation_context(operation: Optional[str]):
    if _logger_instance:
        _logger_instance.operation_filter.operation = operation
