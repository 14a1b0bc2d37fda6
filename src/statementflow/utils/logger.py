"""Logging infrastructure with statement context."""
import logging
import os
import sys
import threading
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional


def default_data_dir() -> Path:
    """Per-user data directory for logs and learned payee rules."""
    base = os.getenv("LOCALAPPDATA") or os.getenv("XDG_DATA_HOME")
    if base:
        return Path(base) / "StatementFlow"
    return Path.home() / ".local" / "share" / "StatementFlow"


class StatementContextFilter(logging.Filter):
    """Add the statement being processed to log records.

    The context is per thread; batch workers each log their own statement.
    """

    def __init__(self):
        super().__init__()
        self._local = threading.local()

    @property
    def statement(self) -> Optional[str]:
        return getattr(self._local, "statement", None)

    @statement.setter
    def statement(self, value: Optional[str]):
        self._local.statement = value

    def filter(self, record):
        """Add statement name to record."""
        record.statement = self.statement or "-"
        return True


class StatementFlowLogger:
    """Centralized logging manager."""

    def __init__(
        self,
        log_level: str = "INFO",
        log_dir: Optional[Path] = None,
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 30
    ):
        env_dir = os.getenv("STATEMENTFLOW_LOG_DIR")
        self.log_dir = Path(log_dir or env_dir or default_data_dir() / "logs")
        self.log_file = self.log_dir / "statementflow.log"
        self.statement_filter = StatementContextFilter()

        self.logger = logging.getLogger("statementflow")
        self.logger.setLevel(getattr(logging, log_level.upper()))
        self.logger.propagate = False

        # Remove existing handlers
        for handler in self.logger.handlers:
            handler.close()
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [statement:%(statement)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        # Console goes to stderr so CLI output on stdout stays parseable
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(self.statement_filter)
        self.logger.addHandler(console_handler)

        file_error = None
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                self.log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8"
            )
        except OSError as e:
            file_error = e
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            file_handler.addFilter(self.statement_filter)
            self.logger.addHandler(file_handler)

        if file_error:
            self.logger.warning(f"File logging disabled ({self.log_file}): {file_error}")

    def set_statement_context(self, statement: Optional[str]):
        """Set current statement context for logging."""
        self.statement_filter.statement = statement

    def set_level(self, log_level: str):
        """Change the package log level."""
        self.logger.setLevel(getattr(logging, log_level.upper()))

    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[StatementFlowLogger] = None


def get_logger(log_level: Optional[str] = None) -> logging.Logger:
    """Get or create global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = StatementFlowLogger(log_level or "INFO")
    elif log_level:
        _logger_instance.set_level(log_level)
    return _logger_instance.get_logger()


def set_statement_context(statement: Optional[str]):
    """Set statement context for logging."""
    global _logger_instance
    if _logger_instance:
        _logger_instance.set_statement_context(statement)


def configure_logger(
    log_level: str = "INFO",
    log_dir: Optional[Path] = None,
    max_file_size_mb: int = 10,
    backup_count: int = 30
) -> logging.Logger:
    """Rebuild the global logger from settings."""
    global _logger_instance
    _logger_instance = StatementFlowLogger(
        log_level,
        log_dir=log_dir,
        max_bytes=max_file_size_mb * 1024 * 1024,
        backup_count=backup_count
    )
    return _logger_instance.get_logger()
