"""Utility modules."""
from .logger import get_logger, configure_logger, set_statement_context, default_data_dir
from .exceptions import (
    StatementFlowError,
    ConfigError,
    SourceError,
    PDFError,
    ValidationError
)

__all__ = [
    "get_logger",
    "configure_logger",
    "set_statement_context",
    "default_data_dir",
    "StatementFlowError",
    "ConfigError",
    "SourceError",
    "PDFError",
    "ValidationError"
]
