"""Custom exception classes for StatementFlow."""


class StatementFlowError(Exception):
    """Base exception for StatementFlow."""
    pass


class ConfigError(StatementFlowError):
    """Settings or rule-table errors."""
    pass


class SourceError(StatementFlowError):
    """The statement text could not be read."""
    pass


class PDFError(SourceError):
    """PDF extraction errors."""
    pass


class ValidationError(StatementFlowError):
    """Invalid caller input."""
    pass
