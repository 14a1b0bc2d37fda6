"""StatementFlow: bank statement text parsing and transaction classification."""
from statementflow.models import (
    AccountInfo,
    Classification,
    ParsedTransaction,
    SectionKind,
    StatementResult,
    StatementSummary,
    TransactionType,
)
from statementflow.orchestrator.pipeline import StatementPipeline

__version__ = "1.0.0"

__all__ = [
    "AccountInfo",
    "Classification",
    "ParsedTransaction",
    "SectionKind",
    "StatementResult",
    "StatementSummary",
    "TransactionType",
    "StatementPipeline",
]
