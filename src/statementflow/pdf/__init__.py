"""PDF processing module."""
from .processor import PDFProcessor
from .text_cleanup import StatementTextCleaner

__all__ = ["PDFProcessor", "StatementTextCleaner"]
