"""Statement pipeline orchestration."""
from .pipeline import BatchItem, StatementPipeline, deduplicate

__all__ = ["BatchItem", "StatementPipeline", "deduplicate"]
