"""Statement text parsing."""
from .account_info import extract_account_info, extract_company_info, statement_year
from .amounts import parse_amount
from .dates import to_calendar_date
from .parsers import (
    CardLineParser,
    CheckLineParser,
    DepositLineParser,
    ElectronicLineParser,
    LineParser,
    build_parsers,
)
from .sections import SectionExtractor
from .segmenter import segment

__all__ = [
    "extract_account_info",
    "extract_company_info",
    "statement_year",
    "parse_amount",
    "to_calendar_date",
    "CardLineParser",
    "CheckLineParser",
    "DepositLineParser",
    "ElectronicLineParser",
    "LineParser",
    "build_parsers",
    "SectionExtractor",
    "segment",
]
