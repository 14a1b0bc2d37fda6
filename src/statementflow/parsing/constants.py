"""Patterns and limits for the Chase statement layout."""
import re
from decimal import Decimal

from statementflow.models import SectionKind

# Month/day as printed by the bank; the year always comes from the caller
DATE_TOKEN = r"\d{1,2}[/-]\d{1,2}"
DATE_PREFIX_RE = re.compile(rf"^({DATE_TOKEN})\b")

# Amount spellings: 1,234.56 / 1234.56, optionally behind a dollar sign
AMOUNT_TOKEN = r"(?:\d{1,3}(?:,\d{3})+|\d+)\.\d{2}"
# With a dollar sign the cents may be missing ("$1,790")
DOLLAR_AMOUNT_TOKEN = r"(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d{2})?"
AMOUNT_SYNTAX_RE = re.compile(rf"^{AMOUNT_TOKEN}$")
BARE_AMOUNT_LINE_RE = re.compile(rf"^\$?\s*({AMOUNT_TOKEN})$")

# Section headers: words must be single-spaced, matching is case-insensitive
SECTION_HEADERS = {
    SectionKind.DEPOSITS: "DEPOSITS AND ADDITIONS",
    SectionKind.CHECKS: "CHECKS PAID",
    SectionKind.CARD: "ATM & DEBIT CARD WITHDRAWALS",
    SectionKind.ELECTRONIC: "ELECTRONIC WITHDRAWALS",
}

SECTION_TOTAL_MARKERS = {
    SectionKind.DEPOSITS: ("Total Deposits and Additions", "Total Deposits"),
    SectionKind.CHECKS: ("Total Checks Paid",),
    SectionKind.CARD: ("Total ATM & Debit Card Withdrawals",),
    SectionKind.ELECTRONIC: ("Total Electronic Withdrawals",),
}

_FLAGS = re.IGNORECASE | re.DOTALL | re.MULTILINE


def _header_line(header: str) -> str:
    # The checking summary repeats section names followed by counts and totals
    return rf"^[ \t]*{re.escape(header)}[ \t]*$"


SECTION_PATTERNS = {
    SectionKind.DEPOSITS: re.compile(
        _header_line(SECTION_HEADERS[SectionKind.DEPOSITS])
        + r".*?Total Deposits(?: and Additions)?\s*\$?[\d,]*\d\.\d{2}",
        _FLAGS
    ),
    SectionKind.CHECKS: re.compile(
        _header_line(SECTION_HEADERS[SectionKind.CHECKS]) + r".*?Total Checks Paid[^\n]*",
        _FLAGS
    ),
    # The card section also requires its table header
    SectionKind.CARD: re.compile(
        _header_line(SECTION_HEADERS[SectionKind.CARD])
        + r"\s*\n\s*DATE\s*DESCRIPTION\s*AMOUNT.*?Total ATM & DEBIT CARD WITHDRAWALS[^\n]*",
        _FLAGS
    ),
    SectionKind.ELECTRONIC: re.compile(
        _header_line(SECTION_HEADERS[SectionKind.ELECTRONIC])
        + r".*?Total Electronic Withdrawals[^\n]*",
        _FLAGS
    ),
}

# Used when the deposits total line is malformed or missing
DEPOSITS_FALLBACK_PATTERN = re.compile(
    _header_line(SECTION_HEADERS[SectionKind.DEPOSITS])
    + r".*?(?=^[ \t]*(?:CHECKS PAID|ATM & DEBIT CARD WITHDRAWALS|ELECTRONIC WITHDRAWALS)[ \t]*$|\Z)",
    _FLAGS
)

# Sanity bounds; larger values are treated as concatenation corruption
MAX_AMOUNTS = {
    SectionKind.DEPOSITS: Decimal("50000"),
    SectionKind.CHECKS: Decimal("100000"),
    SectionKind.CARD: Decimal("50000"),
    SectionKind.ELECTRONIC: Decimal("50000"),
}

# Lines scanned after an "Orig CO Name:" line when its amount is not on it
ELECTRONIC_LOOKAHEAD_LINES = 9

SOURCE_TAGS = {
    SectionKind.DEPOSITS: "chase_deposits",
    SectionKind.CHECKS: "chase_checks",
    SectionKind.CARD: "chase_card",
    SectionKind.ELECTRONIC: "chase_electronic",
}
