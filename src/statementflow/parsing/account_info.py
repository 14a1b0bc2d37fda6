"""Statement header details: account holder, account number, period and balances."""
import re
from typing import Optional, Tuple

from statementflow.models import AccountInfo
from .amounts import parse_amount

ACCOUNT_NUMBER_RE = re.compile(r"Account\s+Number[:\s]+(\d+)", re.IGNORECASE)
PERIOD_NUMERIC_RE = re.compile(r"(\d{1,2}/\d{1,2}/\d{4})\s*-\s*(\d{1,2}/\d{1,2}/\d{4})")
PERIOD_THROUGH_RE = re.compile(
    r"([A-Z][a-z]+\s+\d{1,2},\s+\d{4})\s*through\s*([A-Z][a-z]+\s+\d{1,2},\s+\d{4})"
)
BEGINNING_BALANCE_RE = re.compile(r"Beginning\s+Balance\s*\$?([\d,]+\.\d{2})", re.IGNORECASE)
ENDING_BALANCE_RE = re.compile(r"Ending\s+Balance\s*\$?([\d,]+\.\d{2})", re.IGNORECASE)

_YEAR_RE = re.compile(r"(\d{4})\s*$")

# Account holder lines near the top of the statement
HEADER_SCAN_LINES = 20
COMPANY_NAME_PATTERNS = (
    re.compile(
        r"^([A-Z\s]+(?:INC|LLC|CORP|CORPORATION|COMPANY|CO|LTD|LIMITED|CONSTRUCTION|ENTERPRISES"
        r"|SERVICES|GROUP)\.?),?\s*$",
        re.IGNORECASE
    ),
    re.compile(r"^([A-Z\s]+(?:&|AND)\s+[A-Z\s]+(?:INC|LLC|CORP|CONSTRUCTION)\.?),?\s*$", re.IGNORECASE),
    re.compile(
        r"^([A-Z][A-Za-z\s]+(?:CONSTRUCTION|CONTRACTING|BUILDER|BUILDERS|COMPANY)\.?),?\s*$",
        re.IGNORECASE
    ),
    # Any plain-word line of 11 to 51 characters
    re.compile(r"^([A-Z][A-Za-z\s]{10,50})\s*$"),
)
ADDRESS_PATTERNS = (
    re.compile(
        r"^\d+\s+[A-Za-z\s]+(?:Street|St|Avenue|Ave|Road|Rd|Drive|Dr|Lane|Ln|Boulevard|Blvd|Circle"
        r"|Cir|Court|Ct|Way|Place|Pl)\.?\s*$",
        re.IGNORECASE
    ),
    re.compile(r"^[A-Za-z\s]+,\s*[A-Z]{2}\s+\d{5}(?:-\d{4})?\s*$"),
)
# Header lines holding these words are bank boilerplate, not the account holder
HEADER_SKIP_KEYWORDS = ("Chase", "Statement", "Account", "Period", "Balance", "Page")
_NUMERIC_LINE_RE = re.compile(r"^[\d\s]+$")


def extract_account_info(text: str) -> AccountInfo:
    """
    Read header details from statement text.

    The values are informational; balances are not reconciled against the
    parsed transactions.

    Args:
        text: Entire statement text

    Returns:
        AccountInfo with None for every field that was not found
    """
    account = ACCOUNT_NUMBER_RE.search(text)
    period = PERIOD_NUMERIC_RE.search(text) or PERIOD_THROUGH_RE.search(text)
    beginning = BEGINNING_BALANCE_RE.search(text)
    ending = ENDING_BALANCE_RE.search(text)
    company_name, address = extract_company_info(text)

    return AccountInfo(
        account_number=account.group(1) if account else None,
        period_start=period.group(1) if period else None,
        period_end=period.group(2) if period else None,
        beginning_balance=parse_amount(beginning.group(1)) if beginning else None,
        ending_balance=parse_amount(ending.group(1)) if ending else None,
        company_name=company_name,
        address=address,
    )


def statement_year(info: AccountInfo) -> Optional[int]:
    """Year of the statement period end, or None when no period was found."""
    for value in (info.period_end, info.period_start):
        if value:
            match = _YEAR_RE.search(value)
            if match:
                return int(match.group(1))
    return None


def extract_company_info(text: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Find the account holder's name and address in the statement header.

    Only the first lines are scanned. Bank boilerplate and numeric lines are
    skipped; the first line matching a name pattern is the name and the first
    remaining line matching an address pattern is the address.

    Args:
        text: Entire statement text

    Returns:
        (company name, address), each None when not found
    """
    name = None
    address = None

    for raw_line in text.split("\n")[:HEADER_SCAN_LINES]:
        line = raw_line.strip()
        if not line or _NUMERIC_LINE_RE.match(line):
            continue
        if any(keyword in line for keyword in HEADER_SKIP_KEYWORDS):
            continue

        if name is None:
            match = _first_match(COMPANY_NAME_PATTERNS, line)
            if match:
                name = match.group(1).strip()
                continue

        if address is None and _first_match(ADDRESS_PATTERNS, line):
            address = line

        if name and address:
            break

    return name, address


def _first_match(patterns, line: str):
    for pattern in patterns:
        match = pattern.match(line)
        if match:
            return match
    return None
