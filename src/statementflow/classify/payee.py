"""Payee name extraction from transaction descriptions."""
import re
from typing import Optional

MAX_PAYEE_LENGTH = 50

_CHECK_RE = re.compile(r"^CHECK\s*#\s*\d+$", re.IGNORECASE)
_PREFIX_RE = re.compile(
    r"^(?:Electronic Payment:\s*|(?:Card Purchase(?:\s+With Pin)?|DEBIT|CREDIT|DEPOSIT|WITHDRAWAL)(?:\s+|$))",
    re.IGNORECASE
)
_SUFFIX_RE = re.compile(r"\s+(?:DEBIT|CREDIT|DEPOSIT|WITHDRAWAL)$", re.IGNORECASE)
_CARD_NUMBER_RE = re.compile(r"\s+Card\s+\d{4}\b.*$", re.IGNORECASE)
_TRAILING_DATE_RE = re.compile(r"\s+\d{1,2}/\d{1,2}(?:/\d{2,4})?$")
_LEADING_NUMBER_RE = re.compile(r"^#?\d+\s+")

SEPARATORS = (" - ", " / ", " * ", "  ")


def extract_payee(description: Optional[str]) -> Optional[str]:
    """
    Best-effort payee name for a description.

    Args:
        description: Transaction description

    Returns:
        Payee name, or None for checks and descriptions with nothing left
        after cleanup
    """
    if not description:
        return None

    text = description.strip()
    if _CHECK_RE.match(text):
        return None

    text = _PREFIX_RE.sub("", text)
    text = _SUFFIX_RE.sub("", text)
    text = _CARD_NUMBER_RE.sub("", text)
    text = _TRAILING_DATE_RE.sub("", text)
    text = _LEADING_NUMBER_RE.sub("", text).strip()

    for separator in SEPARATORS:
        if separator in text:
            text = text.split(separator)[0].strip()
            break

    text = text[:MAX_PAYEE_LENGTH].strip()
    return text or None
