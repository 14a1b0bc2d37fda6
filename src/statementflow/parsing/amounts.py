"""Currency token helpers."""
from decimal import Decimal, InvalidOperation
from typing import Optional

from .constants import AMOUNT_SYNTAX_RE

CENTS = Decimal("0.01")


def is_amount_syntax(token: str) -> bool:
    """True for ``1,234.56`` or ``1234.56`` (cents required, no sign)."""
    return bool(AMOUNT_SYNTAX_RE.match(token))


def parse_amount(token: Optional[str]) -> Optional[Decimal]:
    """Parse a currency token into a two-decimal ``Decimal``.

    Dollar signs, thousands separators and surrounding whitespace are dropped.
    Returns None for anything that is not a plain non-negative number.
    """
    if token is None:
        return None
    cleaned = token.strip().replace("$", "").replace(",", "").strip()
    if not cleaned or not cleaned.replace(".", "", 1).isdigit():
        return None
    try:
        return Decimal(cleaned).quantize(CENTS)
    except InvalidOperation:
        return None


def within_bound(amount: Optional[Decimal], max_amount: Decimal) -> bool:
    """``0 < amount <= max_amount``."""
    return amount is not None and Decimal("0") < amount <= max_amount
