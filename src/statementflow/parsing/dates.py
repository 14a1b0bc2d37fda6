"""Partial statement dates to calendar timestamps."""
import re
from datetime import datetime
from typing import Optional

_PARTIAL_DATE_RE = re.compile(r"^\s*(\d{1,2})[/-](\d{1,2})\s*$")

# Noon keeps the calendar day stable when rendered in another timezone
NOON = 12


def to_calendar_date(partial_date: Optional[str], year: int) -> Optional[datetime]:
    """
    Convert ``MM/DD`` or ``MM-DD`` plus a statement year to a local-noon datetime.

    Args:
        partial_date: Month and day as printed on the statement
        year: Statement year supplied by the caller

    Returns:
        Naive datetime at 12:00:00, or None for a zero, missing or
        impossible month/day
    """
    if not partial_date:
        return None

    match = _PARTIAL_DATE_RE.match(partial_date)
    if not match:
        return None

    month, day = int(match.group(1)), int(match.group(2))
    if month == 0 or day == 0:
        return None

    try:
        return datetime(year, month, day, NOON, 0, 0)
    except ValueError:
        return None
