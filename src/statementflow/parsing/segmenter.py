"""Split a section into candidate transaction lines."""
from typing import List

from statementflow.models import SectionSlice
from .constants import SECTION_HEADERS, SECTION_TOTAL_MARKERS


def is_total_line(line: str, kind) -> bool:
    """True when the line carries one of the section's total markers."""
    lowered = line.lower()
    return any(marker.lower() in lowered for marker in SECTION_TOTAL_MARKERS[kind])


def segment(section: SectionSlice) -> List[str]:
    """
    Candidate lines of a section, in order.

    Header, table-header, total and blank lines are dropped. The result is a
    list because the electronic parser looks ahead.
    """
    header = SECTION_HEADERS[section.kind].lower()
    lines = []
    for raw_line in section.text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if line.lower() == header:
            continue
        if "DATE" in line and "DESCRIPTION" in line:
            continue
        if is_total_line(line, section.kind):
            continue
        lines.append(line)
    return lines
