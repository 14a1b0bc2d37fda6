"""Locate transaction sections inside raw statement text."""
from typing import Dict, Optional

from statementflow.models import SectionKind, SectionSlice
from statementflow.utils.logger import get_logger
from .constants import DATE_PREFIX_RE, DEPOSITS_FALLBACK_PATTERN, SECTION_PATTERNS

logger = get_logger()


class SectionExtractor:
    """Slices statement text into the four transaction sections."""

    def __init__(self, patterns=None, deposits_fallback=DEPOSITS_FALLBACK_PATTERN):
        self.patterns = dict(patterns or SECTION_PATTERNS)
        self.deposits_fallback = deposits_fallback

    def extract(self, kind: SectionKind, full_text: str) -> Optional[SectionSlice]:
        """
        Extract one section.

        Args:
            kind: Section to look for
            full_text: Entire statement text

        Returns:
            SectionSlice, or None when the statement has no such section
        """
        kind = SectionKind(kind)
        match = self.patterns[kind].search(full_text)
        if match:
            return SectionSlice(kind=kind, text=match.group(0))

        if kind is SectionKind.DEPOSITS and self.deposits_fallback is not None:
            text = self._deposits_fallback(full_text)
            if text is not None:
                logger.warning("Deposits total line not found, using header-to-next-section fallback")
                return SectionSlice(kind=kind, text=text)

        logger.debug(f"Section not found: {kind.value}")
        return None

    def find_all(self, full_text: str) -> Dict[SectionKind, Optional[SectionSlice]]:
        """Extract every section kind."""
        return {kind: self.extract(kind, full_text) for kind in SectionKind}

    def _deposits_fallback(self, full_text: str) -> Optional[str]:
        """First fallback match holding a dated line, else the first match."""
        first = None
        for match in self.deposits_fallback.finditer(full_text):
            text = match.group(0)
            if first is None:
                first = text
            if any(DATE_PREFIX_RE.match(line.strip()) for line in text.splitlines()):
                return text
        return first
