"""Cleanup of raw extracted statement text."""
import re
import unicodedata

from statementflow.utils.logger import get_logger

logger = get_logger()


class StatementTextCleaner:
    """Normalizes line endings and odd whitespace characters."""

    # Non-breaking and other fixed-width spaces that PDF extractors emit
    SPACE_CHARS = "\u00a0\u2007\u202f"
    _LINE_BREAK_RE = re.compile(r"\r\n|\r|\f|\v")

    def clean(self, text: str) -> str:
        """
        Clean extracted text.

        Runs of spaces inside a line are kept as they are: section headers
        only match with single spaces, and collapsing would hide that.

        Args:
            text: Raw extracted text

        Returns:
            Cleaned text
        """
        if not text:
            return ""

        text = unicodedata.normalize("NFC", text)
        text = self._LINE_BREAK_RE.sub("\n", text)
        for char in self.SPACE_CHARS:
            text = text.replace(char, " ")

        logger.debug(f"Cleaned text to {len(text)} characters")
        return text
