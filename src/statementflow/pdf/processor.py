"""PDF text extraction for bank statements."""
from pathlib import Path
from typing import Optional

import pdfplumber
import pypdf

from statementflow.utils.logger import get_logger
from statementflow.utils.exceptions import PDFError

logger = get_logger()


class PDFProcessor:
    """Extracts text from text-based PDF statements."""

    MIN_TEXT_LENGTH = 50

    def __init__(self, min_text_length: int = MIN_TEXT_LENGTH):
        """
        Initialize PDF processor.

        Args:
            min_text_length: Shortest extraction accepted as a real statement
        """
        self.min_text_length = min_text_length

    def extract_text(self, pdf_path: Path) -> str:
        """
        Extract text from PDF file.

        Args:
            pdf_path: Path to PDF file

        Returns:
            Extracted text, pages joined with newlines

        Raises:
            PDFError: If the file is missing, unreadable, or the text is too short
        """
        pdf_path = Path(pdf_path)
        if not pdf_path.is_file():
            raise PDFError(f"PDF file not found: {pdf_path}")

        # Try pdfplumber first
        text = self._extract_with_pdfplumber(pdf_path)

        if not self.validate_extraction(text):
            # Fallback to pypdf
            logger.info(
                f"pdfplumber extracted {len(text) if text else 0} chars, "
                f"trying pypdf for {pdf_path.name}"
            )
            text = self._extract_with_pypdf(pdf_path)

        if not self.validate_extraction(text):
            raise PDFError(
                f"Extracted text too short ({len(text) if text else 0} chars, "
                f"minimum {self.min_text_length}). File may be scanned or corrupted."
            )

        logger.info(f"Successfully extracted {len(text)} characters from {pdf_path.name}")
        return text

    def validate_extraction(self, text: Optional[str]) -> bool:
        """True when the text is long enough to be a statement."""
        return bool(text) and len(text) >= self.min_text_length

    def _extract_with_pdfplumber(self, pdf_path: Path) -> Optional[str]:
        """
        Extract text using pdfplumber.

        Args:
            pdf_path: Path to PDF file

        Returns:
            Extracted text or None if failed
        """
        try:
            with pdfplumber.open(pdf_path) as pdf:
                text_parts = []
                logger.debug(f"pdfplumber: Processing {len(pdf.pages)} pages from {pdf_path.name}")
                for i, page in enumerate(pdf.pages, 1):
                    page_text = page.extract_text()
                    if page_text:
                        text_parts.append(page_text)
                        logger.debug(f"pdfplumber: Page {i} extracted {len(page_text)} chars")
                    else:
                        logger.debug(f"pdfplumber: Page {i} extracted no text")

                text = "\n".join(text_parts)
                logger.info(f"pdfplumber extracted {len(text)} chars from {len(pdf.pages)} pages in {pdf_path.name}")
                return text if text else None

        except Exception as e:
            logger.warning(f"pdfplumber extraction failed for {pdf_path.name}: {e}")
            return None

    def _extract_with_pypdf(self, pdf_path: Path) -> Optional[str]:
        """Extract text using pypdf (fallback)."""
        try:
            with open(pdf_path, "rb") as f:
                reader = pypdf.PdfReader(f)
                text_parts = [page.extract_text() or "" for page in reader.pages]
                text = "\n".join(part for part in text_parts if part)
                logger.info(f"pypdf extracted {len(text)} chars from {len(reader.pages)} pages in {pdf_path.name}")
                return text if text else None

        except Exception as e:
            logger.error(f"pypdf extraction failed for {pdf_path.name}: {e}")
            return None
