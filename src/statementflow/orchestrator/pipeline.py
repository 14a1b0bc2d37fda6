"""Statement pipeline: sections -> lines -> transactions -> summary.

``StatementPipeline.run`` is pure over its inputs. File handling, year
discovery and batch processing sit on top of it.
"""
import concurrent.futures
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from statementflow.classify.classifier import TransactionClassifier
from statementflow.models import ParsedTransaction, SectionKind, StatementResult
from statementflow.parsing.account_info import extract_account_info, statement_year
from statementflow.parsing.parsers import LineParser, build_parsers
from statementflow.parsing.sections import SectionExtractor
from statementflow.parsing.segmenter import segment
from statementflow.pdf.processor import PDFProcessor
from statementflow.pdf.text_cleanup import StatementTextCleaner
from statementflow.summary.aggregator import Aggregator
from statementflow.utils.exceptions import SourceError, StatementFlowError, ValidationError
from statementflow.utils.logger import get_logger, set_statement_context

logger = get_logger()

TEXT_SUFFIXES = (".txt",)
DEFAULT_MAX_WORKERS = 4


def deduplicate(transactions: Iterable[ParsedTransaction]) -> List[ParsedTransaction]:
    """Drop exact ``(date, amount, description)`` repeats, keeping the first."""
    seen = set()
    unique = []
    for txn in transactions:
        key = txn.dedup_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(txn)
    return unique


@dataclass
class BatchItem:
    """Outcome of one statement in a batch."""
    path: Path
    result: Optional[StatementResult] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.result is not None


class StatementPipeline:
    """Runs one statement's text through every stage."""

    def __init__(
        self,
        classifier: Optional[TransactionClassifier] = None,
        extractor: Optional[SectionExtractor] = None,
        pdf_processor: Optional[PDFProcessor] = None,
        cleaner: Optional[StatementTextCleaner] = None,
        max_workers: int = DEFAULT_MAX_WORKERS
    ):
        self.classifier = classifier or TransactionClassifier()
        self.extractor = extractor or SectionExtractor()
        self.pdf_processor = pdf_processor or PDFProcessor()
        self.cleaner = cleaner or StatementTextCleaner()
        self.aggregator = Aggregator()
        self.parsers: Dict[SectionKind, LineParser] = build_parsers(self.classifier)
        self.max_workers = max_workers

    def run(self, raw_text: str, statement_year: int) -> StatementResult:
        """
        Parse one statement.

        Args:
            raw_text: Entire extracted statement text
            statement_year: Year applied to every ``MM/DD`` date

        Returns:
            StatementResult with deduplicated, date-sorted transactions

        Raises:
            ValidationError: If the text is not a string or the year is not an int
        """
        if not isinstance(raw_text, str):
            raise ValidationError(f"Statement text must be a string, got {type(raw_text).__name__}")
        if isinstance(statement_year, bool) or not isinstance(statement_year, int):
            raise ValidationError(f"Statement year must be an integer, got {statement_year!r}")
        if not 1 <= statement_year <= 9999:
            raise ValidationError(f"Statement year out of range: {statement_year}")

        transactions: List[ParsedTransaction] = []
        sections_found: Dict[str, bool] = {}

        for kind in SectionKind:
            section = self.extractor.extract(kind, raw_text)
            sections_found[kind.value] = section is not None
            if section is None:
                continue

            lines = segment(section)
            parsed = self.parsers[kind].parse_lines(lines, statement_year)
            logger.info(f"{kind.value}: parsed {len(parsed)} of {len(lines)} candidate lines")
            transactions.extend(parsed)

        unique = deduplicate(transactions)
        if len(unique) != len(transactions):
            logger.info(f"Removed {len(transactions) - len(unique)} duplicate transactions")

        # sorted() is stable, so same-day records keep section order
        ordered = sorted(unique, key=lambda txn: txn.date)

        return StatementResult(
            transactions=ordered,
            summary=self.aggregator.summarize(ordered),
            account_info=extract_account_info(raw_text),
            sections_found=sections_found,
        )

    def read_text(self, path: Path) -> str:
        """
        Read statement text from a PDF or a pre-extracted ``.txt`` file.

        Raises:
            SourceError: If the file cannot be read
            PDFError: If PDF extraction fails
        """
        path = Path(path)
        if path.suffix.lower() in TEXT_SUFFIXES:
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise SourceError(f"Failed to read statement text {path}: {e}") from e
        else:
            text = self.pdf_processor.extract_text(path)
        return self.cleaner.clean(text)

    def process_pdf(self, pdf_path: Path, statement_year: Optional[int] = None) -> StatementResult:
        """
        Parse a statement file.

        Args:
            pdf_path: PDF (or ``.txt``) statement
            statement_year: Year for ``MM/DD`` dates; read from the statement
                period when None

        Returns:
            StatementResult

        Raises:
            SourceError: If the file cannot be read
            ValidationError: If no year is given and none is printed on the statement
        """
        pdf_path = Path(pdf_path)
        set_statement_context(pdf_path.name)
        try:
            logger.info(f"Processing statement {pdf_path.name}")
            text = self.read_text(pdf_path)

            year = statement_year
            if year is None:
                year = statement_year_from_text(text)
                if year is None:
                    raise ValidationError(
                        f"No statement year given and no statement period found in {pdf_path.name}"
                    )
                logger.info(f"Using statement year {year} from the statement period")

            result = self.run(text, year)
            result.source_name = pdf_path.name
            logger.info(
                f"Finished {pdf_path.name}: {result.summary.total_transactions} transactions, "
                f"{result.summary.needs_review} need review"
            )
            return result
        finally:
            set_statement_context(None)

    def process_batch(
        self,
        paths: Sequence[Path],
        statement_year: Optional[int] = None,
        max_workers: Optional[int] = None
    ) -> List[BatchItem]:
        """
        Process independent statements in parallel.

        A failed statement is reported in its ``BatchItem`` and does not stop
        the others. Items come back in input order.
        """
        workers = max_workers or self.max_workers
        items: Dict[int, BatchItem] = {}

        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_index = {
                executor.submit(self.process_pdf, Path(path), statement_year): index
                for index, path in enumerate(paths)
            }

            for future in concurrent.futures.as_completed(future_to_index):
                index = future_to_index[future]
                path = Path(paths[index])
                try:
                    items[index] = BatchItem(path=path, result=future.result())
                except StatementFlowError as e:
                    logger.error(f"Failed to process {path.name}: {e}")
                    items[index] = BatchItem(path=path, error=str(e))

        failed = sum(1 for item in items.values() if not item.succeeded)
        logger.info(f"Batch finished: {len(items) - failed} succeeded, {failed} failed")
        return [items[index] for index in range(len(paths))]


def statement_year_from_text(text: str) -> Optional[int]:
    """Year of the statement period printed in the text, if any."""
    return statement_year(extract_account_info(text))
