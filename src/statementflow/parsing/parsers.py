"""Line parsers for the four Chase transaction sections.

Each parser turns one candidate line into a ``ParsedTransaction`` or returns
None when the line is not a transaction of its kind. None is the normal
outcome for stray lines; parsers never raise on input text.
"""
import itertools
import re
from decimal import Decimal
from typing import List, Optional, Sequence

from statementflow.classify.categories import ATM_WITHDRAWAL, CONFIDENCE_CERTAIN
from statementflow.classify.classifier import TransactionClassifier
from statementflow.classify.payee import extract_payee
from statementflow.models import (
    Classification,
    ParsedTransaction,
    SectionKind,
    TransactionType,
)
from statementflow.utils.logger import get_logger
from .amounts import is_amount_syntax, parse_amount, within_bound
from .constants import (
    AMOUNT_TOKEN,
    BARE_AMOUNT_LINE_RE,
    DATE_PREFIX_RE,
    DATE_TOKEN,
    DOLLAR_AMOUNT_TOKEN,
    ELECTRONIC_LOOKAHEAD_LINES,
    MAX_AMOUNTS,
    SOURCE_TAGS,
)
from .dates import to_calendar_date
from .segmenter import is_total_line

logger = get_logger()


ORIG_COMPANY_PATTERN = r"Orig CO Name:\s*(.+?)(?=\s*\bOrig\b|$)"
ORIG_COMPANY_RE = re.compile(ORIG_COMPANY_PATTERN)
_COMPANY_ID_RE = re.compile(r"\s+ID:.*$")
# ACH record fields that carry no payee information
_ACH_FILLER_RE = re.compile(
    r"\b(?:Orig ID|Desc Date|CO Entry Descr|Trace#|Sec|Eed|Ind ID|Ind Name|Trn)\s*:\s*\S*",
    re.IGNORECASE
)


def _squash(text: str) -> str:
    return " ".join(text.split())


def strip_ach_filler(text: str) -> str:
    """Drop ``Orig ID:``, ``Desc Date:``, ``Trace#:`` and similar ACH fields."""
    return _squash(_ACH_FILLER_RE.sub(" ", text))


def ach_company_name(text: str) -> Optional[str]:
    """
    Company named by ``Orig CO Name:`` in an ACH record.

    Args:
        text: Line or description holding the ACH fields

    Returns:
        Company name, or None when the text has no usable ``Orig CO Name:``
    """
    match = ORIG_COMPANY_RE.search(text)
    if not match:
        return None
    company = strip_ach_filler(_COMPANY_ID_RE.sub("", match.group(1)))
    return company or None


class LineParser:
    """Base class: shared classification and record building."""

    kind: SectionKind = None

    def __init__(self, classifier: Optional[TransactionClassifier] = None):
        self.classifier = classifier or TransactionClassifier()
        self.max_amount: Decimal = MAX_AMOUNTS[self.kind]
        self.source = SOURCE_TAGS[self.kind]

    def parse(self, line: str, year: int) -> Optional[ParsedTransaction]:
        raise NotImplementedError

    def parse_lines(self, lines: Sequence[str], year: int) -> List[ParsedTransaction]:
        """Parse every candidate line, skipping non-matches."""
        transactions = []
        for line in lines:
            txn = self.parse(line, year)
            if txn is None:
                logger.debug(f"Skipped {self.kind.value} line: {line}")
                continue
            transactions.append(txn)
        return transactions

    def _build(
        self,
        date_token: str,
        year: int,
        amount: Decimal,
        description: str,
        txn_type: TransactionType,
        payee: Optional[str] = None,
        classification: Optional[Classification] = None
    ) -> Optional[ParsedTransaction]:
        date = to_calendar_date(date_token, year)
        if date is None:
            return None

        if classification is None:
            classification = self.classifier.classify(description, amount, txn_type, payee=payee)

        return ParsedTransaction(
            date=date,
            amount=amount,
            description=description,
            type=txn_type,
            category=classification.category,
            subcategory=classification.subcategory,
            confidence=classification.confidence,
            source=self.source,
            payee=payee,
        )


class DepositLineParser(LineParser):
    """``MM/DD <description> [$]<amount>`` lines of DEPOSITS AND ADDITIONS."""

    kind = SectionKind.DEPOSITS

    LINE_RE = re.compile(
        rf"^({DATE_TOKEN})\s*(.+?)\s*"
        rf"(?:\$\s*({DOLLAR_AMOUNT_TOKEN})|(?<![\d,])({AMOUNT_TOKEN}))\s*$"
    )
    # "Remote Online Deposit 1 2,910.00" loses its space and reads "Deposit 12,910.00"
    REPAIRABLE_DESCRIPTION_RE = re.compile(r"\bDeposit$", re.IGNORECASE)

    def parse(self, line: str, year: int) -> Optional[ParsedTransaction]:
        """
        Parse a deposit line.

        Args:
            line: Candidate line
            year: Statement year

        Returns:
            Income transaction, or None
        """
        match = self.LINE_RE.match(line.strip())
        if not match:
            return None

        date_token, description = match.group(1), _squash(match.group(2))
        dollar_token, bare_token = match.group(3), match.group(4)

        if bare_token is not None:
            description, token = self._repair_concatenation(description, bare_token)
        else:
            token = dollar_token

        amount = parse_amount(token)
        if not within_bound(amount, self.max_amount):
            return None

        # ACH credits keep only the originating company
        description = ach_company_name(description) or strip_ach_filler(description)
        if not description:
            return None

        return self._build(
            date_token, year, amount, description, TransactionType.INCOME,
            payee=extract_payee(description)
        )

    def _repair_concatenation(self, description: str, token: str) -> tuple:
        """Move a leading ``1`` from the amount back onto ``... Deposit``."""
        if not token.startswith("1") or len(token) < 2:
            return description, token

        remainder = token[1:]
        if remainder[0] in "0," or not is_amount_syntax(remainder):
            return description, token
        if not self.REPAIRABLE_DESCRIPTION_RE.search(description):
            return description, token

        logger.debug(f"Repaired concatenated deposit amount: {token} -> {remainder}")
        return f"{description} 1", remainder


class CheckLineParser(LineParser):
    """``<check#> [markers] MM/DD [MM/DD] [$]<amount>`` lines of CHECKS PAID."""

    kind = SectionKind.CHECKS

    LINE_RE = re.compile(
        rf"^(\d+)\s*(?:[^\w\s/-]\s*)*({DATE_TOKEN})(?:\s+({DATE_TOKEN}))?\s+\$?({AMOUNT_TOKEN})\s*$"
    )

    def parse(self, line: str, year: int) -> Optional[ParsedTransaction]:
        match = self.LINE_RE.match(line.strip())
        if not match:
            return None

        check_number = match.group(1)
        # Issue date then paid date; the paid date is the one that counts
        date_token = match.group(3) or match.group(2)

        amount = parse_amount(match.group(4))
        if not within_bound(amount, self.max_amount):
            return None

        return self._build(
            date_token, year, amount, f"CHECK #{int(check_number)}", TransactionType.EXPENSE
        )


class CardLineParser(LineParser):
    """Card purchases and non-Chase ATM withdrawals."""

    kind = SectionKind.CARD

    # State codes stay case-sensitive; only the marker words ignore case
    PURCHASE_RE = re.compile(
        rf"^({DATE_TOKEN})\s*(?i:Recurring\s+)?(?i:Card Purchase)(?i:\s+With Pin)?\s*"
        rf"(?:{DATE_TOKEN}\s+)?(.+?)\s+([A-Z]{{2}})\s+Card\s+(\d{{4}})\s*\$?({AMOUNT_TOKEN})\s*$"
    )
    ATM_RE = re.compile(
        rf"^({DATE_TOKEN})\s*(?i:Non-Chase ATM Withdraw(?:al)?)\s*"
        rf"(?:{DATE_TOKEN}\s+)?(.*?)\s*(?:\b([A-Z]{{2}})\s+)?Card\s+(\d{{4}})\s*\$?({AMOUNT_TOKEN})\s*$"
    )

    _LONG_ID_RE = re.compile(r"\s+\d{7,}(?=\s|$)")
    _TRAILING_STATE_RE = re.compile(r"\s+[A-Z]{2}$")
    _TRAILING_ID_AND_CITY_RE = re.compile(r"\s+#?\d{3,}(?:\s+[A-Za-z.']+){0,3}$")

    # Ordered: the first matching pattern decides the display name
    BRANDS = (
        (re.compile(r"Chevron\s*/\s*Sunshine", re.I), "Chevron/Sunshine"),
        (re.compile(r"Chevron", re.I), "Chevron"),
        (re.compile(r"Exxon.*Sunshine|Sunshine.*Exxon", re.I), "Exxon Sunshine"),
        (re.compile(r"Exxon", re.I), "Exxon"),
        (re.compile(r"Sunshine\s*#?\s*(\d+)", re.I), "Sunshine #{0}"),
        (re.compile(r"Sunshine", re.I), "Sunshine"),
        (re.compile(r"Lowe'?s\s*#\s*(\d+)", re.I), "Lowe's #{0}"),
        (re.compile(r"Lowe'?s", re.I), "Lowe's"),
        (re.compile(r"Westar\s+(\d+)", re.I), "Westar {0}"),
        (re.compile(r"Westar", re.I), "Westar"),
    )

    MIN_MERCHANT_LENGTH = 2
    DEFAULT_MERCHANT = "Card Purchase"

    def parse(self, line: str, year: int) -> Optional[ParsedTransaction]:
        """
        Parse a card-section line.

        Args:
            line: Candidate line
            year: Statement year

        Returns:
            Expense or ATM withdrawal, or None
        """
        text = line.strip()

        atm = self.ATM_RE.match(text)
        if atm:
            return self._parse_atm(atm, year)

        match = self.PURCHASE_RE.match(text)
        if not match:
            return None

        amount = parse_amount(match.group(5))
        if not within_bound(amount, self.max_amount):
            return None

        merchant = self.normalize_merchant(match.group(2))
        return self._build(
            match.group(1), year, amount, merchant, TransactionType.EXPENSE, payee=merchant
        )

    def _parse_atm(self, match, year: int) -> Optional[ParsedTransaction]:
        amount = parse_amount(match.group(5))
        if not within_bound(amount, self.max_amount):
            return None

        location = _squash(match.group(2))
        description = f"Non-Chase ATM Withdrawal {location}".strip()
        classification = Classification(
            ATM_WITHDRAWAL, CONFIDENCE_CERTAIN, subcategory="Cash", method="structural"
        )
        return self._build(
            match.group(1), year, amount, description, TransactionType.ATM_WITHDRAWAL,
            payee="Non-Chase ATM", classification=classification
        )

    @classmethod
    def normalize_merchant(cls, raw: str) -> str:
        """
        Clean a merchant string captured from a card line.

        Args:
            raw: Text between the purchase marker and the state code

        Returns:
            Display name; ``Card Purchase`` when nothing usable is left
        """
        merchant = _squash(cls._LONG_ID_RE.sub(" ", raw))
        merchant = cls._TRAILING_STATE_RE.sub("", merchant).strip()

        for pattern, template in cls.BRANDS:
            brand = pattern.search(merchant)
            if brand:
                merchant = template.format(*brand.groups())
                break
        else:
            merchant = cls._TRAILING_ID_AND_CITY_RE.sub("", merchant).strip()

        if len(merchant) < cls.MIN_MERCHANT_LENGTH:
            return cls.DEFAULT_MERCHANT
        return merchant


class ElectronicLineParser(LineParser):
    """Multi-line ``Orig CO Name:`` records of ELECTRONIC WITHDRAWALS."""

    kind = SectionKind.ELECTRONIC

    LINE_RE = re.compile(rf"^({DATE_TOKEN})\b.*?{ORIG_COMPANY_PATTERN}")
    TRAILING_AMOUNT_RE = re.compile(rf"\s\$?\s*({AMOUNT_TOKEN})\s*$")

    def __init__(
        self,
        classifier: Optional[TransactionClassifier] = None,
        lookahead: int = ELECTRONIC_LOOKAHEAD_LINES
    ):
        super().__init__(classifier)
        self.lookahead = lookahead

    def parse(
        self,
        line: str,
        year: int,
        following: Sequence[str] = ()
    ) -> Optional[ParsedTransaction]:
        """
        Parse an electronic withdrawal starting at ``line``.

        Args:
            line: Line carrying the date and ``Orig CO Name:``
            year: Statement year
            following: Lines after ``line``, searched for the amount when it
                is not on the same line

        Returns:
            Expense transaction, or None
        """
        text = line.strip()
        match = self.LINE_RE.match(text)
        if not match:
            return None

        company = strip_ach_filler(_COMPANY_ID_RE.sub("", match.group(2)))
        company = self.TRAILING_AMOUNT_RE.sub("", company).strip()
        if not company:
            return None

        amount = self._find_amount(text, following)
        if not within_bound(amount, self.max_amount):
            return None

        description = f"Electronic Payment: {company}"
        return self._build(
            match.group(1), year, amount, description, TransactionType.EXPENSE, payee=company
        )

    def parse_lines(self, lines: Sequence[str], year: int) -> List[ParsedTransaction]:
        transactions = []
        for index, line in enumerate(lines):
            txn = self.parse(line, year, lines[index + 1:index + 1 + self.lookahead])
            if txn is None:
                logger.debug(f"Skipped {self.kind.value} line: {line}")
                continue
            transactions.append(txn)
        return transactions

    def _find_amount(self, text: str, following: Sequence[str]) -> Optional[Decimal]:
        """Same-line trailing amount, else the first bare amount line ahead."""
        trailing = self.TRAILING_AMOUNT_RE.search(text)
        if trailing:
            return parse_amount(trailing.group(1))

        for next_line in itertools.islice(following, self.lookahead):
            candidate = next_line.strip()
            if DATE_PREFIX_RE.match(candidate) or is_total_line(candidate, self.kind):
                break
            bare = BARE_AMOUNT_LINE_RE.match(candidate)
            if bare:
                return parse_amount(bare.group(1))
        return None


PARSER_TYPES = {
    SectionKind.DEPOSITS: DepositLineParser,
    SectionKind.CHECKS: CheckLineParser,
    SectionKind.CARD: CardLineParser,
    SectionKind.ELECTRONIC: ElectronicLineParser,
}


def build_parsers(classifier: Optional[TransactionClassifier] = None) -> dict:
    """One parser per section kind, sharing a classifier."""
    classifier = classifier or TransactionClassifier()
    return {kind: parser_type(classifier) for kind, parser_type in PARSER_TYPES.items()}
