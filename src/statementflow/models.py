"""Data models shared by the statement pipeline stages."""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

UNCATEGORIZED = "Uncategorized"

# Below this confidence a transaction is routed to manual review
REVIEW_THRESHOLD = 0.5


class SectionKind(str, Enum):
    """Statement sections that carry transactions."""
    DEPOSITS = "deposits"
    CHECKS = "checks"
    CARD = "card"
    ELECTRONIC = "electronic"


class TransactionType(str, Enum):
    """Direction of a transaction; amounts themselves are never negative."""
    INCOME = "income"
    EXPENSE = "expense"
    ATM_WITHDRAWAL = "atm_withdrawal"


@dataclass(frozen=True)
class SectionSlice:
    """Text of one statement section, header line included."""
    kind: SectionKind
    text: str


@dataclass(frozen=True)
class Classification:
    """Category assigned to a description."""
    category: str
    confidence: float
    subcategory: Optional[str] = None
    method: str = "fallback"


@dataclass(frozen=True)
class ParsedTransaction:
    """Transaction recovered from statement text."""
    date: datetime
    amount: Decimal
    description: str
    type: TransactionType
    category: str
    confidence: float
    source: str
    subcategory: Optional[str] = None
    payee: Optional[str] = None

    @property
    def needs_review(self) -> bool:
        return (
            self.category == UNCATEGORIZED
            or self.confidence < REVIEW_THRESHOLD
            or not self.payee
        )

    @property
    def dedup_key(self) -> tuple:
        return (self.date, self.amount, self.description)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "amount": f"{self.amount:.2f}",
            "description": self.description,
            "type": self.type.value,
            "category": self.category,
            "subcategory": self.subcategory,
            "confidence": self.confidence,
            "needsReview": self.needs_review,
            "payee": self.payee,
            "source": self.source,
        }


@dataclass
class CategorySummary:
    """Per-category totals.

    ``type`` is the type of the first transaction folded into the category;
    ``income_total`` and ``expense_total`` carry the split when a category
    receives both directions.
    """
    total: Decimal = Decimal("0")
    count: int = 0
    type: Optional[TransactionType] = None
    income_total: Decimal = Decimal("0")
    expense_total: Decimal = Decimal("0")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": f"{self.total:.2f}",
            "count": self.count,
            "type": self.type.value if self.type else None,
            "incomeTotal": f"{self.income_total:.2f}",
            "expenseTotal": f"{self.expense_total:.2f}",
        }


@dataclass
class StatementSummary:
    """Aggregate over a list of transactions."""
    total_transactions: int = 0
    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net_income: Decimal = Decimal("0")
    category_summary: Dict[str, CategorySummary] = field(default_factory=dict)
    needs_review: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalTransactions": self.total_transactions,
            "totalIncome": f"{self.total_income:.2f}",
            "totalExpenses": f"{self.total_expenses:.2f}",
            "netIncome": f"{self.net_income:.2f}",
            "categorySummary": {
                name: summary.to_dict() for name, summary in self.category_summary.items()
            },
            "needsReview": self.needs_review,
        }


@dataclass(frozen=True)
class AccountInfo:
    """Statement header details."""
    account_number: Optional[str] = None
    period_start: Optional[str] = None
    period_end: Optional[str] = None
    beginning_balance: Optional[Decimal] = None
    ending_balance: Optional[Decimal] = None
    company_name: Optional[str] = None
    address: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "companyName": self.company_name,
            "address": self.address,
            "accountNumber": self.account_number,
            "statementPeriod": (
                {"start": self.period_start, "end": self.period_end}
                if self.period_start or self.period_end else None
            ),
            "beginningBalance": (
                f"{self.beginning_balance:.2f}" if self.beginning_balance is not None else None
            ),
            "endingBalance": (
                f"{self.ending_balance:.2f}" if self.ending_balance is not None else None
            ),
        }


@dataclass
class StatementResult:
    """Output of one pipeline run."""
    transactions: List[ParsedTransaction]
    summary: StatementSummary
    account_info: AccountInfo = field(default_factory=AccountInfo)
    sections_found: Dict[str, bool] = field(default_factory=dict)
    source_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source_name,
            "accountInfo": self.account_info.to_dict(),
            "sectionsFound": dict(self.sections_found),
            "transactions": [txn.to_dict() for txn in self.transactions],
            "summary": self.summary.to_dict(),
        }
