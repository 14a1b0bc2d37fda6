"""Transaction summary module."""
from decimal import Decimal
from typing import Dict, Iterable

from statementflow.models import (
    CategorySummary,
    ParsedTransaction,
    StatementSummary,
    TransactionType,
)
from statementflow.utils.logger import get_logger

logger = get_logger()


class Aggregator:
    """Summarizes transactions by direction and category."""

    def summarize(self, transactions: Iterable[ParsedTransaction]) -> StatementSummary:
        """
        Summarize transactions.

        Income is every ``income`` transaction; expenses are ``expense`` and
        ``atm_withdrawal``. A category's ``type`` is the type of the first
        transaction seen for it, so it depends on input order when a category
        holds both directions.

        Args:
            transactions: Parsed transactions, possibly empty

        Returns:
            StatementSummary; all zeros for an empty list
        """
        total_income = Decimal("0")
        total_expenses = Decimal("0")
        needs_review = 0
        count = 0
        categories: Dict[str, CategorySummary] = {}

        for txn in transactions:
            count += 1
            is_income = txn.type is TransactionType.INCOME

            if is_income:
                total_income += txn.amount
            else:
                total_expenses += txn.amount

            if txn.needs_review:
                needs_review += 1

            category = categories.get(txn.category)
            if category is None:
                category = categories[txn.category] = CategorySummary(type=txn.type)
            category.total += txn.amount
            category.count += 1
            if is_income:
                category.income_total += txn.amount
            else:
                category.expense_total += txn.amount

        summary = StatementSummary(
            total_transactions=count,
            total_income=total_income,
            total_expenses=total_expenses,
            category_summary=categories,
            needs_review=needs_review,
        )
        summary.net_income = summary.total_income - summary.total_expenses

        logger.info(
            f"Summarized {count} transactions into {len(categories)} categories "
            f"(income {total_income:.2f}, expenses {total_expenses:.2f})"
        )
        return summary
