"""Tests for the check line parser."""
import unittest
from datetime import datetime
from decimal import Decimal

from statementflow.models import TransactionType
from statementflow.parsing.parsers import CheckLineParser

YEAR = 2024


class TestCheckLineParser(unittest.TestCase):
    """Test CheckLineParser functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.parser = CheckLineParser()

    def test_two_dates_second_wins(self):
        """Test the paid date is used when two dates are printed."""
        txn = self.parser.parse("538 * ^ 01/15 01/19 2,500.00", YEAR)

        self.assertIsNotNone(txn)
        self.assertEqual(txn.date, datetime(2024, 1, 19, 12, 0, 0))
        self.assertEqual(txn.description, "CHECK #538")
        self.assertEqual(txn.amount, Decimal("2500.00"))
        self.assertIs(txn.type, TransactionType.EXPENSE)
        self.assertEqual(txn.source, "chase_checks")

    def test_single_date(self):
        """Test a check with one date and a dollar sign."""
        txn = self.parser.parse("1001 01/05 $150.00", YEAR)

        self.assertEqual(txn.date, datetime(2024, 1, 5, 12, 0, 0))
        self.assertEqual(txn.description, "CHECK #1001")
        self.assertEqual(txn.amount, Decimal("150.00"))

    def test_checks_have_no_payee(self):
        """Test checks carry no payee and are routed to review."""
        txn = self.parser.parse("1001 01/05 $150.00", YEAR)

        self.assertIsNone(txn.payee)
        self.assertTrue(txn.needs_review)

    def test_bound(self):
        """Test the 100,000 upper bound is inclusive."""
        self.assertIsNotNone(self.parser.parse("1002 01/05 100,000.00", YEAR))
        self.assertIsNone(self.parser.parse("1003 01/05 100,000.01", YEAR))
        self.assertIsNone(self.parser.parse("1004 01/05 150,000.00", YEAR))

    def test_non_check_lines(self):
        """Test lines that are not checks return None."""
        for line in (
            "Total Checks Paid $2,500.00",
            "CHECK NO. DESCRIPTION DATE PAID AMOUNT",
            "01/15 Card Purchase 01/14 AMAZON.COM NY Card 1234 $45.99",
            "538 01/15",
            "538 02/30 25.00",
        ):
            with self.subTest(line=line):
                self.assertIsNone(self.parser.parse(line, YEAR))


if __name__ == "__main__":
    unittest.main()
