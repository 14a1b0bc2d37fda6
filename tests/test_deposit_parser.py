"""Tests for the deposit line parser."""
import unittest
from datetime import datetime
from decimal import Decimal

from statementflow.classify.categories import BUSINESS_INCOME
from statementflow.models import TransactionType
from statementflow.parsing.parsers import DepositLineParser

YEAR = 2024


class TestDepositLineParser(unittest.TestCase):
    """Test DepositLineParser functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.parser = DepositLineParser()

    def test_dollar_amount_after_count(self):
        """Test '1 $3,640.00' keeps the 1 in the description."""
        txn = self.parser.parse("01/08 Remote Online Deposit 1 $3,640.00", YEAR)

        self.assertIsNotNone(txn)
        self.assertEqual(txn.date, datetime(2024, 1, 8, 12, 0, 0))
        self.assertEqual(txn.amount, Decimal("3640.00"))
        self.assertIn("Remote Online Deposit", txn.description)
        self.assertIs(txn.type, TransactionType.INCOME)
        self.assertEqual(txn.source, "chase_deposits")

    def test_bare_amount_after_count(self):
        """Test '1 2,500.00' is 2,500.00, not 12,500.00."""
        txn = self.parser.parse("01/19 Remote Online Deposit 1 2,500.00", YEAR)

        self.assertEqual(txn.amount, Decimal("2500.00"))
        self.assertEqual(txn.description, "Remote Online Deposit 1")

    def test_concatenated_count_is_repaired(self):
        """Test 'Deposit 12,910.00' splits into 'Deposit 1' and 2,910.00."""
        txn = self.parser.parse("01/22 Remote Online Deposit 12,910.00", YEAR)

        self.assertEqual(txn.amount, Decimal("2910.00"))
        self.assertEqual(txn.description, "Remote Online Deposit 1")

    def test_concatenated_count_without_separator(self):
        """Test the repair also applies to amounts without thousands separator."""
        txn = self.parser.parse("01/22 Remote Online Deposit 1450.00", YEAR)

        self.assertEqual(txn.amount, Decimal("450.00"))
        self.assertEqual(txn.description, "Remote Online Deposit 1")

    def test_no_repair_for_other_descriptions(self):
        """Test amounts starting with 1 stay intact outside the Deposit idiom."""
        txn = self.parser.parse("01/22 Wire Transfer From Acme 12,910.00", YEAR)

        self.assertEqual(txn.amount, Decimal("12910.00"))
        self.assertEqual(txn.description, "Wire Transfer From Acme")

    def test_no_repair_with_dollar_sign(self):
        """Test a dollar sign separates the amount unambiguously."""
        txn = self.parser.parse("01/22 Remote Online Deposit $12,910.00", YEAR)

        self.assertEqual(txn.amount, Decimal("12910.00"))

    def test_no_repair_when_remainder_invalid(self):
        """Test '1,250.00' is a real amount: the remainder starts with a comma."""
        txn = self.parser.parse("01/22 Remote Online Deposit 1,250.00", YEAR)

        self.assertEqual(txn.amount, Decimal("1250.00"))
        self.assertEqual(txn.description, "Remote Online Deposit")

    def test_bound_checked_after_repair(self):
        """Test the repaired amount is still bounded."""
        self.assertIsNone(self.parser.parse("01/22 Remote Online Deposit 160,000.00", YEAR))
        self.assertIsNone(self.parser.parse("01/22 Wire Transfer 60,000.00", YEAR))

    def test_dollar_amount_without_cents(self):
        """Test '$1,790' parses as 1790.00."""
        txn = self.parser.parse("02/01 Zelle Payment From Client $1,790", YEAR)

        self.assertEqual(txn.amount, Decimal("1790.00"))

    def test_missing_space_after_date(self):
        """Test extraction that glued the date to the description."""
        txn = self.parser.parse("01/08Remote Online Deposit 1 $3,640.00", YEAR)

        self.assertEqual(txn.description, "Remote Online Deposit 1")
        self.assertEqual(txn.amount, Decimal("3640.00"))

    def test_classified_as_business_income(self):
        """Test deposits go through the classifier."""
        txn = self.parser.parse("01/08 Remote Online Deposit 1 $3,640.00", YEAR)

        self.assertEqual(txn.category, BUSINESS_INCOME)
        self.assertEqual(txn.confidence, 0.8)
        self.assertFalse(txn.needs_review)

    def test_ach_credit_reduced_to_company(self):
        """Test an ACH credit keeps only the originating company."""
        txn = self.parser.parse(
            "01/05 Orig CO Name:Stripe Orig ID:1800948598 Desc Date:240105 "
            "CO Entry Descr:Transfer Sec:CCD $1,234.56",
            YEAR
        )

        self.assertIsNotNone(txn)
        self.assertEqual(txn.description, "Stripe")
        self.assertEqual(txn.payee, "Stripe")
        self.assertEqual(txn.amount, Decimal("1234.56"))
        self.assertIs(txn.type, TransactionType.INCOME)

    def test_ach_company_without_orig_id(self):
        """Test filler fields after the company name are dropped."""
        txn = self.parser.parse(
            "01/06 Orig CO Name:Square Inc Desc Date:240106 Sec:CCD 845.10", YEAR
        )

        self.assertEqual(txn.description, "Square Inc")
        self.assertEqual(txn.amount, Decimal("845.10"))

    def test_ach_filler_without_company(self):
        """Test trace and originator fields are stripped from other deposits."""
        txn = self.parser.parse(
            "01/07 Book Transfer Credit Trace#:021000021234567 Orig ID:1800948598 $500.00", YEAR
        )

        self.assertEqual(txn.description, "Book Transfer Credit")

    def test_non_transaction_lines(self):
        """Test lines that are not deposits return None."""
        for line in (
            "Total Deposits and Additions $9,050.00",
            "Remote Online Deposit 1 $3,640.00",
            "13/40 Remote Online Deposit 100.00",
            "01/08 Remote Online Deposit",
            "01/08 Remote Online Deposit $0.00",
            "",
        ):
            with self.subTest(line=line):
                self.assertIsNone(self.parser.parse(line, YEAR))

    def test_parse_lines_skips_non_matches(self):
        """Test parse_lines keeps only transaction lines, in order."""
        transactions = self.parser.parse_lines(
            [
                "01/08 Remote Online Deposit 1 $3,640.00",
                "Page 2 of 4",
                "01/19 Remote Online Deposit 1 2,500.00",
            ],
            YEAR
        )

        self.assertEqual([t.amount for t in transactions], [Decimal("3640.00"), Decimal("2500.00")])


if __name__ == "__main__":
    unittest.main()
