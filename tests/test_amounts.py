"""Tests for currency token helpers."""
import unittest
from decimal import Decimal

from statementflow.parsing.amounts import is_amount_syntax, parse_amount, within_bound


class TestAmounts(unittest.TestCase):
    """Test amount parsing and bounds."""

    def test_parse_amount_spellings(self):
        """Test dollar sign, separators and missing cents."""
        self.assertEqual(parse_amount("$1,234.56"), Decimal("1234.56"))
        self.assertEqual(parse_amount("1234.56"), Decimal("1234.56"))
        self.assertEqual(parse_amount("$1,790"), Decimal("1790.00"))
        self.assertEqual(parse_amount(" 45.9 "), Decimal("45.90"))

    def test_parse_amount_rejects_garbage(self):
        """Test non-numeric and signed tokens."""
        for token in ("", "abc", "-5.00", "1.2.3", None):
            with self.subTest(token=token):
                self.assertIsNone(parse_amount(token))

    def test_amount_syntax(self):
        """Test syntax check used by the concatenation repair."""
        self.assertTrue(is_amount_syntax("2,910.00"))
        self.assertTrue(is_amount_syntax("910.00"))
        self.assertFalse(is_amount_syntax(",910.00"))
        self.assertFalse(is_amount_syntax("1790"))
        self.assertFalse(is_amount_syntax("29,10.00"))

    def test_within_bound(self):
        """Test the exclusive lower and inclusive upper bound."""
        limit = Decimal("50000")
        self.assertTrue(within_bound(Decimal("50000.00"), limit))
        self.assertFalse(within_bound(Decimal("50000.01"), limit))
        self.assertFalse(within_bound(Decimal("0"), limit))
        self.assertFalse(within_bound(None, limit))


if __name__ == "__main__":
    unittest.main()
