"""Tests for the date normalizer."""
import unittest
from datetime import datetime

from statementflow.parsing.dates import to_calendar_date


class TestToCalendarDate(unittest.TestCase):
    """Test to_calendar_date()."""

    def test_slash_date_at_noon(self):
        """Test MM/DD becomes a noon timestamp in the given year."""
        self.assertEqual(to_calendar_date("01/08", 2024), datetime(2024, 1, 8, 12, 0, 0))

    def test_dash_and_unpadded(self):
        """Test MM-DD and single-digit components."""
        self.assertEqual(to_calendar_date("1-5", 2023), datetime(2023, 1, 5, 12, 0, 0))

    def test_invalid_dates(self):
        """Test zero, missing and impossible components."""
        for value in ("00/10", "01/00", "13/01", "02/30", "", None, "abc", "01/08/2024"):
            with self.subTest(value=value):
                self.assertIsNone(to_calendar_date(value, 2024))

    def test_leap_day_depends_on_year(self):
        """Test Feb 29 is valid only in leap years."""
        self.assertIsNotNone(to_calendar_date("02/29", 2024))
        self.assertIsNone(to_calendar_date("02/29", 2023))


if __name__ == "__main__":
    unittest.main()
