"""Tests for JSON and CSV output."""
import csv
import json
import unittest
import tempfile
import shutil
from pathlib import Path

from statementflow.export.writer import CSV_COLUMNS, write_csv, write_json
from statementflow.orchestrator.pipeline import StatementPipeline

from sample_statement import SAMPLE_STATEMENT, SAMPLE_YEAR


class TestWriters(unittest.TestCase):
    """Test write_json() and write_csv()."""

    @classmethod
    def setUpClass(cls):
        """Parse the sample statement once."""
        cls.result = StatementPipeline().run(SAMPLE_STATEMENT, SAMPLE_YEAR)

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_write_json(self):
        """Test the JSON document layout."""
        path = self.test_dir / "out" / "result.json"

        write_json(self.result, path)
        data = json.loads(path.read_text(encoding="utf-8"))

        self.assertEqual(len(data["transactions"]), 8)
        self.assertEqual(data["summary"]["netIncome"], "5976.01")
        self.assertEqual(data["accountInfo"]["accountNumber"], "000000123456789")
        first = data["transactions"][0]
        self.assertEqual(first["date"], "2024-01-08T12:00:00")
        self.assertEqual(first["amount"], "3640.00")
        self.assertFalse(first["needsReview"])

    def test_write_json_list(self):
        """Test several results are written as a list."""
        path = self.test_dir / "results.json"

        write_json([self.result, self.result], path)

        self.assertEqual(len(json.loads(path.read_text(encoding="utf-8"))), 2)

    def test_write_csv(self):
        """Test one CSV row per transaction."""
        path = self.test_dir / "result.csv"

        write_csv(self.result.transactions, path)
        with open(path, newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            rows = list(reader)

        self.assertEqual(reader.fieldnames, CSV_COLUMNS)
        self.assertEqual(len(rows), 8)
        self.assertEqual(rows[0]["description"], "Remote Online Deposit 1")


if __name__ == "__main__":
    unittest.main()
