"""Tests for the command line interface."""
import io
import json
import os
import unittest
import tempfile
import shutil
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from statementflow.main import main

from sample_statement import SAMPLE_STATEMENT


class TestCLI(unittest.TestCase):
    """Test main() commands."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())
        self.statement = self.test_dir / "january.txt"
        self.statement.write_text(SAMPLE_STATEMENT, encoding="utf-8")
        # Keep logs and learned rules inside the temp directory
        self.env = mock.patch.dict(os.environ, {
            "LOCALAPPDATA": str(self.test_dir / "data"),
            "STATEMENTFLOW_LOG_DIR": str(self.test_dir / "logs"),
        })
        self.env.start()

    def tearDown(self):
        """Clean up test fixtures."""
        self.env.stop()
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def run_main(self, *argv):
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            code = main(list(argv))
        return code, stdout.getvalue()

    def test_parse_json_to_stdout(self):
        """Test parse prints one JSON document for one file."""
        code, output = self.run_main("parse", str(self.statement))

        self.assertEqual(code, 0)
        data = json.loads(output)
        self.assertEqual(data["source"], "january.txt")
        self.assertEqual(data["summary"]["totalTransactions"], 8)

    def test_parse_csv_to_file(self):
        """Test CSV output to a file."""
        output = self.test_dir / "out.csv"

        code, _ = self.run_main(
            "parse", str(self.statement), "--year", "2024", "--format", "csv", "--output", str(output)
        )

        self.assertEqual(code, 0)
        self.assertEqual(len(output.read_text(encoding="utf-8").strip().splitlines()), 9)

    def test_parse_missing_file(self):
        """Test a failed statement gives a non-zero exit code."""
        code, _ = self.run_main("parse", str(self.test_dir / "missing.txt"), "--year", "2024")

        self.assertEqual(code, 1)

    def test_add_and_list_rules(self):
        """Test learned rules are stored and applied."""
        code, output = self.run_main(
            "add-rule", "--company", "acme", "--payee", "AMAZON.COM", "--category", "Inventory"
        )
        self.assertEqual(code, 0)
        self.assertIn("Added payee rule", output)

        _, listing = self.run_main("list-rules", "--company", "acme")
        self.assertIn("amazon.com", listing)

        _, parsed = self.run_main("parse", str(self.statement), "--company", "acme")
        categories = {txn["description"]: txn["category"] for txn in json.loads(parsed)["transactions"]}
        self.assertEqual(categories["AMAZON.COM"], "Inventory")

    def test_add_rule_rejects_path_in_company(self):
        """Test a company ID cannot point outside the rules directory."""
        code, _ = self.run_main(
            "add-rule", "--company", "../escaped", "--payee", "Geico", "--category", "Insurance"
        )

        self.assertEqual(code, 1)
        self.assertEqual(list(self.test_dir.rglob("escaped.json")), [])

    def test_usage_errors(self):
        """Test missing arguments exit with usage errors."""
        with redirect_stdout(io.StringIO()), mock.patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit):
                main(["parse"])
            with self.assertRaises(SystemExit):
                main(["list-rules"])
            with self.assertRaises(SystemExit):
                main(["add-rule", "--company", "acme"])


if __name__ == "__main__":
    unittest.main()
