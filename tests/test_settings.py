"""Tests for application settings."""
import os
import unittest
import tempfile
import shutil
from pathlib import Path
from unittest import mock

from statementflow.config.settings import AppSettings, validate_settings
from statementflow.utils.exceptions import ConfigError

VALID_YAML = """\
app:
  name: StatementFlow
  version: 2.1
logging:
  level: DEBUG
  max_file_size_mb: 5
  backup_count: 3
  log_dir: ""
pdf:
  min_text_length: 80
processing:
  max_concurrent_statements: 2
classification:
  rules_file: ""
  payee_rules_dir: /tmp/payees
  fuzzy_match_threshold: 2
"""


class TestAppSettings(unittest.TestCase):
    """Test AppSettings loading and validation."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())
        self.config_file = self.test_dir / "config.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_load_packaged_defaults(self):
        """Test the packaged config.yaml loads."""
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop("STATEMENTFLOW_CONFIG", None)
            settings = AppSettings.load()

        self.assertEqual(settings.app_name, "StatementFlow")
        self.assertEqual(settings.pdf_min_text_length, 50)
        self.assertEqual(settings.fuzzy_match_threshold, 3)
        self.assertIsNone(settings.rules_file)

    def test_load_custom_file(self):
        """Test values are read from a given file."""
        self.config_file.write_text(VALID_YAML, encoding="utf-8")

        settings = AppSettings.load(self.config_file)

        self.assertEqual(settings.app_version, "2.1")
        self.assertEqual(settings.log_level, "DEBUG")
        self.assertEqual(settings.max_concurrent_statements, 2)
        self.assertEqual(settings.payee_rules_dir, "/tmp/payees")
        self.assertIsNone(settings.log_dir)

    def test_env_override(self):
        """Test STATEMENTFLOW_CONFIG points at another file."""
        self.config_file.write_text(VALID_YAML, encoding="utf-8")

        with mock.patch.dict(os.environ, {"STATEMENTFLOW_CONFIG": str(self.config_file)}):
            settings = AppSettings.load()

        self.assertEqual(settings.pdf_min_text_length, 80)

    def test_missing_file(self):
        """Test a missing file raises ConfigError."""
        with self.assertRaises(ConfigError):
            AppSettings.load(self.test_dir / "missing.yaml")

    def test_missing_key(self):
        """Test a missing section raises ConfigError."""
        self.config_file.write_text("app:\n  name: X\n  version: 1\n", encoding="utf-8")

        with self.assertRaises(ConfigError):
            AppSettings.load(self.config_file)

    def test_validate_valid(self):
        """Test validation with valid settings."""
        self.config_file.write_text(VALID_YAML, encoding="utf-8")

        is_valid, message = validate_settings(AppSettings.load(self.config_file))

        self.assertTrue(is_valid)

    def test_validate_invalid_values(self):
        """Test validation catches bad values."""
        self.config_file.write_text(VALID_YAML, encoding="utf-8")
        settings = AppSettings.load(self.config_file)

        settings.log_level = "LOUD"
        is_valid, message = validate_settings(settings)
        self.assertFalse(is_valid)
        self.assertIn("log level", message)

        settings.log_level = "INFO"
        settings.max_concurrent_statements = 0
        self.assertFalse(validate_settings(settings)[0])

        settings.max_concurrent_statements = 1
        settings.rules_file = str(self.test_dir / "missing.json")
        self.assertFalse(validate_settings(settings)[0])


if __name__ == "__main__":
    unittest.main()
