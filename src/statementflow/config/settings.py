"""Application settings loader from YAML configuration."""
import os
import yaml
from pathlib import Path
from typing import Optional
from dataclasses import dataclass

from statementflow.utils.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "resources" / "config.yaml"


@dataclass
class AppSettings:
    """Application-wide settings loaded from config.yaml."""

    # App info
    app_name: str
    app_version: str

    # Logging
    log_level: str
    log_max_file_size_mb: int
    log_backup_count: int
    log_dir: Optional[str]

    # PDF
    pdf_min_text_length: int

    # Processing
    max_concurrent_statements: int

    # Classification
    rules_file: Optional[str]
    payee_rules_dir: Optional[str]
    fuzzy_match_threshold: int

    @classmethod
    def load(cls, config_path: Path = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            env_path = os.getenv("STATEMENTFLOW_CONFIG")
            config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}

            return cls(
                app_name=config["app"]["name"],
                app_version=str(config["app"]["version"]),
                log_level=config["logging"]["level"],
                log_max_file_size_mb=int(config["logging"]["max_file_size_mb"]),
                log_backup_count=int(config["logging"]["backup_count"]),
                log_dir=config["logging"].get("log_dir") or None,
                pdf_min_text_length=int(config["pdf"]["min_text_length"]),
                max_concurrent_statements=int(config["processing"]["max_concurrent_statements"]),
                rules_file=config["classification"].get("rules_file") or None,
                payee_rules_dir=config["classification"].get("payee_rules_dir") or None,
                fuzzy_match_threshold=int(config["classification"]["fuzzy_match_threshold"])
            )
        except (KeyError, TypeError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e


def validate_settings(settings: AppSettings) -> tuple[bool, str]:
    """Validate settings values."""
    if settings.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        return False, f"Unknown log level: {settings.log_level}"

    if settings.pdf_min_text_length < 1:
        return False, "PDF minimum text length must be at least 1"

    if settings.max_concurrent_statements < 1:
        return False, "Max concurrent statements must be at least 1"

    if settings.fuzzy_match_threshold < 0:
        return False, "Fuzzy match threshold cannot be negative"

    if settings.rules_file and not Path(settings.rules_file).exists():
        return False, f"Rules file not found: {settings.rules_file}"

    return True, "Configuration is valid"


# Global settings instance
_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings.load()
    return _settings
