"""Learned payee-to-category rules, stored per company."""
import json
import re
from collections import Counter, defaultdict
from pathlib import Path
from typing import Dict, Iterable, Optional

import Levenshtein

from statementflow.models import UNCATEGORIZED, ParsedTransaction
from statementflow.utils.exceptions import ValidationError
from statementflow.utils.logger import default_data_dir, get_logger

logger = get_logger()

# Company IDs name files inside the rules directory
COMPANY_ID_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


class PayeeRuleStore:
    """Manages payee-to-category mappings per company with fuzzy matching."""

    def __init__(self, cache_dir: Optional[Path] = None, fuzzy_threshold: int = 3):
        """
        Initialize payee rule store.

        Args:
            cache_dir: Directory holding one JSON file per company
            fuzzy_threshold: Maximum Levenshtein distance for fuzzy match
        """
        self.fuzzy_threshold = fuzzy_threshold
        self.cache_dir = Path(cache_dir) if cache_dir else default_data_dir() / "payee_rules"
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def lookup(self, company_id: str, payee: str) -> Optional[str]:
        """
        Look up category for payee.

        Args:
            company_id: Company identifier
            payee: Payee name

        Returns:
            Category name or None if not found
        """
        mappings = self._load_mappings(company_id)
        if not mappings or not payee:
            return None

        normalized_payee = self._normalize_payee(payee)

        if normalized_payee in mappings:
            logger.debug(f"Exact payee match: {payee} -> {mappings[normalized_payee]}")
            return mappings[normalized_payee]

        best = None
        for cached_payee, category in mappings.items():
            distance = Levenshtein.distance(normalized_payee, cached_payee)
            if distance <= self.fuzzy_threshold and (best is None or distance < best[0]):
                best = (distance, cached_payee, category)

        if best:
            distance, cached_payee, category = best
            logger.debug(
                f"Fuzzy payee match: {payee} -> {cached_payee} "
                f"(distance: {distance}) -> {category}"
            )
            return category

        logger.debug(f"No payee match found for: {payee}")
        return None

    def add_mapping(self, company_id: str, payee: str, category: str) -> bool:
        """
        Add or replace a payee-to-category mapping.

        Args:
            company_id: Company identifier
            payee: Payee name
            category: Category name

        Returns:
            True when the stored mappings changed
        """
        mappings = self._load_mappings(company_id)
        normalized_payee = self._normalize_payee(payee)
        if not normalized_payee or mappings.get(normalized_payee) == category:
            return False

        mappings[normalized_payee] = category
        self._save_mappings(company_id, mappings)
        logger.debug(f"Added payee mapping: {payee} -> {category}")
        return True

    def get_all_mappings(self, company_id: str) -> Dict[str, str]:
        """
        Get all payee mappings for a company.

        Args:
            company_id: Company identifier

        Returns:
            Dictionary of payee -> category mappings
        """
        return self._load_mappings(company_id)

    def train(
        self,
        company_id: str,
        transactions: Iterable[ParsedTransaction],
        min_occurrences: int = 2
    ) -> int:
        """
        Learn mappings from reviewed transactions.

        A payee becomes a rule when it was seen at least ``min_occurrences``
        times with the same category; the most frequent category wins.

        Returns:
            Number of mappings created or changed
        """
        counts: Dict[str, Counter] = defaultdict(Counter)
        for txn in transactions:
            if not txn.payee or not txn.category or txn.category == UNCATEGORIZED:
                continue
            counts[self._normalize_payee(txn.payee)][txn.category] += 1

        changed = 0
        for payee, categories in counts.items():
            category, seen = categories.most_common(1)[0]
            if seen >= min_occurrences and self.add_mapping(company_id, payee, category):
                changed += 1

        logger.info(f"Trained {changed} payee rules for company {company_id}")
        return changed

    def _load_mappings(self, company_id: str) -> Dict[str, str]:
        """Load mappings from file."""
        cache_file = self._company_file(company_id)

        if not cache_file.exists():
            return {}

        try:
            with open(cache_file, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load payee rules for {company_id}: {e}")
            return {}

    def _save_mappings(self, company_id: str, mappings: Dict[str, str]) -> None:
        """Save mappings to file."""
        cache_file = self._company_file(company_id)

        try:
            with open(cache_file, "w", encoding="utf-8") as f:
                json.dump(mappings, f, ensure_ascii=False, indent=2)
        except OSError as e:
            logger.error(f"Failed to save payee rules for {company_id}: {e}")

    @staticmethod
    def validate_company_id(company_id: str) -> str:
        """
        Check that a company ID is a plain file name.

        Raises:
            ValidationError: If the ID is empty or contains path characters
        """
        if not isinstance(company_id, str) or not COMPANY_ID_RE.match(company_id) or ".." in company_id:
            raise ValidationError(f"Invalid company ID: {company_id!r}")
        return company_id

    def _company_file(self, company_id: str) -> Path:
        return self.cache_dir / f"{self.validate_company_id(company_id)}.json"

    @staticmethod
    def _normalize_payee(payee: str) -> str:
        """Normalize payee name for matching."""
        return " ".join(payee.split()).lower()
