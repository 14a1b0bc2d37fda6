"""Rule-based transaction classifier."""
from decimal import Decimal
from pathlib import Path
from typing import Optional

from statementflow.models import Classification, TransactionType
from statementflow.utils.logger import get_logger
from .categories import CONFIDENCE_HIGH, CONFIDENCE_LEARNED, CONFIDENCE_LOW, UNCATEGORIZED
from .payee_rules import PayeeRuleStore
from .rules import RuleTable, load_rule_table

logger = get_logger()


class TransactionClassifier:
    """Assigns categories with an ordered, first-match-wins rule table."""

    def __init__(
        self,
        rule_table: Optional[RuleTable] = None,
        payee_rules: Optional[PayeeRuleStore] = None,
        company_id: Optional[str] = None,
        rules_path: Optional[Path] = None
    ):
        """
        Initialize classifier.

        Args:
            rule_table: Rule data; loaded from ``rules_path`` (or the packaged
                table) when None
            payee_rules: Optional store of learned payee rules
            company_id: Company whose learned rules apply
            rules_path: JSON rules file used when ``rule_table`` is None
        """
        self.rule_table = rule_table if rule_table is not None else load_rule_table(rules_path)
        if payee_rules is not None and company_id:
            PayeeRuleStore.validate_company_id(company_id)
        self.payee_rules = payee_rules
        self.company_id = company_id

    def classify(
        self,
        description: str,
        amount: Decimal,
        observed_type: TransactionType,
        payee: Optional[str] = None
    ) -> Classification:
        """
        Classify one transaction.

        Learned payee rules are consulted first, then keyword rules, then the
        type-specific heuristics. Anything left is Uncategorized.

        Args:
            description: Normalized transaction description
            amount: Non-negative amount
            observed_type: Direction decided by the section parser
            payee: Extracted payee name, if any

        Returns:
            Classification
        """
        if self.payee_rules is not None and self.company_id and payee:
            category = self.payee_rules.lookup(self.company_id, payee)
            if category:
                return Classification(category, CONFIDENCE_LEARNED, method="payee_rule")

        upper_description = (description or "").upper()

        for rule in self.rule_table.keyword_rules:
            if rule.matches(upper_description):
                return Classification(rule.category, CONFIDENCE_HIGH, rule.subcategory, "keyword")

        for rule in self.rule_table.heuristic_rules:
            if rule.matches(upper_description, amount, observed_type):
                return Classification(rule.category, CONFIDENCE_HIGH, rule.subcategory, "heuristic")

        logger.debug(f"No rule matched: {description}")
        return Classification(UNCATEGORIZED, CONFIDENCE_LOW, method="fallback")
