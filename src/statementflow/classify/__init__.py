"""Transaction classification."""
from .classifier import TransactionClassifier
from .payee import extract_payee
from .payee_rules import PayeeRuleStore
from .rules import RuleTable, KeywordRule, HeuristicRule, load_rule_table

__all__ = [
    "TransactionClassifier",
    "extract_payee",
    "PayeeRuleStore",
    "RuleTable",
    "KeywordRule",
    "HeuristicRule",
    "load_rule_table",
]
