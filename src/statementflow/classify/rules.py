"""Ordered classification rule tables."""
import json
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from statementflow.models import TransactionType
from statementflow.utils.exceptions import ConfigError
from statementflow.utils.logger import get_logger

logger = get_logger()

DEFAULT_RULES_PATH = Path(__file__).parent.parent / "resources" / "classification_rules.json"


class KeywordRuleSchema(BaseModel):
    """Pydantic schema for one keyword rule."""
    keyword: str = Field(min_length=1)
    category: str = Field(min_length=1)
    subcategory: Optional[str] = None


class HeuristicRuleSchema(BaseModel):
    """Pydantic schema for one type-specific heuristic."""
    type: Literal["income", "expense"]
    keywords: List[str] = Field(min_length=1)
    category: str = Field(min_length=1)
    subcategory: Optional[str] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None

    @field_validator("keywords")
    @classmethod
    def _no_blank_keywords(cls, keywords: List[str]) -> List[str]:
        if any(not k.strip() for k in keywords):
            raise ValueError("heuristic keywords must not be blank")
        return keywords


class RuleTableSchema(BaseModel):
    """Pydantic schema for the rules file."""
    keywords: List[KeywordRuleSchema]
    heuristics: List[HeuristicRuleSchema] = []


@dataclass(frozen=True)
class KeywordRule:
    """Substring keyword mapped to a category."""
    keyword: str
    category: str
    subcategory: Optional[str] = None

    def matches(self, upper_description: str) -> bool:
        return self.keyword.upper() in upper_description


@dataclass(frozen=True)
class HeuristicRule:
    """Fallback keyword check that only applies to one transaction direction."""
    applies_to: TransactionType
    keywords: Tuple[str, ...]
    category: str
    subcategory: Optional[str] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None

    def matches(self, upper_description: str, amount: Decimal, observed_type: TransactionType) -> bool:
        direction = TransactionType.INCOME if observed_type is TransactionType.INCOME else TransactionType.EXPENSE
        if direction is not self.applies_to:
            return False
        if self.min_amount is not None and amount <= self.min_amount:
            return False
        if self.max_amount is not None and amount >= self.max_amount:
            return False
        return any(keyword.upper() in upper_description for keyword in self.keywords)


@dataclass(frozen=True)
class RuleTable:
    """Immutable rule data; order is significant, first match wins."""
    keyword_rules: Tuple[KeywordRule, ...]
    heuristic_rules: Tuple[HeuristicRule, ...] = ()

    @classmethod
    def from_schema(cls, schema: RuleTableSchema) -> "RuleTable":
        return cls(
            keyword_rules=tuple(
                KeywordRule(rule.keyword, rule.category, rule.subcategory)
                for rule in schema.keywords
            ),
            heuristic_rules=tuple(
                HeuristicRule(
                    applies_to=TransactionType(rule.type),
                    keywords=tuple(rule.keywords),
                    category=rule.category,
                    subcategory=rule.subcategory,
                    min_amount=rule.min_amount,
                    max_amount=rule.max_amount,
                )
                for rule in schema.heuristics
            ),
        )


def load_rule_table(rules_path: Optional[Path] = None) -> RuleTable:
    """
    Load and validate a rules file.

    Args:
        rules_path: JSON rules file; the packaged table when None

    Returns:
        RuleTable

    Raises:
        ConfigError: If the file is missing or does not match the schema
    """
    path = Path(rules_path) if rules_path else DEFAULT_RULES_PATH
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to load classification rules from {path}: {e}") from e

    try:
        schema = RuleTableSchema(**data)
    except ValidationError as e:
        raise ConfigError(f"Classification rules in {path} do not match the schema: {e}") from e

    table = RuleTable.from_schema(schema)
    logger.debug(
        f"Loaded {len(table.keyword_rules)} keyword rules and "
        f"{len(table.heuristic_rules)} heuristics from {path.name}"
    )
    return table
