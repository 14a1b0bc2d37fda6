"""JSON and CSV output for parsed statements."""
import csv
import json
from pathlib import Path
from typing import Iterable, List, Union

from statementflow.models import ParsedTransaction, StatementResult
from statementflow.utils.exceptions import StatementFlowError
from statementflow.utils.logger import get_logger

logger = get_logger()

CSV_COLUMNS = [
    "date",
    "amount",
    "description",
    "type",
    "category",
    "subcategory",
    "confidence",
    "needsReview",
    "payee",
    "source",
]


def results_to_json(results: Union[StatementResult, List[StatementResult]]) -> str:
    """Serialize one result as an object, several as a list."""
    if isinstance(results, StatementResult):
        payload = results.to_dict()
    else:
        payload = [result.to_dict() for result in results]
    return json.dumps(payload, ensure_ascii=False, indent=2)


def write_json(results: Union[StatementResult, List[StatementResult]], path: Path) -> None:
    """
    Write results as JSON.

    Args:
        results: One StatementResult or a list of them
        path: Output file

    Raises:
        StatementFlowError: If the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(results_to_json(results) + "\n", encoding="utf-8")
    except OSError as e:
        raise StatementFlowError(f"Failed to write {path}: {e}") from e
    logger.info(f"Wrote JSON output to {path}")


def write_csv_rows(transactions: Iterable[ParsedTransaction], stream) -> int:
    """Write a header and one row per transaction to an open text stream."""
    writer = csv.DictWriter(stream, fieldnames=CSV_COLUMNS)
    writer.writeheader()
    count = 0
    for txn in transactions:
        writer.writerow(txn.to_dict())
        count += 1
    return count


def write_csv(transactions: Iterable[ParsedTransaction], path: Path) -> None:
    """
    Write transactions as CSV.

    Args:
        transactions: Parsed transactions
        path: Output file

    Raises:
        StatementFlowError: If the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            count = write_csv_rows(transactions, f)
    except OSError as e:
        raise StatementFlowError(f"Failed to write {path}: {e}") from e
    logger.info(f"Wrote {count} transactions to {path}")
