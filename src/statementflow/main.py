"""Command line entry point."""
import sys
import argparse
from pathlib import Path
from typing import List, Optional

from statementflow.classify.classifier import TransactionClassifier
from statementflow.classify.payee_rules import PayeeRuleStore
from statementflow.config.settings import AppSettings, get_settings, validate_settings
from statementflow.export.writer import results_to_json, write_csv, write_csv_rows, write_json
from statementflow.orchestrator.pipeline import BatchItem, StatementPipeline
from statementflow.pdf.processor import PDFProcessor
from statementflow.utils.exceptions import StatementFlowError
from statementflow.utils.logger import configure_logger, get_logger

logger = get_logger()

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def _load_and_validate_settings() -> AppSettings:
    """Load settings and apply the configured log level."""
    settings = get_settings()
    is_valid, message = validate_settings(settings)
    if not is_valid:
        raise StatementFlowError(f"Invalid configuration: {message}")
    configure_logger(
        settings.log_level,
        log_dir=Path(settings.log_dir) if settings.log_dir else None,
        max_file_size_mb=settings.log_max_file_size_mb,
        backup_count=settings.log_backup_count
    )
    return settings


def _payee_store(settings: AppSettings) -> PayeeRuleStore:
    cache_dir = Path(settings.payee_rules_dir) if settings.payee_rules_dir else None
    return PayeeRuleStore(cache_dir=cache_dir, fuzzy_threshold=settings.fuzzy_match_threshold)


def _build_pipeline(settings: AppSettings, company_id: Optional[str]) -> StatementPipeline:
    rules_path = Path(settings.rules_file) if settings.rules_file else None
    classifier = TransactionClassifier(
        payee_rules=_payee_store(settings) if company_id else None,
        company_id=company_id,
        rules_path=rules_path
    )
    return StatementPipeline(
        classifier=classifier,
        pdf_processor=PDFProcessor(min_text_length=settings.pdf_min_text_length),
        max_workers=settings.max_concurrent_statements
    )


def parse_command(
    settings: AppSettings,
    files: List[str],
    year: Optional[int],
    output_format: str,
    output: Optional[str],
    company_id: Optional[str]
) -> int:
    """Parse statements and write the results."""
    pipeline = _build_pipeline(settings, company_id)
    items: List[BatchItem] = pipeline.process_batch([Path(f) for f in files], statement_year=year)

    for item in items:
        if not item.succeeded:
            print(f"✗ {item.path}: {item.error}", file=sys.stderr)

    results = [item.result for item in items if item.succeeded]
    if results:
        if output_format == "csv":
            transactions = [txn for result in results for txn in result.transactions]
            if output:
                write_csv(transactions, Path(output))
            else:
                write_csv_rows(transactions, sys.stdout)
        else:
            payload = results[0] if len(files) == 1 else results
            if output:
                write_json(payload, Path(output))
            else:
                print(results_to_json(payload))

    return EXIT_OK if len(results) == len(items) else EXIT_FAILED


def list_rules_command(settings: AppSettings, company_id: str) -> int:
    """Print learned payee rules for a company."""
    mappings = _payee_store(settings).get_all_mappings(company_id)
    if not mappings:
        print(f"No payee rules found for company: {company_id}")
        return EXIT_OK

    print(f"\nPayee rules for company: {company_id}")
    print(f"{'Payee':<40} {'Category':<40}")
    print("-" * 80)
    for payee, category in sorted(mappings.items()):
        print(f"{payee:<40} {category:<40}")
    print(f"\nTotal: {len(mappings)} rules")
    return EXIT_OK


def add_rule_command(settings: AppSettings, company_id: str, payee: str, category: str) -> int:
    """Store a payee rule for a company."""
    if _payee_store(settings).add_mapping(company_id, payee, category):
        print(f"✓ Added payee rule for {company_id}: {payee} -> {category}")
    else:
        print(f"Payee rule already present for {company_id}: {payee} -> {category}")
    return EXIT_OK


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="statementflow",
        description="StatementFlow bank statement parser"
    )
    parser.add_argument(
        "command",
        choices=["parse", "list-rules", "add-rule"],
        help="Command to execute"
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Statement files (.pdf or pre-extracted .txt) for the parse command"
    )
    parser.add_argument("--year", type=int, help="Statement year (default: read from the statement period)")
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["json", "csv"],
        default="json",
        help="Output format (default: json)"
    )
    parser.add_argument("--output", help="Output file (default: stdout)")
    parser.add_argument("--company", help="Company ID whose learned payee rules apply")
    parser.add_argument("--payee", help="Payee name (for add-rule)")
    parser.add_argument("--category", help="Category name (for add-rule)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the StatementFlow CLI."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.command == "parse" and not args.files:
        parser.error("parse requires at least one statement file")
    if args.command in ("list-rules", "add-rule") and not args.company:
        parser.error(f"{args.command} requires --company")
    if args.command == "add-rule" and not (args.payee and args.category):
        parser.error("add-rule requires --payee and --category")

    try:
        settings = _load_and_validate_settings()

        if args.command == "list-rules":
            return list_rules_command(settings, args.company)

        if args.command == "add-rule":
            return add_rule_command(settings, args.company, args.payee, args.category)

        return parse_command(
            settings,
            args.files,
            args.year,
            args.output_format,
            args.output,
            args.company
        )
    except StatementFlowError as e:
        logger.critical(f"Fatal error: {e}")
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
