"""
Chat-Log Expense Tracker - Main Pipeline
Orchestrates loading, extraction, validation, aggregation and report generation.
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from config import config
from extractors.chat_extractor import Transaction, TransactionExtractor
from extractors.date_rules import YearPolicy
from aggregators.expense_aggregator import (
    ExpenseSummary,
    aggregate_by_category,
    aggregate_by_month,
    resolve_category,
    summarize
)
from validators.expense_validator import ExpenseValidator, ValidationError
from loaders.text_loader import load_chat_log, TextLoadError

logger = logging.getLogger(__name__)


class TransactionFilter:
    """Filters transactions by category keyword and month range."""

    @staticmethod
    def filter_by_category(
        transactions: list[Transaction],
        keyword: str,
        category_names: Optional[dict[str, str]] = None
    ) -> list[Transaction]:
        """
        Keep transactions whose code or display name contains the keyword
        (case-insensitive). An empty keyword keeps everything.
        """
        if not keyword:
            return transactions

        keyword_lower = keyword.lower()
        filtered = [
            txn for txn in transactions
            if keyword_lower in txn.category.lower()
            or keyword_lower in resolve_category(txn.category, category_names).lower()
        ]

        logger.info(f"Category filter '{keyword}': {len(filtered)}/{len(transactions)} transactions matched")
        return filtered

    @staticmethod
    def filter_by_date_range(
        transactions: list[Transaction],
        start_month: str,
        end_month: str
    ) -> list[Transaction]:
        """
        Filter transactions by month range.

        Args:
            transactions: List of transactions
            start_month: Start month (YYYY-MM), inclusive
            end_month: End month (YYYY-MM), inclusive

        Returns:
            Filtered list of transactions
        """
        if not start_month or not end_month:
            return transactions

        filtered = [
            txn for txn in transactions
            if start_month <= f"{txn.year:04d}-{txn.month:02d}" <= end_month
        ]

        logger.info(
            f"Date range filter ({start_month} to {end_month}): "
            f"{len(filtered)}/{len(transactions)} transactions matched"
        )
        return filtered


@dataclass
class ExpenseReport:
    """Everything the presentation layer consumes for one parsed chat log."""
    transactions: list[Transaction]
    category_totals: list[tuple[str, int]]
    monthly_totals: list[tuple[str, int]]
    summary: ExpenseSummary
    category_names: dict[str, str] = field(default_factory=dict)
    stats: dict = field(default_factory=dict)
    report_path: Optional[str] = None

    @classmethod
    def from_transactions(
        cls,
        transactions: list[Transaction],
        category_names: Optional[dict[str, str]] = None,
        stats: Optional[dict] = None
    ) -> "ExpenseReport":
        """Run the category, monthly and summary folds over a transaction list."""
        category_names = category_names or {}
        return cls(
            transactions=transactions,
            category_totals=aggregate_by_category(transactions, category_names),
            monthly_totals=aggregate_by_month(transactions),
            summary=summarize(transactions),
            category_names=category_names,
            stats=stats or {}
        )

    def to_dict(self) -> dict:
        return {
            "transactions": [
                {**txn.to_dict(), "category_name": resolve_category(txn.category, self.category_names)}
                for txn in self.transactions
            ],
            "category_totals": [{"name": name, "total": total} for name, total in self.category_totals],
            "monthly_totals": [{"month": month, "total": total} for month, total in self.monthly_totals],
            "summary": self.summary.to_dict(),
            "stats": self.stats,
        }


class ExpenseLogPipeline:
    """Main orchestrator for the chat-log expense pipeline."""

    def __init__(
        self,
        fallback_year: Optional[int] = None,
        year_policy=None,
        category_names: Optional[dict[str, str]] = None,
        validate_dates: Optional[bool] = None,
        strict_mode: Optional[bool] = None
    ):
        """
        Unset arguments fall back to the application config.
        """
        self.fallback_year = fallback_year if fallback_year is not None else config.FALLBACK_YEAR
        self.year_policy = YearPolicy.from_value(year_policy or config.YEAR_POLICY)
        self.category_names = category_names if category_names is not None else config.get_category_names()
        self.validate_dates = config.VALIDATE_DATES if validate_dates is None else validate_dates
        self.strict_mode = config.STRICT_MODE if strict_mode is None else strict_mode
        self.stats = {}

    def process_text(self, text: str, output_path: Optional[str] = None, title: str = "Expense Report") -> ExpenseReport:
        """
        Run the pipeline over an in-memory chat log.

        Args:
            text: Chat export text
            output_path: Optional path for a PDF report
            title: Title for the PDF report

        Returns:
            ExpenseReport with transactions, aggregates and stats

        Raises:
            ValidationError: In strict mode, when a parsed transaction is invalid
            ReportWriteError: If the PDF cannot be written
        """
        logger.info("Step 1: Extracting transactions from text")
        extractor = TransactionExtractor(fallback_year=self.fallback_year, year_policy=self.year_policy)
        transactions = extractor.extract_transactions(text)
        self.stats = {"extraction": extractor.get_stats()}

        if not transactions:
            logger.warning("No transactions found. Check that the chat log uses '[DD/MM/YYYY, time] Name: Category - Amount' lines.")

        if self.validate_dates:
            logger.info("Step 2: Validating transactions")
            validator = ExpenseValidator(strict_mode=self.strict_mode)
            try:
                transactions = validator.validate_transactions(transactions)
            except ValidationError as e:
                logger.error(f"Transaction validation failed: {e}")
                raise
            self.stats["validation"] = validator.get_stats()

        logger.info("Step 3: Aggregating")
        report = ExpenseReport.from_transactions(transactions, self.category_names, stats=self.stats)

        if output_path:
            logger.info(f"Step 4: Generating PDF report - {output_path}")
            # reportlab is only needed when a report is requested
            from output.writer import generate_pdf_report
            generate_pdf_report(
                output_path=output_path,
                transactions=report.transactions,
                category_totals=report.category_totals,
                monthly_totals=report.monthly_totals,
                summary=report.summary,
                title=title,
                category_names=self.category_names
            )
            report.report_path = output_path

        self._print_summary(report)
        return report

    def process_file(self, file_path: str, output_path: Optional[str] = None) -> ExpenseReport:
        """
        Load a chat export from disk and run the pipeline.

        Raises:
            TextLoadError: If the file cannot be loaded
        """
        logger.info(f"Loading chat log - {file_path}")
        text = load_chat_log(file_path)
        return self.process_text(text, output_path=output_path, title=f"Expense Report - {Path(file_path).stem}")

    @staticmethod
    def _print_summary(report: ExpenseReport):
        """Log extraction summary."""
        logger.info("=" * 60)
        logger.info("EXPENSE SUMMARY")
        logger.info("=" * 60)
        logger.info(f"Transactions:            {report.summary.count}")
        logger.info(f"Total expenses:          {report.summary.total}")
        logger.info(f"Average per transaction: {report.summary.average_display}")
        logger.info(f"Categories:              {len(report.category_totals)}")
        logger.info(f"Months:                  {len(report.monthly_totals)}")
        logger.info("=" * 60)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Summarize expenses noted in an exported chat log.")
    parser.add_argument("chat_log", help="Path to the exported chat (.txt)")
    parser.add_argument("--output", "-o", help="Write a PDF report to this path")
    parser.add_argument("--fallback-year", type=int, default=None, help="Year for dates written without one")
    parser.add_argument(
        "--year-policy",
        choices=[p.value for p in YearPolicy],
        default=None,
        help="How the fallback year is chosen"
    )
    parser.add_argument("--categories", help="JSON file mapping category codes to display names")
    parser.add_argument("--strict", action="store_true", help="Fail on invalid dates instead of skipping them")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Command-line entry point."""
    from logging_config import setup_logging

    args = build_parser().parse_args(argv)
    setup_logging(log_file=config.LOG_FILE)

    try:
        pipeline = ExpenseLogPipeline(
            fallback_year=args.fallback_year,
            year_policy=args.year_policy,
            category_names=config.get_category_names(args.categories) if args.categories else None,
            strict_mode=True if args.strict else None
        )
        report = pipeline.process_file(args.chat_log, output_path=args.output)

    except (TextLoadError, ValidationError, ValueError) as e:
        logger.error(f"Invalid input: {e}")
        print(f"\n❌ Input Error: {e}")
        return 1

    except Exception as e:
        logger.error(f"Processing failed: {e}", exc_info=True)
        print(f"\n❌ Error: {e}")
        return 1

    print(f"\nTotal expenses: {report.summary.total}")
    print(f"Total transactions: {report.summary.count}")
    print(f"Average per transaction: {report.summary.average_display}")

    if report.category_totals:
        print("\nBy category:")
        for name, total in report.category_totals:
            print(f"  {name:<20} {total:>8}")

        print("\nBy month:")
        for month, total in report.monthly_totals:
            print(f"  {month:<20} {total:>8}")

    if report.report_path:
        print(f"\n✅ Report generated: {report.report_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
