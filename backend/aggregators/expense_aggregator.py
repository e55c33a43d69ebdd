"""
Expense Aggregator Module
Pure folds over parsed transactions: totals by category, totals by month,
and the scalar summary shown on the dashboard.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from extractors.chat_extractor import Transaction

logger = logging.getLogger(__name__)

NO_DATA = "No data"


@dataclass(frozen=True)
class ExpenseSummary:
    """Total, count and mean of a transaction list. ``average`` is None when empty."""
    total: int
    count: int
    average: Optional[float]

    @property
    def average_display(self) -> str:
        if self.average is None:
            return NO_DATA
        return f"{self.average:.2f}"

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "count": self.count,
            "average": self.average,
            "average_display": self.average_display,
        }


def resolve_category(code: str, category_names: Optional[dict[str, str]] = None) -> str:
    """
    Resolve a category code to its display name.

    Exact, case-sensitive lookup; unknown codes are their own display name.
    """
    if not category_names:
        return code
    return category_names.get(code, code)


class CategoryAggregator:
    """Sums amounts per resolved category name."""

    @staticmethod
    def aggregate(
        transactions: list[Transaction],
        category_names: Optional[dict[str, str]] = None
    ) -> list[tuple[str, int]]:
        """
        Total amounts by display name.

        Args:
            transactions: Parsed transactions
            category_names: Code -> display name mapping

        Returns:
            (name, total) pairs, largest total first; equal totals keep
            the order in which the names were first seen
        """
        totals: dict[str, int] = {}
        for txn in transactions:
            name = resolve_category(txn.category, category_names)
            totals[name] = totals.get(name, 0) + txn.amount

        # sorted() is stable, so first-seen order survives among ties
        result = sorted(totals.items(), key=lambda item: item[1], reverse=True)
        logger.debug(f"Aggregated {len(transactions)} transactions into {len(result)} categories")
        return result


class MonthlyAggregator:
    """Sums amounts per MM/YYYY month."""

    @staticmethod
    def aggregate(transactions: list[Transaction]) -> list[tuple[str, int]]:
        """
        Total amounts by month.

        Returns:
            (MM/YYYY, total) pairs in calendar order
        """
        totals: dict[str, int] = {}
        for txn in transactions:
            key = txn.month_key
            totals[key] = totals.get(key, 0) + txn.amount

        result = sorted(totals.items(), key=lambda item: MonthlyAggregator.sort_key(item[0]))
        logger.debug(f"Aggregated {len(transactions)} transactions into {len(result)} months")
        return result

    @staticmethod
    def sort_key(month_key: str) -> tuple[int, int]:
        """(year, month) integers for a MM/YYYY key."""
        month, year = month_key.split('/')
        return int(year), int(month)


def summarize(transactions: list[Transaction]) -> ExpenseSummary:
    """
    Total, count and arithmetic mean.

    The mean is None for an empty list rather than a division error.
    """
    count = len(transactions)
    total = sum(txn.amount for txn in transactions)
    average = total / count if count else None
    return ExpenseSummary(total=total, count=count, average=average)


def aggregate_by_category(
    transactions: list[Transaction],
    category_names: Optional[dict[str, str]] = None
) -> list[tuple[str, int]]:
    """Convenience wrapper around CategoryAggregator.aggregate."""
    return CategoryAggregator.aggregate(transactions, category_names)


def aggregate_by_month(transactions: list[Transaction]) -> list[tuple[str, int]]:
    """Convenience wrapper around MonthlyAggregator.aggregate."""
    return MonthlyAggregator.aggregate(transactions)
