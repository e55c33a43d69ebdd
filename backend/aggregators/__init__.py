"""
Aggregators Module - Category, monthly and summary folds.
"""

from .expense_aggregator import (
    NO_DATA,
    ExpenseSummary,
    CategoryAggregator,
    MonthlyAggregator,
    resolve_category,
    summarize,
    aggregate_by_category,
    aggregate_by_month
)

__all__ = [
    'NO_DATA',
    'ExpenseSummary',
    'CategoryAggregator',
    'MonthlyAggregator',
    'resolve_category',
    'summarize',
    'aggregate_by_category',
    'aggregate_by_month',
]
