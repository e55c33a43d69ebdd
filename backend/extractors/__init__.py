"""
Extractors Module - Chat-log parsing and date normalization.
"""

from .chat_extractor import (
    Transaction,
    DateToken,
    ContentPayload,
    LineProbe,
    TransactionExtractor,
    extract_transactions_from_text
)

from .date_rules import (
    DEFAULT_FALLBACK_YEAR,
    YearPolicy,
    YearInference,
    format_date
)

__all__ = [
    'Transaction',
    'DateToken',
    'ContentPayload',
    'LineProbe',
    'TransactionExtractor',
    'extract_transactions_from_text',
    'DEFAULT_FALLBACK_YEAR',
    'YearPolicy',
    'YearInference',
    'format_date',
]
