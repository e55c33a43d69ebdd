"""
Validators Module - Transaction data validation.
"""

from .expense_validator import (
    ExpenseValidator,
    validate_transactions,
    ValidationError
)

__all__ = [
    'ExpenseValidator',
    'validate_transactions',
    'ValidationError',
]
