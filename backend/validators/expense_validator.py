"""
Expense Validator Module
Checks parsed transactions against the expense invariants.

The date probe only checks digit shape, so tokens like 31/02 or 00/13 get
through extraction; this stage drops (or rejects, in strict mode) them.
"""

import logging
from datetime import datetime
from extractors.chat_extractor import Transaction

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Custom exception for validation errors."""
    pass


class ExpenseValidator:
    """Validates transaction data."""

    def __init__(self, strict_mode: bool = False):
        """
        Args:
            strict_mode: If True, raise ValidationError on invalid data.
                        If False, log warnings and skip invalid transactions.
        """
        self.strict_mode = strict_mode
        self.validation_stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> dict:
        return {
            "total_validated": 0,
            "valid": 0,
            "invalid": 0,
            "invalid_date": 0,
            "invalid_amount": 0,
            "invalid_category": 0
        }

    def validate_transaction(self, transaction: Transaction) -> bool:
        """
        Validate a single transaction.

        Returns:
            True if valid, False if invalid

        Raises:
            ValidationError: If strict_mode is True and validation fails
        """
        self.validation_stats["total_validated"] += 1

        checks = [
            ("invalid_date", self._validate_date(transaction.date), f"Invalid date: {transaction.date}"),
            ("invalid_amount", self._validate_amount(transaction.amount), f"Invalid amount: {transaction.amount}"),
            ("invalid_category", self._validate_category(transaction.category), "Invalid category: empty"),
        ]

        for stat_key, ok, msg in checks:
            if ok:
                continue
            self.validation_stats[stat_key] += 1
            self.validation_stats["invalid"] += 1
            if self.strict_mode:
                raise ValidationError(msg)
            logger.warning(f"{msg} in transaction: {transaction}")
            return False

        self.validation_stats["valid"] += 1
        return True

    def validate_transactions(self, transactions: list[Transaction]) -> list[Transaction]:
        """
        Validate a list of transactions.

        Returns:
            Valid transactions in their original order
        """
        valid_transactions = [txn for txn in transactions if self.validate_transaction(txn)]

        logger.info(
            f"Validation complete: {self.validation_stats['valid']} valid, "
            f"{self.validation_stats['invalid']} invalid out of "
            f"{self.validation_stats['total_validated']} total"
        )

        return valid_transactions

    @staticmethod
    def _validate_date(date_str: str) -> bool:
        """Date must be a real DD/MM/YYYY calendar date."""
        if not date_str or not isinstance(date_str, str):
            return False
        try:
            datetime.strptime(date_str, '%d/%m/%Y')
            return True
        except ValueError:
            return False

    @staticmethod
    def _validate_amount(amount) -> bool:
        """Amount must be a non-negative whole number."""
        return isinstance(amount, int) and not isinstance(amount, bool) and amount >= 0

    @staticmethod
    def _validate_category(category: str) -> bool:
        return isinstance(category, str) and bool(category.strip())

    def get_stats(self) -> dict:
        """Get validation statistics."""
        return self.validation_stats.copy()

    def reset_stats(self):
        """Reset validation statistics."""
        self.validation_stats = self._empty_stats()


def validate_transactions(transactions: list[Transaction], strict_mode: bool = False) -> list[Transaction]:
    """
    Convenience function to validate a list of transactions.

    Args:
        transactions: List of Transaction objects
        strict_mode: If True, raise exceptions on invalid data

    Returns:
        List of valid transactions
    """
    validator = ExpenseValidator(strict_mode=strict_mode)
    return validator.validate_transactions(transactions)
