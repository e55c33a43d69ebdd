import pytest

from extractors.chat_extractor import Transaction
from validators.expense_validator import ExpenseValidator, ValidationError, validate_transactions


def test_impossible_dates_are_dropped():
    txns = [
        Transaction(date="28/02/2025", category="F", amount=10),
        Transaction(date="31/02/2025", category="F", amount=10),
        Transaction(date="01/13/2025", category="F", amount=10),
    ]
    validator = ExpenseValidator()
    assert validator.validate_transactions(txns) == txns[:1]
    stats = validator.get_stats()
    assert stats["invalid_date"] == 2
    assert stats["valid"] == 1


def test_leap_day_is_valid():
    txn = Transaction(date="29/02/2024", category="F", amount=1)
    assert validate_transactions([txn]) == [txn]


def test_strict_mode_raises():
    with pytest.raises(ValidationError, match="Invalid date"):
        validate_transactions([Transaction(date="31/04/2025", category="F", amount=1)], strict_mode=True)


def test_negative_or_fractional_amounts_are_invalid():
    validator = ExpenseValidator()
    assert not validator.validate_transaction(Transaction(date="01/01/2025", category="F", amount=-1))
    assert not validator.validate_transaction(Transaction(date="01/01/2025", category="F", amount=1.5))
    assert validator.validate_transaction(Transaction(date="01/01/2025", category="F", amount=0))


def test_blank_category_is_invalid():
    validator = ExpenseValidator()
    assert not validator.validate_transaction(Transaction(date="01/01/2025", category="  ", amount=5))
    assert validator.get_stats()["invalid_category"] == 1
    validator.reset_stats()
    assert validator.get_stats()["total_validated"] == 0
