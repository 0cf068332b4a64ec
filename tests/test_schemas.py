import pytest
from datetime import date
from decimal import Decimal
from pydantic import ValidationError

from finance_manager.schemas.savings_goal import SavingsGoalCreate, SavingsGoalUpdate
from finance_manager.schemas.transaction import TransactionCreate, TransactionFilter, TransactionUpdate

def test_transaction_update_only_reports_set_fields():
    assert TransactionUpdate().changes() == {}
    assert TransactionUpdate(description="Bus").changes() == {"description": "Bus"}
    assert TransactionUpdate(amount=Decimal("5.00"), category="Food").changes() == {
        "amount": Decimal("5.00"),
        "category": "Food"
    }

def test_transaction_update_none_and_blank_mean_unchanged():
    assert TransactionUpdate(amount=None, description=None).changes() == {}
    assert TransactionUpdate(category="   ").changes() == {}

def test_transaction_update_has_no_date():
    update = TransactionUpdate.model_validate({"date": "2024-01-01", "description": "x"})
    
    assert update.changes() == {"description": "x"}

def test_transaction_amount_must_be_positive():
    with pytest.raises(ValidationError):
        TransactionCreate(amount=Decimal("0"), date=date(2024, 1, 1), category="Food")
    with pytest.raises(ValidationError):
        TransactionUpdate(amount=Decimal("-1"))

def test_transaction_filter_is_empty():
    assert TransactionFilter().is_empty() == True
    assert TransactionFilter(category="").is_empty() == True
    assert TransactionFilter(end_date=date(2024, 1, 1)).is_empty() == False

def test_savings_goal_update_changes():
    assert SavingsGoalUpdate().changes() == {}
    assert SavingsGoalUpdate(target_date=date(2025, 1, 1)).changes() == {"target_date": date(2025, 1, 1)}

def test_amounts_fit_storage_precision():
    with pytest.raises(ValidationError):
        TransactionCreate(amount=Decimal("12345678901.25"), date=date(2024, 1, 1), category="Food")
    with pytest.raises(ValidationError):
        TransactionUpdate(amount=Decimal("99999999999.99"))
    with pytest.raises(ValidationError):
        SavingsGoalCreate(goal_name="House", target_amount=Decimal("1234567890123"), target_date=date(2030, 1, 1))
    with pytest.raises(ValidationError):
        SavingsGoalUpdate(target_amount=Decimal("1234567890123"))
    
    assert TransactionCreate(amount=Decimal("9999999999.99"), date=date(2024, 1, 1), category="Food").amount == Decimal("9999999999.99")
