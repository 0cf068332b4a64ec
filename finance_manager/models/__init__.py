"""Database models initialization."""

# Import all models to ensure they're registered with SQLAlchemy
from .user import User
from .category import Category, CategoryType
from .transaction import Transaction
from .savings_goal import SavingsGoal

__all__ = [
    "User",
    "Category",
    "CategoryType",
    "Transaction",
    "SavingsGoal"
]
