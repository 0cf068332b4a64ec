"""
Storage gateway: one repository per entity, all sharing the caller's AsyncSession.

Repositories add, flush and delete; committing is left to the service that
owns the unit of work.
"""

from .user import UserRepository
from .category import CategoryRepository
from .transaction import TransactionRepository
from .savings_goal import SavingsGoalRepository

__all__ = [
    "UserRepository",
    "CategoryRepository",
    "TransactionRepository",
    "SavingsGoalRepository"
]
