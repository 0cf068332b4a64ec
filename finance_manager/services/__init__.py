"""Business services: category, transaction, savings goal, report and user management."""

from .category_manager import CategoryManager, DEFAULT_CATEGORIES
from .transaction_manager import TransactionManager
from .savings_goal_manager import SavingsGoalManager
from .report_generator import ReportGenerator
from .user_service import UserService

__all__ = [
    "CategoryManager",
    "DEFAULT_CATEGORIES",
    "TransactionManager",
    "SavingsGoalManager",
    "ReportGenerator",
    "UserService"
]
