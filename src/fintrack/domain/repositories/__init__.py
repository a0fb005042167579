"""Repository protocol definitions for domain layer."""

from .budget import BudgetRepository
from .category import CategoryRepository
from .savings_goal import SavingsGoalRepository
from .transaction import TransactionRepository
from .user import UserRepository

__all__ = [
    "BudgetRepository",
    "CategoryRepository",
    "SavingsGoalRepository",
    "TransactionRepository",
    "UserRepository",
]
