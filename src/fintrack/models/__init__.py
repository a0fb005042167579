"""SQLModel table exports."""

from .budget import Budget
from .category import Category
from .savings_goal import SavingsGoal
from .token import RevokedToken
from .transaction import Transaction
from .user import User

__all__ = [
    "Budget",
    "Category",
    "RevokedToken",
    "SavingsGoal",
    "Transaction",
    "User",
]
