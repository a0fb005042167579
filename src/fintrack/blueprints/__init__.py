"""Blueprint exports."""

from . import auth, budgets, categories, reports, savings, transactions

__all__ = [
    "auth",
    "budgets",
    "categories",
    "reports",
    "savings",
    "transactions",
]
