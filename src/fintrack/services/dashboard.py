"""Data loaders for the overview dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from ..models.category import Category
from ..models.savings_goal import SavingsGoal
from ..models.transaction import Transaction
from ..money import ZERO, as_percent, format_amount, percent_change, to_decimal
from .periods import in_month, previous_month, shift_month
from .reports import UNCATEGORIZED, sum_amounts
from .savings import overall_savings_progress


@dataclass(slots=True)
class DashboardStats:
    total_balance: Decimal
    monthly_income: Decimal
    monthly_expenses: Decimal
    income_change: Decimal
    expense_change: Decimal
    savings_progress: Decimal

    def to_dict(self) -> dict:
        return {
            "total_balance": format_amount(self.total_balance),
            "monthly_income": format_amount(self.monthly_income),
            "monthly_expenses": format_amount(self.monthly_expenses),
            "income_change": as_percent(self.income_change),
            "expense_change": as_percent(self.expense_change),
            "savings_progress": as_percent(self.savings_progress),
        }


@dataclass(slots=True)
class MonthlySeries:
    labels: list[str]
    income: list[Decimal]
    expenses: list[Decimal]

    def to_dict(self) -> dict:
        return {
            "labels": self.labels,
            "income": [format_amount(v) for v in self.income],
            "expenses": [format_amount(v) for v in self.expenses],
        }


def total_balance(transactions: Iterable[Transaction]) -> Decimal:
    """Lifetime income minus expenses."""

    balance = ZERO
    for txn in transactions:
        amount = to_decimal(txn.amount)
        balance += amount if txn.type == "income" else -amount
    return balance


def month_total(
    transactions: Iterable[Transaction], *, txn_type: str, year: int, month: int
) -> Decimal:
    return sum_amounts((t for t in transactions if in_month(t.date, year, month)), txn_type)


def compute_dashboard_stats(
    transactions: Iterable[Transaction],
    *,
    goals: Iterable[SavingsGoal] = (),
    today: date,
) -> DashboardStats:
    """Compose headline figures for the current calendar month of ``today``."""

    txn_list = list(transactions)
    prev_year, prev_month = previous_month(today)

    income = month_total(txn_list, txn_type="income", year=today.year, month=today.month)
    expenses = month_total(txn_list, txn_type="expense", year=today.year, month=today.month)
    prev_income = month_total(txn_list, txn_type="income", year=prev_year, month=prev_month)
    prev_expenses = month_total(txn_list, txn_type="expense", year=prev_year, month=prev_month)

    return DashboardStats(
        total_balance=total_balance(txn_list),
        monthly_income=income,
        monthly_expenses=expenses,
        income_change=percent_change(income, prev_income),
        expense_change=percent_change(expenses, prev_expenses),
        savings_progress=overall_savings_progress(goals),
    )


def monthly_series(
    transactions: Iterable[Transaction], *, today: date, months: int = 6
) -> MonthlySeries:
    """Income and expense totals for the last ``months`` calendar months, oldest first."""

    if months < 1:
        raise ValueError("months must be at least 1")

    txn_list = list(transactions)
    labels: list[str] = []
    income: list[Decimal] = []
    expenses: list[Decimal] = []
    for offset in range(months - 1, -1, -1):
        year, month = shift_month(today.year, today.month, -offset)
        labels.append(date(year, month, 1).strftime("%b %Y"))
        income.append(month_total(txn_list, txn_type="income", year=year, month=month))
        expenses.append(month_total(txn_list, txn_type="expense", year=year, month=month))
    return MonthlySeries(labels=labels, income=income, expenses=expenses)


def recent_transactions(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    *,
    limit: int = 5,
) -> list[dict]:
    """Newest-first rows with the category name resolved for display."""

    names = {c.id: c.name for c in categories}
    ordered = sorted(transactions, key=lambda t: (t.date, t.id or 0), reverse=True)
    rows = []
    for txn in ordered[:limit]:
        row = txn.to_dict()
        row["category_name"] = names.get(txn.category_id, UNCATEGORIZED)
        rows.append(row)
    return rows
