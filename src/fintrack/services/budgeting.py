"""Budgeting domain services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ..models.budget import Budget
from ..models.category import Category
from ..models.transaction import Transaction
from ..money import HUNDRED, ZERO, as_percent, format_amount, safe_ratio, to_decimal
from .periods import budget_period_bounds, within

UNKNOWN_CATEGORY = "Unknown"

STATUS_GOOD = "good"
STATUS_WARNING = "warning"
STATUS_DANGER = "danger"

WARNING_THRESHOLD = Decimal("90")
DANGER_THRESHOLD = HUNDRED

WINDOW_ALL = "all"
WINDOW_PERIOD = "period"


@dataclass(slots=True)
class BudgetProgress:
    """Spend against one budget.

    ``percentage`` is unclamped and drives ``status``; ``display_percentage`` is
    capped at 100 for progress bars.
    """

    budget_id: Optional[int]
    category_id: int
    category_name: str
    period: str
    amount: Decimal
    spent: Decimal
    remaining: Decimal
    percentage: Decimal
    status: str
    window_start: Optional[date] = None
    window_end: Optional[date] = None

    @property
    def display_percentage(self) -> Decimal:
        return min(self.percentage, HUNDRED)

    def to_dict(self) -> dict:
        return {
            "id": self.budget_id,
            "category_id": self.category_id,
            "category_name": self.category_name,
            "period": self.period,
            "amount": format_amount(self.amount),
            "spent": format_amount(self.spent),
            "remaining": format_amount(self.remaining),
            "percentage": as_percent(self.percentage),
            "display_percentage": as_percent(self.display_percentage),
            "status": self.status,
            "window_start": self.window_start.isoformat() if self.window_start else None,
            "window_end": self.window_end.isoformat() if self.window_end else None,
        }


def classify_status(percentage: Decimal | float) -> str:
    """Map an unclamped spend percentage onto good/warning/danger (first match wins)."""

    value = to_decimal(percentage)
    if value >= DANGER_THRESHOLD:
        return STATUS_DANGER
    if value >= WARNING_THRESHOLD:
        return STATUS_WARNING
    return STATUS_GOOD


def spend_window(
    budget: Budget, *, window: str = WINDOW_ALL, today: Optional[date] = None
) -> tuple[Optional[date], Optional[date]]:
    """Resolve the inclusive date window counted toward a budget.

    ``all`` counts the whole history unless the budget carries its own
    start/end dates. ``period`` narrows to the weekly/monthly/yearly calendar
    window containing ``today``, intersected with the budget's own dates.
    """

    start, end = budget.start_date, budget.end_date
    if window == WINDOW_ALL:
        return start, end
    if window != WINDOW_PERIOD:
        raise ValueError(f"Unknown budget window policy: {window!r}")
    if today is None:
        raise ValueError("The period window policy needs a reference date")

    period_start, period_end = budget_period_bounds(budget.period, today)
    if start is None or period_start > start:
        start = period_start
    if end is None or period_end < end:
        end = period_end
    return start, end


def compute_budget_progress(
    budget: Budget,
    *,
    categories: Iterable[Category],
    transactions: Iterable[Transaction],
    window: str = WINDOW_ALL,
    today: Optional[date] = None,
) -> BudgetProgress:
    """Compose spend, remaining and status for a single budget.

    Only expense transactions in the budget's category count. A category that
    cannot be resolved is labelled "Unknown".
    """

    category_name = next(
        (c.name for c in categories if c.id == budget.category_id), UNKNOWN_CATEGORY
    )
    start, end = spend_window(budget, window=window, today=today)

    spent = sum(
        (
            to_decimal(txn.amount)
            for txn in transactions
            if txn.category_id == budget.category_id
            and txn.type == "expense"
            and within(txn.date, start, end)
        ),
        ZERO,
    )
    amount = to_decimal(budget.amount)
    percentage = safe_ratio(spent, amount)

    return BudgetProgress(
        budget_id=budget.id,
        category_id=budget.category_id,
        category_name=category_name,
        period=budget.period,
        amount=amount,
        spent=spent,
        remaining=max(amount - spent, ZERO),
        percentage=percentage,
        status=classify_status(percentage),
        window_start=start,
        window_end=end,
    )


def compute_all_budget_progress(
    budgets: Iterable[Budget],
    *,
    categories: Iterable[Category],
    transactions: Iterable[Transaction],
    window: str = WINDOW_ALL,
    today: Optional[date] = None,
) -> list[BudgetProgress]:
    """Progress for every budget, in input order."""

    category_list = list(categories)
    transaction_list = list(transactions)
    return [
        compute_budget_progress(
            budget,
            categories=category_list,
            transactions=transaction_list,
            window=window,
            today=today,
        )
        for budget in budgets
    ]
