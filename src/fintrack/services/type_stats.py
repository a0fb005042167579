"""Month-over-month statistics for the dedicated income and expense pages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable

from ..models.category import Category
from ..models.enums import TRANSACTION_TYPES
from ..models.transaction import Transaction
from ..money import ZERO, as_percent, format_amount, percent_change
from .periods import THIS_MONTH, filter_by_period, in_month, previous_month
from .reports import CategoryBreakdown, category_breakdown, sum_amounts


@dataclass(slots=True)
class TypeStats:
    type: str
    total: Decimal
    previous_total: Decimal
    change: Decimal
    count: int
    average: Decimal
    lifetime_total: Decimal
    breakdown: list[CategoryBreakdown] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "total": format_amount(self.total),
            "previous_total": format_amount(self.previous_total),
            "change": as_percent(self.change),
            "count": self.count,
            "average": format_amount(self.average),
            "lifetime_total": format_amount(self.lifetime_total),
            "breakdown": [item.to_dict() for item in self.breakdown],
        }


def compute_type_stats(
    transactions: Iterable[Transaction],
    categories: Iterable[Category] = (),
    *,
    txn_type: str,
    today: date,
    breakdown_period: str = THIS_MONTH,
) -> TypeStats:
    """Current-month total, prior-month comparison and average for one type.

    ``average`` is the current month total over its transaction count, zero
    when the month is empty. Expense stats also carry a per-category breakdown
    over ``breakdown_period`` restricted to expense categories.
    """

    if txn_type not in TRANSACTION_TYPES:
        raise ValueError(f"Unknown transaction type: {txn_type!r}")

    typed = [txn for txn in transactions if txn.type == txn_type]
    prev_year, prev_month = previous_month(today)

    current = [txn for txn in typed if in_month(txn.date, today.year, today.month)]
    total = sum_amounts(current)
    previous_total = sum_amounts(t for t in typed if in_month(t.date, prev_year, prev_month))
    count = len(current)

    breakdown: list[CategoryBreakdown] = []
    if txn_type == "expense":
        breakdown = category_breakdown(
            filter_by_period(typed, breakdown_period, today),
            categories,
            category_type="expense",
        )

    return TypeStats(
        type=txn_type,
        total=total,
        previous_total=previous_total,
        change=percent_change(total, previous_total),
        count=count,
        average=total / count if count else ZERO,
        lifetime_total=sum_amounts(typed),
        breakdown=breakdown,
    )
