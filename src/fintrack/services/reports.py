"""Reporting utilities: period/category filtering, summaries and category breakdowns."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ..models.category import Category
from ..models.transaction import Transaction
from ..money import ZERO, as_percent, format_amount, safe_ratio, to_decimal
from .periods import ALL_CATEGORIES, filter_by_category, filter_by_period, period_bounds

UNCATEGORIZED = "Uncategorized"


@dataclass(slots=True)
class CategoryBreakdown:
    """Total for one category within a filtered set.

    ``percentage`` is relative to the total of the category's own type. The
    catch-all row for unassigned transactions has no ``category_id``.
    """

    category_id: Optional[int]
    name: str
    type: str
    amount: Decimal
    count: int
    percentage: Decimal

    def to_dict(self) -> dict:
        return {
            "category_id": self.category_id,
            "name": self.name,
            "type": self.type,
            "amount": format_amount(self.amount),
            "count": self.count,
            "percentage": as_percent(self.percentage),
        }


@dataclass(slots=True)
class ReportSummary:
    period: str
    category: str
    start_date: Optional[date]
    end_date: Optional[date]
    total_income: Decimal
    total_expenses: Decimal
    transaction_count: int
    breakdown: list[CategoryBreakdown] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)

    @property
    def net_income(self) -> Decimal:
        return self.total_income - self.total_expenses

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "category": self.category,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "total_income": format_amount(self.total_income),
            "total_expenses": format_amount(self.total_expenses),
            "net_income": format_amount(self.net_income),
            "transaction_count": self.transaction_count,
            "breakdown": [item.to_dict() for item in self.breakdown],
        }


def sum_amounts(transactions: Iterable[Transaction], txn_type: Optional[str] = None) -> Decimal:
    """Sum amounts, optionally for one transaction type only."""

    return sum(
        (
            to_decimal(txn.amount)
            for txn in transactions
            if txn_type is None or txn.type == txn_type
        ),
        ZERO,
    )


def filter_transactions(
    transactions: Iterable[Transaction],
    *,
    period: str,
    category: object = ALL_CATEGORIES,
    today: date,
) -> list[Transaction]:
    """Apply the calendar period filter, then the optional category filter."""

    return filter_by_category(filter_by_period(transactions, period, today), category)


def category_breakdown(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    *,
    category_type: Optional[str] = None,
) -> list[CategoryBreakdown]:
    """Per-category totals sorted by amount, largest first.

    Only transactions whose type matches the category's type count toward it,
    so income and expense totals are never mixed. Transactions no category
    claims fall into an ``Uncategorized`` row for their type. Categories with
    no spend are dropped. Ties sort by name for a stable order.
    """

    txn_list = list(transactions)
    type_totals = {
        "income": sum_amounts(txn_list, "income"),
        "expense": sum_amounts(txn_list, "expense"),
    }

    rows: list[CategoryBreakdown] = []
    counted: set[int] = set()
    for category in categories:
        if category_type is not None and category.type != category_type:
            continue
        matching = [
            txn for txn in txn_list if txn.category_id == category.id and txn.type == category.type
        ]
        counted.update(id(txn) for txn in matching)
        amount = sum_amounts(matching)
        if amount <= 0:
            continue
        rows.append(
            CategoryBreakdown(
                category_id=category.id,
                name=category.name,
                type=category.type,
                amount=amount,
                count=len(matching),
                percentage=safe_ratio(amount, type_totals.get(category.type, ZERO)),
            )
        )

    # whatever no category claimed gets one bucket per type, so rows cover the type total
    for txn_type, type_total in type_totals.items():
        if category_type is not None and txn_type != category_type:
            continue
        leftover = [txn for txn in txn_list if txn.type == txn_type and id(txn) not in counted]
        amount = sum_amounts(leftover)
        if amount <= 0:
            continue
        rows.append(
            CategoryBreakdown(
                category_id=None,
                name=UNCATEGORIZED,
                type=txn_type,
                amount=amount,
                count=len(leftover),
                percentage=safe_ratio(amount, type_total),
            )
        )

    rows.sort(key=lambda row: (-row.amount, row.name))
    return rows


def build_report(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    *,
    period: str,
    category: object = ALL_CATEGORIES,
    today: date,
) -> ReportSummary:
    """Summarize one user's transactions for a period and optional category filter."""

    category_list = list(categories)
    filtered = filter_transactions(transactions, period=period, category=category, today=today)
    start, end = period_bounds(period, today)

    return ReportSummary(
        period=period,
        category=str(category if category is not None else ALL_CATEGORIES),
        start_date=start,
        end_date=end,
        total_income=sum_amounts(filtered, "income"),
        total_expenses=sum_amounts(filtered, "expense"),
        transaction_count=len(filtered),
        breakdown=category_breakdown(filtered, category_list),
        transactions=filtered,
    )
