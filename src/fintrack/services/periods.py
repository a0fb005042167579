"""Calendar period helpers shared by the dashboard, budgets and reports."""

from __future__ import annotations

from calendar import monthrange
from datetime import date, timedelta
from typing import Iterable, Optional, Protocol, TypeVar

THIS_MONTH = "thisMonth"
LAST_MONTH = "lastMonth"
THIS_YEAR = "thisYear"
ALL_TIME = "all"
REPORT_PERIODS = (THIS_MONTH, LAST_MONTH, THIS_YEAR, ALL_TIME)

ALL_CATEGORIES = "all"


class Dated(Protocol):
    date: date


T = TypeVar("T", bound=Dated)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Return ``(year, month)`` moved by ``delta`` calendar months."""

    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Inclusive first and last day of a calendar month."""

    return date(year, month, 1), date(year, month, monthrange(year, month)[1])


def previous_month(today: date) -> tuple[int, int]:
    return shift_month(today.year, today.month, -1)


def in_month(value: date, year: int, month: int) -> bool:
    return value.year == year and value.month == month


def period_bounds(period: str, today: date) -> tuple[Optional[date], Optional[date]]:
    """Inclusive date bounds for a report period; ``(None, None)`` for all time.

    Raises:
        ValueError: for an unknown period name
    """

    if period == THIS_MONTH:
        return month_bounds(today.year, today.month)
    if period == LAST_MONTH:
        return month_bounds(*previous_month(today))
    if period == THIS_YEAR:
        return date(today.year, 1, 1), date(today.year, 12, 31)
    if period == ALL_TIME:
        return None, None
    raise ValueError(f"Unknown period: {period!r}")


def budget_period_bounds(period: str, today: date) -> tuple[date, date]:
    """Calendar window of a budget period containing ``today``.

    Weeks run Monday through Sunday.
    """

    if period == "weekly":
        start = today - timedelta(days=today.weekday())
        return start, start + timedelta(days=6)
    if period == "monthly":
        return month_bounds(today.year, today.month)
    if period == "yearly":
        return date(today.year, 1, 1), date(today.year, 12, 31)
    raise ValueError(f"Unknown budget period: {period!r}")


def within(value: date, start: Optional[date], end: Optional[date]) -> bool:
    """Inclusive bounds check where a missing bound is open."""

    if start is not None and value < start:
        return False
    if end is not None and value > end:
        return False
    return True


def filter_by_period(items: Iterable[T], period: str, today: date) -> list[T]:
    """Keep items whose ``date`` falls in the calendar ``period`` relative to ``today``."""

    start, end = period_bounds(period, today)
    return [item for item in items if within(item.date, start, end)]


def filter_by_category(items: Iterable[T], category: object) -> list[T]:
    """Keep items for one category id; ``"all"`` or ``None`` keeps everything."""

    if category is None or category == ALL_CATEGORIES:
        return list(items)
    category_id = int(category)  # type: ignore[arg-type]
    return [item for item in items if getattr(item, "category_id", None) == category_id]
