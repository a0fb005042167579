"""Savings goal progress."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ..models.savings_goal import SavingsGoal
from ..money import HUNDRED, ZERO, as_percent, format_amount, safe_ratio, to_decimal

OVERDUE = "overdue"
DUE_TODAY = "due_today"
DAYS = "days"
MONTHS = "months"
YEARS = "years"


@dataclass(slots=True, frozen=True)
class TimeRemaining:
    kind: str
    days: int
    label: str


@dataclass(slots=True)
class GoalProgress:
    goal_id: Optional[int]
    title: str
    target_amount: Decimal
    current_amount: Decimal
    remaining: Decimal
    percentage: Decimal
    achieved: bool
    target_date: date
    time_remaining: TimeRemaining

    @property
    def display_percentage(self) -> Decimal:
        return min(self.percentage, HUNDRED)

    def to_dict(self) -> dict:
        return {
            "id": self.goal_id,
            "title": self.title,
            "target_amount": format_amount(self.target_amount),
            "current_amount": format_amount(self.current_amount),
            "remaining": format_amount(self.remaining),
            "percentage": as_percent(self.percentage),
            "display_percentage": as_percent(self.display_percentage),
            "achieved": self.achieved,
            "target_date": self.target_date.isoformat(),
            "time_remaining": {
                "kind": self.time_remaining.kind,
                "days": self.time_remaining.days,
                "label": self.time_remaining.label,
            },
        }


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def time_remaining(target_date: date, today: date) -> TimeRemaining:
    """Coarse description of the calendar days left until ``target_date``.

    Whole calendar days are used, so a goal due tomorrow always reads
    "1 day left". Months and years round half-up from 30 and 365 day units.
    """

    days = (target_date - today).days
    if days < 0:
        overdue = -days
        return TimeRemaining(OVERDUE, days, f"Overdue by {_plural(overdue, 'day')}")
    if days == 0:
        return TimeRemaining(DUE_TODAY, 0, "Due today")
    if days < 30:
        return TimeRemaining(DAYS, days, f"{_plural(days, 'day')} left")
    if days < 365:
        months = max(1, int((Decimal(days) / 30).to_integral_value(rounding=ROUND_HALF_UP)))
        return TimeRemaining(MONTHS, days, f"{_plural(months, 'month')} left")
    years = max(1, int((Decimal(days) / 365).to_integral_value(rounding=ROUND_HALF_UP)))
    return TimeRemaining(YEARS, days, f"{_plural(years, 'year')} left")


def compute_goal_progress(goal: SavingsGoal, *, today: date) -> GoalProgress:
    target = to_decimal(goal.target_amount)
    current = to_decimal(goal.current_amount)
    return GoalProgress(
        goal_id=goal.id,
        title=goal.title,
        target_amount=target,
        current_amount=current,
        remaining=max(target - current, ZERO),
        percentage=safe_ratio(current, target),
        achieved=current >= target,
        target_date=goal.target_date,
        time_remaining=time_remaining(goal.target_date, today),
    )


def overall_savings_progress(goals: Iterable[SavingsGoal]) -> Decimal:
    """Sum of saved amounts over sum of targets, as a percentage capped at 100."""

    goal_list = list(goals)
    current = sum((to_decimal(g.current_amount) for g in goal_list), ZERO)
    target = sum((to_decimal(g.target_amount) for g in goal_list), ZERO)
    return min(safe_ratio(current, target), HUNDRED)
