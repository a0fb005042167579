"""Admin utilities behind the CLI (demo seed, CSV export)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from ..logging_config import get_logger
from ..models import Budget, SavingsGoal, Transaction, User
from .auth import register_user
from .categories import seed_default_categories
from .export_csv import export_transactions_csv
from .periods import month_bounds, shift_month
from .reports import build_report

if TYPE_CHECKING:
    from ..extensions import Repositories

logger = get_logger(__name__)

DEMO_EMAIL = "demo@financetracker.com"
DEMO_PASSWORD = "password"

# (day of month, type, category name, description, amount)
_DEMO_TRANSACTIONS: tuple[tuple[int, str, str, str, str], ...] = (
    (1, "income", "Salary", "Monthly salary", "3200.00"),
    (3, "expense", "Groceries", "Weekly groceries", "86.40"),
    (5, "expense", "Transportation", "Transit pass", "65.00"),
    (8, "income", "Freelance", "Logo design", "450.00"),
    (10, "expense", "Groceries", "Farmers market", "42.15"),
    (12, "expense", "Entertainment", "Concert tickets", "120.00"),
    (15, "expense", "Shopping", "Running shoes", "98.99"),
    (17, "expense", "Groceries", "Weekly groceries", "91.20"),
    (21, "expense", "Transportation", "Ride share", "23.50"),
    (24, "expense", "Entertainment", "Streaming subscription", "15.99"),
    (27, "expense", "Groceries", "Weekly groceries", "78.65"),
)


class UnknownUserError(LookupError):
    """Raised when an admin task names an email with no account."""


@dataclass(frozen=True)
class SeedSummary:
    """Aggregate counts returned after demo seeding."""

    user_id: int
    created_user: bool
    categories: int
    transactions: int
    budgets: int
    savings_goals: int


def _ensure_demo_user(repos: "Repositories") -> tuple[User, bool]:
    user = repos.users.get_by_email(DEMO_EMAIL)
    if user is not None:
        return user, False
    user = register_user(
        email=DEMO_EMAIL,
        password=DEMO_PASSWORD,
        username="demo",
        first_name="Demo",
        last_name="User",
        users=repos.users,
    )
    return user, True


def _seed_transactions(repos: "Repositories", *, user_id: int, today: date) -> None:
    by_name = {c.name: c for c in repos.categories.list_all(user_id=user_id)}
    year, month = shift_month(today.year, today.month, -1)
    _, last_day = month_bounds(year, month)
    for day, txn_type, category_name, description, amount in _DEMO_TRANSACTIONS:
        category = by_name.get(category_name)
        repos.transactions.create(
            Transaction(
                user_id=user_id,
                type=txn_type,
                amount=amount,
                description=description,
                category_id=category.id if category else None,
                date=date(year, month, min(day, last_day.day)),
                recurring=category_name == "Salary",
                recurring_period="monthly" if category_name == "Salary" else None,
            ),
            user_id=user_id,
        )

    # current-month entries give the dashboard a month-over-month comparison
    current_start, _ = month_bounds(today.year, today.month)
    for txn_type, category_name, description, amount in (
        ("income", "Salary", "Monthly salary", "3200.00"),
        ("expense", "Groceries", "Weekly groceries", "64.30"),
    ):
        category = by_name.get(category_name)
        repos.transactions.create(
            Transaction(
                user_id=user_id,
                type=txn_type,
                amount=amount,
                description=description,
                category_id=category.id if category else None,
                date=current_start,
            ),
            user_id=user_id,
        )

    groceries = by_name.get("Groceries")
    if groceries is not None:
        repos.budgets.create(
            Budget(user_id=user_id, category_id=groceries.id, amount="400.00", period="monthly"),
            user_id=user_id,
        )
    repos.savings_goals.create(
        SavingsGoal(
            user_id=user_id,
            title="Emergency fund",
            description="Three months of expenses",
            target_amount="5000.00",
            current_amount="1250.00",
            target_date=date(today.year + 1, today.month, 1),
        ),
        user_id=user_id,
    )


def run_demo_seed(repos: "Repositories", *, today: date) -> SeedSummary:
    """Create the demo account with sample data; re-running adds nothing."""

    user, created = _ensure_demo_user(repos)
    user_id = user.id  # type: ignore[assignment]
    seed_default_categories(user_id=user_id, categories=repos.categories)
    if not repos.transactions.list_all(user_id=user_id):
        _seed_transactions(repos, user_id=user_id, today=today)
        logger.info("Demo data seeded", extra={"user_id": user_id})

    return SeedSummary(
        user_id=user_id,
        created_user=created,
        categories=len(repos.categories.list_all(user_id=user_id)),
        transactions=len(repos.transactions.list_all(user_id=user_id)),
        budgets=len(repos.budgets.list_all(user_id=user_id)),
        savings_goals=len(repos.savings_goals.list_all(user_id=user_id)),
    )


def run_export(
    repos: "Repositories",
    *,
    email: str,
    period: str,
    output_path: Path,
    today: date,
) -> tuple[Path, int]:
    """Write one user's report CSV for ``period``; returns the path and row count."""

    user = repos.users.get_by_email(email)
    if user is None:
        raise UnknownUserError(f"No user registered with {email}")
    categories = repos.categories.list_all(user_id=user.id)  # type: ignore[arg-type]
    report = build_report(
        repos.transactions.list_all(user_id=user.id),  # type: ignore[arg-type]
        categories,
        period=period,
        today=today,
    )
    path = export_transactions_csv(
        transactions=report.transactions, categories=categories, output_path=output_path
    )
    logger.info(
        "CSV export written",
        extra={"user_id": user.id, "period": period, "rows": report.transaction_count},
    )
    return path, report.transaction_count
