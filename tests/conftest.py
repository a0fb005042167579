"""Pytest configuration and shared fixtures for FinTrack tests.

This module provides database fixtures, test data factories, and an API client
for testing the aggregation engine, repositories and routes without touching the
real app database.
"""

from __future__ import annotations

from datetime import date
from typing import Callable

import pytest
from sqlmodel import SQLModel, create_engine

# Import all models to ensure they're registered with SQLModel metadata
from fintrack.models import Budget, Category, SavingsGoal, Transaction, User
from fintrack.extensions import Repositories
from fintrack.infra.database import create_session_factory

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine(tmp_path):
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        echo=False,
        connect_args={"check_same_thread": False},
    )
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one the app hands to repositories."""

    return create_session_factory(db_engine)


@pytest.fixture
def repos(session_factory) -> Repositories:
    return Repositories.from_session_factory(session_factory)


@pytest.fixture
def user(repos) -> User:
    """Create a default user for scoping data."""

    return repos.users.create(
        User(email="tester@example.com", username="tester", password_hash="dummy-hash")
    )


@pytest.fixture
def other_user(repos) -> User:
    return repos.users.create(
        User(email="other@example.com", username="other", password_hash="dummy-hash")
    )


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def category_factory(repos, user) -> Callable[..., Category]:
    """Factory for creating persisted categories.

    Returns:
        Callable: Function that creates and persists Category instances
    """

    def _create_category(
        name: str = "Groceries",
        category_type: str = "expense",
        owner: User | None = None,
    ) -> Category:
        owner = owner or user
        return repos.categories.create(
            Category(name=name, type=category_type, user_id=owner.id), user_id=owner.id
        )

    return _create_category


@pytest.fixture
def transaction_factory(repos, user) -> Callable[..., Transaction]:
    """Factory for creating persisted transactions.

    Returns:
        Callable: Function that creates and persists Transaction instances
    """

    def _create_transaction(
        amount: str = "10.00",
        txn_type: str = "expense",
        *,
        on: date | None = None,
        category_id: int | None = None,
        description: str = "Test transaction",
        owner: User | None = None,
    ) -> Transaction:
        owner = owner or user
        return repos.transactions.create(
            Transaction(
                user_id=owner.id,
                type=txn_type,
                amount=amount,
                description=description,
                category_id=category_id,
                date=on or date(2024, 1, 15),
            ),
            user_id=owner.id,
        )

    return _create_transaction


@pytest.fixture
def budget_factory(repos, user) -> Callable[..., Budget]:
    def _create_budget(
        category_id: int,
        amount: str = "400.00",
        period: str = "monthly",
        owner: User | None = None,
        **extra,
    ) -> Budget:
        owner = owner or user
        return repos.budgets.create(
            Budget(
                user_id=owner.id,
                category_id=category_id,
                amount=amount,
                period=period,
                **extra,
            ),
            user_id=owner.id,
        )

    return _create_budget


@pytest.fixture
def goal_factory(repos, user) -> Callable[..., SavingsGoal]:
    def _create_goal(
        title: str = "Emergency fund",
        target_amount: str = "1000.00",
        current_amount: str = "0",
        target_date: date = date(2024, 12, 31),
        owner: User | None = None,
    ) -> SavingsGoal:
        owner = owner or user
        return repos.savings_goals.create(
            SavingsGoal(
                user_id=owner.id,
                title=title,
                target_amount=target_amount,
                current_amount=current_amount,
                target_date=target_date,
            ),
            user_id=owner.id,
        )

    return _create_goal


# =============================================================================
# Unsaved model builders for engine tests
# =============================================================================


def make_txn(
    amount: str,
    txn_type: str = "expense",
    on: date = date(2024, 1, 15),
    category_id: int | None = None,
    *,
    txn_id: int | None = None,
    description: str = "",
) -> Transaction:
    """Build an unsaved transaction for pure aggregation tests."""

    return Transaction(
        id=txn_id,
        user_id=1,
        type=txn_type,
        amount=amount,
        description=description,
        category_id=category_id,
        date=on,
    )


def make_category(category_id: int, name: str, category_type: str = "expense") -> Category:
    return Category(id=category_id, user_id=1, name=name, type=category_type)


# =============================================================================
# Flask app / API client
# =============================================================================


@pytest.fixture
def app(tmp_path, monkeypatch):
    """Application built through the factory against a temporary data dir."""

    monkeypatch.setenv("FINTRACK_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.setenv("FINTRACK_DATABASE_URL", f"sqlite:///{tmp_path / 'api.db'}")
    monkeypatch.setenv("FINTRACK_SECRET_KEY", "test-secret")
    monkeypatch.setenv("FINTRACK_JWT_SECRET_KEY", "test-jwt-secret-with-enough-length")
    monkeypatch.delenv("FINTRACK_BUDGET_WINDOW", raising=False)
    monkeypatch.delenv("FINTRACK_SEED_DEFAULT_CATEGORIES", raising=False)

    from fintrack import create_app

    app = create_app("testing")
    yield app

    app.extensions["fintrack_db"].engine.dispose()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


def register(client, email: str = "alice@example.com", password: str = "secret123") -> dict:
    """Register an account through the API and return the JSON payload."""

    response = client.post(
        "/api/auth/register",
        json={
            "email": email,
            "password": password,
            "confirm_password": password,
            "username": email.split("@")[0],
        },
    )
    assert response.status_code == 201, response.get_json()
    return response.get_json()


@pytest.fixture
def auth_headers(client) -> dict[str, str]:
    """Bearer header for a freshly registered account."""

    token = register(client)["token"]
    return {"Authorization": f"Bearer {token}"}
