"""Database and extension wiring for FinTrack."""

from __future__ import annotations

from dataclasses import dataclass

from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from sqlalchemy.engine import Engine

from .config import BaseConfig
from .domain.repositories import (
    BudgetRepository,
    CategoryRepository,
    SavingsGoalRepository,
    TransactionRepository,
    UserRepository,
)
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelBudgetRepository,
    SQLModelCategoryRepository,
    SQLModelSavingsGoalRepository,
    SQLModelTransactionRepository,
    SQLModelUserRepository,
)

jwt = JWTManager()


@dataclass(slots=True)
class Repositories:
    """Repository set bound to one session factory."""

    users: UserRepository
    categories: CategoryRepository
    transactions: TransactionRepository
    budgets: BudgetRepository
    savings_goals: SavingsGoalRepository

    @classmethod
    def from_session_factory(cls, session_factory: SessionFactory) -> "Repositories":
        return cls(
            users=SQLModelUserRepository(session_factory),
            categories=SQLModelCategoryRepository(session_factory),
            transactions=SQLModelTransactionRepository(session_factory),
            budgets=SQLModelBudgetRepository(session_factory),
            savings_goals=SQLModelSavingsGoalRepository(session_factory),
        )


@dataclass(slots=True)
class DatabaseState:
    engine: Engine
    session_factory: SessionFactory
    repositories: Repositories


def init_db(app: Flask) -> None:
    """Create the engine and schema, then attach repositories to the app."""

    config: BaseConfig = app.config["FINTRACK_CONFIG"]
    engine, session_factory = bootstrap_database(config)
    app.extensions["fintrack_db"] = DatabaseState(
        engine=engine,
        session_factory=session_factory,
        repositories=Repositories.from_session_factory(session_factory),
    )
    # TODO(@migrations): replace create_all with Alembic once the schema stabilizes.


def _state() -> DatabaseState:
    state = current_app.extensions.get("fintrack_db")
    if state is None:  # pragma: no cover - exercised only on misconfigured apps
        raise RuntimeError("Database engine not initialized")
    return state


def get_repositories() -> Repositories:
    """Return the repository set bound to the current app."""

    return _state().repositories