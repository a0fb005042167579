"""SQLModel implementation of Category repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.budget import Budget
from ...models.category import Category
from ...models.transaction import Transaction


class SQLModelCategoryRepository:
    """SQLModel-based category repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, category_id: int, *, user_id: int) -> Optional[Category]:
        """Retrieve a category by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Category)
                .where(Category.id == category_id)
                .where(Category.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: int, category_type: Optional[str] = None) -> list[Category]:
        """List categories ordered by type then name."""
        with self.session_factory() as session:
            statement = select(Category).where(Category.user_id == user_id)
            if category_type:
                statement = statement.where(Category.type == category_type)
            statement = statement.order_by(Category.type, Category.name)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, category: Category, *, user_id: int) -> Category:
        """Create a new category."""
        with self.session_factory() as session:
            category.user_id = user_id
            session.add(category)
            session.commit()
            session.refresh(category)
            session.expunge(category)
            return category

    def create_many(self, categories: list[Category], *, user_id: int) -> list[Category]:
        """Create several categories in one commit."""
        with self.session_factory() as session:
            for category in categories:
                category.user_id = user_id
                session.add(category)
            session.commit()
            for category in categories:
                session.refresh(category)
            session.expunge_all()
            return categories

    def delete(self, category_id: int, *, user_id: int) -> bool:
        """Delete a category.

        Transactions keep their history with ``category_id`` cleared; budgets for
        the category are removed since they cannot exist without it.
        """
        with self.session_factory() as session:
            category = session.exec(
                select(Category)
                .where(Category.id == category_id)
                .where(Category.user_id == user_id)
            ).first()
            if category is None:
                return False

            transactions = session.exec(
                select(Transaction)
                .where(Transaction.user_id == user_id)
                .where(Transaction.category_id == category_id)
            ).all()
            for txn in transactions:
                txn.category_id = None
                session.add(txn)

            budgets = session.exec(
                select(Budget)
                .where(Budget.user_id == user_id)
                .where(Budget.category_id == category_id)
            ).all()
            for budget in budgets:
                session.delete(budget)

            session.flush()
            session.delete(category)
            session.commit()
            return True
