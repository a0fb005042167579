"""SQLModel implementation of Transaction repository."""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.transaction import Transaction


class SQLModelTransactionRepository:
    """SQLModel-based transaction repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, transaction_id: int, *, user_id: int) -> Optional[Transaction]:
        """Retrieve a transaction by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Transaction)
                .where(Transaction.id == transaction_id)
                .where(Transaction.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: int) -> list[Transaction]:
        """List all transactions, newest first."""
        return self.search(user_id=user_id)

    def filter_by_date_range(
        self, start_date: date, end_date: date, *, user_id: int
    ) -> list[Transaction]:
        """Get transactions within an inclusive date range."""
        return self.search(user_id=user_id, start_date=start_date, end_date=end_date)

    def search(
        self,
        *,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        txn_type: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> list[Transaction]:
        """Search with optional filters, newest first."""
        with self.session_factory() as session:
            statement = select(Transaction).where(Transaction.user_id == user_id)

            if start_date:
                statement = statement.where(Transaction.date >= start_date)
            if end_date:
                statement = statement.where(Transaction.date <= end_date)
            if txn_type:
                statement = statement.where(Transaction.type == txn_type)
            if category_id:
                statement = statement.where(Transaction.category_id == category_id)

            statement = statement.order_by(
                Transaction.date.desc(), Transaction.id.desc()  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, transaction: Transaction, *, user_id: int) -> Transaction:
        """Create a new transaction."""
        with self.session_factory() as session:
            transaction.user_id = user_id
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def update(
        self, transaction_id: int, changes: dict, *, user_id: int
    ) -> Optional[Transaction]:
        """Apply ``changes`` to an existing transaction."""
        with self.session_factory() as session:
            transaction = session.exec(
                select(Transaction)
                .where(Transaction.id == transaction_id)
                .where(Transaction.user_id == user_id)
            ).first()
            if transaction is None:
                return None
            for key, value in changes.items():
                setattr(transaction, key, value)
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def delete(self, transaction_id: int, *, user_id: int) -> bool:
        """Delete a transaction by ID."""
        with self.session_factory() as session:
            transaction = session.exec(
                select(Transaction)
                .where(Transaction.id == transaction_id)
                .where(Transaction.user_id == user_id)
            ).first()
            if transaction is None:
                return False
            session.delete(transaction)
            session.commit()
            return True
