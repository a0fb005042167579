"""SQLModel implementation of SavingsGoal repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.savings_goal import SavingsGoal


class SQLModelSavingsGoalRepository:
    """SQLModel-based savings goal repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def _owned(self, session: Session, goal_id: int, user_id: int) -> Optional[SavingsGoal]:
        return session.exec(
            select(SavingsGoal)
            .where(SavingsGoal.id == goal_id)
            .where(SavingsGoal.user_id == user_id)
        ).first()

    def get_by_id(self, goal_id: int, *, user_id: int) -> Optional[SavingsGoal]:
        with self.session_factory() as session:
            goal = self._owned(session, goal_id, user_id)
            if goal:
                session.expunge(goal)
            return goal

    def list_all(self, *, user_id: int) -> list[SavingsGoal]:
        """List goals ordered by target date."""
        with self.session_factory() as session:
            statement = (
                select(SavingsGoal)
                .where(SavingsGoal.user_id == user_id)
                .order_by(SavingsGoal.target_date, SavingsGoal.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, goal: SavingsGoal, *, user_id: int) -> SavingsGoal:
        with self.session_factory() as session:
            goal.user_id = user_id
            session.add(goal)
            session.commit()
            session.refresh(goal)
            session.expunge(goal)
            return goal

    def update(self, goal_id: int, changes: dict, *, user_id: int) -> Optional[SavingsGoal]:
        with self.session_factory() as session:
            goal = self._owned(session, goal_id, user_id)
            if goal is None:
                return None
            for key, value in changes.items():
                setattr(goal, key, value)
            session.add(goal)
            session.commit()
            session.refresh(goal)
            session.expunge(goal)
            return goal

    def delete(self, goal_id: int, *, user_id: int) -> bool:
        with self.session_factory() as session:
            goal = self._owned(session, goal_id, user_id)
            if goal is None:
                return False
            session.delete(goal)
            session.commit()
            return True
