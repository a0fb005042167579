"""Savings goal table."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class SavingsGoal(SQLModel, table=True):
    """Target amount to accumulate by a date, tracked apart from transactions."""

    __tablename__: ClassVar[str] = "savings_goal"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    title: str = Field(nullable=False, max_length=128)
    description: Optional[str] = Field(default=None, max_length=512)
    target_amount: str = Field(nullable=False, max_length=32)
    current_amount: str = Field(default="0", nullable=False, max_length=32)
    target_date: date = Field(nullable=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "target_amount": self.target_amount,
            "current_amount": self.current_amount,
            "target_date": self.target_date.isoformat(),
        }
