"""SQLModel definitions for ledger transactions."""

from __future__ import annotations

import datetime as dt
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Transaction(SQLModel, table=True):
    """A single income or expense entry.

    ``amount`` is always positive and kept as a base-10 string; ``type`` carries
    the direction.
    """

    __tablename__: ClassVar[str] = "transaction"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    type: str = Field(nullable=False, max_length=16, index=True)
    amount: str = Field(nullable=False, max_length=32)
    description: str = Field(default="", max_length=255)
    category_id: Optional[int] = Field(default=None, foreign_key="category.id", index=True)
    date: dt.date = Field(nullable=False, index=True)
    recurring: bool = Field(default=False, nullable=False)
    recurring_period: Optional[str] = Field(default=None, max_length=16)
    created_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc),
        nullable=False,
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "type": self.type,
            "amount": self.amount,
            "description": self.description,
            "category_id": self.category_id,
            "date": self.date.isoformat(),
            "recurring": self.recurring,
            "recurring_period": self.recurring_period,
        }
