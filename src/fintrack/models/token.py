"""Revoked access tokens."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class RevokedToken(SQLModel, table=True):
    """Token id (``jti``) invalidated by logout before its natural expiry."""

    __tablename__: ClassVar[str] = "revoked_token"

    id: Optional[int] = Field(default=None, primary_key=True)
    jti: str = Field(nullable=False, unique=True, index=True, max_length=64)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    revoked_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
