"""SQLModel implementation of User repository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.token import RevokedToken
from ...models.user import User


class SQLModelUserRepository:
    """SQLModel-based user repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self.session_factory() as session:
            user = session.get(User, user_id)
            if user:
                session.expunge(user)
            return user

    def get_by_email(self, email: str) -> Optional[User]:
        """Emails are stored lower-cased, so lookups normalize the same way."""
        normalized = email.strip().lower()
        with self.session_factory() as session:
            user = session.exec(select(User).where(User.email == normalized)).first()
            if user:
                session.expunge(user)
            return user

    def create(self, user: User) -> User:
        with self.session_factory() as session:
            user.email = user.email.strip().lower()
            session.add(user)
            session.commit()
            session.refresh(user)
            session.expunge(user)
            return user

    def touch_login(self, user_id: int) -> None:
        with self.session_factory() as session:
            user = session.get(User, user_id)
            if user is None:
                return
            user.last_login = datetime.now(timezone.utc)
            session.add(user)
            session.commit()

    def revoke_token(self, jti: str, *, user_id: int) -> None:
        with self.session_factory() as session:
            existing = session.exec(select(RevokedToken).where(RevokedToken.jti == jti)).first()
            if existing is not None:
                return
            session.add(RevokedToken(jti=jti, user_id=user_id))
            session.commit()

    def is_token_revoked(self, jti: str) -> bool:
        with self.session_factory() as session:
            return (
                session.exec(select(RevokedToken.id).where(RevokedToken.jti == jti)).first()
                is not None
            )
