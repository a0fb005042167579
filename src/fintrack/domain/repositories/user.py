"""User repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.user import User


class UserRepository(Protocol):
    """Repository for user accounts and revoked tokens."""

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Retrieve a user by ID."""
        ...

    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve a user by (case-insensitive) email."""
        ...

    def create(self, user: User) -> User:
        """Persist a new user."""
        ...

    def touch_login(self, user_id: int) -> None:
        """Record a successful login."""
        ...

    def revoke_token(self, jti: str, *, user_id: int) -> None:
        """Mark a token id as revoked."""
        ...

    def is_token_revoked(self, jti: str) -> bool:
        """Return True when the token id has been revoked."""
        ...
