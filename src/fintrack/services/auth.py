"""Authentication and user management services."""

from __future__ import annotations

from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError

from ..domain.repositories import UserRepository
from ..logging_config import get_logger
from ..models.user import User

logger = get_logger(__name__)

_hasher = PasswordHasher()


class DuplicateUserError(ValueError):
    """Raised when registering an email that already has an account."""


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    try:
        return _hasher.verify(password_hash, password)
    except (VerifyMismatchError, InvalidHash, VerificationError):
        return False


def register_user(
    *,
    email: str,
    password: str,
    username: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    users: UserRepository,
) -> User:
    """Create a new user with a hashed password.

    Raises:
        DuplicateUserError: when the email is already registered
    """

    if users.get_by_email(email) is not None:
        raise DuplicateUserError("User already exists")
    user = users.create(
        User(
            email=email,
            username=username.strip(),
            password_hash=hash_password(password),
            first_name=first_name or None,
            last_name=last_name or None,
        )
    )
    logger.info("User registered", extra={"user_id": user.id})
    return user


def authenticate(*, email: str, password: str, users: UserRepository) -> Optional[User]:
    """Validate credentials and return the user when correct."""

    if not email.strip():
        return None
    user = users.get_by_email(email)
    if user is None or not verify_password(user.password_hash, password):
        logger.info("Login rejected", extra={"email": email.strip().lower()})
        return None
    users.touch_login(user.id)  # type: ignore[arg-type]
    return user
