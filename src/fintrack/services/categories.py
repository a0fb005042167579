"""Default category set and seeding."""

from __future__ import annotations

from ..domain.repositories import CategoryRepository
from ..logging_config import get_logger
from ..models.category import Category

logger = get_logger(__name__)

DEFAULT_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("Salary", "income"),
    ("Freelance", "income"),
    ("Groceries", "expense"),
    ("Transportation", "expense"),
    ("Entertainment", "expense"),
    ("Shopping", "expense"),
)


def seed_default_categories(
    *, user_id: int, categories: CategoryRepository
) -> list[Category]:
    """Give a new user the starter categories; existing names are left alone."""

    existing = {c.name.lower() for c in categories.list_all(user_id=user_id)}
    missing = [
        Category(name=name, type=category_type, user_id=user_id)
        for name, category_type in DEFAULT_CATEGORIES
        if name.lower() not in existing
    ]
    if not missing:
        return []
    created = categories.create_many(missing, user_id=user_id)
    logger.info("Seeded default categories", extra={"user_id": user_id, "count": len(created)})
    return created
