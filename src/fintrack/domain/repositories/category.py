"""Category repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.category import Category


class CategoryRepository(Protocol):
    """Repository for managing category entities."""

    def get_by_id(self, category_id: int, *, user_id: int) -> Optional[Category]:
        """Retrieve a category by ID."""
        ...

    def list_all(self, *, user_id: int, category_type: Optional[str] = None) -> list[Category]:
        """List categories, optionally restricted to one type."""
        ...

    def create(self, category: Category, *, user_id: int) -> Category:
        """Create a new category."""
        ...

    def create_many(self, categories: list[Category], *, user_id: int) -> list[Category]:
        """Create several categories in one commit."""
        ...

    def delete(self, category_id: int, *, user_id: int) -> bool:
        """Delete a category, detaching transactions and dropping its budgets."""
        ...
