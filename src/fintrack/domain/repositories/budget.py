"""Budget repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.budget import Budget


class BudgetRepository(Protocol):
    """Repository for managing budget entities."""

    def get_by_id(self, budget_id: int, *, user_id: int) -> Optional[Budget]:
        """Retrieve a budget by ID."""
        ...

    def list_all(self, *, user_id: int) -> list[Budget]:
        """List all budgets."""
        ...

    def create(self, budget: Budget, *, user_id: int) -> Budget:
        """Create a new budget."""
        ...

    def update(self, budget_id: int, changes: dict, *, user_id: int) -> Optional[Budget]:
        """Apply ``changes`` to an existing budget; None when not found."""
        ...

    def delete(self, budget_id: int, *, user_id: int) -> bool:
        """Delete a budget by ID; False when not found."""
        ...
