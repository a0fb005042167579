"""Allowed values for string-backed enum columns."""

from __future__ import annotations

TRANSACTION_TYPES = ("income", "expense")
BUDGET_PERIODS = ("weekly", "monthly", "yearly")
RECURRING_PERIODS = ("daily", "weekly", "monthly", "yearly")
