"""Budget payload validation."""

from __future__ import annotations

from ...models.enums import BUDGET_PERIODS
from ..form_base import PayloadForm


class BudgetForm(PayloadForm):
    FIELDS = ("category_id", "amount", "period", "start_date", "end_date")

    def clean(self) -> None:
        self._identifier("category_id", "Category")
        self._amount("amount", "Amount")
        self._choice("period", "Period", BUDGET_PERIODS, default="monthly")
        start = self._date("start_date", "Start date", required=False)
        end = self._date("end_date", "End date", required=False)
        if start and end and start > end:
            self._add_error("end_date", "End date must be on or after the start date.")
