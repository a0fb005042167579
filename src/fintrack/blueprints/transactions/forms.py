"""Transaction payload validation."""

from __future__ import annotations

from ...models.enums import RECURRING_PERIODS, TRANSACTION_TYPES
from ..form_base import PayloadForm


class TransactionForm(PayloadForm):
    """Create/update payload for a ledger transaction.

    A recurring transaction without an explicit period defaults to monthly;
    turning recurring off clears the period.
    """

    FIELDS = (
        "type",
        "amount",
        "description",
        "category_id",
        "date",
        "recurring",
        "recurring_period",
    )

    def clean(self) -> None:
        self._choice("type", "Type", TRANSACTION_TYPES)
        self._amount("amount", "Amount")
        self._text("description", "Description", max_length=255)
        self._identifier("category_id", "Category", required=False)
        self._date("date", "Date")
        recurring = self._bool("recurring", "Recurring")
        self._choice(
            "recurring_period", "Recurring period", RECURRING_PERIODS, required=False
        )

        if recurring is True and not self.cleaned.get("recurring_period"):
            self.cleaned["recurring_period"] = "monthly"
        elif recurring is False:
            self.cleaned["recurring_period"] = None
