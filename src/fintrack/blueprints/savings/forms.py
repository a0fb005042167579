"""Savings goal payload validation."""

from __future__ import annotations

from ..form_base import PayloadForm


class SavingsGoalForm(PayloadForm):
    FIELDS = ("title", "description", "target_amount", "current_amount", "target_date")

    def clean(self) -> None:
        self._text("title", "Title", max_length=128)
        self._text("description", "Description", max_length=512, required=False)
        self._amount("target_amount", "Target amount")
        self._amount("current_amount", "Current amount", allow_zero=True, default="0.00")
        self._date("target_date", "Target date")
