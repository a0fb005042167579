"""Category payload validation."""

from __future__ import annotations

from ...models.enums import TRANSACTION_TYPES
from ..form_base import PayloadForm


class CategoryForm(PayloadForm):
    FIELDS = ("name", "type")

    def clean(self) -> None:
        self._text("name", "Name", max_length=64)
        self._choice("type", "Type", TRANSACTION_TYPES)
