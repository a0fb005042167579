"""CSV export helpers for FinTrack reports."""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable

from ..models.category import Category
from ..models.transaction import Transaction
from ..money import format_amount, to_decimal
from .reports import UNCATEGORIZED

CSV_HEADERS = ["Date", "Type", "Category", "Description", "Amount"]


def build_csv_rows(
    transactions: Iterable[Transaction], categories: Iterable[Category]
) -> list[list[str]]:
    """One row per transaction in (date, type, category name, description, amount) order."""

    names = {c.id: c.name for c in categories}
    return [
        [
            txn.date.isoformat(),
            txn.type,
            names.get(txn.category_id, UNCATEGORIZED),
            txn.description or "",
            format_amount(to_decimal(txn.amount)),
        ]
        for txn in transactions
    ]


def _write(fh, rows: list[list[str]]) -> None:
    writer = csv.writer(fh, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    writer.writerows(rows)


def render_csv(transactions: Iterable[Transaction], categories: Iterable[Category]) -> str:
    """Return the report CSV as text, header first.

    Standard quoting applies, so commas, quotes and newlines in descriptions are
    preserved.
    """

    buffer = io.StringIO()
    _write(buffer, build_csv_rows(transactions, categories))
    return buffer.getvalue()


def export_transactions_csv(
    *,
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    output_path: Path,
) -> Path:
    """Write the report CSV to ``output_path`` and return the path written."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        _write(fh, build_csv_rows(transactions, categories))
    return output_path
