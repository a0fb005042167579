"""Transaction routes."""

from __future__ import annotations

from datetime import date
from typing import Optional

from flask import jsonify, request
from flask_jwt_extended import jwt_required

from ...extensions import get_repositories
from ...logging_config import get_logger
from ...models.enums import TRANSACTION_TYPES
from ...models.transaction import Transaction
from ..api import ValidationFailed, current_user_id, json_body, not_found
from . import bp
from .forms import TransactionForm

logger = get_logger(__name__)


def _query_date(name: str, errors: dict[str, list[str]]) -> Optional[date]:
    raw = request.args.get(name, "").strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        errors.setdefault(name, []).append("Enter a valid date (YYYY-MM-DD).")
        return None


def _check_category(
    category_id: Optional[int], txn_type: str, *, user_id: int, errors: dict[str, list[str]]
) -> None:
    """A referenced category must belong to the user and share the transaction type."""

    if category_id is None:
        return
    category = get_repositories().categories.get_by_id(category_id, user_id=user_id)
    if category is None:
        errors.setdefault("category_id", []).append("Unknown category.")
    elif category.type != txn_type:
        errors.setdefault("category_id", []).append(
            "Category type must match the transaction type."
        )


@bp.get("")
@jwt_required()
def list_transactions():
    """List transactions newest first.

    Optional query filters: ``start``/``end`` (inclusive ISO dates), ``type``
    and ``category_id``.
    """

    errors: dict[str, list[str]] = {}
    start = _query_date("start", errors)
    end = _query_date("end", errors)
    txn_type = request.args.get("type") or None
    if txn_type is not None and txn_type not in TRANSACTION_TYPES:
        errors.setdefault("type", []).append("Type must be one of: income, expense.")
    category_id = request.args.get("category_id", type=int)
    if errors:
        raise ValidationFailed("Invalid request data", errors)

    rows = get_repositories().transactions.search(
        user_id=current_user_id(),
        start_date=start,
        end_date=end,
        txn_type=txn_type,
        category_id=category_id,
    )
    return jsonify([row.to_dict() for row in rows])


@bp.post("")
@jwt_required()
def create_transaction():
    """Persist a new transaction from submitted JSON."""

    user_id = current_user_id()
    form = TransactionForm.from_mapping(json_body())
    if form.validate():
        _check_category(
            form.cleaned.get("category_id"), form.cleaned["type"], user_id=user_id, errors=form.errors
        )
    if form.errors:
        raise ValidationFailed("Invalid transaction data", form.errors)

    transaction = get_repositories().transactions.create(
        Transaction(user_id=user_id, **form.cleaned), user_id=user_id
    )
    logger.info(
        "Transaction created",
        extra={"transaction_id": transaction.id, "type": transaction.type},
    )
    return jsonify(transaction.to_dict()), 201


@bp.get("/<int:transaction_id>")
@jwt_required()
def get_transaction(transaction_id: int):
    transaction = get_repositories().transactions.get_by_id(
        transaction_id, user_id=current_user_id()
    )
    if transaction is None:
        raise not_found("Transaction")
    return jsonify(transaction.to_dict())


@bp.put("/<int:transaction_id>")
@bp.patch("/<int:transaction_id>")
@jwt_required()
def update_transaction(transaction_id: int):
    """Apply a partial update; ``id`` and ``user_id`` are never writable."""

    user_id = current_user_id()
    repo = get_repositories().transactions
    existing = repo.get_by_id(transaction_id, user_id=user_id)
    if existing is None:
        raise not_found("Transaction")

    form = TransactionForm.from_mapping(json_body(), partial=True)
    if form.validate() and ("category_id" in form.cleaned or "type" in form.cleaned):
        _check_category(
            form.cleaned.get("category_id", existing.category_id),
            form.cleaned.get("type", existing.type),
            user_id=user_id,
            errors=form.errors,
        )
    if form.errors:
        raise ValidationFailed("Invalid transaction data", form.errors)

    updated = repo.update(transaction_id, form.cleaned, user_id=user_id)
    if updated is None:
        raise not_found("Transaction")
    logger.info("Transaction updated", extra={"transaction_id": transaction_id})
    return jsonify(updated.to_dict())


@bp.delete("/<int:transaction_id>")
@jwt_required()
def delete_transaction(transaction_id: int):
    if not get_repositories().transactions.delete(transaction_id, user_id=current_user_id()):
        raise not_found("Transaction")
    logger.info("Transaction deleted", extra={"transaction_id": transaction_id})
    return jsonify({"message": "Transaction deleted"})
