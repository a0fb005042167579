"""Budget routes, including spend progress."""

from __future__ import annotations

from flask import current_app, jsonify
from flask_jwt_extended import jwt_required

from ...extensions import get_repositories
from ...logging_config import get_logger
from ...models.budget import Budget
from ...services.budgeting import compute_all_budget_progress
from ..api import ValidationFailed, current_user_id, json_body, not_found, reference_date
from . import bp
from .forms import BudgetForm

logger = get_logger(__name__)


def _check_category(category_id: int, *, user_id: int, errors: dict[str, list[str]]) -> None:
    category = get_repositories().categories.get_by_id(category_id, user_id=user_id)
    if category is None:
        errors.setdefault("category_id", []).append("Unknown category.")
    elif category.type != "expense":
        errors.setdefault("category_id", []).append("Budgets can only track expense categories.")


@bp.get("")
@jwt_required()
def list_budgets():
    budgets = get_repositories().budgets.list_all(user_id=current_user_id())
    return jsonify([budget.to_dict() for budget in budgets])


@bp.post("")
@jwt_required()
def create_budget():
    user_id = current_user_id()
    form = BudgetForm.from_mapping(json_body())
    if form.validate():
        _check_category(form.cleaned["category_id"], user_id=user_id, errors=form.errors)
    if form.errors:
        raise ValidationFailed("Invalid budget data", form.errors)

    budget = get_repositories().budgets.create(
        Budget(user_id=user_id, **form.cleaned), user_id=user_id
    )
    logger.info(
        "Budget created",
        extra={"budget_id": budget.id, "category_id": budget.category_id},
    )
    return jsonify(budget.to_dict()), 201


@bp.get("/<int:budget_id>")
@jwt_required()
def get_budget(budget_id: int):
    budget = get_repositories().budgets.get_by_id(budget_id, user_id=current_user_id())
    if budget is None:
        raise not_found("Budget")
    return jsonify(budget.to_dict())


@bp.put("/<int:budget_id>")
@bp.patch("/<int:budget_id>")
@jwt_required()
def update_budget(budget_id: int):
    user_id = current_user_id()
    repo = get_repositories().budgets
    existing = repo.get_by_id(budget_id, user_id=user_id)
    if existing is None:
        raise not_found("Budget")

    form = BudgetForm.from_mapping(json_body(), partial=True)
    if form.validate():
        if "category_id" in form.cleaned:
            _check_category(form.cleaned["category_id"], user_id=user_id, errors=form.errors)
        start = form.cleaned.get("start_date", existing.start_date)
        end = form.cleaned.get("end_date", existing.end_date)
        if start and end and start > end:
            form.errors.setdefault("end_date", []).append(
                "End date must be on or after the start date."
            )
    if form.errors:
        raise ValidationFailed("Invalid budget data", form.errors)

    updated = repo.update(budget_id, form.cleaned, user_id=user_id)
    if updated is None:
        raise not_found("Budget")
    logger.info("Budget updated", extra={"budget_id": budget_id})
    return jsonify(updated.to_dict())


@bp.delete("/<int:budget_id>")
@jwt_required()
def delete_budget(budget_id: int):
    if not get_repositories().budgets.delete(budget_id, user_id=current_user_id()):
        raise not_found("Budget")
    logger.info("Budget deleted", extra={"budget_id": budget_id})
    return jsonify({"message": "Budget deleted"})


@bp.get("/progress")
@jwt_required()
def budget_progress():
    """Spent, remaining, percentage and status for every budget of the user.

    Spend is windowed according to ``FINTRACK_BUDGET_WINDOW``; ``?as_of``
    sets the reference date for the ``period`` policy.
    """

    user_id = current_user_id()
    repos = get_repositories()
    progress = compute_all_budget_progress(
        repos.budgets.list_all(user_id=user_id),
        categories=repos.categories.list_all(user_id=user_id),
        transactions=repos.transactions.list_all(user_id=user_id),
        window=current_app.config["FINTRACK_CONFIG"].BUDGET_WINDOW,
        today=reference_date(),
    )
    return jsonify([item.to_dict() for item in progress])
