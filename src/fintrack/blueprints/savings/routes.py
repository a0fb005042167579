"""Savings goal routes."""

from __future__ import annotations

from flask import jsonify
from flask_jwt_extended import jwt_required

from ...extensions import get_repositories
from ...logging_config import get_logger
from ...models.savings_goal import SavingsGoal
from ...money import as_percent
from ...services.savings import compute_goal_progress, overall_savings_progress
from ..api import ValidationFailed, current_user_id, json_body, not_found, reference_date
from . import bp
from .forms import SavingsGoalForm

logger = get_logger(__name__)


@bp.get("")
@jwt_required()
def list_goals():
    goals = get_repositories().savings_goals.list_all(user_id=current_user_id())
    return jsonify([goal.to_dict() for goal in goals])


@bp.post("")
@jwt_required()
def create_goal():
    user_id = current_user_id()
    form = SavingsGoalForm.from_mapping(json_body())
    if not form.validate():
        raise ValidationFailed("Invalid savings goal data", form.errors)

    goal = get_repositories().savings_goals.create(
        SavingsGoal(user_id=user_id, **form.cleaned), user_id=user_id
    )
    logger.info("Savings goal created", extra={"goal_id": goal.id})
    return jsonify(goal.to_dict()), 201


@bp.get("/<int:goal_id>")
@jwt_required()
def get_goal(goal_id: int):
    goal = get_repositories().savings_goals.get_by_id(goal_id, user_id=current_user_id())
    if goal is None:
        raise not_found("Savings goal")
    return jsonify(goal.to_dict())


@bp.put("/<int:goal_id>")
@bp.patch("/<int:goal_id>")
@jwt_required()
def update_goal(goal_id: int):
    user_id = current_user_id()
    repo = get_repositories().savings_goals
    if repo.get_by_id(goal_id, user_id=user_id) is None:
        raise not_found("Savings goal")

    form = SavingsGoalForm.from_mapping(json_body(), partial=True)
    if not form.validate():
        raise ValidationFailed("Invalid savings goal data", form.errors)

    updated = repo.update(goal_id, form.cleaned, user_id=user_id)
    if updated is None:
        raise not_found("Savings goal")
    logger.info("Savings goal updated", extra={"goal_id": goal_id})
    return jsonify(updated.to_dict())


@bp.delete("/<int:goal_id>")
@jwt_required()
def delete_goal(goal_id: int):
    if not get_repositories().savings_goals.delete(goal_id, user_id=current_user_id()):
        raise not_found("Savings goal")
    logger.info("Savings goal deleted", extra={"goal_id": goal_id})
    return jsonify({"message": "Savings goal deleted"})


@bp.get("/progress")
@jwt_required()
def goal_progress():
    """Per-goal progress plus the aggregate percentage across all goals."""

    goals = get_repositories().savings_goals.list_all(user_id=current_user_id())
    today = reference_date()
    return jsonify(
        {
            "overall_percentage": as_percent(overall_savings_progress(goals)),
            "goals": [compute_goal_progress(goal, today=today).to_dict() for goal in goals],
        }
    )
