"""Category routes."""

from __future__ import annotations

from flask import jsonify, request
from flask_jwt_extended import jwt_required

from ...extensions import get_repositories
from ...logging_config import get_logger
from ...models.category import Category
from ...models.enums import TRANSACTION_TYPES
from ..api import ValidationFailed, current_user_id, json_body, not_found
from . import bp
from .forms import CategoryForm

logger = get_logger(__name__)


@bp.get("")
@jwt_required()
def list_categories():
    """List the user's categories; ``?type=income|expense`` narrows the list."""

    category_type = request.args.get("type") or None
    if category_type is not None and category_type not in TRANSACTION_TYPES:
        raise ValidationFailed(
            "Invalid request data", {"type": ["Type must be one of: income, expense."]}
        )
    rows = get_repositories().categories.list_all(
        user_id=current_user_id(), category_type=category_type
    )
    return jsonify([row.to_dict() for row in rows])


@bp.post("")
@jwt_required()
def create_category():
    form = CategoryForm.from_mapping(json_body())
    if not form.validate():
        raise ValidationFailed("Invalid category data", form.errors)

    user_id = current_user_id()
    category = get_repositories().categories.create(
        Category(user_id=user_id, **form.cleaned), user_id=user_id
    )
    logger.info("Category created", extra={"category_id": category.id})
    return jsonify(category.to_dict()), 201


@bp.delete("/<int:category_id>")
@jwt_required()
def delete_category(category_id: int):
    if not get_repositories().categories.delete(category_id, user_id=current_user_id()):
        raise not_found("Category")
    logger.info("Category deleted", extra={"category_id": category_id})
    return jsonify({"message": "Category deleted"})
