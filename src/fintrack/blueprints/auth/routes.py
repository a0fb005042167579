"""Auth routes: register, login, logout and the current profile."""

from __future__ import annotations

from flask import current_app, jsonify
from flask_jwt_extended import create_access_token, get_current_user, get_jwt, jwt_required

from ...extensions import get_repositories
from ...logging_config import get_logger
from ...services import auth as auth_service
from ...services.categories import seed_default_categories
from ..api import ValidationFailed, current_user_id, json_body, json_error
from . import bp
from .forms import LoginForm, RegisterForm

logger = get_logger(__name__)


def _session_payload(user):
    token = create_access_token(identity=str(user.id))
    return {"user": user.to_dict(), "token": token}


@bp.post("/register")
def register():
    """Create an account and return a bearer token for it."""

    form = RegisterForm.from_mapping(json_body())
    if not form.validate():
        raise ValidationFailed("Invalid user data", form.errors)

    repos = get_repositories()
    try:
        user = auth_service.register_user(
            email=form.cleaned["email"],
            password=form.cleaned["password"],
            username=form.cleaned["username"],
            first_name=form.cleaned.get("first_name"),
            last_name=form.cleaned.get("last_name"),
            users=repos.users,
        )
    except auth_service.DuplicateUserError:
        return json_error("User already exists", 400)

    if current_app.config["FINTRACK_CONFIG"].SEED_DEFAULT_CATEGORIES:
        seed_default_categories(user_id=user.id, categories=repos.categories)

    return jsonify(_session_payload(user)), 201


@bp.post("/login")
def login():
    form = LoginForm.from_mapping(json_body())
    if not form.validate():
        raise ValidationFailed("Invalid user data", form.errors)

    user = auth_service.authenticate(
        email=form.cleaned["email"],
        password=form.cleaned["password"],
        users=get_repositories().users,
    )
    if user is None:
        return json_error("Invalid credentials", 401)
    logger.info("User logged in", extra={"user_id": user.id})
    return jsonify(_session_payload(user))


@bp.post("/logout")
@jwt_required(optional=True)
def logout():
    """Revoke the presented token; without a token this is a no-op."""

    claims = get_jwt()
    if claims and get_current_user() is not None:
        user_id = current_user_id()
        get_repositories().users.revoke_token(claims["jti"], user_id=user_id)
        logger.info("User logged out", extra={"user_id": user_id})
    return jsonify({"message": "Logged out"})


@bp.get("/me")
@jwt_required()
def me():
    current_user_id()
    return jsonify({"user": get_current_user().to_dict()})
