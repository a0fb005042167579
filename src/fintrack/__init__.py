"""FinTrack application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths registered on every app."""

    yield "fintrack.blueprints.auth"
    yield "fintrack.blueprints.categories"
    yield "fintrack.blueprints.transactions"
    yield "fintrack.blueprints.budgets"
    yield "fintrack.blueprints.savings"
    yield "fintrack.blueprints.reports"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_cls = _resolve_config(config_name)
    config_obj = config_cls()
    app.config.from_object(config_obj)
    app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", config_obj.sqlalchemy_engine_options())
    app.config["FINTRACK_CONFIG"] = config_obj
    app.json.sort_keys = False  # type: ignore[attr-defined]

    # Import lazily so model classes can be imported without building mappers
    # for extensions and blueprints.
    from .blueprints.api import register_error_handlers, register_jwt_callbacks
    from .extensions import init_db, jwt
    from .logging_config import setup_logging

    setup_logging(config_obj)
    init_db(app)
    jwt.init_app(app)
    register_jwt_callbacks()
    register_error_handlers(app)
    _register_blueprints(app)
    _cli.init_app(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


__all__ = ["create_app"]
