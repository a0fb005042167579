"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

BUDGET_WINDOW_CHOICES = ("all", "period")


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a whole number, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "FinTrack"
    DB_FILENAME = "fintrack.db"
    DEBUG = False
    TESTING = False
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_TYPE = "Bearer"

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("FINTRACK_SECRET_KEY", "replace-me")
        self.JWT_SECRET_KEY = os.getenv("FINTRACK_JWT_SECRET_KEY", self.SECRET_KEY)
        self.JWT_ACCESS_TOKEN_EXPIRES = timedelta(
            hours=_env_int("FINTRACK_TOKEN_TTL_HOURS", 12)
        )
        self.DEV_MODE = _env_bool("FINTRACK_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("FINTRACK_DATABASE_URL", self._build_sqlite_url())
        self.BUDGET_WINDOW = os.getenv("FINTRACK_BUDGET_WINDOW", "all").strip().lower()
        self.SEED_DEFAULT_CATEGORIES = _env_bool(
            "FINTRACK_SEED_DEFAULT_CATEGORIES", default=True
        )

        if self.BUDGET_WINDOW not in BUDGET_WINDOW_CHOICES:
            raise ValueError(
                f"FINTRACK_BUDGET_WINDOW must be one of {', '.join(BUDGET_WINDOW_CHOICES)}"
            )
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("FINTRACK_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("FINTRACK_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test suite."""

    __test__ = False  # not a pytest test class

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
