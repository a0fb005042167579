from __future__ import annotations

from datetime import timedelta

import pytest

from fintrack.config import BaseConfig, DevConfig, TestConfig


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    for name in (
        "FINTRACK_SECRET_KEY",
        "FINTRACK_JWT_SECRET_KEY",
        "FINTRACK_TOKEN_TTL_HOURS",
        "FINTRACK_DATABASE_URL",
        "FINTRACK_DEV_MODE",
        "FINTRACK_BUDGET_WINDOW",
        "FINTRACK_SEED_DEFAULT_CATEGORIES",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FINTRACK_DATA_DIR", str(tmp_path / "data"))


def test_defaults(tmp_path):
    config = BaseConfig()

    assert config.DEV_MODE is True
    assert config.DATA_DIR == (tmp_path / "data").resolve()
    assert config.DATA_DIR.is_dir()
    assert config.DATABASE_URL.endswith("fintrack.db")
    assert config.BUDGET_WINDOW == "all"
    assert config.SEED_DEFAULT_CATEGORIES is True
    assert config.JWT_ACCESS_TOKEN_EXPIRES == timedelta(hours=12)
    assert config.JWT_SECRET_KEY == config.SECRET_KEY


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FINTRACK_TOKEN_TTL_HOURS", "2")
    monkeypatch.setenv("FINTRACK_BUDGET_WINDOW", "Period")
    monkeypatch.setenv("FINTRACK_SEED_DEFAULT_CATEGORIES", "no")
    monkeypatch.setenv("FINTRACK_DATABASE_URL", "postgresql://db/fintrack")

    config = BaseConfig()

    assert config.JWT_ACCESS_TOKEN_EXPIRES == timedelta(hours=2)
    assert config.BUDGET_WINDOW == "period"
    assert config.SEED_DEFAULT_CATEGORIES is False
    assert config.sqlalchemy_engine_options() == {"pool_pre_ping": True}


def test_sqlite_engine_options():
    assert BaseConfig().sqlalchemy_engine_options() == {
        "connect_args": {"check_same_thread": False}
    }


def test_secret_required_outside_dev_mode(monkeypatch):
    monkeypatch.setenv("FINTRACK_DEV_MODE", "false")

    with pytest.raises(ValueError):
        BaseConfig()

    monkeypatch.setenv("FINTRACK_SECRET_KEY", "prod-secret")
    assert BaseConfig().DEV_MODE is False


@pytest.mark.parametrize(
    "name,value",
    [("FINTRACK_BUDGET_WINDOW", "rolling"), ("FINTRACK_TOKEN_TTL_HOURS", "soon")],
)
def test_invalid_values_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError):
        BaseConfig()


def test_environment_subclasses():
    assert DevConfig().DEBUG is True
    testing = TestConfig()
    assert testing.TESTING is True
    assert testing.DEV_MODE is True


def test_test_config_is_not_collected_by_pytest():
    assert TestConfig.__test__ is False
