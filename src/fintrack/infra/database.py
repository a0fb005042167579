"""SQLModel engine and unit-of-work sessions for the FinTrack store."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, ContextManager, Iterator, NamedTuple

from sqlalchemy import inspect
from sqlalchemy.engine import Engine, make_url
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig
from ..logging_config import get_logger

logger = get_logger(__name__)

SessionFactory = Callable[[], ContextManager[Session]]


class DatabaseHandles(NamedTuple):
    engine: Engine
    session_factory: SessionFactory


def create_db_engine(config: BaseConfig) -> Engine:
    return create_engine(config.DATABASE_URL, **config.sqlalchemy_engine_options())


def init_database(engine: Engine) -> list[str]:
    """Create missing FinTrack tables and return the names that were added."""

    from .. import models  # noqa: F401  registers every table on the metadata

    existing = set(inspect(engine).get_table_names())
    SQLModel.metadata.create_all(engine)
    return sorted(set(SQLModel.metadata.tables) - existing)


def create_session_factory(engine: Engine) -> SessionFactory:
    """Return a factory of per-call sessions for the repositories.

    Each session commits when its block exits cleanly and rolls back on any
    exception. Loaded rows stay populated after commit so repositories can
    expunge them and hand them to the aggregation services.
    """

    @contextmanager
    def unit_of_work() -> Iterator[Session]:
        session = Session(engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return unit_of_work


def bootstrap_database(config: BaseConfig | None = None) -> DatabaseHandles:
    """Open the configured database, ensure the schema, and pair it with sessions."""

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    created = init_database(engine)
    logger.info(
        "Database ready",
        extra={
            "database": make_url(cfg.DATABASE_URL).render_as_string(hide_password=True),
            "created_tables": created,
        },
    )
    return DatabaseHandles(engine, create_session_factory(engine))
