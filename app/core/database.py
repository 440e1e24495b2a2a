"""Relational store: pooled engine, session factory and statement scoping."""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import Settings, settings
from app.core.errors import StoreError
from app.models import Base

logger = logging.getLogger(__name__)


def _engine_kwargs(config: Settings) -> dict[str, Any]:
    """Pool options for the configured backend (SQLite pools take no sizing)."""
    kwargs: dict[str, Any] = {"pool_pre_ping": True, "echo": config.DEBUG}
    if config.DATABASE_URL.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        return kwargs
    kwargs.update(
        pool_size=config.DATABASE_POOL_SIZE,
        max_overflow=config.DATABASE_MAX_OVERFLOW,
        pool_timeout=config.DATABASE_POOL_TIMEOUT,
    )
    return kwargs


def build_engine(config: Settings) -> Engine:
    """Create the pooled engine for DATABASE_URL."""
    return create_engine(config.DATABASE_URL, **_engine_kwargs(config))


def build_session_factory(bind: Engine) -> sessionmaker:
    """Session factory handed to the services; rows stay readable after commit."""
    return sessionmaker(
        bind=bind,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


engine = build_engine(settings)

SessionLocal = build_session_factory(engine)


def init_db(bind: Engine | None = None) -> None:
    """Create missing tables for every registered model."""
    Base.metadata.create_all(bind=bind or engine)


def store_error_message(exc: SQLAlchemyError) -> str:
    """Driver-level message of a store failure, without the SQL statement."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


@contextmanager
def session_scope(factory: sessionmaker) -> Iterator[Session]:
    """
    Run one logical operation on its own session and connection.

    Commits on success, rolls back on error and always releases the
    connection. SQLAlchemy failures are re-raised as StoreError.
    """
    try:
        with factory.begin() as session:
            yield session
    except SQLAlchemyError as e:
        message = store_error_message(e)
        logger.error("Store operation failed: %s", message)
        raise StoreError(message) from e


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
