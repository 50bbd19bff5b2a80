"""Engine and session wiring for the SQLAlchemy adapter."""

import logging
from contextlib import contextmanager
from typing import Any, Generator, Iterator, Optional

from sqlalchemy import create_engine, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from brokerage.config.settings import get_settings
from brokerage.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)

Base = declarative_base()

# Active engine and session factory; rebound by init_db_with_url / reset_database
_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def _create_engine(database_url: str) -> Engine:
    # sqlite connections are shared by FastAPI's threadpool
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, connect_args=connect_args, echo=False)


def _bind(database_url: str) -> Engine:
    global _engine, _session_factory
    _engine = _create_engine(database_url)
    _session_factory = sessionmaker(bind=_engine, autoflush=False, expire_on_commit=True)
    logger.debug("Bound SQLAlchemy engine to %s", database_url)
    return _engine


def get_engine() -> Engine:
    """Return the active engine, binding it from settings on first use."""
    if _engine is None:
        return _bind(get_settings().get_database_url())
    return _engine


def get_session_factory() -> sessionmaker:
    if _session_factory is None:
        get_engine()
    return _session_factory


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a request-scoped session."""
    session = get_session_factory()()
    try:
        yield session
    finally:
        session.close()


def get_session() -> Session:
    """Open a session owned by the caller."""
    return get_session_factory()()


def _create_tables(engine: Engine) -> None:
    from brokerage.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def init_db() -> None:
    """Create any missing tables on the active engine."""
    _create_tables(get_engine())


def init_db_with_url(database_url: str) -> None:
    """Point the adapter at ``database_url`` and create its tables."""
    reset_database()
    _create_tables(_bind(database_url))


def reset_database() -> None:
    """Dispose the active engine so the next call rebinds from settings."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


@contextmanager
def storage_errors(db: Session, operation: str, **context: Any) -> Iterator[None]:
    """Roll back and re-raise SQLAlchemy failures as PersistenceError."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("SQLAlchemy failure in %s %s: %s", operation, context, exc)
        raise PersistenceError(operation, context, exc) from exc
