"""Database configuration and session management utilities."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from src.config import get_config

__all__ = [
    "Base",
    "get_engine",
    "init_engine",
    "get_session",
    "session_scope",
]

Base = declarative_base()

_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def init_engine(database_url: Optional[str] = None, **engine_kwargs) -> Engine:
    """Initialise the SQLAlchemy engine and session factory.

    An explicit ``database_url`` wins over the configured one, which lets the
    test-suite and Alembic point the service at another database.
    """
    global _engine, _SessionLocal

    db_config = get_config().database
    if database_url is None:
        database_url = db_config.url

    if _engine is not None:
        _engine.dispose()

    kwargs = {"future": True, "pool_pre_ping": True, "echo": db_config.echo}
    kwargs.update(engine_kwargs)

    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_size", db_config.pool_size)
        kwargs.setdefault("max_overflow", db_config.max_overflow)

    _engine = create_engine(database_url, **kwargs)
    _SessionLocal = sessionmaker(
        bind=_engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        future=True,
        class_=Session,
    )
    return _engine


def get_engine() -> Engine:
    """Return the configured SQLAlchemy engine, initialising if necessary."""
    global _engine
    if _engine is None:
        _engine = init_engine()
    return _engine


def get_session() -> Session:
    """Create a new SQLAlchemy session."""
    global _SessionLocal
    if _SessionLocal is None:
        init_engine()
    assert _SessionLocal is not None  # For mypy
    return _SessionLocal()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Provide a transactional scope for database operations."""
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
