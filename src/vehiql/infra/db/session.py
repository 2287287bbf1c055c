from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from vehiql.infra.db import config

# Lazy initialization - only create engine/session when needed
_engine: Engine | None = None
_session_local: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """
    Get or create the database engine (lazy initialization).

    Pool sizing comes from DB_POOL_SIZE / DB_MAX_OVERFLOW /
    DB_POOL_RECYCLE_SECONDS (defaults 10 / 20 / 3600). Connections are
    pinged before checkout.
    """
    global _engine
    if _engine is None:
        _engine = create_engine(
            config.database_url(),
            pool_size=config.pool_size(),
            max_overflow=config.max_overflow(),
            pool_pre_ping=True,
            pool_recycle=config.pool_recycle_seconds(),
        )
    return _engine


def get_session_local() -> sessionmaker[Session]:
    """Get or create the session factory (lazy initialization)."""
    global _session_local
    if _session_local is None:
        _session_local = sessionmaker(
            bind=get_engine(),
            class_=Session,
            expire_on_commit=False,
        )
    return _session_local


def dispose_engine() -> None:
    """Close pooled connections and forget the engine (app shutdown, tests)."""
    global _engine, _session_local
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_local = None


@contextmanager
def get_session() -> Iterator[Session]:
    """Get a database session with automatic commit/rollback."""
    session = get_session_local()()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
