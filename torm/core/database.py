# torm/core/database.py
"""Database engine and session factories."""

from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from torm.core.config import Settings, get_settings

# Base class for entity models
Base = declarative_base()


def create_engine_from_settings(settings: Optional[Settings] = None, **kwargs) -> Engine:
    """Create an engine for the configured database URL."""
    settings = settings or get_settings()
    connect_args = {"check_same_thread": False} if settings.is_sqlite else {}
    return create_engine(
        settings.database_url,
        echo=settings.echo_sql,
        connect_args=connect_args,
        **kwargs,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def get_session(session_factory: sessionmaker) -> Iterator[Session]:
    """Yield a session and close it afterwards."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def init_db(engine: Engine) -> None:
    """Create tables for every model registered on ``Base``."""
    Base.metadata.create_all(bind=engine)
