"""
Database engine and session factory.
"""

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from src.config.settings import get_settings


Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """Create an engine, with the connect args SQLite needs under an async server."""
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url == "sqlite://":
            # Single shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@lru_cache
def get_engine() -> Engine:
    """Get the application engine built from settings."""
    return create_db_engine(get_settings().database_url)


def init_db(engine: Engine | None = None) -> None:
    """Create all tables that do not exist yet."""
    from src.db import tables  # noqa: F401  (registers the models on Base)

    Base.metadata.create_all(bind=engine or get_engine())
