"""Engine and session lifecycle for the order store."""

from collections.abc import Generator
from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from orderflow.config import Settings, get_settings


class Base(DeclarativeBase):
    """Declarative base shared by the ORM models."""


# One engine per process; replaced when initialize_database runs again
_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _engine_options(database_url: str) -> dict[str, Any]:
    if database_url.startswith("sqlite"):
        # A single shared connection keeps in-memory databases alive across sessions
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {
        "pool_size": 10,
        "max_overflow": 20,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


def initialize_database(settings: Settings) -> None:
    """Bind the module engine and session factory to ``settings.DATABASE_URL``."""
    global _engine, _session_factory  # noqa: PLW0603

    dispose_engine()
    _engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))
    _session_factory = sessionmaker(bind=_engine, autoflush=False)


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Database not initialized. Call initialize_database() first.")
    return _engine


def get_session_factory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> sessionmaker[Session]:
    """Return the session factory, initializing the database on first use."""
    if _session_factory is None:
        initialize_database(settings)
    if _session_factory is None:
        raise RuntimeError("Failed to initialize database session factory.")
    return _session_factory


def create_tables() -> None:
    """Create all tables on the current engine; migrations are the normal route."""
    # Registers the models on Base.metadata
    from orderflow import models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def dispose_engine() -> None:
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


def get_db(
    session_factory: Annotated[sessionmaker[Session], Depends(get_session_factory)],
) -> Generator[Session, None, None]:
    """Yield one session per request."""
    with session_factory() as db:
        yield db


DatabaseSession = Annotated[Session, Depends(get_db)]
