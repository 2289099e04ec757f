from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import TypeVar

from dependency_injector.providers import Provider
from sqlalchemy.orm import Session

from orderflow.config import get_settings
from orderflow.core import container
from orderflow.database import DatabaseSession, get_session_factory

T = TypeVar("T")


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Create a FastAPI dependency for a container provider.

    Automatically handles container.db override with request-scoped database session.
    """

    def dependency(db: DatabaseSession) -> T:
        try:
            container.db.override(db)
            return provider()
        finally:
            # Use cases keep their own repository reference, so resetting is safe
            container.db.reset_override()

    return dependency


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Bind a fresh database session to the container outside of a request.

    Used by the CLI and the shipment worker, which have no FastAPI
    dependency resolution.
    """
    session = get_session_factory(get_settings())()
    container.db.override(session)
    try:
        yield session
    finally:
        container.db.reset_override()
        session.close()
