from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel, create_engine

from .config import DATABASE_URL

# Import all models to ensure they are registered with SQLModel metadata
from .models import Task, User  # noqa: F401


def _create_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    # Postgres: disable pooling for serverless and enable pre-ping
    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        poolclass=NullPool,
    )


class Database:
    """Store handle owning the engine and session factory.

    Built once per application and handed to request handlers through
    the ``get_db`` dependency.
    """

    def __init__(self, url: Optional[str] = None):
        self.url = url or DATABASE_URL
        self.engine = _create_engine(self.url)
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )

    def create_tables(self) -> None:
        """Create all database tables."""
        SQLModel.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Get a database session (context manager style).

        Usage:
            with database.session() as session:
                # do something with session
        """
        session = self.session_factory()
        try:
            yield session
        finally:
            session.close()


def get_db(request: Request) -> Iterator[Session]:
    """Dependency to get a session from the application's store handle."""
    database: Database = request.app.state.database
    with database.session() as session:
        yield session
