"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator

import logging

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.types import JSON

from librarium.config import Settings

logger = logging.getLogger(__name__)

json_type = JSONB().with_variant(JSON(), "sqlite")


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


class Database:
    """Own the engine (connection pool) and hand out sessions bound to it."""

    def __init__(self, database_url: str) -> None:
        connect_args: dict[str, object] = {}
        if database_url.startswith("sqlite"):
            # FastAPI runs sync handlers in a threadpool.
            connect_args["check_same_thread"] = False
        self.engine: Engine = create_engine(
            database_url, pool_pre_ping=True, connect_args=connect_args
        )
        self._session_factory = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url)

    def initialize(self) -> None:
        """Ensure all ORM models have corresponding database tables."""

        from librarium.infrastructure import models  # noqa: F401  # ensure models are imported

        Base.metadata.create_all(bind=self.engine, checkfirst=True)

    def session(self) -> Session:
        return self._session_factory()

    def ping(self) -> None:
        """Run a trivial query; raises when the database cannot be reached."""

        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def dispose(self) -> None:
        logger.info("Disposing database connection pool")
        self.engine.dispose()


def get_database(request: Request) -> Database:
    """Return the :class:`Database` opened by the application lifespan."""

    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()


__all__ = ["Base", "Database", "get_database", "get_db", "json_type"]
