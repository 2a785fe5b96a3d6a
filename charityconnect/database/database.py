"""Database engine and session factory.

The store is an explicit ``Database`` object created once by the app factory
and kept on ``app.state``; tests build their own isolated instances.
"""
import logging
from datetime import datetime, timezone
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from charityconnect.core.utils import mask_database_url

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enable_sqlite_savepoints(engine) -> None:
    # pysqlite defers BEGIN on its own; let SQLAlchemy emit it so SAVEPOINT works
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


class Database:
    """Engine plus session factory for one backing store."""

    def __init__(self, url: str = "", pool_size: int = 10, max_overflow: int = 20,
                 pool_timeout: int = 30, pool_recycle: int = 3600):
        self.url = url
        if not url:
            # In-memory store: one shared connection for the process lifetime
            self.engine = create_engine(
                "sqlite://",
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        elif url.startswith("sqlite"):
            self.engine = create_engine(url, connect_args={"check_same_thread": False})
        else:
            self.engine = create_engine(
                url,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_recycle=pool_recycle,
                pool_pre_ping=True,
            )
        if self.engine.dialect.name == "sqlite":
            _enable_sqlite_savepoints(self.engine)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @classmethod
    def from_settings(cls, settings) -> "Database":
        return cls(
            settings.DATABASE_URL,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )

    @property
    def kind(self) -> str:
        if not self.url:
            return "in-memory"
        return self.engine.dialect.name

    def describe(self) -> str:
        return mask_database_url(self.url) if self.url else "in-memory"

    def create_all(self) -> None:
        """Create tables if they do not exist."""
        from charityconnect import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Tables ready on {self.describe()}")

    def drop_all(self) -> None:
        from charityconnect import models  # noqa: F401

        Base.metadata.drop_all(bind=self.engine)

    def session(self) -> Generator[Session, None, None]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a session bound to the application's store."""
    yield from request.app.state.database.session()
